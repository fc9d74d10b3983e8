"""Reports pipeline package.

Read-only consumers of the canonical table: the top districts bar chart,
the earliest schools map and the sampled caseload map.
"""

from .aggregations import earliest_schools, sample_caseloads, top_districts
from .charts import build_top_districts_figure, render_top_districts_chart
from .maps import build_caseload_map, build_earliest_schools_map, write_map
from .runner import check_report_columns, render_reports

__all__ = [
    "build_caseload_map",
    "build_earliest_schools_map",
    "build_top_districts_figure",
    "check_report_columns",
    "earliest_schools",
    "render_reports",
    "render_top_districts_chart",
    "sample_caseloads",
    "top_districts",
    "write_map",
]
