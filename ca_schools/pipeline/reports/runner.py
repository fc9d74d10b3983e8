"""Reports runner.

Renders every report artifact from a canonical table. The table is only
read; each artifact works on its own derived view.

Examples
--------
>>> from pathlib import Path
>>> from ca_schools.pipeline.reports.runner import render_reports
>>> paths = render_reports(canonical, Path("output/reports"))  # doctest: +SKIP
>>> sorted(paths)  # doctest: +SKIP
['caseload_map', 'earliest_schools_map', 'top_districts_chart']
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
import pandas as pd

from ca_schools.config import (
    CASELOAD_MAP_FILENAME,
    EARLIEST_SCHOOLS_MAP_FILENAME,
    REPORT_INPUT_COLUMNS,
    TOP_DISTRICTS_CHART_FILENAME,
)
from ca_schools.exceptions import ReportError

from .aggregations import earliest_schools, sample_caseloads, top_districts
from .charts import render_top_districts_chart
from .maps import build_caseload_map, build_earliest_schools_map, write_map

logger = logging.getLogger(__name__)


def check_report_columns(table: pd.DataFrame) -> None:
    """Ensure ``table`` carries every column the reports read.

    Raises
    ------
    ReportError
        If any of ``REPORT_INPUT_COLUMNS`` is missing.
    """
    missing = [column for column in REPORT_INPUT_COLUMNS if column not in table.columns]
    if missing:
        raise ReportError(
            f"Canonical table is missing report columns: {', '.join(missing)}",
            context={"missing_columns": missing},
        )


def render_reports(
    table: pd.DataFrame,
    output_dir: Path,
    *,
    rng: np.random.Generator | None = None,
) -> dict[str, Path]:
    """Render the chart and both maps into ``output_dir``.

    Parameters
    ----------
    table : pd.DataFrame
        Canonical table.
    output_dir : Path
        Directory for the artifacts; created if missing.
    rng : numpy.random.Generator | None, optional
        Random source for the caseload sample. Defaults to the configured
        seed.

    Returns
    -------
    dict[str, Path]
        Artifact name to written path.

    Raises
    ------
    ReportError
        If the table lacks a column the reports read; nothing is rendered.
    ExportError
        If any artifact cannot be written.
    """
    check_report_columns(table)
    output_dir = Path(output_dir)
    paths: dict[str, Path] = {}

    paths["top_districts_chart"] = render_top_districts_chart(
        top_districts(table), output_dir / TOP_DISTRICTS_CHART_FILENAME
    )
    paths["earliest_schools_map"] = write_map(
        build_earliest_schools_map(earliest_schools(table)),
        output_dir / EARLIEST_SCHOOLS_MAP_FILENAME,
    )
    paths["caseload_map"] = write_map(
        build_caseload_map(sample_caseloads(table, rng=rng)),
        output_dir / CASELOAD_MAP_FILENAME,
    )
    logger.info("Rendered %d report artifacts into %s", len(paths), output_dir)
    return paths


__all__ = ["check_report_columns", "render_reports"]
