"""Pipeline runner: fetch, normalize, export and optionally report.

This module provides the programmatic entrypoint for a full run. Stages run
strictly one after another; the canonical CSV is written only after
normalization has fully succeeded, and reports are rendered only after the
CSV is in place. Any failure propagates as an ``AppError`` subclass whose
``stage`` names the step that failed.

Usage Examples
--------------
Run against the configured upstream source::

    from ca_schools.pipeline.runner import run_pipeline
    result = run_pipeline()

Run against a local copy and render reports::

    from pathlib import Path
    from ca_schools.pipeline.runner import run_pipeline

    run_pipeline(
        source="data/pubschls.txt",
        output_file=Path("output/active_schools.csv"),
        reports_dir=Path("output/reports"),
    )
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

import numpy as np

from ca_schools.config import CANONICAL_CSV_PATH

from .ingest import FetchConfig, fetch_raw_table
from .normalizer import normalize, write_canonical_csv
from .reports import check_report_columns, render_reports

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """Summary of a completed run."""

    output_file: Path
    input_rows: int
    rows: int
    columns: list[str]
    reports: dict[str, Path] = field(default_factory=dict)


def run_pipeline(
    source: str | Path | None = None,
    output_file: Path | None = None,
    *,
    reports_dir: Path | None = None,
    strict: bool = False,
    rng: np.random.Generator | None = None,
    config: FetchConfig | None = None,
) -> PipelineResult:
    """Run the pipeline end to end.

    Parameters
    ----------
    source : str | Path | None, optional
        URL or path of the raw extract. Defaults to the ``FetchConfig``
        source (environment, then ``DEFAULT_SOURCE_URL``).
    output_file : Path | None, optional
        Canonical CSV destination. Defaults to ``CANONICAL_CSV_PATH``.
    reports_dir : Path | None, optional
        If given, the chart and maps are rendered into this directory.
    strict : bool, optional
        Reject rows missing ``CDSCode`` or ``StatusType``.
    rng : numpy.random.Generator | None, optional
        Random source for the caseload sample.
    config : FetchConfig | None, optional
        Preloaded fetch settings.

    Returns
    -------
    PipelineResult
        Row and column counts plus the paths written.

    Raises
    ------
    FetchError, MalformedRecordError, EmptyResultError, ExportError, ConfigurationError
        On failure of the corresponding stage. Nothing is written when the
        fetch or transform stage fails.
    ReportError
        If reports are requested but the table lacks a column they read.
        Checked before the CSV is written.
    """
    config = config or FetchConfig()
    output_file = Path(output_file) if output_file is not None else CANONICAL_CSV_PATH

    raw = fetch_raw_table(source, config)
    canonical = normalize(raw, strict=strict)
    if reports_dir is not None:
        check_report_columns(canonical)
    write_canonical_csv(canonical, output_file)

    result = PipelineResult(
        output_file=output_file,
        input_rows=len(raw),
        rows=len(canonical),
        columns=list(canonical.columns),
    )
    if reports_dir is not None:
        result.reports = render_reports(canonical, Path(reports_dir), rng=rng)
    logger.info(
        "Pipeline finished: %d active schools of %d rows written to %s",
        result.rows,
        result.input_rows,
        output_file,
    )
    return result


__all__ = ["PipelineResult", "run_pipeline"]
