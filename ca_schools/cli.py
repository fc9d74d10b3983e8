"""CLI entrypoint and logging/argument utilities for the schools pipeline.

This module implements the command-line interface of the pipeline. It is a
thin orchestration layer: argument parsing, logging setup and translation
of the project's error taxonomy (see :mod:`ca_schools.exceptions`) into an
exit status. All processing is delegated to
:func:`ca_schools.pipeline.runner.run_pipeline`.

On failure exactly one diagnostic line naming the failing stage is printed
to stderr, e.g. ``fetch failed: Could not download ...``, and the process
exits with status 1. Since the CSV is written only after the transform
succeeds, a failed run leaves no partial output.

Examples
--------
>>> # In shell
>>> ca-schools --source data/pubschls.txt --output output/active_schools.csv
Wrote 3 active schools (of 5 rows) to output/active_schools.csv
"""

from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path

import numpy as np
from rich.console import Console

from ca_schools.config import (
    CANONICAL_CSV_PATH,
    CASELOAD_SEED,
    LOG_DIR,
    LOG_FILENAME_PIPELINE,
    LOG_FORMAT,
)
from ca_schools.exceptions import AppError
from ca_schools.pipeline.runner import run_pipeline

logger = logging.getLogger(__name__)

_STDOUT = Console()
_STDERR = Console(stderr=True)


def configure_logging(level: str = "INFO", enable_file: bool = True) -> None:
    r"""Configure logging output for the pipeline CLI.

    Sets up a console handler (always) and optionally a file handler under
    ``LOG_DIR``, using ``LOG_FORMAT`` from :mod:`ca_schools.config`. File
    handler creation errors are ignored so an unwritable log directory
    never blocks a run.

    Parameters
    ----------
    level : str, optional
        The logging level, e.g. "DEBUG", "INFO", "WARNING". Defaults to
        "INFO"; unknown names fall back to INFO.
    enable_file : bool, optional
        Whether to add a file handler. Defaults to True.

    Notes
    -----
    All existing root handlers are removed first, so repeated calls are
    idempotent.

    Examples
    --------
    >>> from ca_schools.cli import configure_logging
    >>> configure_logging("DEBUG", enable_file=False)
    """
    for h in logging.root.handlers[:]:
        logging.root.removeHandler(h)
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if enable_file:
        try:
            LOG_DIR.mkdir(exist_ok=True)
            handlers.insert(
                0, logging.FileHandler(LOG_DIR / LOG_FILENAME_PIPELINE, mode="a")
            )
        except OSError:
            pass
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
    )


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments.

    Returns
    -------
    argparse.Namespace
        Parsed arguments with attributes ``source``, ``output``,
        ``reports_dir``, ``strict``, ``seed`` and ``log_level``.
    """
    parser = argparse.ArgumentParser(
        description="Normalize the California public schools directory extract."
    )
    parser.add_argument(
        "-s",
        "--source",
        type=str,
        default=None,
        help="URL or path of the tab-separated extract (default: SCHOOLS_SOURCE or the CDE download).",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=CANONICAL_CSV_PATH,
        help="Path of the canonical CSV to write.",
    )
    parser.add_argument(
        "-r",
        "--reports-dir",
        type=Path,
        default=None,
        help="Render the chart and maps into this directory.",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on rows missing CDSCode or StatusType instead of dropping them.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=CASELOAD_SEED,
        help="Seed for the caseload sample.",
    )
    parser.add_argument(
        "--log-level", type=str, default=os.environ.get("LOG_LEVEL", "INFO")
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Run the pipeline from CLI arguments.

    Returns
    -------
    int
        0 on success, 1 if any stage failed.
    """
    args = parse_arguments(argv)
    disable_file = bool(
        os.environ.get("DISABLE_FILE_LOGS") or os.environ.get("PYTEST_CURRENT_TEST")
    )
    configure_logging(args.log_level, enable_file=not disable_file)
    logger.info("Starting schools pipeline")
    try:
        result = run_pipeline(
            args.source,
            args.output,
            reports_dir=args.reports_dir,
            strict=args.strict,
            rng=np.random.default_rng(args.seed),
        )
    except AppError as exc:
        logger.debug("Pipeline failed: %s", exc.to_dict())
        _STDERR.print(
            f"{exc.stage} failed: {exc.message}",
            markup=False,
            highlight=False,
            soft_wrap=True,
        )
        return 1
    _STDOUT.print(
        f"Wrote {result.rows} active schools (of {result.input_rows} rows) "
        f"to {result.output_file}",
        markup=False,
        highlight=False,
        soft_wrap=True,
    )
    for name, path in sorted(result.reports.items()):
        _STDOUT.print(f"{name}: {path}", markup=False, soft_wrap=True)
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry
    raise SystemExit(main())
