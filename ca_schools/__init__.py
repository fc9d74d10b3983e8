"""California public schools directory pipeline package.

This package turns the California Department of Education public schools
directory extract (a tab-separated file with one row per school) into a
canonical, analysis-ready table of active schools, and renders a few
presentation artifacts on top of it.

Package Structure
-----------------
- `pipeline/ingest/`:
    Retrieval of the raw extract over HTTP(S) or from a local file, and
    parsing into a string-typed pandas DataFrame.
- `pipeline/normalizer/`:
    Active-row filtering, column removal, ``ShortCDS`` derivation and CSV
    export of the canonical table.
- `pipeline/reports/`:
    Read-only consumers of the canonical table: top districts bar chart,
    earliest schools map and the sampled caseload map.
- `config.py`: All configuration constants, as UPPER_SNAKE_CASE.
- `exceptions.py`: Project-specific exception classes, tagged by stage.
- `cli.py`: Command-line entry point (``ca-schools``).

Examples
--------
>>> from ca_schools.pipeline.runner import run_pipeline
>>> result = run_pipeline(source="data/pubschls.txt")  # doctest: +SKIP
>>> result.rows  # doctest: +SKIP
3
"""

__version__ = "0.1.0"
