"""Pytest configuration for test environment setup.

- Forces ``DISABLE_FILE_LOGS=1`` to avoid writing log files during tests.
- Ensures the project root is available on ``sys.path`` for imports.
- Provides a factory for raw extracts in the upstream 49-column layout.
"""

import os
import sys

os.environ.setdefault("DISABLE_FILE_LOGS", "1")  # Avoid creating log files during tests
from pathlib import Path

import pandas as pd
import pytest

# Ensure project root is on sys.path
ROOT = Path(__file__).resolve().parents[1]
root_str = str(ROOT)
if root_str not in sys.path:
    sys.path.insert(0, root_str)

from ca_schools.config import SOURCE_COLUMNS  # noqa: E402

SAMPLE_SCHOOLS = [
    {
        "CDSCode": "01612596006031",
        "StatusType": "Active",
        "County": "Alameda",
        "District": "Oakland Unified",
        "School": "Example High",
        "Street": "1 Main St",
        "City": "Oakland",
        "State": "CA",
        "OpenDate": "1980-07-01",
        "Latitude": "37.80",
        "Longitude": "-122.27",
        "AdmFName1": "Pat",
        "AdmEmail1": "pat@example.org",
    },
    {
        "CDSCode": "01612590130401",
        "StatusType": "Closed",
        "County": "Alameda",
        "District": "Oakland Unified",
        "School": "Old Elementary",
        "OpenDate": "1950-09-01",
        "Latitude": "37.81",
        "Longitude": "-122.26",
    },
    {
        "CDSCode": "19647331931047",
        "StatusType": "Active",
        "County": "Los Angeles",
        "District": "Los Angeles Unified",
        "School": "Valley Middle",
        "OpenDate": "1965-09-01",
        "Latitude": "34.05",
        "Longitude": "-118.24",
    },
    {
        "CDSCode": "37683386039457",
        "StatusType": "Merged",
        "County": "San Diego",
        "District": "San Diego Unified",
        "School": "Harbor Academy",
        "OpenDate": "2001-08-15",
        "Latitude": "32.72",
        "Longitude": "-117.16",
    },
    {
        "CDSCode": "37683380120006",
        "StatusType": "Active",
        "County": "San Diego",
        "District": "San Diego Unified",
        "School": "Mesa Charter",
        "OpenDate": "2010-08-20",
        "Latitude": "32.80",
        "Longitude": "-117.10",
    },
]


def build_raw_table(rows: list[dict[str, str]]) -> pd.DataFrame:
    """Build a raw extract with every source column, blanks for unset cells."""
    records = [{column: row.get(column, "") for column in SOURCE_COLUMNS} for row in rows]
    return pd.DataFrame(records, columns=SOURCE_COLUMNS, dtype=str)


def to_tsv(table: pd.DataFrame) -> str:
    return table.to_csv(sep="\t", index=False, lineterminator="\n")


@pytest.fixture
def raw_table() -> pd.DataFrame:
    return build_raw_table(SAMPLE_SCHOOLS)


@pytest.fixture
def raw_tsv_file(tmp_path: Path, raw_table: pd.DataFrame) -> Path:
    path = tmp_path / "pubschls.txt"
    path.write_text(to_tsv(raw_table), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    """Keep the developer's environment and ``.env`` out of tests."""
    import ca_schools.config as cfg

    for name in ("SCHOOLS_SOURCE", "FETCH_TIMEOUT", "SOURCE_ENCODING"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(cfg, "PROJECT_ROOT", tmp_path)


@pytest.fixture
def make_raw_table():
    """Return the raw extract factory so tests can build custom rows."""
    return build_raw_table
