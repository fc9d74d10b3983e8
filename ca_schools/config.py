"""Global configuration constants for the project.

Defines paths, the upstream source location, column layouts and report
defaults used across the pipeline and the command-line entry point.
"""

from __future__ import annotations

from pathlib import Path

# Project directories
PROJECT_ROOT: Path = Path(__file__).resolve().parents[1]
PACKAGE_DIR: Path = PROJECT_ROOT / "ca_schools"
LOG_DIR: Path = PROJECT_ROOT / "logs"
ENV_FILE: Path = PROJECT_ROOT / ".env"

# Upstream CDE public schools directory extract (tab-separated)
DEFAULT_SOURCE_URL: str = "https://www.cde.ca.gov/schooldirectory/report?rid=dl1&tp=txt"
DEFAULT_FETCH_TIMEOUT: int = 60
DEFAULT_SOURCE_ENCODING: str = "utf-8"
SOURCE_DELIMITER: str = "\t"
SUPPORTED_URL_SCHEMES: tuple[str, ...] = ("http", "https")

# Documented layout of the raw extract, in file order
SOURCE_COLUMNS: list[str] = [
    "CDSCode",
    "NCESDist",
    "NCESSchool",
    "StatusType",
    "County",
    "District",
    "School",
    "Street",
    "StreetAbr",
    "City",
    "Zip",
    "State",
    "MailStreet",
    "MailStrAbr",
    "MailCity",
    "MailZip",
    "MailState",
    "Phone",
    "Ext",
    "Website",
    "OpenDate",
    "ClosedDate",
    "Charter",
    "CharterNum",
    "FundingType",
    "DOC",
    "DOCType",
    "SOC",
    "SOCType",
    "EdOpsCode",
    "EdOpsName",
    "EILCode",
    "EILName",
    "GSoffered",
    "GSserved",
    "Virtual",
    "Magnet",
    "Latitude",
    "Longitude",
    "AdmFName1",
    "AdmLName1",
    "AdmEmail1",
    "AdmFName2",
    "AdmLName2",
    "AdmEmail2",
    "AdmFName3",
    "AdmLName3",
    "AdmEmail3",
    "LastUpdate",
]

# Identifier columns
CDS_CODE_COLUMN: str = "CDSCode"
SHORT_CDS_COLUMN: str = "ShortCDS"
STATUS_COLUMN: str = "StatusType"
ACTIVE_STATUS: str = "Active"
CDS_CODE_LENGTH: int = 14
# 1-indexed, inclusive; clamped at the end of the code
SHORT_CDS_START: int = 8
SHORT_CDS_END: int = 20

# Columns removed from the canonical table (AdmFName1..AdmEmail3 and
# Street..State expanded by name)
DROPPED_COLUMNS: list[str] = [
    "AdmFName1",
    "AdmLName1",
    "AdmEmail1",
    "AdmFName2",
    "AdmLName2",
    "AdmEmail2",
    "AdmFName3",
    "AdmLName3",
    "AdmEmail3",
    "FundingType",
    "Magnet",
    "StatusType",
    "Street",
    "StreetAbr",
    "City",
    "Zip",
    "State",
    "DOC",
    "CharterNum",
    "SOC",
    "EdOpsCode",
    "EILCode",
]

# Canonical output
OUTPUT_DIR: Path = PROJECT_ROOT / "output"
CANONICAL_CSV_PATH: Path = OUTPUT_DIR / "active_schools.csv"
CANONICAL_CSV_ENCODING: str = "utf-8"

# Report defaults
REPORTS_DIR: Path = OUTPUT_DIR / "reports"
REPORT_INPUT_COLUMNS: tuple[str, ...] = (
    "School",
    "District",
    "OpenDate",
    "Latitude",
    "Longitude",
)
TOP_DISTRICTS_LIMIT: int = 10
TOP_DISTRICTS_CHART_FILENAME: str = "top_districts.png"
EARLIEST_SCHOOLS_LIMIT: int = 10
EARLIEST_SCHOOLS_MAP_FILENAME: str = "earliest_schools.html"
CASELOAD_SAMPLE_SIZE: int = 10
CASELOAD_SEED: int = 2
CASELOAD_MIN: int = 15
CASELOAD_MAX: int = 50
CASELOAD_RADIUS_SCALE: float = 0.5
CASELOAD_LABEL_FORMAT: str = "Some DIS Provider {index}: caseload {caseload}"
CASELOAD_MAP_FILENAME: str = "caseload_sample.html"
MAP_SCOPE: str = "usa"
CHART_DPI: int = 150

# Logging
LOG_FILENAME_PIPELINE: str = "ca_schools.log"
LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
