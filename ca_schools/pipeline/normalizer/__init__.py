"""Dataset normalizer pipeline package.

Exposes the canonical-table transformation (active filter, column removal,
``ShortCDS`` derivation) and its CSV export. All implementation lives in
the submodules; this module only defines the public API boundary.
"""

from .exporter import to_csv_bytes, write_canonical_csv
from .identifiers import is_valid_cds_code, short_cds, substring, validate_cds_code
from .processor import active_rows, normalize, removed_columns, retained_columns

__all__ = [
    "active_rows",
    "is_valid_cds_code",
    "normalize",
    "removed_columns",
    "retained_columns",
    "short_cds",
    "substring",
    "to_csv_bytes",
    "validate_cds_code",
    "write_canonical_csv",
]
