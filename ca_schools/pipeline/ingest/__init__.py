"""Ingest pipeline package.

Retrieves the raw schools directory extract and parses it into a
string-typed pandas DataFrame. Consumers should import from this package
rather than reaching into submodules.
"""

from .config import FetchConfig
from .fetcher import fetch_raw_table, fetch_raw_text, is_remote_source, parse_raw_table

__all__ = [
    "FetchConfig",
    "fetch_raw_table",
    "fetch_raw_text",
    "is_remote_source",
    "parse_raw_table",
]
