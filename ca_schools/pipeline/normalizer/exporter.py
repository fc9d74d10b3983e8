"""CSV export of the canonical table.

The canonical table is written once, as a comma-separated file with a
header row and no index. Output goes to a sibling temporary file that
replaces the target only after a complete write, so a failed run never
leaves a partial file behind.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

from ca_schools.config import CANONICAL_CSV_ENCODING
from ca_schools.exceptions import ExportError

logger = logging.getLogger(__name__)


def to_csv_bytes(table: pd.DataFrame) -> bytes:
    """Serialize ``table`` to CSV bytes.

    The serialization is deterministic: the same table always yields the
    same bytes, with ``\\n`` line endings regardless of platform.
    """
    text = table.to_csv(index=False, lineterminator="\n")
    return text.encode(CANONICAL_CSV_ENCODING)


def write_canonical_csv(table: pd.DataFrame, output_file: Path) -> Path:
    """Write the canonical table to ``output_file``.

    Parameters
    ----------
    table : pd.DataFrame
        Canonical table produced by ``normalize``.
    output_file : Path
        Destination CSV path. Parent directories are created.

    Returns
    -------
    Path
        The path written.

    Raises
    ------
    ExportError
        If the directory cannot be created or the file cannot be written.
        No file exists at ``output_file`` afterwards unless one existed
        before the call.
    """
    output_file = Path(output_file)
    tmp_file = output_file.with_name(f".{output_file.name}.tmp")
    try:
        output_file.parent.mkdir(parents=True, exist_ok=True)
        tmp_file.write_bytes(to_csv_bytes(table))
        tmp_file.replace(output_file)
    except OSError as exc:
        if tmp_file.exists():
            tmp_file.unlink()
        raise ExportError(
            f"Could not write {output_file}: {exc}",
            context={"output_file": str(output_file)},
        ) from exc
    logger.info("Wrote %d rows to %s", len(table), output_file)
    return output_file
