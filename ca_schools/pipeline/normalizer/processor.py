"""Normalization of the raw extract into the canonical active-schools table.

This module holds the one reproducible transformation of the pipeline:
keep active schools, drop a fixed set of columns by name, derive
``ShortCDS`` from ``CDSCode`` and put both identifiers first. It is a pure
function of its input: the raw DataFrame is never mutated and the result is
a fresh DataFrame with a default RangeIndex.

Notes
-----
Rows missing ``StatusType`` are treated as non-active and dropped unless
``strict=True`` is requested, in which case they are reported as
``MalformedRecordError``. A malformed ``CDSCode`` on an active row always
fails the run, since the canonical table is all-or-nothing.
"""

from __future__ import annotations

import logging

import pandas as pd

from ca_schools.config import (
    ACTIVE_STATUS,
    CDS_CODE_COLUMN,
    DROPPED_COLUMNS,
    SHORT_CDS_COLUMN,
    STATUS_COLUMN,
)
from ca_schools.exceptions import EmptyResultError, MalformedRecordError

from .identifiers import is_valid_cds_code, short_cds

logger = logging.getLogger(__name__)


def _blank(series: pd.Series) -> pd.Series:
    return series.isna() | series.fillna("").astype(str).str.strip().eq("")


def removed_columns(raw: pd.DataFrame) -> list[str]:
    """Return the columns of ``raw`` that normalization removes, in file order."""
    dropped = set(DROPPED_COLUMNS)
    return [column for column in raw.columns if column in dropped]


def retained_columns(raw: pd.DataFrame) -> list[str]:
    """Return the canonical column order for a raw table.

    ``CDSCode`` and ``ShortCDS`` lead, followed by every column of ``raw``
    that is not dropped, in its original relative order. A ``ShortCDS``
    column already present in ``raw`` is replaced by the derived one.
    """
    dropped = set(DROPPED_COLUMNS) | {CDS_CODE_COLUMN, SHORT_CDS_COLUMN}
    rest = [column for column in raw.columns if column not in dropped]
    return [CDS_CODE_COLUMN, SHORT_CDS_COLUMN, *rest]


def _check_required_fields(raw: pd.DataFrame) -> None:
    for column in (CDS_CODE_COLUMN, STATUS_COLUMN):
        missing = _blank(raw[column]).to_numpy()
        if missing.any():
            position = int(missing.argmax())
            raise MalformedRecordError(
                f"Row {position} is missing required field {column}",
                context={"row": position, "field": column},
            )


def active_rows(raw: pd.DataFrame, *, strict: bool = False) -> pd.DataFrame:
    """Return the rows of ``raw`` whose ``StatusType`` is exactly ``"Active"``.

    Parameters
    ----------
    raw : pd.DataFrame
        Raw extract as produced by the ingest stage.
    strict : bool, optional
        If True, a missing ``StatusType`` column or a blank required field on
        any row raises instead of being treated as non-active.

    Returns
    -------
    pd.DataFrame
        The active subset, original index preserved.

    Raises
    ------
    MalformedRecordError
        If ``CDSCode`` is not a column, or in strict mode when ``StatusType``
        is absent or any row lacks a required value.
    """
    if CDS_CODE_COLUMN not in raw.columns:
        raise MalformedRecordError(
            f"Required column {CDS_CODE_COLUMN} is missing from the extract",
            context={"columns": list(map(str, raw.columns))},
        )
    if STATUS_COLUMN not in raw.columns:
        if strict:
            raise MalformedRecordError(
                f"Required column {STATUS_COLUMN} is missing from the extract",
                context={"columns": list(map(str, raw.columns))},
            )
        logger.warning(
            "Column %s is missing; treating every row as non-active", STATUS_COLUMN
        )
        return raw.iloc[0:0]
    if strict:
        _check_required_fields(raw)
    mask = raw[STATUS_COLUMN].eq(ACTIVE_STATUS).fillna(False).astype(bool)
    return raw.loc[mask]


def normalize(raw: pd.DataFrame, *, strict: bool = False) -> pd.DataFrame:
    """Build the canonical active-schools table from the raw extract.

    Parameters
    ----------
    raw : pd.DataFrame
        Raw extract with at least ``CDSCode`` and ``StatusType`` columns.
    strict : bool, optional
        Reject rows missing ``CDSCode`` or ``StatusType`` instead of treating
        them as non-active. Defaults to False.

    Returns
    -------
    pd.DataFrame
        One row per active input row, with ``CDSCode`` and ``ShortCDS`` first
        and the dropped columns removed.

    Raises
    ------
    MalformedRecordError
        If a required column or field is missing, or an active row carries a
        CDS code shorter than 14 digits or containing non-digits.
    EmptyResultError
        If no active rows remain after filtering.

    Examples
    --------
    >>> import pandas as pd
    >>> raw = pd.DataFrame(
    ...     {"CDSCode": ["01612596006031"], "StatusType": ["Active"], "School": ["Example High"]}
    ... )
    >>> normalize(raw).to_dict("records")
    [{'CDSCode': '01612596006031', 'ShortCDS': '6006031', 'School': 'Example High'}]
    """
    active = active_rows(raw, strict=strict)
    if active.empty:
        raise EmptyResultError(
            f"No rows with {STATUS_COLUMN} == '{ACTIVE_STATUS}' in extract "
            f"of {len(raw)} rows",
            context={"input_rows": len(raw)},
        )

    codes = active[CDS_CODE_COLUMN]
    invalid = ~codes.map(is_valid_cds_code).astype(bool)
    if invalid.any():
        raise MalformedRecordError(
            f"{int(invalid.sum())} active rows have a malformed {CDS_CODE_COLUMN}, "
            f"first: {codes[invalid].iloc[0]!r}",
            context={"invalid_rows": int(invalid.sum())},
        )

    columns = retained_columns(raw)
    canonical = active[[columns[0], *columns[2:]]].copy()
    canonical.insert(1, SHORT_CDS_COLUMN, codes.map(short_cds).to_numpy())
    canonical = canonical.reset_index(drop=True)

    logger.info(
        "Normalized %d of %d rows; removed %d columns, %d columns remain",
        len(canonical),
        len(raw),
        len(removed_columns(raw)),
        len(canonical.columns),
    )
    return canonical
