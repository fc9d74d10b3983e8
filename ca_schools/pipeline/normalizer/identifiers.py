"""CDS code validation and ``ShortCDS`` derivation.

A County-District-School (CDS) code is the 14-digit identifier the
California Department of Education assigns to every school: two digits of
county, five of district and seven of school. Shorter-identifier datasets
join on the trailing school segment, exposed here as ``ShortCDS``.
"""

from __future__ import annotations

from ca_schools.config import CDS_CODE_LENGTH, SHORT_CDS_END, SHORT_CDS_START
from ca_schools.exceptions import MalformedRecordError


def substring(value: str, start: int, end: int) -> str:
    """Return characters ``start`` through ``end`` of ``value``.

    Positions are 1-indexed and inclusive. An ``end`` past the last
    character is clamped to the end of the string, and a ``start`` past it
    yields an empty string.

    Parameters
    ----------
    value : str
        Source string.
    start : int
        First position to keep (1-indexed, >= 1).
    end : int
        Last position to keep (1-indexed, inclusive, >= ``start``).

    Returns
    -------
    str
        The extracted characters.

    Raises
    ------
    ValueError
        If ``start`` is below 1 or ``end`` is below ``start``.

    Examples
    --------
    >>> substring("01612596006031", 8, 20)
    '6006031'
    >>> substring("abcdef", 2, 3)
    'bc'
    """
    if start < 1:
        raise ValueError(f"start must be >= 1, got {start}")
    if end < start:
        raise ValueError(f"end ({end}) must be >= start ({start})")
    return value[start - 1 : end]


def is_valid_cds_code(value: object) -> bool:
    """Return True if ``value`` is a string of at least 14 ASCII digits.

    Codes longer than 14 characters are accepted; ``short_cds`` clamps them
    at position 20.
    """
    return (
        isinstance(value, str)
        and len(value) >= CDS_CODE_LENGTH
        and value.isascii()
        and value.isdigit()
    )


def validate_cds_code(value: object) -> str:
    """Return ``value`` unchanged if it is a well-formed CDS code.

    Raises
    ------
    MalformedRecordError
        If ``value`` is not a string of at least 14 ASCII digits.
    """
    if not is_valid_cds_code(value):
        raise MalformedRecordError(
            f"Malformed CDSCode {value!r}: expected at least {CDS_CODE_LENGTH} digits",
            context={"cds_code": str(value)},
        )
    return str(value)


def short_cds(code: object) -> str:
    """Derive the ``ShortCDS`` of a CDS code.

    Examples
    --------
    >>> short_cds("01612596006031")
    '6006031'
    """
    return substring(validate_cds_code(code), SHORT_CDS_START, SHORT_CDS_END)
