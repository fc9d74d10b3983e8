"""Read-only views derived from the canonical table for reporting.

Each function here takes the canonical table and returns a new, small
DataFrame; none of them modify their input. Ordering is deterministic:
sorts are stable, and the caseload sample draws from an injected
``numpy.random.Generator`` so a given seed always picks the same schools.
"""

from __future__ import annotations

import numpy as np
import pandas as pd

from ca_schools.config import (
    CASELOAD_LABEL_FORMAT,
    CASELOAD_MAX,
    CASELOAD_MIN,
    CASELOAD_RADIUS_SCALE,
    CASELOAD_SAMPLE_SIZE,
    CASELOAD_SEED,
    EARLIEST_SCHOOLS_LIMIT,
    TOP_DISTRICTS_LIMIT,
)


def _coordinates(table: pd.DataFrame) -> pd.DataFrame:
    return pd.DataFrame(
        {
            "School": table["School"].to_numpy(),
            "Latitude": pd.to_numeric(table["Latitude"], errors="coerce").to_numpy(),
            "Longitude": pd.to_numeric(
                table["Longitude"], errors="coerce"
            ).to_numpy(),
        },
        index=table.index,
    )


def top_districts(table: pd.DataFrame, n: int = TOP_DISTRICTS_LIMIT) -> pd.DataFrame:
    """Count schools per district and keep the ``n`` largest.

    Ties on count keep the order in which districts first appear in the
    table.

    Parameters
    ----------
    table : pd.DataFrame
        Canonical table with a ``District`` column.
    n : int, optional
        Number of districts to keep. Defaults to ``TOP_DISTRICTS_LIMIT``.

    Returns
    -------
    pd.DataFrame
        Columns ``District`` and ``Schools``, sorted by ``Schools``
        descending, with at most ``n`` rows.

    Examples
    --------
    >>> import pandas as pd
    >>> df = pd.DataFrame({"District": ["A", "B", "A"]})
    >>> top_districts(df).to_dict("records")
    [{'District': 'A', 'Schools': 2}, {'District': 'B', 'Schools': 1}]
    """
    counts = (
        table.groupby("District", sort=False, dropna=False)
        .size()
        .rename("Schools")
        .reset_index()
    )
    counts = counts.sort_values("Schools", ascending=False, kind="stable")
    return counts.head(n).reset_index(drop=True)


def earliest_schools(
    table: pd.DataFrame, n: int = EARLIEST_SCHOOLS_LIMIT
) -> pd.DataFrame:
    """Return the ``n`` schools with the earliest ``OpenDate``.

    ``OpenDate`` is parsed leniently; rows whose date cannot be parsed are
    left out. Equal dates keep their table order.

    Returns
    -------
    pd.DataFrame
        Columns ``School``, ``OpenDate`` (datetime64), ``Year``,
        ``Latitude``, ``Longitude`` (floats, NaN when unparsable) and
        ``Label`` (``"{year}: {School}"``), ascending by date.
    """
    view = _coordinates(table)
    view.insert(1, "OpenDate", pd.to_datetime(table["OpenDate"], errors="coerce"))
    view = view.dropna(subset=["OpenDate"])
    view = view.sort_values("OpenDate", kind="stable").head(n).copy()
    view.insert(2, "Year", view["OpenDate"].dt.year.astype(int))
    view["Label"] = [
        f"{year}: {school}" for year, school in zip(view["Year"], view["School"])
    ]
    return view.reset_index(drop=True)


def sample_caseloads(
    table: pd.DataFrame,
    n: int = CASELOAD_SAMPLE_SIZE,
    *,
    rng: np.random.Generator | None = None,
) -> pd.DataFrame:
    """Sample schools and attach a simulated provider caseload to each.

    Schools are drawn without replacement; caseloads are drawn uniformly,
    with replacement, from ``[CASELOAD_MIN, CASELOAD_MAX]``. Each marker
    radius is ``caseload * CASELOAD_RADIUS_SCALE``.

    Parameters
    ----------
    table : pd.DataFrame
        Canonical table with ``School``, ``Latitude`` and ``Longitude``.
    n : int, optional
        Sample size; capped at the number of rows.
    rng : numpy.random.Generator | None, optional
        Random source. Defaults to ``default_rng(CASELOAD_SEED)`` so runs
        are reproducible.

    Returns
    -------
    pd.DataFrame
        Columns ``School``, ``Latitude``, ``Longitude``, ``Caseload``,
        ``Radius`` and ``Label``.
    """
    rng = rng if rng is not None else np.random.default_rng(CASELOAD_SEED)
    size = min(n, len(table))
    sampled = table.sample(n=size, replace=False, random_state=rng)
    view = _coordinates(sampled).reset_index(drop=True)
    caseloads = rng.integers(CASELOAD_MIN, CASELOAD_MAX + 1, size=size)
    view["Caseload"] = caseloads
    view["Radius"] = caseloads * CASELOAD_RADIUS_SCALE
    view["Label"] = [
        CASELOAD_LABEL_FORMAT.format(index=index, caseload=int(caseload))
        for index, caseload in enumerate(caseloads, start=1)
    ]
    return view
