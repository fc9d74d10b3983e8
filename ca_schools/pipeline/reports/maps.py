"""Interactive map rendering for the reports stage.

Maps are plotly ``Scattergeo`` figures scoped to the United States and
written as standalone HTML files. Rows without usable coordinates are left
off the map rather than plotted at (0, 0).
"""

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd
import plotly.graph_objects as go

from ca_schools.config import MAP_SCOPE
from ca_schools.exceptions import ExportError

logger = logging.getLogger(__name__)


def _with_coordinates(view: pd.DataFrame) -> pd.DataFrame:
    located = view.dropna(subset=["Latitude", "Longitude"])
    skipped = len(view) - len(located)
    if skipped:
        logger.warning("Skipping %d rows without coordinates", skipped)
    return located


def _layout(fig: go.Figure, title: str) -> go.Figure:
    fig.update_layout(title=title, margin=dict(l=0, r=0, t=40, b=0))
    fig.update_geos(scope=MAP_SCOPE, fitbounds="locations")
    return fig


def build_earliest_schools_map(schools: pd.DataFrame) -> go.Figure:
    """Plot one labelled marker per school from ``earliest_schools``."""
    located = _with_coordinates(schools)
    fig = go.Figure(
        go.Scattergeo(
            lat=located["Latitude"].tolist(),
            lon=located["Longitude"].tolist(),
            text=located["Label"].tolist(),
            mode="markers+text",
            textposition="top center",
            hoverinfo="text",
            marker=dict(size=8),
            name="Earliest schools",
        )
    )
    return _layout(fig, f"{len(located)} earliest opened active schools")


def build_caseload_map(sample: pd.DataFrame) -> go.Figure:
    """Plot one circle per sampled school with radius ``Radius``.

    Marker sizes are diameters, so each is drawn at twice the radius.

    The hover label of each circle is the sample's ``Label``, e.g.
    ``"Some DIS Provider 1: caseload 27"``.
    """
    located = _with_coordinates(sample)
    fig = go.Figure(
        go.Scattergeo(
            lat=located["Latitude"].tolist(),
            lon=located["Longitude"].tolist(),
            text=located["Label"].tolist(),
            mode="markers",
            hoverinfo="text",
            marker=dict(
                size=(located["Radius"] * 2).tolist(),
                sizemode="diameter",
                symbol="circle",
                opacity=0.6,
            ),
            name="Simulated caseloads",
        )
    )
    return _layout(fig, "Simulated DIS provider caseloads")


def write_map(fig: go.Figure, output_file: Path) -> Path:
    """Write ``fig`` to a standalone HTML file.

    Raises
    ------
    ExportError
        If the file cannot be written.
    """
    output_file = Path(output_file)
    try:
        output_file.parent.mkdir(parents=True, exist_ok=True)
        fig.write_html(output_file, include_plotlyjs="cdn", full_html=True)
    except OSError as exc:
        raise ExportError(
            f"Could not write map {output_file}: {exc}",
            context={"output_file": str(output_file)},
        ) from exc
    logger.info("Wrote map to %s", output_file)
    return output_file
