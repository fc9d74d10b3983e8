"""Static chart rendering for the reports stage."""

from __future__ import annotations

# Non-interactive backend; must be selected before pyplot is imported
import matplotlib

matplotlib.use("Agg")

import logging
from pathlib import Path

import matplotlib.pyplot as plt
import pandas as pd

from ca_schools.config import CHART_DPI
from ca_schools.exceptions import ExportError

logger = logging.getLogger(__name__)


def build_top_districts_figure(counts: pd.DataFrame) -> plt.Figure:
    """Draw a horizontal bar chart of schools per district.

    The largest district is drawn at the top and every bar is labelled with
    its count.

    Parameters
    ----------
    counts : pd.DataFrame
        Output of ``top_districts``: columns ``District`` and ``Schools``,
        sorted descending.

    Returns
    -------
    matplotlib.figure.Figure
        The figure; the caller is responsible for closing it.
    """
    height = max(2.5, 0.45 * len(counts) + 1.0)
    fig, ax = plt.subplots(figsize=(8, height))
    districts = counts["District"].astype(str).tolist()[::-1]
    schools = counts["Schools"].tolist()[::-1]
    bars = ax.barh(districts, schools)
    ax.bar_label(bars, labels=[str(value) for value in schools], padding=3)
    ax.set_xlabel("Active schools")
    ax.set_title(f"Top {len(counts)} districts by number of active schools")
    ax.margins(x=0.1)
    fig.tight_layout()
    return fig


def render_top_districts_chart(counts: pd.DataFrame, output_file: Path) -> Path:
    """Render the top districts chart to a PNG file.

    Raises
    ------
    ExportError
        If the image cannot be written.
    """
    output_file = Path(output_file)
    fig = build_top_districts_figure(counts)
    try:
        output_file.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(output_file, dpi=CHART_DPI, bbox_inches="tight")
    except OSError as exc:
        raise ExportError(
            f"Could not write chart {output_file}: {exc}",
            context={"output_file": str(output_file)},
        ) from exc
    finally:
        plt.close(fig)
    logger.info("Wrote top districts chart to %s", output_file)
    return output_file
