"""Node functions for the reporting pipeline.

Each node turns one table into a matplotlib figure; the catalog writes
them out as PNGs for the report.  Nothing here computes anything the
impact_analysis pipeline has not already decided.
"""

from __future__ import annotations

import logging
from typing import Any

import matplotlib
import matplotlib.pyplot as plt
import pandas as pd
from matplotlib.figure import Figure

matplotlib.use("Agg")  # non-interactive backend for CI / headless runs

logger = logging.getLogger(__name__)


# ── Node 1 ──────────────────────────────────────────────────────
def plot_events_per_year(
    storm_events_tidy: pd.DataFrame,
    parameters: dict[str, Any],
) -> Figure:
    """Histogram of harmful events by begin year.

    Recording practice changed a lot over the years (only tornadoes
    before 1955, only three event types until 1996), which this chart
    makes obvious before anyone reads too much into the rankings.
    """
    years = storm_events_tidy["date"].dt.year

    fig, ax = plt.subplots(figsize=tuple(parameters["figure_size"]))
    if len(years):
        ax.hist(years, bins=range(int(years.min()), int(years.max()) + 2), color="steelblue")
    ax.set_xlabel("Year")
    ax.set_ylabel("Harmful events")
    ax.set_title("Harmful Storm Events per Year")
    fig.tight_layout()

    logger.info("Events-per-year histogram drawn for %s events", f"{len(years):,}")
    return fig


# ── Node 2 ──────────────────────────────────────────────────────
def plot_health_impact(
    health_impact_summary: pd.DataFrame,
    parameters: dict[str, Any],
) -> Figure:
    """Side-by-side bar charts: top event types by fatalities and by injuries."""
    metrics = ["fatalities", "injuries"]
    fig, axes = plt.subplots(1, len(metrics), figsize=tuple(parameters["figure_size"]))

    for ax, metric in zip(axes, metrics):
        top = health_impact_summary[health_impact_summary["metric_name"] == metric]
        # Reverse so the largest bar sits on top
        ax.barh(top["event_type"][::-1], top["metric_value"][::-1], color="firebrick")
        ax.set_xlabel(metric.capitalize())
        ax.set_title(f"Top {len(top)} by {metric}")

    fig.suptitle("Population Health Impact by Event Type")
    fig.tight_layout()

    logger.info("Health impact chart drawn")
    return fig


# ── Node 3 ──────────────────────────────────────────────────────
def plot_economic_impact(
    economic_impact_summary: pd.DataFrame,
    parameters: dict[str, Any],
) -> Figure:
    """Bar chart of total damage (billions of dollars) per event type."""
    top = economic_impact_summary
    fig, ax = plt.subplots(figsize=tuple(parameters["figure_size"]))
    ax.barh(top["event_type"][::-1], top["metric_value"][::-1] / 1e9, color="darkgreen")
    ax.set_xlabel("Property + crop damage (billion USD)")
    ax.set_title(f"Economic Impact: Top {len(top)} Event Types")
    fig.tight_layout()

    logger.info("Economic impact chart drawn")
    return fig
