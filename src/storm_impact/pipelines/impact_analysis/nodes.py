"""Node functions for the impact_analysis pipeline.

Three nodes that take the tidy event table to the two ranked summaries
the report charts:

    tidy events → per-event-type totals (one grouped pass)
                → health ranking   (top fatalities, top injuries)
                → economic ranking (top property + crop damage)

Summaries are long-format tables with columns ``event_type``,
``metric_name`` and ``metric_value``.  Ties keep the canonical
event-type order, so the rankings are the same however the input rows
were ordered.
"""

from __future__ import annotations

import logging

import pandas as pd

from storm_impact.taxonomy import CANONICAL_EVENT_TYPES, event_type_dtype

logger = logging.getLogger(__name__)

SUMMARY_COLUMNS: list[str] = ["event_type", "metric_name", "metric_value"]


# ── helper ──────────────────────────────────────────────────────
def _top_n(totals: pd.DataFrame, metric: str, n: int) -> pd.DataFrame:
    """Rank event types by one metric, descending, and keep the first n.

    ``totals`` must already be in canonical order; a stable sort then
    leaves tied event types in that order.
    """
    ranked = totals.sort_values(metric, ascending=False, kind="stable").head(n)
    return pd.DataFrame(
        {
            "event_type": ranked["event_type"].to_numpy(),
            "metric_name": metric,
            "metric_value": ranked[metric].to_numpy(),
        },
        columns=SUMMARY_COLUMNS,
    )


# ── Node 1 ──────────────────────────────────────────────────────
def summarise_event_impact(storm_events_tidy: pd.DataFrame) -> pd.DataFrame:
    """Total casualties and damage per canonical event type.

    One groupby computes every metric; the rankings downstream only sort
    and slice.  Event types with no events are left out.  Rows come out
    in canonical enumeration order.

    Args:
        storm_events_tidy: Tidy event table from data_processing.

    Returns:
        DataFrame with event_type, fatalities, injuries, property_damage,
        crop_damage and total_damage.

    Raises:
        ValueError: If any event_type is not a canonical label.
    """
    unknown = ~storm_events_tidy["event_type"].isin(CANONICAL_EVENT_TYPES)
    if unknown.any():
        bad = storm_events_tidy.loc[unknown, "event_type"].unique()[:10]
        raise ValueError(f"event_type values outside the canonical set: {list(bad)}")

    event_type = storm_events_tidy["event_type"].astype(event_type_dtype())

    totals = (
        storm_events_tidy.assign(event_type=event_type)
        .groupby("event_type", observed=True, sort=True)
        .agg(
            fatalities=("fatalities", "sum"),
            injuries=("injuries", "sum"),
            property_damage=("property_damage", "sum"),
            crop_damage=("crop_damage", "sum"),
        )
        .reset_index()
    )
    totals["event_type"] = totals["event_type"].astype(str)
    totals[["fatalities", "injuries"]] = totals[["fatalities", "injuries"]].astype("int64")
    totals["total_damage"] = totals["property_damage"] + totals["crop_damage"]

    logger.info(
        "Summarised %s events into %d event types: "
        "%s fatalities, %s injuries, $%s total damage",
        f"{len(storm_events_tidy):,}",
        len(totals),
        f"{totals['fatalities'].sum():,}",
        f"{totals['injuries'].sum():,}",
        f"{totals['total_damage'].sum():,.0f}",
    )
    return totals


# ── Node 2 ──────────────────────────────────────────────────────
def rank_health_impact(event_impact_totals: pd.DataFrame, top_n: int) -> pd.DataFrame:
    """Top event types by fatalities and, separately, by injuries.

    Returns the fatality ranking followed by the injury ranking, each at
    most ``top_n`` rows, tagged by ``metric_name``.
    """
    summary = pd.concat(
        [
            _top_n(event_impact_totals, "fatalities", top_n),
            _top_n(event_impact_totals, "injuries", top_n),
        ],
        ignore_index=True,
    )
    summary["metric_value"] = summary["metric_value"].astype("int64")

    for metric in ("fatalities", "injuries"):
        top = summary[summary["metric_name"] == metric]
        logger.info(
            "Top %d by %s: %s",
            top_n,
            metric,
            dict(zip(top["event_type"], top["metric_value"])),
        )
    return summary


# ── Node 3 ──────────────────────────────────────────────────────
def rank_economic_impact(event_impact_totals: pd.DataFrame, top_n: int) -> pd.DataFrame:
    """Top event types by total (property + crop) damage in dollars."""
    summary = _top_n(event_impact_totals, "total_damage", top_n)
    summary["metric_value"] = summary["metric_value"].astype("float64")

    logger.info(
        "Top %d by total damage ($bn): %s",
        top_n,
        {e: round(v / 1e9, 2) for e, v in zip(summary["event_type"], summary["metric_value"])},
    )
    return summary
