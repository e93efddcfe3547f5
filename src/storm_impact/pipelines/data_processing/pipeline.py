"""Raw → tidy pipeline for the NOAA Storm Data.

This pipeline reads the raw StormData table, applies six sequential
transformation nodes, and outputs the tidy event table (one row per
harmful event) that the impact analysis aggregates.
"""

from kedro.pipeline import Pipeline, node, pipeline

from .nodes import (
    assign_canonical_event_types,
    compute_damage_dollars,
    filter_harmful_events,
    finalize_tidy_events,
    parse_begin_dates,
    select_storm_columns,
)


def create_pipeline(**kwargs) -> Pipeline:  # noqa: ARG001
    """Create the data_processing pipeline.

    Node chain:
        raw table → select columns → parse dates → drop harmless events
        → canonical event types → damage in dollars → tidy table
    """
    return pipeline(
        [
            node(
                func=select_storm_columns,
                inputs="storm_data_raw",
                outputs="storm_events_selected",
                name="select_storm_columns",
            ),
            node(
                func=parse_begin_dates,
                inputs=["storm_events_selected", "params:data_processing"],
                outputs="storm_events_dated",
                name="parse_begin_dates",
            ),
            node(
                func=filter_harmful_events,
                inputs="storm_events_dated",
                outputs="storm_events_harmful",
                name="filter_harmful_events",
            ),
            node(
                func=assign_canonical_event_types,
                inputs="storm_events_harmful",
                outputs="storm_events_normalized",
                name="assign_canonical_event_types",
            ),
            node(
                func=compute_damage_dollars,
                inputs="storm_events_normalized",
                outputs="storm_events_with_damage",
                name="compute_damage_dollars",
            ),
            node(
                func=finalize_tidy_events,
                inputs="storm_events_with_damage",
                outputs="storm_events_tidy",
                name="finalize_tidy_events",
            ),
        ]
    )
