"""Impact analysis pipeline: tidy events → ranked summary tables.

Node dependency graph:
    storm_events_tidy → [summarise_event_impact] → event_impact_totals
    event_impact_totals → [rank_health_impact]   → health_impact_summary
    event_impact_totals → [rank_economic_impact] → economic_impact_summary

The two ranking nodes are independent of each other.
"""

from kedro.pipeline import Pipeline, node, pipeline

from .nodes import rank_economic_impact, rank_health_impact, summarise_event_impact


def create_pipeline(**kwargs) -> Pipeline:  # noqa: ARG001
    """Create the impact_analysis pipeline."""
    return pipeline(
        [
            node(
                func=summarise_event_impact,
                inputs="storm_events_tidy",
                outputs="event_impact_totals",
                name="summarise_event_impact",
            ),
            node(
                func=rank_health_impact,
                inputs=["event_impact_totals", "params:impact_analysis.health_top_n"],
                outputs="health_impact_summary",
                name="rank_health_impact",
            ),
            node(
                func=rank_economic_impact,
                inputs=["event_impact_totals", "params:impact_analysis.economic_top_n"],
                outputs="economic_impact_summary",
                name="rank_economic_impact",
            ),
        ]
    )
