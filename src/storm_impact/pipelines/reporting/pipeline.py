"""Reporting pipeline: tidy events and summaries → report figures.

All three nodes are independent; each reads one table and writes one
figure through the catalog.
"""

from kedro.pipeline import Pipeline, node, pipeline

from .nodes import plot_economic_impact, plot_events_per_year, plot_health_impact


def create_pipeline(**kwargs) -> Pipeline:  # noqa: ARG001
    """Create the reporting pipeline."""
    return pipeline(
        [
            node(
                func=plot_events_per_year,
                inputs=["storm_events_tidy", "params:reporting"],
                outputs="events_per_year_plot",
                name="plot_events_per_year",
            ),
            node(
                func=plot_health_impact,
                inputs=["health_impact_summary", "params:reporting"],
                outputs="health_impact_plot",
                name="plot_health_impact",
            ),
            node(
                func=plot_economic_impact,
                inputs=["economic_impact_summary", "params:reporting"],
                outputs="economic_impact_plot",
                name="plot_economic_impact",
            ),
        ]
    )
