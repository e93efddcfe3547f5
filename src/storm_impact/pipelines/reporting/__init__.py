"""Reporting pipeline: charts for the storm impact report."""

from .pipeline import create_pipeline

__all__ = ["create_pipeline"]
