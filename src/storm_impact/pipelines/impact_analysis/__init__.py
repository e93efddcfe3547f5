"""Tidy → summary pipeline ranking event types by health and economic impact."""

from .pipeline import create_pipeline

__all__ = ["create_pipeline"]
