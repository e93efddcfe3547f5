"""Raw → tidy data processing pipeline for the NOAA Storm Data."""

from .pipeline import create_pipeline

__all__ = ["create_pipeline"]
