"""Storm impact: which severe weather events hurt people and cost money."""

__version__ = "0.1.0"
