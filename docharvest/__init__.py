"""docharvest -- documentation chunk extraction for retrieval."""

__version__ = "0.1.0"
