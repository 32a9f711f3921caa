"""Utility modules for docharvest.

- **errors** -- Exception hierarchy rooted at DocHarvestError; each pipeline
  stage raises its own subclass so callers can handle failures granularly.
- **logging** -- structlog setup with a dual-renderer pattern: coloured
  console output in development, structured JSON in production.
"""

from docharvest.utils.errors import (
    ChunkStoreError,
    ConfigurationError,
    DocHarvestError,
    DuplicateChunkError,
    RAGError,
    RecognitionError,
    SourceDiscoveryError,
)
from docharvest.utils.logging import configure_logging

__all__ = [
    "ChunkStoreError",
    "ConfigurationError",
    "DocHarvestError",
    "DuplicateChunkError",
    "RAGError",
    "RecognitionError",
    "SourceDiscoveryError",
    "configure_logging",
]
