"""Pydantic models shared by the recognizers, the orchestrator and the CLI."""

from docharvest.models.chunk import (
    DocFormat,
    DocSource,
    DocType,
    DocumentChunk,
    SearchResult,
    StoreRecord,
    find_duplicate_ids,
)
from docharvest.models.ingestion import (
    DocumentResult,
    IngestionReport,
    IngestionTask,
    SourceDefinition,
)

__all__ = [
    "DocFormat",
    "DocSource",
    "DocType",
    "DocumentChunk",
    "DocumentResult",
    "IngestionReport",
    "IngestionTask",
    "SearchResult",
    "SourceDefinition",
    "StoreRecord",
    "find_duplicate_ids",
]
