"""Ingestion pipeline: discovery, recognition, persistence and embedding hand-off."""

from docharvest.services.ingestion.chunk_store import ChunkStore
from docharvest.services.ingestion.discovery import discover_tasks
from docharvest.services.ingestion.embedding_service import EmbeddingService
from docharvest.services.ingestion.ingestion_service import IngestionService

__all__ = ["ChunkStore", "EmbeddingService", "IngestionService", "discover_tasks"]
