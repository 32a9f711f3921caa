"""Hands parsed chunks to an embedding provider and a vector store.

Neither collaborator ships with this package; both are injected behind
:class:`IEmbeddingProvider` and :class:`IVectorStoreProvider`.  Chunks are
embedded and stored in slices of ``batch_size`` to bound peak memory.
"""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING

import structlog

from docharvest.models.chunk import DocumentChunk, StoreRecord
from docharvest.utils.errors import RAGError

if TYPE_CHECKING:
    from docharvest.interfaces.embedding_provider import IEmbeddingProvider
    from docharvest.interfaces.vector_store_provider import IVectorStoreProvider

logger = structlog.get_logger(logger_name=__name__)

DEFAULT_BATCH_SIZE = 128


class EmbeddingService:
    """Embeds chunk content and writes :class:`StoreRecord` rows."""

    def __init__(
        self,
        embedding_provider: IEmbeddingProvider,
        vector_store: IVectorStoreProvider,
        batch_size: int = DEFAULT_BATCH_SIZE,
    ) -> None:
        if batch_size < 1:
            raise ValueError(f"batch_size must be positive, got {batch_size}")
        self._embedding_provider = embedding_provider
        self._vector_store = vector_store
        self._batch_size = batch_size

    async def embed_and_store(self, chunks: list[DocumentChunk]) -> dict[str, int]:
        """Embed *chunks* and store them; return stored counts per source.

        Raises
        ------
        RAGError
            If the provider returns a different number of vectors than texts
            it was given.
        """
        if not chunks:
            return {}

        stored: Counter[str] = Counter()
        for i in range(0, len(chunks), self._batch_size):
            slice_chunks = chunks[i : i + self._batch_size]
            vectors = await self._embedding_provider.embed([c.content for c in slice_chunks])
            if len(vectors) != len(slice_chunks):
                raise RAGError(
                    message=(
                        f"Embedding provider returned {len(vectors)} vectors "
                        f"for {len(slice_chunks)} chunks"
                    ),
                    source_name=self._embedding_provider.get_provider_name(),
                )
            records = [
                StoreRecord.from_chunk(chunk, vector)
                for chunk, vector in zip(slice_chunks, vectors)
            ]
            await self._vector_store.add_records(records)
            stored.update(record.source.value for record in records)

        logger.info(
            "chunks_embedded",
            provider=self._embedding_provider.get_provider_name(),
            chunks=sum(stored.values()),
        )
        return dict(stored)
