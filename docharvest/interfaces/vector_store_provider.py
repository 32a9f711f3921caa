"""Abstract base class for vector-store service providers.

Defines the contract for persisting embedded chunks and querying them by
similarity with an optional origin filter.  Only the shape lives here; the
database itself is an external collaborator.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from docharvest.models.chunk import DocSource, SearchResult, StoreRecord


class IVectorStoreProvider(ABC):
    """Contract for vector-store services.

    All query and mutation methods are async to support network-backed stores
    without blocking the event loop.
    """

    @abstractmethod
    async def add_records(self, records: list[StoreRecord]) -> int:
        """Append embedded records to the store.

        Each record's ``id`` is the primary key.  Returns the number of
        records stored.

        Raises
        ------
        docharvest.utils.errors.RAGError
            If the store operation fails.
        """

    @abstractmethod
    async def search(
        self,
        query_vector: list[float],
        limit: int = 10,
        sources: list[DocSource] | None = None,
    ) -> list[SearchResult]:
        """Return the ``limit`` most similar chunks, best first.

        Parameters
        ----------
        query_vector:
            Embedding of the query text.
        limit:
            Maximum number of results.
        sources:
            When given and non-empty, only chunks from these origins match.
        """

    @abstractmethod
    async def get_stats(self) -> dict[str, int]:
        """Return stored chunk counts keyed by origin tag."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if the store is configured and reachable."""
