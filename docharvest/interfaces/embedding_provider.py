"""Abstract base class for text-embedding providers.

docharvest ships no embedding model.  Whatever turns chunk ``content`` into
vectors (a local model, a hosted API) is injected into
:class:`~docharvest.services.ingestion.embedding_service.EmbeddingService`
behind this contract.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class IEmbeddingProvider(ABC):
    """Turns chunk text into fixed-length float vectors."""

    @abstractmethod
    async def embed(self, texts: list[str]) -> list[list[float]]:
        """Embed a batch of chunk bodies.

        Returns
        -------
        list[list[float]]
            One vector per input text, in input order, each of length
            :meth:`get_dimension`.  A provider that returns a different
            number of vectors makes the hand-off raise ``RAGError``.
        """

    @abstractmethod
    async def embed_single(self, text: str) -> list[float]:
        """Embed one text, typically a search query."""

    @abstractmethod
    def get_dimension(self) -> int:
        ...

    @abstractmethod
    def get_provider_name(self) -> str:
        """Short identifier used in log events and error prefixes."""

    @abstractmethod
    def is_available(self) -> bool:
        ...
