"""Abstract contracts at the seams of the ingestion pipeline.

    Interface             →  Implementations
    ────────────────────────────────────────────────────────────
    IRecognizer           →  StubFileRecognizer, MarkdownRecognizer,
                             CommandListRecognizer
    IEmbeddingProvider    →  injected by the caller (external)
    IVectorStoreProvider  →  injected by the caller (external)
"""

from docharvest.interfaces.embedding_provider import IEmbeddingProvider
from docharvest.interfaces.recognizer import IRecognizer
from docharvest.interfaces.vector_store_provider import IVectorStoreProvider

__all__ = [
    "IEmbeddingProvider",
    "IRecognizer",
    "IVectorStoreProvider",
]
