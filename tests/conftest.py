"""Shared pytest fixtures for the docharvest test suite."""

from __future__ import annotations

import hashlib
import struct
from pathlib import Path

import pytest

from docharvest.interfaces.embedding_provider import IEmbeddingProvider
from docharvest.interfaces.vector_store_provider import IVectorStoreProvider
from docharvest.models.chunk import (
    DocSource,
    DocType,
    DocumentChunk,
    SearchResult,
    StoreRecord,
)

# ---------------------------------------------------------------------------
# Sample documents
# ---------------------------------------------------------------------------

SAMPLE_STUB = '''\
# This file is generated.

class EnumBase:
    """Base for generated enumerations."""
    ...

class Object:
    r"""
    Base object for everything in the engine.

    **C++ Source:**

    - **Module**: CoreUObject
    - **File**: Object.h
    """
    def get_name(self) -> str:
        r"""
        Returns the name of this object.
        """
        ...

class Actor(Object):
    r"""
    Actor is the base class for an Object that can be placed in a level.

    **C++ Source:**

    - **Module**: Engine
    - **File**: Actor.h
    """
    def __init__(self, outer: Object = None, name: str = "None") -> None:
        ...
    def _internal(self) -> None:
        ...
    @property
    def hidden(self) -> bool:
        """(bool): [Read-Write] Allows us to hide actors."""
        ...
    @hidden.setter
    def hidden(self, value: bool) -> None:
        ...
    @property
    def root(self) -> Object:
        """(Object): [Read-Only] The root component."""
        ...
    @classmethod
    def static_class(cls) -> Object:
        """Returns the class object."""
        ...
    @staticmethod
    def spawn(location: Vector) -> Actor:
        """Spawns a new actor."""
        ...
    def destroy(self) -> bool:
        """Destroys this actor."""
        ...

class CollisionChannel(EnumBase):
    r"""
    Enum indicating different types of objects for rigid-body collision.
    """
    WORLD_STATIC: CollisionChannel = ... #: 0: Static world geometry
    WORLD_DYNAMIC: CollisionChannel = ... #: 1: Moving world geometry

class _PrivateHelper(Object):
    """Hidden."""
    def visible(self) -> None:
        ...
'''

SAMPLE_MARKDOWN = """\
Intro text before any heading is ignored.

# QWidget Class

The QWidget class is the base class of all user interface objects in PyQt6.

## Example usage

```python
# Not a heading: this is a code comment
app = QApplication([])
```
Create the application before any widget is constructed.

## See also

Short.
"""

SAMPLE_COMMANDS = """\
# Console Commands

### `r.ScreenPercentage` — Console Variable
Controls the percentage of the screen resolution used for rendering.

### `stat fps` — Console Command
Displays the current frame rate.

### `r.VSync` — Console Variable
"""


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def sample_stub() -> str:
    return SAMPLE_STUB


@pytest.fixture
def sample_markdown() -> str:
    return SAMPLE_MARKDOWN


@pytest.fixture
def sample_commands() -> str:
    return SAMPLE_COMMANDS


@pytest.fixture
def sources_dir(tmp_path: Path) -> Path:
    """A sources root laid out like the real documentation collections."""
    root = tmp_path / "sources"
    (root / "unreal-python").mkdir(parents=True)
    (root / "unreal-python" / "unreal.py").write_text(SAMPLE_STUB, encoding="utf-8")
    (root / "unreal-console").mkdir()
    (root / "unreal-console" / "console-commands.md").write_text(
        SAMPLE_COMMANDS, encoding="utf-8"
    )
    (root / "pyqt-reference").mkdir()
    (root / "pyqt-reference" / "qwidget.md").write_text(SAMPLE_MARKDOWN, encoding="utf-8")
    (root / "pyqt-reference" / "notes.rst").write_text("ignored", encoding="utf-8")
    return root


@pytest.fixture
def sample_chunk() -> DocumentChunk:
    return DocumentChunk(
        id="unreal-python:method:Actor.destroy",
        source=DocSource.UNREAL_PYTHON,
        type=DocType.METHOD,
        name="destroy",
        parent_name="Actor",
        content="# Actor.destroy\n\nSignature: destroy(self) -> bool",
        signature="destroy(self) -> bool",
        version="5.6",
    )


@pytest.fixture
def mock_embedding_provider() -> MockEmbeddingProvider:
    return MockEmbeddingProvider()


@pytest.fixture
def mock_vector_store() -> MockVectorStore:
    return MockVectorStore()


# ---------------------------------------------------------------------------
# Mock providers for ingestion tests
# ---------------------------------------------------------------------------

_EMBEDDING_DIM = 32


def _hash_to_vector(text: str, dim: int = _EMBEDDING_DIM) -> list[float]:
    """Generate a deterministic unit-length vector by hashing *text*."""
    raw = hashlib.sha256(text.encode("utf-8")).digest()
    while len(raw) < dim * 4:
        raw += hashlib.sha256(raw).digest()
    values = [
        (struct.unpack(">I", raw[i * 4 : i * 4 + 4])[0] / 0xFFFFFFFF) - 0.5
        for i in range(dim)
    ]
    norm = sum(v * v for v in values) ** 0.5 or 1.0
    return [v / norm for v in values]


class MockEmbeddingProvider(IEmbeddingProvider):
    """In-memory deterministic embedding provider for tests."""

    async def embed(self, texts: list[str]) -> list[list[float]]:
        return [_hash_to_vector(t) for t in texts]

    async def embed_single(self, text: str) -> list[float]:
        return _hash_to_vector(text)

    def get_dimension(self) -> int:
        return _EMBEDDING_DIM

    def get_provider_name(self) -> str:
        return "mock-embedding"

    def is_available(self) -> bool:
        return True


class MockVectorStore(IVectorStoreProvider):
    """In-memory vector store backed by a dict keyed on record id."""

    def __init__(self) -> None:
        self.records: dict[str, StoreRecord] = {}
        self.add_calls = 0

    async def add_records(self, records: list[StoreRecord]) -> int:
        self.add_calls += 1
        for record in records:
            self.records[record.id] = record
        return len(records)

    async def search(
        self,
        query_vector: list[float],
        limit: int = 10,
        sources: list[DocSource] | None = None,
    ) -> list[SearchResult]:
        scored: list[SearchResult] = []
        for record in self.records.values():
            if sources and record.source not in sources:
                continue
            dot = sum(a * b for a, b in zip(query_vector, record.vector))
            score = max(0.0, min(1.0, (dot + 1.0) / 2.0))
            scored.append(SearchResult(chunk=record.to_chunk(), score=score))
        scored.sort(key=lambda r: r.score, reverse=True)
        return scored[:limit]

    async def get_stats(self) -> dict[str, int]:
        stats: dict[str, int] = {}
        for record in self.records.values():
            stats[record.source.value] = stats.get(record.source.value, 0) + 1
        return stats

    def is_available(self) -> bool:
        return True
