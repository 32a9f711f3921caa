"""Documentation chunk models for the docharvest knowledge base.

Defines the closed enumerations (origin, kind, input format) and the Pydantic
v2 models that every recognizer produces and every downstream stage consumes:

    DocumentChunk  -- one independently retrievable unit of documentation
    StoreRecord    -- the row shape written to the external vector store
    SearchResult   -- the row shape read back from a similarity query

All models use frozen config: chunks are created once per ingestion run and
never updated.  Validity is a construction-time guarantee, so a chunk that
exists has a non-empty id, name and content body.

Identity scheme (deterministic, stable across re-runs):

    {source}:{type}:{qualifiedName}        stub-file and command-list chunks
    {source}:{type}:{slug}-{ordinal}       markdown sections
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ---------------------------------------------------------------------------
# Enums -- closed sets; a value outside them is a validation error.
# ---------------------------------------------------------------------------

class DocSource(str, Enum):  # noqa: UP042 — StrEnum requires Python 3.11+
    """Which documentation collection a chunk came from."""

    UNREAL_PYTHON = "unreal-python"    # Annotated type stubs (unreal.py)
    UNREAL_CONSOLE = "unreal-console"  # Console variable / command listing
    PYQT_REFERENCE = "pyqt-reference"  # Reference prose (markdown)
    PYQT_TUTORIALS = "pyqt-tutorials"  # Tutorial prose (markdown)


class DocType(str, Enum):  # noqa: UP042 — StrEnum requires Python 3.11+
    """Kind of documentation entity.  Drives rendering only, never behavior."""

    CLASS = "class"
    METHOD = "method"
    PROPERTY = "property"
    ENUM = "enum"
    FUNCTION = "function"
    COMMAND_VARIABLE = "command-variable"
    COMMAND_ACTION = "command-action"
    GUIDE = "guide"
    EXAMPLE = "example"
    CONCEPT = "concept"
    API_ENDPOINT = "api-endpoint"


class DocFormat(str, Enum):  # noqa: UP042 — StrEnum requires Python 3.11+
    """Input format of a raw document; selects the recognizer."""

    STUB_FILE = "stub-file"
    MARKDOWN = "markdown"
    COMMAND_LIST = "command-list"


# ---------------------------------------------------------------------------
# DocumentChunk -- the unit of retrieval.
# ---------------------------------------------------------------------------
class DocumentChunk(BaseModel):
    """One addressable, independently retrievable piece of documentation.

    ``parent_name`` is a lookup key to the enclosing entity's ``name`` (e.g.
    a method's class), never an ownership link: a chunk is complete without
    resolving its parent.

    Two chunks are equal when their ``id`` is equal; the orchestrator relies
    on this to detect collisions across documents.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(min_length=1, description="Deterministic identifier.")
    source: DocSource = Field(description="Origin collection tag.")
    type: DocType = Field(description="Kind of documentation entity.")
    name: str = Field(min_length=1, description="Local, unqualified identifier.")
    parent_name: str | None = Field(
        default=None,
        alias="parentName",
        description="Name of the enclosing entity, used as a lookup key only.",
    )
    content: str = Field(min_length=1, description="Text that gets embedded and displayed.")
    signature: str | None = Field(default=None, description="Formatted call signature (methods).")
    version: str | None = Field(
        default=None,
        description="Free-text version tag shared by every chunk of one document.",
    )

    @field_validator("id", "name", "content")
    @classmethod
    def _reject_blank(cls, value: str) -> str:
        # min_length alone lets "   " through.
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @property
    def qualified_name(self) -> str:
        """``parentName.name`` when a parent is known, otherwise ``name``."""
        if self.parent_name:
            return f"{self.parent_name}.{self.name}"
        return self.name

    def to_json_dict(self) -> dict[str, str]:
        """Return the durable form: wire field names, absent optionals omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DocumentChunk):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)


# ---------------------------------------------------------------------------
# StoreRecord -- vector-store row with empty-string sentinels.
# ---------------------------------------------------------------------------
class StoreRecord(BaseModel):
    """A chunk flattened for a vector store whose columns are all mandatory.

    The store schema has no nullable columns, so ``parentName`` and
    ``version`` carry ``""`` when the chunk has no value.  Converting back
    with :meth:`to_chunk` restores them to absent.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(min_length=1)
    source: DocSource
    type: DocType
    name: str = Field(min_length=1)
    parent_name: str = Field(default="", alias="parentName")
    content: str = Field(min_length=1)
    version: str = ""
    vector: list[float] = Field(default_factory=list)

    @classmethod
    def from_chunk(cls, chunk: DocumentChunk, vector: list[float]) -> StoreRecord:
        return cls(
            id=chunk.id,
            source=chunk.source,
            type=chunk.type,
            name=chunk.name,
            parent_name=chunk.parent_name or "",
            content=chunk.content,
            version=chunk.version or "",
            vector=vector,
        )

    def to_chunk(self) -> DocumentChunk:
        return DocumentChunk(
            id=self.id,
            source=self.source,
            type=self.type,
            name=self.name,
            parent_name=self.parent_name or None,
            content=self.content,
            version=self.version or None,
        )


# ---------------------------------------------------------------------------
# SearchResult -- one row of a similarity query against the vector store.
# ---------------------------------------------------------------------------
class SearchResult(BaseModel):
    """A chunk (without its embedding) and its similarity to the query."""

    model_config = ConfigDict(frozen=True)

    chunk: DocumentChunk
    score: float = Field(ge=0.0, le=1.0, description="Similarity score in [0, 1].")


def find_duplicate_ids(chunks: Iterable[DocumentChunk]) -> list[str]:
    """Return every id that occurs more than once, in order of first repeat."""
    seen: Counter[str] = Counter()
    duplicates: list[str] = []
    for chunk in chunks:
        seen[chunk.id] += 1
        if seen[chunk.id] == 2:
            duplicates.append(chunk.id)
    return duplicates
