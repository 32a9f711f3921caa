"""Ingestion run models: what to parse, and what a run produced.

    SourceDefinition -- one configured input (a file or a directory of files)
    IngestionTask    -- one concrete (source, path, format, version) document
    DocumentResult   -- per-document outcome (chunk count or failure reason)
    IngestionReport  -- aggregate of one run, owned by the orchestrator
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from docharvest.models.chunk import DocFormat, DocSource, DocumentChunk


class SourceDefinition(BaseModel):
    """A configured documentation input, usually loaded from ``config.yaml``.

    ``path`` is relative to the sources root.  When it names a directory,
    every file matching one of ``patterns`` becomes its own task.
    """

    model_config = ConfigDict(frozen=True)

    source: DocSource
    format: DocFormat
    path: str = Field(min_length=1)
    patterns: list[str] = Field(default_factory=lambda: ["*.md", "*.txt"])
    version: str | None = None
    enabled: bool = True


class IngestionTask(BaseModel):
    """A single document to run through one recognizer."""

    model_config = ConfigDict(frozen=True)

    source: DocSource
    path: str
    format: DocFormat
    version: str | None = None


class DocumentResult(BaseModel):
    """Outcome of parsing one document."""

    model_config = ConfigDict(frozen=True)

    source: DocSource
    path: str
    chunks_created: int = Field(default=0, ge=0)
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None


class IngestionReport(BaseModel):
    """Everything one ingestion run produced.

    ``chunks`` preserves per-document order; documents appear in task order.
    ``counts_by_source`` tallies every chunk.  ``duplicate_ids`` lists each id
    that an earlier document had already produced; those chunks are still in
    ``chunks``.
    """

    model_config = ConfigDict(frozen=True)

    chunks: list[DocumentChunk] = Field(default_factory=list)
    counts_by_source: dict[str, int] = Field(default_factory=dict)
    documents: list[DocumentResult] = Field(default_factory=list)
    duplicate_ids: list[str] = Field(default_factory=list)

    @property
    def total_chunks(self) -> int:
        return len(self.chunks)

    @property
    def failed_documents(self) -> list[DocumentResult]:
        return [d for d in self.documents if d.failed]
