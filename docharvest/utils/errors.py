"""Custom exception hierarchy for docharvest.

All application exceptions inherit from :class:`DocHarvestError`, which
carries an optional ``source_name`` so error handlers can identify which
documentation collection (e.g. "unreal-python", "pyqt-tutorials") or
external collaborator caused the failure.

The hierarchy is organized by pipeline stage:

    DocHarvestError  (base -- catch-all for any docharvest error)
    +-- RecognitionError      (unrecoverable scan failure in one document)
    +-- SourceDiscoveryError  (no input documents found -- fatal for a run)
    +-- DuplicateChunkError   (two chunks share an id within one run)
    +-- ChunkStoreError       (durable chunk file missing or invalid)
    +-- ConfigurationError    (invalid YAML / source definitions)
    +-- RAGError              (embedding or vector-store hand-off failure)

Document-level errors are recovered by the orchestrator; discovery and
configuration errors abort the CLI with a non-zero exit.
"""


class DocHarvestError(Exception):
    """Base exception for all docharvest errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``source_name``.  ``__str__`` prefixes the source name in brackets for
    log scanning, e.g. ``[unreal-python] docstring scan failed``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        source_name: str | None = None,
    ) -> None:
        self._message = message
        self._source_name = source_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def source_name(self) -> str | None:
        return self._source_name

    def __str__(self) -> str:
        if self._source_name:
            return f"[{self._source_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Extraction errors
# ---------------------------------------------------------------------------

class RecognitionError(DocHarvestError):
    """Raised when a document cannot be scanned at all.

    The orchestrator catches this per document and records zero chunks for
    it; the run continues with the next document.
    """

    def __init__(
        self,
        message: str = "Document recognition failed",
        source_name: str | None = None,
    ) -> None:
        super().__init__(message=message, source_name=source_name)


class DuplicateChunkError(DocHarvestError):
    """Raised in strict mode when two chunks of one run share an ``id``."""

    def __init__(
        self,
        message: str = "Duplicate chunk id detected",
        source_name: str | None = None,
    ) -> None:
        super().__init__(message=message, source_name=source_name)


# ---------------------------------------------------------------------------
# Orchestration / configuration errors
# ---------------------------------------------------------------------------

class SourceDiscoveryError(DocHarvestError):
    """Raised when a run discovers no input documents."""

    def __init__(
        self,
        message: str = "No input documents discovered",
        source_name: str | None = None,
    ) -> None:
        super().__init__(message=message, source_name=source_name)


class ConfigurationError(DocHarvestError):
    """Raised when configuration is invalid or missing at startup."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        source_name: str | None = None,
    ) -> None:
        super().__init__(message=message, source_name=source_name)


class ChunkStoreError(DocHarvestError):
    """Raised when the durable chunk file cannot be read or validated."""

    def __init__(
        self,
        message: str = "Chunk store operation failed",
        source_name: str | None = None,
    ) -> None:
        super().__init__(message=message, source_name=source_name)


# ---------------------------------------------------------------------------
# RAG hand-off errors
# ---------------------------------------------------------------------------

class RAGError(DocHarvestError):
    """Raised when the embedding or vector-store hand-off fails."""

    def __init__(
        self,
        message: str = "RAG pipeline operation failed",
        source_name: str | None = None,
    ) -> None:
        super().__init__(message=message, source_name=source_name)
