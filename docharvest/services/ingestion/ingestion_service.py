"""Orchestrator for the documentation ingestion pipeline.

Pipeline stages: **read -> recognize -> aggregate**.

The :class:`IngestionService` dispatches each :class:`IngestionTask` to the
recognizer registered for its :class:`DocFormat` and concatenates the
results in task order.  Recognizers never raise on malformed input, so any
exception here is a document-level failure (unreadable file, bad encoding,
a chunk that fails validation, a broken injected recognizer): it is logged
with the path and the run continues with zero chunks for that document.

Chunk ids are unique within one document by construction.  Across documents
the aggregate is a plain append: a repeated id is kept, logged and listed in
the report, never silently dropped.
"""

from __future__ import annotations

import time
from collections import Counter
from pathlib import Path

import structlog

from docharvest.interfaces.recognizer import IRecognizer
from docharvest.models.chunk import DocFormat, DocumentChunk
from docharvest.models.ingestion import DocumentResult, IngestionReport, IngestionTask
from docharvest.services.ingestion.recognizers import build_default_recognizers
from docharvest.utils.errors import (
    DuplicateChunkError,
    RecognitionError,
    SourceDiscoveryError,
)

logger = structlog.get_logger(logger_name=__name__)


class IngestionService:
    """Runs a batch of documents through their format recognizers.

    Parameters
    ----------
    recognizers:
        Mapping of format to recognizer.  Defaults to one instance of each
        built-in recognizer.
    fail_on_duplicate_ids:
        Raise :class:`DuplicateChunkError` on a cross-document id collision
        instead of logging it and reporting it in
        :attr:`IngestionReport.duplicate_ids`.
    """

    def __init__(
        self,
        recognizers: dict[DocFormat, IRecognizer] | None = None,
        fail_on_duplicate_ids: bool = False,
    ) -> None:
        self._recognizers = recognizers if recognizers is not None else build_default_recognizers()
        self._fail_on_duplicate_ids = fail_on_duplicate_ids

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def parse_document(self, task: IngestionTask) -> list[DocumentChunk]:
        """Read one document and return its chunks.

        Raises
        ------
        RecognitionError
            If no recognizer is registered for the task's format.
        OSError, UnicodeDecodeError
            If the file cannot be read as UTF-8.
        """
        recognizer = self._recognizers.get(task.format)
        if recognizer is None:
            raise RecognitionError(
                message=f"No recognizer registered for format '{task.format.value}'",
                source_name=task.source.value,
            )

        text = Path(task.path).read_text(encoding="utf-8")
        # Recognizer log events carry the document path.
        with structlog.contextvars.bound_contextvars(document=task.path):
            return recognizer.parse(text, task.source, task.version)

    def run(self, tasks: list[IngestionTask]) -> IngestionReport:
        """Parse every task and aggregate the results.

        Raises
        ------
        SourceDiscoveryError
            If *tasks* is empty.
        DuplicateChunkError
            On a cross-document id collision when strict mode is enabled.
        """
        if not tasks:
            raise SourceDiscoveryError(message="No sources found to ingest")

        start = time.monotonic()
        chunks: list[DocumentChunk] = []
        documents: list[DocumentResult] = []
        duplicate_ids: list[str] = []
        seen: set[str] = set()

        for task in tasks:
            try:
                parsed = self.parse_document(task)
            except Exception as exc:
                logger.error(
                    "document_failed",
                    source=task.source.value,
                    path=task.path,
                    error=str(exc),
                    exc_info=True,
                )
                documents.append(
                    DocumentResult(source=task.source, path=task.path, error=str(exc))
                )
                continue

            for chunk in parsed:
                if chunk.id in seen:
                    if self._fail_on_duplicate_ids:
                        raise DuplicateChunkError(
                            message=f"Chunk id '{chunk.id}' produced again by {task.path}",
                            source_name=task.source.value,
                        )
                    logger.warning("duplicate_chunk_id", chunk_id=chunk.id, path=task.path)
                    duplicate_ids.append(chunk.id)
                seen.add(chunk.id)
            chunks.extend(parsed)

            logger.info(
                "document_parsed",
                source=task.source.value,
                path=task.path,
                chunks=len(parsed),
            )
            documents.append(
                DocumentResult(source=task.source, path=task.path, chunks_created=len(parsed))
            )

        counts = Counter(chunk.source.value for chunk in chunks)
        report = IngestionReport(
            chunks=chunks,
            counts_by_source=dict(counts),
            documents=documents,
            duplicate_ids=duplicate_ids,
        )

        logger.info(
            "ingestion_complete",
            documents=len(documents),
            failed=len(report.failed_documents),
            chunks=report.total_chunks,
            duplicates=len(duplicate_ids),
            time_s=round(time.monotonic() - start, 2),
        )
        return report
