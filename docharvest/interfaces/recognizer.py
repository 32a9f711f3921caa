"""Abstract base class for format-specific documentation recognizers.

A recognizer is a pure function of one document's text: the same input
always yields the same ordered chunk list.  Implementations live in
``docharvest/services/ingestion/recognizers/``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from docharvest.models.chunk import DocFormat, DocSource, DocumentChunk


class IRecognizer(ABC):
    """Contract consumed uniformly by the ingestion orchestrator.

    Malformed-but-readable input must degrade to fewer or smaller chunks;
    an exception escaping :meth:`parse` is treated by the orchestrator as a
    document-level failure.
    """

    #: The input format this recognizer handles.
    doc_format: DocFormat

    @abstractmethod
    def parse(
        self,
        text: str,
        source: DocSource,
        version: str | None = None,
    ) -> list[DocumentChunk]:
        """Convert raw document text into an ordered list of chunks.

        Parameters
        ----------
        text:
            The whole document, as read from disk.
        source:
            Origin tag stamped on every produced chunk.
        version:
            Optional version tag stamped on every produced chunk.

        Returns
        -------
        list[DocumentChunk]
            Chunks in document order, with ids unique within the document.
        """
