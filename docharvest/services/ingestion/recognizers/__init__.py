"""Format-specific recognizers for the docharvest ingestion pipeline.

Each recognizer converts one document's raw text into an ordered list of
:class:`~docharvest.models.chunk.DocumentChunk` objects:

- **StubFileRecognizer**    -- annotated type stubs: classes, enums,
  methods and properties with their docstrings
- **MarkdownRecognizer**    -- heading-delimited prose, classified per section
- **CommandListRecognizer** -- console variable / command listings
"""

from docharvest.interfaces.recognizer import IRecognizer
from docharvest.models.chunk import DocFormat
from docharvest.services.ingestion.recognizers.command_list import CommandListRecognizer
from docharvest.services.ingestion.recognizers.markdown import MarkdownRecognizer
from docharvest.services.ingestion.recognizers.stub_file import StubFileRecognizer


def build_default_recognizers() -> dict[DocFormat, IRecognizer]:
    """Return one recognizer per supported :class:`DocFormat`."""
    recognizers: list[IRecognizer] = [
        StubFileRecognizer(),
        MarkdownRecognizer(),
        CommandListRecognizer(),
    ]
    return {recognizer.doc_format: recognizer for recognizer in recognizers}


__all__ = [
    "CommandListRecognizer",
    "MarkdownRecognizer",
    "StubFileRecognizer",
    "build_default_recognizers",
]
