"""Recognizer for heading-delimited markdown prose.

Splits a document at ``#`` .. ``####`` headings and emits one chunk per
section whose trimmed body is longer than :data:`MIN_SECTION_CHARS`.
Shorter sections (stray headings, navigation crumbs) are dropped silently.

Headings inside fenced code blocks are body text: tutorial code is full of
``# comment`` lines that would otherwise shred a section.

Each section is classified by a priority-ordered heuristic over its title
and first body line, falling back to ``guide``.  Because titles repeat
("Example", "Usage"), ids carry the section's ordinal among the emitted
sections: ``{source}:{type}:{slug}-{ordinal}``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

import structlog

from docharvest.interfaces.recognizer import IRecognizer
from docharvest.models.chunk import DocFormat, DocSource, DocType, DocumentChunk

logger = structlog.get_logger(logger_name=__name__)

# A section body must be strictly longer than this to be kept.
MIN_SECTION_CHARS = 50
SLUG_MAX_LENGTH = 64

_HEADING_RE = re.compile(r"^(#{1,4})\s+(.+)$")
_FENCE_RE = re.compile(r"^\s*(`{3,}|~{3,})(.*)$")
_ENDPOINT_LINE_RE = re.compile(r"^(get|post|put|delete|patch)\s+/", re.IGNORECASE)
_CLASS_LINE_RE = re.compile(r"^class\s+\w+")
_SLUG_RE = re.compile(r"[^a-z0-9]+")


@dataclass
class _Section:
    title: str
    level: int
    body_lines: list[str] = field(default_factory=list)

    @property
    def body(self) -> str:
        return "\n".join(self.body_lines).strip()


def classify_section(title: str, body: str) -> DocType:
    """Pick a :class:`DocType` from the heading text and first body line."""
    lower_title = title.lower()
    first_line = next((line.strip() for line in body.split("\n") if line.strip()), "")

    if "endpoint" in lower_title or _ENDPOINT_LINE_RE.match(first_line):
        return DocType.API_ENDPOINT
    if "example" in lower_title or "usage" in lower_title:
        return DocType.EXAMPLE
    if "class" in lower_title or _CLASS_LINE_RE.match(first_line):
        return DocType.CLASS
    if "function" in lower_title or "method" in lower_title:
        return DocType.FUNCTION
    return DocType.GUIDE


def slugify(title: str) -> str:
    """Lower-case, collapse non-alphanumeric runs to ``-``, trim, truncate."""
    slug = _SLUG_RE.sub("-", title.lower()).strip("-")[:SLUG_MAX_LENGTH]
    return slug or "section"


def _closes_fence(marker: re.Match[str] | None, fence: str) -> bool:
    """A fence closes on a bare run of its own character at least as long."""
    if marker is None or marker.group(2).strip():
        return False
    run = marker.group(1)
    return run[0] == fence[0] and len(run) >= len(fence)


def split_sections(text: str) -> list[_Section]:
    """Split *text* at headings; text before the first heading is discarded."""
    sections: list[_Section] = []
    current: _Section | None = None
    # Marker that opened the current fence, or None outside one.
    fence: str | None = None

    for line in text.replace("\r\n", "\n").split("\n"):
        marker = _FENCE_RE.match(line)
        if fence is None and marker is not None:
            fence = marker.group(1)
        elif fence is not None:
            if _closes_fence(marker, fence):
                fence = None
        else:
            heading = _HEADING_RE.match(line)
            if heading is not None:
                title = heading.group(2).strip()
                # A blank heading still closes the previous section.
                current = _Section(title=title, level=len(heading.group(1))) if title else None
                if current is not None:
                    sections.append(current)
                continue
        if current is not None:
            current.body_lines.append(line)

    return sections


class MarkdownRecognizer(IRecognizer):
    """Extracts titled, classified sections from markdown prose."""

    doc_format = DocFormat.MARKDOWN

    def parse(
        self,
        text: str,
        source: DocSource,
        version: str | None = None,
    ) -> list[DocumentChunk]:
        source = DocSource(source)
        chunks: list[DocumentChunk] = []
        dropped = 0

        for section in split_sections(text):
            body = section.body
            if len(body) <= MIN_SECTION_CHARS:
                dropped += 1
                continue
            doc_type = classify_section(section.title, body)
            ordinal = len(chunks)
            chunks.append(
                DocumentChunk(
                    id=f"{source.value}:{doc_type.value}:{slugify(section.title)}-{ordinal}",
                    source=source,
                    type=doc_type,
                    name=section.title,
                    content=f"# {section.title}\n\n{body}",
                    version=version,
                )
            )

        logger.debug(
            "markdown_parsed",
            source=source.value,
            sections=len(chunks),
            dropped=dropped,
        )
        return chunks
