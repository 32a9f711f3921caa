"""Recognizer for console variable / command listings.

Each entry starts with a level-3 heading naming the entry and its kind::

    ### `r.ScreenPercentage` — Console Variable
    Controls the percentage of the screen resolution used for rendering.

    ### `stat fps` — Console Command
    Displays the current frame rate.

Every non-blank, non-heading line up to the next entry heading is part of
the description.  Entries without a description are still emitted: the
name and kind alone are worth retrieving.

The separator between name and kind is normally an em dash, but exported
listings arrive with en dashes, ASCII hyphens, or an em dash decoded as
Latin-1 (``â€”``).  All of those are accepted.  A non-empty document whose
entry-like headings match none of them yields zero entries and a
``command_list_heading_mismatch`` warning, so an encoding problem does not
pass as an empty listing.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

import structlog

from docharvest.interfaces.recognizer import IRecognizer
from docharvest.models.chunk import DocFormat, DocSource, DocType, DocumentChunk

logger = structlog.get_logger(logger_name=__name__)

_KIND_LABELS: dict[str, DocType] = {
    "Console Variable": DocType.COMMAND_VARIABLE,
    "Console Command": DocType.COMMAND_ACTION,
}
_TYPE_LABELS: dict[DocType, str] = {doc_type: label for label, doc_type in _KIND_LABELS.items()}

_ENTRY_RE = re.compile(
    r"^###\s+`([^`]+)`\s+(?:—|–|â€”|--|-)\s+(Console Variable|Console Command)"
)
# Looks like an entry heading, whatever separator follows the name.
_ENTRY_LIKE_RE = re.compile(r"^###\s+`[^`]+`")


@dataclass
class _Entry:
    name: str
    doc_type: DocType
    description_lines: list[str] = field(default_factory=list)

    @property
    def description(self) -> str:
        return "\n".join(self.description_lines).strip()


def parse_entries(text: str) -> list[_Entry]:
    entries: list[_Entry] = []
    current: _Entry | None = None

    for line in text.replace("\r\n", "\n").split("\n"):
        heading = _ENTRY_RE.match(line)
        if heading is not None:
            name = heading.group(1).strip()
            current = _Entry(name=name, doc_type=_KIND_LABELS[heading.group(2)]) if name else None
            if current is not None:
                entries.append(current)
        elif current is not None and line.strip() and not line.startswith("#"):
            current.description_lines.append(line.strip())

    return entries


def _entry_content(entry: _Entry) -> str:
    content = f"# {entry.name}\nType: {_TYPE_LABELS[entry.doc_type]}"
    if entry.description:
        content = f"{content}\n\n{entry.description}"
    return content


class CommandListRecognizer(IRecognizer):
    """Extracts named console variables and commands from a listing."""

    doc_format = DocFormat.COMMAND_LIST

    def parse(
        self,
        text: str,
        source: DocSource,
        version: str | None = None,
    ) -> list[DocumentChunk]:
        source = DocSource(source)
        entries = parse_entries(text)

        if not entries and text.strip():
            lines = text.replace("\r\n", "\n").split("\n")
            candidates = sum(1 for line in lines if _ENTRY_LIKE_RE.match(line))
            if candidates:
                logger.warning(
                    "command_list_heading_mismatch",
                    source=source.value,
                    candidate_headings=candidates,
                    message="Entry headings found but none matched; check the dash encoding",
                )

        chunks: list[DocumentChunk] = []
        seen: set[str] = set()
        for entry in entries:
            chunk_id = f"{source.value}:{entry.doc_type.value}:{entry.name}"
            if chunk_id in seen:
                logger.debug("command_duplicate_entry_skipped", chunk_id=chunk_id)
                continue
            seen.add(chunk_id)
            chunks.append(
                DocumentChunk(
                    id=chunk_id,
                    source=source,
                    type=entry.doc_type,
                    name=entry.name,
                    content=_entry_content(entry),
                    version=version,
                )
            )

        logger.debug("command_list_parsed", source=source.value, entries=len(chunks))
        return chunks
