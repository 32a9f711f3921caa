"""Recognizer for annotated type-stub source files (e.g. ``unreal.py``).

Stub files are machine-generated Python where every declaration may be
followed by a quoted documentation block::

    class Actor(Object):
        r\"\"\"
        Actor is the base class for an Object that can be placed in a level.

        **C++ Source:**

        - **Module**: Engine
        - **File**: Actor.h
        \"\"\"
        @property
        def hidden(self) -> bool:
            \"\"\"(bool): [Read-Write] Allows us to hide actors.\"\"\"
            ...

The recognizer does not build a grammar.  It runs one explicit
finite-state scan over the lines:

    OUTSIDE_CLASS          -- before the first class, or inside a span whose
                              ``class`` line is not a usable declaration
    AWAITING_DOCSTRING     -- the line after a declaration; an opening quote
                              attaches a docstring, anything else means none
    IN_MULTILINE_DOCSTRING -- accumulating docstring lines until ``\"\"\"``
    IN_CLASS_BODY          -- looking for methods, properties, enum members

Class spans are flat: a class body runs from its ``class`` line to the next
column-0 ``class`` line or end of file.  Decorators are read from the lines
directly above each ``def`` when that ``def`` is reached, so a
``@staticmethod`` tag can never leak onto the following declaration.

Output order: each class (or enum) chunk, followed by its methods and
properties in declaration order.
"""

from __future__ import annotations

import bisect
import re
import textwrap
from dataclasses import dataclass, field
from enum import Enum

import structlog

from docharvest.interfaces.recognizer import IRecognizer
from docharvest.models.chunk import DocFormat, DocSource, DocType, DocumentChunk

logger = structlog.get_logger(logger_name=__name__)

# Parent name that turns a class into an enumeration.
ENUM_SENTINEL = "EnumBase"

# Underscore-prefixed methods that are still part of the public surface.
_ALLOWED_PRIVATE_METHODS = frozenset({"__init__", "__enter__", "__exit__"})

# How far below a ``@property`` to look for its ``@name.setter``.
_SETTER_WINDOW = 20

_CLASS_BOUNDARY_RE = re.compile(r"^class\s+\w+")
_CLASS_RE = re.compile(r"^class\s+(\w+)\s*(?:\(([^)]*)\))?\s*:")
_DEF_LINE_RE = re.compile(r"^\s+def\s+\w+")
_METHOD_RE = re.compile(r"^ {4}def\s+([a-z_][a-z0-9_]*)\s*\(([^)]*)\)\s*(?:->\s*([^:]+))?:")
_PROPERTY_RE = re.compile(r"^ {4}def\s+([a-z_][a-z0-9_]*)\s*\(self\)\s*->\s*([^:]+):")
_DECORATOR_RE = re.compile(r"^\s*@([\w.]+)")
# NAME: Type = ... #: 0: description   (the numeric discriminant is optional)
_ENUM_MEMBER_RE = re.compile(
    r"^\s+([A-Z_][A-Z0-9_]*)\s*:\s*\w+\s*=\s*\.\.\.\s*#:\s*(?:\d+:\s*)?(.+)$"
)

_DOC_QUOTE = '"""'
_DOC_OPENERS = ('r"""', '"""')

_SOURCE_HEADER = "**C++ Source:**"
_SOURCE_FIELD_RE = re.compile(r"^\s*-?\s*\*\*(Plugin|Module|File)\*\*:\s*(\S+)")
_BLANK_RUN_RE = re.compile(r"\n{3,}")


class _ScanState(Enum):
    OUTSIDE_CLASS = "outside-class"
    IN_CLASS_BODY = "in-class-body"
    AWAITING_DOCSTRING = "awaiting-docstring"
    IN_MULTILINE_DOCSTRING = "in-multiline-docstring"


@dataclass
class _Declaration:
    """A recognized class, enum, method or property before synthesis."""

    kind: DocType
    name: str
    owner: str | None = None
    parent: str | None = None
    signature: str | None = None
    value_type: str | None = None
    is_static: bool = False
    is_classmethod: bool = False
    read_only: bool = True
    docstring: str = ""


@dataclass
class _ClassBlock:
    declaration: _Declaration
    start: int
    end: int
    members: list[_Declaration] = field(default_factory=list)
    enum_values: list[tuple[str, str]] = field(default_factory=list)

    @property
    def is_enum(self) -> bool:
        return self.declaration.kind is DocType.ENUM


class _StubScanner:
    """Single pass over one stub document; see the module docstring."""

    def __init__(self, lines: list[str]) -> None:
        self._lines = lines
        self._class_ends = self._class_boundaries()

    def scan(self) -> list[_ClassBlock]:
        blocks: list[_ClassBlock] = []
        state = _ScanState.OUTSIDE_CLASS
        current: _ClassBlock | None = None
        pending: _Declaration | None = None
        doc_lines: list[str] = []

        for idx, line in enumerate(self._lines):
            if idx in self._class_ends:
                if state is _ScanState.IN_MULTILINE_DOCSTRING:
                    # Only reached for a docstring that is never closed.
                    _attach_docstring(pending, doc_lines)
                current = self._open_class(idx)
                pending = current.declaration if current is not None else None
                if current is None:
                    state = _ScanState.OUTSIDE_CLASS
                else:
                    blocks.append(current)
                    state = _ScanState.AWAITING_DOCSTRING
                continue

            if state is _ScanState.OUTSIDE_CLASS or current is None:
                continue

            if state is _ScanState.IN_MULTILINE_DOCSTRING:
                close = line.find(_DOC_QUOTE)
                if close == -1:
                    doc_lines.append(line)
                    continue
                doc_lines.append(line[:close])
                _attach_docstring(pending, doc_lines)
                pending = None
                state = _ScanState.IN_CLASS_BODY
                continue

            if state is _ScanState.AWAITING_DOCSTRING:
                opened = _open_docstring(line)
                pending_decl, pending = pending, None
                state = _ScanState.IN_CLASS_BODY
                if opened is not None:
                    close = opened.find(_DOC_QUOTE)
                    if close != -1:
                        _attach_docstring(pending_decl, [opened[:close]])
                    else:
                        pending = pending_decl
                        doc_lines = [opened]
                        state = _ScanState.IN_MULTILINE_DOCSTRING
                    continue

            # IN_CLASS_BODY
            if current.is_enum:
                member = _ENUM_MEMBER_RE.match(line)
                if member is not None:
                    current.enum_values.append((member.group(1), member.group(2).strip()))
                continue

            if _DEF_LINE_RE.match(line) is None:
                continue
            state = _ScanState.AWAITING_DOCSTRING
            pending = self._member(current, idx)
            if pending is not None:
                current.members.append(pending)

        if state is _ScanState.IN_MULTILINE_DOCSTRING:
            # Unterminated docstring: keep everything up to end of input.
            _attach_docstring(pending, doc_lines)

        return blocks

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _class_boundaries(self) -> dict[int, int]:
        """Map each column-0 ``class`` line to the end of its span.

        A ``class`` line inside a docstring that is closed later is text,
        not a boundary.  Inside an unterminated docstring it still starts a
        new span.
        """
        quote_lines = [i for i, line in enumerate(self._lines) if line.count(_DOC_QUOTE) % 2]
        starts: list[int] = []
        for i, line in enumerate(self._lines):
            if _CLASS_BOUNDARY_RE.match(line) is None:
                continue
            opened = bisect.bisect_left(quote_lines, i)
            if opened % 2 and opened < len(quote_lines):
                continue
            starts.append(i)
        ends = starts[1:] + [len(self._lines)]
        return dict(zip(starts, ends))

    def _open_class(self, idx: int) -> _ClassBlock | None:
        match = _CLASS_RE.match(self._lines[idx])
        if match is None:
            return None
        parents = match.group(2)
        parent = parents.split(",")[0].strip() if parents else ""
        kind = DocType.ENUM if parent == ENUM_SENTINEL else DocType.CLASS
        declaration = _Declaration(kind=kind, name=match.group(1), parent=parent or None)
        return _ClassBlock(declaration=declaration, start=idx, end=self._class_ends[idx])

    def _member(self, block: _ClassBlock, idx: int) -> _Declaration | None:
        """Classify the ``def`` at *idx*; ``None`` means it yields no chunk."""
        line = self._lines[idx]
        owner = block.declaration.name
        decorators = self._decorators_above(idx, block.start)

        if "property" in decorators:
            prop = _PROPERTY_RE.match(line)
            if prop is None:
                return None
            name = prop.group(1)
            has_setter = self._has_setter(name, idx + 1, min(idx + _SETTER_WINDOW, block.end))
            return _Declaration(
                kind=DocType.PROPERTY,
                name=name,
                owner=owner,
                value_type=prop.group(2).strip(),
                read_only=not has_setter,
            )

        # Setters and deleters are folded into their property.
        if any(d.endswith((".setter", ".deleter")) for d in decorators):
            return None

        method = _METHOD_RE.match(line)
        if method is None:
            return None
        name = method.group(1)
        if name.startswith("_") and name not in _ALLOWED_PRIVATE_METHODS:
            return None
        return_type = (method.group(3) or "").strip() or "None"
        return _Declaration(
            kind=DocType.METHOD,
            name=name,
            owner=owner,
            signature=f"{name}({method.group(2)}) -> {return_type}",
            is_static="staticmethod" in decorators,
            is_classmethod="classmethod" in decorators,
        )

    def _decorators_above(self, idx: int, floor: int) -> set[str]:
        """Decorator names on the contiguous lines directly above *idx*."""
        names: set[str] = set()
        j = idx - 1
        while j > floor:
            match = _DECORATOR_RE.match(self._lines[j])
            if match is None:
                break
            names.add(match.group(1))
            j -= 1
        return names

    def _has_setter(self, name: str, start: int, stop: int) -> bool:
        marker = f"@{name}.setter"
        return any(marker in self._lines[j] for j in range(start, stop))


def _open_docstring(line: str) -> str | None:
    """Return the text after an opening quote marker, or ``None``."""
    stripped = line.strip()
    for opener in _DOC_OPENERS:
        if stripped.startswith(opener):
            return stripped[len(opener):]
    return None


def _attach_docstring(declaration: _Declaration | None, doc_lines: list[str]) -> None:
    if declaration is None or not doc_lines:
        return
    first = doc_lines[0].strip()
    rest = textwrap.dedent("\n".join(doc_lines[1:]))
    declaration.docstring = f"{first}\n{rest}".strip()


def split_source_location(docstring: str) -> tuple[str, str]:
    """Remove the ``**C++ Source:**`` block from *docstring*.

    Returns ``(cleaned_docstring, location)`` where *location* reads like
    ``"Module: Engine, File: Actor.h"`` (empty when there was no block).
    """
    kept: list[str] = []
    fields: list[str] = []
    in_block = False
    for line in docstring.split("\n"):
        stripped = line.strip()
        if stripped.startswith(_SOURCE_HEADER):
            in_block = True
            continue
        if in_block:
            match = _SOURCE_FIELD_RE.match(line)
            if match is not None:
                fields.append(f"{match.group(1)}: {match.group(2)}")
                continue
            if not stripped:
                continue
            in_block = False
        kept.append(line)
    cleaned = _BLANK_RUN_RE.sub("\n\n", "\n".join(kept)).strip()
    return cleaned, ", ".join(fields)


# ---------------------------------------------------------------------------
# Content synthesis
# ---------------------------------------------------------------------------

def _class_content(block: _ClassBlock) -> str:
    decl = block.declaration
    doc, location = split_source_location(decl.docstring)
    header = [f"# {decl.name}"]
    if decl.parent is not None:
        header.append(f"Inherits from: {decl.parent}")
    if location:
        header.append(f"C++ Source: {location}")
    parts = ["\n".join(header)]
    if doc:
        parts.append(doc)
    if block.is_enum and block.enum_values:
        values = "\n".join(f"  {name}: {description}" for name, description in block.enum_values)
        parts.append(f"Values:\n{values}")
    return "\n\n".join(parts)


def _method_content(decl: _Declaration) -> str:
    meta = [f"Signature: {decl.signature}"]
    if decl.is_classmethod:
        meta.append("Type: classmethod")
    elif decl.is_static:
        meta.append("Type: staticmethod")
    parts = [f"# {decl.owner}.{decl.name}", "\n".join(meta)]
    doc, _ = split_source_location(decl.docstring)
    if doc:
        parts.append(doc)
    return "\n\n".join(parts)


def _property_content(decl: _Declaration) -> str:
    access = "[Read-Only]" if decl.read_only else "[Read-Write]"
    parts = [f"# {decl.owner}.{decl.name}", f"Type: {decl.value_type} {access}"]
    doc, _ = split_source_location(decl.docstring)
    if doc:
        parts.append(doc)
    return "\n\n".join(parts)


class StubFileRecognizer(IRecognizer):
    """Extracts classes, enums, methods and properties from stub source."""

    doc_format = DocFormat.STUB_FILE

    def parse(
        self,
        text: str,
        source: DocSource,
        version: str | None = None,
    ) -> list[DocumentChunk]:
        source = DocSource(source)
        lines = text.replace("\r\n", "\n").split("\n")
        blocks = _StubScanner(lines).scan()

        chunks: list[DocumentChunk] = []
        seen: set[str] = set()
        counts = {DocType.CLASS: 0, DocType.ENUM: 0, DocType.METHOD: 0, DocType.PROPERTY: 0}

        def emit(chunk: DocumentChunk) -> None:
            if chunk.id in seen:
                logger.debug("stub_duplicate_declaration_skipped", chunk_id=chunk.id)
                return
            seen.add(chunk.id)
            counts[chunk.type] += 1
            chunks.append(chunk)

        for block in blocks:
            decl = block.declaration
            if decl.name.startswith("_"):
                continue
            emit(
                DocumentChunk(
                    id=f"{source.value}:{decl.kind.value}:{decl.name}",
                    source=source,
                    type=decl.kind,
                    name=decl.name,
                    content=_class_content(block),
                    version=version,
                )
            )
            for member in block.members:
                if member.kind is DocType.PROPERTY:
                    content = _property_content(member)
                else:
                    content = _method_content(member)
                emit(
                    DocumentChunk(
                        id=f"{source.value}:{member.kind.value}:{member.owner}.{member.name}",
                        source=source,
                        type=member.kind,
                        name=member.name,
                        parent_name=member.owner,
                        content=content,
                        signature=member.signature,
                        version=version,
                    )
                )

        logger.info(
            "stub_file_parsed",
            source=source.value,
            classes=counts[DocType.CLASS],
            enums=counts[DocType.ENUM],
            methods=counts[DocType.METHOD],
            properties=counts[DocType.PROPERTY],
        )
        return chunks
