"""Unit tests for the stub-file recognizer."""

from __future__ import annotations

import pytest

from docharvest.models.chunk import DocSource, DocType, find_duplicate_ids
from docharvest.services.ingestion.recognizers.stub_file import (
    StubFileRecognizer,
    split_source_location,
)


def _parse(text: str, version: str | None = None):
    return StubFileRecognizer().parse(text, DocSource.UNREAL_PYTHON, version)


def _by_id(chunks):
    return {c.id: c for c in chunks}


class TestClassChunks:
    """Class declarations and their docstrings."""

    def test_single_line_docstring_attached(self) -> None:
        chunks = _parse('class Foo:\n    """Short text."""\n')
        assert len(chunks) == 1
        assert chunks[0].id == "unreal-python:class:Foo"
        assert chunks[0].type is DocType.CLASS
        assert "Short text." in chunks[0].content

    def test_class_without_docstring_still_emitted(self) -> None:
        chunks = _parse("class Bare(Object):\n    def run(self) -> None:\n        ...\n")
        ids = [c.id for c in chunks]
        assert ids == ["unreal-python:class:Bare", "unreal-python:method:Bare.run"]
        assert chunks[0].content == "# Bare\nInherits from: Object"

    def test_source_location_rendered_and_stripped(self, sample_stub: str) -> None:
        actor = _by_id(_parse(sample_stub))["unreal-python:class:Actor"]
        assert actor.content.startswith(
            "# Actor\nInherits from: Object\nC++ Source: Module: Engine, File: Actor.h"
        )
        assert "**C++ Source:**" not in actor.content
        assert "**Module**" not in actor.content
        assert "Actor is the base class" in actor.content

    def test_private_class_and_its_members_skipped(self, sample_stub: str) -> None:
        chunks = _parse(sample_stub)
        assert all("_PrivateHelper" not in c.id for c in chunks)

    def test_unterminated_docstring_kept_to_end(self) -> None:
        chunks = _parse('class Open:\n    """\n    Never closed.\n    Still going.\n')
        assert "Never closed.\nStill going." in chunks[0].content

    def test_class_line_inside_docstring_is_text(self) -> None:
        text = (
            "class Doc:\n"
            '    """\n'
            "class NotAClass:\n"
            "    still docs\n"
            '    """\n'
            "    def run(self) -> None:\n"
            "        ...\n"
        )
        chunks = _parse(text)
        assert [c.id for c in chunks] == [
            "unreal-python:class:Doc",
            "unreal-python:method:Doc.run",
        ]
        assert "class NotAClass:" in chunks[0].content

    def test_empty_docstring_is_not_content(self) -> None:
        chunks = _parse('class Empty:\n    """"""\n')
        assert chunks[0].content == "# Empty"


class TestEnumChunks:
    """Classes deriving from the enum sentinel become enum chunks."""

    def test_enum_member_values_listed(self) -> None:
        text = "class Foo(EnumBase):\n    RED: Foo = ... #: 0: the color red\n"
        chunks = _parse(text)
        assert len(chunks) == 1
        assert chunks[0].type is DocType.ENUM
        assert chunks[0].id == "unreal-python:enum:Foo"
        assert "RED: the color red" in chunks[0].content

    def test_enum_in_sample(self, sample_stub: str) -> None:
        enum = _by_id(_parse(sample_stub))["unreal-python:enum:CollisionChannel"]
        assert "Values:\n  WORLD_STATIC: Static world geometry\n" in enum.content
        assert "WORLD_DYNAMIC: Moving world geometry" in enum.content
        assert "Enum indicating different types" in enum.content

    def test_enum_members_are_not_chunks(self, sample_stub: str) -> None:
        chunks = _parse(sample_stub)
        assert not any("WORLD_STATIC" in c.id for c in chunks)


class TestMemberChunks:
    """Methods and properties inside class bodies."""

    def test_sample_order_and_counts(self, sample_stub: str) -> None:
        chunks = _parse(sample_stub)
        assert [c.id for c in chunks] == [
            "unreal-python:class:EnumBase",
            "unreal-python:class:Object",
            "unreal-python:method:Object.get_name",
            "unreal-python:class:Actor",
            "unreal-python:method:Actor.__init__",
            "unreal-python:property:Actor.hidden",
            "unreal-python:property:Actor.root",
            "unreal-python:method:Actor.static_class",
            "unreal-python:method:Actor.spawn",
            "unreal-python:method:Actor.destroy",
            "unreal-python:enum:CollisionChannel",
        ]

    def test_no_duplicate_ids(self, sample_stub: str) -> None:
        assert find_duplicate_ids(_parse(sample_stub)) == []

    def test_method_fields(self, sample_stub: str) -> None:
        destroy = _by_id(_parse(sample_stub, version="5.6"))["unreal-python:method:Actor.destroy"]
        assert destroy.name == "destroy"
        assert destroy.parent_name == "Actor"
        assert destroy.signature == "destroy(self) -> bool"
        assert destroy.version == "5.6"
        assert destroy.content == (
            "# Actor.destroy\n\nSignature: destroy(self) -> bool\n\nDestroys this actor."
        )

    def test_private_methods_skipped_except_allow_list(self, sample_stub: str) -> None:
        ids = _by_id(_parse(sample_stub))
        assert "unreal-python:method:Actor.__init__" in ids
        assert "unreal-python:method:Actor._internal" not in ids

    def test_missing_return_annotation_renders_none(self) -> None:
        chunks = _parse("class A:\n    def go(self, x: int):\n        ...\n")
        assert chunks[1].signature == "go(self, x: int) -> None"

    def test_staticmethod_tag_not_carried_to_next_method(self) -> None:
        text = (
            "class A:\n"
            "    @staticmethod\n"
            "    def first() -> int:\n"
            "        ...\n"
            "    def second(self) -> int:\n"
            "        ...\n"
        )
        ids = _by_id(_parse(text))
        assert "Type: staticmethod" in ids["unreal-python:method:A.first"].content
        assert "staticmethod" not in ids["unreal-python:method:A.second"].content

    def test_classmethod_tag(self, sample_stub: str) -> None:
        method = _by_id(_parse(sample_stub))["unreal-python:method:Actor.static_class"]
        assert "Type: classmethod" in method.content

    def test_property_read_write_when_setter_follows(self, sample_stub: str) -> None:
        ids = _by_id(_parse(sample_stub))
        hidden = ids["unreal-python:property:Actor.hidden"]
        assert hidden.content.startswith("# Actor.hidden\n\nType: bool [Read-Write]")
        assert hidden.signature is None
        root = ids["unreal-python:property:Actor.root"]
        assert "Type: Object [Read-Only]" in root.content

    def test_property_is_never_also_a_method(self, sample_stub: str) -> None:
        ids = _by_id(_parse(sample_stub))
        assert "unreal-python:method:Actor.hidden" not in ids
        assert "unreal-python:method:Actor.root" not in ids


class TestRecognizerContract:
    """Determinism and tolerance of malformed input."""

    def test_deterministic(self, sample_stub: str) -> None:
        first = [c.model_dump() for c in _parse(sample_stub, "5.6")]
        second = [c.model_dump() for c in _parse(sample_stub, "5.6")]
        assert first == second

    @pytest.mark.parametrize(
        "text",
        ["", "\n\n", "def orphan():\n    pass\n", "class\n", "class 1Bad(:\n    pass"],
    )
    def test_malformed_input_degrades(self, text: str) -> None:
        assert _parse(text) == []

    def test_crlf_line_endings(self) -> None:
        chunks = _parse('class Foo:\r\n    """Short text."""\r\n')
        assert chunks[0].content == "# Foo\n\nShort text."

    def test_source_coerced_from_string(self) -> None:
        chunks = StubFileRecognizer().parse('class Foo:\n    """Doc."""\n', "unreal-python")
        assert chunks[0].source is DocSource.UNREAL_PYTHON


class TestSplitSourceLocation:
    """The C++ Source block helper."""

    def test_plugin_module_file(self) -> None:
        doc = (
            "Does things.\n\n**C++ Source:**\n\n- **Plugin**: Niagara\n"
            "- **Module**: NiagaraCore\n- **File**: NiagaraTypes.h"
        )
        cleaned, location = split_source_location(doc)
        assert cleaned == "Does things."
        assert location == "Plugin: Niagara, Module: NiagaraCore, File: NiagaraTypes.h"

    def test_no_block(self) -> None:
        assert split_source_location("Plain text.") == ("Plain text.", "")

    def test_text_after_block_is_kept(self) -> None:
        doc = "Intro.\n\n**C++ Source:**\n\n- **Module**: Engine\n\nTrailing notes."
        cleaned, location = split_source_location(doc)
        assert cleaned == "Intro.\n\nTrailing notes."
        assert location == "Module: Engine"
