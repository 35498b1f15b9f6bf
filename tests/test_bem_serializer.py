"""Tests for BEM text and JSON serialization."""

import json
from concurrent.futures import ThreadPoolExecutor

import pytest

from bem.parsers.notation import (
    BEMSerializer,
    from_dict,
    from_json,
    parse,
    serialize,
    to_dict,
    to_json,
)
from bem.parsers.notation.ast import Block, Element
from bem.parsers.notation.errors import BEMDecodeError


class TestBEMSerializer:
    """Test rendering blocks back to BEM notation."""

    def test_serialize_full_document(self, sample_bem_valid):
        """Test the canonical text form."""
        block = parse(sample_bem_valid)

        assert serialize(block) == sample_bem_valid + "\n"

    def test_serialize_without_trailing_newline(self, sample_bem_valid):
        serializer = BEMSerializer(trailing_newline=False)

        assert serializer.serialize(parse(sample_bem_valid)) == sample_bem_valid

    def test_serialize_block_only(self):
        assert serialize(Block(name="a-b-c")) == "a-b-c\n"

    def test_round_trip(self):
        """Test parse(serialize(parse(x))) == parse(x)."""
        documents = [
            "a",
            "b(x|x)\ne\ne(y|y)",
            "block\r\nelem(b|c)\r\n\r\n",
            "media-player(dark|light)\nbutton(fast-forward|rewind)\ntimeline\n\n",
        ]

        for text in documents:
            block = parse(text)
            assert parse(serialize(block)) == block

    def test_serialize_constructed_block(self):
        """Test serializing a block built in code."""
        block = Block(
            name="card",
            modifiers=["featured"],
            elements=[Element(name="title", modifiers=["large", "bold"])],
        )

        assert serialize(block) == "card(featured)\ntitle(large|bold)\n"
        assert parse(serialize(block)) == block

    def test_serialize_to_file(self, tmp_path, sample_bem_valid):
        path = tmp_path / "out.bem"
        BEMSerializer().serialize_to_file(parse(sample_bem_valid), str(path))

        assert path.read_text(encoding="utf-8") == sample_bem_valid + "\n"

    def test_concurrent_serialization(self):
        """Test that one shared serializer keeps outputs apart across threads."""
        blocks = [
            Block(
                name=f"block-{i}",
                elements=[Element(name=f"e{i}-{j}", modifiers=[f"m{j}"]) for j in range(200)],
            )
            for i in range(16)
        ]
        expected = [
            "\n".join([block.name] + [f"{e.name}({e.modifiers[0]})" for e in block.elements]) + "\n"
            for block in blocks
        ]

        serializer = BEMSerializer(trailing_newline=True)
        with ThreadPoolExecutor(max_workers=8) as pool:
            texts = list(pool.map(serializer.serialize, blocks))

        assert texts == expected


class TestJSONSerialization:
    """Test the JSON form of a block."""

    def test_to_json(self, sample_bem_valid, sample_bem_json):
        assert to_json(parse(sample_bem_valid)) == sample_bem_json

    def test_from_json(self, sample_bem_valid, sample_bem_json):
        assert from_json(sample_bem_json) == parse(sample_bem_valid)

    def test_json_round_trip(self):
        documents = ["a", "a(b)", "b(x|x)\ne\ne(y|y)", "x-1(y-2|z-3)\nw(v)"]

        for text in documents:
            block = parse(text)
            assert from_json(to_json(block)) == block

    def test_empty_sequences_are_written(self):
        """Test that empty lists are never omitted."""
        data = json.loads(to_json(parse("block\nelement")))

        assert data == {
            "name": "block",
            "modifiers": [],
            "elements": [{"name": "element", "modifiers": []}],
        }

    def test_indent(self):
        output = to_json(parse("block"), indent=2)

        assert output.startswith('{\n  "name": "block"')

    def test_to_dict(self, sample_bem_valid):
        data = to_dict(parse(sample_bem_valid))

        assert data["name"] == "media-player"
        assert data["modifiers"] == ["dark"]
        assert data["elements"][0] == {
            "name": "button",
            "modifiers": ["fast-forward", "rewind"],
        }

    def test_from_dict(self):
        block = from_dict({"name": "a", "modifiers": ["b"], "elements": []})

        assert block == Block(name="a", modifiers=["b"])
        assert isinstance(block.modifiers, tuple)

    def test_missing_fields_rejected(self):
        """Test that field presence is required."""
        cases = [
            '{"name":"a","modifiers":[]}',
            '{"name":"a","elements":[]}',
            '{"modifiers":[],"elements":[]}',
            '{"name":"a","modifiers":[],"elements":[{"name":"b"}]}',
        ]

        for text in cases:
            with pytest.raises(BEMDecodeError):
                from_json(text)

    def test_invalid_names_rejected(self):
        cases = [
            '{"name":"Block","modifiers":[],"elements":[]}',
            '{"name":"a","modifiers":["a--b"],"elements":[]}',
            '{"name":"a","modifiers":[],"elements":[{"name":"-b","modifiers":[]}]}',
            '{"name":"a","modifiers":[],"elements":[{"name":"b","modifiers":[""]}]}',
        ]

        for text in cases:
            with pytest.raises(BEMDecodeError):
                from_json(text)

    def test_unknown_fields_rejected(self):
        with pytest.raises(BEMDecodeError):
            from_json('{"name":"a","modifiers":[],"elements":[],"extra":1}')

    def test_malformed_json(self):
        with pytest.raises(BEMDecodeError) as excinfo:
            from_json("{")

        assert excinfo.value.errors
