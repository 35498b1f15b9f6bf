"""
BEM notation parser for bem.

This module provides parsing and serialization of the BEM (Block, Element,
Modifier) notation: one block line, optionally followed by element lines,
each with an optional ``(mod1|mod2)`` modifier list.

Quick Start:
    from bem.parsers.notation import parse, serialize, to_json

    # Parse BEM text
    block = parse("media-player(dark)\\nbutton(fast-forward|rewind)\\ntimeline")

    # Serialize back to text
    output = serialize(block)

    # Convert to JSON
    data = to_json(block)
"""

from pathlib import Path

from .ast import (
    NAME_PATTERN,
    Block,
    Element,
    SourceLocation,
    is_valid_name,
)
from .parser import BEMParser
from .serializer import BEMSerializer
from .schemas import BlockSchema, ElementSchema, to_dict, from_dict, to_json, from_json
from .errors import (
    NotationError,
    BEMParseError,
    BEMSyntaxError,
    BEMDecodeError,
    InvalidNameError,
)

# Module-level parser and serializer instances
_parser = None
_serializer = None


def _get_parser() -> BEMParser:
    global _parser
    if _parser is None:
        _parser = BEMParser()
    return _parser


def _get_serializer() -> BEMSerializer:
    global _serializer
    if _serializer is None:
        _serializer = BEMSerializer()
    return _serializer


def parse(text: str) -> Block:
    """Parse BEM text into a Block."""
    return _get_parser().parse(text)


def parse_file(filepath: Path) -> Block:
    """Parse a BEM file."""
    return _get_parser().parse_file(filepath)


def serialize(block: Block) -> str:
    """Serialize a Block back to BEM text."""
    return _get_serializer().serialize(block)


__all__ = [
    # Core functions
    "parse",
    "parse_file",
    "serialize",
    "to_json",
    "from_json",
    "to_dict",
    "from_dict",
    "is_valid_name",
    "NAME_PATTERN",
    # Classes
    "BEMParser",
    "BEMSerializer",
    "BlockSchema",
    "ElementSchema",
    # AST nodes
    "Block",
    "Element",
    "SourceLocation",
    # Errors
    "NotationError",
    "BEMParseError",
    "BEMSyntaxError",
    "BEMDecodeError",
    "InvalidNameError",
]
