"""
bem: a parser for the BEM (Block, Element, Modifier) notation.

This package provides tools for:
- Parsing BEM notation text into Block/Element structures
- Serializing those structures to JSON and back
- Rendering them back to canonical BEM notation
"""

__version__ = "0.2.7"

from bem.parsers.notation import (  # noqa: E402
    Block,
    Element,
    BEMSyntaxError,
    parse,
    parse_file,
    serialize,
    to_json,
    from_json,
)

__all__ = [
    "__version__",
    "Block",
    "Element",
    "BEMSyntaxError",
    "parse",
    "parse_file",
    "serialize",
    "to_json",
    "from_json",
]
