"""
Serialize a Block back to BEM notation.

Enables programmatic construction and round-trip editing.
"""

import io
from typing import Optional, Sequence, TextIO

from bem.config import settings

from .ast import Block, Element


class BEMSerializer:
    """
    Serializes a Block back to canonical BEM text.

    Instances hold no per-call state, so one serializer can be shared
    between threads.

    Example:
        serializer = BEMSerializer()
        bem_text = serializer.serialize(block)
    """

    def __init__(self, trailing_newline: Optional[bool] = None):
        if trailing_newline is None:
            trailing_newline = settings.trailing_newline
        self._trailing_newline = trailing_newline

    def serialize(self, block: Block) -> str:
        """Serialize block to a BEM string."""
        output = io.StringIO()
        self._write_block(output, block)
        return output.getvalue()

    def serialize_to_file(self, block: Block, filepath: str):
        """Serialize block to a file."""
        with open(filepath, "w", encoding="utf-8") as f:
            self._write_block(f, block)

    def _write_block(self, output: TextIO, block: Block):
        """Write the block line followed by one line per element."""
        output.write(self._format_line(block.name, block.modifiers))

        for element in block.elements:
            output.write("\n")
            self._write_element(output, element)

        if self._trailing_newline:
            output.write("\n")

    def _write_element(self, output: TextIO, element: Element):
        output.write(self._format_line(element.name, element.modifiers))

    def _format_line(self, name: str, modifiers: Sequence[str]) -> str:
        """Format ``name`` or ``name(mod1|mod2)``."""
        if not modifiers:
            return name
        return f"{name}({'|'.join(modifiers)})"
