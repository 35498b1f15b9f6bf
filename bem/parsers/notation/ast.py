"""
AST node definitions for BEM notation.

The hierarchy:
    ASTNode (abstract base)
    ├── Block (root, owns modifiers and elements)
    └── Element (owns modifiers)

Names (block names, element names and modifiers) are plain strings that
always satisfy ``NAME_PATTERN``; nodes refuse to be built otherwise.
"""

import re
from abc import ABC
from dataclasses import dataclass, field
from typing import Iterable, Optional

from .errors import InvalidNameError


# A lowercase letter, then letters/digits with single dashes between them.
NAME_PATTERN = r"[a-z](?:-?[a-z0-9])*"

_NAME_RE = re.compile(NAME_PATTERN)


def is_valid_name(value: object) -> bool:
    """Check a value against the BEM name shape."""
    return isinstance(value, str) and _NAME_RE.fullmatch(value) is not None


def check_name(value: object, role: str = "name") -> str:
    """Return ``value`` unchanged if it is a valid name, else raise."""
    if not is_valid_name(value):
        raise InvalidNameError(value, role)
    return value


def _check_modifiers(modifiers: Iterable[str], owner: str) -> tuple[str, ...]:
    if isinstance(modifiers, str):
        raise TypeError(f"modifiers of {owner} must be a sequence of names, not a str")
    return tuple(check_name(m, f"modifier of {owner}") for m in modifiers)


@dataclass(frozen=True)
class SourceLocation:
    """Tracks position in source text for error reporting."""

    line: int
    column: int
    offset: Optional[int] = None
    end_line: Optional[int] = None
    end_column: Optional[int] = None

    def __str__(self) -> str:
        if self.end_line and self.end_line != self.line:
            return f"lines {self.line}-{self.end_line}"
        return f"line {self.line}, column {self.column}"


@dataclass(frozen=True, kw_only=True)
class ASTNode(ABC):
    """Abstract base class for all AST nodes."""

    location: Optional[SourceLocation] = field(default=None, compare=False)


@dataclass(frozen=True, kw_only=True)
class Element(ASTNode):
    """An element line beneath the block, e.g. ``button(fast-forward|rewind)``."""

    name: str
    modifiers: tuple[str, ...] = ()

    def __post_init__(self):
        check_name(self.name, "element name")
        object.__setattr__(
            self, "modifiers", _check_modifiers(self.modifiers, f"element '{self.name}'")
        )


@dataclass(frozen=True, kw_only=True)
class Block(ASTNode):
    """Root node: the block line and every element line below it."""

    name: str
    modifiers: tuple[str, ...] = ()
    elements: tuple[Element, ...] = ()

    def __post_init__(self):
        check_name(self.name, "block name")
        object.__setattr__(
            self, "modifiers", _check_modifiers(self.modifiers, f"block '{self.name}'")
        )
        elements = tuple(self.elements)
        for element in elements:
            if not isinstance(element, Element):
                raise TypeError(
                    f"elements of block '{self.name}' must be Element, "
                    f"got {type(element).__name__}"
                )
        object.__setattr__(self, "elements", elements)

    @property
    def element_names(self) -> list[str]:
        """Element names in definition order."""
        return [e.name for e in self.elements]

    def get_element(self, name: str) -> Optional[Element]:
        """First element with the given name, if any."""
        for element in self.elements:
            if element.name == name:
                return element
        return None
