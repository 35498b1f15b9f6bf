"""
Error types for the BEM notation parser.

Provides detailed, user-friendly error messages with source locations.
"""

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Optional, Sequence

from bem.exceptions import BEMError

if TYPE_CHECKING:
    from .ast import SourceLocation


# Human-readable descriptions of grammar terminals.
TERMINAL_DESCRIPTIONS = {
    "LOWER": "lowercase letter",
    "DIGIT": "digit",
    "DASH": "'-'",
    "_LPAR": "'('",
    "_RPAR": "')'",
    "_PIPE": "'|'",
    "_NL": "newline",
    "$END": "end of input",
}


_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


def describe_terminal(name: str) -> str:
    return TERMINAL_DESCRIPTIONS.get(name, name)


def line_column(source: str, offset: int) -> tuple[int, int]:
    """1-based line and column of a character offset."""
    lines = _LINE_BREAK_RE.split(source[:offset])
    return len(lines), len(lines[-1]) + 1


def context_line_at(source: str, line: int) -> str:
    lines = _LINE_BREAK_RE.split(source)
    return lines[line - 1] if 0 < line <= len(lines) else ""


class NotationError(BEMError):
    """Base class for all notation errors."""

    def __init__(self, message: str, location: Optional["SourceLocation"] = None):
        self.location = location
        super().__init__(message)

    def __str__(self):
        if self.location:
            return f"{self.location}: {self.args[0]}"
        return self.args[0]


class BEMParseError(NotationError):
    """General parsing error."""

    pass


@dataclass
class BEMSyntaxError(NotationError):
    """Syntax error with detailed context.

    ``offset`` is the 0-based character offset of the first point where no
    grammar rule could continue; ``line`` and ``column`` are 1-based.
    """

    message: str
    offset: int
    line: int
    column: int
    context_line: str = ""
    expected: Sequence[str] = ()

    def __init__(
        self,
        message: str,
        offset: int,
        line: int,
        column: int,
        context_line: str = "",
        expected: Sequence[str] = (),
    ):
        self.message = message
        self.offset = offset
        self.line = line
        self.column = column
        self.context_line = context_line
        self.expected = tuple(expected)
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        lines = [
            f"Syntax error at line {self.line}, column {self.column}: {self.message}"
        ]

        if self.context_line:
            lines.append(f"  {self.context_line}")
            lines.append("  " + " " * (self.column - 1) + "^")

        if self.expected:
            expected_str = ", ".join(self.expected[:5])
            if len(self.expected) > 5:
                expected_str += f", ... ({len(self.expected)} options)"
            lines.append(f"  Expected: {expected_str}")

        return "\n".join(lines)

    @classmethod
    def from_lark_error(
        cls, error, source: str, accepted: Optional[Iterable[str]] = None
    ) -> "BEMSyntaxError":
        """Create from a Lark parsing error.

        Args:
            error: The Lark exception.
            source: The text that was being parsed.
            accepted: Terminals the parser could have continued with, if known.
                Lark's own lists come from the raw LALR row, which may hold
                lookaheads that still fail after reductions.
        """
        from lark.exceptions import UnexpectedCharacters, UnexpectedEOF, UnexpectedToken

        if isinstance(error, UnexpectedToken):
            expected = error.expected or ()
            if error.token.type == "$END":
                offset = len(source)
                message = "Unexpected end of input"
            else:
                offset = error.token.start_pos
                message = (
                    "Unexpected newline"
                    if error.token.type == "_NL"
                    else f"Unexpected character {str(error.token)!r}"
                )
        elif isinstance(error, UnexpectedCharacters):
            expected = error.allowed or ()
            offset = error.pos_in_stream
            message = f"Unexpected character {error.char!r}"
        elif isinstance(error, UnexpectedEOF):
            expected = error.expected or ()
            offset = len(source)
            message = "Unexpected end of input"
        else:
            expected = ()
            offset = getattr(error, "pos_in_stream", None) or 0
            message = str(error)

        if accepted:
            expected = accepted

        line, column = line_column(source, offset)
        return cls(
            message=message,
            offset=offset,
            line=line,
            column=column,
            context_line=context_line_at(source, line),
            expected=sorted({describe_terminal(name) for name in expected}),
        )


class InvalidNameError(NotationError, ValueError):
    """A block, element or modifier name does not have the BEM name shape."""

    def __init__(self, value: object, role: str = "name"):
        self.value = value
        self.role = role
        super().__init__(
            f"Invalid {role} {value!r}: names start with a lowercase letter and "
            "contain only lowercase letters, digits and single inner dashes"
        )


class BEMDecodeError(NotationError):
    """Structured data (e.g. JSON) does not describe a valid block."""

    def __init__(self, message: str, errors: Sequence[str] = ()):
        self.errors = list(errors)
        super().__init__(message)

    def __str__(self) -> str:
        msg = self.args[0]
        if self.errors:
            error_list = "\n  - ".join(self.errors)
            msg += f"\n  - {error_list}"
        return msg
