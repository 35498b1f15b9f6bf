"""
Lark-based parser for BEM notation.

Usage:
    parser = BEMParser()
    block = parser.parse(bem_text)
"""

from dataclasses import replace
from pathlib import Path
from typing import Optional

from lark import Lark, Token, Transformer, Tree, v_args
from lark.exceptions import (
    LarkError,
    UnexpectedCharacters,
    UnexpectedInput,
    UnexpectedToken,
    VisitError,
)

from bem.exceptions import InvariantViolationError
from bem.log import get_logger

from .ast import Block, Element, SourceLocation
from .errors import BEMParseError, BEMSyntaxError, line_column


logger = get_logger(__name__)

# Path to grammar file (relative to this module)
GRAMMAR_PATH = Path(__file__).parent / "grammar.lark"

NAME_TERMINALS = frozenset({"LOWER", "DIGIT", "DASH"})


def _is_name(value) -> bool:
    """A reduced name node: a plain string, never a raw token."""
    return isinstance(value, str) and not isinstance(value, Token)


class ASTTransformer(Transformer):
    """
    Transforms the Lark parse tree into a Block.

    Each method corresponds to a grammar rule. The grammar already guarantees
    the shape of every node, so any surprise here is a defect and raises
    InvariantViolationError instead of being patched over.

    With the source text, node positions are derived from character offsets
    so that they agree with syntax errors on what counts as a line break.
    """

    def __init__(self, source: Optional[str] = None):
        super().__init__()
        self._source = source

    def _get_location(self, meta) -> Optional[SourceLocation]:
        """Extract source location from Lark meta information."""
        if not hasattr(meta, "line"):
            return None
        if self._source is None:
            return SourceLocation(
                line=meta.line,
                column=meta.column,
                offset=getattr(meta, "start_pos", None),
                end_line=getattr(meta, "end_line", None),
                end_column=getattr(meta, "end_column", None),
            )

        line, column = line_column(self._source, meta.start_pos)
        end_line, end_column = line_column(self._source, meta.end_pos)
        return SourceLocation(
            line=line,
            column=column,
            offset=meta.start_pos,
            end_line=end_line,
            end_column=end_column,
        )

    def __default__(self, data, children, meta):
        raise InvariantViolationError(f"Unexpected rule in parse tree: {data!r}")

    # --- Top-level ---

    def start(self, items):
        """Attach element nodes to the block node."""
        if not items or not isinstance(items[0], Block):
            raise InvariantViolationError(
                f"Parse tree does not start with a block: {items!r}"
            )

        block, elements = items[0], items[1:]
        for item in elements:
            if not isinstance(item, Element):
                raise InvariantViolationError(
                    f"Unexpected node after block: {item!r}"
                )

        return replace(block, elements=tuple(elements))

    # --- Lines ---

    @v_args(meta=True)
    def block(self, meta, items):
        name, modifiers = self._split_line("block", items)
        return Block(name=name, modifiers=modifiers, location=self._get_location(meta))

    @v_args(meta=True)
    def element(self, meta, items):
        name, modifiers = self._split_line("element", items)
        return Element(
            name=name, modifiers=modifiers, location=self._get_location(meta)
        )

    def _split_line(self, rule: str, items) -> tuple[str, tuple[str, ...]]:
        """Unpack ``name modifiers?`` children."""
        if len(items) == 1 and _is_name(items[0]):
            return items[0], ()
        if len(items) == 2 and _is_name(items[0]) and isinstance(items[1], tuple):
            return items[0], items[1]
        raise InvariantViolationError(f"Malformed {rule} node: {items!r}")

    # --- Names ---

    def modifiers(self, items):
        if not items or not all(_is_name(item) for item in items):
            raise InvariantViolationError(f"Malformed modifiers node: {items!r}")
        return tuple(items)

    def name(self, tokens):
        if not tokens:
            raise InvariantViolationError("Empty name node")
        for token in tokens:
            if not isinstance(token, Token) or token.type not in NAME_TERMINALS:
                raise InvariantViolationError(f"Unexpected token in name: {token!r}")
        return "".join(tokens)


class BEMParser:
    """
    Main parser class for BEM notation.

    Example:
        parser = BEMParser()
        try:
            block = parser.parse(bem_text)
        except BEMSyntaxError as e:
            print(f"Parse error: {e}")
    """

    def __init__(self, grammar_path: Optional[Path] = None):
        """
        Initialize parser with grammar.

        Args:
            grammar_path: Optional path to grammar file. Uses default if not provided.
        """
        grammar_file = grammar_path or GRAMMAR_PATH
        with open(grammar_file, "r") as f:
            grammar_text = f.read()

        self._lark = Lark(
            grammar_text,
            start="start",
            parser="lalr",  # Deterministic; conflicts are rejected at build time
            lexer="contextual",  # Per-state expectations for error messages
            propagate_positions=True,
            maybe_placeholders=False,
        )

    def parse_tree(self, text: str) -> Tree:
        """
        Match text against the grammar and return the concrete parse tree.

        Raises:
            BEMSyntaxError: If the grammar cannot match the whole text.
            BEMParseError: For other parsing errors.
        """
        try:
            return self._lark.parse(text)
        except UnexpectedInput as e:
            error = BEMSyntaxError.from_lark_error(
                e, text, accepted=self._accepted_terminals(text)
            )
            logger.debug(
                "bem_syntax_error",
                offset=error.offset,
                line=error.line,
                column=error.column,
            )
            raise error from None
        except LarkError as e:
            raise BEMParseError(str(e))

    def _accepted_terminals(self, text: str) -> set[str]:
        """
        Replay a failed parse and ask the last good parser state what it accepts.

        The state is checkpointed before each token is fed, because a rejected
        token may already have triggered reductions.
        """
        interactive = self._lark.parse_interactive(text)
        tokens = self._lark.lex(text)
        last_token = None

        while True:
            try:
                token = next(tokens)
            except StopIteration:
                break
            except UnexpectedCharacters:
                return interactive.accepts()

            checkpoint = interactive.copy()
            try:
                interactive.feed_token(token)
            except UnexpectedToken:
                return checkpoint.accepts()
            last_token = token

        checkpoint = interactive.copy()
        try:
            interactive.feed_eof(last_token)
        except UnexpectedToken:
            return checkpoint.accepts()
        return set()

    def reduce(self, tree: Tree, source: Optional[str] = None) -> Block:
        """
        Fold a concrete parse tree into a Block.

        Args:
            tree: A tree produced by ``parse_tree``.
            source: The parsed text, used to compute node line/column.

        Raises:
            InvariantViolationError: If the tree has a shape the grammar never produces.
        """
        try:
            return ASTTransformer(source).transform(tree)
        except VisitError as e:
            if isinstance(e.orig_exc, InvariantViolationError):
                raise e.orig_exc from None
            raise InvariantViolationError(
                f"Parse tree could not be reduced: {e.orig_exc}"
            ) from e.orig_exc

    def parse(self, text: str) -> Block:
        """
        Parse BEM text into a Block.

        Args:
            text: The BEM source text to parse. It is not trimmed.

        Returns:
            The Block with its modifiers and elements in source order.

        Raises:
            BEMSyntaxError: If the text contains syntax errors.
            BEMParseError: For other parsing errors.
        """
        block = self.reduce(self.parse_tree(text), text)
        logger.debug(
            "bem_parsed",
            block=block.name,
            modifiers=len(block.modifiers),
            elements=len(block.elements),
        )
        return block

    def parse_file(self, filepath: Path) -> Block:
        """Parse a BEM file."""
        with open(filepath, "r", encoding="utf-8") as f:
            return self.parse(f.read())
