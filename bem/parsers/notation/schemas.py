"""Pydantic schemas for the JSON form of a Block.

Field presence is never optional: empty modifier and element lists are
written as ``[]`` and must be present when decoding.
"""

from typing import Annotated, Any, List, Optional

from pydantic import BaseModel, ConfigDict, StringConstraints, ValidationError

from .ast import NAME_PATTERN, Block, Element
from .errors import BEMDecodeError


Name = Annotated[str, StringConstraints(pattern=f"^{NAME_PATTERN}$")]


class ElementSchema(BaseModel):
    """Schema for an element."""

    model_config = ConfigDict(extra="forbid")

    name: Name
    modifiers: List[Name]

    def to_element(self) -> Element:
        return Element(name=self.name, modifiers=self.modifiers)


class BlockSchema(BaseModel):
    """Schema for a block with its elements."""

    model_config = ConfigDict(extra="forbid")

    name: Name
    modifiers: List[Name]
    elements: List[ElementSchema]

    @classmethod
    def from_block(cls, block: Block) -> "BlockSchema":
        return cls(
            name=block.name,
            modifiers=list(block.modifiers),
            elements=[
                ElementSchema(name=e.name, modifiers=list(e.modifiers))
                for e in block.elements
            ],
        )

    def to_block(self) -> Block:
        return Block(
            name=self.name,
            modifiers=self.modifiers,
            elements=[e.to_element() for e in self.elements],
        )


def _decode_error(error: ValidationError) -> BEMDecodeError:
    details = [
        f"{'.'.join(str(part) for part in err['loc']) or '<root>'}: {err['msg']}"
        for err in error.errors()
    ]
    return BEMDecodeError("Invalid BEM block data", details)


def to_dict(block: Block) -> dict[str, Any]:
    """Convert a Block into plain dicts and lists."""
    return BlockSchema.from_block(block).model_dump()


def from_dict(data: Any) -> Block:
    """Build a Block from plain dicts and lists.

    Raises:
        BEMDecodeError: If a field is missing, unknown or not a valid name.
    """
    try:
        return BlockSchema.model_validate(data).to_block()
    except ValidationError as e:
        raise _decode_error(e) from e


def to_json(block: Block, indent: Optional[int] = None) -> str:
    """Convert a Block into a JSON string.

    Example:
        >>> to_json(Block(name="media-player"))
        '{"name":"media-player","modifiers":[],"elements":[]}'
    """
    return BlockSchema.from_block(block).model_dump_json(indent=indent)


def from_json(json: str) -> Block:
    """Convert a JSON string into a Block.

    Raises:
        BEMDecodeError: If the JSON is malformed or does not describe a valid block.
    """
    try:
        return BlockSchema.model_validate_json(json).to_block()
    except ValidationError as e:
        raise _decode_error(e) from e
