"""Custom exceptions for bem."""


class BEMError(Exception):
    """Base exception for bem."""

    pass


class InvariantViolationError(BEMError):
    """A parse tree reached the reducer in a shape the grammar never produces.

    This signals a defect in the grammar/reducer pairing, not a problem with
    the user's input.
    """

    pass
