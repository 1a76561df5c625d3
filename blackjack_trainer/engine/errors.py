"""
Exception types raised by the blackjack engine.

Two families:
    Recoverable — StrategyDecodeError (and subclasses), CursorOutOfBoundsError.
                  Returned to the caller as typed errors; the caller decides.
    Fatal       — RuleInvariantError (and ShoeExhaustedError). A simulation
                  rule has been violated; the current operation must abort.
"""

from __future__ import annotations


class StrategyDecodeError(ValueError):
    """Raw strategy bytes could not be decoded."""


class StrategyLengthError(StrategyDecodeError):
    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"expected strategy length to be {expected}, got {actual}"
        )


class StrategyParseError(StrategyDecodeError):
    def __init__(self, field: str, raw: bytes, reason: str) -> None:
        self.field = field
        self.raw = raw
        super().__init__(f"could not parse {field} {raw!r}: {reason}")


class CursorOutOfBoundsError(IndexError):
    """Advancing the shoe cursor would move it past the last card."""

    def __init__(self, cursor: int, offset: int, size: int) -> None:
        self.cursor = cursor
        self.offset = offset
        self.size = size
        super().__init__(
            f"Shoe cursor out of bounds. Shoe of size {size} had cursor at "
            f"{cursor}, and received offset of {offset}"
        )


class RuleInvariantError(RuntimeError):
    """A foundational game rule was violated (programming or config defect)."""


class ShoeExhaustedError(RuleInvariantError):
    """A card was requested past the end of the shoe in the middle of a round."""
