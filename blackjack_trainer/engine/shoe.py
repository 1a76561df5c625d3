"""
Multi-deck shoe with cursor-based dealing and penetration-triggered reshuffles.

The shoe is a fixed list of decks × 52 cards and a cursor marking the next
undealt card. Dealing never removes cards: callers peek ahead of the
cursor and then advance it by however many cards the round consumed.

    build    -> decks × (4 suits × 13 ranks), ordered
    shuffle  -> Fisher–Yates, cut (back half to front), Fisher–Yates again;
                cursor back to 0, reshuffle flag cleared
    advance  -> cursor moves forward only; crossing the penetration index
                raises the reshuffle flag
"""

from __future__ import annotations

import math

from blackjack_trainer.randomizer import Randomizer

from .cards import RANKS, SUITS, Card
from .errors import CursorOutOfBoundsError, ShoeExhaustedError

CARDS_PER_DECK: int = 52
DEFAULT_PENETRATION: float = 0.75


def build_cards(decks: int) -> list[Card]:
    """Return decks × 52 cards in suit-then-rank order.

    Examples:
        >>> len(build_cards(2))
        104
    """
    return [Card(rank, suit) for _ in range(decks) for suit in SUITS for rank in RANKS]


def _fisher_yates(cards: list[Card], randomizer: Randomizer) -> None:
    for i in range(len(cards) - 1, 0, -1):
        j = randomizer.number_between(0, i)
        cards[i], cards[j] = cards[j], cards[i]


class Shoe:
    """A shuffled multi-deck shoe.

    Args:
        decks: Number of 52-card decks.
        randomizer: Random source used for every shuffle.
        penetration: Fraction of the shoe dealt before a reshuffle is required.
        shuffle: If False, leave the cards in build order (deterministic tests).
    """

    def __init__(
        self,
        decks: int,
        randomizer: Randomizer,
        penetration: float = DEFAULT_PENETRATION,
        shuffle: bool = True,
    ) -> None:
        if decks < 1:
            raise ValueError(f"A shoe needs at least one deck, got {decks}.")
        self.decks = decks
        self._randomizer = randomizer
        self._cards: list[Card] = build_cards(decks)
        self._cursor = 0
        self._needs_reshuffle = False
        self.set_penetration(penetration)
        if shuffle:
            self.shuffle()

    @classmethod
    def from_cards(
        cls,
        cards: list[Card],
        randomizer: Randomizer,
        penetration: float = 1.0,
    ) -> Shoe:
        """Build a shoe holding exactly the given cards, in order.

        Used for deterministic table setups.
        """
        shoe = cls(1, randomizer, penetration=penetration, shuffle=False)
        shoe._cards = list(cards)
        shoe.set_penetration(penetration)
        return shoe

    # ── Inspection ───────────────────────────────────────────────────────────

    @property
    def size(self) -> int:
        return len(self._cards)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def cards(self) -> tuple[Card, ...]:
        return tuple(self._cards)

    @property
    def penetration_index(self) -> int:
        return self._penetration_index

    @property
    def needs_reshuffle(self) -> bool:
        return self._needs_reshuffle

    @property
    def remaining(self) -> int:
        return len(self._cards) - self._cursor

    def peek(self, count: int) -> list[Card]:
        """Return up to count cards from the cursor, truncated at the end of the shoe."""
        end = min(self._cursor + count, len(self._cards))
        return self._cards[self._cursor:end]

    def peek_at_index(self, index: int) -> Card:
        """Return the card index places past the cursor.

        Raises:
            ShoeExhaustedError: If that position is past the end of the shoe.
        """
        position = self._cursor + index
        if index < 0 or position >= len(self._cards):
            raise ShoeExhaustedError(
                f"No card at offset {index} from cursor {self._cursor} "
                f"in a shoe of size {len(self._cards)}"
            )
        return self._cards[position]

    # ── Mutation ─────────────────────────────────────────────────────────────

    def advance_cursor(self, offset: int) -> int:
        """Move the cursor forward by offset and return its new position.

        Raises:
            CursorOutOfBoundsError: If the advance would pass the end of the
                shoe. The cursor is left unchanged.
        """
        advance_to = self._cursor + offset
        if offset < 0 or advance_to > len(self._cards):
            raise CursorOutOfBoundsError(self._cursor, offset, len(self._cards))

        self._cursor = advance_to
        if self._cursor >= self._penetration_index:
            self._needs_reshuffle = True
        return self._cursor

    def set_penetration(self, fraction: float) -> None:
        if not 0.0 <= fraction <= 1.0:
            raise ValueError(f"Penetration must be within [0, 1], got {fraction}.")
        self._penetration_index = math.floor(fraction * len(self._cards))

    def shuffle(self) -> None:
        _fisher_yates(self._cards, self._randomizer)

        half = len(self._cards) // 2
        self._cards = self._cards[half:] + self._cards[:half]

        _fisher_yates(self._cards, self._randomizer)

        self._cursor = 0
        self._needs_reshuffle = False
