"""
Hand evaluation: attainable sums, soft/hard scoring, pairs and naturals.

Every ace branches into {1, 11}. Rather than enumerating each branch, the
attainable sums are folded left to right as a set of partial sums, so
four aces cost four set unions instead of sixteen recursive paths.

Of the attainable sums at most two are ever <= 21 (two aces counted as 11
already make 22). Seeing a third is a broken rule, not a game state.
"""

from __future__ import annotations

from typing import Iterable, Iterator, NamedTuple

from .cards import Card, hand_to_str
from .errors import RuleInvariantError

BLACKJACK: int = 21


class HandScore(NamedTuple):
    low: int
    high: int
    busted: bool


class Hand:
    """An ordered, growable sequence of cards."""

    def __init__(self, cards: Iterable[Card] = ()) -> None:
        self._cards: list[Card] = list(cards)

    # ── Sequence protocol ────────────────────────────────────────────────────

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)

    def __getitem__(self, index: int) -> Card:
        return self._cards[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Hand):
            return NotImplemented
        return self._cards == other._cards

    def __repr__(self) -> str:
        return f"Hand({hand_to_str(self._cards)!r})"

    @property
    def cards(self) -> tuple[Card, ...]:
        return tuple(self._cards)

    def copy(self) -> Hand:
        return Hand(self._cards)

    # ── Mutation ─────────────────────────────────────────────────────────────

    def deal(self, card: Card) -> None:
        self._cards.append(card)

    def reveal(self) -> None:
        """Turn every concealed card face up."""
        self._cards = [c.revealed() if c.hole else c for c in self._cards]

    # ── Evaluation ───────────────────────────────────────────────────────────

    def values(self) -> list[int]:
        """Return every attainable sum, sorted and de-duplicated.

        Examples:
            >>> Hand([str_to_card('AS'), str_to_card('AH'), str_to_card('3D')]).values()
            [5, 15, 25]
        """
        sums = {0}
        for card in self._cards:
            sums = {partial + value for partial in sums for value in card.value()}
        return sorted(sums)

    def score(self) -> HandScore:
        """Return (low, high, busted) over the non-bust sums.

        If every sum busts, low/high span all sums and busted is True.

        Raises:
            RuleInvariantError: If more than two sums are <= 21.
        """
        values = self.values()
        not_busted = [v for v in values if v <= BLACKJACK]

        if len(not_busted) > 2:
            raise RuleInvariantError(
                f"A hand should never have more than 2 values, got {not_busted} "
                f"for {hand_to_str(self._cards)}"
            )

        if not_busted:
            return HandScore(min(not_busted), max(not_busted), False)
        return HandScore(min(values), max(values), True)

    def is_busted(self) -> bool:
        return self.score().busted

    def is_pair(self) -> bool:
        """True if the first two cards share a rank."""
        return len(self._cards) >= 2 and self._cards[0].rank == self._cards[1].rank

    def has_soft_value(self) -> bool:
        score = self.score()
        return score.low != score.high

    def is_blackjack(self) -> bool:
        """Two cards scoring 21, counting any concealed card."""
        if len(self._cards) != 2:
            return False
        return Hand(c.revealed() for c in self._cards).score().high == BLACKJACK
