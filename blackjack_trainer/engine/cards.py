"""
Card constants, the Card value type, and human-readable I/O helpers.

Ranks are plain integers 1–13 (1=Ace, 11=J, 12=Q, 13=K). Point values:
    rank >= 10  ->  (10,)
    rank == 1   ->  (1, 11)     ace, resolved by the hand
    otherwise   ->  (rank,)
A concealed (hole) card contributes (0,) until it is revealed.

String representations are <rank><suit>, e.g. 'AS', '10H', 'QD', and are
used at I/O boundaries and in tests.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum


class Suit(Enum):
    SPADES = 0
    HEARTS = 1
    DIAMONDS = 2
    CLUBS = 3


ACE: int = 1
TWO: int = 2
THREE: int = 3
FOUR: int = 4
FIVE: int = 5
SIX: int = 6
SEVEN: int = 7
EIGHT: int = 8
NINE: int = 9
TEN: int = 10
JACK: int = 11
QUEEN: int = 12
KING: int = 13

RANKS: tuple[int, ...] = tuple(range(ACE, KING + 1))
SUITS: tuple[Suit, ...] = (Suit.SPADES, Suit.HEARTS, Suit.DIAMONDS, Suit.CLUBS)

RANK_NAMES: dict[int, str] = {
    ACE: 'A', TWO: '2', THREE: '3', FOUR: '4', FIVE: '5', SIX: '6', SEVEN: '7',
    EIGHT: '8', NINE: '9', TEN: '10', JACK: 'J', QUEEN: 'Q', KING: 'K',
}
SUIT_NAMES: dict[Suit, str] = {
    Suit.SPADES: 'S', Suit.HEARTS: 'H', Suit.DIAMONDS: 'D', Suit.CLUBS: 'C',
}

_RANKS_BY_NAME: dict[str, int] = {name: rank for rank, name in RANK_NAMES.items()}
_SUITS_BY_NAME: dict[str, Suit] = {name: suit for suit, name in SUIT_NAMES.items()}


@dataclass(frozen=True)
class Card:
    """A playing card. Immutable; concealment yields a flagged copy."""
    rank: int
    suit: Suit
    hole: bool = False

    def value(self) -> tuple[int, ...]:
        """Return every point value this card can take.

        Examples:
            >>> Card(ACE, Suit.SPADES).value()
            (1, 11)
            >>> Card(JACK, Suit.HEARTS).value()
            (10,)
            >>> Card(KING, Suit.CLUBS, hole=True).value()
            (0,)
        """
        if self.hole:
            return (0,)
        if self.rank >= TEN:
            return (10,)
        if self.rank == ACE:
            return (1, 11)
        return (self.rank,)

    @property
    def is_ace(self) -> bool:
        return self.rank == ACE

    def concealed(self) -> Card:
        return replace(self, hole=True)

    def revealed(self) -> Card:
        return replace(self, hole=False)

    def __str__(self) -> str:
        return card_to_str(self)


def upcard_value(card: Card) -> int:
    """Return the value used to index a strategy column: 2–10, or 11 for an ace.

    The hole flag is ignored; callers pass the dealer's face-up card.

    Examples:
        >>> upcard_value(str_to_card('AS'))
        11
        >>> upcard_value(str_to_card('QH'))
        10
    """
    if card.rank == ACE:
        return 11
    return min(card.rank, TEN)


def card_to_str(card: Card) -> str:
    """Convert a card to its human-readable string representation.

    Examples:
        >>> card_to_str(Card(ACE, Suit.SPADES))
        'AS'
        >>> card_to_str(Card(TEN, Suit.CLUBS))
        '10C'
    """
    return RANK_NAMES[card.rank] + SUIT_NAMES[card.suit]


def str_to_card(s: str) -> Card:
    """Parse a human-readable card string.

    The format is <rank><suit> where suit is the last character.
    Rank can be 'A', '2'-'10', 'J', 'Q' or 'K'; suit 'S', 'H', 'D' or 'C'.

    Examples:
        >>> str_to_card('AS')
        Card(rank=1, suit=<Suit.SPADES: 0>, hole=False)
        >>> str_to_card('10H').rank
        10

    Raises:
        ValueError: If the rank or suit is not recognised.
    """
    rank_str, suit_char = s[:-1], s[-1:]
    if rank_str not in _RANKS_BY_NAME or suit_char not in _SUITS_BY_NAME:
        raise ValueError(f"Unrecognised card string: {s!r}")
    return Card(_RANKS_BY_NAME[rank_str], _SUITS_BY_NAME[suit_char])


def hand_to_str(cards) -> str:
    """Convert a sequence of cards to a space-separated string.

    Concealed cards render as '??'.
    """
    return ' '.join('??' if c.hole else card_to_str(c) for c in cards)
