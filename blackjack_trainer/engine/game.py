"""
A single game: one hand under play for one stake.

A player holds one game per round, more after splitting. Doubling doubles
the stake and draws exactly one card; the player state machine then forces
a stand.
"""

from __future__ import annotations

from .cards import Card
from .hand import Hand
from .rules import Outcome, settle_game


class Game:
    def __init__(self, bet: int, hand: Hand | None = None) -> None:
        self.bet = bet
        self.hand = hand if hand is not None else Hand()
        self.doubled = False
        self.is_split = False

    def __repr__(self) -> str:
        return (
            f"Game(bet={self.bet}, hand={self.hand!r}, "
            f"doubled={self.doubled}, is_split={self.is_split})"
        )

    def set_hand(self, hand: Hand) -> None:
        self.hand = hand

    def hit(self, card: Card) -> None:
        self.hand.deal(card)

    def double(self, card: Card) -> None:
        self.bet *= 2
        self.hit(card)
        self.doubled = True

    def split(self) -> Game:
        """Keep the first card, move the second into a new game with the same stake.

        Raises:
            ValueError: If the hand does not hold exactly two cards.
        """
        if len(self.hand) != 2:
            raise ValueError(f"Can only split a two-card hand, got {self.hand!r}")

        keep_card, split_card = self.hand[0], self.hand[1]
        self.hand = Hand([keep_card])
        self.is_split = True

        split_game = Game(self.bet, Hand([split_card]))
        split_game.is_split = True
        return split_game

    def resolve(self, dealer_hand: Hand) -> tuple[Outcome, float]:
        """Return the outcome and gross payout against the dealer's final hand."""
        return settle_game(self.hand, dealer_hand, self.bet)
