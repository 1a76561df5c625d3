"""
Table: one betting round across every seated player and a shared shoe.

Round flow:
    BET -> (reshuffle if flagged) -> DEAL -> PLAYERS -> DEALER -> RESOLVE

Every player receives the same two cards (shoe positions 0 and 2 of the
deal) and plays against the same dealer hand (positions 1 and 3, the
second concealed). Players read the same forward card stream; the shoe
advances by the largest number of cards any one player consumed.
"""

from __future__ import annotations

import logging

from .errors import ShoeExhaustedError
from .hand import Hand
from .player import BasePlayer
from .rules import dealer_should_hit
from .shoe import Shoe

logger = logging.getLogger(__name__)

CARDS_PER_DEAL: int = 4


class Table:
    def __init__(self, players: list[BasePlayer], shoe: Shoe) -> None:
        self.players = players
        self.shoe = shoe

    def run(self) -> Hand:
        """Play one round and return the dealer's final hand."""
        for player in self.players:
            player.bet()

        player_hand, dealer_hand = self._deal_hands()

        self._play_all_games(player_hand, dealer_hand)

        dealer_final = self._play_dealer_hand(dealer_hand)

        for player in self.players:
            player.resolve(dealer_final)

        return dealer_final

    def run_many(self, games: int) -> int:
        """Play up to games rounds, stopping once the table bankroll is exhausted.

        Returns:
            The number of rounds actually played.
        """
        played = 0
        for _ in range(games):
            table_bankroll = sum(p.get_statistics().bankroll for p in self.players)
            if table_bankroll <= 0.0:
                logger.debug("Table bankroll exhausted after %d rounds", played)
                break

            self.run()
            played += 1

        return played

    # ── Round phases ─────────────────────────────────────────────────────────

    def _deal_hands(self) -> tuple[Hand, Hand]:
        if self.shoe.needs_reshuffle:
            logger.debug("Reshuffling shoe at cursor %d of %d", self.shoe.cursor, self.shoe.size)
            self.shoe.shuffle()

        top_cards = self.shoe.peek(CARDS_PER_DEAL)
        if len(top_cards) < CARDS_PER_DEAL:
            raise ShoeExhaustedError(
                f"Need {CARDS_PER_DEAL} cards to deal, shoe has {len(top_cards)} left"
            )
        self.shoe.advance_cursor(CARDS_PER_DEAL)

        player_hand = Hand([top_cards[0], top_cards[2]])
        dealer_hand = Hand([top_cards[1], top_cards[3].concealed()])
        return player_hand, dealer_hand

    def _play_all_games(self, player_hand: Hand, dealer_hand: Hand) -> None:
        used_cards = 0
        for player in self.players:
            used_cards = max(used_cards, player.play(player_hand, dealer_hand, self.shoe))

        self.shoe.advance_cursor(used_cards)

    def _play_dealer_hand(self, dealer_hand: Hand) -> Hand:
        dealer_hand = dealer_hand.copy()
        dealer_hand.reveal()

        while dealer_should_hit(dealer_hand):
            dealer_hand.deal(self.shoe.peek_at_index(0))
            self.shoe.advance_cursor(1)

        return dealer_hand
