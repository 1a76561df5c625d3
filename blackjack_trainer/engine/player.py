"""
Player: bankroll accounting and the per-game decision state machine.

Per game, evaluated each step until the game stands:

    hand has < 2 cards (after a split)      -> HIT (forced)
    doubled and hand has > 2 cards          -> STAND (forced)
    hand busted                             -> STAND (terminal)
    dealer shows a natural (not ace-hole)   -> STAND (forced)
    otherwise                               -> Strategy.play(hand, dealer)
    DOUBLE/SPLIT without bankroll to cover  -> HIT instead
    SPLIT on anything but a two-card pair   -> HIT instead

Games are played in list order; a split appends a sibling game which is
played after the current one finishes.

Cards are not dealt from the shoe during play. The player reads the card
stream at offsets from the round's base cursor and returns how many cards
it consumed; the table advances the cursor once for all players.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from .game import Game
from .hand import Hand
from .errors import RuleInvariantError
from .rules import Outcome, dealer_shows_natural
from .shoe import Shoe
from .strategy import PlayerAction, Strategy


@dataclass
class PlayerStatistics:
    """Running counters for one simulated player.

    Attributes:
        strategy:         Raw strategy encoding the player used.
        games_seen:       Rounds the player was asked to bet.
        games_played:     Rounds the player placed a bet.
        games_won:        Games (split hands counted separately) won.
        games_lost:       Games lost.
        games_pushed:     Games pushed.
        initial_bankroll: Bankroll decoded from the strategy.
        bankroll:         Current bankroll.
        bankroll_delta:   bankroll - initial_bankroll.
    """
    strategy: bytes
    games_seen: int
    games_played: int
    games_won: int
    games_lost: int
    games_pushed: int
    initial_bankroll: float
    bankroll: float
    bankroll_delta: float

    @property
    def win_rate(self) -> float:
        if self.games_played == 0:
            return 0.0
        return self.games_won / self.games_played


class BasePlayer(ABC):
    """What a Table needs from a seat."""

    @abstractmethod
    def bet(self) -> tuple[bool, int]:
        """Decide whether to join the round; return (will_bet, amount)."""

    @abstractmethod
    def play(self, hand: Hand, dealer_hand: Hand, shoe: Shoe) -> int:
        """Play the round's games; return the number of shoe cards consumed."""

    @abstractmethod
    def resolve(self, dealer_hand: Hand) -> None:
        """Settle every game against the dealer's final hand."""

    @abstractmethod
    def get_statistics(self) -> PlayerStatistics:
        """Return a snapshot of the running counters."""


class Player(BasePlayer):
    def __init__(self, strategy: Strategy) -> None:
        self.strategy = strategy
        self.initial_bankroll = float(strategy.initial_bankroll)
        self.bankroll = float(strategy.initial_bankroll)
        self.games: list[Game] = []

        self.games_seen = 0
        self.games_played = 0
        self.games_won = 0
        self.games_lost = 0
        self.games_pushed = 0

    def __repr__(self) -> str:
        return f"Player(bankroll={self.bankroll}, games_played={self.games_played})"

    # ── Round lifecycle ──────────────────────────────────────────────────────

    def bet(self) -> tuple[bool, int]:
        self.games_seen += 1

        amount = self.strategy.bet()
        if amount <= 0 or amount > self.bankroll:
            return False, 0

        self.bankroll -= amount
        self.games_played += 1
        self.games = [Game(amount)]
        return True, amount

    def play(self, hand: Hand, dealer_hand: Hand, shoe: Shoe) -> int:
        if not self.games:
            return 0

        self.games[0].set_hand(hand.copy())

        index = 0
        game_index = 0
        while game_index < len(self.games):
            index = self._play_game(self.games[game_index], dealer_hand, shoe, index)
            game_index += 1

        return index

    def resolve(self, dealer_hand: Hand) -> None:
        for game in self.games:
            outcome, payout = game.resolve(dealer_hand)
            self.bankroll += payout

            if outcome is Outcome.WIN:
                self.games_won += 1
            elif outcome is Outcome.PUSH:
                self.games_pushed += 1
            else:
                self.games_lost += 1

        self.games = []

    def get_statistics(self) -> PlayerStatistics:
        return PlayerStatistics(
            strategy=self.strategy.encode(),
            games_seen=self.games_seen,
            games_played=self.games_played,
            games_won=self.games_won,
            games_lost=self.games_lost,
            games_pushed=self.games_pushed,
            initial_bankroll=self.initial_bankroll,
            bankroll=self.bankroll,
            bankroll_delta=self.bankroll - self.initial_bankroll,
        )

    # ── State machine ────────────────────────────────────────────────────────

    def _play_game(self, game: Game, dealer_hand: Hand, shoe: Shoe, index: int) -> int:
        while True:
            action = self._next_action(game, dealer_hand)

            if action is PlayerAction.STAND:
                return index

            if action is PlayerAction.HIT:
                game.hit(shoe.peek_at_index(index))
                index += 1
            elif action is PlayerAction.DOUBLE:
                self.bankroll -= game.bet
                game.double(shoe.peek_at_index(index))
                index += 1
            elif action is PlayerAction.SPLIT:
                self.bankroll -= game.bet
                self.games.append(game.split())
            else:
                raise RuleInvariantError(f"Unrecognised player action: {action!r}")

    def _next_action(self, game: Game, dealer_hand: Hand) -> PlayerAction:
        hand = game.hand

        if len(hand) < 2:
            return PlayerAction.HIT

        if game.doubled and len(hand) > 2:
            return PlayerAction.STAND

        if hand.is_busted():
            return PlayerAction.STAND

        if dealer_shows_natural(dealer_hand):
            return PlayerAction.STAND

        ideal = self.strategy.play(hand, dealer_hand)

        if ideal in (PlayerAction.DOUBLE, PlayerAction.SPLIT) and game.bet > self.bankroll:
            return PlayerAction.HIT

        # Hard/soft cells can carry P after crossover; only a two-card pair splits.
        if ideal is PlayerAction.SPLIT and not (len(hand) == 2 and hand.is_pair()):
            return PlayerAction.HIT

        return ideal
