"""
Tests for blackjack_trainer/engine/player.py

Covers:
    - bet(): sitting out, debiting, counters
    - play(): forced hits after a split, doubling once, busts, dealer naturals
    - funding rules: DOUBLE/SPLIT fall back to HIT without bankroll
    - resolve(): payouts and per-game outcome counters
    - PlayerStatistics snapshot
"""

from __future__ import annotations

import pytest

from blackjack_trainer.engine.player import Player, PlayerStatistics
from blackjack_trainer.engine.shoe import Shoe
from blackjack_trainer.engine.strategy import decode_strategy, encode_strategy
from tests.conftest import ScriptedRandomizer, cards, dealer, hand, raw_strategy


def strategy(hard: str = "S", soft: str = "S", pair: str = "S", bankroll: int = 100, bet: int = 1):
    return decode_strategy(
        encode_strategy([hard * 10] * 16, [soft * 10] * 8, [pair * 10] * 10, bankroll, bet)
    )


def stacked_shoe(*card_strs: str) -> Shoe:
    return Shoe.from_cards(cards(*card_strs), ScriptedRandomizer())


# ─── Betting ──────────────────────────────────────────────────────────────────

class TestBet:
    def test_bet_debits_bankroll(self, always_stand):
        player = Player(always_stand)
        assert player.bet() == (True, 1)
        assert player.bankroll == 99
        assert player.games_seen == 1
        assert player.games_played == 1
        assert len(player.games) == 1

    def test_sits_out_without_funds(self):
        player = Player(decode_strategy(raw_strategy("S", bankroll="0000")))
        assert player.bet() == (False, 0)
        assert player.games_seen == 1
        assert player.games_played == 0
        assert player.games == []

    def test_sits_out_on_zero_bet(self):
        player = Player(decode_strategy(raw_strategy("S", bet="0000")))
        assert player.bet() == (False, 0)
        assert player.bankroll == 100

    def test_bet_equal_to_bankroll_is_allowed(self):
        player = Player(strategy(bankroll=5, bet=5))
        assert player.bet() == (True, 5)
        assert player.bankroll == 0

    def test_play_without_bet_uses_no_cards(self, always_hit):
        player = Player(always_hit)
        assert player.play(hand('10S', '2H'), dealer('6D', '7C'), stacked_shoe('5D')) == 0


# ─── Playing ──────────────────────────────────────────────────────────────────

class TestPlay:
    def test_stand_uses_no_cards(self, always_stand):
        player = Player(always_stand)
        player.bet()
        used = player.play(hand('10S', '7H'), dealer('5D', 'KC'), stacked_shoe('2S'))
        assert used == 0
        assert player.games[0].hand == hand('10S', '7H')

    def test_dealt_hand_is_copied(self, always_hit):
        player = Player(always_hit)
        player.bet()
        dealt = hand('10S', '2H')
        player.play(dealt, dealer('6D', '7C'), stacked_shoe('5D', '9C'))
        assert len(dealt) == 2

    def test_hit_until_bust(self, always_hit):
        player = Player(always_hit)
        player.bet()
        used = player.play(hand('10S', '2H'), dealer('6D', '7C'), stacked_shoe('5D', '9C', '3S'))
        assert used == 2
        assert player.games[0].hand.is_busted()

    def test_reads_from_shoe_without_advancing(self, always_hit):
        shoe = stacked_shoe('5D', '9C', '3S')
        player = Player(always_hit)
        player.bet()
        player.play(hand('10S', '2H'), dealer('6D', '7C'), shoe)
        assert shoe.cursor == 0

    def test_dealer_natural_forces_stand(self, always_hit):
        player = Player(always_hit)
        player.bet()
        assert player.play(hand('10S', '2H'), dealer('AS', 'KH'), stacked_shoe('5D')) == 0

    def test_ace_in_hole_does_not_stop_play(self, always_hit):
        player = Player(always_hit)
        player.bet()
        assert player.play(hand('10S', '2H'), dealer('KS', 'AH'), stacked_shoe('KD')) == 1


class TestDouble:
    def test_double_draws_exactly_one(self):
        player = Player(strategy(hard="D"))
        player.bet()
        used = player.play(hand('6S', '5H'), dealer('6D', '7C'), stacked_shoe('2C', '3C'))
        game = player.games[0]
        assert used == 1
        assert game.doubled
        assert game.bet == 2
        assert game.hand == hand('6S', '5H', '2C')
        assert player.bankroll == 98

    def test_double_without_funds_hits(self):
        player = Player(strategy(hard="D", bankroll=1, bet=1))
        player.bet()
        used = player.play(hand('6S', '5H'), dealer('6D', '7C'), stacked_shoe('2C', '10D'))
        game = player.games[0]
        assert used == 2
        assert not game.doubled
        assert game.bet == 1
        assert game.hand.is_busted()
        assert player.bankroll == 0


class TestSplit:
    def test_split_then_forced_hits(self):
        player = Player(strategy(pair="P"))
        player.bet()
        used = player.play(hand('8S', '8H'), dealer('6D', '7C'), stacked_shoe('3D', '10C'))

        assert used == 2
        assert len(player.games) == 2
        first, second = player.games
        assert first.hand == hand('8S', '3D')
        assert second.hand == hand('8H', '10C')
        assert first.is_split and second.is_split
        assert player.bankroll == 98

    def test_resplit(self):
        player = Player(strategy(pair="P", bankroll=10))
        player.bet()
        used = player.play(hand('8S', '8H'), dealer('6D', '7C'), stacked_shoe('8D', '2C', '3C', '4C'))
        # 8S+8D splits again; three games draw 2C, 3C, 4C in turn
        assert len(player.games) == 3
        assert used == 4
        assert player.bankroll == 7

    def test_split_without_funds_hits(self):
        player = Player(strategy(pair="P", bankroll=1, bet=1))
        player.bet()
        used = player.play(hand('8S', '8H'), dealer('6D', '7C'), stacked_shoe('3D'))
        assert used == 1
        assert len(player.games) == 1
        assert player.games[0].hand == hand('8S', '8H', '3D')

    def test_split_on_non_pair_hits(self):
        # P in the hard table is not a legal split for 10,6
        player = Player(strategy(hard="P"))
        player.bet()
        used = player.play(hand('10S', '6H'), dealer('6D', '7C'), stacked_shoe('KD'))
        assert used == 1
        assert len(player.games) == 1
        assert player.games[0].hand.is_busted()


# ─── Resolution ───────────────────────────────────────────────────────────────

class TestResolve:
    def test_win_credits_payout(self, always_stand):
        player = Player(always_stand)
        player.bet()
        player.play(hand('10S', '9H'), dealer('10D', '7C'), stacked_shoe('2S'))
        player.resolve(hand('10D', '7C'))
        assert player.bankroll == 101
        assert player.games_won == 1
        assert player.games == []

    def test_push_returns_stake(self, always_stand):
        player = Player(always_stand)
        player.bet()
        player.play(hand('10S', '7H'), dealer('10D', '7C'), stacked_shoe('2S'))
        player.resolve(hand('10D', '7C'))
        assert player.bankroll == 100
        assert player.games_pushed == 1

    def test_split_games_counted_separately(self):
        player = Player(strategy(pair="P"))
        player.bet()
        player.play(hand('8S', '8H'), dealer('6D', '7C'), stacked_shoe('3D', '10C'))
        # 11 loses, 18 wins against 17
        player.resolve(hand('10D', '7C'))
        assert player.games_won == 1
        assert player.games_lost == 1
        assert player.games_played == 1
        assert player.bankroll == 100


class TestStatistics:
    def test_snapshot(self, always_stand):
        player = Player(always_stand)
        player.bet()
        player.play(hand('10S', '9H'), dealer('10D', '7C'), stacked_shoe('2S'))
        player.resolve(hand('10D', '7C'))

        stats = player.get_statistics()
        assert isinstance(stats, PlayerStatistics)
        assert stats.strategy == always_stand.encode()
        assert stats.games_seen == 1
        assert stats.games_played == 1
        assert stats.initial_bankroll == 100
        assert stats.bankroll_delta == 1
        assert stats.win_rate == 1.0

    def test_win_rate_without_games(self, always_stand):
        assert Player(always_stand).get_statistics().win_rate == 0.0

    @pytest.mark.parametrize("won, played, expected", [(1, 4, 0.25), (0, 3, 0.0)])
    def test_win_rate(self, won, played, expected):
        stats = PlayerStatistics(b'', played, played, won, played - won, 0, 10.0, 10.0, 0.0)
        assert stats.win_rate == expected
