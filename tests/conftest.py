"""
Shared pytest fixtures for the blackjack trainer tests.

Provides card/hand builders from human-readable strings, a scripted
Randomizer for deterministic stochastic tests, and strategy encodings.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from blackjack_trainer.engine.cards import Card, str_to_card
from blackjack_trainer.engine.hand import Hand
from blackjack_trainer.engine.strategy import HAND_COUNT, Strategy, decode_strategy
from blackjack_trainer.randomizer import Randomizer

FIXTURES = Path(__file__).parent / "fixtures"


def cards(*card_strs: str) -> list[Card]:
    return [str_to_card(s) for s in card_strs]


def hand(*card_strs: str) -> Hand:
    """Build a Hand from human-readable card strings.

    Examples:
        >>> len(hand('AS', '10C'))
        2
    """
    return Hand(cards(*card_strs))


def dealer(up: str, hole: str) -> Hand:
    """Dealer hand with the second card concealed, as dealt by the table."""
    return Hand([str_to_card(up), str_to_card(hole).concealed()])


def raw_strategy(actions: str = "H", bankroll: str = "0064", bet: str = "0001") -> bytes:
    """All cells set to one action, followed by hex bankroll and bet fields."""
    return (actions * HAND_COUNT + bankroll + bet).encode("ascii")


def load_strategy_file(path: Path) -> bytes:
    """Read a strategy fixture, dropping line breaks and spaces."""
    return b"".join(path.read_bytes().split())


class ScriptedRandomizer(Randomizer):
    """Randomizer double that replays queued answers.

    Args:
        events:  probability -> queue of booleans answered for that probability.
        picks:   queue of byte values answered by pick_one.
        numbers: queue of integers answered by number_between.
        default_event: answer once a probability's queue is empty.

    Once a queue is empty, pick_one returns the alphabet's first symbol and
    number_between returns its lower bound. Every call is recorded in calls.
    """

    def __init__(
        self,
        events: dict[float, list[bool]] | None = None,
        picks: list[int] | bytes = (),
        numbers: list[int] = (),
        default_event: bool = False,
    ) -> None:
        self.events = {p: list(q) for p, q in (events or {}).items()}
        self.picks = list(picks)
        self.numbers = list(numbers)
        self.default_event = default_event
        self.calls: list[tuple] = []

    def event_did_happen(self, probability: float) -> bool:
        self.calls.append(("event_did_happen", probability))
        queue = self.events.get(probability)
        if queue:
            return queue.pop(0)
        return self.default_event

    def pick_one(self, options: bytes) -> int:
        self.calls.append(("pick_one", options))
        if self.picks:
            return self.picks.pop(0)
        return options[0]

    def number_between(self, low: int, high: int) -> int:
        self.calls.append(("number_between", low, high))
        if self.numbers:
            return self.numbers.pop(0)
        return low


@pytest.fixture
def h():
    """Expose the hand() helper as a fixture for convenience."""
    return hand


@pytest.fixture(scope="session")
def basic_raw() -> bytes:
    return load_strategy_file(FIXTURES / "basic.strategy")


@pytest.fixture(scope="session")
def basic_strategy(basic_raw: bytes) -> Strategy:
    return decode_strategy(basic_raw)


@pytest.fixture
def always_hit() -> Strategy:
    return decode_strategy(raw_strategy("H"))


@pytest.fixture
def always_stand() -> Strategy:
    return decode_strategy(raw_strategy("S"))
