"""
Settlement and dealer policy.

Settlement order (per game, against the dealer's final hand):
    1. Player bust               -> LOSS, stake forfeited   (payout 0)
    2. Dealer bust               -> WIN,  2 × bet returned
    3. Player high > dealer high -> WIN,  2 × bet returned
    4. Equal high scores         -> PUSH, bet returned
    5. Otherwise                 -> LOSS (payout 0)

Payouts are gross amounts credited back to the bankroll; the stake was
already debited when the bet was placed. A natural pays like any win.

Dealer policy: hit while not busted and high score < 17 (stands on soft 17).
"""

from __future__ import annotations

from enum import Enum, auto

from .hand import Hand

DEALER_STANDS_ON: int = 17


class Outcome(Enum):
    WIN = auto()
    LOSS = auto()
    PUSH = auto()


def settle_game(player_hand: Hand, dealer_hand: Hand, bet: float) -> tuple[Outcome, float]:
    """Determine the outcome and gross payout of one game.

    Examples:
        >>> settle_game(hand('10S', '9H'), hand('10D', '7C'), 5)
        (<Outcome.WIN: 1>, 10.0)
        >>> settle_game(hand('10S', '7H'), hand('9D', '8C'), 5)
        (<Outcome.PUSH: 3>, 5.0)
    """
    player_score = player_hand.score()
    dealer_score = dealer_hand.score()
    stake = float(bet)

    if player_score.busted:
        return Outcome.LOSS, 0.0

    if dealer_score.busted:
        return Outcome.WIN, stake * 2

    if player_score.high > dealer_score.high:
        return Outcome.WIN, stake * 2

    if player_score.high == dealer_score.high:
        return Outcome.PUSH, stake

    return Outcome.LOSS, 0.0


def dealer_should_hit(dealer_hand: Hand) -> bool:
    """Dealer hits below 17 and stands on any 17, soft or hard."""
    score = dealer_hand.score()
    return not score.busted and score.high < DEALER_STANDS_ON


def dealer_shows_natural(dealer_hand: Hand) -> bool:
    """True when the dealer holds a natural that ends player action.

    The hole card is taken into account, but a natural with the ace in the
    hole is not peeked at, so it does not stop play.
    """
    if not dealer_hand.is_blackjack():
        return False
    return not dealer_hand[1].is_ace
