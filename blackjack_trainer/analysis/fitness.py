"""
Fitness: simulated play statistics -> scalar score for the genetic engine.

    bankroll > 0   signed square of the bankroll delta
                   + rounds sat out (games_seen - games_played)
    bankroll <= 0  rounds played before ruin
    both           + 100 × win rate

A solvent player is rewarded for banking profit in few hands; a ruined
player for going broke slowly.
"""

from __future__ import annotations

import math
from typing import Sequence

from blackjack_trainer.engine.player import BasePlayer, PlayerStatistics
from blackjack_trainer.genetics.chromosome import Chromosome
from blackjack_trainer.genetics.generation import Candidate

WIN_RATE_WEIGHT: float = 100.0


def blackjack_fitness(statistics: PlayerStatistics) -> float:
    """Score one player's statistics.

    Examples:
        >>> stats = PlayerStatistics(b'', 0, 10, 5, 5, 0, 100.0, 0.0, -100.0)
        >>> blackjack_fitness(stats)
        60.0
    """
    if statistics.bankroll > 0:
        delta = statistics.bankroll_delta
        fitness = math.copysign(delta * delta, delta)
        fitness += statistics.games_seen - statistics.games_played
    else:
        fitness = float(statistics.games_played)

    return fitness + WIN_RATE_WEIGHT * statistics.win_rate


def score_players(
    players: Sequence[BasePlayer],
    sequencing: Sequence[bytes],
) -> list[Candidate]:
    """Turn simulated players into scored candidates, in seat order."""
    candidates = []
    for player in players:
        statistics = player.get_statistics()
        candidates.append(
            Candidate(
                chromosome=Chromosome(statistics.strategy, sequencing),
                fitness=blackjack_fitness(statistics),
            )
        )
    return candidates
