"""
Training session: evolve strategies by alternating simulation and breeding.

Each generation:
    1. Breed candidates from the previous generation's scores
       (the first generation is entirely random).
    2. Decode each chromosome into a Strategy and seat a Player for it.
    3. Play hands_per_generation rounds at one table with a fresh shoe.
    4. Score every player with blackjack_fitness.
    5. Summarise the generation in a GenerationReport.

Usage:
    python -m blackjack_trainer.analysis.session --generations 20 --seed 42 -v
"""

from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass, field
from typing import Callable, Sequence

import numpy as np

from blackjack_trainer.engine.player import BasePlayer, Player, PlayerStatistics
from blackjack_trainer.engine.shoe import Shoe
from blackjack_trainer.engine.strategy import decode_strategy, get_sequencing
from blackjack_trainer.engine.table import Table
from blackjack_trainer.genetics.generation import (
    Candidate,
    GenerationOptions,
    new_generation_from_previous,
)
from blackjack_trainer.logging_utils import setup_logging
from blackjack_trainer.randomizer import NumpyRandomizer, Randomizer

from .fitness import score_players

logger = logging.getLogger(__name__)


# ─── Configuration / result types ─────────────────────────────────────────────

@dataclass(frozen=True)
class TrainingConfig:
    """Tunables for a training session.

    Attributes:
        generations:          Number of generations to evolve.
        options:              Population size, mutation rate, cutoff rate.
        decks:                Decks in each generation's shoe.
        penetration:          Fraction of the shoe dealt before reshuffling.
        hands_per_generation: Rounds played per generation (upper bound).
        seed:                 Seed for the session randomizer. None for a
                              non-deterministic run.
    """
    generations: int = 100
    options: GenerationOptions = field(default_factory=GenerationOptions)
    decks: int = 6
    penetration: float = 0.5
    hands_per_generation: int = 1000
    seed: int | None = None


@dataclass
class GenerationReport:
    """Aggregate statistics for one simulated generation."""
    generation: int
    population: int
    rounds_played: int
    average_bankroll: float
    max_bankroll: float
    max_games_played: int
    max_games_won: int
    max_win_rate: float
    average_fitness: float
    max_fitness: float
    best_strategy: bytes = field(repr=False)

    def __str__(self) -> str:
        return (
            f"Gen {self.generation} | "
            f"Players: {self.population} | Rounds: {self.rounds_played:,} | "
            f"Bankroll avg/max: {self.average_bankroll:,.1f}/{self.max_bankroll:,.1f} | "
            f"Max played/won: {self.max_games_played}/{self.max_games_won} | "
            f"Max WR: {self.max_win_rate:.3f} | "
            f"Fitness avg/max: {self.average_fitness:,.1f}/{self.max_fitness:,.1f}"
        )


# ─── Session steps ────────────────────────────────────────────────────────────

def session_players(candidates: Sequence[Candidate]) -> list[BasePlayer]:
    """Seat one Player per candidate.

    A chromosome that fails to decode means the genetic engine emitted an
    illegal symbol; the decode error propagates.
    """
    return [Player(decode_strategy(c.chromosome.raw)) for c in candidates]


def summarize_generation(
    generation: int,
    statistics: Sequence[PlayerStatistics],
    candidates: Sequence[Candidate],
    rounds_played: int,
) -> GenerationReport:
    if not statistics:
        raise ValueError("Cannot summarise an empty generation.")

    bankrolls = np.array([s.bankroll for s in statistics], dtype=np.float64)
    fitness = np.array([c.fitness for c in candidates], dtype=np.float64)
    best = int(np.argmax(fitness))

    return GenerationReport(
        generation=generation,
        population=len(statistics),
        rounds_played=rounds_played,
        average_bankroll=float(np.mean(bankrolls)),
        max_bankroll=float(np.max(bankrolls)),
        max_games_played=max(s.games_played for s in statistics),
        max_games_won=max(s.games_won for s in statistics),
        max_win_rate=max(s.win_rate for s in statistics),
        average_fitness=float(np.mean(fitness)),
        max_fitness=float(fitness[best]),
        best_strategy=candidates[best].chromosome.raw,
    )


def run_generation(
    candidates: Sequence[Candidate],
    config: TrainingConfig,
    randomizer: Randomizer,
    sequencing: Sequence[bytes],
) -> tuple[list[Candidate], list[PlayerStatistics], int]:
    """Simulate one generation; return (scored candidates, statistics, rounds played)."""
    players = session_players(candidates)

    shoe = Shoe(config.decks, randomizer, penetration=config.penetration)
    table = Table(players, shoe)
    rounds_played = table.run_many(config.hands_per_generation)

    scored = score_players(table.players, sequencing)
    statistics = [p.get_statistics() for p in table.players]
    return scored, statistics, rounds_played


def run_training_session(
    config: TrainingConfig = TrainingConfig(),
    randomizer: Randomizer | None = None,
    on_generation: Callable[[GenerationReport], None] | None = None,
) -> list[GenerationReport]:
    """Evolve strategies for config.generations generations.

    Args:
        config:        Session tunables.
        randomizer:    Random source; defaults to NumpyRandomizer(config.seed).
        on_generation: Optional callback invoked with each report as it is made.

    Returns:
        One GenerationReport per generation, in order.
    """
    if randomizer is None:
        randomizer = NumpyRandomizer(config.seed)

    sequencing = get_sequencing()
    scored: list[Candidate] = []
    reports: list[GenerationReport] = []

    for index in range(config.generations):
        current = new_generation_from_previous(scored, sequencing, config.options, randomizer)
        scored, statistics, rounds_played = run_generation(current, config, randomizer, sequencing)

        report = summarize_generation(index + 1, statistics, scored, rounds_played)
        logger.info("%s", report)
        reports.append(report)
        if on_generation is not None:
            on_generation(report)

    return reports


def print_generation_report(report: GenerationReport, total: int | None = None) -> None:
    suffix = f" of {total}" if total is not None else ""
    print("=" * 56)
    print(f"Generation {report.generation}{suffix}")
    print("=" * 56)
    print(f"  Average bankroll:  {report.average_bankroll:,.2f}")
    print(f"  Max bankroll:      {report.max_bankroll:,.2f}")
    print(f"  Max games played:  {report.max_games_played}")
    print(f"  Max games won:     {report.max_games_won}")
    print(f"  Max win rate:      {report.max_win_rate:.4f}")
    print(f"  Average fitness:   {report.average_fitness:,.2f}")
    print(f"  Max fitness:       {report.max_fitness:,.2f}")
    print()


# ─── __main__ ─────────────────────────────────────────────────────────────────

def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    defaults = TrainingConfig()
    parser = argparse.ArgumentParser(description="Evolve a blackjack strategy.")
    parser.add_argument("--generations", type=int, default=defaults.generations)
    parser.add_argument("--population", type=int, default=defaults.options.population_size)
    parser.add_argument("--hands", type=int, default=defaults.hands_per_generation)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("-v", "--verbose", action="count", default=0)
    return parser.parse_args(argv)


if __name__ == "__main__":
    args = _parse_args()
    setup_logging(args.verbose)

    config = TrainingConfig(
        generations=args.generations,
        options=GenerationOptions(population_size=args.population),
        hands_per_generation=args.hands,
        seed=args.seed,
    )
    reports = run_training_session(
        config,
        on_generation=lambda r: print_generation_report(r, config.generations),
    )
    best = max(reports, key=lambda r: r.max_fitness)
    print(f"Best strategy (generation {best.generation}):")
    print(best.best_strategy.decode("ascii"))
