"""
Generation pipeline: scored candidates in, next generation out.

    normalize      fitness / max fitness
    rank           sort descending by normalized fitness
    cutoff         drop candidates whose normalized fitness < cutoff_rate
    parthenogenesis  clone each survivor with probability = its fitness
    crossover      mate each unordered pair with probability = product of
                   their fitnesses; litter of 1–10 merged offspring
    truncate       keep at most population_size of the above
    spontaneous    fill the remaining slots with random chromosomes

The cutoff compares the normalized score itself with cutoff_rate; it is
not a percentile of the population.

Every emitted candidate carries the UNEVALUATED fitness sentinel.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Sequence

from blackjack_trainer.randomizer import Randomizer

from .chromosome import Chromosome

logger = logging.getLogger(__name__)

UNEVALUATED: float = -1.0
MIN_LITTER_SIZE: int = 1
MAX_LITTER_SIZE: int = 10


@dataclass
class Candidate:
    chromosome: Chromosome
    fitness: float = UNEVALUATED


@dataclass(frozen=True)
class GenerationOptions:
    population_size: int = 100
    mutation_rate: float = 0.1
    cutoff_rate: float = 0.2


# ─── Selection steps ──────────────────────────────────────────────────────────

def normalize_fitness(candidates: Sequence[Candidate]) -> list[Candidate]:
    """Divide every fitness by the population maximum.

    When the maximum is not positive every normalized fitness is 0.0.

    Examples:
        >>> [c.fitness for c in normalize_fitness(
        ...     [Candidate(ch, 0.0), Candidate(ch, 25.0), Candidate(ch, 50.0)])]
        [0.0, 0.5, 1.0]
    """
    if not candidates:
        return []

    max_fitness = max(c.fitness for c in candidates)
    if max_fitness <= 0.0:
        return [replace(c, fitness=0.0) for c in candidates]
    return [replace(c, fitness=c.fitness / max_fitness) for c in candidates]


def rank_candidates(candidates: Sequence[Candidate]) -> list[Candidate]:
    return sorted(candidates, key=lambda c: c.fitness, reverse=True)


def apply_cutoff(candidates: Sequence[Candidate], cutoff_rate: float) -> list[Candidate]:
    return [c for c in candidates if c.fitness >= cutoff_rate]


def parthenogenesis(candidates: Sequence[Candidate], randomizer: Randomizer) -> list[Candidate]:
    return [
        Candidate(c.chromosome)
        for c in candidates
        if randomizer.event_did_happen(c.fitness)
    ]


def crossover(
    candidates: Sequence[Candidate],
    mutation_rate: float,
    randomizer: Randomizer,
) -> list[Candidate]:
    offspring: list[Candidate] = []
    for i, mother in enumerate(candidates):
        for father in candidates[i + 1:]:
            if not randomizer.event_did_happen(mother.fitness * father.fitness):
                continue

            litter_size = randomizer.number_between(MIN_LITTER_SIZE, MAX_LITTER_SIZE)
            for _ in range(litter_size):
                child = mother.chromosome.merge(father.chromosome, mutation_rate, randomizer)
                offspring.append(Candidate(child))
    return offspring


def spontaneous_generation(
    count: int,
    sequencing: Sequence[bytes],
    randomizer: Randomizer,
) -> list[Candidate]:
    return [Candidate(Chromosome.random(sequencing, randomizer)) for _ in range(count)]


# ─── Pipeline ─────────────────────────────────────────────────────────────────

def new_generation_from_previous(
    candidates: Sequence[Candidate],
    sequencing: Sequence[bytes],
    options: GenerationOptions,
    randomizer: Randomizer,
) -> list[Candidate]:
    """Breed the next generation from a scored population.

    An empty population yields population_size random candidates.
    """
    next_generation: list[Candidate] = []

    if candidates:
        survivors = apply_cutoff(
            rank_candidates(normalize_fitness(candidates)), options.cutoff_rate
        )
        clones = parthenogenesis(survivors, randomizer)
        children = crossover(survivors, options.mutation_rate, randomizer)
        next_generation = (clones + children)[:max(options.population_size, 0)]

        logger.debug(
            "Generation: %d survivors, %d clones, %d offspring (%d kept)",
            len(survivors), len(clones), len(children), len(next_generation),
        )

    missing = options.population_size - len(next_generation)
    if missing > 0:
        next_generation += spontaneous_generation(missing, sequencing, randomizer)

    return next_generation
