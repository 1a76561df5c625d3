"""
Tests for blackjack_trainer/genetics/generation.py

Covers:
    - normalize_fitness(): scaling, non-positive maximum, empty input
    - rank_candidates() / apply_cutoff(): ordering and the raw-score cutoff
    - parthenogenesis() / crossover(): event gating and litter sizes
    - new_generation_from_previous(): population cap and random fill
"""

from __future__ import annotations

import pytest

from blackjack_trainer.genetics.chromosome import Chromosome
from blackjack_trainer.genetics.generation import (
    MAX_LITTER_SIZE,
    MIN_LITTER_SIZE,
    UNEVALUATED,
    Candidate,
    GenerationOptions,
    apply_cutoff,
    crossover,
    new_generation_from_previous,
    normalize_fitness,
    parthenogenesis,
    rank_candidates,
    spontaneous_generation,
)
from blackjack_trainer.randomizer import NumpyRandomizer
from tests.conftest import ScriptedRandomizer

SEQ = [b'AB'] * 4


def candidates(*fitness: float) -> list[Candidate]:
    genes = [b'AAAA', b'BBBB', b'ABAB', b'BABA', b'AABB', b'BBAA']
    return [Candidate(Chromosome(genes[i % len(genes)], SEQ), f) for i, f in enumerate(fitness)]


# ─── Normalisation and ranking ────────────────────────────────────────────────

class TestNormalizeFitness:
    def test_divides_by_max(self):
        result = normalize_fitness(candidates(0, 1, 25, 50))
        assert [c.fitness for c in result] == pytest.approx([0.0, 0.02, 0.5, 1.0])

    def test_does_not_mutate_input(self):
        population = candidates(10, 20)
        normalize_fitness(population)
        assert [c.fitness for c in population] == [10, 20]

    def test_zero_maximum(self):
        assert [c.fitness for c in normalize_fitness(candidates(0, 0))] == [0.0, 0.0]

    def test_negative_maximum(self):
        assert [c.fitness for c in normalize_fitness(candidates(-5, -1))] == [0.0, 0.0]

    def test_empty(self):
        assert normalize_fitness([]) == []


class TestRankAndCutoff:
    def test_rank_descending(self):
        ranked = rank_candidates(candidates(0.2, 1.0, 0.5))
        assert [c.fitness for c in ranked] == [1.0, 0.5, 0.2]

    def test_cutoff_compares_the_score_itself(self):
        # 0.2 is kept even though it is the bottom half of the population
        kept = apply_cutoff(candidates(1.0, 0.5, 0.2, 0.19), 0.2)
        assert [c.fitness for c in kept] == [1.0, 0.5, 0.2]

    def test_cutoff_zero_keeps_all(self):
        assert len(apply_cutoff(candidates(0.0, 0.1), 0.0)) == 2


# ─── Reproduction ─────────────────────────────────────────────────────────────

class TestParthenogenesis:
    def test_clones_on_event(self):
        population = candidates(1.0, 0.5)
        rnd = ScriptedRandomizer(events={1.0: [True], 0.5: [False]})
        clones = parthenogenesis(population, rnd)
        assert len(clones) == 1
        assert clones[0].chromosome == population[0].chromosome
        assert clones[0].fitness == UNEVALUATED

    def test_probability_is_fitness(self):
        rnd = ScriptedRandomizer()
        parthenogenesis(candidates(0.7, 0.3), rnd)
        assert rnd.calls == [("event_did_happen", 0.7), ("event_did_happen", 0.3)]


class TestCrossover:
    def test_each_unordered_pair_once(self):
        rnd = ScriptedRandomizer()
        crossover(candidates(1.0, 0.5, 0.25), 0.0, rnd)
        assert rnd.calls == [
            ("event_did_happen", 0.5),
            ("event_did_happen", 0.25),
            ("event_did_happen", 0.125),
        ]

    def test_litter_size(self):
        rnd = ScriptedRandomizer(events={0.8: [True]}, numbers=[3])
        children = crossover(candidates(1.0, 0.8), 0.0, rnd)
        assert len(children) == 3
        assert ("number_between", MIN_LITTER_SIZE, MAX_LITTER_SIZE) in rnd.calls
        assert all(c.fitness == UNEVALUATED for c in children)

    def test_no_mating_without_event(self):
        assert crossover(candidates(1.0, 1.0), 0.0, ScriptedRandomizer()) == []


class TestSpontaneousGeneration:
    def test_count_and_shape(self):
        fresh = spontaneous_generation(4, SEQ, NumpyRandomizer(0))
        assert len(fresh) == 4
        assert all(c.chromosome.is_well_formed() for c in fresh)
        assert all(c.fitness == UNEVALUATED for c in fresh)


# ─── Pipeline ─────────────────────────────────────────────────────────────────

class TestNewGeneration:
    def test_empty_population_is_random(self):
        options = GenerationOptions(population_size=6)
        result = new_generation_from_previous([], SEQ, options, NumpyRandomizer(1))
        assert len(result) == 6
        assert all(c.fitness == UNEVALUATED for c in result)

    def test_population_is_capped(self):
        options = GenerationOptions(population_size=5, mutation_rate=0.0)
        rnd = ScriptedRandomizer(default_event=True, numbers=[10] * 10)
        result = new_generation_from_previous(candidates(8, 8, 8, 8), SEQ, options, rnd)
        assert len(result) == 5

    def test_unfit_population_is_replaced(self):
        options = GenerationOptions(population_size=4)
        result = new_generation_from_previous(candidates(0, 0, 0), SEQ, options, NumpyRandomizer(2))
        assert len(result) == 4
        assert all(c.chromosome.is_well_formed() for c in result)

    def test_fills_shortfall_with_random(self):
        options = GenerationOptions(population_size=10, cutoff_rate=0.9)
        # only the leader survives, clones itself and has no partner
        rnd = ScriptedRandomizer(events={1.0: [True]})
        population = candidates(10, 1, 1)
        result = new_generation_from_previous(population, SEQ, options, rnd)
        assert len(result) == 10
        assert result[0].chromosome == population[0].chromosome

    def test_seeded_pipeline_is_reproducible(self):
        options = GenerationOptions(population_size=8)
        population = candidates(5, 4, 3, 2, 1)
        a = new_generation_from_previous(population, SEQ, options, NumpyRandomizer(4))
        b = new_generation_from_previous(population, SEQ, options, NumpyRandomizer(4))
        assert [c.chromosome for c in a] == [c.chromosome for c in b]
