"""
Chromosome: a gene string plus the legal-symbol alphabet of every locus.

The sequencing (one alphabet per locus) travels with the genes, so uniform
crossover and mutation only ever write symbols that are legal at their
position. Offspring of well-formed chromosomes are always well-formed.
"""

from __future__ import annotations

from typing import Sequence

from blackjack_trainer.randomizer import Randomizer

CROSSOVER_PROBABILITY: float = 0.5


class Chromosome:
    """Immutable gene string. Operators return new chromosomes."""

    def __init__(self, raw: bytes, sequencing: Sequence[bytes]) -> None:
        raw = bytes(raw)
        if len(raw) != len(sequencing):
            raise ValueError(
                f"Chromosome of length {len(raw)} does not match "
                f"sequencing of length {len(sequencing)}"
            )
        self._raw = raw
        self._sequencing = tuple(sequencing)

    @classmethod
    def random(cls, sequencing: Sequence[bytes], randomizer: Randomizer) -> Chromosome:
        """Draw every locus uniformly from its own alphabet."""
        raw = bytes(randomizer.pick_one(alphabet) for alphabet in sequencing)
        return cls(raw, sequencing)

    @property
    def raw(self) -> bytes:
        return self._raw

    @property
    def sequencing(self) -> tuple[bytes, ...]:
        return self._sequencing

    def __len__(self) -> int:
        return len(self._raw)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Chromosome):
            return NotImplemented
        return self._raw == other._raw and self._sequencing == other._sequencing

    def __hash__(self) -> int:
        return hash(self._raw)

    def __repr__(self) -> str:
        preview = self._raw[:16].decode('ascii', errors='replace')
        return f"Chromosome({preview!r}..., length={len(self._raw)})"

    def is_well_formed(self) -> bool:
        return all(gene in alphabet for gene, alphabet in zip(self._raw, self._sequencing))

    def merge(self, other: Chromosome, mutation_rate: float, randomizer: Randomizer) -> Chromosome:
        """Uniform crossover with other, then mutation of the offspring.

        Raises:
            ValueError: If the two chromosomes differ in length.
        """
        if len(other) != len(self):
            raise ValueError(
                f"Cannot merge chromosomes of length {len(self)} and {len(other)}"
            )

        merged = bytes(
            mine if randomizer.event_did_happen(CROSSOVER_PROBABILITY) else theirs
            for mine, theirs in zip(self._raw, other._raw)
        )
        return Chromosome(merged, self._sequencing).mutate(mutation_rate, randomizer)

    def mutate(self, mutation_rate: float, randomizer: Randomizer) -> Chromosome:
        """Redraw each locus from its alphabet with probability mutation_rate."""
        mutated = bytes(
            randomizer.pick_one(alphabet) if randomizer.event_did_happen(mutation_rate) else gene
            for gene, alphabet in zip(self._raw, self._sequencing)
        )
        return Chromosome(mutated, self._sequencing)
