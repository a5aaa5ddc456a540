"""Fish and sharks living in the ocean grid."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class Species(IntEnum):
    FISH = 0
    SHARK = 1


@dataclass
class Animal:
    """One inhabitant of a cell.

    ``sim_iter`` is the next simulation iteration the animal acts in,
    ``n_iter_live`` counts iterations since it last bred and ``energy``
    is only meaningful for sharks.
    """

    species: Species
    sim_iter: int = 0
    n_iter_live: int = 0
    energy: int = 0

    def describe(self) -> str:
        """Return a one-line human readable summary."""
        if self.species is Species.FISH:
            return f"Fish in iter {self.sim_iter} living {self.n_iter_live} iter."
        return (
            f"Shark in iter {self.sim_iter} living {self.n_iter_live} "
            f"has Energy={self.energy}."
        )


def new_animal(species: Species, sim_iter: int, energy: int) -> Animal:
    """Create an animal; ``energy`` is kept only for sharks."""
    species = Species(species)
    return Animal(
        species=species,
        sim_iter=sim_iter,
        n_iter_live=0,
        energy=energy if species is Species.SHARK else 0,
    )