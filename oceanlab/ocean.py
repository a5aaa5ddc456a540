"""The toroidal Wa-tor ocean: a grid of cells holding fish, sharks or nothing."""

from __future__ import annotations

import os
from collections.abc import Iterator
from dataclasses import dataclass

from oceanlab.animals import Animal, Species, new_animal
from oceanlab.rand48 import Rand48

Position = tuple[int, int]

_WHITE = bytes((255, 255, 255))
_RED = bytes((255, 0, 0))
_BLUE = bytes((0, 0, 255))


@dataclass(frozen=True)
class Rules:
    """Parameters of the predator-prey model.

    ``fish_breed`` and ``shark_breed`` are the iterations an animal must
    live before it breeds, ``shark_energy`` is a newborn shark's energy and
    ``shark_eat_energy`` the energy a shark gains from eating a fish.
    """

    fish_breed: int = 5
    shark_breed: int = 40
    shark_energy: int = 10
    shark_eat_energy: int = 3


class Ocean:
    """A ``rows`` x ``cols`` grid that wraps around at every edge."""

    def __init__(self, rows: int, cols: int) -> None:
        if rows <= 0 or cols <= 0:
            raise ValueError("rows and cols must be positive")
        self.rows = rows
        self.cols = cols
        self._cells: list[list[Animal | None]] = [[None] * cols for _ in range(rows)]

    def __getitem__(self, pos: Position) -> Animal | None:
        i, j = pos
        return self._cells[i][j]

    def __setitem__(self, pos: Position, animal: Animal | None) -> None:
        i, j = pos
        self._cells[i][j] = animal

    def _animals(self) -> Iterator[Animal]:
        for row in self._cells:
            yield from (cell for cell in row if cell is not None)

    def _neighbours(self, i: int, j: int) -> list[Position]:
        # North, South, East, West.
        return [
            ((i - 1) % self.rows, j),
            ((i + 1) % self.rows, j),
            (i, (j + 1) % self.cols),
            (i, (j - 1) % self.cols),
        ]

    def populate(self, n_fishes: int, n_sharks: int, rules: Rules, rng: Rand48) -> None:
        """Place animals on random empty cells with random breeding ages."""
        empty = sum(cell is None for row in self._cells for cell in row)
        if n_fishes < 0 or n_sharks < 0:
            raise ValueError("animal counts must not be negative")
        if n_fishes + n_sharks > empty:
            raise ValueError("The number of animals > number of free cells")
        for species, count, breed in (
            (Species.FISH, n_fishes, rules.fish_breed),
            (Species.SHARK, n_sharks, rules.shark_breed),
        ):
            for _ in range(count):
                while True:
                    row = rng.randbelow(self.rows)
                    col = rng.randbelow(self.cols)
                    if self._cells[row][col] is None:
                        break
                animal = new_animal(species, 0, rules.shark_energy)
                animal.n_iter_live = rng.randbelow(breed)
                self._cells[row][col] = animal

    def free_neighbours(self, i: int, j: int) -> list[Position]:
        """Empty neighbour cells in the order north, south, east, west."""
        return [pos for pos in self._neighbours(i, j) if self[pos] is None]

    def fish_neighbours(self, i: int, j: int) -> list[Position]:
        """Neighbour cells holding a fish, in the order north, south, east, west."""
        return [
            pos
            for pos in self._neighbours(i, j)
            if (cell := self[pos]) is not None and cell.species is Species.FISH
        ]

    @staticmethod
    def _choose(options: list[Position], rng: Rand48) -> Position:
        if len(options) > 1:
            return options[rng.randbelow(len(options))]
        return options[0]

    def iterate_fish(
        self, i: int, j: int, sim_iter: int, rules: Rules, rng: Rand48
    ) -> tuple[int, int]:
        """Move or breed the fish at ``(i, j)``; return the change in (fishes, sharks)."""
        fish = self._cells[i][j]
        if fish is None or fish.sim_iter > sim_iter:
            return 0, 0
        fish.sim_iter += 1
        fish.n_iter_live += 1

        free = self.free_neighbours(i, j)
        if not free:
            return 0, 0
        target = self._choose(free, rng)

        if fish.n_iter_live >= rules.fish_breed:
            self[target] = new_animal(Species.FISH, sim_iter + 1, 0)
            fish.n_iter_live = 0
            return 1, 0

        self[target] = fish
        self._cells[i][j] = None
        return 0, 0

    def iterate_shark(
        self, i: int, j: int, sim_iter: int, rules: Rules, rng: Rand48
    ) -> tuple[int, int]:
        """Let the shark at ``(i, j)`` starve, eat, breed or move.

        Returns the change in (fishes, sharks).
        """
        shark = self._cells[i][j]
        if shark is None or shark.sim_iter > sim_iter:
            return 0, 0
        shark.sim_iter += 1
        shark.n_iter_live += 1
        shark.energy -= 1

        if shark.energy == 0:
            self._cells[i][j] = None
            return 0, -1

        d_fish = d_shark = 0
        here: Position = (i, j)
        prey = self.fish_neighbours(i, j)
        ate = bool(prey)
        if ate:
            target = self._choose(prey, rng)
            d_fish -= 1
            shark.energy += rules.shark_eat_energy
            self[target] = shark
            self[here] = None
            # The shark now stands on the fish's cell; a newborn goes to the old one.
            here, target = target, here
        else:
            free = self.free_neighbours(i, j)
            if not free:
                return 0, 0
            target = self._choose(free, rng)

        if shark.n_iter_live >= rules.shark_breed:
            self[target] = new_animal(Species.SHARK, sim_iter + 1, rules.shark_energy)
            shark.n_iter_live = 0
            return d_fish, d_shark + 1

        if not ate:
            self[target] = shark
            self[here] = None
        return d_fish, d_shark

    def iterate_cell(
        self, i: int, j: int, sim_iter: int, rules: Rules, rng: Rand48
    ) -> tuple[int, int]:
        """Act on whatever lives at ``(i, j)``; return the change in (fishes, sharks)."""
        d_fish = d_shark = 0
        cell = self._cells[i][j]
        if cell is not None and cell.species is Species.FISH:
            df, ds = self.iterate_fish(i, j, sim_iter, rules, rng)
            d_fish += df
            d_shark += ds
        cell = self._cells[i][j]
        if cell is not None and cell.species is Species.SHARK:
            df, ds = self.iterate_shark(i, j, sim_iter, rules, rng)
            d_fish += df
            d_shark += ds
        return d_fish, d_shark

    def iterate(self, sim_iter: int, rules: Rules, rng: Rand48) -> tuple[int, int]:
        """Run one simulation iteration row by row; return the change in (fishes, sharks)."""
        d_fish = d_shark = 0
        for i in range(self.rows):
            for j in range(self.cols):
                df, ds = self.iterate_cell(i, j, sim_iter, rules, rng)
                d_fish += df
                d_shark += ds
        return d_fish, d_shark

    def count(self, species: Species) -> int:
        """Number of animals of ``species`` in the ocean."""
        species = Species(species)
        return sum(animal.species is species for animal in self._animals())

    def to_rgb(self) -> bytes:
        """Raw RGB image: white water, blue fish, red sharks."""
        return b"".join(
            _WHITE if cell is None else (_BLUE if cell.species is Species.FISH else _RED)
            for row in self._cells
            for cell in row
        )

    def write_rgb(self, path: str | os.PathLike[str]) -> None:
        """Write :meth:`to_rgb` to ``path``."""
        with open(path, "wb") as out:
            out.write(self.to_rgb())

    def render(self) -> str:
        """Text picture of the grid: ``0`` water, ``F`` fish, ``S`` shark."""
        return "".join(
            "".join(
                "0" if cell is None else ("F" if cell.species is Species.FISH else "S")
                for cell in row
            )
            + "\n"
            for row in self._cells
        )