import pytest

from oceanlab.animals import Animal, Species, new_animal


def test_new_shark_keeps_energy():
    shark = new_animal(Species.SHARK, 4, 10)
    assert shark.species is Species.SHARK
    assert shark.sim_iter == 4
    assert shark.n_iter_live == 0
    assert shark.energy == 10


def test_new_fish_ignores_energy():
    fish = new_animal(Species.FISH, 2, 10)
    assert fish.species is Species.FISH
    assert fish.energy == 0
    assert fish.sim_iter == 2


def test_new_animal_accepts_raw_values():
    assert new_animal(1, 0, 3).species is Species.SHARK


def test_new_animal_rejects_unknown_species():
    with pytest.raises(ValueError):
        new_animal(7, 0, 0)


def test_describe_fish():
    fish = Animal(Species.FISH, sim_iter=3, n_iter_live=2)
    assert fish.describe() == "Fish in iter 3 living 2 iter."


def test_describe_shark():
    shark = Animal(Species.SHARK, sim_iter=5, n_iter_live=1, energy=8)
    assert shark.describe() == "Shark in iter 5 living 1 has Energy=8."