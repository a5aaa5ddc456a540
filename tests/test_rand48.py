import pytest

from oceanlab.rand48 import Rand48


def test_first_value_for_seed_zero():
    assert Rand48(0).lrand48() == 366850414


def test_same_seed_same_sequence():
    a, b = Rand48(42), Rand48(42)
    assert [a.lrand48() for _ in range(20)] == [b.lrand48() for _ in range(20)]


def test_reseed_restarts_sequence():
    rng = Rand48(7)
    first = [rng.lrand48() for _ in range(5)]
    rng.seed(7)
    assert [rng.lrand48() for _ in range(5)] == first


def test_seed_uses_low_32_bits():
    a = Rand48(5)
    b = Rand48(5 + (1 << 32))
    assert a.lrand48() == b.lrand48()


def test_lrand48_range():
    rng = Rand48(123)
    values = [rng.lrand48() for _ in range(500)]
    assert all(0 <= v < 2**31 for v in values)


def test_drand48_range():
    rng = Rand48(9)
    values = [rng.drand48() for _ in range(500)]
    assert all(0.0 <= v < 1.0 for v in values)


def test_drand48_and_lrand48_share_state():
    a, b = Rand48(3), Rand48(3)
    assert int(a.drand48() * 2**31) == b.lrand48()


def test_randbelow_matches_modulo():
    a, b = Rand48(11), Rand48(11)
    for n in (1, 2, 3, 4, 17):
        assert a.randbelow(n) == b.lrand48() % n


@pytest.mark.parametrize("n", [0, -3])
def test_randbelow_rejects_non_positive(n):
    with pytest.raises(ValueError):
        Rand48(1).randbelow(n)