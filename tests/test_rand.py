import math

import pytest

from rastergrid.rand import Random


def test_same_seed_same_sequence():
    a = Random(42)
    b = Random(42)
    assert [a.rand01() for _ in range(10)] == [b.rand01() for _ in range(10)]


@pytest.mark.parametrize(
    "method,low,high",
    [
        ("rand01", 0.0, 1.0),
        ("rand005", 0.0, 0.5),
        ("rand051", 0.5, 1.0),
        ("rand11", -1.0, 1.0),
        ("rand0pi", 0.0, 2.0 * math.pi),
    ],
)
def test_ranges(method, low, high):
    rng = Random(7)
    values = [getattr(rng, method)() for _ in range(500)]
    assert all(low <= v < high for v in values)


def test_rand_int_stays_int_and_in_range():
    rng = Random(3)
    values = [rng.rand(2, 9) for _ in range(300)]
    assert all(isinstance(v, int) and 2 <= v < 9 for v in values)


def test_rand_float_in_range():
    rng = Random(3)
    values = [rng.rand(1.5, 2.5) for _ in range(300)]
    assert all(1.5 <= v < 2.5 for v in values)


def test_shuffle_is_permutation():
    rng = Random(11)
    items = list(range(50))
    rng.shuffle(items)
    assert sorted(items) == list(range(50))


def test_shuffle_deterministic_with_seed():
    a = list(range(20))
    b = list(range(20))
    Random(5).shuffle(a)
    Random(5).shuffle(b)
    assert a == b