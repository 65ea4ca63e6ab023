import math

import pytest

from surfom.residue import transfers, ResiduePoolStore
from surfom.residue.cover import cover_of_pool, cover_total


def test_no_residue_no_cover(store):
    assert cover_total(store, 0.5) == 0.0


def test_cover_of_lying_residue(store):
    pool = transfers.add(store, 1000.0, 10.0, 1.0, "wheat")
    assert cover_of_pool(pool, 0.5) == pytest.approx(1.0 - math.exp(-0.5))


def test_cover_of_standing_residue(store):
    pool = transfers.load_initial_residue(store, "stubble", "wheat", 1000.0, 1.0, 50.0, 0.0)
    assert cover_of_pool(pool, 0.5) == pytest.approx(1.0 - math.exp(-0.25))


def test_cover_combines_standing_and_lying(store):
    pool = transfers.load_initial_residue(store, "stubble", "wheat", 1000.0, 0.5, 50.0, 0.0)
    lying = 1.0 - math.exp(-0.25)
    standing = 1.0 - math.exp(-0.5 * 0.25)
    expected = 1.0 - (1.0 - lying) * (1.0 - standing)
    assert cover_of_pool(pool, 0.5) == pytest.approx(expected)


def test_cover_independent_of_order(residue_types):
    first = ResiduePoolStore(residue_types)
    transfers.add(first, 1000.0, 10.0, 1.0, "wheat")
    transfers.add(first, 5000.0, 50.0, 5.0, "manure")

    second = ResiduePoolStore(residue_types)
    transfers.add(second, 5000.0, 50.0, 5.0, "manure")
    transfers.add(second, 1000.0, 10.0, 1.0, "wheat")

    assert cover_total(first, 0.5) == pytest.approx(cover_total(second, 0.5))


def test_cover_increases_with_mass(store):
    transfers.add(store, 5000.0, 50.0, 5.0, "manure")
    previous = cover_total(store, 0.5)
    for _ in range(5):
        transfers.add(store, 500.0, 5.0, 0.5, "wheat")
        current = cover_total(store, 0.5)
        assert current > previous
        assert current <= 1.0
        previous = current
