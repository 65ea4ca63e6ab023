import logging

import pytest

from surfom import exceptions as exc
from surfom.residue import transfers
from surfom.residue.pools import MAX_FR, OMFraction, ResidueTypeConstants

from conftest import wheat_description


def test_constants_are_read():
    c = ResidueTypeConstants("wheat", wheat_description())
    assert c.fraction_C == 0.4
    assert c.cf_contrib == 1
    assert c.fr_c == [0.6, 0.3, 0.1]


def test_constants_out_of_bounds_are_clipped_with_warning(caplog):
    description = wheat_description(fraction_C=1.5, nh4ppm=5000.0, specific_area=-1.0)
    with caplog.at_level(logging.WARNING):
        c = ResidueTypeConstants("wheat", description)
    assert c.fraction_C == 1.0
    assert c.nh4ppm == 2000.0
    assert c.specific_area == 0.0
    assert "out of bounds" in caplog.text


def test_fractions_not_summing_to_one_are_warned(caplog):
    with caplog.at_level(logging.WARNING):
        c = ResidueTypeConstants("wheat", wheat_description(fr_n=[0.5, 0.3, 0.1]))
    assert c.fr_n == [0.5, 0.3, 0.1]
    assert "fr_n of 'wheat' sums to 0.9000" in caplog.text
    assert "fr_c" not in caplog.text


def test_constants_cf_contrib_is_zero_or_one():
    assert ResidueTypeConstants("x", wheat_description(cf_contrib=5)).cf_contrib == 1
    assert ResidueTypeConstants("x", wheat_description(cf_contrib=-2)).cf_contrib == 0


def test_constants_inconsistent_fractions():
    with pytest.raises(exc.ConfigurationError):
        ResidueTypeConstants("x", wheat_description(fr_n=[0.5, 0.5]))


def test_constants_wrong_number_of_classes():
    description = wheat_description(fr_c=[0.5, 0.5], fr_n=[0.5, 0.5], fr_p=[0.5, 0.5])
    with pytest.raises(exc.ConfigurationError):
        ResidueTypeConstants("x", description)


def test_constants_missing_key():
    description = wheat_description()
    del description["pot_decomp_rate"]
    with pytest.raises(exc.ConfigurationError):
        ResidueTypeConstants("x", description)


def test_new_pool_has_three_empty_classes(store):
    pool = store.add_pool("stubble", "wheat")
    assert len(pool.standing) == MAX_FR
    assert len(pool.lying) == MAX_FR
    assert all(f == OMFraction() for f in pool.standing + pool.lying)
    assert pool.pot_decomp_rate == 0.1


def test_unknown_residue_type(store):
    with pytest.raises(exc.ConfigurationError):
        store.resolve("canola", "canola")
    assert len(store) == 0


def test_duplicate_pool(store):
    store.add_pool("wheat", "wheat")
    with pytest.raises(exc.InvalidRequest):
        store.add_pool("Wheat", "wheat")


def test_lookup_is_case_insensitive(store):
    store.add_pool("Wheat", "WHEAT")
    assert "wheat" in store
    assert store["WHEAT"].name == "Wheat"
    assert store.resolve("wheat", "wheat") is store["Wheat"]


def test_weight_of_unknown_pool(store):
    with pytest.raises(exc.InvalidRequest):
        store.weight_of("maize")


def test_weight_of_pool(store):
    transfers.load_initial_residue(store, "stubble", "wheat", 1000.0, 0.4, 50.0, 0.0)
    assert store.weight_of("Stubble") == pytest.approx(1000.0)


def test_totals(store):
    transfers.load_initial_residue(store, "stubble", "wheat", 1000.0, 0.4, 50.0, 0.0)
    assert store.total("amount", lying=False) == pytest.approx(400.0)
    assert store.total("amount", standing=False) == pytest.approx(600.0)
    assert store.total("C") == pytest.approx(400.0)
    assert store.total("N") == pytest.approx(8.0)


def test_total_state_includes_mineral_nutrients(store):
    pool = transfers.add(store, 1000.0, 10.0, 1.0, "manure")
    state = store.total_state()
    assert state.amount == pytest.approx(1000.0)
    assert state.N == pytest.approx(10.0 + pool.no3 + pool.nh4)
    assert state.P == pytest.approx(1.0 + pool.po4)


def test_total_state_of_empty_store(store):
    assert store.total_state() == OMFraction()


def test_pools_iterate_in_order_of_creation(store):
    store.add_pool("manure", "manure")
    store.add_pool("wheat", "wheat")
    assert store.names == ["manure", "wheat"]


def test_scale_pool(store):
    pool = transfers.add(store, 1000.0, 10.0, 1.0, "manure")
    no3 = pool.no3
    pool.scale(0.25)
    assert pool.lying_sum("amount") == pytest.approx(250.0)
    assert pool.no3 == pytest.approx(0.25 * no3)
