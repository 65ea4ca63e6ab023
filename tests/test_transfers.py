import pytest

from surfom.residue import transfers, Faeces


def test_add_new_residue_type(store):
    pool = transfers.add(store, 1000.0, 10.0, 1.0, "wheat", "")
    assert len(store) == 1
    assert pool.lying[0].amount == pytest.approx(600.0)
    assert pool.lying[0].C == pytest.approx(240.0)
    assert pool.lying[0].N == pytest.approx(5.0)
    assert pool.lying[0].P == pytest.approx(0.4)
    assert pool.lying_sum("amount") == pytest.approx(1000.0)
    assert pool.standing_sum("amount") == 0.0


def test_add_twice_uses_same_pool(store):
    first = transfers.add(store, 1000.0, 10.0, 1.0, "wheat")
    second = transfers.add(store, 500.0, 5.0, 0.5, "Wheat")
    assert first is second
    assert len(store) == 1
    assert first.lying_sum("amount") == pytest.approx(1500.0)


def test_add_converts_ppm_to_mass(store):
    pool = transfers.add(store, 2000.0, 20.0, 2.0, "manure")
    assert pool.no3 == pytest.approx(0.2)
    assert pool.nh4 == pytest.approx(1.0)
    assert pool.po4 == pytest.approx(0.1)


def test_add_faeces(store):
    faeces = Faeces(om_weight=200.0, om_n=10.0, om_p=2.0, defaecations=3)
    pool = transfers.add_faeces(store, faeces, 0.5)
    assert pool.name == "manure"
    assert pool.lying_sum("amount") == pytest.approx(100.0)
    assert pool.lying_sum("N") == pytest.approx(5.0)
    assert pool.lying_sum("P") == pytest.approx(1.0)


def test_faeces_unknown_attribute():
    with pytest.raises(TypeError):
        Faeces(om_weight=1.0, urine=2.0)


def test_add_removed_biomass(store):
    added = transfers.add_removed_biomass(
        store, "wheat", [1000.0, 500.0], [10.0, 2.0], [1.0, 0.5], [0.5, 0.0]
    )
    assert added == pytest.approx(500.0)
    assert store["wheat"].lying_sum("amount") == pytest.approx(500.0)
    assert store["wheat"].lying_sum("N") == pytest.approx(5.0)


def test_add_removed_biomass_nothing_to_residue(store):
    added = transfers.add_removed_biomass(store, "wheat", [1000.0], [10.0], [1.0], [0.0])
    assert added == 0.0
    assert len(store) == 0


def test_load_initial_residue(store):
    pool = transfers.load_initial_residue(store, "stubble", "wheat", 1000.0, 0.25, 40.0, 200.0)
    assert pool.name == "stubble"
    assert pool.organic_matter_type == "wheat"
    assert pool.standing_sum("amount") == pytest.approx(250.0)
    assert pool.lying_sum("amount") == pytest.approx(750.0)
    assert pool.total("C") == pytest.approx(400.0)
    assert pool.total("N") == pytest.approx(10.0)
    assert pool.total("P") == pytest.approx(2.0)


def test_load_initial_residue_zero_ratios(store):
    pool = transfers.load_initial_residue(store, "stubble", "wheat", 1000.0, 0.0, 0.0, 0.0)
    assert pool.total("N") == 0.0
    assert pool.total("P") == 0.0


def test_leach_without_rain(store, nutrient_model):
    pool = transfers.add(store, 2000.0, 20.0, 2.0, "manure")
    before = (pool.no3, pool.nh4, pool.po4)
    leached = transfers.leach(store, 0.0, 25.0, nutrient_model)
    assert leached == (0.0, 0.0, 0.0)
    assert (pool.no3, pool.nh4, pool.po4) == before


def test_leach_half(store, nutrient_model):
    pool = transfers.add(store, 2000.0, 20.0, 2.0, "manure")
    no3, nh4, po4 = transfers.leach(store, 12.5, 25.0, nutrient_model)
    assert no3 == pytest.approx(0.1)
    assert nh4 == pytest.approx(0.5)
    assert po4 == pytest.approx(0.05)
    assert pool.nh4 == pytest.approx(0.5)
    assert nutrient_model.leachate[(0, "NH4")] == pytest.approx(0.5)
    assert nutrient_model.leachate[(0, "NO3")] == pytest.approx(0.1)


def test_leach_does_not_forward_phosphate(store, nutrient_model):
    transfers.add(store, 2000.0, 20.0, 2.0, "manure")
    transfers.leach(store, 25.0, 25.0, nutrient_model)
    species = {key[1] for key in nutrient_model.leachate}
    assert species == {"NO3", "NH4"}


def test_leach_never_negative(store, nutrient_model):
    pool = transfers.add(store, 2000.0, 20.0, 2.0, "manure")
    transfers.leach(store, 100.0, 25.0, nutrient_model)
    assert pool.no3 == 0.0
    assert pool.nh4 == 0.0
    assert pool.po4 == 0.0


def test_incorporate_everything(store, nutrient_model):
    transfers.load_initial_residue(store, "stubble", "wheat", 1000.0, 0.3, 40.0, 200.0)
    transfers.add(store, 2000.0, 20.0, 2.0, "manure")
    total_c = store.total("C")

    profile = transfers.incorporate(store, 1.0, 600.0, [100.0, 200.0, 300.0], nutrient_model)

    assert profile is not None
    assert profile.C == pytest.approx(total_c)
    assert nutrient_model.profiles == [profile]
    for pool in store:
        for attr in ("amount", "C", "N", "P"):
            assert pool.total(attr) == 0.0
        assert (pool.no3, pool.nh4, pool.po4) == (0.0, 0.0, 0.0)


def test_incorporate_distribution_over_layers(store, nutrient_model):
    transfers.add(store, 1000.0, 10.0, 1.0, "wheat")
    profile = transfers.incorporate(store, 0.6, 150.0, [100.0, 200.0, 300.0], nutrient_model)

    assert len(profile.layers) == 2
    top, second = profile.layers
    assert top.thickness == 100.0
    assert second.thickness == 200.0
    top_c = sum(f.C for f in top.pools)
    second_c = sum(f.C for f in second.pools)
    assert top_c == pytest.approx(400.0 * 0.6 * 100.0 / 150.0)
    assert second_c == pytest.approx(400.0 * 0.6 * 50.0 / 150.0)
    assert top.pools[0].C == pytest.approx(240.0 * 0.6 * 100.0 / 150.0)
    assert all(f.ash_alk == 0.0 for f in top.pools)
    assert store["wheat"].total("C") == pytest.approx(400.0 * 0.4)


def test_incorporate_clamps_fraction(store, nutrient_model):
    transfers.add(store, 1000.0, 10.0, 1.0, "wheat")
    transfers.incorporate(store, 1.5, 100.0, [100.0, 200.0], nutrient_model)
    assert store["wheat"].total("amount") == 0.0


def test_incorporate_empty_store(store, nutrient_model):
    profile = transfers.incorporate(store, 0.5, 100.0, [100.0, 200.0], nutrient_model)
    assert profile is None
    assert nutrient_model.profiles == []


def test_incorporate_without_depth(store, nutrient_model):
    transfers.add(store, 1000.0, 10.0, 1.0, "wheat")
    profile = transfers.incorporate(store, 0.9, 0.0, [100.0, 200.0], nutrient_model)
    assert profile is None
    assert store["wheat"].total("amount") == pytest.approx(100.0)


def test_incorporate_below_profile_clears_surface(store, nutrient_model):
    transfers.add(store, 1000.0, 10.0, 1.0, "wheat")
    transfers.add(store, 2000.0, 20.0, 2.0, "manure")
    transfers.incorporate(store, 1.0, 2000.0, [100.0, 200.0, 300.0], nutrient_model)
    assert store.total_state().amount == 0.0
    assert store.total_state().N == 0.0
