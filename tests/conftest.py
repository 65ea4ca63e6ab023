import datetime as dt

import pandas as pd
import pytest

from surfom.base import ResidueTypeProvider, VariableKiosk
from surfom.fileinput import PandasWeatherDataProvider
from surfom.residue import ResiduePoolStore, UnlimitedNutrientModel

START = dt.date(2020, 1, 1)


def wheat_description(**overrides):
    description = {
        "fraction_C": 0.4,
        "no3ppm": 0.0,
        "nh4ppm": 0.0,
        "po4ppm": 0.0,
        "specific_area": 0.0005,
        "cf_contrib": 1,
        "pot_decomp_rate": 0.1,
        "fr_c": [0.6, 0.3, 0.1],
        "fr_n": [0.5, 0.3, 0.2],
        "fr_p": [0.4, 0.4, 0.2],
    }
    description.update(overrides)
    return description


def manure_description(**overrides):
    description = {
        "fraction_C": 0.08,
        "no3ppm": 100.0,
        "nh4ppm": 500.0,
        "po4ppm": 50.0,
        "specific_area": 0.0001,
        "cf_contrib": 0,
        "pot_decomp_rate": 0.1,
        "fr_c": [0.3, 0.3, 0.4],
        "fr_n": [0.3, 0.3, 0.4],
        "fr_p": [0.3, 0.3, 0.4],
    }
    description.update(overrides)
    return description


@pytest.fixture
def residue_types():
    return ResidueTypeProvider(
        {"wheat": wheat_description(), "manure": manure_description()}
    )


@pytest.fixture
def store(residue_types):
    return ResiduePoolStore(residue_types)


@pytest.fixture
def kiosk():
    return VariableKiosk()


@pytest.fixture
def nutrient_model():
    return UnlimitedNutrientModel()


def make_weather(days=10, rain=0.0, tmin=10.0, tmax=30.0, eos=0.0):
    """Daily weather from START; the average temperature of 20 C is optimal."""
    return pd.DataFrame(
        {
            "DAY": pd.date_range(START, periods=days, freq="D"),
            "RAIN": [rain] * days,
            "TMIN": [tmin] * days,
            "TMAX": [tmax] * days,
            "EOS": [eos] * days,
        }
    )


@pytest.fixture
def weather():
    return PandasWeatherDataProvider(make_weather())


@pytest.fixture
def parvalues():
    # A zero C:N threshold switches the C:N ratio factor off
    return {"DLAYR": [100.0, 200.0, 300.0], "CNRatioDecompThreshold": 0.0}
