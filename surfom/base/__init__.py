"""Base classes for creating simulation units of the surface organic matter model.

In general these classes are not to be used directly, but are to be subclassed
when creating simulation units.
"""
from .variablekiosk import VariableKiosk
from .states_rates import ParamTemplate, StatesTemplate, RatesTemplate
from .simulationobject import SimulationObject
from .weather import WeatherDataContainer, WeatherDataProvider
from .residue_type_provider import ResidueTypeProvider
