"""Readers for residue type descriptions and weather data."""
from .yaml_residuetypeprovider import YAMLResidueTypeProvider
from .pandas_weatherdataprovider import PandasWeatherDataProvider
