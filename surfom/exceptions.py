"""Exceptions raised by the surface organic matter model."""


class SurfomError(Exception):
    pass


class ParameterError(SurfomError):
    """Missing or invalid model parameter."""


class ConfigurationError(SurfomError):
    """Unknown residue or tillage type, or a malformed type description."""


class ProtocolViolation(SurfomError):
    """The nutrient model returned a decomposition outside the offered bounds.

    This is a broken contract between the residue model and the nutrient
    model and ends the simulation run.
    """


class InvalidRequest(SurfomError):
    pass


class WeatherDataProviderError(SurfomError):
    pass
