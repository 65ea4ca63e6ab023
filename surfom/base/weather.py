import datetime as dt
import logging

from .. import exceptions as exc


class WeatherDataContainer:
    """Class for storing weather data elements of a single day.

    Weather data elements are provided through keywords that are also the
    attribute names under which the variables can accessed in the
    WeatherDataContainer. So the keyword TMAX=15 sets an attribute
    TMAX with value 15.

    The following keywords are compulsory:

    :keyword DAY: the day of observation (python datetime.date)
    :keyword RAIN: Rainfall (mm)
    :keyword TMIN: Daily minimum air temperature (Celsius)
    :keyword TMAX: Daily maximum air temperature (Celsius)
    :keyword EOS: Potential soil evaporation (mm)
    """

    required = ["DAY", "RAIN", "TMIN", "TMAX", "EOS"]
    units = {"RAIN": "mm", "TMIN": "Celsius", "TMAX": "Celsius", "EOS": "mm"}

    def __init__(self, *args, **kwargs):
        if len(args) > 0:
            msg = (
                "WeatherDataContainer should be initialized by providing weather "
                + "variables through keywords only. Got '%s' instead."
            )
            raise exc.WeatherDataProviderError(msg % args)

        for varname in self.required:
            if varname not in kwargs:
                msg = "Required weather variable '%s' missing." % varname
                raise exc.WeatherDataProviderError(msg)

        day = kwargs.pop("DAY")
        if isinstance(day, dt.datetime):
            day = day.date()
        self.DAY = day

        for varname, value in kwargs.items():
            if varname in self.units:
                value = float(value)
            setattr(self, varname, value)

    def __str__(self):
        msg = "Weather data for %s\n" % self.DAY
        for varname in self.required[1:]:
            msg += "%5s: %8.2f %s\n" % (varname, getattr(self, varname), self.units[varname])
        return msg

    @property
    def TEMP(self):
        """Daily average air temperature (Celsius)."""
        return (self.TMIN + self.TMAX) / 2.0


class WeatherDataProvider:
    """Base class for weather data providers.

    Subclasses fill `self.store` with WeatherDataContainers keyed by date.
    Calling the provider with a date returns the container for that day.
    """

    def __init__(self):
        self.store = {}

    @property
    def logger(self):
        loggername = "%s.%s" % (self.__class__.__module__, self.__class__.__name__)
        return logging.getLogger(loggername)

    def _store_WeatherDataContainer(self, wdc):
        self.store[wdc.DAY] = wdc

    @property
    def first_date(self):
        return min(self.store) if self.store else None

    @property
    def last_date(self):
        return max(self.store) if self.store else None

    def __call__(self, day):
        if isinstance(day, dt.datetime):
            day = day.date()
        try:
            return self.store[day]
        except KeyError:
            msg = "No weather data for %s." % day
            raise exc.WeatherDataProviderError(msg)
