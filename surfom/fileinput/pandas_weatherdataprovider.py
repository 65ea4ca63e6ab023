import pandas as pd

from ..base import WeatherDataProvider, WeatherDataContainer
from .. import exceptions as exc


class PandasWeatherDataProvider(WeatherDataProvider):
    """Weather data provider reading daily weather from a pandas DataFrame.

    :param data: a DataFrame, or the path of a CSV file, with the columns
        DAY, RAIN (mm), TMIN, TMAX (Celsius) and EOS (mm). Further columns
        are stored on the WeatherDataContainers as they are.

        >>> df = pd.DataFrame({"DAY": pd.date_range("2020-01-01", periods=2),
        ...                    "RAIN": [0., 12.], "TMIN": [5., 6.],
        ...                    "TMAX": [15., 18.], "EOS": [3., 1.]})
        >>> wdp = PandasWeatherDataProvider(df)
        >>> wdp(datetime.date(2020, 1, 2)).RAIN
        12.0
    """

    def __init__(self, data):
        WeatherDataProvider.__init__(self)

        if isinstance(data, pd.DataFrame):
            df = data.copy()
        else:
            df = pd.read_csv(data)

        missing = set(WeatherDataContainer.required) - set(df.columns)
        if missing:
            msg = "Weather data lacks required column(s): %s" % ", ".join(sorted(missing))
            raise exc.WeatherDataProviderError(msg)

        df["DAY"] = pd.to_datetime(df["DAY"]).dt.date
        for rec in df.to_dict(orient="records"):
            self._store_WeatherDataContainer(WeatherDataContainer(**rec))

        self.logger.debug(
            "Read weather data from %s to %s" % (self.first_date, self.last_date)
        )
