"""Engine driving the SurfaceOrganicMatter component day by day.

The engine owns the variable kiosk, fetches the driving variables from a
weather data provider and sends the management events as signals to the
component. Output is collected every day and returned as a pandas
DataFrame.
"""
import datetime as dt

import pandas as pd
from tqdm.auto import tqdm

from .base import VariableKiosk
from .base.dispatcher import DispatcherObject
from . import signals
from .residue import SurfaceOrganicMatter, UnlimitedNutrientModel
from .fileinput import YAMLResidueTypeProvider


class SurfaceResidueEngine(DispatcherObject):
    """Simulation engine for the surface residues of a single field.

    :param parvalues: dict with parameter values of SurfaceOrganicMatter,
        at least DLAYR (soil layer thickness, mm)
    :param weatherdataprovider: provides RAIN, TMIN, TMAX and EOS per day
    :param residue_types: ResidueTypeProvider; the packaged registry is
        used when not given
    :param nutrient_model: NutrientModel deciding on the actual
        decomposition, an UnlimitedNutrientModel when not given
    :param start_date: first day of the simulation, defaults to the first
        day with weather data

    Every call of `run()` simulates whole days: the rates are calculated
    with the weather of the day, the states are integrated and the output
    is stored. Events sent between two calls (`add_residue()`,
    `apply_tillage()`, ...) change the residue before the next day starts.

        >>> engine = SurfaceResidueEngine({"DLAYR": [100., 200., 300.]}, wdp)
        >>> engine.add_residue(mass=3000., N=30., P=3., type="wheat")
        >>> engine.run(days=30)
        >>> df = engine.get_output()
    """

    def __init__(
        self,
        parvalues,
        weatherdataprovider,
        residue_types=None,
        nutrient_model=None,
        start_date=None,
    ):
        self.kiosk = VariableKiosk()
        self.weatherdataprovider = weatherdataprovider
        self.nutrient_model = nutrient_model or UnlimitedNutrientModel()
        if residue_types is None:
            residue_types = YAMLResidueTypeProvider()

        self.day = start_date or weatherdataprovider.first_date
        self._saved_output = []

        self.surfom = SurfaceOrganicMatter(
            self.day, self.kiosk, parvalues, residue_types, self.nutrient_model
        )
        self.logger.info("Surface residue engine started on %s" % self.day)

    def get_variable(self, varname):
        """Return the value of a published state or rate variable.

        `varname` is looked up as given and then in upper case; None is
        returned when neither is published.
        """
        for name in (varname, varname.upper()):
            if name in self.kiosk:
                return self.kiosk[name]
        return None

    def zerofy(self):
        """Reset the daily rates of the surface residue to zero."""
        self.surfom.zerofy()

    def _run(self):
        """Simulate a single day and move on to the next one."""
        drv = self.weatherdataprovider(self.day)
        self.surfom.calc_rates(self.day, drv)
        self.surfom.integrate(self.day, 1.0)
        self._save_output(self.day)
        self.zerofy()
        self.day += dt.timedelta(days=1)

    def run(self, days=1, progress=False):
        """Advances the system state with given number of days"""
        for _ in tqdm(range(days), disable=not progress, desc="surfom"):
            self._run()

    def run_till(self, rday, progress=False):
        """Runs the system until rday is reached, rday is included."""
        days = (rday - self.day).days + 1
        if days <= 0:
            msg = "Day %s is before the current simulation day %s, not running." % (
                rday,
                self.day,
            )
            self.logger.warning(msg)
            return
        self.run(days, progress=progress)

    def _save_output(self, day):
        """Copy the published states and rates of `day` from the kiosk."""
        row = {"day": day}
        for varname in list(self.kiosk.published_states) + list(
            self.kiosk.published_rates
        ):
            row[varname] = self.kiosk.get(varname)
        self._saved_output.append(row)

    def get_output(self):
        """Returns the daily output as a DataFrame indexed by day."""
        df = pd.DataFrame(self._saved_output)
        if len(df) == 0:
            return df
        return df.set_index("day")

    # Management events

    def irrigate(self, amount):
        """Irrigation (mm) counted as rain for leaching and soil evaporation."""
        self._send_signal(signal=signals.irrigate, amount=amount)

    def add_residue(self, mass, N, P, type, name=""):
        self._send_signal(
            signal=signals.add_residue, mass=mass, N=N, P=P, type=type, name=name
        )

    def add_faeces(self, faeces):
        self._send_signal(signal=signals.add_faeces, faeces=faeces)

    def biomass_removed(self, crop_type, dm, n, p, fraction_to_residue):
        self._send_signal(
            signal=signals.biomass_removed,
            crop_type=crop_type,
            dm=dm,
            n=n,
            p=p,
            fraction_to_residue=fraction_to_residue,
        )

    def apply_tillage(self, type, f_incorp=None, depth=None):
        """Incorporate residue by tillage of `type`, optionally overriding the
        fraction incorporated and the depth (mm) of that type.
        """
        self._send_signal(
            signal=signals.apply_tillage, type=type, f_incorp=f_incorp, depth=depth
        )

    def reset(self):
        self._send_signal(signal=signals.reset)
