"""Simulation object for carbon, nitrogen and phosphorus in residue lying on
and standing above the soil surface.
"""
from ..decorators import prepare_rates, prepare_states
from ..util import merge_dict
from ..base import ParamTemplate, StatesTemplate, RatesTemplate, SimulationObject
from .. import exceptions as exc
from .. import signals
from ..db.surfom_parameters import DEFAULT_PARAMETERS
from ..db.tillage_parameters import get_tillage_params
from .pools import ResiduePoolStore
from .modifiers import (
    temperature_factor,
    moisture_factor,
    contact_factor,
    cn_ratio_factor,
)
from .decomposition import (
    potential_decomposition,
    build_offer,
    validate_actual_decomposition,
    apply_decomposition,
)
from .cover import cover_total
from . import transfers


class SurfaceOrganicMatter(SimulationObject):
    """Daily mass balance of surface residues and their decomposition.

    Residue decomposes in two phases. `calc_rates` updates the cumulative
    soil evaporation, leaches mineral nutrients on rainy days and offers the
    potential decomposition of the lying residue to the nutrient model,
    which answers with the actual decomposition. `integrate` removes the
    actual decomposition from the residue pools and updates the totals.

    Residue enters and leaves the surface through signals that may arrive
    between two days: `add_residue`, `add_faeces`, `biomass_removed`,
    `apply_tillage`, `irrigate` and `reset`.

    **Simulation parameters**

    ========================  ===============================================  ========
     Name                      Description                                      Unit
    ========================  ===============================================  ========
    CriticalResidueWeight      Residue mass above which contact is reduced      kg/ha
    OptimumDecompTemp          Temperature without limitation on decomposition  C
    MaxCumulativeEOS           Cumulative soil evaporation stopping decomp.     mm
    CNRatioDecompCoeff         Coefficient of the C:N ratio factor              -
    CNRatioDecompThreshold     C:N ratio above which decomposition is reduced   -
    TotalLeachRain             Rain leaching all mineral nutrients              mm
    MinRainToLeach             Minimum rain for leaching                        mm
    CriticalMinimumOrganicC    Lying C below which a pool decomposes at once    kg/ha
    DefaultCPRatio             C:P ratio of initial residue if not given        -
    DefaultStandingFraction    Standing fraction of initial residue if not set  -
    StandingExtinctCoeff       Extinction coefficient of standing residue       -
    FractionFaecesAdded        Fraction of faeces added to the residue          -
    InitialResidueName         Name of the initial residue pool                 -
    InitialResidueType         Residue type of the initial residue              -
    InitialResidueMass         Mass of initial residue                          kg/ha
    InitialStandingFraction    Standing fraction of initial residue (optional)  -
    InitialCNR                 C:N ratio of initial residue                     -
    InitialCPR                 C:P ratio of initial residue (optional)          -
    DLAYR                      Thickness of the soil layers                     mm
    ========================  ===============================================  ========

    **State variables**

    ================  ==============================================  ========
     Name              Description                                     Unit
    ================  ==============================================  ========
    SURFOM_WT          Dry matter of standing and lying residue        kg/ha
    SURFOM_C           Organic C of the residue                        kg/ha
    SURFOM_N           Organic N of the residue                        kg/ha
    SURFOM_P           Organic P of the residue                        kg/ha
    SURFOM_NO3         Nitrate held by the residue                     kg/ha
    SURFOM_NH4         Ammonium held by the residue                    kg/ha
    SURFOM_LABILEP     Labile phosphate held by the residue            kg/ha
    SURFOM_COVER       Fraction of the soil surface covered            -
    CUMEOS             Soil evaporation since the last rain            mm
    ================  ==============================================  ========

    **Rate variables**

    =========================  =========================================  ========
     Name                       Description                                Unit
    =========================  =========================================  ========
    TF, WF, CF                  Temperature, moisture and contact factor   -
    POT_C/N/P_DECOMP            Potential decomposition offered            kg/ha/d
    ACT_C/N/P_DECOMP            Actual decomposition                       kg/ha/d
    LEACH_NO3/NH4/PO4           Mineral nutrients leached from residue     kg/ha/d
    =========================  =========================================  ========
    """

    store = None
    nutrient_model = None
    _cumeos = 0.0
    _irrig = 0.0
    _potentials = None
    _offer = None
    _accepted = None

    class Parameters(ParamTemplate):
        __slots__ = [
            "CriticalResidueWeight",
            "OptimumDecompTemp",
            "MaxCumulativeEOS",
            "CNRatioDecompCoeff",
            "CNRatioDecompThreshold",
            "TotalLeachRain",
            "MinRainToLeach",
            "CriticalMinimumOrganicC",
            "DefaultCPRatio",
            "DefaultStandingFraction",
            "StandingExtinctCoeff",
            "FractionFaecesAdded",
            "InitialResidueName",
            "InitialResidueType",
            "InitialResidueMass",
            "InitialStandingFraction",
            "InitialCNR",
            "InitialCPR",
            "DLAYR",
        ]
        CriticalResidueWeight: float
        OptimumDecompTemp: float
        MaxCumulativeEOS: float
        CNRatioDecompCoeff: float
        CNRatioDecompThreshold: float
        TotalLeachRain: float
        MinRainToLeach: float
        CriticalMinimumOrganicC: float
        DefaultCPRatio: float
        DefaultStandingFraction: float
        StandingExtinctCoeff: float
        FractionFaecesAdded: float
        InitialResidueName: str
        InitialResidueType: str
        InitialResidueMass: float
        InitialStandingFraction: float
        InitialCNR: float
        InitialCPR: float
        DLAYR: list

    class StateVariables(StatesTemplate):
        __slots__ = [
            "SURFOM_WT",
            "SURFOM_C",
            "SURFOM_N",
            "SURFOM_P",
            "SURFOM_NO3",
            "SURFOM_NH4",
            "SURFOM_LABILEP",
            "SURFOM_COVER",
            "CUMEOS",
        ]
        SURFOM_WT: float
        SURFOM_C: float
        SURFOM_N: float
        SURFOM_P: float
        SURFOM_NO3: float
        SURFOM_NH4: float
        SURFOM_LABILEP: float
        SURFOM_COVER: float
        CUMEOS: float

    class RateVariables(RatesTemplate):
        __slots__ = [
            "TF",
            "WF",
            "CF",
            "POT_C_DECOMP",
            "POT_N_DECOMP",
            "POT_P_DECOMP",
            "ACT_C_DECOMP",
            "ACT_N_DECOMP",
            "ACT_P_DECOMP",
            "LEACH_NO3",
            "LEACH_NH4",
            "LEACH_PO4",
        ]
        TF: float
        WF: float
        CF: float
        POT_C_DECOMP: float
        POT_N_DECOMP: float
        POT_P_DECOMP: float
        ACT_C_DECOMP: float
        ACT_N_DECOMP: float
        ACT_P_DECOMP: float
        LEACH_NO3: float
        LEACH_NH4: float
        LEACH_PO4: float

    def initialize(self, day, kiosk, parvalues, residue_types, nutrient_model):
        """
        Initializes the SurfaceOrganicMatter object.

        Args:
            day (date): The start day of the simulation.
            kiosk (VariableKiosk): The variable kiosk of this model instance.
            parvalues (dict): Parameter values, merged over the defaults.
            residue_types (ResidueTypeProvider): Registry of residue types.
            nutrient_model (NutrientModel): Receives leached and incorporated
                nutrients and decides on the actual decomposition.
        """
        parvalues = merge_dict(DEFAULT_PARAMETERS, parvalues, overwrite=True)
        self.params = self.Parameters(parvalues)
        self.store = ResiduePoolStore(residue_types)
        self.nutrient_model = nutrient_model

        self.states = self.StateVariables(
            kiosk,
            SURFOM_WT=0.0,
            SURFOM_C=0.0,
            SURFOM_N=0.0,
            SURFOM_P=0.0,
            SURFOM_NO3=0.0,
            SURFOM_NH4=0.0,
            SURFOM_LABILEP=0.0,
            SURFOM_COVER=0.0,
            CUMEOS=0.0,
            publish=[
                "SURFOM_WT",
                "SURFOM_C",
                "SURFOM_N",
                "SURFOM_P",
                "SURFOM_NO3",
                "SURFOM_NH4",
                "SURFOM_LABILEP",
                "SURFOM_COVER",
                "CUMEOS",
            ],
        )
        self.rates = self.RateVariables(
            kiosk,
            publish=[
                "TF",
                "WF",
                "CF",
                "POT_C_DECOMP",
                "POT_N_DECOMP",
                "POT_P_DECOMP",
                "ACT_C_DECOMP",
                "ACT_N_DECOMP",
                "ACT_P_DECOMP",
                "LEACH_NO3",
                "LEACH_NH4",
                "LEACH_PO4",
            ],
        )

        self._connect_signal(self._on_IRRIGATE, signals.irrigate)
        self._connect_signal(self._on_APPLY_TILLAGE, signals.apply_tillage)
        self._connect_signal(self._on_ADD_RESIDUE, signals.add_residue)
        self._connect_signal(self._on_ADD_FAECES, signals.add_faeces)
        self._connect_signal(self._on_BIOMASS_REMOVED, signals.biomass_removed)
        self._connect_signal(self._on_RESET, signals.reset)

        self.reset()

    def reset(self):
        """Remove all residue and load the initial residue, if any."""
        p = self.params
        self.store.clear()
        self._cumeos = 0.0
        self._irrig = 0.0
        self._potentials = None
        self._offer = None
        self._accepted = None

        if p.InitialResidueMass > 0.0:
            if p.InitialStandingFraction is None:
                standing_fraction = p.DefaultStandingFraction
            else:
                standing_fraction = p.InitialStandingFraction
            cpr = p.DefaultCPRatio if p.InitialCPR is None else p.InitialCPR
            transfers.load_initial_residue(
                self.store,
                p.InitialResidueName,
                p.InitialResidueType,
                p.InitialResidueMass,
                standing_fraction,
                p.InitialCNR,
                cpr,
            )
            self.logger.info(
                "Initial residue '%s' of %.1f kg/ha loaded"
                % (p.InitialResidueName, p.InitialResidueMass)
            )
        self._update_totals()

    @prepare_rates
    def calc_rates(self, day, drv):
        """Potential phase of the daily decomposition cycle.

        Also collects the actual decomposition from the nutrient model and
        validates it; the residue pools only change in `integrate`.
        """
        p = self.params
        r = self.rates

        precip = drv.RAIN + self._irrig
        if precip > 4.0:
            cumeos = drv.EOS - precip
        else:
            cumeos = self._cumeos + drv.EOS - precip
        self._cumeos = max(cumeos, 0.0)

        if precip >= p.MinRainToLeach:
            r.LEACH_NO3, r.LEACH_NH4, r.LEACH_PO4 = transfers.leach(
                self.store, precip, p.TotalLeachRain, self.nutrient_model
            )
            self.logger.debug(
                "Leached %.3f kg NO3, %.3f kg NH4 on %s" % (r.LEACH_NO3, r.LEACH_NH4, day)
            )
        self._irrig = 0.0

        r.TF = temperature_factor(drv.TMIN, drv.TMAX, p.OptimumDecompTemp)
        r.WF = moisture_factor(self._cumeos, p.MaxCumulativeEOS)
        r.CF = contact_factor(self.store, p.CriticalResidueWeight)

        self._potentials = potential_decomposition(
            self.store,
            r.WF,
            r.TF,
            r.CF,
            self._cn_ratio_factor,
            p.CriticalMinimumOrganicC,
        )
        self._offer = build_offer(self.store, self._potentials)
        r.POT_C_DECOMP = self._offer.C
        r.POT_N_DECOMP = self._offer.N
        r.POT_P_DECOMP = self._offer.P

        actual = self.nutrient_model.calculate_actual_decomposition(self._offer)
        if actual is None:
            self._accepted = []
        else:
            self._accepted = validate_actual_decomposition(
                self.store, actual, self._potentials
            )
        r.ACT_C_DECOMP = sum(a[1] for a in self._accepted)
        r.ACT_N_DECOMP = sum(a[2] for a in self._accepted)
        r.ACT_P_DECOMP = sum(a[3] for a in self._accepted)

    def integrate(self, day, delt=1.0):
        """Apply the actual decomposition and update the totals."""
        if self._accepted:
            apply_decomposition(self._accepted)
        self._accepted = None
        self._update_totals()

    def _cn_ratio_factor(self, pool):
        p = self.params
        return cn_ratio_factor(pool, p.CNRatioDecompCoeff, p.CNRatioDecompThreshold)

    @prepare_states
    def _update_totals(self):
        s = self.states
        s.SURFOM_WT = self.store.total("amount")
        s.SURFOM_C = self.store.total("C")
        s.SURFOM_N = self.store.total("N")
        s.SURFOM_P = self.store.total("P")
        s.SURFOM_NO3 = self.store.total_mineral("no3")
        s.SURFOM_NH4 = self.store.total_mineral("nh4")
        s.SURFOM_LABILEP = self.store.total_mineral("po4")
        s.SURFOM_COVER = cover_total(self.store, self.params.StandingExtinctCoeff)
        s.CUMEOS = self._cumeos

    # Queries

    @property
    def offer(self):
        """The potential decomposition offered to the nutrient model today."""
        return self._offer

    @property
    def cover(self):
        return cover_total(self.store, self.params.StandingExtinctCoeff)

    def total(self, attr, standing=True, lying=True):
        """Total `attr` (amount, C, N or P) of the standing and/or lying residue."""
        return self.store.total(attr, standing=standing, lying=lying)

    def total_state(self):
        return self.store.total_state()

    def get_weight_from_pool(self, name):
        """Dry matter (kg/ha) of the residue pool `name`; InvalidRequest if unknown."""
        return self.store.weight_of(name)

    def residue_type_names(self):
        return self.store.residue_types.residue_type_names()

    # Signal handlers

    def _on_RESET(self):
        self.reset()

    def _on_IRRIGATE(self, amount=0.0):
        self._irrig += amount

    def _on_ADD_RESIDUE(self, mass=0.0, N=0.0, P=0.0, type=None, name=""):
        if type is None:
            raise exc.InvalidRequest("Residue added without a residue type")
        transfers.add(self.store, mass, N, P, type, name)
        self._update_totals()

    def _on_ADD_FAECES(self, faeces=None):
        if faeces is None:
            raise exc.InvalidRequest("Faeces event sent without faeces")
        transfers.add_faeces(self.store, faeces, self.params.FractionFaecesAdded)
        self._update_totals()

    def _on_BIOMASS_REMOVED(
        self, crop_type=None, dm=(), n=(), p=(), fraction_to_residue=()
    ):
        if crop_type is None:
            raise exc.InvalidRequest("Removed biomass sent without a crop type")
        transfers.add_removed_biomass(
            self.store, crop_type, dm, n, p, fraction_to_residue
        )
        self._update_totals()

    def _on_APPLY_TILLAGE(self, type=None, f_incorp=None, depth=None):
        f_incorp, depth = get_tillage_params(type, f_incorp, depth)
        self.logger.info(
            "Residue tillage '%s': incorporating %.0f%% to %.0f mm"
            % (type, f_incorp * 100, depth)
        )
        transfers.incorporate(
            self.store, f_incorp, depth, self.params.DLAYR, self.nutrient_model
        )
        self._update_totals()
