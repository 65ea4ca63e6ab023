"""State of the surface residues: one ResiduePool per residue name, each with
standing and lying material split over three material classes.

All masses are in kg/ha.
"""
import logging

from .. import exceptions as exc
from ..util import limit, bound_check

# Material classes of organic matter, in pool order
MATERIAL_CLASSES = ("carbohydrate", "cellulose", "lignin")
MAX_FR = len(MATERIAL_CLASSES)
FR_SUM_TOLERANCE = 1e-6

logger = logging.getLogger(__name__)


class OMFraction:
    """Dry matter and its C, N and P content for one material class."""

    __slots__ = ["amount", "C", "N", "P"]

    def __init__(self, amount=0.0, C=0.0, N=0.0, P=0.0):
        self.amount = amount
        self.C = C
        self.N = N
        self.P = P

    def scale(self, factor):
        self.amount *= factor
        self.C *= factor
        self.N *= factor
        self.P *= factor

    def copy(self):
        return OMFraction(self.amount, self.C, self.N, self.P)

    def __eq__(self, other):
        if not isinstance(other, OMFraction):
            return NotImplemented
        return (self.amount, self.C, self.N, self.P) == (
            other.amount,
            other.C,
            other.N,
            other.P,
        )

    def __repr__(self):
        return "OMFraction(amount=%r, C=%r, N=%r, P=%r)" % (
            self.amount,
            self.C,
            self.N,
            self.P,
        )


class ResidueTypeConstants:
    """Static parameters of a residue type, bounded to their valid ranges.

    =================  ================================================  =========
     Name               Description                                       Unit
    =================  ================================================  =========
    fraction_C          Carbon fraction of dry matter                     0-1
    no3ppm              Nitrate content of fresh residue                  ppm
    nh4ppm              Ammonium content of fresh residue                 ppm
    po4ppm              Phosphate content of fresh residue                ppm
    specific_area       Ground area covered per unit mass                 ha/kg
    cf_contrib          Contributes to the contact (haystack) factor      0/1
    pot_decomp_rate     Potential decomposition rate                      d-1
    fr_c, fr_n, fr_p    Distribution of C, N, P over material classes     0-1
    =================  ================================================  =========
    """

    __slots__ = [
        "name",
        "fraction_C",
        "no3ppm",
        "nh4ppm",
        "po4ppm",
        "specific_area",
        "cf_contrib",
        "pot_decomp_rate",
        "fr_c",
        "fr_n",
        "fr_p",
    ]

    _bounds = {
        "fraction_C": (0.0, 1.0),
        "po4ppm": (0.0, 1000.0),
        "nh4ppm": (0.0, 2000.0),
        "no3ppm": (0.0, 1000.0),
        "specific_area": (0.0, 0.01),
        "pot_decomp_rate": (0.0, 1.0),
    }

    def __init__(self, name, description):
        self.name = name
        try:
            for key, (lower, upper) in self._bounds.items():
                value = float(description[key])
                bound_check(value, lower, upper, "%s of %s" % (key, name), logger)
                setattr(self, key, limit(lower, upper, value))
            self.cf_contrib = max(min(int(description["cf_contrib"]), 1), 0)
            fr_c = [float(v) for v in description["fr_c"]]
            fr_n = [float(v) for v in description["fr_n"]]
            fr_p = [float(v) for v in description["fr_p"]]
        except KeyError as err:
            msg = "Residue type description for '%s' lacks %s" % (name, err)
            raise exc.ConfigurationError(msg) from err
        except (TypeError, ValueError) as err:
            msg = "Invalid value in residue type description for '%s': %s" % (name, err)
            raise exc.ConfigurationError(msg) from err

        if len(fr_c) != len(fr_n) or len(fr_n) != len(fr_p):
            msg = "Error reading in fr_c/n/p values of '%s', inconsistent array lengths" % name
            raise exc.ConfigurationError(msg)
        if len(fr_c) != MAX_FR:
            msg = "fr_c/n/p of '%s' should have %i values, got %i" % (name, MAX_FR, len(fr_c))
            raise exc.ConfigurationError(msg)
        for key, fractions in (("fr_c", fr_c), ("fr_n", fr_n), ("fr_p", fr_p)):
            total = sum(fractions)
            if abs(total - 1.0) > FR_SUM_TOLERANCE:
                logger.warning("%s of '%s' sums to %.4f instead of 1" % (key, name, total))
        self.fr_c = fr_c
        self.fr_n = fr_n
        self.fr_p = fr_p


class ResiduePool:
    """Surface residue of a single residue name.

    `standing` and `lying` always hold one OMFraction per material class.
    Mineral nutrients (`no3`, `nh4`, `po4`) are kept per pool, not per class.
    """

    __slots__ = [
        "name",
        "organic_matter_type",
        "constants",
        "pot_decomp_rate",
        "no3",
        "nh4",
        "po4",
        "standing",
        "lying",
    ]

    def __init__(self, name, organic_matter_type, constants):
        self.name = name
        self.organic_matter_type = organic_matter_type
        self.constants = constants
        self.pot_decomp_rate = constants.pot_decomp_rate
        self.no3 = 0.0
        self.nh4 = 0.0
        self.po4 = 0.0
        self.standing = [OMFraction() for _ in range(MAX_FR)]
        self.lying = [OMFraction() for _ in range(MAX_FR)]

    def lying_sum(self, attr):
        return sum(getattr(f, attr) for f in self.lying)

    def standing_sum(self, attr):
        return sum(getattr(f, attr) for f in self.standing)

    def total(self, attr):
        return self.lying_sum(attr) + self.standing_sum(attr)

    def add_mineral_from_ppm(self, mass):
        """Add the mineral N and P carried by `mass` kg/ha of fresh residue."""
        c = self.constants
        self.no3 += c.no3ppm / 1000000.0 * mass
        self.nh4 += c.nh4ppm / 1000000.0 * mass
        self.po4 += c.po4ppm / 1000000.0 * mass

    def scale(self, factor):
        """Multiply all organic and mineral contents by `factor`."""
        for fraction in self.standing + self.lying:
            fraction.scale(factor)
        self.no3 *= factor
        self.nh4 *= factor
        self.po4 *= factor

    def __repr__(self):
        return "ResiduePool(name=%r, type=%r, wt=%.3f)" % (
            self.name,
            self.organic_matter_type,
            self.total("amount"),
        )


class ResiduePoolStore:
    """Container owning all ResiduePools of one model instance.

    Pools are created on first use of a residue name and are kept for the
    rest of the run, even when their mass decays to zero. Lookups by name
    are case-insensitive; iteration follows the order of creation.

    :param residue_types: a ResidueTypeProvider used to look up the
        constants of new residue types.
    """

    def __init__(self, residue_types):
        self.residue_types = residue_types
        self._pools = {}

    @property
    def logger(self):
        loggername = "%s.%s" % (self.__class__.__module__, self.__class__.__name__)
        return logging.getLogger(loggername)

    def __len__(self):
        return len(self._pools)

    def __iter__(self):
        return iter(list(self._pools.values()))

    def __contains__(self, name):
        return name.lower() in self._pools

    def get(self, name):
        return self._pools.get(name.lower())

    def __getitem__(self, name):
        try:
            return self._pools[name.lower()]
        except KeyError:
            msg = "No organic matter called '%s' present" % name
            raise exc.InvalidRequest(msg)

    @property
    def names(self):
        return [p.name for p in self._pools.values()]

    def add_pool(self, name, organic_matter_type):
        """Create a new, empty pool for `name` with constants of `organic_matter_type`."""
        if name in self:
            msg = "Residue pool '%s' already exists" % name
            raise exc.InvalidRequest(msg)
        description = self.residue_types.get_residue_type(organic_matter_type)
        constants = ResidueTypeConstants(organic_matter_type, description)
        pool = ResiduePool(name, organic_matter_type, constants)
        self._pools[name.lower()] = pool
        self.logger.debug(
            "Created residue pool '%s' of type '%s'" % (name, organic_matter_type)
        )
        return pool

    def resolve(self, name, organic_matter_type):
        """Return the pool called `name`, creating it when it does not yet exist."""
        pool = self.get(name)
        if pool is None:
            pool = self.add_pool(name, organic_matter_type)
        return pool

    def clear(self):
        self._pools.clear()

    def total(self, attr, standing=True, lying=True):
        """Sum `attr` (amount, C, N or P) over all pools and material classes."""
        value = 0.0
        for pool in self._pools.values():
            if standing:
                value += pool.standing_sum(attr)
            if lying:
                value += pool.lying_sum(attr)
        return value

    def total_mineral(self, attr):
        """Sum a mineral nutrient (no3, nh4 or po4) over all pools."""
        return sum(getattr(pool, attr) for pool in self._pools.values())

    def total_state(self):
        """Return an OMFraction with the summed state of all pools.

        N and P include the mineral nutrients held by the residues.
        """
        state = OMFraction()
        if len(self._pools) == 0:
            return state
        state.N = self.total_mineral("no3") + self.total_mineral("nh4")
        state.P = self.total_mineral("po4")
        state.amount = self.total("amount")
        state.C = self.total("C")
        state.N += self.total("N")
        state.P += self.total("P")
        return state

    def weight_of(self, name):
        """Return the standing plus lying dry matter of the pool called `name`."""
        return self[name].total("amount")
