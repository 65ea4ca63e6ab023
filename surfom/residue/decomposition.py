"""Potential and actual decomposition of the lying surface residues.

Decomposition is negotiated with the nutrient model in two phases. First
the residue model offers the potential decomposition of each pool
(`potential_decomposition` and `build_offer`). The nutrient model answers
with the actual decomposition, which must not exceed the offer, and that
answer is applied to the pools (`apply_actual_decomposition`).
"""
import logging

from .. import exceptions as exc
from ..util import limit, divide, bound_check, reals_are_equal

# Tolerance on the actual decomposition exceeding the potential (kg/ha)
ACCEPTABLE_ERR = 1e-4

logger = logging.getLogger(__name__)


class FOM:
    """Amount of fresh organic matter with its C, N and P content."""

    __slots__ = ["amount", "C", "N", "P", "ash_alk"]

    def __init__(self, amount=0.0, C=0.0, N=0.0, P=0.0, ash_alk=0.0):
        self.amount = amount
        self.C = C
        self.N = N
        self.P = P
        self.ash_alk = ash_alk

    def copy(self):
        return FOM(self.amount, self.C, self.N, self.P, self.ash_alk)

    def __repr__(self):
        return "FOM(amount=%r, C=%r, N=%r, P=%r)" % (self.amount, self.C, self.N, self.P)


class SurfaceOrganicMatterDecompPool:
    __slots__ = ["name", "organic_matter_type", "fom"]

    def __init__(self, name, organic_matter_type, fom):
        self.name = name
        self.organic_matter_type = organic_matter_type
        self.fom = fom


class SurfaceOrganicMatterDecomp:
    """Decomposition of the residue pools, used both for the offer sent to
    the nutrient model and for its answer.
    """

    def __init__(self, pools=None):
        self.pools = list(pools or [])

    def __iter__(self):
        return iter(self.pools)

    def __len__(self):
        return len(self.pools)

    def get(self, name):
        for pool in self.pools:
            if pool.name.lower() == name.lower():
                return pool
        return None

    def copy(self):
        return SurfaceOrganicMatterDecomp(
            [
                SurfaceOrganicMatterDecompPool(p.name, p.organic_matter_type, p.fom.copy())
                for p in self.pools
            ]
        )

    @property
    def C(self):
        return sum(p.fom.C for p in self.pools)

    @property
    def N(self):
        return sum(p.fom.N for p in self.pools)

    @property
    def P(self):
        return sum(p.fom.P for p in self.pools)


def potential_decomposition(store, mf, tf, cf, cnr_factor, critical_min_c):
    """Calculate today's potential decomposition of C, N and P per pool.

    :param store: the ResiduePoolStore
    :param mf: moisture factor (0-1)
    :param tf: temperature factor (0-1)
    :param cf: contact factor (0-1)
    :param cnr_factor: function returning the C:N ratio factor of a pool
    :param critical_min_c: lying C (kg/ha) below which all lying material
        decomposes at once
    :returns: dict mapping pool name to a (C, N, P) tuple in kg/ha

    Only lying material decomposes. The pools are not changed.
    """
    potentials = {}
    for pool in store:
        sum_c = pool.lying_sum("C")
        if sum_c < critical_min_c:
            # Decompose all to avoid numerical trouble with tiny amounts
            f_decomp = 1.0
        else:
            f_decomp = pool.pot_decomp_rate * mf * tf * cnr_factor(pool) * cf

        potentials[pool.name] = (
            f_decomp * sum_c,
            f_decomp * pool.lying_sum("N"),
            f_decomp * pool.lying_sum("P"),
        )
    return potentials


def build_offer(store, potentials):
    """Turn the potential decomposition into the offer for the nutrient model."""
    offer = SurfaceOrganicMatterDecomp()
    for pool in store:
        c, n, p = potentials[pool.name]
        fom = FOM(
            amount=divide(c, pool.constants.fraction_C),
            C=c,
            N=n,
            P=p,
            ash_alk=0.0,
        )
        offer.pools.append(
            SurfaceOrganicMatterDecompPool(pool.name, pool.organic_matter_type, fom)
        )
    return offer


def decomp(pool, c_decomp, n_decomp, p_decomp):
    """Remove decomposed C, N and P from the lying material of `pool`.

    Dry matter follows the C fraction. The N and P fractions are not
    bounded to 0-1, so a decomposition above the lying N or P drives the
    pool negative rather than being clipped.
    """
    f_decomp = limit(0.0, 1.0, divide(c_decomp, pool.lying_sum("C")))
    for fraction in pool.lying:
        fraction.C = fraction.C * (1.0 - f_decomp)
        fraction.amount = fraction.amount * (1.0 - f_decomp)

    # TODO: bound the N and P fractions once nutrient models guarantee
    # N decomposition within the offered tolerance
    f_decomp = divide(n_decomp, pool.lying_sum("N"))
    for fraction in pool.lying:
        fraction.N = fraction.N * (1.0 - f_decomp)

    f_decomp = divide(p_decomp, pool.lying_sum("P"))
    for fraction in pool.lying:
        fraction.P = fraction.P * (1.0 - f_decomp)


def validate_actual_decomposition(store, actual, potentials):
    """Check the actual decomposition returned by the nutrient model.

    :param store: the ResiduePoolStore
    :param actual: SurfaceOrganicMatterDecomp returned by the nutrient model
    :param potentials: the dict returned by `potential_decomposition`
    :returns: list of (pool, C, N, P) to decompose, with P in proportion
        to the decomposed C
    :raises ProtocolViolation: when C or N exceed the potential by more
        than ACCEPTABLE_ERR, or when a pool is unknown.
    """
    accepted = []
    for entry in actual:
        pool = store.get(entry.name)
        if pool is None or pool.name not in potentials:
            msg = "SurfaceOM - decomposition returned for unknown residue '%s'" % entry.name
            raise exc.ProtocolViolation(msg)
        c_pot, n_pot, p_pot = potentials[pool.name]
        c_decomp = entry.fom.C
        n_decomp = entry.fom.N

        bound_check(n_decomp, 0.0, n_pot, "total n decomposition", logger)

        if reals_are_equal(c_decomp, 0.0) and reals_are_equal(n_decomp, 0.0):
            pass
        elif c_decomp > c_pot + ACCEPTABLE_ERR:
            msg = "SurfaceOM - C decomposition exceeds potential rate for '%s': %f > %f"
            raise exc.ProtocolViolation(msg % (pool.name, c_decomp, c_pot))
        elif n_decomp > n_pot + ACCEPTABLE_ERR:
            msg = "SurfaceOM - N decomposition exceeds potential rate for '%s': %f > %f"
            raise exc.ProtocolViolation(msg % (pool.name, n_decomp, n_pot))

        p_decomp = c_decomp * divide(p_pot, c_pot)
        accepted.append((pool, c_decomp, n_decomp, p_decomp))
    return accepted


def apply_decomposition(accepted):
    """Apply validated decomposition to the pools, returns the total (C, N, P)."""
    tot_c = tot_n = tot_p = 0.0
    for pool, c_decomp, n_decomp, p_decomp in accepted:
        decomp(pool, c_decomp, n_decomp, p_decomp)
        tot_c += c_decomp
        tot_n += n_decomp
        tot_p += p_decomp
    return tot_c, tot_n, tot_p


def apply_actual_decomposition(store, actual, potentials):
    """Check the actual decomposition against the potential and apply it.

    A pool is only changed when the whole payload passes validation.

    :returns: the (C, N, P) decomposed in total, kg/ha
    :raises ProtocolViolation: see `validate_actual_decomposition`
    """
    return apply_decomposition(validate_actual_decomposition(store, actual, potentials))
