"""Environmental modifiers of residue decomposition.

Each function maps the weather and residue state of today on a
dimensionless factor in the range 0-1.
"""
from math import exp

from ..util import limit, divide


def temperature_factor(tmin, tmax, optimum_temp):
    """Temperature factor for decomposition (0-1).

    A simple function of the square of the daily average air temperature,
    reaching 1 at `optimum_temp` and 0 at or below 0 Celsius.
    """
    ave_temp = (tmax + tmin) / 2.0
    if ave_temp > 0.0:
        return limit(0.0, 1.0, divide(ave_temp, optimum_temp) ** 2)
    return 0.0


def moisture_factor(cumeos, max_cumeos):
    """Moisture factor for decomposition (0-1).

    Decreases linearly with the soil evaporation accumulated since the last
    significant rain and reaches zero at `max_cumeos` (mm).
    """
    return limit(0.0, 1.0, 1.0 - divide(cumeos, max_cumeos))


def contact_factor(pools, critical_residue_weight):
    """Residue/soil contact factor for decomposition (0-1).

    Sums the effective mass of the lying residues: residue types with
    `cf_contrib` 0 do not contribute to the haystack effect. Above the
    critical weight, decomposition is reduced proportionally.
    """
    eff_mass = 0.0
    for pool in pools:
        eff_mass += pool.lying_sum("amount") * pool.constants.cf_contrib

    if eff_mass <= critical_residue_weight:
        return 1.0
    return limit(0.0, 1.0, divide(critical_residue_weight, eff_mass))


def cn_ratio_factor(pool, coeff, threshold):
    """C:N ratio factor for decomposition (0-1) of a single residue pool.

    The C:N ratio is based on the lying material only and includes the
    mineral N of the residue in the denominator. Above `threshold` the
    factor decreases exponentially toward zero; below it the factor is 1.

    :param pool: a ResiduePool, or None which gives a factor of 1.
    """
    if pool is None or threshold == 0:
        return 1.0

    total_c = pool.lying_sum("C")
    total_n = pool.lying_sum("N")
    total_mineral_n = pool.no3 + pool.nh4
    cnr = divide(total_c, total_n + total_mineral_n)

    x = -coeff * ((cnr - threshold) / threshold)
    if x >= 0.0:
        return 1.0
    return limit(0.0, 1.0, exp(x))
