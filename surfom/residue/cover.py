from math import exp

from ..util import limit, add_cover


def cover_of_pool(pool, standing_extinct_coeff):
    """Fraction of the soil surface covered by a single residue pool.

    Follows Gregory (1982)::

        Fc = 1.0 - exp(-Am * M)

    where Am is the specific area (ha/kg) and M the residue mass (kg/ha).
    Lying and standing residue are combined as independent covers, with
    the standing area scaled by the extinction coefficient.
    """
    specific_area = pool.constants.specific_area
    area_lying = sum(f.amount * specific_area for f in pool.lying)
    area_standing = sum(f.amount * specific_area for f in pool.standing)

    f_cover = add_cover(
        1.0 - exp(-area_lying), 1.0 - exp(-standing_extinct_coeff * area_standing)
    )
    return limit(0.0, 1.0, f_cover)


def cover_total(pools, standing_extinct_coeff):
    """Combined cover (0-1) of all residue pools."""
    combined_cover = 0.0
    for pool in pools:
        combined_cover = add_cover(combined_cover, cover_of_pool(pool, standing_extinct_coeff))
    return combined_cover
