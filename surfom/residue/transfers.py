"""Transfers of mass into, out of and within the surface residue pools:
additions of residue and faeces, leaching of mineral nutrients by rain and
incorporation of residue into the soil by tillage.
"""
import logging

import numpy as np

from ..util import limit, divide, cumulative_index
from .pools import MAX_FR
from .decomposition import FOM

logger = logging.getLogger(__name__)

MANURE = "manure"


class Faeces:
    """Excreta dropped on the soil surface by grazing animals.

    Only the organic matter weight and its N and P content are used by the
    residue model; the other fields are carried for the sake of the sender.
    """

    __slots__ = [
        "defaecations",
        "volume_per_defaecation",
        "area_per_defaecation",
        "eccentricity",
        "om_weight",
        "om_n",
        "om_p",
        "om_s",
        "om_ash_alk",
        "no3_n",
        "nh4_n",
        "pox_p",
        "so4_s",
    ]

    def __init__(self, om_weight=0.0, om_n=0.0, om_p=0.0, **kwargs):
        for attr in self.__slots__:
            setattr(self, attr, kwargs.pop(attr, 0.0))
        self.om_weight = om_weight
        self.om_n = om_n
        self.om_p = om_p
        if kwargs:
            raise TypeError("Unknown faeces attribute(s): %s" % ", ".join(kwargs))


class FOMPoolLayer:
    """Incorporated organic matter and mineral nutrients for one soil layer."""

    __slots__ = ["thickness", "no3", "nh4", "po4", "pools"]

    def __init__(self, thickness, no3, nh4, po4, pools):
        self.thickness = thickness
        self.no3 = no3
        self.nh4 = nh4
        self.po4 = po4
        self.pools = pools


class FOMPoolProfile:
    """Residue incorporated by a tillage event, per soil layer."""

    def __init__(self, layers=None):
        self.layers = list(layers or [])

    @property
    def C(self):
        return sum(f.C for layer in self.layers for f in layer.pools)

    @property
    def N(self):
        return sum(f.N for layer in self.layers for f in layer.pools)

    @property
    def P(self):
        return sum(f.P for layer in self.layers for f in layer.pools)


def add(store, mass, N, P, residue_type, name=""):
    """Add fresh residue to the lying material of the pool for `residue_type`.

    :param mass: dry matter added (kg/ha)
    :param N: organic N added (kg/ha)
    :param P: organic P added (kg/ha)
    :param residue_type: residue type, also used as the pool name
    :param name: description of the source, only used for reporting
    """
    pool = store.resolve(residue_type, residue_type)
    c = pool.constants

    pool.add_mineral_from_ppm(mass)

    for i in range(MAX_FR):
        pool.lying[i].amount += mass * c.fr_c[i]
        pool.lying[i].C += mass * c.fraction_C * c.fr_c[i]
        pool.lying[i].N += N * c.fr_n[i]
        pool.lying[i].P += P * c.fr_p[i]

    logger.info(
        "Added %.2f kg/ha of %s residue%s" % (mass, residue_type, " (%s)" % name if name else "")
    )
    return pool


def add_faeces(store, faeces, fraction_faeces_added):
    """Add a fraction of the organic matter in `faeces` as manure."""
    return add(
        store,
        faeces.om_weight * fraction_faeces_added,
        faeces.om_n * fraction_faeces_added,
        faeces.om_p * fraction_faeces_added,
        MANURE,
        "",
    )


def add_removed_biomass(store, crop_type, dm, n, p, fraction_to_residue):
    """Add the part of removed crop biomass that is left on the surface.

    :param dm, n, p: dry matter, N and P removed per plant part (kg/ha)
    :param fraction_to_residue: fraction going to residue per plant part
    :returns: the dry matter added (kg/ha)
    """
    if sum(fraction_to_residue) == 0:
        return 0.0

    surfom_added = sum(d * f for d, f in zip(dm, fraction_to_residue))
    if surfom_added <= 0.0:
        return 0.0

    surfom_n_added = sum(v * f for v, f in zip(n, fraction_to_residue))
    surfom_p_added = sum(v * f for v, f in zip(p, fraction_to_residue))
    add(store, surfom_added, surfom_n_added, surfom_p_added, crop_type, "")
    return surfom_added


def load_initial_residue(store, name, residue_type, mass, standing_fraction, cnr, cpr):
    """Create the initial residue pool `name` split over standing and lying.

    N and P follow from the C:N and C:P ratios; a zero ratio gives zero N or P.
    """
    pool = store.resolve(name, residue_type)
    c = pool.constants

    pool.add_mineral_from_ppm(mass)

    tot_c = mass * c.fraction_C
    tot_n = divide(tot_c, cnr)
    tot_p = divide(tot_c, cpr)

    for j in range(MAX_FR):
        for fraction, share in (
            (pool.standing[j], standing_fraction),
            (pool.lying[j], 1.0 - standing_fraction),
        ):
            fraction.amount += mass * c.fr_c[j] * share
            fraction.C += tot_c * c.fr_c[j] * share
            fraction.N += tot_n * c.fr_n[j] * share
            fraction.P += tot_p * c.fr_p[j] * share
    return pool


def leach(store, leach_rain, total_leach_rain, nutrient_model):
    """Wash mineral nutrients out of the residues into the top soil layer.

    The fraction leached increases linearly with the rain up to
    `total_leach_rain`, which removes all. Only NO3 and NH4 are passed to
    the nutrient model; the PO4 is removed from the residues and returned.

    :returns: (no3, nh4, po4) leached in kg/ha
    """
    leaching_fr = limit(0.0, 1.0, divide(leach_rain, total_leach_rain))
    no3_incorp = store.total_mineral("no3") * leaching_fr
    nh4_incorp = store.total_mineral("nh4") * leaching_fr
    po4_incorp = store.total_mineral("po4") * leaching_fr

    if no3_incorp > 0.0 or nh4_incorp > 0.0 or po4_incorp > 0.0:
        nutrient_model.receive_leachate(0, "NH4", nh4_incorp)
        nutrient_model.receive_leachate(0, "NO3", no3_incorp)

    for pool in store:
        pool.no3 = pool.no3 * (1.0 - leaching_fr)
        pool.nh4 = pool.nh4 * (1.0 - leaching_fr)
        pool.po4 = pool.po4 * (1.0 - leaching_fr)

    return no3_incorp, nh4_incorp, po4_incorp


def incorporate(store, f_incorp, tillage_depth, thickness, nutrient_model):
    """Incorporate a fraction of all surface residue into the soil.

    The incorporated C, N and P are distributed over the soil layers down
    to `tillage_depth` in proportion to the part of the tillage depth that
    falls in each layer, and sent to the nutrient model. The surface pools
    lose `f_incorp` of their standing and lying material and of their
    mineral nutrients, independent of that distribution.

    :param f_incorp: fraction incorporated, bounded to 0-1
    :param tillage_depth: depth of tillage (mm)
    :param thickness: thickness of the soil layers (mm)
    :returns: the FOMPoolProfile sent, or None when no C was moved
    """
    f_incorp = limit(0.0, 1.0, f_incorp)
    thickness = np.asarray(thickness, dtype=float)
    deepest_layer = cumulative_index(tillage_depth, thickness)
    nlayers = deepest_layer + 1

    c_pool = np.zeros((nlayers, MAX_FR))
    n_pool = np.zeros((nlayers, MAX_FR))
    p_pool = np.zeros((nlayers, MAX_FR))
    ash_alk_pool = np.zeros((nlayers, MAX_FR))
    no3 = np.zeros(nlayers)
    nh4 = np.zeros(nlayers)
    po4 = np.zeros(nlayers)

    cum_depth = 0.0
    for layer in range(nlayers):
        depth_to_go = tillage_depth - cum_depth
        layer_incorp_depth = min(depth_to_go, thickness[layer])
        f_incorp_layer = divide(layer_incorp_depth, tillage_depth)
        for pool in store:
            for i in range(MAX_FR):
                lying, standing = pool.lying[i], pool.standing[i]
                c_pool[layer, i] += (lying.C + standing.C) * f_incorp * f_incorp_layer
                n_pool[layer, i] += (lying.N + standing.N) * f_incorp * f_incorp_layer
                p_pool[layer, i] += (lying.P + standing.P) * f_incorp * f_incorp_layer
            no3[layer] += pool.no3 * f_incorp * f_incorp_layer
            nh4[layer] += pool.nh4 * f_incorp * f_incorp_layer
            po4[layer] += pool.po4 * f_incorp * f_incorp_layer
        cum_depth += thickness[layer]

    profile = None
    if c_pool.sum() > 0.0:
        profile = FOMPoolProfile()
        for layer in range(nlayers):
            pools = [
                FOM(
                    C=float(c_pool[layer, i]),
                    N=float(n_pool[layer, i]),
                    P=float(p_pool[layer, i]),
                    ash_alk=float(ash_alk_pool[layer, i]),
                )
                for i in range(MAX_FR)
            ]
            profile.layers.append(
                FOMPoolLayer(
                    thickness=float(thickness[layer]),
                    no3=float(no3[layer]),
                    nh4=float(nh4[layer]),
                    po4=float(po4[layer]),
                    pools=pools,
                )
            )
        nutrient_model.receive_incorporation_profile(profile)

    for pool in store:
        pool.scale(1.0 - f_incorp)

    return profile
