"""The soil nutrient model as seen from the surface residues.

The residue model never changes soil nutrient pools itself. It hands
leached mineral nutrients and incorporated residues to a nutrient model
and asks it how much of the offered decomposition actually takes place.
"""
import logging
from collections import defaultdict


class NutrientModel:
    """Interface of the soil nutrient model used by SurfaceOrganicMatter.

    Subclasses implement the three methods below.
    """

    @property
    def logger(self):
        loggername = "%s.%s" % (self.__class__.__module__, self.__class__.__name__)
        return logging.getLogger(loggername)

    def calculate_actual_decomposition(self, offer):
        """Return the actual decomposition for today.

        :param offer: SurfaceOrganicMatterDecomp with the potential
            decomposition of each residue pool.
        :returns: a SurfaceOrganicMatterDecomp holding at most the offered
            C and N per pool, or None when nothing decomposes.
        """
        msg = "`calculate_actual_decomposition` not implemented on %s" % self.__class__.__name__
        raise NotImplementedError(msg)

    def receive_incorporation_profile(self, profile):
        """Receive residues incorporated into the soil by tillage.

        :param profile: FOMPoolProfile with the incorporated C, N, P per
            layer and material class, plus mineral N and P per layer.
        """
        msg = "`receive_incorporation_profile` not implemented on %s" % self.__class__.__name__
        raise NotImplementedError(msg)

    def receive_leachate(self, layer, species, amount):
        """Receive `amount` (kg/ha) of mineral `species` ("NO3", "NH4") into `layer`."""
        msg = "`receive_leachate` not implemented on %s" % self.__class__.__name__
        raise NotImplementedError(msg)


class UnlimitedNutrientModel(NutrientModel):
    """Nutrient model that never limits residue decomposition.

    The full potential decomposition is accepted every day. Leached
    nutrients and incorporation profiles are only recorded, which makes
    this model suited for potential production runs and for tests.
    """

    def __init__(self):
        self.leachate = defaultdict(float)
        self.profiles = []
        self.decomposed = []

    def calculate_actual_decomposition(self, offer):
        actual = offer.copy()
        self.decomposed.append(actual)
        return actual

    def receive_incorporation_profile(self, profile):
        self.profiles.append(profile)
        self.logger.debug(
            "Received incorporated residue with %.3f kg C/ha over %i layers"
            % (profile.C, len(profile.layers))
        )

    def receive_leachate(self, layer, species, amount):
        self.leachate[(layer, species)] += amount
