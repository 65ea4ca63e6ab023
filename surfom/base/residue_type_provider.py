import logging

from .. import exceptions as exc


class ResidueTypeProvider(dict):
    """Registry of residue type descriptions.

    A residue type description is a dict holding the keys `fraction_C`,
    `no3ppm`, `nh4ppm`, `po4ppm`, `specific_area`, `cf_contrib`,
    `pot_decomp_rate`, `fr_c`, `fr_n` and `fr_p`. Names are looked up
    case-insensitively.

        >>> p = ResidueTypeProvider({"wheat": {...}})
        >>> p.get_residue_type("Wheat")
        {...}
    """

    def __init__(self, residue_types=None):
        dict.__init__(self)
        for name, description in (residue_types or {}).items():
            self.add_residue_type(name, description)

    @property
    def logger(self):
        loggername = "%s.%s" % (self.__class__.__module__, self.__class__.__name__)
        return logging.getLogger(loggername)

    def add_residue_type(self, name, description):
        dict.__setitem__(self, name.lower(), dict(description, name=name))

    def get_residue_type(self, name):
        try:
            return self[name.lower()]
        except KeyError:
            msg = "Cannot find residue type description for '%s'" % name
            raise exc.ConfigurationError(msg)

    def residue_type_names(self):
        """Return the names of the known residue types."""
        return [v["name"] for v in self.values()]

    def __str__(self):
        msg = "%s - %i residue types available:\n" % (self.__class__.__name__, len(self))
        for name in self.residue_type_names():
            msg += " - '%s'\n" % name
        return msg
