# -*- coding: utf-8 -*-
# Copyright (c) 2004-2018 Alterra, Wageningen-UR
# Allard de Wit (allard.dewit@wur.nl), April 2014
import os

import yaml
from cachetools import Cache, cachedmethod
from copy import deepcopy

from ..base import ResidueTypeProvider
from .. import exceptions as exc
from ..util import version_tuple
from ..db import DEFAULT_RESIDUE_TYPES


_RESIDUE_TYPE_CACHE = Cache(maxsize=30)


class YAMLResidueTypeProvider(ResidueTypeProvider):
    """A residue type provider for reading residue type descriptions stored in YAML.

        :param fpath: full path to a YAML file with residue types. When not
            given, the registry shipped with the package is used.

    The YAML file has a `Version` and a `ResidueTypes` section with one
    entry per residue type:

        >>> from surfom.fileinput import YAMLResidueTypeProvider
        >>> p = YAMLResidueTypeProvider()
        >>> print(p)
        YAMLResidueTypeProvider - 10 residue types available:
         - 'wheat'
         - 'barley'
         ...
        >>> p.get_residue_type("Wheat")["fraction_C"]
        0.4

    Parsed files are cached in memory after the initial read.
    """

    # Compatibility of data provider with YAML residue type file version
    compatible_version = "1.0.0"

    def __init__(self, fpath=None, force_reload=False):
        ResidueTypeProvider.__init__(self)

        if force_reload:
            _RESIDUE_TYPE_CACHE.clear()

        fpath = fpath or DEFAULT_RESIDUE_TYPES
        if not os.path.exists(fpath):
            msg = "Cannot find residue type file at {f}".format(f=fpath)
            raise exc.ConfigurationError(msg)

        self.fpath = fpath
        self.read_residue_types(fpath)

    def _check_version(self, parameters, fname):
        """Checks the version of the residue type file with the version supported by this provider.

        Raises an exception if the file is incompatible.

        :param parameters: The residue types loaded by YAML
        """
        try:
            v = parameters["Version"]
        except (KeyError, TypeError) as err:
            msg = f"Version check failed on residue type file: {fname}"
            raise exc.ConfigurationError(msg) from err

        if version_tuple(v) != version_tuple(self.compatible_version):
            msg = "Version supported by %s is %s, while residue type file version is %s!"
            raise exc.ConfigurationError(
                msg % (self.__class__.__name__, self.compatible_version, v)
            )

    @cachedmethod(lambda self: _RESIDUE_TYPE_CACHE)
    def _read_residue_type_yaml_file(self, yaml_fname):
        with open(yaml_fname) as fp:
            parameters = yaml.safe_load(fp)

        self._check_version(parameters, fname=yaml_fname)

        return parameters

    def read_residue_types(self, fpath):
        """Reads the residue types from the YAML file at `fpath`."""
        # Deepcopy just to ensure that nothing mutates the cached file
        parameters = deepcopy(self._read_residue_type_yaml_file(fpath))
        try:
            residue_types = parameters["ResidueTypes"]
        except KeyError as err:
            msg = "No 'ResidueTypes' section in residue type file: %s" % fpath
            raise exc.ConfigurationError(msg) from err

        for name, description in residue_types.items():
            description = {k: v for k, v in description.items() if k != "Metadata"}
            self.add_residue_type(name, description)
        self.logger.debug("Read %i residue types from %s" % (len(residue_types), fpath))
