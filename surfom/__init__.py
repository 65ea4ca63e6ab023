# -*- coding: utf-8 -*-
# Copyright (c) 2004-2018 Alterra, Wageningen-UR
# Allard de Wit (allard.dewit@wur.nl), April 2018
"""
surfom simulates the daily mass balance of carbon, nitrogen and phosphorus
in organic residue lying on and standing above the soil surface, and its
decomposition into the soil nutrient pools.

It is built from the same building blocks as the Python Crop Simulation
Environment: simulation objects with a rigid distinction between rate
calculation and state integration, a variable kiosk for exchanging
variables, and signals for management events such as residue addition
and tillage. The soil nutrient model is an external collaborator that
receives the incorporated and leached nutrients and decides on the
actual decomposition of the residues.
"""

__license__ = "European Union Public License"
__stable__ = True
__version__ = "0.1.0"

import logging
import logging.config
import os

__all__ = ["settings", "initialize"]

# Internal guard to ensure one-time initialization
__initialized = False
settings = None


def _ensure_initialized():
    global __initialized, settings
    if __initialized:
        return

    from .settings import settings as _settings

    settings = _settings
    os.makedirs(settings.LOG_DIR, exist_ok=True)
    logging.config.dictConfig(settings.LOG_CONFIG)
    __initialized = True


def initialize():
    """Initialize surfom: read the settings and configure logging."""
    _ensure_initialized()
