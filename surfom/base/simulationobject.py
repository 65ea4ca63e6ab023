# -*- coding: utf-8 -*-
# Copyright (c) 2004-2018 Alterra, Wageningen-UR
# Allard de Wit (allard.dewit@wur.nl), April 2014
import logging
from datetime import date

from .dispatcher import DispatcherObject

from .. import exceptions as exc
from .variablekiosk import VariableKiosk
from .states_rates import StatesTemplate, RatesTemplate, ParamTemplate


class SimulationObject(DispatcherObject):
    """Base class for simulation objects.

    :param day: start date of the simulation
    :param kiosk: variable kiosk of this model instance

    The day and kiosk are mandatory variables and must be passed when
    instantiating a SimulationObject. Any further arguments are handed to
    `initialize()`, which subclasses must implement.
    """

    __slots__ = [
        "states",
        "rates",
        "params",
        "kiosk",
        "_sub_sim_attrs",
    ]

    # Placeholders for logger, params, states, rates and variable kiosk
    states: StatesTemplate | None
    rates: RatesTemplate | None
    params: ParamTemplate | None
    kiosk: VariableKiosk

    _sub_sim_attrs: dict

    def __init__(self, day, kiosk, *args, **kwargs):
        self._sub_sim_attrs = {}
        self.states = None
        self.rates = None
        self.params = None

        # Check that day variable is specified
        if not isinstance(day, date):
            this = "%s.%s" % (self.__class__.__module__, self.__class__.__name__)
            msg = (
                "%s should be instantiated with the simulation start "
                + "day as first argument!"
            )
            raise exc.SurfomError(msg % this)

        # Check that kiosk variable is specified and assign to self
        if not isinstance(kiosk, VariableKiosk):
            this = "%s.%s" % (self.__class__.__module__, self.__class__.__name__)
            msg = (
                "%s should be instantiated with the VariableKiosk "
                + "as second argument!"
            )
            raise exc.SurfomError(msg % this)
        self.kiosk = kiosk

        self.initialize(day, kiosk, *args, **kwargs)
        self.logger.debug("Component successfully initialized on %s!" % day)

    def initialize(self, *args, **kwargs):
        msg = "`initialize` method not yet implemented on %s" % self.__class__.__name__
        raise NotImplementedError(msg)

    @property
    def logger(self):
        loggername = "%s.%s" % (self.__class__.__module__, self.__class__.__name__)
        return logging.getLogger(loggername)

    def integrate(self, *args, **kwargs):
        msg = "`integrate` method not yet implemented on %s" % self.__class__.__name__
        raise NotImplementedError(msg)

    def calc_rates(self, *args, **kwargs):
        msg = "`calc_rates` method not yet implemented on %s" % self.__class__.__name__
        raise NotImplementedError(msg)

    def __setattr__(self, attr, value):
        # Need to safely grab this because we may not have fully
        # initialized our class before setting some variables
        sub_sim_attrs = getattr(self, "_sub_sim_attrs", None)

        if isinstance(value, SimulationObject):
            if sub_sim_attrs is None:
                raise AttributeError(
                    "Class is not yet initialized before receiving a SimulationObject"
                )
            self._sub_sim_attrs[attr] = value
        elif sub_sim_attrs is not None and attr in sub_sim_attrs:
            del self._sub_sim_attrs[attr]

        super().__setattr__(attr, value)

    @property
    def subSimObjects(self):
        """Return SimulationObjects embedded within self."""
        return list(self._sub_sim_attrs.values())

    def zerofy(self):
        """Zerofy the value of all rate variables of this and any sub-SimulationObjects."""

        if self.rates is not None:
            self.rates.zerofy()

        # Walk over possible sub-simulation objects.
        for simobj in self.subSimObjects:
            simobj.zerofy()
