# -*- coding: utf-8 -*-
# Copyright (c) 2004-2018 Alterra, Wageningen-UR
# Allard de Wit (allard.dewit@wur.nl), April 2014
import logging

from .. import exceptions as exc
from .variablekiosk import VariableKiosk


def _is_private(name: str) -> bool:
    # Note that we just check the first character for underscore
    # since we know these are strings with length > 0 and it's much
    # faster than `startswith`
    return name[0] == "_"


class ParamTemplate:
    """Template for storing parameter values.

    This is meant to be subclassed by the actual class where the parameters
    are defined. Parameters annotated as `float` or `list` are converted
    to that type; `None` is kept as is so that optional parameters can be
    left unspecified.

    example::

        >>> from surfom.base import ParamTemplate
        >>>
        >>> class Parameters(ParamTemplate):
        ...     __slots__ = ["A", "B", "C"]
        ...     A: float
        ...     B: float
        ...     C: float
        ...
        >>> params = Parameters({"A": 1, "B": -99, "C": 2.45})
        >>> params.A
        1.0
        >>> params = Parameters({"A": 1., "B": -99})
        Traceback (most recent call last):
          ...
        surfom.exceptions.ParameterError: Value for parameter C missing.
    """

    __slots__ = []

    def __init__(self, parvalues):
        for parname in self.__slots__:
            # check if the parname is available in the dictionary of parvalues
            if parname not in parvalues:
                msg = "Value for parameter %s missing." % parname
                raise exc.ParameterError(msg)
            try:
                type_ = self.__annotations__[parname]
            except KeyError as err:
                raise RuntimeError(
                    f"Could not determine type for {parname}. All variables must have a type annotation"
                ) from err

            value = parvalues[parname]
            if value is not None and type_ in (float, list):
                try:
                    value = type_(value)
                except (TypeError, ValueError) as err:
                    msg = "Value for parameter %s cannot be converted to %s: %r" % (
                        parname,
                        type_.__name__,
                        value,
                    )
                    raise exc.ParameterError(msg) from err
            setattr(self, parname, value)


def check_publish(publish):
    """Convert the list of published variables to a set with unique elements."""

    if isinstance(publish, (list, tuple)):
        return set(publish)
    if isinstance(publish, str):
        return {publish}
    if publish is None:
        return set()

    msg = "The publish keyword should specify a string or a list of strings"
    raise RuntimeError(msg)


class StatesRatesCommon:
    __slots__ = [
        "_kiosk",
        "_valid_vars",
        "_locked",
        "_published_attrs",
        "_publish_enabled",
    ]

    _kiosk: VariableKiosk
    _valid_vars: set[str]
    _locked: bool
    _published_attrs: set[str]
    _publish_enabled: bool

    def __init__(self, kiosk=None, publish=None):
        """Set up the common stuff for the states and rates template
        including variables that have to be published in the kiosk
        """
        # Make sure that the variable kiosk is provided
        if not isinstance(kiosk, VariableKiosk):
            msg = (
                "Variable Kiosk must be provided when instantiating rate "
                + "or state variables."
            )
            raise RuntimeError(msg)

        self._kiosk = kiosk
        self._locked = False
        self._published_attrs = set()
        self._publish_enabled = True

        # Check publish variable for correct usage
        publish = check_publish(publish)

        # Determine the rate/state attributes defined by the user
        self._valid_vars = self._find_valid_variables()

        # Register all variables with the kiosk and optionally publish them.
        self._register_with_kiosk(publish)

    def _find_valid_variables(self):
        """Returns a set with the valid state/rate variables names. Valid rate
        variables have names not starting with '_'.
        """
        return {a for a in self.__slots__ if not _is_private(a)}

    def _register_with_kiosk(self, publish):
        """Register the variable with the variable kiosk.

        Variables registered twice raise an error, which keeps state/rate
        names unique across the model. Variables listed in `publish` get
        their value mirrored into the kiosk on every assignment.
        """

        for attr in self._valid_vars:
            if attr in publish:
                publish.remove(attr)
                self._kiosk.register_variable(
                    id(self), attr, type=self._vartype, publish=True
                )
                self._published_attrs.add(attr)
            else:
                self._kiosk.register_variable(
                    id(self), attr, type=self._vartype, publish=False
                )
        # Check if the set of published variables is exhausted, otherwise
        # raise an error.
        if len(publish) > 0:
            msg = (
                "Unknown variable(s) specified with the publish " + "keyword: %s"
            ) % publish
            raise exc.SurfomError(msg)

    def __setattr__(self, name, value):
        if not _is_private(name):
            if self._locked:
                msg = "Assignment to locked variable '%s' on %s." % (
                    name,
                    self.__class__.__name__,
                )
                raise exc.SurfomError(msg)
            if self._publish_enabled and name in self._published_attrs:
                self._kiosk.set_variable(id(self), name, value)
        super().__setattr__(name, value)

    def unlock(self):
        "Unlocks the attributes of this class."
        self._locked = False

    def lock(self):
        "Locks the attributes of this class."
        self._locked = True

    @property
    def logger(self):
        loggername = "%s.%s" % (self.__class__.__module__, self.__class__.__name__)
        return logging.getLogger(loggername)


class StatesTemplate(StatesRatesCommon):
    """Takes care of assigning initial values to state variables, registering
    variables in the kiosk and monitoring assignments to variables that are
    published.

    :param kiosk: Instance of the VariableKiosk class. All state variables
        will be registered in the kiosk in order to enforce that variable names
        are unique across the model. Moreover, the value of variables that
        are published will be available through the VariableKiosk.
    :param publish: Lists the variables whose values need to be published
        in the VariableKiosk. Can be omitted if no variables need to be
        published.

    Initial values for state variables must be specified as keyword when
    instantiating a States class. After initialization the object is locked;
    assignments need an `unlock()` first (see `decorators.prepare_states`).
    """

    __slots__ = ["_vartype"]

    _vartype: str

    def __init__(self, kiosk=None, publish=None, **kwargs):
        self._vartype = "S"
        StatesRatesCommon.__init__(self, kiosk, publish)

        # set initial state value
        for attr in self._valid_vars:
            if attr in kwargs:
                value = kwargs.pop(attr)
                setattr(self, attr, value)
            else:
                msg = "Initial value for state %s missing." % attr
                raise exc.SurfomError(msg)

        # Check if kwargs is empty, otherwise issue a warning
        if len(kwargs) > 0:
            msg = (
                "Initial value given for unknown state variable(s): " + "%s"
            ) % kwargs.keys()
            self.logger.warning(msg)

        # Lock the object to prevent further changes at this stage.
        self._locked = True


class RatesTemplate(StatesRatesCommon):
    """Takes care of registering variables in the kiosk and monitoring
    assignments to variables that are published.

    :param kiosk: Instance of the VariableKiosk class. All rate variables
        will be registered in the kiosk in order to enforce that variable names
        are unique across the model. Moreover, the value of variables that
        are published will be available through the VariableKiosk.
    :param publish: Lists the variables whose values need to be published
        in the VariableKiosk. Can be omitted if no variables need to be
        published.

    The only difference with the `StatesTemplate` is that the initial value
    of rate variables does not need to be specified because the value will
    be set to zero (int, float variables) or False (bool variables).
    """

    __slots__ = ["_vartype", "_rate_vars_zero"]

    _rate_vars_zero: dict

    def __init__(self, kiosk=None, publish=None):
        """Set up the RatesTemplate and set monitoring on variables that
        have to be published.
        """
        self._vartype = "R"
        StatesRatesCommon.__init__(self, kiosk, publish)

        # Determine the zero value for all rate variable if possible
        self._rate_vars_zero = self._find_rate_zero_values()

        # Initialize all rate variables to zero or False
        self.zerofy()

        # Lock the object to prevent further changes at this stage.
        self._locked = True

    def _find_rate_zero_values(self):
        """Returns a dict with the names with the valid rate variables names as keys and
        the values are the zero values used by the zerofy() method. This means 0 for int,
        0.0 for float and False for bool.
        """

        d = {}
        for attr in self._valid_vars:
            try:
                type_ = self.__annotations__[attr]
            except KeyError as err:
                raise RuntimeError(
                    f"Could not determine type for {attr}. All variables must have a type annotation"
                ) from err

            if type_ == int:
                d[attr] = 0
            elif type_ == float:
                d[attr] = 0.0
            elif type_ == bool:
                d[attr] = False
            else:
                msg = (
                    f"Rate variable '{attr}' is type '{type_.__name__}' not float, bool or int. "
                    "Its zero value cannot be determined and it will not be treated by zerofy()."
                )
                self.logger.warning(msg)

        return d

    def zerofy(self):
        """Sets the values of all rate values to zero (int, float) or False (bool)."""
        locked = self._locked
        self._locked = False
        for attr, value in self._rate_vars_zero.items():
            setattr(self, attr, value)
        self._locked = locked
