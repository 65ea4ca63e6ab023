"""Miscellaneous numerical helpers shared by the residue components."""
import logging
import sys

import numpy as np

# Smallest difference at which two reals are treated as different
EPSILON = 2 * sys.float_info.min

BOUND_WARNING = "'%s' out of bounds! %s < %s < %s evaluates 'FALSE'"


def limit(vmin, vmax, v):
    """limits the range of v between vmin and vmax"""

    if vmin > vmax:
        raise RuntimeError("Min value (%f) larger than max (%f)" % (vmin, vmax))

    if v < vmin:  # V below range: return min
        return vmin
    elif v < vmax:  # v within range: return v
        return v
    else:  # v above range: return max
        return vmax


def divide(numerator, denominator, default=0.0):
    """Divide two numbers, returning `default` when the denominator is zero."""
    if denominator == 0:
        return default
    return numerator / denominator


def reals_are_equal(first, second):
    return abs(first - second) < EPSILON


def bound_check(value, lower, upper, vname, logger=None):
    """Log a warning when `value` lies outside [lower, upper].

    The value itself is left untouched; returns True when within bounds.
    """
    if value < lower or value > upper:
        logger = logger or logging.getLogger(__name__)
        logger.warning(BOUND_WARNING % (vname, lower, value, upper))
        return False
    return True


def add_cover(cover1, cover2):
    """Combine two fractional covers assuming random overlap.

    `cover1` and `cover2` are fractions (0-1) of the ground area that is
    covered; the returned value is the fraction covered when both are
    present.
    """
    bare = (1.0 - cover1) * (1.0 - cover2)
    return 1.0 - bare


def cumulative_index(cum_sum, values):
    """Return the index of the element at which the running total of
    `values` first reaches `cum_sum`.

    The last element is never summed: if the total is not reached before it,
    the index of the last element is returned.
    """
    values = np.asarray(values, dtype=float)
    last = len(values) - 1
    if last <= 0:
        return 0
    reached = np.nonzero(np.cumsum(values[:last]) >= cum_sum)[0]
    if len(reached) > 0:
        return int(reached[0])
    return last


def merge_dict(d1, d2, overwrite=False):
    """Merge contents of d1 and d2 and return the merged dictionary

    Note:

    * The dictionaries d1 and d2 are unaltered.
    * If `overwrite=False` (default), a `RuntimeError` will be raised when
      duplicate keys exist, else any existing keys in d1 are silently
      overwritten by d2.
    """
    # Note: May ask for the merged dictionary to be created from both
    # dictionary, but this has been left out because it makes the error
    # reporting less clear.
    if overwrite is False:
        sd1 = set(d1.keys())
        sd2 = set(d2.keys())
        intersect = sd1.intersection(sd2)
        if len(intersect) > 0:
            msg = "Dictionaries to merge have overlapping keys: %s"
            raise RuntimeError(msg % intersect)

    td = dict(d1)
    td.update(d2)
    return td


def version_tuple(v):
    """Convert a version string like "1.0.0" to a tuple of ints for comparison."""
    return tuple(map(int, (str(v).split("."))))
