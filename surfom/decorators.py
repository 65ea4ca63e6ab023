"""Decorators that unlock the rate and state templates of a simulation
object for the duration of the decorated method.
"""
from functools import wraps


def prepare_rates(func):
    @wraps(func)
    def wrapper(self, *args, **kwargs):
        self.rates.unlock()
        try:
            return func(self, *args, **kwargs)
        finally:
            self.rates.lock()

    return wrapper


def prepare_states(func):
    @wraps(func)
    def wrapper(self, *args, **kwargs):
        self.states.unlock()
        try:
            return func(self, *args, **kwargs)
        finally:
            self.states.lock()

    return wrapper
