"""Signal sending and receiving for simulation objects.

Signals are scoped to the VariableKiosk of a model instance: only objects
sharing the same kiosk receive each other's signals. This allows several
model instances to run side by side in one process.
"""
import logging

from pydispatch import dispatcher


class DispatcherObject:
    """Mixin that provides `_send_signal` and `_connect_signal`.

    Subclasses must define a `kiosk` attribute.
    """

    __slots__ = ["__weakref__"]

    def _send_signal(self, signal, *args, **kwargs):
        self.logger.debug("Sent signal: %s" % signal)
        return dispatcher.send(signal=signal, sender=self.kiosk, *args, **kwargs)

    def _connect_signal(self, handler, signal):
        dispatcher.connect(handler, signal, sender=self.kiosk)
        self.logger.debug("Connected handler '%s' to signal '%s'." % (handler, signal))

    @property
    def logger(self):
        loggername = "%s.%s" % (self.__class__.__module__, self.__class__.__name__)
        return logging.getLogger(loggername)
