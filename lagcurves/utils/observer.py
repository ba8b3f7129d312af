"""
Synchronous publish/subscribe notification.

Provides:
- Observable: keeps an ordered registry of dependents and notifies them
- Observer: a dependent that registers with observables and rebuilds its
  derived state in update() when one of them changes

Notification is synchronous: notify() calls on_changed() on every
subscribed observer, in subscription order, before it returns. Observers
that are themselves observable propagate the change further by calling
notify() from update().

The registry holds weak references, so an observable never keeps its
observers alive: a curve that is no longer used drops out of the global
settings once it is garbage collected. A failing observer does not stop
the others from being notified; the failures are raised together after
every observer has been called.

Example:
    >>> quote = SimpleQuote(0.25)
    >>> surface.register_with(quote)
    >>> quote.set_value(0.30)     # surface.update() has run on return
"""

import logging
import weakref

from .error import LibError

logger = logging.getLogger(__name__)

###############################################################################


class Observable:
    """ Subject holding the list of observers interested in its changes. """

    def __init__(self):
        # weak references, in subscription order
        self._observers = []

    def subscribe(self, observer):
        """ Add an observer. Subscribing twice has no further effect. """
        if not any(o is observer for o in self.observers()):
            self._observers.append(weakref.ref(observer))

    def unsubscribe(self, observer):
        self._observers = [ref for ref in self._observers
                           if ref() is not None and ref() is not observer]

    def observers(self):
        """ Live observers in subscription order. References to collected
        observers are pruned. """
        self._observers = [ref for ref in self._observers
                           if ref() is not None]
        return [ref() for ref in self._observers]

    def notify(self):
        """ Call on_changed on every observer. Iterates over a snapshot so
        observers may (un)subscribe while being notified. Every observer is
        called even if some fail; the failures are then raised as a single
        LibError. """

        failures = []

        for observer in self.observers():
            try:
                observer.on_changed()
            except Exception as err:
                logger.error("%s failed to update: %s",
                             type(observer).__name__, err)
                failures.append(f"{type(observer).__name__}: {err}")

        if failures:
            raise LibError("could not notify one or more observers: " +
                           "; ".join(failures))

###############################################################################


class Observer:
    """ Dependent of one or more observables. Subclasses implement update()
    to rebuild whatever they derive from the observables. """

    def __init__(self):
        self._observables = []

    def register_with(self, observable):
        if observable is None:
            return
        if not any(o is observable for o in self._observables):
            self._observables.append(observable)
        observable.subscribe(self)

    def unregister_with(self, observable):
        self._observables = [o for o in self._observables
                             if o is not observable]
        observable.unsubscribe(self)

    def unregister_with_all(self):
        for observable in self._observables:
            observable.unsubscribe(self)
        self._observables = []

    def on_changed(self):
        self.update()

    def update(self):
        raise NotImplementedError

###############################################################################
