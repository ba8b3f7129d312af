"""
Observable market quotes.

A SimpleQuote holds a single market value (a rate, a spread, a base
correlation) and notifies its dependents whenever the value changes.
Curves and surfaces built on quotes register with them and rebuild on
notification, so a lookup made after set_value() always sees the new
value.

Example:
    >>> quote = SimpleQuote(0.25)
    >>> quote.value()
    0.25
    >>> quote.set_value(0.30)
    0.25
"""

from lagcurves.utils.error import LibError
from lagcurves.utils.observer import Observable

###############################################################################


class SimpleQuote(Observable):

    def __init__(self, value: float = None):
        super().__init__()
        self._value = None if value is None else float(value)

    def value(self):
        if self._value is None:
            raise LibError("invalid SimpleQuote: no value set")
        return self._value

    def is_valid(self):
        return self._value is not None

    def set_value(self, value: float = None):
        """ Set a new value, notifying observers if it differs from the
        current one. Returns the previous value. """
        old_value = self._value
        new_value = None if value is None else float(value)
        if new_value != old_value:
            self._value = new_value
            self.notify()
        return old_value

    def reset(self):
        self.set_value(None)

    def __repr__(self):
        return f"SimpleQuote({self._value})"

###############################################################################
