"""
Library-wide settings.

The evaluation date is the "today" used by term structures that float
with the market (built from a number of settlement days rather than a
fixed reference date). It is observable: changing it notifies every
floating term structure, which then recomputes its reference date.

Example:
    >>> from lagcurves.utils.settings import settings
    >>> settings.evaluation_date = Date(15, 6, 2024)
"""

import datetime
import logging

from lagcurves.utils.date import Date
from lagcurves.utils.error import LibError
from lagcurves.utils.observer import Observable

logger = logging.getLogger(__name__)

###############################################################################


class Settings(Observable):

    def __init__(self):
        super().__init__()
        self._evaluation_dt = None

    @property
    def evaluation_date(self):
        """ Evaluation date, defaulting to the system date when unset. """
        if self._evaluation_dt is None:
            return Date.from_date(datetime.date.today())
        return self._evaluation_dt

    @evaluation_date.setter
    def evaluation_date(self, dt: Date):
        if dt is not None and not isinstance(dt, Date):
            raise LibError(f"Evaluation date must be a Date, got {dt!r}")

        if dt == self._evaluation_dt:
            return

        logger.debug("Evaluation date moved from %s to %s",
                     self._evaluation_dt, dt)
        self._evaluation_dt = dt
        self.notify()

    def reset(self):
        """ Return to the system date. """
        self.evaluation_date = None

###############################################################################


settings = Settings()
