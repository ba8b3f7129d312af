"""
Generic term structure with a reference date, a calendar and a day count.

Provides the TermStructure base class for:
- A fixed reference date, or a floating one that follows the global
  evaluation date advanced by a number of settlement days
- Converting dates to times from the reference date
- Range checks against [min_date, max_date] with optional extrapolation
- Notification of dependents when the term structure changes

A term structure is both an Observer (of the global settings, and of the
quotes a concrete structure is built on) and an Observable (curves and
surfaces built on top of it register with it).

Example:
    >>> settings.evaluation_date = Date(14, 6, 2024)
    >>> ts = SomeCurve(settlement_days=2, cal_type=CalendarTypes.TARGET)
    >>> ts.reference_date()
    18-JUN-2024
    >>> settings.evaluation_date = Date(17, 6, 2024)
    >>> ts.reference_date()
    19-JUN-2024
"""

import logging
from typing import Optional

from ...utils.error import LibError
from ...utils.date import Date
from ...utils.tenor import Tenor, TimeUnits
from ...utils.calendar import Calendar, CalendarTypes
from ...utils.day_count import DayCount, DayCountTypes
from ...utils.global_vars import g_small
from ...utils.helpers import check_argument_types
from ...utils.observer import Observer, Observable
from ...utils.settings import settings

logger = logging.getLogger(__name__)

###############################################################################


class TermStructure(Observer, Observable):
    """ Base class of curves and surfaces indexed by date. Concrete classes
    implement max_date(). """

    def __init__(self,
                 reference_dt: Optional[Date] = None,
                 settlement_days: Optional[int] = None,
                 cal_type: CalendarTypes = CalendarTypes.WEEKEND,
                 dc_type: DayCountTypes = DayCountTypes.ACT_365F):

        check_argument_types(TermStructure.__init__, locals())

        Observer.__init__(self)
        Observable.__init__(self)

        if (reference_dt is None) == (settlement_days is None):
            raise LibError("Exactly one of reference date and settlement "
                           "days must be given")

        if settlement_days is not None and settlement_days < 0:
            raise LibError(f"Settlement days must be non-negative, "
                           f"got {settlement_days}")

        self._reference_dt = reference_dt
        self._settlement_days = settlement_days
        self._cal_type = cal_type
        self._calendar = Calendar(cal_type)
        self._dc_type = dc_type
        self._day_counter = DayCount(dc_type)
        self._extrapolate = False

        self._moving = reference_dt is None
        self._updated = not self._moving

        if self._moving:
            self.register_with(settings)

    ###########################################################################

    def reference_date(self):
        """ Date at which time is zero. Floating structures recompute it
        lazily after the evaluation date moves. """

        if not self._updated:
            self._reference_dt = self._calendar.advance(
                settings.evaluation_date,
                Tenor(self._settlement_days, TimeUnits.DAYS))
            self._updated = True
            logger.debug("%s reference date set to %s",
                         type(self).__name__, self._reference_dt)

        return self._reference_dt

    def update(self):
        if self._moving:
            self._updated = False
        self.notify()

    ###########################################################################

    def calendar(self):
        return self._calendar

    def day_count(self):
        return self._day_counter

    def dc_type(self):
        return self._dc_type

    def settlement_days(self):
        if self._settlement_days is None:
            raise LibError("settlement days not provided for this instance")
        return self._settlement_days

    ###########################################################################

    def time_from_reference(self, dt: Date):
        """ Year fraction from the reference date to dt. Dates before the
        reference date give negative times. """
        return self._day_counter.year_frac(self.reference_date(), dt)[0]

    def max_date(self):
        raise NotImplementedError

    def max_time(self):
        return self.time_from_reference(self.max_date())

    def min_date(self):
        return self.reference_date()

    def min_time(self):
        return self.time_from_reference(self.min_date())

    ###########################################################################

    def enable_extrapolation(self):
        self._extrapolate = True

    def disable_extrapolation(self):
        self._extrapolate = False

    def allows_extrapolation(self):
        return self._extrapolate

    ###########################################################################

    def check_range(self,
                    dt_or_t,
                    extrapolate: bool = False):
        """ Raise unless extrapolation is requested or enabled, or dt_or_t
        (a date or a time) lies in [min, max]. """

        if extrapolate or self.allows_extrapolation():
            return

        if isinstance(dt_or_t, Date):

            if dt_or_t < self.min_date():
                raise LibError(f"date ({dt_or_t}) before minimum date "
                               f"({self.min_date()})")

            if dt_or_t > self.max_date():
                raise LibError(f"date ({dt_or_t}) is past max curve date "
                               f"({self.max_date()})")
        else:

            t = float(dt_or_t)

            if t < self.min_time() - g_small:
                raise LibError(f"time ({t}) before minimum time "
                               f"({self.min_time()})")

            if t > self.max_time() + g_small:
                raise LibError(f"time ({t}) is past max curve time "
                               f"({self.max_time()})")

###############################################################################
