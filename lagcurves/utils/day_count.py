"""
Day count conventions for converting date intervals into year fractions.

Supported conventions:
- THIRTY_360_BOND: 30/360 bond basis (ISDA 2006 4.16(f))
- THIRTY_E_360: 30E/360 Eurobond basis (ISDA 2006 4.16(g))
- ACT_ACT_ISDA: actual days split by calendar year, 365 or 366 denominator
- ACT_365F: actual days over 365
- ACT_360: actual days over 360
- SIMPLE: actual days over gDaysInYear

Each call to year_frac returns the tuple (year_fraction, numerator,
denominator) so callers can inspect the day count they were given.
Reversing the dates negates the fraction.

Example:
    >>> dc = DayCount(DayCountTypes.ACT_365F)
    >>> dc.year_frac(Date(15, 6, 2023), Date(15, 12, 2023))
    (0.5013698630136987, 183, 365)
"""

import calendar
from enum import Enum

from lagcurves.utils.date import Date
from lagcurves.utils.error import LibError
from lagcurves.utils.global_vars import gDaysInYear

###############################################################################


def is_leap_year(y: int):
    return calendar.isleap(y)


def is_last_day_of_feb(dt: Date):
    return dt.m() == 2 and dt.is_eom()

###############################################################################


class DayCountTypes(Enum):
    ZERO = 0
    THIRTY_360_BOND = 1
    THIRTY_E_360 = 2
    ACT_ACT_ISDA = 5
    ACT_365F = 7
    ACT_360 = 8
    SIMPLE = 10

###############################################################################


class DayCount:
    """ Calculate the fractional number of years between two dates
    according to a specified day count convention. """

    def __init__(self,
                 dcc_type: DayCountTypes):

        if isinstance(dcc_type, DayCountTypes) is False:
            raise LibError(f"Unknown day count type {dcc_type}")

        self._type = dcc_type

    ###########################################################################

    def year_frac(self,
                  dt1: Date,
                  dt2: Date):
        """ Year fraction between dt1 and dt2 as (fraction, num, den). """

        if dt2 < dt1:
            (acc_factor, num, den) = self.year_frac(dt2, dt1)
            return (-acc_factor, -num, den)

        d1, m1, y1 = dt1.d(), dt1.m(), dt1.y()
        d2, m2, y2 = dt2.d(), dt2.m(), dt2.y()

        if self._type == DayCountTypes.ZERO:
            return (0.0, 0, 1)

        elif self._type == DayCountTypes.THIRTY_360_BOND:

            if d1 == 31:
                d1 = 30

            if d2 == 31 and d1 == 30:
                d2 = 30

            num = 360 * (y2 - y1) + 30 * (m2 - m1) + (d2 - d1)
            den = 360
            return (num / den, num, den)

        elif self._type == DayCountTypes.THIRTY_E_360:

            if d1 == 31:
                d1 = 30

            if d2 == 31:
                d2 = 30

            num = 360 * (y2 - y1) + 30 * (m2 - m1) + (d2 - d1)
            den = 360
            return (num / den, num, den)

        elif self._type == DayCountTypes.ACT_ACT_ISDA:

            num = dt2 - dt1
            denom1 = 366 if is_leap_year(y1) else 365

            if y1 == y2:
                return (num / denom1, num, denom1)

            denom2 = 366 if is_leap_year(y2) else 365
            days_in_first = Date(1, 1, y1 + 1) - dt1
            days_in_last = dt2 - Date(1, 1, y2)
            acc_factor = days_in_first / denom1
            acc_factor += (y2 - y1 - 1)
            acc_factor += days_in_last / denom2
            return (acc_factor, num, denom1)

        elif self._type == DayCountTypes.ACT_365F:

            num = dt2 - dt1
            den = 365
            return (num / den, num, den)

        elif self._type == DayCountTypes.ACT_360:

            num = dt2 - dt1
            den = 360
            return (num / den, num, den)

        elif self._type == DayCountTypes.SIMPLE:

            num = dt2 - dt1
            den = gDaysInYear
            return (num / den, num, den)

        raise LibError(f"{self._type} is not one of DayCountTypes")

    ###########################################################################

    def __repr__(self):
        return str(self._type)

###############################################################################
