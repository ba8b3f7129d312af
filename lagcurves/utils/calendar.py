"""
Business day calendars, business day adjustment and date generation rules.

Provides the Calendar class for:
- Testing whether a date is a business day
- Adjusting dates with a business day convention
- Adding business days
- Advancing a date by a tenor (business days for day tenors, calendar
  months and years otherwise, followed by an adjustment)

Calendars:
- NONE: every day is a business day
- WEEKEND: Saturdays and Sundays are holidays
- TARGET: Eurosystem TARGET2 calendar (weekends, New Year, Good Friday,
  Easter Monday, Labour Day, Christmas and Boxing Day)

Date generation rules (used by Schedule):
- FORWARD / BACKWARD: roll from the effective / termination date
- ZERO: no intermediate dates
- OLD_CDS, CDS, CDS2015: IMM twentieth roll dates used by credit products

Example:
    >>> cal = Calendar(CalendarTypes.WEEKEND)
    >>> cal.adjust(Date(1, 1, 2023), BusDayAdjustTypes.FOLLOWING)
    02-JAN-2023
    >>> cal.advance(Date(15, 6, 2024), "5Y", BusDayAdjustTypes.FOLLOWING)
    15-JUN-2029
"""

import datetime
from enum import Enum

from lagcurves.utils.date import Date
from lagcurves.utils.error import LibError
from lagcurves.utils.tenor import Tenor, TimeUnits

###############################################################################


class BusDayAdjustTypes(Enum):
    NONE = 1
    FOLLOWING = 2
    MODIFIED_FOLLOWING = 3
    PRECEDING = 4
    MODIFIED_PRECEDING = 5

###############################################################################


class CalendarTypes(Enum):
    NONE = 1
    WEEKEND = 2
    TARGET = 3

###############################################################################


class DateGenRuleTypes(Enum):
    FORWARD = 1
    BACKWARD = 2
    ZERO = 3
    OLD_CDS = 4
    CDS = 5
    CDS2015 = 6

###############################################################################


def easter_monday(y: int) -> Date:
    """ Easter Monday of year y (anonymous Gregorian algorithm). """
    a = y % 19
    b = y // 100
    c = y % 100
    d = b // 4
    e = b % 4
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i = c // 4
    k = c % 4
    l = (32 + 2 * e + 2 * i - h - k) % 7
    m = (a + 11 * h + 22 * l) // 451
    month = (h + l - 7 * m + 114) // 31
    day = ((h + l - 7 * m + 114) % 31) + 1
    easter_sunday = datetime.date(y, month, day)
    return Date.from_date(easter_sunday + datetime.timedelta(days=1))

###############################################################################


class Calendar:
    """ Business day calendar with date adjustment functionality. """

    def __init__(self,
                 cal_type: CalendarTypes):

        if isinstance(cal_type, CalendarTypes) is False:
            raise LibError(f"Unknown calendar type {cal_type}")

        self._cal_type = cal_type

    ###########################################################################

    def cal_type(self):
        return self._cal_type

    ###########################################################################

    def is_holiday(self, dt: Date):
        """ True if the date is not a business day. """

        if self._cal_type == CalendarTypes.NONE:
            return False

        if dt.is_weekend():
            return True

        if self._cal_type == CalendarTypes.WEEKEND:
            return False

        d, m = dt.d(), dt.m()
        em = easter_monday(dt.y())

        if d == 1 and m == 1:
            return True
        if dt == em or dt == em.add_days(-3):
            return True
        if d == 1 and m == 5:
            return True
        if d in (25, 26) and m == 12:
            return True

        return False

    def is_business_day(self, dt: Date):
        return not self.is_holiday(dt)

    ###########################################################################

    def adjust(self,
               dt: Date,
               bd_type: BusDayAdjustTypes):
        """ Roll a date onto a business day using the adjustment rule. """

        if isinstance(bd_type, BusDayAdjustTypes) is False:
            raise LibError(f"Invalid bus day adjust type {bd_type}")

        if bd_type == BusDayAdjustTypes.NONE:
            return dt

        if bd_type in (BusDayAdjustTypes.FOLLOWING,
                       BusDayAdjustTypes.MODIFIED_FOLLOWING):
            adjusted = dt
            while self.is_holiday(adjusted):
                adjusted = adjusted.add_days(1)

            if bd_type == BusDayAdjustTypes.MODIFIED_FOLLOWING and \
                    adjusted.m() != dt.m():
                return self.adjust(dt, BusDayAdjustTypes.PRECEDING)

            return adjusted

        adjusted = dt
        while self.is_holiday(adjusted):
            adjusted = adjusted.add_days(-1)

        if bd_type == BusDayAdjustTypes.MODIFIED_PRECEDING and \
                adjusted.m() != dt.m():
            return self.adjust(dt, BusDayAdjustTypes.FOLLOWING)

        return adjusted

    ###########################################################################

    def add_business_days(self,
                          dt: Date,
                          num_days: int):
        """ Move by a number of business days. Zero days adjusts the date
        to the following business day. """

        if num_days == 0:
            return self.adjust(dt, BusDayAdjustTypes.FOLLOWING)

        step = 1 if num_days > 0 else -1
        remaining = abs(num_days)
        new_dt = dt
        while remaining > 0:
            new_dt = new_dt.add_days(step)
            if self.is_business_day(new_dt):
                remaining -= 1

        return new_dt

    ###########################################################################

    def advance(self,
                dt: Date,
                tenor,
                bd_type: BusDayAdjustTypes = BusDayAdjustTypes.FOLLOWING):
        """ Advance a date by a tenor. Day tenors count business days, any
        other unit adds calendar time and then adjusts. """

        tenor = Tenor(tenor)

        if tenor.units() == TimeUnits.DAYS:
            return self.add_business_days(dt, tenor.length())

        return self.adjust(dt.add_tenor(tenor), bd_type)

    ###########################################################################

    def __repr__(self):
        return str(self._cal_type)

###############################################################################
