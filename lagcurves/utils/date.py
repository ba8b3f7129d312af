"""
Calendar date class used throughout the library.

Provides the Date class for:
- Construction from day, month and year with validation
- Day, weekday, month, year and tenor arithmetic
- Ordering and hashing so dates can be compared and used as keys
- Conversion to and from Python datetime.date

Month and year arithmetic clamps to the end of the month, so that
Date(31, 1, 2024).add_months(1) is 29-FEB-2024.

Example:
    >>> dt = Date(15, 6, 2024)
    >>> dt.add_tenor("3M")
    15-SEP-2024
    >>> dt.add_tenor("-3M")
    15-MAR-2024
    >>> Date(1, 7, 2024) - dt
    16
"""

import datetime

from dateutil.relativedelta import relativedelta

from lagcurves.utils.error import LibError
from lagcurves.utils.tenor import Tenor, TimeUnits

###############################################################################

_MONTH_NAMES = ["JAN", "FEB", "MAR", "APR", "MAY", "JUN",
                "JUL", "AUG", "SEP", "OCT", "NOV", "DEC"]

# Excel serial date 0 is 30-Dec-1899
_EXCEL_ORIGIN = datetime.date(1899, 12, 30)

###############################################################################


class Date():
    """ A calendar date with financial date arithmetic. """

    def __init__(self,
                 d: int,
                 m: int,
                 y: int):
        """ Create a date from day, month and year. Invalid dates such as
        30 February raise a LibError. """

        for value, name in ((d, "day"), (m, "month"), (y, "year")):
            if isinstance(value, bool) or not isinstance(value, int):
                raise LibError(f"Date {name} must be an integer, got {value}")

        try:
            self._dt = datetime.date(y, m, d)
        except ValueError as err:
            raise LibError(f"Invalid date {d}-{m}-{y}: {err}") from err

        self._d = d
        self._m = m
        self._y = y
        self._excel_dt = (self._dt - _EXCEL_ORIGIN).days
        self._weekday = self._dt.weekday()

    ###########################################################################

    @classmethod
    def from_date(cls, dt: datetime.date):
        """ Create a Date from a Python datetime.date or datetime. """
        if isinstance(dt, datetime.datetime):
            dt = dt.date()
        return cls(dt.day, dt.month, dt.year)

    ###########################################################################

    def d(self):
        return self._d

    def m(self):
        return self._m

    def y(self):
        return self._y

    def weekday(self):
        """ Day of the week with Monday = 0 and Sunday = 6. """
        return self._weekday

    def to_date(self):
        return self._dt

    ###########################################################################

    def is_weekend(self):
        return self._weekday >= 5

    def is_eom(self):
        """ True if the date is the last day of its month. """
        return self.add_days(1)._m != self._m

    def eom(self):
        """ The last day of the month of this date. """
        first_of_next = self._dt.replace(day=1) + relativedelta(months=1)
        return Date.from_date(first_of_next - datetime.timedelta(days=1))

    ###########################################################################

    def add_days(self, num_days: int):
        return Date.from_date(self._dt + datetime.timedelta(days=num_days))

    def add_weekdays(self, num_days: int):
        """ Move forward (or back for a negative number) by a number of
        weekdays, skipping Saturdays and Sundays. """

        step = 1 if num_days >= 0 else -1
        remaining = abs(num_days)
        dt = self
        while remaining > 0:
            dt = dt.add_days(step)
            if dt.is_weekend() is False:
                remaining -= 1
        return dt

    def add_months(self, num_months: int):
        return Date.from_date(self._dt + relativedelta(months=num_months))

    def add_years(self, num_years: int):
        return Date.from_date(self._dt + relativedelta(years=num_years))

    def add_tenor(self, tenor):
        """ Add a tenor such as "3M", "-1Y" or a Tenor object. """

        tenor = Tenor(tenor)
        n = tenor.length()

        if tenor.units() == TimeUnits.DAYS:
            return self.add_days(n)
        elif tenor.units() == TimeUnits.WEEKS:
            return self.add_days(7 * n)
        elif tenor.units() == TimeUnits.MONTHS:
            return self.add_months(n)
        else:
            return self.add_years(n)

    ###########################################################################

    def __sub__(self, other):
        if isinstance(other, Date):
            return self._excel_dt - other._excel_dt
        return NotImplemented

    def __eq__(self, other):
        if isinstance(other, Date) is False:
            return NotImplemented
        return self._excel_dt == other._excel_dt

    def __hash__(self):
        return hash(self._excel_dt)

    def __lt__(self, other):
        return self._excel_dt < other._excel_dt

    def __le__(self, other):
        return self._excel_dt <= other._excel_dt

    def __gt__(self, other):
        return self._excel_dt > other._excel_dt

    def __ge__(self, other):
        return self._excel_dt >= other._excel_dt

    ###########################################################################

    def __str__(self):
        return f"{self._d:02d}-{_MONTH_NAMES[self._m - 1]}-{self._y}"

    def __repr__(self):
        return str(self)

###############################################################################
