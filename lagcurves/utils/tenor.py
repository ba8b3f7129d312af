"""
Tenor (relative time period) support.

A Tenor is a signed length paired with a time unit, e.g. "3M" or "5Y".
Tenors are used for observation lags of inflation term structures and for
tranche maturities of base correlation surfaces.

Comparison follows market practice:
- tenors in commensurable units are compared exactly (12M == 1Y, 2W == 14D)
- months/years against days/weeks are compared through the range of days
  they can span (1M is 28 to 31 days, 1Y is 365 to 366 days); a comparison
  that cannot be decided this way raises LibError

Example:
    >>> lag = Tenor("3M")
    >>> Tenor("1Y") > Tenor("6M")
    True
    >>> -lag
    -3M
"""

import re
from enum import Enum

from lagcurves.utils.error import LibError
from lagcurves.utils.frequency import FrequencyTypes, months_in_period

###############################################################################


class TimeUnits(Enum):
    DAYS = 1
    WEEKS = 2
    MONTHS = 3
    YEARS = 4


_UNIT_LETTERS = {"D": TimeUnits.DAYS,
                 "W": TimeUnits.WEEKS,
                 "M": TimeUnits.MONTHS,
                 "Y": TimeUnits.YEARS}

_TENOR_PATTERN = re.compile(r"^\s*([+-]?\d+)\s*([DWMY])\s*$", re.IGNORECASE)

###############################################################################


class Tenor:
    """ Signed length of time expressed in days, weeks, months or years. """

    def __init__(self,
                 length,
                 units: TimeUnits = None):

        if isinstance(length, Tenor):
            self._length = length._length
            self._units = length._units
            return

        if isinstance(length, str):
            if units is not None:
                raise LibError("Units must not be given with a tenor string")

            match = _TENOR_PATTERN.match(length)
            if match is None:
                raise LibError(f"Unable to parse tenor '{length}'")

            self._length = int(match.group(1))
            self._units = _UNIT_LETTERS[match.group(2).upper()]
            return

        if units is None or isinstance(units, TimeUnits) is False:
            raise LibError("A tenor length needs TimeUnits")

        if isinstance(length, bool) or int(length) != length:
            raise LibError(f"Tenor length must be an integer, got {length}")

        self._length = int(length)
        self._units = units

    ###########################################################################

    @classmethod
    def from_frequency(cls, freq_type: FrequencyTypes):
        """ The tenor of one period of a periodic frequency. """
        months = months_in_period(freq_type)
        if months == 12:
            return cls(1, TimeUnits.YEARS)
        return cls(months, TimeUnits.MONTHS)

    ###########################################################################

    def length(self):
        return self._length

    def units(self):
        return self._units

    ###########################################################################

    def _normalised(self):
        """ Express the tenor in its smallest exact unit family. """
        if self._units == TimeUnits.DAYS:
            return ("D", self._length)
        elif self._units == TimeUnits.WEEKS:
            return ("D", 7 * self._length)
        elif self._units == TimeUnits.MONTHS:
            return ("M", self._length)
        else:
            return ("M", 12 * self._length)

    def _days_min_max(self):
        n = self._length
        if self._units == TimeUnits.DAYS:
            return (n, n)
        elif self._units == TimeUnits.WEEKS:
            return (7 * n, 7 * n)
        elif self._units == TimeUnits.MONTHS:
            return (28 * n, 31 * n)
        else:
            return (365 * n, 366 * n)

    ###########################################################################

    def __neg__(self):
        return Tenor(-self._length, self._units)

    def __mul__(self, n: int):
        return Tenor(self._length * n, self._units)

    __rmul__ = __mul__

    ###########################################################################

    def __eq__(self, other):
        if isinstance(other, str):
            other = Tenor(other)
        if isinstance(other, Tenor) is False:
            return NotImplemented

        if self._length == 0 or other._length == 0:
            return self._length == other._length

        return self._normalised() == other._normalised()

    def __hash__(self):
        if self._length == 0:
            return hash(("D", 0))
        return hash(self._normalised())

    def __lt__(self, other):
        if isinstance(other, str):
            other = Tenor(other)
        if isinstance(other, Tenor) is False:
            return NotImplemented

        if self._length == 0:
            return other._length > 0
        if other._length == 0:
            return self._length < 0

        unit1, n1 = self._normalised()
        unit2, n2 = other._normalised()
        if unit1 == unit2:
            return n1 < n2

        lim1 = self._days_min_max()
        lim2 = other._days_min_max()
        if lim1[1] < lim2[0]:
            return True
        elif lim1[0] > lim2[1]:
            return False

        raise LibError(f"undecidable comparison between {self} and {other}")

    def __gt__(self, other):
        if isinstance(other, str):
            other = Tenor(other)
        if isinstance(other, Tenor) is False:
            return NotImplemented
        return other < self

    def __le__(self, other):
        return not self > other

    def __ge__(self, other):
        return not self < other

    ###########################################################################

    def __str__(self):
        letter = {TimeUnits.DAYS: "D",
                  TimeUnits.WEEKS: "W",
                  TimeUnits.MONTHS: "M",
                  TimeUnits.YEARS: "Y"}[self._units]
        return f"{self._length}{letter}"

    def __repr__(self):
        return str(self)

###############################################################################


def to_tenor(tenor) -> Tenor:
    """ Accept a Tenor or a tenor string such as "6M". """
    if isinstance(tenor, Tenor):
        return tenor
    if isinstance(tenor, str):
        return Tenor(tenor)
    raise LibError(f"Cannot convert {tenor} of type {type(tenor)} to a Tenor")
