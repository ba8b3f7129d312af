"""
Seasonality adjustments for inflation term structures.

Provides:
- Seasonality: interface of adjustments applied to inflation rates
- MultiplicativePriceSeasonality: periodic multiplicative factors on the
  price index, converted into corrections of zero and YoY rates

Most price indices show a regular within-year pattern (January sales,
summer holidays). A multiplicative price seasonality describes it with
one factor per publication period, repeating every year, or every few
years when more factors are given. The factors apply to the index level,
so a zero rate observed at d from a curve based at b is corrected by

    (1 + r) * (f(d) / f(b)) ** (1 / t(b, d)) - 1

and a year-on-year rate by

    (1 + r) * f(d) / f(d - 1Y) - 1

Example:
    >>> factors = [1.003, 1.001, 0.999, 0.998, 0.999, 1.000,
    ...            0.998, 1.000, 1.001, 1.002, 1.000, 0.999]
    >>> seasonality = MultiplicativePriceSeasonality(
    ...     Date(1, 1, 2024), FrequencyTypes.MONTHLY, factors)
    >>> curve.set_seasonality(seasonality)
"""

import numpy as np

from ...utils.error import LibError
from ...utils.date import Date
from ...utils.frequency import (FrequencyTypes, annual_frequency,
                               months_in_period)
from ...utils.global_vars import g_small, g_seasonality_tol
from ...utils.helpers import (check_argument_types, _func_name,
                              label_to_string, format_table)
from .inflation_term_structure import inflation_period

###############################################################################

SEASONALITY_FREQUENCIES = (FrequencyTypes.SEMI_ANNUAL,
                           FrequencyTypes.TRI_ANNUAL,
                           FrequencyTypes.QUARTERLY,
                           FrequencyTypes.MONTHLY)

###############################################################################


class Seasonality():
    """ Adjustment applied to the rates of an inflation term structure. """

    def correct_zero_rate(self, dt, rate, its):
        raise NotImplementedError

    def correct_yoy_rate(self, dt, rate, its):
        raise NotImplementedError

    def is_consistent(self, its):
        """ Raise a LibError if this seasonality cannot be used with the
        inflation term structure its. Returns True otherwise. """
        return True

###############################################################################


class MultiplicativePriceSeasonality(Seasonality):
    """
    Multiplicative seasonality factors on the price index.

    The factors cycle from the seasonality base date: the period containing
    the base date uses factors[0], the next period factors[1], and so on,
    wrapping around after len(factors) periods. The number of factors must
    be a whole number of years of periods.
    """

    def __init__(self,
                 seasonality_base_dt: Date,
                 freq_type: FrequencyTypes,
                 factors: (list, tuple, np.ndarray)):
        """
        Create a multiplicative seasonality.

        Args:
            seasonality_base_dt: Date whose publication period uses the
                first factor
            freq_type: Frequency of the factors (semi-annual, tri-annual,
                quarterly or monthly)
            factors: Positive factors, a multiple of the periods per year

        Raises:
            LibError if the frequency or the factors are not valid
        """
        check_argument_types(getattr(self, _func_name(), None), locals())

        self._validate(freq_type, factors)

        self._seasonality_base_dt = seasonality_base_dt
        self._freq_type = freq_type
        self._factors = [float(f) for f in factors]

    ###########################################################################

    def _validate(self, freq_type, factors):
        """
        Validate frequency and factors.

        Checks:
        1. The frequency is semi-annual, tri-annual, quarterly or monthly
        2. There is a whole number of years of factors
        3. All factors are positive
        """
        if freq_type not in SEASONALITY_FREQUENCIES:
            raise LibError(f"bad frequency specified: {freq_type}, only "
                           "semi-annual, tri-annual, quarterly and monthly "
                           "seasonality is supported")

        periods_per_year = int(annual_frequency(freq_type))

        if len(factors) == 0 or len(factors) % periods_per_year != 0:
            raise LibError(f"For frequency {freq_type} require multiple of "
                           f"{periods_per_year} factors, got {len(factors)}")

        for i, factor in enumerate(factors):
            if factor <= 0.0:
                raise LibError(f"Seasonality factors must be positive. "
                               f"Factor {i} is {factor}")

    ###########################################################################

    def seasonality_base_date(self):
        return self._seasonality_base_dt

    def frequency(self):
        return self._freq_type

    def seasonality_factors(self):
        return list(self._factors)

    ###########################################################################

    def seasonality_factor(self, dt: Date):
        """ Factor of the publication period containing dt. """

        months = months_in_period(self._freq_type)

        base_start = inflation_period(self._seasonality_base_dt,
                                      self._freq_type)[0]
        dt_start = inflation_period(dt, self._freq_type)[0]

        month_diff = (dt_start.y() - base_start.y()) * 12 + \
            (dt_start.m() - base_start.m())

        which = (month_diff // months) % len(self._factors)

        return self._factors[which]

    ###########################################################################

    def correct_zero_rate(self, dt: Date, rate: float, its):
        """ Zero rate at dt corrected from the last day of the base period
        of the term structure. """

        base_period = inflation_period(its.base_date(), its.frequency())
        curve_base_dt = base_period[1].add_days(-1)

        t = its.day_count().year_frac(curve_base_dt, dt)[0]

        if abs(t) < g_small:
            return rate

        factor_at = self.seasonality_factor(dt)
        factor_base = self.seasonality_factor(curve_base_dt)

        f = (factor_at / factor_base) ** (1.0 / t)

        return (rate + 1.0) * f - 1.0

    def correct_yoy_rate(self, dt: Date, rate: float, its):
        """ Year-on-year rate at dt corrected by the ratio of the factors
        one year apart. """

        period_end_dt = inflation_period(dt, its.frequency())[1].add_days(-1)

        factor_at = self.seasonality_factor(period_end_dt)
        factor_base = self.seasonality_factor(period_end_dt.add_years(-1))

        return (rate + 1.0) * factor_at / factor_base - 1.0

    ###########################################################################

    def is_consistent(self, its):
        """ The seasonality periods must be whole numbers of the structure's
        publication periods, and factors spanning several years must agree
        at the structure's base date in every year they cover. """

        season_months = months_in_period(self._freq_type)
        its_months = months_in_period(its.frequency())

        if season_months % its_months != 0:
            raise LibError(f"seasonality frequency {self._freq_type} is "
                           f"inconsistent with inflation term structure "
                           f"frequency {its.frequency()}")

        periods_per_year = int(annual_frequency(self._freq_type))
        num_years = len(self._factors) // periods_per_year

        if num_years == 1:
            return True

        curve_base_dt = its.base_date()
        factor_base = self.seasonality_factor(curve_base_dt)

        for i in range(1, num_years):
            factor_at = self.seasonality_factor(curve_base_dt.add_years(i))
            if abs(factor_at - factor_base) > g_seasonality_tol:
                raise LibError(f"seasonality is inconsistent with inflation "
                               f"term structure, factors {factor_base} and "
                               f"later factor {factor_at}, {i} years later "
                               f"from inflation curve with base date at "
                               f"{curve_base_dt}")

        return True

    ###########################################################################

    def __repr__(self):
        s = label_to_string("OBJECT TYPE", type(self).__name__)
        s += label_to_string("BASE DATE", self._seasonality_base_dt)
        s += label_to_string("FREQUENCY", self._freq_type)

        header = ["PERIOD", "FACTOR"]
        rows = [[i, round(f, 6)] for i, f in enumerate(self._factors)]
        s += str(format_table(header, rows))
        return s

###############################################################################
