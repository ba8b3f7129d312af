"""
Interpolated inflation curves.

Provides:
- InterpolatedZeroInflationCurve: zero coupon inflation rates at node
  dates, interpolated in time
- InterpolatedYoYInflationCurve: year-on-year inflation rates at node
  dates, interpolated in time

Key features:
- Node dates start at the curve's base date (reference date less the
  observation lag, at the start of its publication period unless the
  index is interpolated) and are strictly increasing
- The base rate is the rate of the first node
- The curve ends at the last node date; later lookups need extrapolation
- Interpolation methods: LINEAR, FLAT, PCHIP and NATCUBIC over times from
  the reference date (negative before it)

Example:
    >>> reference_dt = Date(15, 6, 2024)
    >>> dates = [Date(1, 3, 2024), Date(1, 3, 2025), Date(1, 3, 2029)]
    >>> rates = [0.021, 0.024, 0.026]
    >>> curve = InterpolatedZeroInflationCurve(
    ...     reference_dt, dates, rates, "3M", FrequencyTypes.MONTHLY)
    >>> curve.base_date()
    01-MAR-2024
    >>> curve.zero_rate(Date(1, 6, 2025))   # observed 1 March 2025
    0.024
"""

import logging
from typing import Optional

import numpy as np

from ...utils.error import LibError
from ...utils.date import Date
from ...utils.tenor import Tenor
from ...utils.frequency import FrequencyTypes
from ...utils.calendar import CalendarTypes
from ...utils.day_count import DayCountTypes
from ...utils.global_types import InterpTypes
from ...utils.global_vars import g_default_observation_lag
from ...utils.helpers import (check_argument_types, _func_name, ordinal,
                              times_from_dates, label_to_string,
                              format_table)
from .interpolator import Interpolator
from .inflation_term_structure import (ZeroInflationTermStructure,
                                       YoYInflationTermStructure)

logger = logging.getLogger(__name__)

###############################################################################


def _check_nodes(base_dt: Date,
                 dates: list,
                 rates: list):
    """ Node dates and rates must have the same length (at least two), the
    dates must start at the base date and be strictly increasing. """

    if len(dates) < 2:
        raise LibError(f"not enough nodes: {len(dates)} provided, "
                       "at least 2 required")

    if len(dates) != len(rates):
        raise LibError(f"mismatch between number of dates ({len(dates)}) "
                       f"and number of rates ({len(rates)})")

    if dates[0] != base_dt:
        raise LibError(f"first node date ({dates[0]}) must be the curve "
                       f"base date ({base_dt})")

    for i in range(1, len(dates)):
        if dates[i] <= dates[i - 1]:
            raise LibError(f"non increasing node dates: {ordinal(i)} is "
                           f"{dates[i - 1]}, {ordinal(i + 1)} is {dates[i]}")

###############################################################################


class _InterpolatedNodes():
    """ Node storage and interpolation shared by the interpolated curves. """

    def _set_nodes(self, dates, rates, interp_type):

        _check_nodes(self.base_date(), dates, rates)

        self._dates = list(dates)
        self._rates = np.array(rates, dtype=np.float64)
        self._interp_type = interp_type
        self._interpolator = Interpolator(interp_type)
        self._fit()

    def _fit(self):
        self._times = times_from_dates(self._dates, self.reference_date(),
                                       self._dc_type)
        self._interpolator.fit(self._times, self._rates)
        logger.debug("%s refitted on %d nodes", type(self).__name__,
                     len(self._dates))

    def _interpolate(self, t: float):
        return self._interpolator.interpolate(t)

    def update(self):
        # node times are refitted before dependents are notified
        if self._moving:
            self._updated = False
            self._fit()
        super().update()

    ###########################################################################

    def max_date(self):
        return self._dates[-1]

    def dates(self):
        return list(self._dates)

    def times(self):
        return self._times.copy()

    def rates(self):
        return self._rates.copy()

    def nodes(self):
        return list(zip(self._dates, self._rates))

    def interp_type(self):
        return self._interp_type

    ###########################################################################

    def _nodes_table(self):
        header = ["DATE", "TIME", "RATE"]
        rows = []
        for dt, t, r in zip(self._dates, self._times, self._rates):
            rows.append([str(dt), round(t, 6), round(r, 8)])
        return str(format_table(header, rows))

###############################################################################


class InterpolatedZeroInflationCurve(_InterpolatedNodes,
                                     ZeroInflationTermStructure):
    """
    Zero coupon inflation curve interpolated between node rates.

    The rate at node i is the annually compounded zero coupon inflation
    rate from the base date to dates[i]. The first node is the base date
    and its rate is the base rate of the curve.
    """

    def __init__(self,
                 reference_dt: Optional[Date],
                 dates: list,
                 rates: (list, np.ndarray),
                 observation_lag: (str, Tenor) = g_default_observation_lag,
                 freq_type: FrequencyTypes = FrequencyTypes.MONTHLY,
                 interp_type: InterpTypes = InterpTypes.LINEAR,
                 cal_type: CalendarTypes = CalendarTypes.WEEKEND,
                 dc_type: DayCountTypes = DayCountTypes.ACT_365F,
                 seasonality=None,
                 settlement_days: Optional[int] = None):
        """
        Create a zero inflation curve.

        Args:
            reference_dt: Reference date (None for a floating curve)
            dates: Node dates, starting at the base date
            rates: Zero coupon inflation rates at the node dates
            observation_lag: Lag between a date and its observation date
            freq_type: Publication frequency of the index
            interp_type: Interpolation of the rates in time
            cal_type: Calendar used to float the reference date
            dc_type: Day count for times and year fractions
            seasonality: Optional seasonality adjustment
            settlement_days: Business days from the evaluation date to the
                reference date of a floating curve
        """
        check_argument_types(getattr(self, _func_name(), None), locals())

        ZeroInflationTermStructure.__init__(self,
                                            reference_dt,
                                            settlement_days,
                                            cal_type,
                                            dc_type,
                                            None,
                                            observation_lag,
                                            freq_type,
                                            seasonality)

        self._set_nodes(dates, rates, interp_type)
        self._finalize_base_rate(self._rates[0])

    ###########################################################################

    def _zero_rate_impl(self, t: float):
        return self._interpolate(t)

    ###########################################################################

    def __repr__(self):
        s = ZeroInflationTermStructure.__repr__(self)
        s += label_to_string("INTERPOLATION", self._interp_type)
        s += self._nodes_table()
        return s

###############################################################################


class InterpolatedYoYInflationCurve(_InterpolatedNodes,
                                    YoYInflationTermStructure):
    """
    Year-on-year inflation curve interpolated between node rates.

    The rate at node i is the year-on-year inflation rate observed at
    dates[i]. The first node is the base date and its rate is the base
    rate of the curve. Whether the index is interpolated within a
    publication period is fixed at construction.
    """

    def __init__(self,
                 reference_dt: Optional[Date],
                 dates: list,
                 rates: (list, np.ndarray),
                 observation_lag: (str, Tenor) = g_default_observation_lag,
                 freq_type: FrequencyTypes = FrequencyTypes.MONTHLY,
                 index_is_interpolated: bool = False,
                 interp_type: InterpTypes = InterpTypes.LINEAR,
                 cal_type: CalendarTypes = CalendarTypes.WEEKEND,
                 dc_type: DayCountTypes = DayCountTypes.ACT_365F,
                 seasonality=None,
                 settlement_days: Optional[int] = None):

        check_argument_types(getattr(self, _func_name(), None), locals())

        YoYInflationTermStructure.__init__(self,
                                           reference_dt,
                                           settlement_days,
                                           cal_type,
                                           dc_type,
                                           None,
                                           observation_lag,
                                           freq_type,
                                           index_is_interpolated,
                                           seasonality)

        self._set_nodes(dates, rates, interp_type)
        self._finalize_base_rate(self._rates[0])

    ###########################################################################

    def _yoy_rate_impl(self, t: float):
        return self._interpolate(t)

    ###########################################################################

    def __repr__(self):
        s = YoYInflationTermStructure.__repr__(self)
        s += label_to_string("INTERPOLATION", self._interp_type)
        s += self._nodes_table()
        return s

###############################################################################
