"""
Inflation term structures with an observation lag.

Provides:
- inflation_period: the publication period [start, end) containing a date
- inflation_year_fraction: year fraction between dates under interpolated
  or non-interpolated index conventions
- InflationTermStructure: base rate, observation lag, publication
  frequency, optional seasonality and range checks
- ZeroInflationTermStructure / YoYInflationTermStructure: zero coupon and
  year-on-year rate lookups by date (lagged) or by time (raw)

An inflation index is published once per period (monthly for most CPIs)
and is only known with a delay. A rate "for" date d is therefore a rate
for the observation date d - lag. Non-interpolated indices are constant
over a publication period, so lookups snap the observation date to the
start of its period. Interpolated indices (and lookups with
force_linear_interpolation=True) vary linearly in between.

Two-phase construction:
Structures built by bootstrapping collaborators may be created before
their base rate is known (base_rate=None). The collaborator then calls
_finalize_base_rate() exactly once. Until that happens every lookup
raises a LibError.

Example:
    >>> start, end = inflation_period(Date(15, 5, 2024),
    ...                               FrequencyTypes.QUARTERLY)
    >>> start, end
    (01-APR-2024, 01-JUL-2024)
    >>> curve.zero_rate(Date(15, 8, 2026))              # observed May 2026
    >>> curve.zero_rate(Date(15, 8, 2026), inst_obs_lag="2M",
    ...                 force_linear_interpolation=True)
"""

import logging
from typing import Optional

from ...utils.error import LibError
from ...utils.date import Date
from ...utils.tenor import Tenor
from ...utils.frequency import FrequencyTypes, months_in_period
from ...utils.calendar import CalendarTypes
from ...utils.day_count import DayCount, DayCountTypes
from ...utils.global_vars import g_default_observation_lag
from ...utils.helpers import check_argument_types, label_to_string
from .term_structure import TermStructure

logger = logging.getLogger(__name__)

###############################################################################


def inflation_period(dt: Date,
                     freq_type: FrequencyTypes):
    """ Publication period [start, end) containing dt. The end is the first
    day of the following period, so consecutive periods tile the calendar.
    Annual, semi-annual, tri-annual, quarterly and monthly frequencies are
    supported. """

    months = months_in_period(freq_type)

    start_m = ((dt.m() - 1) // months) * months + 1
    start_dt = Date(1, start_m, dt.y())
    end_dt = start_dt.add_months(months)

    return start_dt, end_dt

###############################################################################


def inflation_year_fraction(freq_type: FrequencyTypes,
                            index_is_interpolated: bool,
                            dc_type: DayCountTypes,
                            dt1: Date,
                            dt2: Date):
    """ Year fraction between dt1 and dt2. A non-interpolated index only
    changes at publication dates so both dates are first moved to the start
    of their publication period. """

    day_counter = DayCount(dc_type)

    if index_is_interpolated:
        return day_counter.year_frac(dt1, dt2)[0]

    start1 = inflation_period(dt1, freq_type)[0]
    start2 = inflation_period(dt2, freq_type)[0]

    return day_counter.year_frac(start1, start2)[0]

###############################################################################


class InflationTermStructure(TermStructure):
    """ Base class of inflation term structures. Holds the base rate, the
    observation lag, the publication frequency and an optional seasonality
    adjustment. The minimum date is the base date, the earliest date with
    observed index data. """

    def __init__(self,
                 reference_dt: Optional[Date] = None,
                 settlement_days: Optional[int] = None,
                 cal_type: CalendarTypes = CalendarTypes.WEEKEND,
                 dc_type: DayCountTypes = DayCountTypes.ACT_365F,
                 base_rate: Optional[float] = None,
                 observation_lag: (str, Tenor) = g_default_observation_lag,
                 freq_type: FrequencyTypes = FrequencyTypes.MONTHLY,
                 seasonality=None,
                 index_is_interpolated: bool = False):

        check_argument_types(InflationTermStructure.__init__, locals())

        # validates the publication frequency
        months_in_period(freq_type)

        observation_lag = Tenor(observation_lag)
        if observation_lag.length() < 0:
            raise LibError(f"Observation lag must be non-negative, "
                           f"got {observation_lag}")

        super().__init__(reference_dt, settlement_days, cal_type, dc_type)

        self._observation_lag = observation_lag
        self._freq_type = freq_type
        self._index_is_interpolated = index_is_interpolated
        self._seasonality = None

        self._base_rate = None
        self._finalized = False
        if base_rate is not None:
            self._base_rate = float(base_rate)
            self._finalized = True

        if seasonality is not None:
            self.set_seasonality(seasonality)

    ###########################################################################

    def observation_lag(self):
        return self._observation_lag

    def frequency(self):
        return self._freq_type

    def index_is_interpolated(self):
        return self._index_is_interpolated

    def base_rate(self):
        self._check_finalized()
        return self._base_rate

    def is_finalized(self):
        return self._finalized

    ###########################################################################

    def _finalize_base_rate(self, base_rate: float):
        """ Second construction phase: set the base rate once it is known.
        Called exactly once by whoever builds the curve. """

        if self._finalized:
            raise LibError(f"base rate already set to {self._base_rate}")

        self._base_rate = float(base_rate)
        self._finalized = True

        logger.debug("%s base rate finalized at %s",
                     type(self).__name__, self._base_rate)

        self.notify()

    def _check_finalized(self):
        if not self._finalized:
            raise LibError(f"{type(self).__name__} has no base rate yet: "
                           "construction has not been finalized")

    ###########################################################################

    def seasonality(self):
        return self._seasonality

    def has_seasonality(self):
        return self._seasonality is not None

    def set_seasonality(self, seasonality=None):
        """ Attach a seasonality adjustment, or detach it with None. The
        seasonality must be consistent with the base date and frequency
        of this structure. """

        if seasonality is not None:
            seasonality.is_consistent(self)
            logger.debug("%s seasonality attached: %s",
                         type(self).__name__, type(seasonality).__name__)
        elif self._seasonality is not None:
            logger.debug("%s seasonality detached", type(self).__name__)

        self._seasonality = seasonality
        self.notify()

    ###########################################################################

    def base_date(self):
        raise NotImplementedError

    def _lagged_base_date(self):
        """ Reference date less the observation lag, moved to the start of
        its publication period unless the index is interpolated. """

        lagged_dt = self.reference_date().add_tenor(-self._observation_lag)

        if self.index_is_interpolated():
            return lagged_dt

        return inflation_period(lagged_dt, self._freq_type)[0]

    def min_date(self):
        return self.base_date()

    ###########################################################################

    def _lagged_rate(self,
                     dt: Date,
                     inst_obs_lag,
                     force_linear_interpolation: bool,
                     extrapolate: bool,
                     rate_impl):
        """ Rate from rate_impl for the observation date of dt. Returns the
        rate and the date its seasonality correction applies to. """

        self._check_finalized()

        if inst_obs_lag is None:
            use_lag = self._observation_lag
        else:
            use_lag = Tenor(inst_obs_lag)

        obs_dt = dt.add_tenor(-use_lag)

        if force_linear_interpolation:

            start_dt, end_dt = inflation_period(obs_dt, self._freq_type)
            self.check_range(obs_dt, extrapolate)

            rate1 = rate_impl(self.time_from_reference(start_dt))

            if obs_dt == start_dt:
                return rate1, obs_dt

            rate2 = rate_impl(self.time_from_reference(end_dt))
            weight = (obs_dt - start_dt) / (end_dt - start_dt)

            return rate1 + (rate2 - rate1) * weight, obs_dt

        if self.index_is_interpolated():

            self.check_range(obs_dt, extrapolate)
            return rate_impl(self.time_from_reference(obs_dt)), obs_dt

        start_dt = inflation_period(obs_dt, self._freq_type)[0]
        self.check_range(start_dt, extrapolate)

        return rate_impl(self.time_from_reference(start_dt)), start_dt

    def _time_rate(self,
                   t: float,
                   inst_obs_lag,
                   force_linear_interpolation: bool,
                   extrapolate: bool,
                   rate_impl):
        """ Rate at a time from reference, no lag nor seasonality. """

        if inst_obs_lag is not None or force_linear_interpolation:
            raise LibError("Observation lag and forced interpolation only "
                           "apply to lookups by date")

        self._check_finalized()
        self.check_range(t, extrapolate)

        return rate_impl(float(t))

    ###########################################################################

    def __repr__(self):
        s = label_to_string("OBJECT TYPE", type(self).__name__)
        s += label_to_string("REFERENCE DATE", self.reference_date())
        s += label_to_string("BASE DATE", self.base_date())
        s += label_to_string("OBSERVATION LAG", self._observation_lag)
        s += label_to_string("FREQUENCY", self._freq_type)
        s += label_to_string("INTERPOLATED INDEX",
                             self._index_is_interpolated)
        s += label_to_string("BASE RATE", self._base_rate)
        s += label_to_string("DAY COUNT", self._dc_type)
        s += label_to_string("SEASONALITY", self.has_seasonality())
        return s

###############################################################################


class ZeroInflationTermStructure(InflationTermStructure):
    """ Term structure of annually compounded zero coupon inflation rates.
    The index is never interpolated. Concrete curves implement
    _zero_rate_impl(t) and max_date(). """

    def __init__(self,
                 reference_dt: Optional[Date] = None,
                 settlement_days: Optional[int] = None,
                 cal_type: CalendarTypes = CalendarTypes.WEEKEND,
                 dc_type: DayCountTypes = DayCountTypes.ACT_365F,
                 base_rate: Optional[float] = None,
                 observation_lag: (str, Tenor) = g_default_observation_lag,
                 freq_type: FrequencyTypes = FrequencyTypes.MONTHLY,
                 seasonality=None):

        super().__init__(reference_dt, settlement_days, cal_type, dc_type,
                         base_rate, observation_lag, freq_type, seasonality,
                         index_is_interpolated=False)

    def base_date(self):
        return self._lagged_base_date()

    ###########################################################################

    def zero_rate(self,
                  dt_or_t: (Date, float),
                  inst_obs_lag=None,
                  force_linear_interpolation: bool = False,
                  extrapolate: bool = False):
        """ Zero coupon inflation rate. Given a date, the observation lag
        (inst_obs_lag if given, else the curve's) is applied first and the
        seasonality correction last. Given a time, the curve is read
        directly. """

        check_argument_types(ZeroInflationTermStructure.zero_rate, locals())

        if isinstance(dt_or_t, Date):

            rate, seasonal_dt = self._lagged_rate(dt_or_t,
                                                  inst_obs_lag,
                                                  force_linear_interpolation,
                                                  extrapolate,
                                                  self._zero_rate_impl)

            if self._seasonality is not None:
                rate = self._seasonality.correct_zero_rate(seasonal_dt,
                                                           rate, self)
            return rate

        return self._time_rate(dt_or_t, inst_obs_lag,
                               force_linear_interpolation, extrapolate,
                               self._zero_rate_impl)

    def _zero_rate_impl(self, t: float):
        raise NotImplementedError

###############################################################################


class YoYInflationTermStructure(InflationTermStructure):
    """ Term structure of year-on-year inflation rates. Whether the index
    is interpolated is fixed at construction. Concrete curves implement
    _yoy_rate_impl(t) and max_date(). """

    def __init__(self,
                 reference_dt: Optional[Date] = None,
                 settlement_days: Optional[int] = None,
                 cal_type: CalendarTypes = CalendarTypes.WEEKEND,
                 dc_type: DayCountTypes = DayCountTypes.ACT_365F,
                 base_rate: Optional[float] = None,
                 observation_lag: (str, Tenor) = g_default_observation_lag,
                 freq_type: FrequencyTypes = FrequencyTypes.MONTHLY,
                 index_is_interpolated: bool = False,
                 seasonality=None):

        super().__init__(reference_dt, settlement_days, cal_type, dc_type,
                         base_rate, observation_lag, freq_type, seasonality,
                         index_is_interpolated=index_is_interpolated)

    def base_date(self):
        return self._lagged_base_date()

    ###########################################################################

    def yoy_rate(self,
                 dt_or_t: (Date, float),
                 inst_obs_lag=None,
                 force_linear_interpolation: bool = False,
                 extrapolate: bool = False):
        """ Year-on-year inflation rate, by date (lagged, seasonality
        corrected) or by time (raw). """

        check_argument_types(YoYInflationTermStructure.yoy_rate, locals())

        if isinstance(dt_or_t, Date):

            rate, seasonal_dt = self._lagged_rate(dt_or_t,
                                                  inst_obs_lag,
                                                  force_linear_interpolation,
                                                  extrapolate,
                                                  self._yoy_rate_impl)

            if self._seasonality is not None:
                rate = self._seasonality.correct_yoy_rate(seasonal_dt,
                                                          rate, self)
            return rate

        return self._time_rate(dt_or_t, inst_obs_lag,
                               force_linear_interpolation, extrapolate,
                               self._yoy_rate_impl)

    def _yoy_rate_impl(self, t: float):
        raise NotImplementedError

###############################################################################
