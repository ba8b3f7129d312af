"""
Base correlation term structure for CDO tranche pricing.

Provides the BaseCorrelationTermStructure class for:
- Deriving tranche maturity dates from tenors, optionally with a CDS date
  generation rule (IMM twentieth maturities)
- Dropping tranches that have already matured
- Building the loss level x maturity correlation matrix from live quotes
- Interpolating correlations in (time, loss level)
- Rebuilding synchronously whenever a quote changes

The surface is a grid of base correlations. Rows are loss levels
(detachment points, as fractions of the portfolio notional), columns are
tranche maturities converted to times from the reference date:

                 5Y      7Y      10Y
        3%     0.18    0.20    0.22
        7%     0.28    0.30    0.32
       15%     0.42    0.44    0.46

Each cell reads a quote. The surface registers with every quote so that
quote.set_value() rebuilds the matrix and the interpolation before it
returns. A floating surface (settlement days instead of a reference date)
also follows the evaluation date: tranches that mature on or before the
new reference date drop out of the front of the matrix.

Example:
    >>> quotes = [[SimpleQuote(0.18), SimpleQuote(0.20), SimpleQuote(0.22)],
    ...           [SimpleQuote(0.28), SimpleQuote(0.30), SimpleQuote(0.32)],
    ...           [SimpleQuote(0.42), SimpleQuote(0.44), SimpleQuote(0.46)]]
    >>> surface = BaseCorrelationTermStructure(
    ...     ["5Y", "7Y", "10Y"], [0.03, 0.07, 0.15], quotes,
    ...     reference_dt=Date(15, 6, 2024),
    ...     dg_type=DateGenRuleTypes.CDS2015)
    >>> surface.tranche_dates()
    [20-JUN-2029, 20-JUN-2031, 20-JUN-2034]
    >>> surface.correlation(Date(20, 6, 2029), 0.05)
    0.23
"""

import logging
from typing import Optional

import numpy as np

from ...utils.error import LibError
from ...utils.date import Date
from ...utils.tenor import Tenor, TimeUnits
from ...utils.frequency import FrequencyTypes
from ...utils.calendar import (Calendar, CalendarTypes, BusDayAdjustTypes,
                               DateGenRuleTypes)
from ...utils.day_count import DayCountTypes
from ...utils.schedule import Schedule, cds_maturity, CDS_RULES
from ...utils.global_types import Interp2DTypes
from ...utils.helpers import (check_argument_types, _func_name, ordinal,
                              label_to_string, format_table)
from ..curves.term_structure import TermStructure
from ..curves.interpolator_2d import Interpolator2D

logger = logging.getLogger(__name__)

###############################################################################


class BaseCorrelationTermStructure(TermStructure):
    """
    Matrix based base correlation term structure.

    Loss level versus time interpolated correlation surface. correl_quotes
    holds one row of quotes per loss level and one column per tenor:
    correl_quotes[i][j] is the base correlation for loss_levels[i] at the
    maturity of tenors[j]. The interpolation scheme (bilinear or bicubic)
    is chosen at construction.
    """

    def __init__(self,
                 tenors: (list, tuple),
                 loss_levels: (list, tuple, np.ndarray),
                 correl_quotes: (list, tuple),
                 settlement_days: Optional[int] = None,
                 reference_dt: Optional[Date] = None,
                 cal_type: CalendarTypes = CalendarTypes.WEEKEND,
                 bd_type: BusDayAdjustTypes = BusDayAdjustTypes.FOLLOWING,
                 interp_type: Interp2DTypes = Interp2DTypes.BILINEAR,
                 dc_type: DayCountTypes = DayCountTypes.ACT_365F,
                 start_dt: Optional[Date] = None,
                 dg_type: Optional[DateGenRuleTypes] = None):
        """
        Create a base correlation surface.

        Args:
            tenors: Strictly increasing tranche tenors, first one positive
            loss_levels: Strictly increasing loss levels in (0, 1]
            correl_quotes: Quotes, one row per loss level and one column
                per tenor
            settlement_days: Business days from the evaluation date to the
                reference date of a floating surface
            reference_dt: Fixed reference date
            cal_type: Calendar for maturity dates and settlement
            bd_type: Business day adjustment of maturity dates
            interp_type: Interpolation in (time, loss level)
            dc_type: Day count for times from the reference date
            start_dt: Date the tenors run from, the reference date if None
            dg_type: Date generation rule of the tranche maturities. With a
                CDS rule the maturities are standard CDS maturities. If
                None, maturities are the start date advanced by the tenor.
        """
        check_argument_types(getattr(self, _func_name(), None), locals())

        super().__init__(reference_dt, settlement_days, cal_type, dc_type)

        self._tenors = [Tenor(t) for t in tenors]
        self._loss_levels = np.array(loss_levels, dtype=np.float64)
        self._correl_quotes = [list(row) for row in correl_quotes]
        self._n_losses = len(self._loss_levels)
        self._bd_type = bd_type
        self._interp_type = interp_type
        self._start_dt = start_dt
        self._dg_type = dg_type

        self._check_tranche_tenors()

        self._tranche_dates = self._generate_tranche_dates()
        self._remove_expired_tranches()

        self._check_losses()

        self._correlations = np.zeros((len(self._correl_quotes),
                                       len(self._tranche_dates)))
        self._initialize_tranche_times()
        self._check_inputs()

        self.update_matrix()
        self._register_with_market_data()
        self._setup_interpolation()

    ###########################################################################

    def _check_tranche_tenors(self):

        if len(self._tenors) == 0:
            raise LibError("no tranche tenors given")

        if not self._tenors[0] > Tenor(0, TimeUnits.DAYS):
            raise LibError(f"first tranche tenor is negative "
                           f"({self._tenors[0]})")

        for i in range(1, len(self._tenors)):
            if not self._tenors[i] > self._tenors[i - 1]:
                raise LibError(f"non increasing tranche tenor: "
                               f"{ordinal(i)} is {self._tenors[i - 1]}, "
                               f"{ordinal(i + 1)} is {self._tenors[i]}")

    def _check_losses(self):

        if self._n_losses == 0:
            raise LibError("no loss levels given")

        if self._loss_levels[0] <= 0.0:
            raise LibError(f"first loss level is negative "
                           f"({self._loss_levels[0]})")

        if self._loss_levels[0] > 1.0:
            raise LibError(f"First loss level larger than 100% "
                           f"({self._loss_levels[0]})")

        for i in range(1, self._n_losses):
            if self._loss_levels[i] <= self._loss_levels[i - 1]:
                raise LibError(f"non increasing losses: {ordinal(i)} is "
                               f"{self._loss_levels[i - 1]}, "
                               f"{ordinal(i + 1)} is "
                               f"{self._loss_levels[i]}")
            if self._loss_levels[i] > 1.0:
                raise LibError(f"Loss level {i} larger than 100% "
                               f"({self._loss_levels[i]})")

    def _check_inputs(self):

        num_rows = self._correlations.shape[0]

        if self._n_losses != num_rows:
            raise LibError(f"mismatch between number of loss levels "
                           f"({self._n_losses}) and number of rows "
                           f"({num_rows}) in the correlation matrix")

        for i, row in enumerate(self._correl_quotes):
            if len(row) != len(self._tenors):
                raise LibError(f"mismatch between number of tranche tenors "
                               f"({len(self._tenors)}) and number of "
                               f"columns ({len(row)}) in the "
                               f"{ordinal(i + 1)} row of the correlation "
                               f"matrix")

    ###########################################################################

    def _generate_tranche_dates(self):
        """ Maturity date of every tenor. """

        start_dt = self._start_dt
        if start_dt is None:
            start_dt = self.reference_date()

        calendar = self.calendar()
        tranche_dates = []

        for tenor in self._tenors:

            if self._dg_type is not None:

                maturity_dt = start_dt.add_tenor(tenor)

                if self._dg_type in CDS_RULES:
                    maturity_dt = cds_maturity(start_dt, tenor,
                                               self._dg_type)

                schedule = Schedule(start_dt,
                                    maturity_dt,
                                    FrequencyTypes.QUARTERLY,
                                    self._cal_type,
                                    self._bd_type,
                                    self._dg_type,
                                    adjust_termination_dt=False)

                maturity_dt = calendar.adjust(schedule.schedule_dts()[-1],
                                              self._bd_type)
            else:
                maturity_dt = calendar.advance(start_dt, tenor,
                                               self._bd_type)

            tranche_dates.append(maturity_dt)

        return tranche_dates

    def _remove_expired_tranches(self):
        """ Drop tranche dates on or before the reference date. Returns the
        number of dates dropped. """

        reference_dt = self.reference_date()
        live_dates = [dt for dt in self._tranche_dates if dt > reference_dt]

        if len(live_dates) == 0:
            raise LibError("no tranche dates left after removing expired "
                           "tenors")

        num_expired = len(self._tranche_dates) - len(live_dates)

        if num_expired > 0:
            logger.info("Dropping %d expired tranche tenor(s) at reference "
                        "date %s", num_expired, reference_dt)

        self._tranche_dates = live_dates
        return num_expired

    def _initialize_tranche_times(self):
        self._tranche_times = np.array([self.time_from_reference(dt)
                                        for dt in self._tranche_dates])

    def _register_with_market_data(self):
        for row in self._correl_quotes:
            for quote in row:
                self.register_with(quote)

    ###########################################################################

    def update_matrix(self):
        """ Read every cell of the correlation matrix from its quote. When
        tenors have expired the first quote columns are skipped. """

        tenor_start_index = len(self._tenors) - self._correlations.shape[1]

        for i in range(self._correlations.shape[0]):
            for j in range(self._correlations.shape[1]):
                quote = self._correl_quotes[i][tenor_start_index + j]
                self._correlations[i, j] = quote.value()

        logger.debug("Correlation matrix rebuilt with %d x %d quotes from "
                     "column %d", self._correlations.shape[0],
                     self._correlations.shape[1], tenor_start_index)

    def _setup_interpolation(self):
        self._interpolation = Interpolator2D(self._interp_type).fit(
            self._tranche_times, self._loss_levels, self._correlations)
        logger.debug("Correlation interpolation rebuilt (%s)",
                     self._interp_type)

    def update(self):
        """ Rebuild after a quote change or a move of the reference date,
        then notify dependents. """

        if self._moving:
            self._updated = False
            num_expired = self._remove_expired_tranches()
            if num_expired > 0:
                self._correlations = np.zeros((self._n_losses,
                                               len(self._tranche_dates)))
            self._initialize_tranche_times()

        self.update_matrix()
        self._setup_interpolation()

        super().update()

    ###########################################################################

    def correlation(self,
                    dt_or_t: (Date, float),
                    loss_level: float,
                    extrapolate: bool = False):
        """ Interpolated base correlation at a date (or time from the
        reference date) and loss level. Dates past the last tranche raise
        unless extrapolate is True or extrapolation is enabled. Loss levels
        outside the grid never raise: bilinear surfaces extrapolate them
        linearly, bicubic surfaces hold the edge correlation flat. """

        check_argument_types(getattr(self, _func_name(), None), locals())

        if isinstance(dt_or_t, Date):
            t = self.time_from_reference(dt_or_t)
        else:
            t = float(dt_or_t)

        self.check_range(dt_or_t, extrapolate)

        return self._interpolation.interpolate(t, loss_level, True)

    def correlation_sensitivities(self,
                                  dt_or_t: (Date, float),
                                  loss_level: float):
        """ Derivatives of correlation(dt_or_t, loss_level) with respect to
        each cell of the correlation matrix. Bilinear surfaces only. """

        if isinstance(dt_or_t, Date):
            t = self.time_from_reference(dt_or_t)
        else:
            t = float(dt_or_t)

        return self._interpolation.sensitivities(t, loss_level)

    ###########################################################################

    def max_date(self):
        return self._tranche_dates[-1]

    def correlation_size(self):
        return 1

    def tenors(self):
        return list(self._tenors)

    def tranche_dates(self):
        return list(self._tranche_dates)

    def tranche_times(self):
        return self._tranche_times.copy()

    def loss_levels(self):
        return self._loss_levels.copy()

    def correlation_matrix(self):
        return self._correlations.copy()

    def business_day_convention(self):
        return self._bd_type

    def interp_type(self):
        return self._interp_type

    ###########################################################################

    def __repr__(self):
        s = label_to_string("OBJECT TYPE", type(self).__name__)
        s += label_to_string("REFERENCE DATE", self.reference_date())
        s += label_to_string("INTERPOLATION", self._interp_type)
        s += label_to_string("DATEGENRULE", self._dg_type)
        s += label_to_string("TENORS", [str(t) for t in self._tenors])

        header = ["LOSS LEVEL"] + [str(dt) for dt in self._tranche_dates]
        rows = []
        for i, loss in enumerate(self._loss_levels):
            rows.append([round(loss, 6)] +
                        [round(c, 6) for c in self._correlations[i]])

        s += str(format_table(header, rows))
        return s

###############################################################################
