"""
Schedule generation and CDS maturity conventions.

Provides the Schedule class which generates a sequence of dates between an
effective date and a termination date, and the IMM twentieth helpers used
by credit products:

- previous_twentieth / next_twentieth: the 20th of the (IMM) month before
  or after a date
- cds_maturity: the standard maturity of a CDS (or CDS index tranche) with
  a given tenor traded on a given date

Date generation rules:
- BACKWARD: dates are rolled back from the termination date
- FORWARD: dates are rolled forward from the effective date
- ZERO: only the effective and termination dates
- CDS / CDS2015: the first date is the previous IMM twentieth (or the one
  before it if it rolls past the effective date), then IMM twentieths
- OLD_CDS: effective date, then IMM twentieths with a 30 day minimum stub

All dates except the last are adjusted with the business day convention.
The termination date is adjusted only if adjust_termination_dt is True.

Example:
    >>> schedule = Schedule(Date(15, 6, 2020), Date(15, 6, 2023),
    ...                     FrequencyTypes.ANNUAL)
    >>> schedule.schedule_dts()
    [15-JUN-2020, 15-JUN-2021, 15-JUN-2022, 15-JUN-2023]
    >>> cds_maturity(Date(10, 8, 2024), "5Y", DateGenRuleTypes.CDS2015)
    20-JUN-2029
    >>> cds_maturity(Date(25, 9, 2024), "5Y", DateGenRuleTypes.CDS2015)
    20-DEC-2029
"""

from lagcurves.utils.error import LibError
from lagcurves.utils.date import Date
from lagcurves.utils.tenor import Tenor, TimeUnits
from lagcurves.utils.frequency import FrequencyTypes, months_in_period
from lagcurves.utils.calendar import (Calendar, CalendarTypes,
                                      BusDayAdjustTypes, DateGenRuleTypes)
from lagcurves.utils.helpers import check_argument_types, label_to_string

###############################################################################

CDS_RULES = (DateGenRuleTypes.OLD_CDS,
             DateGenRuleTypes.CDS,
             DateGenRuleTypes.CDS2015)

OLD_CDS_STUB_DAYS = 30

###############################################################################


def previous_twentieth(dt: Date,
                       dg_type: DateGenRuleTypes):
    """ The 20th of the month on or before dt. For CDS rules the month is
    moved back to the previous IMM month (Mar, Jun, Sep, Dec). """

    result = Date(20, dt.m(), dt.y())
    if result > dt:
        result = result.add_months(-1)

    if dg_type in CDS_RULES:
        skip = result.m() % 3
        if skip != 0:
            result = result.add_months(-skip)

    return result


def next_twentieth(dt: Date,
                   dg_type: DateGenRuleTypes):
    """ The 20th of the month on or after dt. For CDS rules the month is
    moved forward to the next IMM month (Mar, Jun, Sep, Dec). """

    result = Date(20, dt.m(), dt.y())
    if result < dt:
        result = result.add_months(1)

    if dg_type in CDS_RULES:
        skip = result.m() % 3
        if skip != 0:
            result = result.add_months(3 - skip)

    return result

###############################################################################


def cds_maturity(trade_dt: Date,
                 tenor,
                 dg_type: DateGenRuleTypes):
    """ Standard CDS maturity date for a trade date and tenor. The tenor
    must be in years or a multiple of three months. Under CDS2015
    maturities roll semi-annually, on 20-Mar and 20-Sep.

    A zero tenor traded between 20-Jun and 20-Sep (or 20-Dec and 20-Mar)
    has no standard maturity under CDS2015 and raises. """

    if dg_type not in CDS_RULES:
        raise LibError(f"cds_maturity should only be used with date "
                       f"generation rule CDS2015, CDS or OLD_CDS, "
                       f"got {dg_type}")

    tenor = Tenor(tenor)

    if not (tenor.units() == TimeUnits.YEARS or
            (tenor.units() == TimeUnits.MONTHS and tenor.length() % 3 == 0)):
        raise LibError(f"cds_maturity should only be used with tenor "
                       f"multiple of 3 months or years, got {tenor}")

    if dg_type == DateGenRuleTypes.OLD_CDS and tenor.length() == 0:
        raise LibError("A tenor of 0M is not supported for OLD_CDS.")

    anchor_dt = previous_twentieth(trade_dt, dg_type)

    if dg_type == DateGenRuleTypes.CDS2015 and \
            (anchor_dt == Date(20, 12, anchor_dt.y()) or
             anchor_dt == Date(20, 6, anchor_dt.y())):
        if tenor.length() == 0:
            raise LibError(f"no CDS2015 maturity for a 0M tenor traded "
                           f"on {trade_dt}")
        anchor_dt = anchor_dt.add_months(-3)

    maturity_dt = anchor_dt.add_tenor(tenor).add_months(3)

    if maturity_dt <= trade_dt:
        raise LibError(f"error calculating CDS maturity. Tenor is {tenor}, "
                       f"trade date is {trade_dt}, generating a maturity "
                       f"of {maturity_dt} <= trade date.")

    return maturity_dt

###############################################################################


class Schedule:
    """ A schedule is a set of dates generated according to ISDA standard
    rules which starts on the effective date and ends on the termination
    date. """

    def __init__(self,
                 effective_dt: Date,
                 termination_dt: Date,
                 freq_type: FrequencyTypes = FrequencyTypes.ANNUAL,
                 cal_type: CalendarTypes = CalendarTypes.WEEKEND,
                 bd_type: BusDayAdjustTypes = BusDayAdjustTypes.FOLLOWING,
                 dg_type: DateGenRuleTypes = DateGenRuleTypes.BACKWARD,
                 end_of_month: bool = False,
                 adjust_termination_dt: bool = True):

        check_argument_types(self.__init__, locals())

        if effective_dt >= termination_dt:
            raise LibError(f"Effective date {effective_dt} must be before "
                           f"termination date {termination_dt}")

        if end_of_month and dg_type in CDS_RULES:
            raise LibError("End of month convention is not compatible "
                           f"with {dg_type}")

        self._effective_dt = effective_dt
        self._termination_dt = termination_dt
        self._freq_type = freq_type
        self._cal_type = cal_type
        self._bd_type = bd_type
        self._dg_type = dg_type
        self._end_of_month = end_of_month
        self._adjust_termination_dt = adjust_termination_dt

        self._unadjusted_dts = self._generate_unadjusted()
        self._adjusted_dts = self._adjust(self._unadjusted_dts)

    ###########################################################################

    def schedule_dts(self):
        """ Adjusted schedule dates. """
        return list(self._adjusted_dts)

    def unadjusted_dts(self):
        return list(self._unadjusted_dts)

    ###########################################################################

    def _roll_months(self):
        if self._freq_type in (FrequencyTypes.ZERO, FrequencyTypes.SIMPLE):
            return None
        if self._dg_type in CDS_RULES:
            # IMM rolls cannot be shorter than a quarter
            return max(3, months_in_period(self._freq_type))
        return months_in_period(self._freq_type)

    def _snap_eom(self, dt: Date, anchor_dt: Date):
        if self._end_of_month and anchor_dt.is_eom():
            return dt.eom()
        return dt

    ###########################################################################

    def _generate_unadjusted(self):

        eff_dt = self._effective_dt
        term_dt = self._termination_dt
        months = self._roll_months()

        if self._dg_type == DateGenRuleTypes.ZERO or months is None:
            return [eff_dt, term_dt]

        if self._dg_type == DateGenRuleTypes.BACKWARD:

            dts = [term_dt]
            n = 1
            next_dt = self._snap_eom(term_dt.add_months(-months), term_dt)
            while next_dt > eff_dt:
                dts.append(next_dt)
                n += 1
                next_dt = self._snap_eom(term_dt.add_months(-n * months),
                                         term_dt)
            dts.append(eff_dt)
            dts.reverse()
            return dts

        if self._dg_type == DateGenRuleTypes.FORWARD:

            dts = [eff_dt]
            n = 1
            next_dt = self._snap_eom(eff_dt.add_months(months), eff_dt)
            while next_dt < term_dt:
                dts.append(next_dt)
                n += 1
                next_dt = self._snap_eom(eff_dt.add_months(n * months),
                                         eff_dt)
            dts.append(term_dt)
            return dts

        calendar = Calendar(self._cal_type)

        if self._dg_type in (DateGenRuleTypes.CDS, DateGenRuleTypes.CDS2015):

            prev_20th = previous_twentieth(eff_dt, self._dg_type)
            dts = []
            if calendar.adjust(prev_20th, self._bd_type) > eff_dt:
                dts.append(prev_20th.add_months(-3))
            dts.append(prev_20th)
            seed_dt = prev_20th

        else:

            dts = [eff_dt]
            seed_dt = eff_dt
            next_20th = next_twentieth(eff_dt, self._dg_type)
            if next_20th - eff_dt < OLD_CDS_STUB_DAYS:
                next_20th = next_twentieth(next_20th.add_days(1),
                                           self._dg_type)
            if next_20th != eff_dt:
                dts.append(next_20th)
                seed_dt = next_20th

        n = 1
        next_dt = seed_dt.add_months(months)
        while next_dt < term_dt:
            dts.append(next_dt)
            n += 1
            next_dt = seed_dt.add_months(n * months)

        if dts[-1] < term_dt:
            dts.append(term_dt)

        return dts

    ###########################################################################

    def _adjust(self, unadjusted_dts):

        calendar = Calendar(self._cal_type)
        adjusted = [calendar.adjust(dt, self._bd_type)
                    for dt in unadjusted_dts[:-1]]

        last_dt = unadjusted_dts[-1]
        if self._adjust_termination_dt:
            last_dt = calendar.adjust(last_dt, self._bd_type)
        adjusted.append(last_dt)

        return adjusted

    ###########################################################################

    def __repr__(self):
        s = label_to_string("OBJECT TYPE", type(self).__name__)
        s += label_to_string("EFFECTIVE DATE", self._effective_dt)
        s += label_to_string("END DATE", self._termination_dt)
        s += label_to_string("FREQUENCY", self._freq_type)
        s += label_to_string("CALENDAR", self._cal_type)
        s += label_to_string("BUSDAYRULE", self._bd_type)
        s += label_to_string("DATEGENRULE", self._dg_type)
        s += label_to_string("ADJ END DATE", self._adjust_termination_dt)
        s += label_to_string("END OF MONTH", self._end_of_month)
        s += label_to_string("SCHEDULE DATES", self._adjusted_dts,
                             list_format=True)
        return s

###############################################################################
