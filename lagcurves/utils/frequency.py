"""
Frequency types for index publication and schedule generation.

Provides frequency enumeration and conversion utilities. In this library a
frequency plays two roles:
- the publication cadence of an inflation index (monthly, quarterly, ...),
  which defines the publication periods used by inflation term structures
- the coupon frequency used when generating schedules

Frequency types:
- ZERO: Zero coupon (no periodic payments)
- SIMPLE: Simple interest (no compounding)
- ANNUAL: Once per year (frequency = 1)
- SEMI_ANNUAL: Twice per year (frequency = 2)
- TRI_ANNUAL: Three times per year (frequency = 3)
- QUARTERLY: Four times per year (frequency = 4)
- MONTHLY: Twelve times per year (frequency = 12)
- CONTINUOUS: Continuous compounding (frequency = -1)

Example:
    >>> freq = annual_frequency(FrequencyTypes.QUARTERLY)
    >>> print(freq)  # 4.0
    >>> months_in_period(FrequencyTypes.QUARTERLY)
    3
"""

from lagcurves.utils.error import LibError

from enum import Enum


class FrequencyTypes(Enum):
    ZERO = -1
    SIMPLE = 0
    ANNUAL = 1
    SEMI_ANNUAL = 2
    TRI_ANNUAL = 3
    QUARTERLY = 4
    MONTHLY = 12
    CONTINUOUS = 99


def annual_frequency(freq_type: FrequencyTypes) -> float:
    """ Number of periods per year. Zero coupon and simple frequencies
    count as one period; continuous compounding is flagged with -1. """

    if isinstance(freq_type, FrequencyTypes) is False:
        raise LibError(f"Unknown frequency type {freq_type}")

    if freq_type == FrequencyTypes.CONTINUOUS:
        return -1

    if freq_type in (FrequencyTypes.ZERO, FrequencyTypes.SIMPLE):
        return 1.0

    return float(freq_type.value)


def months_in_period(freq_type: FrequencyTypes) -> int:
    """ Number of calendar months spanned by one period of a periodic
    frequency. Only frequencies that divide the calendar year into whole
    months are accepted. """

    months = {FrequencyTypes.ANNUAL: 12,
              FrequencyTypes.SEMI_ANNUAL: 6,
              FrequencyTypes.TRI_ANNUAL: 4,
              FrequencyTypes.QUARTERLY: 3,
              FrequencyTypes.MONTHLY: 1}

    if freq_type not in months:
        raise LibError(f"Frequency not handled: {freq_type}")

    return months[freq_type]
