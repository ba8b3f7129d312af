"""
Test suite for lagcurves.utils.date and lagcurves.utils.tenor modules
Tests Date construction, arithmetic and Tenor parsing and ordering
"""
import datetime

import pytest

from lagcurves.utils.date import Date
from lagcurves.utils.tenor import Tenor, TimeUnits, to_tenor
from lagcurves.utils.frequency import FrequencyTypes
from lagcurves.utils.error import LibError


class TestDate:
    """Test cases for Date class"""

    def test_accessors(self):
        """Test day, month, year and weekday accessors"""
        dt = Date(14, 6, 2024)
        assert dt.d() == 14
        assert dt.m() == 6
        assert dt.y() == 2024
        assert dt.weekday() == 4  # Friday
        assert dt.is_weekend() is False

    def test_invalid_dates_raise(self):
        """Test that impossible dates raise LibError"""
        with pytest.raises(LibError):
            Date(30, 2, 2024)
        with pytest.raises(LibError):
            Date(1, 13, 2024)
        with pytest.raises(LibError):
            Date(1.5, 1, 2024)

    def test_add_months_clamps_to_month_end(self):
        """Test month arithmetic at month end"""
        assert Date(31, 1, 2024).add_months(1) == Date(29, 2, 2024)
        assert Date(31, 1, 2023).add_months(1) == Date(28, 2, 2023)
        assert Date(29, 2, 2024).add_years(1) == Date(28, 2, 2025)

    def test_add_tenor(self):
        """Test adding positive and negative tenors"""
        dt = Date(15, 6, 2024)
        assert dt.add_tenor("3M") == Date(15, 9, 2024)
        assert dt.add_tenor("-3M") == Date(15, 3, 2024)
        assert dt.add_tenor("1W") == Date(22, 6, 2024)
        assert dt.add_tenor("10D") == Date(25, 6, 2024)
        assert dt.add_tenor(Tenor(2, TimeUnits.YEARS)) == Date(15, 6, 2026)

    def test_add_weekdays_skips_weekends(self):
        """Test weekday arithmetic"""
        assert Date(14, 6, 2024).add_weekdays(1) == Date(17, 6, 2024)
        assert Date(17, 6, 2024).add_weekdays(-1) == Date(14, 6, 2024)

    def test_subtraction_gives_days(self):
        """Test date difference in days"""
        assert Date(1, 7, 2024) - Date(15, 6, 2024) == 16
        assert Date(15, 6, 2024) - Date(1, 7, 2024) == -16

    def test_end_of_month(self):
        """Test end of month helpers"""
        assert Date(29, 2, 2024).is_eom()
        assert Date(28, 2, 2024).is_eom() is False
        assert Date(10, 4, 2024).eom() == Date(30, 4, 2024)

    def test_ordering_and_hashing(self):
        """Test comparisons and use as dictionary keys"""
        dt1 = Date(15, 6, 2024)
        dt2 = Date(16, 6, 2024)
        assert dt1 < dt2
        assert dt2 >= dt1
        assert {dt1: 1}[Date(15, 6, 2024)] == 1

    def test_conversion(self):
        """Test conversion to and from datetime.date"""
        dt = Date.from_date(datetime.date(2024, 6, 15))
        assert dt == Date(15, 6, 2024)
        assert dt.to_date() == datetime.date(2024, 6, 15)

    def test_string_format(self):
        """Test string representation"""
        assert str(Date(5, 6, 2024)) == "05-JUN-2024"


class TestTenor:
    """Test cases for Tenor class"""

    def test_parsing(self):
        """Test tenor strings"""
        tenor = Tenor("3M")
        assert tenor.length() == 3
        assert tenor.units() == TimeUnits.MONTHS
        assert Tenor("-1y").length() == -1
        assert str(Tenor(10, TimeUnits.YEARS)) == "10Y"

    def test_invalid_tenor_raises(self):
        """Test that malformed tenors raise"""
        with pytest.raises(LibError):
            Tenor("3X")
        with pytest.raises(LibError):
            Tenor(3)

    def test_equality_across_units(self):
        """Test that 12M equals 1Y and 7D equals 1W"""
        assert Tenor("12M") == Tenor("1Y")
        assert Tenor("7D") == Tenor("1W")
        assert Tenor("0M") == Tenor("0D")
        assert hash(Tenor("12M")) == hash(Tenor("1Y"))

    def test_ordering(self):
        """Test tenor ordering"""
        assert Tenor("6M") < Tenor("1Y")
        assert Tenor("1Y") > Tenor("6M")
        assert Tenor("2M") > Tenor("1W")
        assert Tenor("1M") > Tenor("0D")
        assert Tenor("-1M") < Tenor("0D")

    def test_undecidable_comparison_raises(self):
        """Test that 1M against 30D cannot be ordered"""
        with pytest.raises(LibError):
            Tenor("1M") < Tenor("30D")

    def test_negation(self):
        """Test tenor negation"""
        assert -Tenor("3M") == Tenor("-3M")

    def test_from_frequency(self):
        """Test tenor of one period of a frequency"""
        assert Tenor.from_frequency(FrequencyTypes.QUARTERLY) == Tenor("3M")
        assert Tenor.from_frequency(FrequencyTypes.ANNUAL) == Tenor("1Y")

    def test_to_tenor(self):
        """Test conversion helper"""
        assert to_tenor("5Y") == Tenor("5Y")
        with pytest.raises(LibError):
            to_tenor(5)
