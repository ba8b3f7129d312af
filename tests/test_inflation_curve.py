"""
Test suite for lagcurves.market.curves.inflation_curve module
Tests node validation, interpolation schemes, floating reference dates and
string representations
"""
import numpy as np
import pytest

from lagcurves.utils.date import Date
from lagcurves.utils.frequency import FrequencyTypes
from lagcurves.utils.global_types import InterpTypes
from lagcurves.utils.observer import Observer
from lagcurves.market.curves.inflation_curve import (
    InterpolatedZeroInflationCurve, InterpolatedYoYInflationCurve)
from lagcurves.utils.error import LibError


class CountingObserver(Observer):

    def __init__(self):
        super().__init__()
        self.count = 0

    def update(self):
        self.count += 1


class TestNodeValidation:
    """Test cases for curve node checks"""

    def test_first_node_must_be_base_date(self, reference_dt):
        """Test that the first node must be the base date"""
        with pytest.raises(LibError):
            InterpolatedZeroInflationCurve(
                reference_dt, [Date(1, 4, 2024), Date(1, 4, 2025)],
                [0.02, 0.025], "3M")

    def test_interpolated_yoy_base_is_not_snapped(self, reference_dt):
        """Test that an interpolated index keeps the lagged day"""
        with pytest.raises(LibError):
            InterpolatedYoYInflationCurve(
                reference_dt, [Date(1, 3, 2024), Date(1, 3, 2025)],
                [0.02, 0.025], "3M", index_is_interpolated=True)

    def test_single_node_raises(self, reference_dt):
        """Test that at least two nodes are needed"""
        with pytest.raises(LibError):
            InterpolatedZeroInflationCurve(reference_dt, [Date(1, 3, 2024)],
                                           [0.02], "3M")

    def test_length_mismatch(self, reference_dt):
        """Test that dates and rates must have the same length"""
        with pytest.raises(LibError):
            InterpolatedZeroInflationCurve(
                reference_dt, [Date(1, 3, 2024), Date(1, 3, 2025)],
                [0.02, 0.025, 0.03], "3M")

    def test_non_increasing_dates(self, reference_dt):
        """Test that node dates must be strictly increasing"""
        dates = [Date(1, 3, 2024), Date(1, 3, 2026), Date(1, 3, 2025)]
        with pytest.raises(LibError) as e:
            InterpolatedZeroInflationCurve(reference_dt, dates,
                                           [0.02, 0.025, 0.03], "3M")
        assert "non increasing node dates" in str(e.value)

    def test_rates_type_checked(self, reference_dt):
        """Test argument type validation"""
        with pytest.raises(LibError):
            InterpolatedZeroInflationCurve(
                reference_dt, [Date(1, 3, 2024), Date(1, 3, 2025)],
                "0.02, 0.025", "3M")


class TestZeroInflationCurve:
    """Test cases for the interpolated zero inflation curve"""

    def test_base_rate_is_first_node(self, zero_curve):
        """Test that the first node sets the base rate"""
        assert zero_curve.is_finalized()
        assert zero_curve.base_rate() == 0.020
        assert zero_curve.base_date() == Date(1, 3, 2024)

    def test_accessors(self, zero_curve, zero_curve_dates, zero_curve_rates):
        """Test node accessors"""
        assert zero_curve.max_date() == Date(1, 3, 2034)
        assert zero_curve.dates() == zero_curve_dates
        np.testing.assert_allclose(zero_curve.rates(), zero_curve_rates)
        assert len(zero_curve.nodes()) == 5
        assert zero_curve.nodes()[1] == (Date(1, 3, 2025), 0.024)
        assert zero_curve.interp_type() == InterpTypes.LINEAR

        times = zero_curve.times()
        assert times[0] < 0.0
        assert np.all(np.diff(times) > 0.0)

    def test_accessors_return_copies(self, zero_curve):
        """Test that node accessors do not expose internal state"""
        zero_curve.rates()[0] = 1.0
        zero_curve.dates().append(Date(1, 3, 2040))
        assert zero_curve.base_rate() == 0.020
        assert zero_curve.max_date() == Date(1, 3, 2034)

    def test_rates_at_nodes(self, zero_curve, zero_curve_dates,
                            zero_curve_rates):
        """Test that lookups at observed node dates return node rates"""
        for dt, rate in zip(zero_curve_dates, zero_curve_rates):
            assert zero_curve.zero_rate(dt.add_months(3)) == \
                pytest.approx(rate)

    @pytest.mark.parametrize("interp_type", [InterpTypes.FLAT,
                                             InterpTypes.LINEAR,
                                             InterpTypes.PCHIP,
                                             InterpTypes.NATCUBIC])
    def test_interpolation_schemes_hit_nodes(self, reference_dt,
                                             zero_curve_dates,
                                             zero_curve_rates, interp_type):
        """Test that every scheme reproduces the node rates"""
        curve = InterpolatedZeroInflationCurve(reference_dt,
                                               zero_curve_dates,
                                               zero_curve_rates,
                                               "3M",
                                               interp_type=interp_type)
        assert curve.zero_rate(Date(1, 6, 2026)) == pytest.approx(0.026)

    def test_flat_interpolation_holds_left_node(self, reference_dt,
                                                zero_curve_dates,
                                                zero_curve_rates):
        """Test piecewise constant rates between nodes"""
        curve = InterpolatedZeroInflationCurve(reference_dt,
                                               zero_curve_dates,
                                               zero_curve_rates,
                                               "3M",
                                               interp_type=InterpTypes.FLAT)
        assert curve.zero_rate(Date(1, 9, 2025)) == 0.024
        assert curve.zero_rate(Date(1, 5, 2026)) == 0.024

    def test_pchip_stays_within_neighbours(self, reference_dt,
                                           zero_curve_dates,
                                           zero_curve_rates):
        """Test that monotonic interpolation does not overshoot"""
        curve = InterpolatedZeroInflationCurve(reference_dt,
                                               zero_curve_dates,
                                               zero_curve_rates,
                                               "3M",
                                               interp_type=InterpTypes.PCHIP)
        for month in range(1, 13):
            rate = curve.zero_rate(Date(1, month, 2027))
            assert 0.026 <= rate <= 0.028


class TestYoYInflationCurve:
    """Test cases for the interpolated YoY inflation curve"""

    def test_base_date_and_rate(self, yoy_curve):
        """Test base date and base rate"""
        assert yoy_curve.index_is_interpolated()
        assert yoy_curve.base_date() == Date(14, 3, 2024)
        assert yoy_curve.base_rate() == 0.030

    def test_non_interpolated_yoy_curve(self, reference_dt):
        """Test a YoY curve on a non-interpolated index"""
        curve = InterpolatedYoYInflationCurve(
            reference_dt, [Date(1, 3, 2024), Date(1, 3, 2025),
                           Date(1, 3, 2027)],
            [0.03, 0.025, 0.02], "3M")
        assert curve.index_is_interpolated() is False
        assert curve.yoy_rate(Date(1, 6, 2025)) == pytest.approx(0.025)
        assert curve.yoy_rate(Date(1, 6, 2025)) == \
            curve.yoy_rate(Date(28, 6, 2025))

    def test_rates_at_nodes(self, yoy_curve, yoy_curve_dates,
                            yoy_curve_rates):
        """Test lookups observed at node dates"""
        for dt, rate in zip(yoy_curve_dates, yoy_curve_rates):
            assert yoy_curve.yoy_rate(dt.add_months(3)) == \
                pytest.approx(rate)


class TestFloatingCurve:
    """Test cases for curves following the evaluation date"""

    def test_refit_on_evaluation_date_move(self, evaluation_date,
                                           zero_curve_dates,
                                           zero_curve_rates):
        """Test that node times follow the reference date"""
        evaluation_date.evaluation_date = Date(14, 6, 2024)
        curve = InterpolatedZeroInflationCurve(None,
                                               zero_curve_dates,
                                               zero_curve_rates,
                                               "3M",
                                               settlement_days=0)
        observer = CountingObserver()
        observer.register_with(curve)

        times_before = curve.times()
        rate_before = curve.zero_rate(Date(1, 9, 2025))

        evaluation_date.evaluation_date = Date(21, 6, 2024)

        assert curve.reference_date() == Date(21, 6, 2024)
        assert observer.count == 1
        np.testing.assert_allclose(curve.times(),
                                   times_before - 7.0 / 365.0)
        assert curve.zero_rate(Date(1, 9, 2025)) == \
            pytest.approx(rate_before)


class TestRepr:
    """Test cases for string representations"""

    def test_zero_curve_repr(self, zero_curve):
        """Test that repr lists the curve and its nodes"""
        s = repr(zero_curve)
        assert "InterpolatedZeroInflationCurve" in s
        assert "BASE DATE" in s
        assert "01-MAR-2034" in s

    def test_yoy_curve_repr(self, yoy_curve):
        """Test that repr lists the curve and its nodes"""
        s = repr(yoy_curve)
        assert "InterpolatedYoYInflationCurve" in s
        assert "INTERPOLATED INDEX" in s
