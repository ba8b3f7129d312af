"""
Pytest configuration file for lagcurves library tests
Provides common fixtures and test configuration
"""
import gc
import os
import sys
import pytest

# Add the lagcurves package to Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

# Import key modules for fixtures
from lagcurves.utils.date import Date
from lagcurves.utils.frequency import FrequencyTypes
from lagcurves.utils.settings import settings
from lagcurves.market.quote import SimpleQuote
from lagcurves.market.curves.inflation_curve import (
    InterpolatedZeroInflationCurve, InterpolatedYoYInflationCurve)


@pytest.fixture(autouse=True)
def evaluation_date():
    """Global evaluation date, restored to the system date after each test"""
    yield settings
    # structures dropped by the test must not see the reset
    gc.collect()
    settings.reset()


@pytest.fixture(scope="session")
def reference_dt():
    """Standard reference date for tests (a Friday)"""
    return Date(14, 6, 2024)


@pytest.fixture(scope="session")
def zero_curve_dates():
    """Zero inflation curve nodes, starting at the base date for a 3M lag"""
    return [
        Date(1, 3, 2024),
        Date(1, 3, 2025),
        Date(1, 3, 2026),
        Date(1, 3, 2029),
        Date(1, 3, 2034),
    ]


@pytest.fixture(scope="session")
def zero_curve_rates():
    """Zero coupon inflation rates at the curve nodes"""
    return [0.020, 0.024, 0.026, 0.028, 0.030]


@pytest.fixture
def zero_curve(reference_dt, zero_curve_dates, zero_curve_rates):
    """Monthly, non-interpolated zero inflation curve with a 3M lag"""
    return InterpolatedZeroInflationCurve(reference_dt,
                                          zero_curve_dates,
                                          zero_curve_rates,
                                          "3M",
                                          FrequencyTypes.MONTHLY)


@pytest.fixture(scope="session")
def yoy_curve_dates():
    """YoY curve nodes for an interpolated index with a 3M lag"""
    return [Date(14, 3, 2024), Date(14, 3, 2025), Date(14, 3, 2026),
            Date(14, 3, 2029)]


@pytest.fixture(scope="session")
def yoy_curve_rates():
    """Year-on-year rates at the curve nodes"""
    return [0.030, 0.025, 0.022, 0.021]


@pytest.fixture
def yoy_curve(reference_dt, yoy_curve_dates, yoy_curve_rates):
    """Monthly, interpolated YoY inflation curve with a 3M lag"""
    return InterpolatedYoYInflationCurve(reference_dt,
                                         yoy_curve_dates,
                                         yoy_curve_rates,
                                         "3M",
                                         FrequencyTypes.MONTHLY,
                                         index_is_interpolated=True)


@pytest.fixture(scope="session")
def tranche_tenors():
    """Standard index tranche tenors"""
    return ["5Y", "7Y", "10Y"]


@pytest.fixture(scope="session")
def loss_levels():
    """Detachment points of the quoted tranches"""
    return [0.03, 0.07, 0.15]


@pytest.fixture
def correl_quotes():
    """Base correlation quotes, one row per loss level"""
    values = [[0.18, 0.20, 0.22],
              [0.28, 0.30, 0.32],
              [0.42, 0.44, 0.46]]
    return [[SimpleQuote(v) for v in row] for row in values]


# Test markers for categorizing tests
def pytest_configure(config):
    """Configure custom test markers"""
    config.addinivalue_line("markers", "slow: marks tests as slow (may take longer to run)")
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
    config.addinivalue_line("markers", "numerical: marks tests with numerical precision requirements")


# Pytest collection hooks
def pytest_collection_modifyitems(config, items):
    """Modify test collection to add default markers"""
    for item in items:
        # Add 'unit' marker to all tests by default
        if not any(item.iter_markers()):
            item.add_marker(pytest.mark.unit)

        # Mark integration tests
        if "integration" in item.name or item.fspath.basename.startswith("test_integration"):
            item.add_marker(pytest.mark.integration)
