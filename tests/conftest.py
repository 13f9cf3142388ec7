"""
pytest configuration and shared fixtures for libhoroscope tests.
"""

import pytest
import libhoroscope as horo
from libhoroscope import state


# ============================================================================
# TEST DATA FIXTURES
# ============================================================================


@pytest.fixture
def j2000_instant():
    """2000-01-01 12:00 UT."""
    return horo.Instant(2000, 1, 1, 12, 0, 0.0)


@pytest.fixture
def test_dates():
    """Collection of test dates spanning different eras (year, month, day, hour, label)."""
    return [
        (2000, 1, 1, 12.0, "J2000"),
        (1980, 5, 20, 0.0, "Past"),
        (2024, 11, 5, 18.0, "Recent"),
        (1950, 10, 15, 6.0, "Mid-century"),
        (1776, 7, 4, 17.5, "Founding"),
    ]


@pytest.fixture
def test_locations():
    """Collection of test locations with various latitudes."""
    return [
        ("Rome", 41.9028, 12.4964),
        ("London", 51.5074, -0.1278),
        ("New York", 40.7128, -74.0060),
        ("Sydney", -33.8688, 151.2093),
        ("Tromso", 69.6492, 18.9553),  # Arctic
        ("McMurdo", -77.8419, 166.6863),  # Antarctic
        ("Equator", 0.0, 0.0),
    ]


@pytest.fixture
def all_house_systems():
    """All supported house systems."""
    return list(horo.HouseSystem)


@pytest.fixture
def angle_pairs():
    """(Ascendant, Midheaven) pairs covering every quadrant and the 0/360 seam."""
    return [
        (15.0, 285.0),
        (0.0, 270.0),
        (359.9, 270.1),
        (100.25, 10.5),
        (200.0, 110.0),
        (275.5, 190.0),
        (89.82, 359.8),
        (123.456789, 31.0),
    ]


# ============================================================================
# TOLERANCE FIXTURES
# ============================================================================


@pytest.fixture
def default_tolerances():
    """Default tolerance values for comparisons."""
    return {
        "julian_day": 1e-9,  # days
        "longitude": 1e-9,  # degrees, exact math
        "sidereal_time": 0.01,  # degrees, mean vs apparent sidereal time
        "angle_calibrated": 0.5,  # degrees, Asc/MC after empirical offsets
        "house_cusp": 1e-9,  # degrees
    }


# ============================================================================
# HELPERS
# ============================================================================


def angular_diff(val1: float, val2: float) -> float:
    """Absolute angular difference accounting for 360° wrap."""
    return abs(horo.difdeg2n(val1, val2))


@pytest.fixture
def ang_diff():
    return angular_diff


# ============================================================================
# SETUP/TEARDOWN
# ============================================================================


@pytest.fixture(autouse=True)
def reset_library_state(monkeypatch):
    """Reset configuration before and after each test."""
    for name in (
        "LIBHOROSCOPE_EPHE_PATH",
        "LIBHOROSCOPE_EPHE_FILE",
        "LIBHOROSCOPE_HORIZONS_URL",
        "LIBHOROSCOPE_HORIZONS_TIMEOUT",
        "LIBHOROSCOPE_HOUSE_SYSTEM",
    ):
        monkeypatch.delenv(name, raising=False)
    state.reset_state()

    yield

    state.reset_state()


# ============================================================================
# MARKERS
# ============================================================================


def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "slow: mark test as slow running")
