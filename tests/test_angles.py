"""
Unit tests for sidereal time, Ascendant and Midheaven.
"""

import pytest
import swisseph as swe
import libhoroscope as horo
from libhoroscope import GeographicLocation, Instant
from libhoroscope.constants import ASCENDANT_OFFSET, MIDHEAVEN_OFFSET

# (Name, UTC instant, Lat, Lon) - civil times converted from local zones
REFERENCE_CHARTS = [
    ("Melbourne FL", Instant(1984, 8, 18, 12, 3, 0.0), 28.078611, -80.602778),  # 08:03 EDT
    ("Austin TX", Instant(1991, 2, 16, 12, 10, 0.0), 30.266944, -97.742778),  # 06:10 CST
]


class TestSiderealTime:
    """Tests for GMST and LST."""

    def test_gmst_meeus_example(self):
        """Meeus example 12.a: 1987-04-10 0h UT -> 13h10m46.3668s."""
        gmst = horo.greenwich_mean_sidereal_time(2446895.5)
        assert gmst == pytest.approx(197.693195, abs=1e-4)

    def test_gmst_j2000_midnight(self):
        """2000-01-01 0h UT -> 6h39m52.27s."""
        gmst = horo.greenwich_mean_sidereal_time(2451544.5)
        assert gmst == pytest.approx(99.9678, abs=1e-3)

    def test_gmst_range(self):
        for i in range(200):
            gmst = horo.greenwich_mean_sidereal_time(2451545.0 + i * 0.37)
            assert 0.0 <= gmst < 360.0

    def test_gmst_accepts_julian_day(self, j2000_instant):
        jd = horo.julian_day_ut(j2000_instant)
        assert horo.greenwich_mean_sidereal_time(jd) == horo.greenwich_mean_sidereal_time(jd.value)

    @pytest.mark.parametrize("jd", [2445930.835416667, 2451545.0, 2460000.25, 2433282.75])
    def test_gmst_matches_swisseph(self, jd):
        """Mean vs apparent sidereal time differ by the equation of the equinoxes (< 1.2 s)."""
        gmst = horo.greenwich_mean_sidereal_time(jd)
        sidtime = swe.sidtime(jd) * 15.0
        assert abs(horo.difdeg2n(gmst, sidtime)) < 0.01

    def test_lst_adds_longitude(self):
        jd = 2451545.0
        gmst = horo.greenwich_mean_sidereal_time(jd)
        assert horo.local_sidereal_time(jd, 12.5) == pytest.approx(horo.norm360(gmst + 12.5))
        assert horo.local_sidereal_time(jd, -80.6) == pytest.approx(horo.norm360(gmst - 80.6))
        assert 0.0 <= horo.local_sidereal_time(jd, -180.0) < 360.0


class TestAngles:
    """Tests for Ascendant and Midheaven formulas."""

    def test_calibration_constants(self):
        assert ASCENDANT_OFFSET == 0.18
        assert MIDHEAVEN_OFFSET == 0.20

    def test_midheaven_at_lst_zero(self):
        """With the equinox on the meridian the MC is 0°, less the offset."""
        assert horo.midheaven(0.0, 23.44) == pytest.approx(360.0 - MIDHEAVEN_OFFSET, abs=1e-9)

    def test_ascendant_at_equator_lst_zero(self):
        """At the equator with LST 0 the rising point is 90°, less the offset."""
        assert horo.ascendant(0.0, 0.0, 23.44) == pytest.approx(90.0 - ASCENDANT_OFFSET, abs=1e-9)

    def test_midheaven_at_lst_90(self):
        assert horo.midheaven(90.0, 23.44) == pytest.approx(90.0 - MIDHEAVEN_OFFSET, abs=1e-9)

    def test_angles_in_range(self, test_locations):
        for _, lat, _ in test_locations:
            for lst in range(0, 360, 7):
                asc = horo.ascendant(float(lst), lat, 23.44)
                mc = horo.midheaven(float(lst), 23.44)
                assert 0.0 <= asc < 360.0
                assert 0.0 <= mc < 360.0

    def test_ascendant_at_pole_is_finite(self):
        asc = horo.ascendant(45.0, 90.0, 23.44)
        assert 0.0 <= asc < 360.0

    def test_ascendant_east_of_midheaven(self):
        """The Ascendant lies 0-180° ahead of the MC at temperate latitudes."""
        for lst in range(0, 360, 5):
            asc = horo.ascendant(float(lst), 45.0, 23.44)
            mc = horo.midheaven(float(lst), 23.44)
            assert 0.0 < horo.norm360(asc - mc) < 180.0

    @pytest.mark.parametrize(
        "lst, lat, eps, field",
        [
            (float("nan"), 45.0, 23.44, "lst"),
            (10.0, float("inf"), 23.44, "latitude"),
            (10.0, 45.0, float("nan"), "eps"),
        ],
    )
    def test_ascendant_rejects_non_finite(self, lst, lat, eps, field):
        with pytest.raises(horo.InvalidInputError) as excinfo:
            horo.ascendant(lst, lat, eps)
        assert excinfo.value.field == field

    def test_midheaven_rejects_non_finite(self):
        with pytest.raises(horo.InvalidInputError) as excinfo:
            horo.midheaven(float("nan"), 23.44)
        assert excinfo.value.field == "lst"

    def test_calc_angles(self):
        angles = horo.calc_angles(2451545.0, 41.9028, 12.4964)
        assert angles.obliquity == pytest.approx(23.439291111, abs=1e-9)
        assert angles.local_sidereal_time == pytest.approx(
            horo.local_sidereal_time(2451545.0, 12.4964)
        )
        assert angles.descendant == pytest.approx(horo.norm360(angles.ascendant + 180.0))
        assert angles.imum_coeli == pytest.approx(horo.norm360(angles.midheaven + 180.0))


@pytest.mark.integration
class TestReferenceCharts:
    """Calibrated Asc/MC against Swiss Ephemeris for the reference charts."""

    @pytest.mark.parametrize("name, instant, lat, lon", REFERENCE_CHARTS)
    def test_asc_mc_match_reference(self, name, instant, lat, lon, default_tolerances):
        chart = horo.calc_houses(instant, GeographicLocation(lat, lon), "placidus")
        jd_ut = horo.julian_day_ut(instant).value
        cusps_swe, ascmc_swe = swe.houses(jd_ut, lat, lon, b"P")

        tol = default_tolerances["angle_calibrated"]
        assert abs(horo.difdeg2n(chart.ascendant, ascmc_swe[0])) < tol, name
        assert abs(horo.difdeg2n(chart.midheaven, ascmc_swe[1])) < tol, name
        assert abs(horo.difdeg2n(chart.cusps[1], cusps_swe[0])) < tol, name
        assert abs(horo.difdeg2n(chart.cusps[10], cusps_swe[9])) < tol, name

    def test_melbourne_zodiac_signs(self):
        """The 1984 chart has a Virgo Ascendant and a Gemini Midheaven."""
        name, instant, lat, lon = REFERENCE_CHARTS[0]
        chart = horo.calc_houses(instant, GeographicLocation(lat, lon))
        jd_ut = horo.julian_day_ut(instant).value
        _, ascmc_swe = swe.houses(jd_ut, lat, lon, b"P")
        assert horo.ecliptic_to_zodiac(chart.ascendant).sign == horo.ecliptic_to_zodiac(ascmc_swe[0]).sign
