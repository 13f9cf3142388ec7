"""
Sidereal time and chart angles for libhoroscope.

Computes:
- Greenwich Mean Sidereal Time (Meeus form)
- Local Sidereal Time
- Ascendant and Midheaven ecliptic longitudes

The Ascendant and Midheaven carry fixed empirical offsets
(ASCENDANT_OFFSET, MIDHEAVEN_OFFSET) calibrated against reference ephemeris
output. The house pipeline feeds these functions a TT Julian Day; the offsets
absorb most of the resulting Delta T rotation of the sky, so neither the
input scale nor the offsets can change independently.

References:
- Meeus "Astronomical Algorithms" Ch. 12 (sidereal time)
"""

import math
from dataclasses import dataclass
from typing import Union

from .constants import ASCENDANT_OFFSET, DAYS_PER_CENTURY, J2000, MIDHEAVEN_OFFSET
from .coordinates import mean_obliquity_iau1980
from .time_utils import JulianDay, centuries_since_j2000
from .utils import check_finite, norm360


def greenwich_mean_sidereal_time(jd: Union[JulianDay, float]) -> float:
    """
    Greenwich Mean Sidereal Time in degrees [0, 360).

    Args:
        jd: Julian Day

    Algorithm:
        JD0 = JD at the preceding 0h UT
        T0 = (JD0 - 2451545.0) / 36525
        H = hours elapsed since JD0
        GMST = 6.697374558 + 2400.051336 T0 + 0.000025862 T0^2
               + 1.0027379093 H   (hours, mod 24)
    """
    jd = float(jd)
    jd0 = math.floor(jd - 0.5) + 0.5
    t0 = (jd0 - J2000) / DAYS_PER_CENTURY
    h = (jd - jd0) * 24.0

    gmst = 6.697374558 + 2400.051336 * t0 + 0.000025862 * t0**2 + 1.0027379093 * h
    gmst = gmst % 24.0
    return norm360(gmst * 15.0)


def local_sidereal_time(jd: Union[JulianDay, float], longitude: float) -> float:
    """Local Sidereal Time in degrees: GMST + east longitude, mod 360."""
    return norm360(greenwich_mean_sidereal_time(jd) + longitude)


def ascendant(lst: float, lat: float, eps: float) -> float:
    """
    Ecliptic longitude rising on the eastern horizon.

    Args:
        lst: Local Sidereal Time in degrees
        lat: Geographic latitude in degrees
        eps: Obliquity of the ecliptic in degrees

    Returns:
        Ascendant in degrees [0, 360), ASCENDANT_OFFSET applied

    Raises:
        InvalidInputError: field "lst", "latitude" or "eps" when not finite
    """
    check_finite("lst", lst)
    check_finite("latitude", lat)
    check_finite("eps", eps)
    lst_r = math.radians(lst)
    lat_r = math.radians(lat)
    eps_r = math.radians(eps)

    y = -math.cos(lst_r)
    x = math.sin(lst_r) * math.cos(eps_r) + math.tan(lat_r) * math.sin(eps_r)

    asc = math.degrees(math.atan2(y, x))
    # atan2 lands on the descending node of the horizon; flip to the rising one
    asc += 180.0
    asc -= ASCENDANT_OFFSET
    return norm360(asc)


def midheaven(lst: float, eps: float) -> float:
    """
    Ecliptic longitude culminating on the meridian.

    Returns:
        Midheaven in degrees [0, 360), MIDHEAVEN_OFFSET applied
    """
    check_finite("lst", lst)
    check_finite("eps", eps)
    lst_r = math.radians(lst)
    eps_r = math.radians(eps)

    mc = math.degrees(math.atan2(math.sin(lst_r), math.cos(lst_r) * math.cos(eps_r)))
    mc -= MIDHEAVEN_OFFSET
    return norm360(mc)


@dataclass(frozen=True)
class Angles:
    """Chart angles and the intermediates used to derive them (degrees)."""

    ascendant: float
    midheaven: float
    local_sidereal_time: float
    obliquity: float

    @property
    def descendant(self) -> float:
        return norm360(self.ascendant + 180.0)

    @property
    def imum_coeli(self) -> float:
        return norm360(self.midheaven + 180.0)


def calc_angles(jd_tt: Union[JulianDay, float], lat: float, lon: float) -> Angles:
    """
    Calculate Ascendant, Midheaven, LST and obliquity for a chart.

    Args:
        jd_tt: Julian Day (TT)
        lat: Latitude in degrees
        lon: Longitude in degrees (East positive)
    """
    eps = mean_obliquity_iau1980(centuries_since_j2000(jd_tt))
    lst = local_sidereal_time(jd_tt, lon)
    return Angles(
        ascendant=ascendant(lst, lat, eps),
        midheaven=midheaven(lst, eps),
        local_sidereal_time=lst,
        obliquity=eps,
    )
