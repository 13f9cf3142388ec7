"""
Coordinate frames for libhoroscope.

Converts apparent equatorial coordinates (right ascension, declination of
date) to ecliptic-of-date coordinates using the mean obliquity of the
ecliptic.

Precision Notes:
- Mean obliquity of date only: no nutation in obliquity, no aberration,
  no parallax. Output is as accurate as the input RA/Dec to ~1 arcminute.
  This bound is part of the contract; results are compared against existing
  reference output and must not drift.

References:
- IAU 2006 precession (Capitaine et al. A&A 412, 567-586 (2003))
- Meeus "Astronomical Algorithms" Ch. 13 and 22
"""

import math
from dataclasses import dataclass
from typing import Optional, Union

from .constants import DAYS_PER_CENTURY, J2000
from .exceptions import InvalidInputError
from .time_utils import JulianDay
from .utils import check_finite, clamp_unit, norm360


@dataclass(frozen=True)
class EquatorialCoordinate:
    """
    Apparent equatorial position in degrees.

    Right ascension is kept as delivered upstream (may be negative or > 360).

    Raises:
        InvalidInputError: field "right_ascension" or "declination" when
            not a finite number
    """

    right_ascension: float
    declination: float

    def __post_init__(self):
        check_finite("right_ascension", self.right_ascension)
        check_finite("declination", self.declination)


@dataclass(frozen=True)
class EclipticCoordinate:
    """
    Ecliptic-of-date position in degrees.

    Attributes:
        longitude: [0, 360)
        latitude: [-90, 90], never wrapped
    """

    longitude: float
    latitude: float


@dataclass(frozen=True)
class GeographicLocation:
    """
    Observer location in degrees (North and East positive).

    Raises:
        InvalidInputError: field "latitude" or "longitude" when out of range
    """

    latitude: float
    longitude: float

    def __post_init__(self):
        for field, value, limit in (
            ("latitude", self.latitude, 90.0),
            ("longitude", self.longitude, 180.0),
        ):
            check_finite(field, value)
            if abs(value) > limit:
                raise InvalidInputError(field, value)


def mean_obliquity(jd_tt: Union[JulianDay, float]) -> float:
    """
    Mean obliquity of the ecliptic (IAU 2006), in degrees.

    Args:
        jd_tt: Julian Day in Terrestrial Time

    Note:
        Accurate to ~0.1" over several centuries around J2000.
    """
    T = (float(jd_tt) - J2000) / DAYS_PER_CENTURY
    eps_arcsec = (
        84381.406
        - 46.836769 * T
        - 0.0001831 * T**2
        + 0.00200340 * T**3
        - 5.76e-7 * T**4
        - 4.34e-8 * T**5
    )
    return eps_arcsec / 3600.0


def mean_obliquity_iau1980(T: float) -> float:
    """
    Mean obliquity of the ecliptic (IAU 1980), in degrees.

    Args:
        T: Julian centuries (TT) since J2000.0

    Used by the house pipeline; differs from mean_obliquity() by well under
    an arcsecond for modern dates.
    """
    eps0 = 23.439291111
    d_eps = -46.8150 * T - 0.00059 * T**2 + 0.001813 * T**3
    return eps0 + d_eps / 3600.0


def equatorial_to_ecliptic(
    ra: float,
    dec: float,
    jd_tt: Union[JulianDay, float],
    eps: Optional[float] = None,
) -> EclipticCoordinate:
    """
    Convert apparent RA/Dec of date to ecliptic-of-date longitude/latitude.

    Args:
        ra: Right ascension in degrees (any range)
        dec: Declination in degrees
        jd_tt: Julian Day (TT) used for the mean obliquity
        eps: Obliquity override in degrees; mean obliquity of date if None

    Returns:
        EclipticCoordinate with longitude in [0, 360)

    Raises:
        InvalidInputError: field "right_ascension", "declination" or "eps"
            when not a finite number

    Algorithm:
        Rotate the equatorial unit vector by +eps about the equinox (x) axis:
            x' = x
            y' = cos(eps) y + sin(eps) z
            z' = -sin(eps) y + cos(eps) z
    """
    check_finite("right_ascension", ra)
    check_finite("declination", dec)
    if eps is not None:
        check_finite("eps", eps)
    eps_rad = math.radians(mean_obliquity(jd_tt) if eps is None else eps)
    ra_rad = math.radians(ra)
    dec_rad = math.radians(dec)

    x = math.cos(dec_rad) * math.cos(ra_rad)
    y = math.cos(dec_rad) * math.sin(ra_rad)
    z = math.sin(dec_rad)

    y_ecl = math.cos(eps_rad) * y + math.sin(eps_rad) * z
    z_ecl = -math.sin(eps_rad) * y + math.cos(eps_rad) * z

    lon = norm360(math.degrees(math.atan2(y_ecl, x)))
    lat = math.degrees(math.asin(clamp_unit(z_ecl)))
    return EclipticCoordinate(lon, lat)
