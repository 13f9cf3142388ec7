"""
Zodiac mapping for libhoroscope.

Maps ecliptic longitudes onto the tropical zodiac: twelve 30° signs starting
at the vernal equinox (0° Aries).
"""

import math
from dataclasses import dataclass
from typing import Dict

from .constants import SIGN_INFO, SIGN_WIDTH, SIGNS
from .utils import check_finite, norm360


@dataclass(frozen=True)
class ZodiacPosition:
    """
    Position within a zodiac sign.

    Produced by ecliptic_to_zodiac(); degree/minutes/seconds are truncated,
    never rounded.
    """

    sign: str
    degree: int
    minutes: int
    seconds: int

    @property
    def sign_index(self) -> int:
        return SIGNS.index(self.sign)

    @property
    def longitude(self) -> float:
        """Ecliptic longitude rebuilt from the truncated components."""
        return (
            self.sign_index * SIGN_WIDTH
            + self.degree
            + self.minutes / 60.0
            + self.seconds / 3600.0
        )

    def __str__(self) -> str:
        return f"{self.degree}°{self.minutes:02d}'{self.seconds:02d}\" {self.sign}"


def ecliptic_to_zodiac(longitude: float) -> ZodiacPosition:
    """
    Convert an ecliptic longitude to sign, degree, minutes and seconds.

    Args:
        longitude: Ecliptic longitude in degrees (any range)

    Returns:
        ZodiacPosition

    Raises:
        InvalidInputError: field "longitude" when not a finite number

    Example:
        >>> str(ecliptic_to_zodiac(45.5))
        '15°30\\'00" Taurus'
    """
    lon = norm360(check_finite("longitude", longitude))
    sign_index = int(lon // SIGN_WIDTH)
    in_sign = lon % SIGN_WIDTH

    degree = math.floor(in_sign)
    minutes_decimal = (in_sign - degree) * 60.0
    minutes = math.floor(minutes_decimal)
    seconds = math.floor((minutes_decimal - minutes) * 60.0)

    return ZodiacPosition(SIGNS[sign_index], degree, minutes, seconds)


def sign_info(sign: str) -> Dict[str, str]:
    """
    Element, modality and traditional ruler of a sign.

    Raises:
        ValueError: If ``sign`` is not one of the twelve sign names
    """
    if sign not in SIGN_INFO:
        raise ValueError(f"Unknown sign: {sign}")
    element, modality, ruler = SIGN_INFO[sign]
    return {"name": sign, "element": element, "modality": modality, "ruling_planet": ruler}


def degree_detail(value: float) -> Dict[str, object]:
    """
    Decimal plus truncated whole/minutes/seconds breakdown of an angle.

    Signed values keep their sign on the decimal and the whole degrees.
    """
    check_finite("value", value)
    magnitude = abs(value)
    whole = math.floor(magnitude)
    minutes_decimal = (magnitude - whole) * 60.0
    minutes = math.floor(minutes_decimal)
    seconds = math.floor((minutes_decimal - minutes) * 60.0)
    if value < 0:
        whole = -whole
    return {
        "decimal": value,
        "degrees": {"whole": whole, "minutes": minutes, "seconds": seconds, "decimal": value},
    }
