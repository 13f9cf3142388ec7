"""
Chart assembly for libhoroscope.

Wires the two calculation pipelines:
- Bodies: provider observations -> ecliptic of date -> zodiac
- Houses: civil date/time/location -> JD(TT) -> LST, Asc, MC -> cusps -> zodiac

The pipelines share only the zodiac mapping. Every entry point validates
its inputs before computing anything, so a call either returns a complete
result or raises.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from .angles import calc_angles
from .constants import DEFAULT_BODIES
from .coordinates import EclipticCoordinate, GeographicLocation, equatorial_to_ecliptic
from .houses import HouseCusps, HouseSystem, house_cusps, house_name, resolve_house_system
from .providers import EphemerisProvider, Observation
from .state import get_default_house_system
from .time_utils import Instant, JulianDay, julian_day_tt, local_to_utc, parse_instant
from .zodiac import ZodiacPosition, degree_detail, ecliptic_to_zodiac

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BodyPosition:
    """Ecliptic position of a body with its zodiac placement."""

    name: str
    ecliptic: EclipticCoordinate
    zodiac: ZodiacPosition

    def as_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "sign": self.zodiac.sign,
            "longitude": degree_detail(self.ecliptic.longitude),
            "latitude": degree_detail(self.ecliptic.latitude),
        }


@dataclass(frozen=True)
class HouseChart:
    """
    House cusps with the angles and intermediates they were derived from.

    All angles in degrees. ``julian_day`` is the TT Julian Day fed to the
    sidereal time calculation.
    """

    system: HouseSystem
    cusps: HouseCusps
    ascendant: float
    midheaven: float
    descendant: float
    imum_coeli: float
    local_sidereal_time: float
    obliquity: float
    julian_day: JulianDay

    def zodiac(self) -> Dict[int, ZodiacPosition]:
        """Zodiac placement of each cusp."""
        return {house: ecliptic_to_zodiac(lon) for house, lon in self.cusps.items()}

    def as_dict(self) -> Dict[str, Any]:
        return {
            "system": house_name(self.system),
            "ascendant": self.ascendant,
            "midheaven": self.midheaven,
            "descendant": self.descendant,
            "imum_coeli": self.imum_coeli,
            "local_sidereal_time": self.local_sidereal_time,
            "obliquity": self.obliquity,
            "julian_day_tt": self.julian_day.value,
            "houses": [
                {
                    "house_number": house,
                    "sign": position.sign,
                    "cusp": degree_detail(self.cusps[house]),
                }
                for house, position in self.zodiac().items()
            ],
        }


def calc_body_position(observation: Observation, eps: Optional[float] = None) -> BodyPosition:
    """
    Ecliptic and zodiac position of one observed body.

    Args:
        observation: Apparent RA/Dec at a UTC instant
        eps: Obliquity override in degrees (mean obliquity of date if None)
    """
    jd_tt = julian_day_tt(observation.instant)
    ecliptic = equatorial_to_ecliptic(
        observation.equatorial.right_ascension,
        observation.equatorial.declination,
        jd_tt,
        eps,
    )
    return BodyPosition(observation.body, ecliptic, ecliptic_to_zodiac(ecliptic.longitude))


def calc_body_positions(
    observations: Iterable[Observation], eps: Optional[float] = None
) -> List[BodyPosition]:
    """Ecliptic and zodiac positions of observed bodies, in input order."""
    return [calc_body_position(obs, eps) for obs in observations]


def fetch_body_positions(
    provider: EphemerisProvider,
    instant: Instant,
    bodies: Sequence[str] = DEFAULT_BODIES,
) -> List[BodyPosition]:
    """
    Observe ``bodies`` through ``provider`` and convert them to ecliptic positions.

    Raises:
        EphemerisProviderError: If any observation fails; no partial list is returned

    Example:
        >>> with HorizonsProvider() as provider:
        ...     positions = fetch_body_positions(provider, Instant(2000, 1, 1, 12))
    """
    observations = []
    for body in bodies:
        observation = provider.observe(body, instant)
        logger.debug(
            "%s: ra=%.6f dec=%.6f",
            body,
            observation.equatorial.right_ascension,
            observation.equatorial.declination,
        )
        observations.append(observation)
    return calc_body_positions(observations)


def calc_houses(
    instant: Instant,
    location: GeographicLocation,
    system: Union[HouseSystem, str, None] = None,
) -> HouseChart:
    """
    Calculate house cusps and angles for a UTC instant and location.

    Args:
        instant: UTC instant (AD or BCE)
        location: Observer location
        system: House system selector; the configured default if None

    Returns:
        HouseChart
    """
    hsys = get_default_house_system() if system is None else resolve_house_system(system)
    jd_tt = julian_day_tt(instant)
    angles = calc_angles(jd_tt, location.latitude, location.longitude)
    logger.debug(
        "jd_tt=%.6f lst=%.6f eps=%.6f asc=%.6f mc=%.6f",
        jd_tt.value,
        angles.local_sidereal_time,
        angles.obliquity,
        angles.ascendant,
        angles.midheaven,
    )
    return HouseChart(
        system=hsys,
        cusps=house_cusps(angles.ascendant, angles.midheaven, hsys),
        ascendant=angles.ascendant,
        midheaven=angles.midheaven,
        descendant=angles.descendant,
        imum_coeli=angles.imum_coeli,
        local_sidereal_time=angles.local_sidereal_time,
        obliquity=angles.obliquity,
        julian_day=jd_tt,
    )


def calc_houses_from_civil(
    date: str,
    time: str,
    latitude: float,
    longitude: float,
    system: Union[HouseSystem, str, None] = None,
    tz_name: Optional[str] = None,
) -> HouseChart:
    """
    Calculate house cusps from civil date/time strings.

    Args:
        date: ``YYYY-MM-DD`` or ``bc YYYY-Mon-DD``
        time: ``HH:MM`` or ``HH:MM:SS``
        latitude: Degrees, North positive
        longitude: Degrees, East positive
        system: House system selector
        tz_name: IANA zone of the civil time; UTC if None

    Raises:
        InvalidInputError: Naming the first field that failed validation
    """
    location = GeographicLocation(latitude, longitude)
    instant = parse_instant(date, time)
    if tz_name is not None:
        instant = local_to_utc(instant, tz_name)
    return calc_houses(instant, location, system)


def calc_aspects(
    bodies: Optional[Sequence[BodyPosition]] = None,
    houses: Optional[HouseChart] = None,
) -> Dict[str, Any]:
    """Placeholder: aspect calculation is not implemented."""
    return {"summary": "Aspect calculation is not yet implemented.", "aspects": []}
