from .constants import *
from .exceptions import (
    LibHoroscopeError,
    InvalidInputError,
    UnsupportedHouseSystemError,
    EphemerisProviderError,
)
from .time_utils import (
    Era,
    TimeScale,
    Instant,
    JulianDay,
    julian_day_ut,
    julian_day_tt,
    delta_t_seconds,
    centuries_since_j2000,
    parse_date,
    parse_time,
    parse_instant,
    add_minutes,
    local_to_utc,
)
from .coordinates import (
    EquatorialCoordinate,
    EclipticCoordinate,
    GeographicLocation,
    mean_obliquity,
    mean_obliquity_iau1980,
    equatorial_to_ecliptic,
)
from .angles import (
    Angles,
    greenwich_mean_sidereal_time,
    local_sidereal_time,
    ascendant,
    midheaven,
    calc_angles,
)
from .houses import HouseSystem, HouseCusps, house_cusps, house_name, resolve_house_system
from .zodiac import ZodiacPosition, ecliptic_to_zodiac, sign_info
from .providers import (
    Observation,
    EphemerisProvider,
    HorizonsProvider,
    SkyfieldProvider,
    horizons_time_window,
)
from .chart import (
    BodyPosition,
    HouseChart,
    calc_body_position,
    calc_body_positions,
    fetch_body_positions,
    calc_houses,
    calc_houses_from_civil,
    calc_aspects,
)
from .state import (
    set_ephe_path,
    set_ephemeris_file,
    set_horizons_url,
    set_horizons_timeout,
    set_default_house_system,
    reset_state,
)
from .utils import norm360, difdeg2n


# =============================================================================
# SHORT ALIASES
# =============================================================================

jd_ut = julian_day_ut
jd_tt = julian_day_tt
gmst = greenwich_mean_sidereal_time
lst = local_sidereal_time

__version__ = "0.1.0"
__license__ = "LGPL-3.0"

__all__ = [
    # Errors
    "LibHoroscopeError",
    "InvalidInputError",
    "UnsupportedHouseSystemError",
    "EphemerisProviderError",
    # Time
    "Era",
    "TimeScale",
    "Instant",
    "JulianDay",
    "julian_day_ut",
    "jd_ut",
    "julian_day_tt",
    "jd_tt",
    "delta_t_seconds",
    "centuries_since_j2000",
    "parse_date",
    "parse_time",
    "parse_instant",
    "add_minutes",
    "local_to_utc",
    # Coordinates
    "EquatorialCoordinate",
    "EclipticCoordinate",
    "GeographicLocation",
    "mean_obliquity",
    "mean_obliquity_iau1980",
    "equatorial_to_ecliptic",
    # Angles
    "Angles",
    "greenwich_mean_sidereal_time",
    "gmst",
    "local_sidereal_time",
    "lst",
    "ascendant",
    "midheaven",
    "calc_angles",
    # Houses
    "HouseSystem",
    "HouseCusps",
    "house_cusps",
    "house_name",
    "resolve_house_system",
    # Zodiac
    "ZodiacPosition",
    "ecliptic_to_zodiac",
    "sign_info",
    # Providers
    "Observation",
    "EphemerisProvider",
    "HorizonsProvider",
    "SkyfieldProvider",
    "horizons_time_window",
    # Chart
    "BodyPosition",
    "HouseChart",
    "calc_body_position",
    "calc_body_positions",
    "fetch_body_positions",
    "calc_houses",
    "calc_houses_from_civil",
    "calc_aspects",
    # Configuration
    "set_ephe_path",
    "set_ephemeris_file",
    "set_horizons_url",
    "set_horizons_timeout",
    "set_default_house_system",
    "reset_state",
    # Utilities
    "norm360",
    "difdeg2n",
]
