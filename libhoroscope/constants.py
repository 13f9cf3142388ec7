"""
Constants for libhoroscope.

Epochs, zodiac tables, house system codes, ephemeris body identifiers and the
empirical calibration constants used by the angle and time calculations.
"""

# =============================================================================
# EPOCHS
# =============================================================================

J2000 = 2451545.0  # 2000-01-01 12:00 TT
DAYS_PER_CENTURY = 36525.0
SECONDS_PER_DAY = 86400.0

# =============================================================================
# CALIBRATION CONSTANTS
# =============================================================================
# Empirical offsets fitted against reference ephemeris output. They are not
# derived from any physical model and must stay exactly as written.

ASCENDANT_OFFSET = 0.18  # degrees (~11 arcminutes)
MIDHEAVEN_OFFSET = 0.20  # degrees (~12 arcminutes)

# Delta T fallback outside every fitted band (seconds)
DELTA_T_FALLBACK = 64.0

# =============================================================================
# ZODIAC
# =============================================================================

SIGNS = (
    "Aries",
    "Taurus",
    "Gemini",
    "Cancer",
    "Leo",
    "Virgo",
    "Libra",
    "Scorpio",
    "Sagittarius",
    "Capricorn",
    "Aquarius",
    "Pisces",
)

SIGN_WIDTH = 30.0

# (element, modality, traditional ruler)
SIGN_INFO = {
    "Aries": ("Fire", "Cardinal", "Mars"),
    "Taurus": ("Earth", "Fixed", "Venus"),
    "Gemini": ("Air", "Mutable", "Mercury"),
    "Cancer": ("Water", "Cardinal", "Moon"),
    "Leo": ("Fire", "Fixed", "Sun"),
    "Virgo": ("Earth", "Mutable", "Mercury"),
    "Libra": ("Air", "Cardinal", "Venus"),
    "Scorpio": ("Water", "Fixed", "Mars"),
    "Sagittarius": ("Fire", "Mutable", "Jupiter"),
    "Capricorn": ("Earth", "Cardinal", "Saturn"),
    "Aquarius": ("Air", "Fixed", "Saturn"),
    "Pisces": ("Water", "Mutable", "Jupiter"),
}

# =============================================================================
# CALENDAR
# =============================================================================

MONTH_ABBREVIATIONS = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)

# =============================================================================
# HOUSE SYSTEMS
# =============================================================================

HOUSE_SYSTEM_NAMES = {
    "placidus": "Placidus",
    "equal": "Equal",
    "whole-sign": "Whole Sign",
    "koch": "Koch",
}

# Single-letter codes as used by Swiss Ephemeris
HOUSE_SYSTEM_CODES = {
    "P": "placidus",
    "E": "equal",
    "W": "whole-sign",
    "K": "koch",
}

# =============================================================================
# EPHEMERIS BODIES
# =============================================================================

# JPL HORIZONS major-body identifiers
HORIZONS_IDS = {
    "Sun": "10",
    "Moon": "301",
    "Mercury": "199",
    "Venus": "299",
    "Earth": "399",
    "Mars": "499",
    "Jupiter": "599",
    "Saturn": "699",
    "Uranus": "799",
    "Neptune": "899",
    "Pluto": "999",
}

# Segment names in the JPL DE4xx kernels loaded through Skyfield.
# Outer planets resolve to system barycenters.
SKYFIELD_TARGETS = {
    "Sun": "sun",
    "Moon": "moon",
    "Mercury": "mercury",
    "Venus": "venus",
    "Mars": "mars barycenter",
    "Jupiter": "jupiter barycenter",
    "Saturn": "saturn barycenter",
    "Uranus": "uranus barycenter",
    "Neptune": "neptune barycenter",
    "Pluto": "pluto barycenter",
}

DEFAULT_BODIES = ("Sun", "Moon", "Mercury", "Venus", "Mars", "Jupiter", "Saturn")

HORIZONS_URL = "https://ssd.jpl.nasa.gov/api/horizons.api"
HORIZONS_TIMEOUT = 30.0  # seconds
