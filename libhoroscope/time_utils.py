"""
Time conversion utilities for libhoroscope.

Implements the time chain used by both calculation pipelines:
- Civil calendar instants (AD or BCE) and their parsing
- Calendar date to Julian Day (UT)
- Delta T (TT - UT) from year-banded polynomial fits
- Julian Day (TT) and Julian centuries since J2000.0

BCE dates never go through the datetime module: standard date types reject
years before AD 1, so all BCE arithmetic is done by hand on the proleptic
Gregorian calendar using astronomical year numbering (1 BC = year 0).

References:
- Meeus "Astronomical Algorithms" (1998), Ch. 7 (Julian Day)
"""

import math
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Tuple, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .constants import (
    DAYS_PER_CENTURY,
    DELTA_T_FALLBACK,
    J2000,
    MONTH_ABBREVIATIONS,
    SECONDS_PER_DAY,
)
from .exceptions import InvalidInputError


class Era(Enum):
    """Calendar era of an instant."""

    AD = "ad"
    BCE = "bc"


class TimeScale(Enum):
    """Time scale a Julian Day is expressed in."""

    UT = "UT"
    TT = "TT"


def is_leap_year(astronomical_year: int) -> bool:
    """Proleptic Gregorian leap year rule (astronomical year numbering)."""
    return astronomical_year % 4 == 0 and (
        astronomical_year % 100 != 0 or astronomical_year % 400 == 0
    )


def days_in_month(astronomical_year: int, month: int) -> int:
    if month == 2:
        return 29 if is_leap_year(astronomical_year) else 28
    if month in (4, 6, 9, 11):
        return 30
    return 31


def _check_int(field: str, value, low: int, high: Optional[int]) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInputError(field, value, "must be an integer")
    if value < low or (high is not None and value > high):
        raise InvalidInputError(field, value)


@dataclass(frozen=True)
class Instant:
    """
    A UTC calendar date-time with an explicit era.

    Years are era years (always >= 1); BCE year 44 is 44 BC. Timezones are
    resolved before an Instant is built (see local_to_utc).

    Raises:
        InvalidInputError: If any component is out of range. The error's
            ``field`` attribute names the component.
    """

    year: int
    month: int
    day: int
    hour: int = 0
    minute: int = 0
    second: float = 0.0
    era: Era = Era.AD

    def __post_init__(self):
        if not isinstance(self.era, Era):
            raise InvalidInputError("era", self.era, "must be Era.AD or Era.BCE")
        _check_int("year", self.year, 1, None)
        _check_int("month", self.month, 1, 12)
        _check_int("day", self.day, 1, days_in_month(self.astronomical_year, self.month))
        _check_int("hour", self.hour, 0, 23)
        _check_int("minute", self.minute, 0, 59)
        if isinstance(self.second, bool) or not isinstance(self.second, (int, float)):
            raise InvalidInputError("second", self.second, "must be a number")
        if not 0.0 <= self.second < 60.0:
            raise InvalidInputError("second", self.second)

    @property
    def astronomical_year(self) -> int:
        """Year in astronomical numbering: 1 BC -> 0, 44 BC -> -43."""
        if self.era is Era.BCE:
            return 1 - self.year
        return self.year

    @property
    def is_bce(self) -> bool:
        return self.era is Era.BCE

    @property
    def hour_fraction(self) -> float:
        """Decimal hour (0.0-23.999...)."""
        return self.hour + self.minute / 60.0 + self.second / 3600.0

    @classmethod
    def from_astronomical(
        cls, year: int, month: int, day: int, hour: int = 0, minute: int = 0, second: float = 0.0
    ) -> "Instant":
        """Build an Instant from an astronomical year (0 and negatives are BCE)."""
        if year <= 0:
            return cls(1 - year, month, day, hour, minute, second, Era.BCE)
        return cls(year, month, day, hour, minute, second, Era.AD)

    @classmethod
    def from_datetime(cls, dt: datetime) -> "Instant":
        """
        Build an Instant from a datetime.

        Aware datetimes are converted to UTC; naive ones are taken as UTC.
        """
        if dt.tzinfo is not None:
            dt = dt.astimezone(timezone.utc)
        return cls(
            dt.year,
            dt.month,
            dt.day,
            dt.hour,
            dt.minute,
            dt.second + dt.microsecond / 1e6,
        )

    @classmethod
    def from_strings(cls, date_text: str, time_text: Optional[str] = None) -> "Instant":
        return parse_instant(date_text, time_text)

    def to_datetime(self) -> datetime:
        """
        Convert to a naive UTC datetime.

        Raises:
            InvalidInputError: For BCE instants or years datetime cannot hold.
        """
        if self.is_bce:
            raise InvalidInputError("era", self.era.value, "BCE dates have no datetime form")
        whole = int(self.second)
        micro = int(round((self.second - whole) * 1e6))
        if micro >= 1000000:
            micro = 999999
        try:
            return datetime(self.year, self.month, self.day, self.hour, self.minute, whole, micro)
        except ValueError as exc:
            raise InvalidInputError("year", self.year, str(exc)) from exc


@dataclass(frozen=True)
class JulianDay:
    """
    Julian Day number tagged with its time scale.

    UT and TT values are never interchangeable without a Delta T correction.
    """

    value: float
    scale: TimeScale

    def __float__(self) -> float:
        return self.value

    def to_tt(self, delta_t: float) -> "JulianDay":
        """
        Apply a Delta T correction (seconds) to a UT Julian Day.

        Raises:
            InvalidInputError: If this Julian Day is already TT.
        """
        if self.scale is not TimeScale.UT:
            raise InvalidInputError("scale", self.scale.value, "Delta T applies to UT only")
        return JulianDay(self.value + delta_t / SECONDS_PER_DAY, TimeScale.TT)


def julian_day_ut(instant: Instant) -> JulianDay:
    """
    Convert a calendar instant to a Julian Day in Universal Time.

    Args:
        instant: UTC instant (AD or BCE)

    Returns:
        JulianDay: days since JD 0.0 (noon Jan 1, 4713 BC Julian), UT scale

    Note:
        Proleptic Gregorian throughout; there is no Julian calendar branch.
        Floor (not truncation) keeps the formula valid for negative years.
        JD 2451545.0 = 2000-01-01 12:00.
    """
    year = instant.astronomical_year
    month = instant.month
    if month <= 2:
        year -= 1
        month += 12

    a = math.floor(year / 100)
    b = 2 - a + math.floor(a / 4)

    jd = (
        math.floor(365.25 * (year + 4716))
        + math.floor(30.6001 * (month + 1))
        + instant.day
        + instant.hour_fraction / 24.0
        + b
        - 1524.5
    )
    return JulianDay(jd, TimeScale.UT)


def delta_t_seconds(year: float) -> float:
    """
    Empirical Delta T (TT - UT) in seconds for a given year.

    Year-banded polynomial fits; outside 1620-2050 a constant is returned.
    Only the 1972-2050 bands are well fitted: callers must tolerate errors of
    several seconds elsewhere.
    """
    if 1972 <= year <= 2000:
        t = year - 2000
        return (
            63.86
            + 0.3345 * t
            - 0.060374 * t**2
            + 0.0017275 * t**3
            + 0.000651814 * t**4
            + 0.00002373599 * t**5
        )
    if 1620 <= year < 1972:
        t = (year - 2000) / 100.0
        return 102.3 + 123.5 * t + 32.5 * t**2
    if 2000 < year <= 2050:
        t = year - 2000
        return 64.0 + 0.8 * t
    return DELTA_T_FALLBACK


def julian_day_tt(instant: Instant) -> JulianDay:
    """Julian Day in Terrestrial Time: JD(UT) + Delta T / 86400."""
    return julian_day_ut(instant).to_tt(delta_t_seconds(instant.astronomical_year))


def centuries_since_j2000(jd: Union[JulianDay, float]) -> float:
    """
    Julian centuries elapsed since J2000.0.

    The scale tag is not checked: pass the JD the downstream formula expects.
    """
    return (float(jd) - J2000) / DAYS_PER_CENTURY


# =============================================================================
# PARSING
# =============================================================================

_AD_DATE_RE = re.compile(r"^\s*(\d{4})-(\d{1,2})-(\d{1,2})\s*$")
_BCE_DATE_RE = re.compile(
    r"^\s*bc\s+(\d{1,4})-([A-Za-z]{3})-(\d{1,2})(?:\s+(\d{1,2}):(\d{2}))?\s*$",
    re.IGNORECASE,
)
_TIME_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})(?::(\d{2}(?:\.\d+)?))?\s*$")


def month_from_abbreviation(text: str) -> int:
    """'Mar' -> 3 (case-insensitive)."""
    for index, name in enumerate(MONTH_ABBREVIATIONS):
        if name.lower() == text.lower():
            return index + 1
    raise InvalidInputError("month", text, "unknown month abbreviation")


def _match_date(text: str):
    if not isinstance(text, str):
        raise InvalidInputError("date", text, "must be a string")
    match = _AD_DATE_RE.match(text)
    if match:
        year, month, day = (int(g) for g in match.groups())
        return Era.AD, year, month, day, None
    match = _BCE_DATE_RE.match(text)
    if match:
        year = int(match.group(1))
        month = month_from_abbreviation(match.group(2))
        day = int(match.group(3))
        clock = None
        if match.group(4) is not None:
            clock = (int(match.group(4)), int(match.group(5)), 0.0)
        return Era.BCE, year, month, day, clock
    raise InvalidInputError("date", text, "expected YYYY-MM-DD or 'bc YYYY-Mon-DD'")


def parse_date(text: str) -> Tuple[Era, int, int, int]:
    """
    Parse a civil date.

    Accepts ``YYYY-MM-DD`` (AD) or the BCE literal ``bc YYYY-Mon-DD``.

    Returns:
        (era, year, month, day) with the era year (44 for 44 BC)

    Raises:
        InvalidInputError: field "date" (or "month" for an unknown
            abbreviation)
    """
    era, year, month, day, clock = _match_date(text)
    if clock is not None:
        raise InvalidInputError("date", text, "unexpected time component")
    return era, year, month, day


def parse_time(text: str) -> Tuple[int, int, float]:
    """Parse ``HH:MM`` or ``HH:MM:SS`` into (hour, minute, second)."""
    if not isinstance(text, str):
        raise InvalidInputError("time", text, "must be a string")
    match = _TIME_RE.match(text)
    if not match:
        raise InvalidInputError("time", text, "expected HH:MM or HH:MM:SS")
    second = float(match.group(3)) if match.group(3) else 0.0
    return int(match.group(1)), int(match.group(2)), second


def parse_instant(date_text: str, time_text: Optional[str] = None) -> Instant:
    """
    Parse civil date and time strings into an Instant.

    The BCE literal may carry its own ``HH:MM`` (``bc 0044-Mar-15 12:00``);
    it is used when ``time_text`` is not given. Otherwise time defaults to
    midnight.
    """
    era, year, month, day, clock = _match_date(date_text)
    if time_text is not None:
        clock = parse_time(time_text)
    hour, minute, second = clock if clock is not None else (0, 0, 0.0)
    return Instant(year, month, day, hour, minute, second, era)


# =============================================================================
# CALENDAR ARITHMETIC
# =============================================================================


def add_minutes(instant: Instant, minutes: int) -> Instant:
    """
    Shift an instant by whole minutes without any calendar library.

    Carries minute -> hour -> day -> month -> year on the proleptic Gregorian
    calendar, crossing the BC/AD boundary as 1 BC -> AD 1.
    """
    total = instant.hour * 60 + instant.minute + minutes
    day_shift, minute_of_day = divmod(total, 1440)

    year = instant.astronomical_year
    month = instant.month
    day = instant.day + day_shift

    while day > days_in_month(year, month):
        day -= days_in_month(year, month)
        month += 1
        if month > 12:
            month = 1
            year += 1
    while day < 1:
        month -= 1
        if month < 1:
            month = 12
            year -= 1
        day += days_in_month(year, month)

    hour, minute = divmod(minute_of_day, 60)
    return Instant.from_astronomical(year, month, day, hour, minute, instant.second)


def local_to_utc(instant: Instant, tz_name: str) -> Instant:
    """
    Interpret ``instant`` as civil time in an IANA zone and convert to UTC.

    BCE instants are returned unchanged: no timezone database covers them
    and they are treated as UT.

    Raises:
        InvalidInputError: field "timezone" for an unknown zone name
    """
    if instant.is_bce:
        return instant
    try:
        zone = ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError, TypeError) as exc:
        raise InvalidInputError("timezone", tz_name, "unknown timezone") from exc
    local = instant.to_datetime().replace(tzinfo=zone)
    return Instant.from_datetime(local)
