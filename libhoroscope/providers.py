"""
Ephemeris providers for libhoroscope.

The calculation core never computes planetary motion: it consumes apparent
right ascension/declination observations delivered by a provider.

Providers:
- HorizonsProvider: remote JPL HORIZONS observer tables over HTTP (httpx)
- SkyfieldProvider: local JPL DE4xx kernel through Skyfield

BCE dates:
HORIZONS accepts proleptic BC dates only as a literal ``bc YYYY-Mon-DD HH:MM``.
The literal is produced here, at the boundary, from an Instant; the stop time
(start + 1 minute) is computed with add_minutes(), never with datetime.

References:
- https://ssd-api.jpl.nasa.gov/doc/horizons.html
"""

import logging
import re
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import List, Optional, Protocol, Tuple

import httpx
from skyfield.errors import EphemerisRangeError

from .constants import HORIZONS_IDS, MONTH_ABBREVIATIONS, SKYFIELD_TARGETS
from .coordinates import EquatorialCoordinate
from .exceptions import EphemerisProviderError
from .state import get_horizons_timeout, get_horizons_url, get_planets, get_timescale
from .time_utils import Instant, add_minutes

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Observation:
    """Apparent equatorial position of a body at a UTC instant."""

    body: str
    equatorial: EquatorialCoordinate
    instant: Instant

    @classmethod
    def from_degrees(cls, body: str, ra: float, dec: float, instant: Instant) -> "Observation":
        return cls(body, EquatorialCoordinate(ra, dec), instant)


class EphemerisProvider(Protocol):
    """Anything that can report apparent RA/Dec of a named body."""

    def observe(self, body: str, instant: Instant) -> Observation:
        ...


# =============================================================================
# HORIZONS TIME STRINGS
# =============================================================================


def _format_ad(dt: datetime) -> str:
    # strftime does not zero-pad years below 1000 on every platform
    return (
        f"{dt.year:04d}-{dt.month:02d}-{dt.day:02d} "
        f"{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d}"
    )


def _format_ad_month_name(dt: datetime) -> str:
    return (
        f"{dt.year:04d}-{MONTH_ABBREVIATIONS[dt.month - 1]}-{dt.day:02d} "
        f"{dt.hour:02d}:{dt.minute:02d}"
    )


def format_horizons_bce(instant: Instant) -> str:
    """
    HORIZONS literal for a BCE instant: ``bc 0044-Mar-15 12:00``.

    Seconds are dropped.
    """
    return (
        f"bc {instant.year:04d}-{MONTH_ABBREVIATIONS[instant.month - 1]}-{instant.day:02d} "
        f"{instant.hour:02d}:{instant.minute:02d}"
    )


def horizons_time_window(instant: Instant) -> Tuple[str, str]:
    """
    START_TIME/STOP_TIME strings for a one-minute HORIZONS request.

    AD instants use ``YYYY-MM-DD HH:MM:SS``; BCE instants use the
    ``bc YYYY-Mon-DD HH:MM`` literal with a manually carried stop minute.
    """
    if instant.is_bce:
        stop = add_minutes(instant, 1)
        if stop.is_bce:
            return format_horizons_bce(instant), format_horizons_bce(stop)
        # 1 BC Dec 31 23:59 rolls into AD 1
        return format_horizons_bce(instant), _format_ad(stop.to_datetime())
    start = instant.to_datetime().replace(microsecond=0)
    return _format_ad(start), _format_ad(start + timedelta(minutes=1))


def horizons_fallback_window(instant: Instant) -> Tuple[str, str]:
    """
    Alternate ``YYYY-Mon-DD HH:MM`` window for AD dates HORIZONS rejected.
    """
    start = instant.to_datetime().replace(second=0, microsecond=0)
    return _format_ad_month_name(start), _format_ad_month_name(start + timedelta(minutes=1))


_SOE_BLOCK_RE = re.compile(r"\$\$SOE(.*?)\$\$EOE", re.DOTALL)


def parse_horizons_rows(result: str) -> List[Tuple[str, float, float]]:
    """
    Extract (date, apparent RA, apparent Dec) rows from a HORIZONS CSV table.

    With QUANTITIES='1,2' the columns are: date, solar flag, lunar flag,
    RA (ICRF), Dec (ICRF), RA (apparent), Dec (apparent).

    Raises:
        EphemerisProviderError: If the data block is missing or malformed
    """
    block = _SOE_BLOCK_RE.search(result)
    if not block:
        raise EphemerisProviderError("No data section in HORIZONS response")

    rows = []
    for line in block.group(1).strip().splitlines():
        if not line.strip():
            continue
        cols = [c.strip() for c in line.split(",")]
        if len(cols) < 7:
            raise EphemerisProviderError(f"Malformed HORIZONS row: {line!r}")
        try:
            rows.append((cols[0], float(cols[5]), float(cols[6])))
        except ValueError as exc:
            raise EphemerisProviderError(f"Malformed HORIZONS row: {line!r}") from exc
    if not rows:
        raise EphemerisProviderError("Empty data section in HORIZONS response")
    return rows


# =============================================================================
# PROVIDERS
# =============================================================================


class HorizonsProvider:
    """
    Apparent geocentric RA/Dec from the JPL HORIZONS API.

    Args:
        client: httpx.Client to use; one is created (and owned) if omitted
        url: API endpoint; defaults to the configured HORIZONS URL

    Note:
        A client created here stays open until close() is called; use the
        provider as a context manager. An injected client is never closed.

    Example:
        >>> with HorizonsProvider() as provider:
        ...     positions = fetch_body_positions(provider, Instant(1984, 8, 18, 12, 3))
    """

    def __init__(self, client: Optional[httpx.Client] = None, url: Optional[str] = None):
        self._client = client
        self._owns_client = client is None
        self._url = url

    def __enter__(self) -> "HorizonsProvider":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client and self._client is not None:
            self._client.close()
            self._client = None

    def _get_client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(timeout=get_horizons_timeout())
        return self._client

    def _query(self, command: str, start: str, stop: str) -> str:
        params = {
            "format": "json",
            "COMMAND": f"'{command}'",
            "OBJ_DATA": "'NO'",
            "MAKE_EPHEM": "'YES'",
            "EPHEM_TYPE": "'OBSERVER'",
            "CENTER": "'500@399'",
            "START_TIME": f"'{start}'",
            "STOP_TIME": f"'{stop}'",
            "STEP_SIZE": "'1 m'",
            "QUANTITIES": "'1,2'",
            "ANG_FORMAT": "'DEG'",
            "CSV_FORMAT": "'YES'",
        }
        url = self._url or get_horizons_url()
        logger.info("HORIZONS request COMMAND=%s START=%s STOP=%s", command, start, stop)
        try:
            response = self._get_client().get(url, params=params)
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise EphemerisProviderError(f"HORIZONS request failed for {command}: {exc}") from exc

        result = payload.get("result") if isinstance(payload, dict) else None
        if not isinstance(result, str):
            raise EphemerisProviderError(f"HORIZONS response for {command} has no result")
        return result

    def observe(self, body: str, instant: Instant) -> Observation:
        """
        Apparent RA/Dec of ``body`` at ``instant``.

        Raises:
            EphemerisProviderError: Unknown body, HTTP failure or unparseable table
        """
        command = HORIZONS_IDS.get(body)
        if command is None:
            raise EphemerisProviderError(f"Unknown body for HORIZONS: {body}")

        start, stop = horizons_time_window(instant)
        result = self._query(command, start, stop)

        if "Cannot interpret date" in result and not instant.is_bce:
            start, stop = horizons_fallback_window(instant)
            logger.warning("HORIZONS rejected date for %s, retrying as %s", body, start)
            result = self._query(command, start, stop)

        _, ra, dec = parse_horizons_rows(result)[0]
        return Observation.from_degrees(body, ra, dec, instant)


class SkyfieldProvider:
    """
    Apparent geocentric RA/Dec of date from the configured JPL kernel.

    Note:
        DE421 covers 1900-2050; use set_ephemeris_file() for wider ranges.
        Outer planets are system barycenters (< 0.01" difference).
    """

    def observe(self, body: str, instant: Instant) -> Observation:
        target_name = SKYFIELD_TARGETS.get(body)
        if target_name is None:
            raise EphemerisProviderError(f"Unknown body for Skyfield: {body}")

        ts = get_timescale()
        planets = get_planets()
        t = ts.utc(
            instant.astronomical_year,
            instant.month,
            instant.day,
            instant.hour,
            instant.minute,
            instant.second,
        )
        try:
            astrometric = planets["earth"].at(t).observe(planets[target_name])
        except EphemerisRangeError as exc:
            raise EphemerisProviderError(f"{body} outside ephemeris range: {exc}") from exc

        ra, dec, _ = astrometric.apparent().radec(epoch="date")
        return Observation.from_degrees(body, ra.hours * 15.0, dec.degrees, instant)
