"""
Global state management for libhoroscope.

This module maintains the library's configuration and lazily loaded
ephemeris resources:
- Ephemeris data loader (Skyfield Loader)
- Planetary ephemeris (DE421 or other JPL files)
- Timescale (for UTC/TT conversions)
- JPL HORIZONS endpoint and HTTP timeout
- Default house system

Initial values are read from the environment:
- LIBHOROSCOPE_EPHE_PATH: directory searched for the ephemeris file
- LIBHOROSCOPE_EPHE_FILE: ephemeris file name (default: de421.bsp)
- LIBHOROSCOPE_HORIZONS_URL: HORIZONS API endpoint
- LIBHOROSCOPE_HORIZONS_TIMEOUT: HTTP timeout in seconds (ignored with a
  warning unless a positive number)
- LIBHOROSCOPE_HOUSE_SYSTEM: default house system selector

The calculation core never reads this state; only providers and the chart
entry points do.
"""

import logging
import math
import os
from typing import Optional, Union

from skyfield.api import Loader
from skyfield.jpllib import SpiceKernel
from skyfield.timelib import Timescale

from .constants import HORIZONS_TIMEOUT, HORIZONS_URL
from .exceptions import InvalidInputError
from .houses import HouseSystem, resolve_house_system
from .utils import check_finite

logger = logging.getLogger(__name__)

# =============================================================================
# GLOBAL STATE VARIABLES
# =============================================================================

_EPHEMERIS_PATH: Optional[str] = None  # Custom ephemeris directory
_EPHEMERIS_FILE: str = "de421.bsp"  # Ephemeris file to use (default: DE421)
_LOADER: Optional[Loader] = None  # Skyfield data loader
_PLANETS: Optional[SpiceKernel] = None  # Loaded planetary ephemeris
_TS: Optional[Timescale] = None  # Timescale object
_HORIZONS_URL: str = HORIZONS_URL
_HORIZONS_TIMEOUT: float = HORIZONS_TIMEOUT
_HOUSE_SYSTEM: HouseSystem = HouseSystem.PLACIDUS


def _timeout_from_environment(text: Optional[str]) -> float:
    # invalid values fall back to the default with a warning
    if not text:
        return HORIZONS_TIMEOUT
    try:
        seconds = float(text)
    except ValueError:
        seconds = None
    if seconds is None or not math.isfinite(seconds) or seconds <= 0:
        logger.warning(
            "Ignoring LIBHOROSCOPE_HORIZONS_TIMEOUT=%r, using %s seconds", text, HORIZONS_TIMEOUT
        )
        return HORIZONS_TIMEOUT
    return seconds


def _load_environment() -> None:
    global _EPHEMERIS_PATH, _EPHEMERIS_FILE, _HORIZONS_URL, _HORIZONS_TIMEOUT, _HOUSE_SYSTEM
    _EPHEMERIS_PATH = os.getenv("LIBHOROSCOPE_EPHE_PATH") or None
    _EPHEMERIS_FILE = os.getenv("LIBHOROSCOPE_EPHE_FILE") or "de421.bsp"
    _HORIZONS_URL = os.getenv("LIBHOROSCOPE_HORIZONS_URL") or HORIZONS_URL
    _HORIZONS_TIMEOUT = _timeout_from_environment(os.getenv("LIBHOROSCOPE_HORIZONS_TIMEOUT"))
    _HOUSE_SYSTEM = resolve_house_system(os.getenv("LIBHOROSCOPE_HOUSE_SYSTEM"))


def get_loader() -> Loader:
    """
    Get or create the Skyfield data loader.

    Returns:
        Loader: Skyfield Loader instance for downloading/caching ephemeris files

    Note:
        Data files are cached in the configured ephemeris path, or in the
        parent directory of this module by default.
    """
    global _LOADER
    if _LOADER is None:
        data_dir = _EPHEMERIS_PATH or os.path.join(os.path.dirname(__file__), "..")
        _LOADER = Loader(data_dir)
    return _LOADER


def get_timescale() -> Timescale:
    """
    Get or create the Skyfield timescale object.

    Note:
        Uses Skyfield's builtin leap second and Delta T tables, so no network
        access is needed.
    """
    global _TS
    if _TS is None:
        _TS = get_loader().timescale(builtin=True)
    return _TS


def get_planets() -> SpiceKernel:
    """
    Get or load the planetary ephemeris (DE421 by default).

    Raises:
        FileNotFoundError: If ephemeris file cannot be found or downloaded

    Note:
        Searches the configured ephemeris path first, then the workspace
        root, then downloads.
    """
    global _PLANETS
    if _PLANETS is None:
        load = get_loader()

        if _EPHEMERIS_PATH:
            bsp_path = os.path.join(_EPHEMERIS_PATH, _EPHEMERIS_FILE)
            if os.path.exists(bsp_path):
                _PLANETS = load(bsp_path)
                return _PLANETS

        base_dir = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
        bsp_path = os.path.join(base_dir, _EPHEMERIS_FILE)
        if os.path.exists(bsp_path):
            _PLANETS = load(bsp_path)
        else:
            _PLANETS = load(_EPHEMERIS_FILE)
    return _PLANETS


def set_ephe_path(path: Optional[str]) -> None:
    """
    Set the directory for ephemeris files.

    Clears the cached loader and kernel so the next get_planets() call
    reloads from the new location.
    """
    global _EPHEMERIS_PATH, _LOADER, _PLANETS
    _EPHEMERIS_PATH = path
    _LOADER = None
    _PLANETS = None


def get_ephe_path() -> Optional[str]:
    return _EPHEMERIS_PATH


def set_ephemeris_file(filename: str) -> None:
    """
    Set the JPL ephemeris file to use (e.g. "de421.bsp", "de440s.bsp").

    Note:
        - de421.bsp: 1900-2050 (default, 16 MB)
        - de422.bsp: -3000-3000 (623 MB)
        - de440s.bsp: 1849-2150 (32 MB)

        Changing the file clears the cached kernel.
    """
    global _EPHEMERIS_FILE, _PLANETS
    _EPHEMERIS_FILE = filename
    _PLANETS = None


def get_ephemeris_file() -> str:
    return _EPHEMERIS_FILE


def set_horizons_url(url: str) -> None:
    """Set the JPL HORIZONS API endpoint."""
    global _HORIZONS_URL
    _HORIZONS_URL = url


def get_horizons_url() -> str:
    return _HORIZONS_URL


def set_horizons_timeout(seconds: float) -> None:
    """
    Set the HTTP timeout for HORIZONS requests.

    Raises:
        InvalidInputError: If ``seconds`` is not a positive finite number
    """
    global _HORIZONS_TIMEOUT
    check_finite("timeout", seconds)
    if seconds <= 0:
        raise InvalidInputError("timeout", seconds, "must be positive")
    _HORIZONS_TIMEOUT = float(seconds)


def get_horizons_timeout() -> float:
    return _HORIZONS_TIMEOUT


def set_default_house_system(system: Union[HouseSystem, str, None]) -> None:
    """Set the house system used when a chart request names none."""
    global _HOUSE_SYSTEM
    _HOUSE_SYSTEM = resolve_house_system(system)


def get_default_house_system() -> HouseSystem:
    return _HOUSE_SYSTEM


def reset_state() -> None:
    """
    Restore configuration from the environment and drop cached resources.

    Use this between unrelated calculation contexts (and in tests).
    """
    global _LOADER, _PLANETS, _TS
    _LOADER = None
    _PLANETS = None
    _TS = None
    _load_environment()


_load_environment()
