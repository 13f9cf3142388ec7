"""
Astrological house system calculations for libhoroscope.

Implements 4 house systems:
- Placidus (P): Default. Approximated, see below
- Equal (E): Equal 30° divisions from the Ascendant
- Whole Sign (W): Whole zodiac signs from the Ascendant's sign
- Koch (K): Approximated, see below

Each system is a strategy function registered in _HOUSE_STRATEGIES under its
HouseSystem tag, so one system can be replaced (e.g. by an exact
trigonometric Placidus) without touching the others.

Approximations:
FIXME: Precision - Placidus and Koch are geometric approximations
- Placidus: cusps 2/3 split the Asc->MC arc and cusps 11/12 the MC->Asc arc
  into thirds of ecliptic longitude, instead of trisecting semi-arcs in time
- Koch: the Asc->MC arc is trisected in longitude directly, instead of the
  birthplace (GOH) construction
- Neither reproduces true Placidus/Koch cusps, and the error grows with
  latitude. Both stay defined at polar latitudes, unlike the exact systems.

Invariants (all systems):
- cusp[4] = cusp[10] + 180, cusp[7] = cusp[1] + 180
- cusps 5, 6, 8, 9 are the antipodes of 11, 12, 2, 3
- Placidus and Koch: cusp[1] = Ascendant, cusp[10] = Midheaven

Main Functions:
- house_cusps(): Cusps from a precomputed Ascendant and Midheaven
- resolve_house_system(): Map a user selector onto a HouseSystem
- house_name(): Display name of a house system
"""

import logging
import math
from collections.abc import Mapping
from enum import Enum
from typing import Callable, Dict, Iterator, List, Sequence, Union

from .constants import HOUSE_SYSTEM_CODES, HOUSE_SYSTEM_NAMES, SIGN_WIDTH
from .utils import arc, check_finite, norm360

logger = logging.getLogger(__name__)


class HouseSystem(Enum):
    """Supported house division methods."""

    PLACIDUS = "placidus"
    EQUAL = "equal"
    WHOLE_SIGN = "whole-sign"
    KOCH = "koch"


DEFAULT_HOUSE_SYSTEM = HouseSystem.PLACIDUS


class HouseCusps(Mapping):
    """
    Read-only mapping of house number (1..12) to cusp longitude in [0, 360).
    """

    __slots__ = ("_cusps",)

    def __init__(self, cusps: Sequence[float]):
        if len(cusps) != 12:
            raise ValueError(f"Expected 12 cusps, got {len(cusps)}")
        self._cusps = tuple(norm360(c) for c in cusps)

    def __getitem__(self, house: int) -> float:
        if isinstance(house, bool) or not isinstance(house, int) or not 1 <= house <= 12:
            raise KeyError(house)
        return self._cusps[house - 1]

    def __iter__(self) -> Iterator[int]:
        return iter(range(1, 13))

    def __len__(self) -> int:
        return 12

    def __eq__(self, other) -> bool:
        if isinstance(other, HouseCusps):
            return self._cusps == other._cusps
        return super().__eq__(other)

    def __hash__(self) -> int:
        return hash(self._cusps)

    def __repr__(self) -> str:
        inner = ", ".join(f"{h}: {c:.6f}" for h, c in self.items())
        return f"HouseCusps({{{inner}}})"

    def as_tuple(self) -> tuple:
        """Cusps of houses 1-12 in order (pyswisseph layout)."""
        return self._cusps


def _fill_antipodes(cusps: List[float]) -> List[float]:
    # cusps is 1-indexed with cusps[0] unused
    cusps[4] = norm360(cusps[10] + 180.0)
    cusps[7] = norm360(cusps[1] + 180.0)
    cusps[5] = norm360(cusps[11] + 180.0)
    cusps[6] = norm360(cusps[12] + 180.0)
    cusps[8] = norm360(cusps[2] + 180.0)
    cusps[9] = norm360(cusps[3] + 180.0)
    return cusps


def _houses_placidus(asc: float, mc: float) -> List[float]:
    """
    Placidus approximation: thirds of the Asc->MC and MC->Asc arcs.
    """
    cusps = [0.0] * 13
    cusps[1] = asc
    cusps[10] = mc

    asc_to_mc = arc(asc, mc)
    for house in (2, 3):
        cusps[house] = norm360(asc + (house - 1) / 3.0 * asc_to_mc)

    mc_to_asc = arc(mc, asc)
    for house in (11, 12):
        cusps[house] = norm360(mc + (house - 10) / 3.0 * mc_to_asc)

    return _fill_antipodes(cusps)


def _houses_koch(asc: float, mc: float) -> List[float]:
    """
    Koch approximation: one third of the Asc->MC arc stepped from both angles.
    """
    cusps = [0.0] * 13
    cusps[1] = asc
    cusps[10] = mc

    step = arc(asc, mc) / 3.0
    cusps[2] = norm360(asc + step)
    cusps[3] = norm360(asc + 2 * step)
    cusps[11] = norm360(mc + step)
    cusps[12] = norm360(mc + 2 * step)

    return _fill_antipodes(cusps)


def _houses_equal(asc: float, mc: float) -> List[float]:
    """Equal houses: 30° steps from the Ascendant. MC is ignored."""
    cusps = [0.0] * 13
    for i in range(1, 13):
        cusps[i] = norm360(asc + (i - 1) * 30.0)
    return cusps


def _houses_whole_sign(asc: float, mc: float) -> List[float]:
    """Whole Sign houses: house 1 is the sign holding the Ascendant. MC is ignored."""
    start = math.floor(norm360(asc) / SIGN_WIDTH) * SIGN_WIDTH
    cusps = [0.0] * 13
    for i in range(1, 13):
        cusps[i] = norm360(start + (i - 1) * 30.0)
    return cusps


_HOUSE_STRATEGIES: Dict[HouseSystem, Callable[[float, float], List[float]]] = {
    HouseSystem.PLACIDUS: _houses_placidus,
    HouseSystem.EQUAL: _houses_equal,
    HouseSystem.WHOLE_SIGN: _houses_whole_sign,
    HouseSystem.KOCH: _houses_koch,
}


def resolve_house_system(selector: Union[HouseSystem, str, bytes, int, None]) -> HouseSystem:
    """
    Map a house system selector onto a HouseSystem.

    Accepts a HouseSystem, a name ("placidus", "equal", "whole-sign",
    "whole sign", "koch"; case-insensitive), a Swiss Ephemeris style letter
    (b"P", "W", ord("K"), ...) or None for the default.

    Unknown selectors fall back to Placidus with a warning instead of raising
    UnsupportedHouseSystemError.
    """
    if selector is None:
        return DEFAULT_HOUSE_SYSTEM
    if isinstance(selector, HouseSystem):
        return selector

    key = selector
    if isinstance(key, int) and 0 <= key < 0x110000:
        key = chr(key)
    elif isinstance(key, bytes):
        key = key.decode("utf-8", errors="replace")

    if isinstance(key, str):
        text = key.strip()
        if text.upper() in HOUSE_SYSTEM_CODES and len(text) == 1:
            return HouseSystem(HOUSE_SYSTEM_CODES[text.upper()])
        normalized = text.lower().replace("_", "-").replace(" ", "-")
        if normalized == "wholesign":
            normalized = "whole-sign"
        if normalized in HOUSE_SYSTEM_NAMES:
            return HouseSystem(normalized)

    # TODO: make this strict (UnsupportedHouseSystemError) once callers stop relying on the fallback
    logger.warning("Unknown house system %r, falling back to Placidus", selector)
    return DEFAULT_HOUSE_SYSTEM


def house_cusps(
    asc: float, mc: float, system: Union[HouseSystem, str, None] = None
) -> HouseCusps:
    """
    Compute the twelve house cusps.

    Args:
        asc: Ascendant longitude in degrees
        mc: Midheaven longitude in degrees
        system: House system selector (see resolve_house_system)

    Returns:
        HouseCusps mapping 1..12 -> longitude
    """
    check_finite("ascendant", asc)
    check_finite("midheaven", mc)
    hsys = resolve_house_system(system)
    cusps = _HOUSE_STRATEGIES[hsys](norm360(asc), norm360(mc))
    logger.debug("%s cusps for asc=%.6f mc=%.6f: %s", hsys.value, asc, mc, cusps[1:13])
    return HouseCusps(cusps[1:13])


def house_name(system: Union[HouseSystem, str, None] = None) -> str:
    """Display name of a house system ("Placidus", "Whole Sign", ...)."""
    return HOUSE_SYSTEM_NAMES[resolve_house_system(system).value]

