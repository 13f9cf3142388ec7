"""
Utility functions for libhoroscope.

Angle normalization and the small numerical guards shared by every
calculation module.
"""

import math

from .exceptions import InvalidInputError


def check_finite(field: str, value) -> float:
    """
    Reject non-numeric, boolean, NaN and infinite inputs.

    Raises:
        InvalidInputError: naming ``field``
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidInputError(field, value, "must be a number")
    if not math.isfinite(value):
        raise InvalidInputError(field, value, "must be finite")
    return value


def norm360(deg: float) -> float:
    """
    Normalize an angle to [0, 360).

    Python's float modulo can return exactly 360.0 for tiny negative inputs
    (e.g. -1e-20 % 360.0); that case is folded back to 0.0.

    Examples:
        >>> norm360(-30.0)
        330.0
        >>> norm360(720.0)
        0.0
    """
    result = deg % 360.0
    if result >= 360.0:
        result = 0.0
    return result


def clamp_unit(x: float) -> float:
    """Clamp to [-1, 1] before asin/acos so rounding drift cannot yield NaN."""
    return max(-1.0, min(1.0, x))


def difdeg2n(p1: float, p2: float) -> float:
    """
    Calculate distance in degrees p1 - p2 normalized to [-180;180].

    Computes the signed angular difference, handling 360° wrapping.

    Examples:
        >>> difdeg2n(10, 20)
        -10.0
        >>> difdeg2n(350, 10)
        -20.0
        >>> difdeg2n(10, 350)
        20.0
        >>> difdeg2n(180, 0)
        180.0
    """
    diff = (p1 - p2) % 360.0
    if diff > 180.0:
        diff -= 360.0
    return diff


def arc(start: float, end: float) -> float:
    """Forward (counter-clockwise) arc from ``start`` to ``end`` in [0, 360)."""
    return norm360(end - start)
