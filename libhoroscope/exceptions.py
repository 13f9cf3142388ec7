"""
Exception hierarchy for libhoroscope.
"""

from typing import Any


class LibHoroscopeError(Exception):
    """Base class for all libhoroscope errors."""


class InvalidInputError(LibHoroscopeError, ValueError):
    """
    Raised when a caller-supplied value fails validation.

    Attributes:
        field: Name of the offending input (e.g. "month", "latitude")
        value: The rejected value
    """

    def __init__(self, field: str, value: Any, reason: str = "out of range"):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {field}: {value!r} ({reason})")


class UnsupportedHouseSystemError(LibHoroscopeError, ValueError):
    """
    Reserved for strict house system selection.

    Never raised: unknown selectors fall back to Placidus.
    """


class EphemerisProviderError(LibHoroscopeError):
    """Raised when an ephemeris provider cannot deliver an observation."""
