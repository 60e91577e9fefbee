# errors.py
from __future__ import annotations


class EnigmaError(ValueError):
    """Base class for every configuration or usage mistake the machine reports."""


class DuplicateError(EnigmaError):
    pass


class RangeError(EnigmaError, IndexError):
    pass


class NotFoundError(EnigmaError, LookupError):
    pass


class CycleSyntaxError(EnigmaError):
    """Malformed cycle notation, e.g. ``"(A"`` or ``"()"``."""


class ConfigError(EnigmaError):
    pass


class RotorLookupError(EnigmaError, LookupError):
    """A rotor name that does not resolve to exactly one catalog entry."""


__all__ = [
    "EnigmaError",
    "DuplicateError",
    "RangeError",
    "NotFoundError",
    "CycleSyntaxError",
    "ConfigError",
    "RotorLookupError",
]
