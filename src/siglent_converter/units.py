"""
Unit and magnitude lookup tables for Siglent "data with unit" fields.

Codes come straight from the oscilloscope firmware, so every lookup falls back
to a neutral value instead of failing on a code it does not know.
"""

from typing import Tuple

# ==================== Lookup Tables ====================

# Index 8 is the plain unit (no prefix)
MAGNITUDE_PREFIXES: Tuple[str, ...] = (
    "y", "z", "a", "f", "p", "n", "u", "m", "", "k", "M", "G", "T", "P",
)

UNIT_DIVIDERS: Tuple[float, ...] = (
    1.0e24, 1.0e21, 1.0e18, 1.0e15, 1.0e12, 1.0e9, 1.0e6, 1.0e3,
    1.0e0, 1.0e-3, 1.0e-6, 1.0e-9, 1.0e-12, 1.0e-15,
)

UNIT_NAMES: Tuple[str, ...] = (
    "V", "A", "VV", "AA", "OU", "W", "SQRT_V", "SQRT_A",
    "INTEGRAL_V", "INTEGRAL_A", "DT_V", "DT_A", "DT_DIV",
    "Hz", "s", "PTS", "NULL", "dB", "dBV", "dBA", "VPP", "VDC", "dBM",
)

NO_PREFIX = MAGNITUDE_PREFIXES.index("")


def magnitude_prefix(code: int) -> str:
    """Return the SI prefix for a magnitude code, or "" if unknown."""
    if 0 <= code < len(MAGNITUDE_PREFIXES):
        return MAGNITUDE_PREFIXES[code]
    return ""


def unit_name(code: int) -> str:
    """Return the instrument unit label for a unit code, or "" if unknown."""
    if 0 <= code < len(UNIT_NAMES):
        return UNIT_NAMES[code]
    return ""


def unit_divider(code: int) -> float:
    """
    Return the divider that brings a value with this magnitude to base units.

    A milli-volt reading (code 7) is divided by 1e3, a kilo reading by 1e-3.
    Unknown codes leave the value untouched.
    """
    if 0 <= code < len(UNIT_DIVIDERS):
        return UNIT_DIVIDERS[code]
    return 1.0
