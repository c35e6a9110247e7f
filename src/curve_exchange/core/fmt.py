"""
Formatting helpers (non-core arithmetic).

Core arithmetic uses integers only. Decimal here is only for rendering base
units in logs, the demo script and test output.
"""

from decimal import Decimal, getcontext, ROUND_DOWN

from .exc import ValueOutOfRange
from .constants import TOKEN_DECIMALS, TOKEN_SCALE, NATIVE_SCALE


# ---------------------------------------------------------------------------
# Global Decimal precision (formatting only)
# ---------------------------------------------------------------------------

#: Enough significant digits to render any u256 value exactly.
DEFAULT_DECIMAL_PRECISION: int = 96
getcontext().prec = DEFAULT_DECIMAL_PRECISION


def units_to_decimal(units: int, scale: int = TOKEN_SCALE) -> Decimal:
    """Convert integer base units into a Decimal of whole units (display only)."""
    if units < 0:
        raise ValueOutOfRange("negative amount not allowed for display")
    return Decimal(units) / Decimal(scale)


def fmt_units(units: int, scale: int = TOKEN_SCALE, places: int = TOKEN_DECIMALS) -> str:
    """Render base units as a fixed-point string, truncated to `places`.

    fmt_units(1_500_000_000_000_000_000) -> '1.500000000000000000'
    """
    d = units_to_decimal(units, scale)
    q = Decimal(1).scaleb(-places)
    return str(d.quantize(q, rounding=ROUND_DOWN))


def fmt_tokens(units: int, places: int = 6) -> str:
    return fmt_units(units, TOKEN_SCALE, places)


def fmt_native(units: int, places: int = 6) -> str:
    return fmt_units(units, NATIVE_SCALE, places)


def parse_units(text: str, scale: int = TOKEN_SCALE) -> int:
    """Parse a decimal string of whole units into integer base units (floor)."""
    d = Decimal(text)
    if d.is_nan() or d.is_infinite() or d < 0:
        raise ValueOutOfRange(f"invalid amount: {text!r}")
    return int((d * scale).to_integral_value(rounding=ROUND_DOWN))


__all__ = [
    "DEFAULT_DECIMAL_PRECISION",
    "units_to_decimal",
    "fmt_units",
    "fmt_tokens",
    "fmt_native",
    "parse_units",
]
