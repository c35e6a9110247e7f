"""
Checked u256 arithmetic and native/token conversions at a given rate.

- All values are Python ints confined to the unsigned 256-bit envelope.
- Products are formed as a u256 machine would (wrapped modulo 2**256) and
  verified by back-division; a mismatch is an overflow, never a silent wrap.
- Conversions round down (floor) in both directions, so converting back and
  forth never creates value: tokens_for(native_for(T, r), r) <= T.
"""

from __future__ import annotations

import logging

from .constants import U256_MAX, TOKEN_SCALE
from .exc import (
    AmountTooSmall,
    CounterOverflow,
    MultiplicationOverflow,
    RateInvalid,
    RateOverflow,
    ValueOutOfRange,
)

logger = logging.getLogger(__name__)

_WORD = U256_MAX + 1


# ----------------------------
# u256 envelope
# ----------------------------

def require_u256(value: int, what: str = "value") -> int:
    """Return `value` unchanged if it is an int within [0, U256_MAX]."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueOutOfRange(f"{what} must be an int, got {type(value).__name__}")
    if value < 0 or value > U256_MAX:
        raise ValueOutOfRange(f"{what} outside u256 range: {value}")
    return value


def wrapping_mul(a: int, b: int) -> int:
    return (a * b) % _WORD


def wrapping_add(a: int, b: int) -> int:
    return (a + b) % _WORD


def checked_mul(a: int, b: int) -> int:
    """Multiply two u256 values; raise MultiplicationOverflow if the product wraps."""
    require_u256(a, "multiplicand")
    require_u256(b, "multiplier")
    if a == 0 or b == 0:
        return 0
    product = wrapping_mul(a, b)
    if product // a != b:
        raise MultiplicationOverflow(f"{a} * {b} exceeds u256")
    return product


def checked_add(a: int, b: int, *, error: type = RateOverflow) -> int:
    """Add two u256 values; a wrapped sum is smaller than an operand."""
    require_u256(a, "augend")
    require_u256(b, "addend")
    total = wrapping_add(a, b)
    if total < a or total < b:
        raise error(f"{a} + {b} exceeds u256")
    return total


def checked_increment(counter: int) -> int:
    """Return counter + 1, or raise CounterOverflow when already at U256_MAX."""
    require_u256(counter, "counter")
    if counter == U256_MAX:
        raise CounterOverflow("transaction counter at maximum")
    return counter + 1


# ----------------------------
# Conversions
# ----------------------------

def tokens_for(native_amount: int, rate: int) -> int:
    """Token base units bought by `native_amount` at `rate`.

    floor(native_amount * 1e18 / rate). Raises RateInvalid for a zero rate,
    MultiplicationOverflow when the scaled amount leaves u256 and
    AmountTooSmall when the floored result is zero.
    """
    require_u256(native_amount, "native_amount")
    require_u256(rate, "rate")
    if rate == 0:
        raise RateInvalid("exchange rate is zero")
    scaled = checked_mul(native_amount, TOKEN_SCALE)
    tokens = scaled // rate
    if tokens == 0:
        raise AmountTooSmall(f"{native_amount} native buys no token units at rate {rate}")
    logger.debug("tokens_for native=%d rate=%d -> %d", native_amount, rate, tokens)
    return tokens


def native_for(token_amount: int, rate: int) -> int:
    """Native base units worth `token_amount` at `rate`.

    floor(token_amount * rate / 1e18), with the same failure modes as
    `tokens_for`.
    """
    require_u256(token_amount, "token_amount")
    require_u256(rate, "rate")
    if rate == 0:
        raise RateInvalid("exchange rate is zero")
    scaled = checked_mul(token_amount, rate)
    native = scaled // TOKEN_SCALE
    if native == 0:
        raise AmountTooSmall(f"{token_amount} token units are worth no native units at rate {rate}")
    logger.debug("native_for tokens=%d rate=%d -> %d", token_amount, rate, native)
    return native


__all__ = [
    "require_u256",
    "wrapping_mul",
    "wrapping_add",
    "checked_mul",
    "checked_add",
    "checked_increment",
    "tokens_for",
    "native_for",
]
