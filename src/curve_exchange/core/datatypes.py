"""
Core datatypes returned by the order engine.

Kept minimal and immutable so quotes and results can be compared directly
in tests. Amounts are integer base units throughout.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Side(str, Enum):
    BUY = "buy"
    SELL = "sell"


class FillKind(str, Enum):
    FULL = "full"
    PARTIAL = "partial"


# ---------------------------------------------------------------------------
# Quote
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Quote:
    """Preview of an order against the current pool and rate.

    Fields:
    - side: BUY or SELL.
    - fill: FULL when the pool covers the request, else PARTIAL.
    - amount_in: what the caller actually gives up (native for buys, tokens for sells).
    - amount_out: what the caller receives.
    - unfilled: native refunded (buy) or tokens left with the caller (sell).
    - rate: the rate the order is priced at.
    """

    side: Side
    fill: FillKind
    amount_in: int
    amount_out: int
    unfilled: int
    rate: int

    @property
    def is_partial(self) -> bool:
        return self.fill is FillKind.PARTIAL


# ---------------------------------------------------------------------------
# Order result
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class OrderResult:
    """Outcome of a committed buy or sell.

    `quote` holds the executed amounts; the remaining fields describe the
    scheduler effects of the same operation.
    """

    quote: Quote
    transaction_count: int
    new_rate: int
    minted: int = 0

    @property
    def side(self) -> Side:
        return self.quote.side

    @property
    def is_partial(self) -> bool:
        return self.quote.is_partial


__all__ = [
    "Side",
    "FillKind",
    "Quote",
    "OrderResult",
]
