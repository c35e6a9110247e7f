"""
ExchangeState: the rate/halving/counter tuple owned by the schedulers.

The state is an immutable value. Schedulers take a state and return a new
one, so a failure half-way through an update never leaves a mixed state
behind; the engine only swaps in the new value once the whole operation
has succeeded.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict, replace
from typing import Any, Dict, Mapping

from .constants import INITIAL_EXCHANGE_RATE, INITIAL_RATE_INCREMENT, HALVING_INTERVAL
from .arithmetic import require_u256
from .exc import RateInvalid


@dataclass(frozen=True)
class ExchangeState:
    """Pricing and scheduling counters.

    Fields:
    - exchange_rate: native units per 10**18 token units (> 0, never decreases).
    - current_increment: added to the rate per completed operation; halves at each boundary.
    - transaction_count: completed operations so far.
    - next_halving_threshold: transaction_count at which the next halving fires.
    """

    exchange_rate: int
    current_increment: int
    transaction_count: int
    next_halving_threshold: int

    def __post_init__(self):
        for name in ("exchange_rate", "current_increment", "transaction_count", "next_halving_threshold"):
            require_u256(getattr(self, name), name)
        if self.exchange_rate == 0:
            raise RateInvalid("exchange_rate must be positive")

    @classmethod
    def initial(
        cls,
        exchange_rate: int = INITIAL_EXCHANGE_RATE,
        current_increment: int = INITIAL_RATE_INCREMENT,
        halving_interval: int = HALVING_INTERVAL,
    ) -> "ExchangeState":
        return cls(
            exchange_rate=exchange_rate,
            current_increment=current_increment,
            transaction_count=0,
            next_halving_threshold=halving_interval,
        )

    def evolve(self, **changes: int) -> "ExchangeState":
        return replace(self, **changes)

    def as_dict(self) -> Dict[str, int]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ExchangeState":
        return cls(
            exchange_rate=int(data["exchange_rate"]),
            current_increment=int(data["current_increment"]),
            transaction_count=int(data["transaction_count"]),
            next_halving_threshold=int(data["next_halving_threshold"]),
        )


__all__ = ["ExchangeState"]
