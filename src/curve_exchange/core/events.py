"""
Observations emitted by the engine and its schedulers.

Each observation is a small frozen record. Producers return them as lists;
the execution sandbox stages them and only publishes to an `EventLog` when
the surrounding operation commits, so a rolled-back operation leaves no
trace in the observation stream.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, asdict, field
from typing import Any, Callable, Dict, Iterable, Iterator, List, Type, TypeVar

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Observation:
    """Base record. `name` is the event name as seen by consumers."""

    @property
    def name(self) -> str:
        return type(self).__name__

    def as_dict(self) -> Dict[str, Any]:
        return {"event": self.name, **asdict(self)}


# ---------------------------------------------------------------------------
# Scheduler observations
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RateUpdated(Observation):
    old_rate: int
    new_rate: int


@dataclass(frozen=True)
class TransactionCountIncremented(Observation):
    count: int


@dataclass(frozen=True)
class HalvingOccurred(Observation):
    count_at_halving: int
    new_increment: int


@dataclass(frozen=True)
class HalvingCountdownUpdated(Observation):
    remaining: int
    increment: int


@dataclass(frozen=True)
class Minted(Observation):
    destination: str
    amount: int


@dataclass(frozen=True)
class MaxSupplyReached(Observation):
    total_supply: int


# ---------------------------------------------------------------------------
# Order observations
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Purchase(Observation):
    buyer: str
    native_spent: int
    tokens_bought: int
    rate: int


@dataclass(frozen=True)
class Sale(Observation):
    seller: str
    tokens_sold: int
    native_received: int
    rate: int


@dataclass(frozen=True)
class PartialFill(Observation):
    user: str
    fulfilled: int
    returned: int


@dataclass(frozen=True)
class PartialBuyRefunded(Observation):
    buyer: str
    refund: int


@dataclass(frozen=True)
class LiquidityChanged(Observation):
    pool_native: int
    pool_tokens: int


# ---------------------------------------------------------------------------
# Event log
# ---------------------------------------------------------------------------

O = TypeVar("O", bound=Observation)
Subscriber = Callable[[Observation], None]


@dataclass
class EventLog:
    """Ordered record of committed observations with optional subscribers."""

    history: List[Observation] = field(default_factory=list)
    _subscribers: List[Subscriber] = field(default_factory=list, repr=False)

    def subscribe(self, callback: Subscriber) -> None:
        self._subscribers.append(callback)

    def publish(self, observations: Iterable[Observation]) -> None:
        """Record every observation, then notify subscribers.

        The observations describe an operation that has already committed, so
        a failing subscriber is logged and skipped rather than propagated.
        """
        batch = list(observations)
        self.history.extend(batch)
        for obs in batch:
            logger.debug("event %s", obs)
            for callback in list(self._subscribers):
                try:
                    callback(obs)
                except Exception:
                    logger.exception("subscriber %r failed on %s", callback, obs.name)

    def of_type(self, kind: Type[O]) -> List[O]:
        return [obs for obs in self.history if isinstance(obs, kind)]

    def names(self) -> List[str]:
        return [obs.name for obs in self.history]

    def __len__(self) -> int:
        return len(self.history)

    def __iter__(self) -> Iterator[Observation]:
        return iter(self.history)


__all__ = [
    "Observation",
    "RateUpdated",
    "TransactionCountIncremented",
    "HalvingOccurred",
    "HalvingCountdownUpdated",
    "Minted",
    "MaxSupplyReached",
    "Purchase",
    "Sale",
    "PartialFill",
    "PartialBuyRefunded",
    "LiquidityChanged",
    "EventLog",
]
