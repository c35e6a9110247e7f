"""
Rate scheduler: advances the bonding-curve rate once per completed operation.

Semantics:
  - Every completed buy or sell bumps `transaction_count` by one and raises
    `exchange_rate` by the increment in force *before* this operation.
  - Once `transaction_count` reaches `next_halving_threshold`, the increment
    is floor-halved and the threshold moves up by one halving interval.
  - `advance` is pure: it returns a new ExchangeState plus the observations
    it produced. On any failure it raises and the input state is untouched.
"""

from __future__ import annotations

import logging
from typing import List, Tuple

from .core.constants import HALVING_INTERVAL
from .core.arithmetic import checked_add, checked_increment
from .core.events import (
    Observation,
    RateUpdated,
    TransactionCountIncremented,
    HalvingOccurred,
    HalvingCountdownUpdated,
)
from .core.exc import CounterOverflow, RateOverflow
from .core.state import ExchangeState

logger = logging.getLogger(__name__)


def advance(
    state: ExchangeState,
    *,
    halving_interval: int = HALVING_INTERVAL,
) -> Tuple[ExchangeState, List[Observation]]:
    """Account for one completed operation.

    Returns (next_state, observations). Raises CounterOverflow if the counter
    is already at its maximum and RateOverflow if the new rate leaves u256.
    """
    events: List[Observation] = []

    count = checked_increment(state.transaction_count)
    old_rate = state.exchange_rate
    new_rate = checked_add(old_rate, state.current_increment, error=RateOverflow)
    events.append(RateUpdated(old_rate=old_rate, new_rate=new_rate))
    events.append(TransactionCountIncremented(count=count))

    increment = state.current_increment
    threshold = state.next_halving_threshold
    if count >= threshold:
        increment = increment // 2
        threshold = checked_add(threshold, halving_interval, error=CounterOverflow)
        events.append(HalvingOccurred(count_at_halving=count, new_increment=increment))
        events.append(HalvingCountdownUpdated(remaining=threshold - count, increment=increment))
        logger.info("halving at count=%d: increment %d -> %d, next threshold %d",
                    count, state.current_increment, increment, threshold)

    next_state = state.evolve(
        exchange_rate=new_rate,
        current_increment=increment,
        transaction_count=count,
        next_halving_threshold=threshold,
    )
    logger.debug("advance count=%d rate %d -> %d", count, old_rate, new_rate)
    return next_state, events


def operations_until_halving(state: ExchangeState) -> int:
    """Number of further operations until the next halving fires."""
    return max(state.next_halving_threshold - state.transaction_count, 0)


__all__ = [
    "advance",
    "operations_until_halving",
]
