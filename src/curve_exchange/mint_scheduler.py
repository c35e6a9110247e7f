"""
Mint scheduler: batch mints into the pool every MINT_INTERVAL operations.

The batch is clipped to the remaining capacity under the supply cap. Once
the cap is hit the clipped amount is zero and every later call is a silent
no-op, so MaxSupplyReached can only ever be emitted by the one mint that
fills the cap.
"""

from __future__ import annotations

import logging
from typing import List, Tuple

from .core.constants import MINT_BATCH_AMOUNT, MINT_INTERVAL, POOL_ADDRESS
from .core.events import Observation, Minted, MaxSupplyReached
from .core.state import ExchangeState
from .ledger import LedgerAdapter

logger = logging.getLogger(__name__)


def is_mint_due(state: ExchangeState, interval: int = MINT_INTERVAL) -> bool:
    return state.transaction_count > 0 and state.transaction_count % interval == 0


def mint_amount(ledger: LedgerAdapter, batch: int = MINT_BATCH_AMOUNT) -> int:
    remaining = ledger.max_supply - ledger.total_supply()
    return min(batch, max(remaining, 0))


def maybe_mint(
    state: ExchangeState,
    ledger: LedgerAdapter,
    *,
    pool: str = POOL_ADDRESS,
    batch: int = MINT_BATCH_AMOUNT,
    interval: int = MINT_INTERVAL,
) -> Tuple[int, List[Observation]]:
    """Mint the scheduled batch into `pool` if one is due.

    Returns (minted_amount, observations); (0, []) when nothing is due or
    the cap is already reached.
    """
    if not is_mint_due(state, interval):
        return 0, []
    amount = mint_amount(ledger, batch)
    if amount == 0:
        logger.debug("mint due at count=%d but supply cap reached", state.transaction_count)
        return 0, []

    ledger.mint(pool, amount)
    events: List[Observation] = [Minted(destination=pool, amount=amount)]
    supply = ledger.total_supply()
    if supply == ledger.max_supply:
        events.append(MaxSupplyReached(total_supply=supply))
        logger.info("max supply %d reached at count=%d", supply, state.transaction_count)
    logger.info("minted %d into pool at count=%d", amount, state.transaction_count)
    return amount, events


__all__ = [
    "is_mint_due",
    "mint_amount",
    "maybe_mint",
]
