"""
Token ledger: balances, capped supply and the privileged transfer path.

`LedgerAdapter` is the interface the mint scheduler depends on. `TokenLedger` is the
in-memory implementation used by the host and by tests. Public
`transfer`/`transfer_from` are disabled; tokens only move through
`internal_transfer`, which the engine calls between the pool custody address
and a caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Mapping, Protocol, Tuple

from .core.constants import MAX_SUPPLY, TOKEN_DECIMALS, TOKEN_NAME, TOKEN_SYMBOL, ZERO_ADDRESS
from .core.arithmetic import require_u256
from .core.exc import (
    AmountTooSmall,
    DirectTransferDisabled,
    InsufficientBalance,
    InvalidRecipient,
    SupplyCapExceeded,
)

logger = logging.getLogger(__name__)


class LedgerAdapter(Protocol):
    """What the engine and the mint scheduler need from the token ledger."""

    max_supply: int

    def total_supply(self) -> int: ...

    def balance_of(self, address: str) -> int: ...

    def mint(self, to: str, amount: int) -> None: ...

    def internal_transfer(self, src: str, dst: str, amount: int) -> None: ...


LedgerSnapshot = Tuple[Dict[str, int], int]


@dataclass
class TokenLedger:
    """In-memory capped token ledger (18 decimals)."""

    max_supply: int = MAX_SUPPLY
    name: str = TOKEN_NAME
    symbol: str = TOKEN_SYMBOL
    decimals: int = TOKEN_DECIMALS
    _balances: Dict[str, int] = field(default_factory=dict, repr=False)
    _total_supply: int = 0

    def __post_init__(self):
        require_u256(self.max_supply, "max_supply")

    # --- reads ---

    def total_supply(self) -> int:
        return self._total_supply

    def remaining_supply(self) -> int:
        return self.max_supply - self._total_supply

    def balance_of(self, address: str) -> int:
        return self._balances.get(address, 0)

    def balances(self) -> Mapping[str, int]:
        return dict(self._balances)

    # --- writes ---

    def mint(self, to: str, amount: int) -> None:
        """Create `amount` new units at `to`; never beyond `max_supply`."""
        require_u256(amount, "amount")
        if not to or to == ZERO_ADDRESS:
            raise InvalidRecipient("cannot mint to the zero address")
        if amount == 0:
            raise AmountTooSmall("mint amount is zero")
        if amount > self.remaining_supply():
            raise SupplyCapExceeded(amount, self._total_supply, self.max_supply)
        self._balances[to] = self.balance_of(to) + amount
        self._total_supply += amount
        logger.debug("mint %d to %s (supply %d)", amount, to, self._total_supply)

    def internal_transfer(self, src: str, dst: str, amount: int) -> None:
        """Privileged move used by the engine only."""
        require_u256(amount, "amount")
        if not dst or dst == ZERO_ADDRESS:
            raise InvalidRecipient("cannot transfer to the zero address")
        if amount == 0:
            raise AmountTooSmall("transfer amount is zero")
        have = self.balance_of(src)
        if have < amount:
            raise InsufficientBalance(amount, have)
        self._balances[src] = have - amount
        self._balances[dst] = self.balance_of(dst) + amount

    # Public token transfers are switched off.
    def transfer(self, to: str, amount: int) -> None:
        raise DirectTransferDisabled("direct token transfers are disabled")

    def transfer_from(self, src: str, to: str, amount: int) -> None:
        raise DirectTransferDisabled("direct token transfers are disabled")

    # --- checkpointing ---

    def snapshot(self) -> LedgerSnapshot:
        return dict(self._balances), self._total_supply

    def restore(self, snap: LedgerSnapshot) -> None:
        balances, total = snap
        self._balances = dict(balances)
        self._total_supply = total

    def load(self, balances: Mapping[str, int]) -> None:
        """Replace all balances (e.g. when restoring persisted state)."""
        clean = {addr: require_u256(int(v), "balance") for addr, v in balances.items()}
        total = sum(clean.values())
        if total > self.max_supply:
            raise SupplyCapExceeded(0, total, self.max_supply)
        self._balances = clean
        self._total_supply = total


__all__ = [
    "LedgerAdapter",
    "TokenLedger",
]
