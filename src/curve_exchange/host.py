"""
Host environment: call envelopes and native-currency balances.

The engine never owns native balances itself; it asks the host bank to move
them. Addresses may register a receive hook which runs synchronously when
they are paid, the way a contract's fallback runs inside a value transfer.
A hook can call back into the engine, which is exactly the re-entrancy the
engine's guard must reject.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Mapping, Optional

from .core.constants import DEFAULT_CHAIN_ID
from .core.arithmetic import require_u256
from .core.exc import InsufficientFunds

logger = logging.getLogger(__name__)

#: hook(sender, amount) -> False to refuse the payment; None/True accepts.
ReceiveHook = Callable[[str, int], Optional[bool]]


@dataclass(frozen=True)
class ExecutionContext:
    """Per-call envelope: who is calling, attached native value, chain id."""

    caller: str
    value: int = 0
    chain_id: int = DEFAULT_CHAIN_ID


@dataclass
class NativeBank:
    """Native-currency balances keyed by address."""

    _balances: Dict[str, int] = field(default_factory=dict)
    _receivers: Dict[str, ReceiveHook] = field(default_factory=dict, repr=False)

    def balance_of(self, address: str) -> int:
        return self._balances.get(address, 0)

    def credit(self, address: str, amount: int) -> None:
        """Create native balance out of thin air (host funding, tests)."""
        require_u256(amount, "amount")
        self._balances[address] = self.balance_of(address) + amount

    def transfer(self, src: str, dst: str, amount: int) -> None:
        """Move balance without running any receive hook."""
        require_u256(amount, "amount")
        have = self.balance_of(src)
        if have < amount:
            raise InsufficientFunds(amount, have)
        self._balances[src] = have - amount
        self._balances[dst] = self.balance_of(dst) + amount

    def register_receiver(self, address: str, hook: ReceiveHook) -> None:
        self._receivers[address] = hook

    def unregister_receiver(self, address: str) -> None:
        self._receivers.pop(address, None)

    def deliver(self, src: str, dst: str, amount: int) -> bool:
        """Pay `dst` and run its receive hook; False if the recipient refused.

        A refused payment is reverted here together with anything the hook
        did to the bank, so the bank is unchanged when False is returned.
        """
        before = self.snapshot()
        self.transfer(src, dst, amount)
        hook = self._receivers.get(dst)
        if hook is None:
            return True
        try:
            accepted = hook(src, amount)
        except Exception as exc:
            logger.warning("receive hook of %s raised %s: %s", dst, type(exc).__name__, exc)
            accepted = False
        if accepted is False:
            self.restore(before)
            return False
        return True

    # --- checkpointing ---

    def snapshot(self) -> Dict[str, int]:
        return dict(self._balances)

    def restore(self, snap: Mapping[str, int]) -> None:
        self._balances = dict(snap)


__all__ = [
    "ReceiveHook",
    "ExecutionContext",
    "NativeBank",
]
