"""
TransferGuard — outward native-currency payments from the pool.

The engine calls this as the very last step of an operation. Any failure is
raised, never returned, so the surrounding operation rolls back as a whole.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .core.constants import ZERO_ADDRESS
from .core.arithmetic import require_u256
from .core.exc import AmountTooSmall, InsufficientFunds, InvalidRecipient, TransferFailed
from .host import NativeBank

logger = logging.getLogger(__name__)


@dataclass
class TransferGuard:
    """Checked native sends from a fixed sender (the pool custody address)."""

    bank: NativeBank
    sender: str

    def send_native(self, to: str, amount: int) -> None:
        if not to or to == ZERO_ADDRESS:
            raise InvalidRecipient("native payment to the zero address")
        require_u256(amount, "amount")
        if amount == 0:
            raise AmountTooSmall("native payment of zero")
        have = self.bank.balance_of(self.sender)
        if have < amount:
            raise InsufficientFunds(amount, have)
        if not self.bank.deliver(self.sender, to, amount):
            raise TransferFailed(f"native payment of {amount} to {to} failed")
        logger.debug("sent %d native to %s", amount, to)


__all__ = ["TransferGuard"]
