"""
ExecutionSandbox — all-or-nothing staging for one engine operation.

At entry the sandbox checkpoints the token ledger and the native bank and
takes the current ExchangeState as its working state. The operation mutates
ledger/bank in place, advances `state` and stages observations. On success
the caller adopts `state` and `apply()` publishes the staged observations;
on failure `discard()` restores both checkpoints and drops the observations;
the caller reinstates `checkpoint_state`.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from .core.events import EventLog, Observation
from .core.state import ExchangeState
from .host import NativeBank
from .ledger import TokenLedger


class ExecutionSandbox:
    """Checkpoint + staged observations for a single buy or sell."""

    def __init__(self, state: ExchangeState, ledger: TokenLedger, bank: NativeBank) -> None:
        self.state = state
        self.checkpoint_state = state
        self.staged: List[Observation] = []
        self._ledger = ledger
        self._bank = bank
        self._ledger_checkpoint = ledger.snapshot()
        self._bank_checkpoint = bank.snapshot()

    def stage(self, observations: Iterable[Observation]) -> None:
        self.staged.extend(observations)

    def emit(self, observation: Observation) -> None:
        self.staged.append(observation)

    def apply(self, log: Optional[EventLog]) -> None:
        if log is not None:
            log.publish(self.staged)
        self.staged.clear()

    def discard(self) -> None:
        self._ledger.restore(self._ledger_checkpoint)
        self._bank.restore(self._bank_checkpoint)
        self.staged.clear()


__all__ = ["ExecutionSandbox"]
