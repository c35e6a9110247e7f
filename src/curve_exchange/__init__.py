# Top-level API for curve_exchange (integer-domain).
"""
Top-level API for curve_exchange.

A self-custodied token/native exchange priced on a rising bonding curve:
  - OrderEngine: atomic buy/sell against the exchange's own pool
  - rate_scheduler / mint_scheduler: per-operation rate advance, halvings and batch mints
  - TokenLedger / NativeBank / TransferGuard: in-memory host collaborators

All amounts are integer base units (10**18 per whole token or coin).
"""

from __future__ import annotations

from .engine import OrderEngine, price_buy, price_sell
from .config import ExchangeConfig
from .host import ExecutionContext, NativeBank
from .ledger import LedgerAdapter, TokenLedger
from .transfer_guard import TransferGuard
from .sandbox import ExecutionSandbox
from . import rate_scheduler, mint_scheduler

from .core import (
    ExchangeState,
    EventLog,
    Quote,
    OrderResult,
    Side,
    FillKind,
    ExchangeError,
    ErrorKind,
    tokens_for,
    native_for,
)

__all__ = [
    # execution
    "OrderEngine",
    "price_buy",
    "price_sell",
    "ExchangeConfig",
    "ExecutionContext",
    "ExecutionSandbox",
    # collaborators
    "NativeBank",
    "LedgerAdapter",
    "TokenLedger",
    "TransferGuard",
    # schedulers
    "rate_scheduler",
    "mint_scheduler",
    # core types
    "ExchangeState",
    "EventLog",
    "Quote",
    "OrderResult",
    "Side",
    "FillKind",
    "ExchangeError",
    "ErrorKind",
    "tokens_for",
    "native_for",
]
