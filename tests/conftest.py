from __future__ import annotations

from typing import Callable

import pytest

from curve_exchange import ExchangeConfig, ExecutionContext, OrderEngine
from curve_exchange.core import TOKEN_SCALE, NATIVE_SCALE


ALICE = "0x" + "a" * 40
BOB = "0x" + "b" * 40
CAROL = "0x" + "c" * 40


# -----------------------------
# Test helpers (pure functions)
# -----------------------------

def ctx(caller: str = ALICE, value: int = 0, chain_id: int = 1) -> ExecutionContext:
    return ExecutionContext(caller=caller, value=value, chain_id=chain_id)


def engine_fingerprint(engine: OrderEngine) -> tuple:
    """Everything an operation may touch, for before/after comparisons."""
    return (
        engine.state,
        engine.ledger.snapshot(),
        engine.bank.snapshot(),
        len(engine.events),
    )


# -----------------------------
# Pytest fixtures
# -----------------------------

@pytest.fixture()
def config() -> ExchangeConfig:
    return ExchangeConfig()


@pytest.fixture()
def engine(config: ExchangeConfig) -> OrderEngine:
    eng = OrderEngine(config)
    for who in (ALICE, BOB, CAROL):
        eng.bank.credit(who, 1_000 * NATIVE_SCALE)
    return eng


@pytest.fixture()
def make_engine() -> Callable[..., OrderEngine]:
    """Factory for engines with config overrides and funded callers."""

    def _make(**overrides) -> OrderEngine:
        eng = OrderEngine(ExchangeConfig(**overrides))
        for who in (ALICE, BOB, CAROL):
            eng.bank.credit(who, 1_000 * NATIVE_SCALE)
        return eng

    return _make


@pytest.fixture()
def one_token() -> int:
    return TOKEN_SCALE
