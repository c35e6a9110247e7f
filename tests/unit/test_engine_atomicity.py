import pytest

from curve_exchange.core import (
    INITIAL_EXCHANGE_RATE as R0,
    NATIVE_SCALE,
    TOKEN_SCALE,
    PartialBuyRefunded,
)
from curve_exchange.core.exc import InsufficientBalance, ReentrantCall, TransferFailed, WrongEnvironment

from tests.conftest import ALICE, BOB, ctx, engine_fingerprint


def test_wrong_chain_id_rejected_before_any_effect(engine):
    engine.buy(ctx(ALICE, value=R0))
    before = engine_fingerprint(engine)
    with pytest.raises(WrongEnvironment) as ei:
        engine.buy(ctx(BOB, value=R0, chain_id=5))
    assert (ei.value.expected, ei.value.actual) == (1, 5)
    with pytest.raises(WrongEnvironment):
        engine.sell(ctx(ALICE, chain_id=5), TOKEN_SCALE)
    assert engine_fingerprint(engine) == before


def test_reentrant_buy_during_refund_rolls_back_outer(make_engine):
    engine = make_engine(initial_pool_tokens=TOKEN_SCALE)
    seen = []

    def hook(sender, amount):
        try:
            engine.buy(ctx(ALICE, value=R0))
        except ReentrantCall as exc:
            seen.append(exc)
            raise

    engine.bank.register_receiver(ALICE, hook)
    before = engine_fingerprint(engine)
    print("[reentrancy] refund hook re-enters buy -> nested ReentrantCall, outer TransferFailed")
    with pytest.raises(TransferFailed):
        engine.buy(ctx(ALICE, value=3 * R0))
    assert len(seen) == 1
    assert engine_fingerprint(engine) == before
    assert engine.bank.balance_of(ALICE) == 1_000 * NATIVE_SCALE

    # Guard was released on the failure path.
    engine.bank.unregister_receiver(ALICE)
    engine.buy(ctx(ALICE, value=R0))
    assert engine.transaction_count == 1


def test_reentry_sees_finalised_bookkeeping(make_engine):
    engine = make_engine(initial_pool_tokens=TOKEN_SCALE)
    observed = {}

    def hook(sender, amount):
        observed["count"] = engine.transaction_count
        observed["alice_tokens"] = engine.ledger.balance_of(ALICE)
        observed["pool_tokens"] = engine.pool_token_balance
        try:
            engine.sell(ctx(ALICE), TOKEN_SCALE)
        except ReentrantCall:
            observed["rejected"] = True

    engine.bank.register_receiver(ALICE, hook)
    res = engine.buy(ctx(ALICE, value=2 * R0))
    print(f"[reentrancy] hook observed {observed}")
    assert res.is_partial
    assert observed == {"count": 1, "alice_tokens": TOKEN_SCALE, "pool_tokens": 0, "rejected": True}
    assert engine.bank.balance_of(ALICE) == 1_000 * NATIVE_SCALE - R0
    assert len(engine.events.of_type(PartialBuyRefunded)) == 1


def test_failed_payout_rolls_back_sell(engine):
    engine.buy(ctx(ALICE, value=5 * R0))
    engine.bank.register_receiver(ALICE, lambda sender, amount: False)
    before = engine_fingerprint(engine)
    with pytest.raises(TransferFailed):
        engine.sell(ctx(ALICE), TOKEN_SCALE)
    assert engine_fingerprint(engine) == before
    assert engine.ledger.balance_of(ALICE) == 5 * TOKEN_SCALE


def test_subscribers_only_see_committed_operations(engine):
    received = []
    engine.events.subscribe(received.append)
    engine.buy(ctx(ALICE, value=R0))
    n = len(received)
    with pytest.raises(InsufficientBalance):
        engine.sell(ctx(BOB), TOKEN_SCALE)
    assert len(received) == n == 4


def test_failing_subscriber_does_not_undo_committed_buy(engine, caplog):
    received = []

    def explode(obs):
        if obs.name == "RateUpdated":
            raise RuntimeError("subscriber bug")

    engine.events.subscribe(explode)
    engine.events.subscribe(received.append)
    with caplog.at_level("ERROR", logger="curve_exchange.core.events"):
        res = engine.buy(ctx(ALICE, value=R0))
    assert res.transaction_count == engine.transaction_count == 1
    assert engine.ledger.balance_of(ALICE) == TOKEN_SCALE
    assert len(engine.events) == len(received) == 4
    assert any("subscriber" in r.getMessage() for r in caplog.records)

    # Guard is free for the next operation.
    engine.buy(ctx(BOB, value=R0))
    assert engine.transaction_count == 2


def test_subscriber_may_trade_after_commit(engine):
    outcomes = []

    def follow(obs):
        if obs.name == "LiquidityChanged" and not outcomes:
            outcomes.append(engine.buy(ctx(BOB, value=R0)))

    engine.events.subscribe(follow)
    first = engine.buy(ctx(ALICE, value=R0))
    assert first.transaction_count == 1
    assert len(outcomes) == 1 and outcomes[0].transaction_count == 2
    assert engine.transaction_count == 2
    assert engine.ledger.balance_of(ALICE) == TOKEN_SCALE
    assert engine.ledger.balance_of(BOB) > 0
    assert len(engine.events) == 8
    assert engine.events.names()[:4] == engine.events.names()[4:]
