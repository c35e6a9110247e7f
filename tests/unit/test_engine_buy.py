import pytest

from curve_exchange.core import (
    FillKind,
    INITIAL_EXCHANGE_RATE as R0,
    INITIAL_RATE_INCREMENT as INC,
    NATIVE_SCALE,
    TOKEN_SCALE,
    Purchase,
    PartialBuyRefunded,
    RateUpdated,
    TransactionCountIncremented,
    LiquidityChanged,
    Side,
)
from curve_exchange.core.exc import AmountTooSmall, InsufficientFunds, NoLiquidity

from tests.conftest import ALICE, BOB, ctx, engine_fingerprint


def test_full_fill_buy_one_token(engine):
    pool_tokens = engine.pool_token_balance
    res = engine.buy(ctx(ALICE, value=R0))
    print(f"[buy-full] value={R0} -> tokens={res.quote.amount_out}, new rate={engine.exchange_rate}")

    assert res.side is Side.BUY and res.quote.fill is FillKind.FULL
    assert engine.ledger.balance_of(ALICE) == TOKEN_SCALE
    assert engine.pool_token_balance == pool_tokens - TOKEN_SCALE
    assert engine.pool_native_balance == R0
    assert engine.bank.balance_of(ALICE) == 1_000 * NATIVE_SCALE - R0
    assert engine.transaction_count == 1
    assert engine.exchange_rate == R0 + INC
    assert engine.events.history == [
        Purchase(buyer=ALICE, native_spent=R0, tokens_bought=TOKEN_SCALE, rate=R0),
        RateUpdated(old_rate=R0, new_rate=R0 + INC),
        TransactionCountIncremented(count=1),
        LiquidityChanged(pool_native=R0, pool_tokens=pool_tokens - TOKEN_SCALE),
    ]


def test_buy_prices_at_pre_operation_rate(engine):
    engine.buy(ctx(ALICE, value=R0))
    r1 = engine.exchange_rate
    res = engine.buy(ctx(BOB, value=r1))
    assert res.quote.rate == r1
    assert engine.ledger.balance_of(BOB) == TOKEN_SCALE
    assert engine.exchange_rate == r1 + INC


def test_partial_fill_buy_refunds_excess(make_engine):
    engine = make_engine(initial_pool_tokens=2 * TOKEN_SCALE)
    res = engine.buy(ctx(ALICE, value=5 * R0))
    print(f"[buy-partial] requested 5 tokens, pool 2 -> got {res.quote.amount_out}, refund {res.quote.unfilled}")

    assert res.is_partial
    assert res.quote.amount_in == 2 * R0
    assert res.quote.amount_out == 2 * TOKEN_SCALE
    assert res.quote.unfilled == 3 * R0
    assert engine.ledger.balance_of(ALICE) == 2 * TOKEN_SCALE
    assert engine.pool_token_balance == 0
    assert engine.pool_native_balance == 2 * R0
    assert engine.bank.balance_of(ALICE) == 1_000 * NATIVE_SCALE - 2 * R0
    assert engine.events.history == [
        Purchase(buyer=ALICE, native_spent=2 * R0, tokens_bought=2 * TOKEN_SCALE, rate=R0),
        PartialBuyRefunded(buyer=ALICE, refund=3 * R0),
        RateUpdated(old_rate=R0, new_rate=R0 + INC),
        TransactionCountIncremented(count=1),
        LiquidityChanged(pool_native=2 * R0, pool_tokens=0),
    ]


def test_partial_fill_refunds_fractional_token_cost(make_engine):
    engine = make_engine(initial_pool_tokens=TOKEN_SCALE)
    # 1.5 tokens requested, 1 available: the half-token cost comes back.
    res = engine.buy(ctx(ALICE, value=R0 + R0 // 2))
    assert res.is_partial
    assert res.quote.unfilled == R0 // 2
    assert len(engine.events.of_type(PartialBuyRefunded)) == 1


def test_buy_zero_value(engine):
    before = engine_fingerprint(engine)
    with pytest.raises(AmountTooSmall):
        engine.buy(ctx(ALICE, value=0))
    assert engine_fingerprint(engine) == before


def test_buy_against_empty_pool(make_engine):
    engine = make_engine(initial_pool_tokens=0)
    before = engine_fingerprint(engine)
    with pytest.raises(NoLiquidity):
        engine.buy(ctx(ALICE, value=R0))
    print("[buy-no-liquidity] caller's attached value is returned by rollback")
    assert engine_fingerprint(engine) == before
    assert engine.bank.balance_of(ALICE) == 1_000 * NATIVE_SCALE


def test_buy_without_funds(engine):
    stranger = "0x" + "5" * 40
    with pytest.raises(InsufficientFunds):
        engine.buy(ctx(stranger, value=R0))
    assert engine.transaction_count == 0


def test_quote_buy_matches_execution(make_engine):
    engine = make_engine(initial_pool_tokens=3 * TOKEN_SCALE)
    q = engine.quote_buy(4 * R0)
    assert q.is_partial and q.amount_out == 3 * TOKEN_SCALE
    assert engine.transaction_count == 0
    res = engine.buy(ctx(ALICE, value=4 * R0))
    assert res.quote == q
