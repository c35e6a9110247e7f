"""Walkthrough of the bonding-curve exchange: fills, schedules and guards.

Scenarios covered:
S1) Full-fill buy at the deployment rate (one whole token)
S2) Partial-fill buy against a nearly empty pool, with native refund
S3) Full-fill sell back into the pool
S4) Partial-fill sell: pool pays out everything, remainder stays with seller
S5) Batch mint on the 100th operation
S6) Re-entrant buy from a payment hook is rejected and rolls back
S7) Wrong chain id is rejected before any state is touched
"""
from __future__ import annotations

import argparse
import logging
from typing import Callable, Dict, List, Optional

from curve_exchange import ExchangeConfig, ExecutionContext, OrderEngine, ExchangeError
from curve_exchange.core import NATIVE_SCALE, TOKEN_SCALE, fmt_native, fmt_tokens

ALICE = "0x" + "a" * 40
BOB = "0x" + "b" * 40

# ---------- pretty printers ----------

def print_events(engine: OrderEngine, since: int = 0) -> None:
    for obs in engine.events.history[since:]:
        print(f"  • {obs.name}: " + ", ".join(f"{k}={v}" for k, v in obs.as_dict().items() if k != "event"))


def print_state(engine: OrderEngine) -> None:
    print(f"- rate={engine.exchange_rate} count={engine.transaction_count} "
          f"increment={engine.current_increment} next_halving={engine.next_halving_threshold}")
    print(f"- pool: native={fmt_native(engine.pool_native_balance)} tokens={fmt_tokens(engine.pool_token_balance)} "
          f"supply={fmt_tokens(engine.total_supply)}")


def _engine(**overrides) -> OrderEngine:
    engine = OrderEngine(ExchangeConfig(**overrides))
    engine.bank.credit(ALICE, 100 * NATIVE_SCALE)
    engine.bank.credit(BOB, 100 * NATIVE_SCALE)
    return engine


# ---------- scenarios ----------

def s1_full_buy() -> OrderEngine:
    engine = _engine()
    engine.buy(ExecutionContext(ALICE, value=engine.exchange_rate))
    return engine


def s2_partial_buy() -> OrderEngine:
    engine = _engine(initial_pool_tokens=2 * TOKEN_SCALE)
    engine.buy(ExecutionContext(ALICE, value=5 * engine.exchange_rate))
    return engine


def s3_full_sell() -> OrderEngine:
    engine = _engine()
    engine.buy(ExecutionContext(ALICE, value=10 * engine.exchange_rate))
    engine.sell(ExecutionContext(ALICE), 4 * TOKEN_SCALE)
    return engine


def s4_partial_sell() -> OrderEngine:
    engine = _engine()
    engine.buy(ExecutionContext(ALICE, value=3 * engine.exchange_rate))
    # The rate has moved up since the buy, so the pool cannot cover all three tokens.
    engine.sell(ExecutionContext(ALICE), 3 * TOKEN_SCALE)
    return engine


def s5_batch_mint() -> OrderEngine:
    engine = _engine()
    for _ in range(100):
        engine.buy(ExecutionContext(ALICE, value=engine.exchange_rate))
    return engine


def s6_reentrancy() -> OrderEngine:
    engine = _engine(initial_pool_tokens=TOKEN_SCALE)

    def hook(sender: str, amount: int) -> None:
        engine.buy(ExecutionContext(ALICE, value=engine.exchange_rate))

    engine.bank.register_receiver(ALICE, hook)
    try:
        engine.buy(ExecutionContext(ALICE, value=3 * engine.exchange_rate))
    except ExchangeError as exc:
        print(f"- outer buy rejected: {exc.kind.value}")
    return engine


def s7_wrong_environment() -> OrderEngine:
    engine = _engine()
    try:
        engine.buy(ExecutionContext(ALICE, value=engine.exchange_rate, chain_id=engine.config.chain_id + 1))
    except ExchangeError as exc:
        print(f"- rejected: {exc}")
    return engine


SCENARIOS: Dict[str, Callable[[], OrderEngine]] = {
    "S1": s1_full_buy,
    "S2": s2_partial_buy,
    "S3": s3_full_sell,
    "S4": s4_partial_sell,
    "S5": s5_batch_mint,
    "S6": s6_reentrancy,
    "S7": s7_wrong_environment,
}


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Bonding-curve exchange demo scenarios.")
    parser.add_argument("scenarios", nargs="*", help="Scenario ids to run (default: all)")
    parser.add_argument("--compact", action="store_true", help="Only print final state, not events")
    parser.add_argument("--log-level", default="WARNING", help="Logging level for curve_exchange")
    args = parser.parse_args(argv)
    unknown = [s for s in args.scenarios if s not in SCENARIOS]
    if unknown:
        parser.error(f"unknown scenario(s): {', '.join(unknown)}; choose from {', '.join(sorted(SCENARIOS))}")
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    for key in args.scenarios or sorted(SCENARIOS):
        fn = SCENARIOS[key]
        print(f"\n=== {key}: {fn.__name__} ===")
        engine = fn()
        if not args.compact:
            print_events(engine)
        print_state(engine)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
