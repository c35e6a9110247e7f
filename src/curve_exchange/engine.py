"""
OrderEngine — buy/sell execution against the exchange's own pool.

Status:
  Every operation runs as one atomic unit inside an ExecutionSandbox:
  environment check → re-entrancy guard → compute amounts at the pre-trade
  rate → mutate ledger balances → stage observations → advance the rate
  scheduler → batch mint if due → liquidity snapshot → outward native
  payment last. Any exception rolls the ledger, the bank and the state back
  to the entry checkpoint and drops the staged observations.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Mapping, Optional

from .config import ExchangeConfig
from .core.arithmetic import native_for, require_u256, tokens_for
from .core.datatypes import FillKind, OrderResult, Quote, Side
from .core.events import (
    EventLog,
    LiquidityChanged,
    PartialBuyRefunded,
    PartialFill,
    Purchase,
    Sale,
)
from .core.exc import (
    AmountTooSmall,
    DirectNativeTransferNotAllowed,
    InsufficientBalance,
    NoLiquidity,
    ReentrantCall,
    WrongEnvironment,
)
from .core.state import ExchangeState
from .host import ExecutionContext, NativeBank
from .ledger import TokenLedger
from .sandbox import ExecutionSandbox
from .transfer_guard import TransferGuard
from . import mint_scheduler, rate_scheduler

logger = logging.getLogger(__name__)


# ----------------------------
# Pricing (pure)
# ----------------------------

def price_buy(native_in: int, rate: int, pool_tokens: int) -> Quote:
    """Price a buy of `native_in` against a pool holding `pool_tokens`."""
    requested = tokens_for(native_in, rate)
    if pool_tokens == 0:
        raise NoLiquidity("pool holds no tokens")
    if requested <= pool_tokens:
        return Quote(Side.BUY, FillKind.FULL, native_in, requested, 0, rate)
    available = pool_tokens
    needed = native_for(available, rate)
    return Quote(Side.BUY, FillKind.PARTIAL, needed, available, native_in - needed, rate)


def price_sell(token_in: int, rate: int, pool_native: int) -> Quote:
    """Price a sell of `token_in` against a pool holding `pool_native`.

    On a partial fill only the accepted tokens are taken; the rest never
    leaves the seller and the whole native balance of the pool is paid out.
    """
    if pool_native == 0:
        raise NoLiquidity("pool holds no native currency")
    owed = native_for(token_in, rate)
    if owed <= pool_native:
        return Quote(Side.SELL, FillKind.FULL, token_in, owed, 0, rate)
    accepted = tokens_for(pool_native, rate)
    return Quote(Side.SELL, FillKind.PARTIAL, accepted, pool_native, token_in - accepted, rate)


# ----------------------------
# Engine
# ----------------------------

class OrderEngine:
    """The exchange: sole counterparty to every buy and sell."""

    def __init__(
        self,
        config: Optional[ExchangeConfig] = None,
        *,
        ledger: Optional[TokenLedger] = None,
        bank: Optional[NativeBank] = None,
        events: Optional[EventLog] = None,
        state: Optional[ExchangeState] = None,
    ) -> None:
        self.config = (config or ExchangeConfig()).validate()
        self.pool = self.config.pool_address
        self.ledger = ledger if ledger is not None else TokenLedger(
            max_supply=self.config.max_supply,
            name=self.config.token_name,
            symbol=self.config.token_symbol,
        )
        self.bank = bank if bank is not None else NativeBank()
        self.events = events if events is not None else EventLog()
        self._transfers = TransferGuard(self.bank, self.pool)
        self._locked = False
        if ledger is None and self.config.initial_pool_tokens > 0:
            self.ledger.mint(self.pool, self.config.initial_pool_tokens)
        if state is None:
            state = ExchangeState.initial(
                exchange_rate=self.config.initial_rate,
                current_increment=self.config.initial_increment,
                halving_interval=self.config.halving_interval,
            )
        self._state = state

    # --- public read state ---

    @property
    def state(self) -> ExchangeState:
        return self._state

    @property
    def exchange_rate(self) -> int:
        return self._state.exchange_rate

    @property
    def transaction_count(self) -> int:
        return self._state.transaction_count

    @property
    def current_increment(self) -> int:
        return self._state.current_increment

    @property
    def next_halving_threshold(self) -> int:
        return self._state.next_halving_threshold

    @property
    def total_supply(self) -> int:
        return self.ledger.total_supply()

    @property
    def pool_native_balance(self) -> int:
        return self.bank.balance_of(self.pool)

    @property
    def pool_token_balance(self) -> int:
        return self.ledger.balance_of(self.pool)

    # --- quotes ---

    def quote_buy(self, native_in: int) -> Quote:
        require_u256(native_in, "native_in")
        if native_in == 0:
            raise AmountTooSmall("buy amount is zero")
        return price_buy(native_in, self.exchange_rate, self.pool_token_balance)

    def quote_sell(self, token_in: int) -> Quote:
        require_u256(token_in, "token_in")
        if token_in == 0:
            raise AmountTooSmall("sell amount is zero")
        return price_sell(token_in, self.exchange_rate, self.pool_native_balance)

    # --- operations ---

    @contextmanager
    def _operation(self, ctx: ExecutionContext) -> Iterator[ExecutionSandbox]:
        if ctx.chain_id != self.config.chain_id:
            raise WrongEnvironment(self.config.chain_id, ctx.chain_id)
        if self._locked:
            logger.warning("rejected re-entrant call from %s", ctx.caller)
            raise ReentrantCall("operation already in progress")
        self._locked = True
        sb = ExecutionSandbox(self._state, self.ledger, self.bank)
        try:
            yield sb
        except BaseException as exc:
            sb.discard()
            self._state = sb.checkpoint_state
            logger.warning("operation by %s rolled back: %s: %s", ctx.caller, type(exc).__name__, exc)
            raise
        finally:
            self._locked = False
        self._state = sb.state
        # Published after the guard is released, so subscribers may trade.
        sb.apply(self.events)

    def _settle(self, sb: ExecutionSandbox, pending_payout: int) -> int:
        """Scheduler effects shared by buy and sell; returns the minted amount."""
        sb.state, observed = rate_scheduler.advance(sb.state, halving_interval=self.config.halving_interval)
        sb.stage(observed)
        # Bookkeeping is visible to anything the outward payment calls into.
        self._state = sb.state
        minted = 0
        if mint_scheduler.is_mint_due(sb.state, self.config.mint_interval):
            minted, observed = mint_scheduler.maybe_mint(
                sb.state,
                self.ledger,
                pool=self.pool,
                batch=self.config.mint_batch,
                interval=self.config.mint_interval,
            )
            sb.stage(observed)
        # Report balances as they stand once the pending payout has left the pool.
        sb.emit(LiquidityChanged(
            pool_native=self.pool_native_balance - pending_payout,
            pool_tokens=self.pool_token_balance,
        ))
        return minted

    def buy(self, ctx: ExecutionContext) -> OrderResult:
        """Buy tokens with the native value attached to `ctx`."""
        with self._operation(ctx) as sb:
            native_in = require_u256(ctx.value, "value")
            if native_in == 0:
                raise AmountTooSmall("buy amount is zero")
            self.bank.transfer(ctx.caller, self.pool, native_in)

            quote = price_buy(native_in, sb.state.exchange_rate, self.pool_token_balance)
            self.ledger.internal_transfer(self.pool, ctx.caller, quote.amount_out)
            sb.emit(Purchase(
                buyer=ctx.caller,
                native_spent=quote.amount_in,
                tokens_bought=quote.amount_out,
                rate=quote.rate,
            ))
            refund = quote.unfilled
            if refund > 0:
                sb.emit(PartialBuyRefunded(buyer=ctx.caller, refund=refund))

            minted = self._settle(sb, pending_payout=refund)
            if refund > 0:
                self._transfers.send_native(ctx.caller, refund)
            result = OrderResult(quote, sb.state.transaction_count, sb.state.exchange_rate, minted)
        logger.info("buy %s: %s native -> %s tokens (%s) at rate %d",
                    ctx.caller, quote.amount_in, quote.amount_out, quote.fill.value, quote.rate)
        return result

    def sell(self, ctx: ExecutionContext, token_amount: int) -> OrderResult:
        """Sell `token_amount` tokens back to the pool for native currency."""
        with self._operation(ctx) as sb:
            require_u256(token_amount, "token_amount")
            if ctx.value:
                raise DirectNativeTransferNotAllowed("sell does not accept native value")
            if token_amount == 0:
                raise AmountTooSmall("sell amount is zero")
            balance = self.ledger.balance_of(ctx.caller)
            if balance < token_amount:
                raise InsufficientBalance(token_amount, balance)

            quote = price_sell(token_amount, sb.state.exchange_rate, self.pool_native_balance)
            self.ledger.internal_transfer(ctx.caller, self.pool, quote.amount_in)
            sb.emit(Sale(
                seller=ctx.caller,
                tokens_sold=quote.amount_in,
                native_received=quote.amount_out,
                rate=quote.rate,
            ))
            if quote.is_partial:
                sb.emit(PartialFill(user=ctx.caller, fulfilled=quote.amount_in, returned=quote.unfilled))

            minted = self._settle(sb, pending_payout=quote.amount_out)
            self._transfers.send_native(ctx.caller, quote.amount_out)
            result = OrderResult(quote, sb.state.transaction_count, sb.state.exchange_rate, minted)
        logger.info("sell %s: %s tokens -> %s native (%s) at rate %d",
                    ctx.caller, quote.amount_in, quote.amount_out, quote.fill.value, quote.rate)
        return result

    def receive(self, ctx: ExecutionContext) -> None:
        """Unsolicited native payments are refused; use `buy`."""
        raise DirectNativeTransferNotAllowed("send native currency through buy()")

    def transfer(self, ctx: ExecutionContext, to: str, amount: int) -> None:
        self.ledger.transfer(to, amount)

    def transfer_from(self, ctx: ExecutionContext, src: str, to: str, amount: int) -> None:
        self.ledger.transfer_from(src, to, amount)

    # --- persistence ---

    def export_state(self) -> Dict[str, Any]:
        """JSON-able snapshot of everything the engine owns."""
        return {
            "chain_id": self.config.chain_id,
            "state": self._state.as_dict(),
            "pool": {"native": self.pool_native_balance, "tokens": self.pool_token_balance},
            "total_supply": self.total_supply,
            "balances": dict(self.ledger.balances()),
        }

    def import_state(self, data: Mapping[str, Any]) -> None:
        """Load a snapshot produced by `export_state`.

        Native balances belong to the host bank and are not touched.
        """
        if self._locked:
            raise ReentrantCall("cannot load state during an operation")
        if int(data["chain_id"]) != self.config.chain_id:
            raise WrongEnvironment(self.config.chain_id, int(data["chain_id"]))
        state = ExchangeState.from_dict(data["state"])
        self.ledger.load({addr: int(v) for addr, v in data["balances"].items()})
        self._state = state


__all__ = [
    "price_buy",
    "price_sell",
    "OrderEngine",
]
