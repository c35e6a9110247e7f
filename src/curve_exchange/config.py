"""
Exchange configuration.

Defaults come from `core.constants`. A config can be built from a mapping
(e.g. parsed JSON) or from environment variables with a common prefix; every
value is validated against the u256 envelope before an engine accepts it.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, asdict
from typing import Any, Dict, Mapping, Optional

from .core.constants import (
    DEFAULT_CHAIN_ID,
    HALVING_INTERVAL,
    INITIAL_EXCHANGE_RATE,
    INITIAL_POOL_TOKENS,
    INITIAL_RATE_INCREMENT,
    MAX_SUPPLY,
    MINT_BATCH_AMOUNT,
    MINT_INTERVAL,
    POOL_ADDRESS,
    TOKEN_NAME,
    TOKEN_SYMBOL,
    ZERO_ADDRESS,
)
from .core.arithmetic import require_u256
from .core.exc import InvalidRecipient, RateInvalid, ValueOutOfRange

ENV_PREFIX = "CURVE_EXCHANGE_"


@dataclass(frozen=True)
class ExchangeConfig:
    chain_id: int = DEFAULT_CHAIN_ID
    pool_address: str = POOL_ADDRESS
    initial_rate: int = INITIAL_EXCHANGE_RATE
    initial_increment: int = INITIAL_RATE_INCREMENT
    halving_interval: int = HALVING_INTERVAL
    mint_interval: int = MINT_INTERVAL
    mint_batch: int = MINT_BATCH_AMOUNT
    max_supply: int = MAX_SUPPLY
    initial_pool_tokens: int = INITIAL_POOL_TOKENS
    token_name: str = TOKEN_NAME
    token_symbol: str = TOKEN_SYMBOL

    def validate(self) -> "ExchangeConfig":
        for f in fields(self):
            if f.type in (int, "int"):
                require_u256(getattr(self, f.name), f.name)
        if self.initial_rate == 0:
            raise RateInvalid("initial_rate must be positive")
        if self.halving_interval == 0 or self.mint_interval == 0:
            raise ValueOutOfRange("schedule intervals must be positive")
        if self.initial_pool_tokens >= self.max_supply:
            raise ValueOutOfRange("initial_pool_tokens must leave room below max_supply")
        if not self.pool_address or self.pool_address == ZERO_ADDRESS:
            raise InvalidRecipient("pool_address must be a non-zero address")
        return self

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ExchangeConfig":
        """Build from a mapping; unknown keys are ignored, ints may be strings."""
        kwargs: Dict[str, Any] = {}
        for f in fields(cls):
            if f.name not in data:
                continue
            raw = data[f.name]
            kwargs[f.name] = int(raw) if f.type in (int, "int") else str(raw)
        return cls(**kwargs).validate()

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, prefix: str = ENV_PREFIX) -> "ExchangeConfig":
        """Read CURVE_EXCHANGE_<FIELD> variables (e.g. CURVE_EXCHANGE_CHAIN_ID)."""
        env = os.environ if environ is None else environ
        data = {}
        for f in fields(cls):
            key = prefix + f.name.upper()
            if key in env:
                data[f.name] = env[key]
        return cls.from_mapping(data)


__all__ = [
    "ENV_PREFIX",
    "ExchangeConfig",
]
