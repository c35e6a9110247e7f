"""
Curve Exchange Core
===================

Integer-domain primitives shared by the schedulers and the order engine:
u256-checked arithmetic, the immutable ExchangeState, observation records,
result datatypes and the error taxonomy. Decimal helpers exist only for
display in `fmt`.
"""

# Integer-domain constants
from .constants import (
    U256_MAX,
    TOKEN_SCALE,
    TOKEN_DECIMALS,
    NATIVE_SCALE,
    INITIAL_EXCHANGE_RATE,
    INITIAL_RATE_INCREMENT,
    HALVING_INTERVAL,
    MINT_INTERVAL,
    MINT_BATCH_AMOUNT,
    MAX_SUPPLY,
    INITIAL_POOL_TOKENS,
    ZERO_ADDRESS,
    POOL_ADDRESS,
    DEFAULT_CHAIN_ID,
)

# Checked arithmetic and conversions
from .arithmetic import (
    require_u256,
    checked_mul,
    checked_add,
    checked_increment,
    tokens_for,
    native_for,
)

# State and results
from .state import ExchangeState
from .datatypes import Side, FillKind, Quote, OrderResult

# Observations
from .events import (
    Observation,
    RateUpdated,
    TransactionCountIncremented,
    HalvingOccurred,
    HalvingCountdownUpdated,
    Minted,
    MaxSupplyReached,
    Purchase,
    Sale,
    PartialFill,
    PartialBuyRefunded,
    LiquidityChanged,
    EventLog,
)

# Display helpers
from .fmt import fmt_units, fmt_tokens, fmt_native, parse_units

# Core exceptions
from .exc import (
    ErrorKind,
    ExchangeError,
    ValidationError,
    ExchangeArithmeticError,
    LiquidityError,
    TransferError,
    AmountTooSmall,
    InvalidRecipient,
    DirectTransferDisabled,
    DirectNativeTransferNotAllowed,
    WrongEnvironment,
    ReentrantCall,
    RateInvalid,
    MultiplicationOverflow,
    RateOverflow,
    CounterOverflow,
    ValueOutOfRange,
    NoLiquidity,
    InsufficientBalance,
    SupplyCapExceeded,
    TransferFailed,
    InsufficientFunds,
)

__all__ = [
    # constants
    "U256_MAX",
    "TOKEN_SCALE",
    "TOKEN_DECIMALS",
    "NATIVE_SCALE",
    "INITIAL_EXCHANGE_RATE",
    "INITIAL_RATE_INCREMENT",
    "HALVING_INTERVAL",
    "MINT_INTERVAL",
    "MINT_BATCH_AMOUNT",
    "MAX_SUPPLY",
    "INITIAL_POOL_TOKENS",
    "ZERO_ADDRESS",
    "POOL_ADDRESS",
    "DEFAULT_CHAIN_ID",
    # arithmetic
    "require_u256",
    "checked_mul",
    "checked_add",
    "checked_increment",
    "tokens_for",
    "native_for",
    # state / datatypes
    "ExchangeState",
    "Side",
    "FillKind",
    "Quote",
    "OrderResult",
    # observations
    "Observation",
    "RateUpdated",
    "TransactionCountIncremented",
    "HalvingOccurred",
    "HalvingCountdownUpdated",
    "Minted",
    "MaxSupplyReached",
    "Purchase",
    "Sale",
    "PartialFill",
    "PartialBuyRefunded",
    "LiquidityChanged",
    "EventLog",
    # fmt
    "fmt_units",
    "fmt_tokens",
    "fmt_native",
    "parse_units",
    # exceptions
    "ErrorKind",
    "ExchangeError",
    "ValidationError",
    "ExchangeArithmeticError",
    "LiquidityError",
    "TransferError",
    "AmountTooSmall",
    "InvalidRecipient",
    "DirectTransferDisabled",
    "DirectNativeTransferNotAllowed",
    "WrongEnvironment",
    "ReentrantCall",
    "RateInvalid",
    "MultiplicationOverflow",
    "RateOverflow",
    "CounterOverflow",
    "ValueOutOfRange",
    "NoLiquidity",
    "InsufficientBalance",
    "SupplyCapExceeded",
    "TransferFailed",
    "InsufficientFunds",
]
