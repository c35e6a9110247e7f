"""
Curve Exchange Core Constants (integer domain)
==============================================

Numeric envelopes, fixed-point scale and schedule defaults. Everything here
is a plain ``int`` or ``str``; Decimal quanta for display live in `fmt.py`.
"""

# NOTE: All amounts are base units (wei for native currency, 1e-18 token units).

# ---------------------------------------------------------------------------
# Numeric envelope (u256 emulated on Python ints)
# ---------------------------------------------------------------------------

U256_MAX: int = (1 << 256) - 1

#: Fixed-point scale: one whole token is 10**18 base units.
TOKEN_SCALE: int = 10 ** 18
TOKEN_DECIMALS: int = 18

#: Native currency base units per whole coin (wei per ether).
NATIVE_SCALE: int = 10 ** 18


# ---------------------------------------------------------------------------
# Rate schedule
# ---------------------------------------------------------------------------

#: Native units paid per 10**18 token units at deployment.
INITIAL_EXCHANGE_RATE: int = 41_000_000_000_000

#: Amount added to the rate by each completed operation before the first halving.
INITIAL_RATE_INCREMENT: int = 1_000_000

#: Operations between halvings of the rate increment.
HALVING_INTERVAL: int = 400_000_000


# ---------------------------------------------------------------------------
# Mint schedule and supply
# ---------------------------------------------------------------------------

#: A batch mint fires every MINT_INTERVAL completed operations.
MINT_INTERVAL: int = 100

#: Fixed batch size (7 whole tokens).
MINT_BATCH_AMOUNT: int = 7 * TOKEN_SCALE

#: Hard cap on total token supply.
MAX_SUPPLY: int = 21_000_000 * TOKEN_SCALE

#: Tokens minted into the pool when the exchange is deployed.
INITIAL_POOL_TOKENS: int = 1_000_000 * TOKEN_SCALE


# ---------------------------------------------------------------------------
# Addresses and environment identity
# ---------------------------------------------------------------------------

ZERO_ADDRESS: str = "0x" + "0" * 40

#: Custody address of the exchange's own pool.
POOL_ADDRESS: str = "0x" + "e" * 40

DEFAULT_CHAIN_ID: int = 1

TOKEN_NAME: str = "Curve Exchange Token"
TOKEN_SYMBOL: str = "CXT"


__all__ = [
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
    "TOKEN_NAME",
    "TOKEN_SYMBOL",
]
