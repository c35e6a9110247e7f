"""
Core exception types for curve_exchange.core.

These are dependency-free and may be imported by all modules. Every failure
raised by the engine is an `ExchangeError` tagged with an `ErrorKind`; raising
one aborts the in-flight operation and the sandbox rolls everything back.
"""

from __future__ import annotations

from enum import Enum

__all__ = [
    "ErrorKind",
    "ExchangeError",
    # categories
    "ValidationError",
    "ExchangeArithmeticError",
    "LiquidityError",
    "TransferError",
    # validation
    "AmountTooSmall",
    "InvalidRecipient",
    "DirectTransferDisabled",
    "DirectNativeTransferNotAllowed",
    "WrongEnvironment",
    "ReentrantCall",
    # arithmetic
    "RateInvalid",
    "MultiplicationOverflow",
    "RateOverflow",
    "CounterOverflow",
    "ValueOutOfRange",
    # liquidity
    "NoLiquidity",
    "InsufficientBalance",
    "SupplyCapExceeded",
    # transfer
    "TransferFailed",
    "InsufficientFunds",
]


class ErrorKind(str, Enum):
    AMOUNT_TOO_SMALL = "AmountTooSmall"
    INVALID_RECIPIENT = "InvalidRecipient"
    DIRECT_TRANSFER_DISABLED = "DirectTransferDisabled"
    DIRECT_NATIVE_TRANSFER_NOT_ALLOWED = "DirectNativeTransferNotAllowed"
    WRONG_ENVIRONMENT = "WrongEnvironment"
    REENTRANT_CALL = "ReentrantCall"
    RATE_INVALID = "RateInvalid"
    MULTIPLICATION_OVERFLOW = "MultiplicationOverflow"
    RATE_OVERFLOW = "RateOverflow"
    COUNTER_OVERFLOW = "CounterOverflow"
    VALUE_OUT_OF_RANGE = "ValueOutOfRange"
    NO_LIQUIDITY = "NoLiquidity"
    INSUFFICIENT_BALANCE = "InsufficientBalance"
    SUPPLY_CAP_EXCEEDED = "SupplyCapExceeded"
    TRANSFER_FAILED = "TransferFailed"
    INSUFFICIENT_FUNDS = "InsufficientFunds"


class ExchangeError(Exception):
    """Base class for every engine failure. `kind` is the stable error tag."""

    kind: ErrorKind

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.kind.value)


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------

class ValidationError(ExchangeError, ValueError):
    """Raised when a call violates input or entry-point preconditions."""
    pass


class ExchangeArithmeticError(ExchangeError, ArithmeticError):
    """Raised when a conversion or counter update would leave the u256 domain."""
    pass


class LiquidityError(ExchangeError):
    """Raised when the pool or the caller cannot cover the requested amount."""
    pass


class TransferError(ExchangeError):
    """Raised when an outward native-currency payment cannot be completed."""
    pass


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

class AmountTooSmall(ValidationError):
    kind = ErrorKind.AMOUNT_TOO_SMALL


class InvalidRecipient(ValidationError):
    kind = ErrorKind.INVALID_RECIPIENT


class DirectTransferDisabled(ValidationError):
    kind = ErrorKind.DIRECT_TRANSFER_DISABLED


class DirectNativeTransferNotAllowed(ValidationError):
    kind = ErrorKind.DIRECT_NATIVE_TRANSFER_NOT_ALLOWED


class WrongEnvironment(ValidationError):
    """Raised when a call arrives with a chain id other than the engine's."""

    kind = ErrorKind.WRONG_ENVIRONMENT

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(f"Wrong environment: expected chain id {expected}, got {actual}")
        self.expected = expected
        self.actual = actual


class ReentrantCall(ValidationError):
    kind = ErrorKind.REENTRANT_CALL


# ---------------------------------------------------------------------------
# Arithmetic
# ---------------------------------------------------------------------------

class RateInvalid(ExchangeArithmeticError):
    kind = ErrorKind.RATE_INVALID


class MultiplicationOverflow(ExchangeArithmeticError):
    kind = ErrorKind.MULTIPLICATION_OVERFLOW


class RateOverflow(ExchangeArithmeticError):
    kind = ErrorKind.RATE_OVERFLOW


class CounterOverflow(ExchangeArithmeticError):
    kind = ErrorKind.COUNTER_OVERFLOW


class ValueOutOfRange(ExchangeArithmeticError):
    kind = ErrorKind.VALUE_OUT_OF_RANGE


# ---------------------------------------------------------------------------
# Liquidity
# ---------------------------------------------------------------------------

class NoLiquidity(LiquidityError):
    kind = ErrorKind.NO_LIQUIDITY


class InsufficientBalance(LiquidityError):
    """Raised when a seller holds fewer tokens than they offer.

    Attributes
    ----------
    requested : int
        Token amount the caller tried to sell.
    available : int
        Token balance the caller actually holds.
    """

    kind = ErrorKind.INSUFFICIENT_BALANCE

    def __init__(self, requested: int, available: int) -> None:
        super().__init__(f"Insufficient balance: requested={requested}, available={available}")
        self.requested = requested
        self.available = available


class SupplyCapExceeded(LiquidityError):
    kind = ErrorKind.SUPPLY_CAP_EXCEEDED

    def __init__(self, amount: int, total_supply: int, max_supply: int) -> None:
        super().__init__(
            f"Mint of {amount} would exceed max supply {max_supply} (current {total_supply})"
        )
        self.amount = amount
        self.total_supply = total_supply
        self.max_supply = max_supply


# ---------------------------------------------------------------------------
# Transfer
# ---------------------------------------------------------------------------

class TransferFailed(TransferError):
    kind = ErrorKind.TRANSFER_FAILED


class InsufficientFunds(TransferError):
    kind = ErrorKind.INSUFFICIENT_FUNDS

    def __init__(self, required: int, available: int) -> None:
        super().__init__(f"Insufficient funds: required={required}, available={available}")
        self.required = required
        self.available = available
