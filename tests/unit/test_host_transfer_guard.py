import pytest

from curve_exchange.host import NativeBank
from curve_exchange.transfer_guard import TransferGuard
from curve_exchange.core.constants import ZERO_ADDRESS
from curve_exchange.core.exc import (
    AmountTooSmall,
    InsufficientFunds,
    InvalidRecipient,
    TransferFailed,
)

POOL = "0x" + "e" * 40
ALICE = "0x" + "a" * 40
BOB = "0x" + "b" * 40


def _guard(pool_balance: int = 1_000):
    bank = NativeBank()
    bank.credit(POOL, pool_balance)
    return bank, TransferGuard(bank, POOL)


def test_send_native_moves_funds():
    bank, guard = _guard()
    guard.send_native(ALICE, 300)
    assert bank.balance_of(POOL) == 700
    assert bank.balance_of(ALICE) == 300


@pytest.mark.parametrize("to", [ZERO_ADDRESS, "", None])
def test_invalid_recipient(to):
    _, guard = _guard()
    with pytest.raises(InvalidRecipient):
        guard.send_native(to, 1)


def test_zero_amount():
    _, guard = _guard()
    with pytest.raises(AmountTooSmall):
        guard.send_native(ALICE, 0)


def test_insufficient_funds():
    bank, guard = _guard(10)
    with pytest.raises(InsufficientFunds) as ei:
        guard.send_native(ALICE, 11)
    assert (ei.value.required, ei.value.available) == (11, 10)
    assert bank.balance_of(POOL) == 10


def test_refusing_recipient_fails_and_bank_is_unchanged():
    bank, guard = _guard()
    bank.register_receiver(ALICE, lambda sender, amount: False)
    print("[transfer-guard] recipient hook returns False -> TransferFailed")
    with pytest.raises(TransferFailed):
        guard.send_native(ALICE, 100)
    assert bank.balance_of(POOL) == 1_000
    assert bank.balance_of(ALICE) == 0


def test_raising_recipient_reverts_its_own_side_effects():
    bank, guard = _guard()

    def hook(sender, amount):
        bank.transfer(ALICE, BOB, amount)
        raise RuntimeError("fallback reverted")

    bank.register_receiver(ALICE, hook)
    with pytest.raises(TransferFailed):
        guard.send_native(ALICE, 100)
    assert bank.balance_of(BOB) == 0
    assert bank.balance_of(POOL) == 1_000


def test_accepting_recipient_hook_runs():
    bank, guard = _guard()
    seen = []
    bank.register_receiver(ALICE, lambda sender, amount: seen.append((sender, amount)))
    guard.send_native(ALICE, 5)
    assert seen == [(POOL, 5)]
    bank.unregister_receiver(ALICE)
    guard.send_native(ALICE, 5)
    assert seen == [(POOL, 5)]
    assert bank.balance_of(ALICE) == 10
