"""Withdrawal gate tests"""
import pytest

from strategy_model.src.constants import DAY_IN_SECONDS, ONE_ETHER
from strategy_model.src.errors import TransferFailedError, WithdrawalLockedError
from strategy_model.src.instructions.lock_manager import lock_deposit
from strategy_model.src.instructions.withdrawal import process_withdrawal
from strategy_model.src.state.lock import LockPeriod
from strategy_model.src.state.vault import InMemoryTokenLedger

from conftest import ALICE, START, TREASURY


def _ledger():
    return InMemoryTokenLedger(supply=11_000, shares=10_000, balances={ALICE: 5000})


def test_locked_user_cannot_withdraw(vault, state):
    vault.deposit(ALICE, ONE_ETHER)
    lock_deposit(state, vault, ALICE, LockPeriod.THIRTY_DAYS, now=START)
    token = _ledger()
    released = []
    with pytest.raises(WithdrawalLockedError):
        process_withdrawal(state, token, ALICE, lambda: released.append(1), now=START)
    assert released == []
    assert token.balance_of(ALICE) == 5000


def test_fee_charged_before_release(vault, state):
    vault.deposit(ALICE, ONE_ETHER)
    lock_deposit(state, vault, ALICE, LockPeriod.THIRTY_DAYS, now=START)
    token = _ledger()
    seen = []

    def release():
        seen.append(token.balance_of(ALICE))
        vault.withdraw(ALICE, ONE_ETHER)
        return ONE_ETHER

    result = process_withdrawal(state, token, ALICE, release, now=START + 30 * DAY_IN_SECONDS)
    assert result == ONE_ETHER
    assert seen == [4950]
    assert token.balance_of(TREASURY) == 50
    assert vault.user_deposit(ALICE) == 0


def test_failed_release_refunds_fee(vault, state):
    token = _ledger()
    events_before = list(state.events)

    def release():
        raise ValueError("Insufficient deposit in vault")

    with pytest.raises(ValueError):
        process_withdrawal(state, token, ALICE, release, now=START)
    assert token.balance_of(ALICE) == 5000
    assert token.balance_of(TREASURY) == 0
    assert ALICE not in state.high_water_mark.user_marks
    assert state.events == events_before


class OneShotLedger(InMemoryTokenLedger):
    """Accepts the first transfer and refuses the rest"""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.transfers = 0

    def transfer_value(self, src, dst, amount):
        self.transfers += 1
        if self.transfers > 1:
            return False
        return super().transfer_value(src, dst, amount)


def test_refused_refund_raises_transfer_failed(vault, state):
    token = OneShotLedger(supply=11_000, shares=10_000, balances={ALICE: 5000})
    events_before = list(state.events)

    def release():
        raise ValueError("Insufficient deposit in vault")

    with pytest.raises(TransferFailedError) as excinfo:
        process_withdrawal(state, token, ALICE, release, now=START)
    assert isinstance(excinfo.value.__context__, ValueError)
    assert token.transfers == 2
    assert ALICE not in state.high_water_mark.user_marks
    assert state.events == events_before
