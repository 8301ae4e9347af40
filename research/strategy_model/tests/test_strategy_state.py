"""State container tests"""
import pytest

from strategy_model.src.constants import DEFAULT_PERFORMANCE_FEE_BPS
from strategy_model.src.errors import IncompleteConfigError
from strategy_model.src.state.lock import LockPeriod, UserLock, default_lock_configs
from strategy_model.src.state.strategy_state import StrategyState

from conftest import ALICE, TREASURY


def test_create_uses_vault_recipient(state):
    assert state.fee_config.recipient == TREASURY
    assert state.fee_config.fee_bps == DEFAULT_PERFORMANCE_FEE_BPS
    assert set(state.lock_configs) == set(LockPeriod)


def test_atomic_restores_on_error(state):
    with pytest.raises(RuntimeError):
        with state.atomic():
            state.user_locks[ALICE] = UserLock(1, 2, LockPeriod.THIRTY_DAYS, 3)
            state.high_water_mark.global_mark = 1
            state.emit("event")
            raise RuntimeError("abort")
    assert state.user_locks == {}
    assert state.high_water_mark.global_mark == 10_000
    assert state.events == []


def test_atomic_commits_on_success(state):
    with state.atomic():
        state.high_water_mark.global_mark = 12_000
    assert state.high_water_mark.global_mark == 12_000


def test_incomplete_lock_table_rejected(state):
    table = default_lock_configs()
    del table[LockPeriod.NONE]
    with pytest.raises(IncompleteConfigError):
        StrategyState(fee_config=state.fee_config, lock_configs=table)


def test_rollback_trims_only_block_events(state):
    state.emit("before")
    state.emit("also before")
    with pytest.raises(RuntimeError):
        with state.atomic():
            state.emit("inside")
            state.high_water_mark.user_marks[ALICE] = 12_000
            raise RuntimeError("abort")
    assert state.events == ["before", "also before"]
    assert state.high_water_mark.user_marks == {}


class UncopyableEvent:
    def __deepcopy__(self, memo):
        raise AssertionError("event history was copied")


def test_snapshot_does_not_copy_event_history(state):
    history = state.events
    for _ in range(1000):
        state.emit(UncopyableEvent())
    with state.atomic():
        state.emit("inside")
    assert state.events is history
    assert len(state.events) == 1001
