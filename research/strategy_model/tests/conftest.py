"""Shared fixtures: a seeded strategy over an in-memory vault and token"""
import pytest
from strategy_model.src.constants import ONE_ETHER
from strategy_model.src.state.strategy_state import StrategyState
from strategy_model.src.state.vault import InMemoryVault, InMemoryTokenLedger

ADMIN = "0xadmin"
TREASURY = "0xtreasury"
ALICE = "0xalice"
BOB = "0xbob"
START = 1_700_000_000


@pytest.fixture
def vault():
    return InMemoryVault(capacity=10_000 * ONE_ETHER, recipient=TREASURY, admins={ADMIN})


@pytest.fixture
def token():
    return InMemoryTokenLedger()


@pytest.fixture
def state(vault):
    return StrategyState.create(vault)
