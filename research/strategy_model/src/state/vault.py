"""Vault and token collaborators

The strategy never holds custody. It reads deposit figures from the vault,
share accounting from the token, and asks the token to move value when a
fee is charged. The in-memory versions back the tests and the research
simulation.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, Protocol, Set
from ..constants import ZERO_ADDRESS

logger = logging.getLogger(__name__)


class VaultView(Protocol):
    def total_deposited(self) -> int: ...
    def max_capacity(self) -> int: ...
    def user_deposit(self, user: str) -> int: ...
    def fee_recipient(self) -> str: ...
    def is_authorized(self, caller: str) -> bool: ...


class TokenLedger(Protocol):
    def total_supply(self) -> int: ...
    def total_shares(self) -> int: ...
    def balance_of(self, user: str) -> int: ...
    def transfer_value(self, src: str, dst: str, amount: int) -> bool: ...


def is_null_identity(identity) -> bool:
    return not identity or identity == ZERO_ADDRESS


@dataclass
class InMemoryVault:
    """Deposit bookkeeping for a single asset vault"""
    capacity: int
    recipient: str
    admins: Set[str] = field(default_factory=set)
    deposits: Dict[str, int] = field(default_factory=dict)
    deposited: int = 0

    def deposit(self, user: str, amount: int) -> None:
        """Deposit into the vault, growing the user's cumulative figure"""
        if self.deposited + amount > self.capacity:
            raise ValueError("Deposit exceeds vault capacity")
        self.deposited += amount
        self.deposits[user] = self.deposits.get(user, 0) + amount

    def withdraw(self, user: str, amount: int) -> None:
        """Withdraw from the vault"""
        if amount > self.deposits.get(user, 0):
            raise ValueError("Insufficient deposit in vault")
        self.deposited -= amount
        self.deposits[user] -= amount

    def total_deposited(self) -> int:
        return self.deposited

    def max_capacity(self) -> int:
        return self.capacity

    def user_deposit(self, user: str) -> int:
        return self.deposits.get(user, 0)

    def fee_recipient(self) -> str:
        return self.recipient

    def is_authorized(self, caller: str) -> bool:
        return caller in self.admins


@dataclass
class InMemoryTokenLedger:
    """Share token whose supply grows as the strategy earns yield

    total_supply is the value backing all shares; a balance is denominated
    in value, so fees move value between holders without touching shares.
    """
    supply: int = 0
    shares: int = 0
    balances: Dict[str, int] = field(default_factory=dict)

    def mint(self, user: str, amount: int, shares: int) -> None:
        self.supply += amount
        self.shares += shares
        self.balances[user] = self.balances.get(user, 0) + amount

    def accrue(self, amount: int) -> None:
        """Grow supply pro rata across holders, raising value per share"""
        if self.supply == 0:
            return
        for user, balance in self.balances.items():
            self.balances[user] = balance + (balance * amount) // self.supply
        self.supply += amount

    def total_supply(self) -> int:
        return self.supply

    def total_shares(self) -> int:
        return self.shares

    def balance_of(self, user: str) -> int:
        return self.balances.get(user, 0)

    def transfer_value(self, src: str, dst: str, amount: int) -> bool:
        if self.balances.get(src, 0) < amount:
            logger.warning("Transfer of %d from %s refused, balance %d", amount, src, self.balances.get(src, 0))
            return False
        self.balances[src] -= amount
        self.balances[dst] = self.balances.get(dst, 0) + amount
        return True
