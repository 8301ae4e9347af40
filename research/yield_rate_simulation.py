import logging
import numpy as np
import matplotlib.pyplot as plt
from dataclasses import dataclass, field
from typing import List, Optional
import pandas as pd
from pathlib import Path
from datetime import datetime

from strategy_model.src.constants import BPS_SCALE, DAY_IN_SECONDS, ONE_ETHER
from strategy_model.src.errors import StatePreconditionError, TransferFailedError
from strategy_model.src.instructions.effective_rate import effective_rate
from strategy_model.src.instructions.lock_manager import is_locked, lock_bonus_rate, lock_deposit, lock_of, unlock_deposit
from strategy_model.src.instructions.performance_fee import pending_fee
from strategy_model.src.instructions.tier_classifier import bonus_of
from strategy_model.src.instructions.utilization_rate import calculate_rate
from strategy_model.src.instructions.withdrawal import process_withdrawal
from strategy_model.src.state.lock import LockPeriod
from strategy_model.src.state.rate_curve import RateCurveConfig
from strategy_model.src.state.strategy_state import StrategyState
from strategy_model.src.state.tier import Tier
from strategy_model.src.state.vault import InMemoryTokenLedger, InMemoryVault

logger = logging.getLogger(__name__)

GOVERNANCE = "0xgovernance"
TREASURY = "0xtreasury"

@dataclass
class SimulationParams:
    capacity: int = 100_000 * ONE_ETHER
    n_users: int = 50
    simulation_days: int = 365
    deposit_mean: float = 50.0  # ether, lognormal mean of each deposit
    deposit_sigma: float = 1.2
    deposit_probability: float = 0.05  # per user per day
    withdraw_probability: float = 0.01
    lock_probability: float = 0.02
    daily_yield_volatility: float = 0.002
    random_seed: Optional[int] = None
    experiment_name: str = "default"
    rate_curve: RateCurveConfig = field(default_factory=RateCurveConfig)

class YieldStrategySimulation:
    """Population of depositors driving utilization, locks and fees day by day"""

    def __init__(self, params: SimulationParams):
        self.params = params
        self.rng = np.random.default_rng(params.random_seed)
        self.vault = InMemoryVault(capacity=params.capacity, recipient=TREASURY, admins={GOVERNANCE})
        self.token = InMemoryTokenLedger()
        self.state = StrategyState.create(self.vault)
        self.state.rate_curve = params.rate_curve
        self.users = [f"0x{i:040x}" for i in range(1, params.n_users + 1)]
        self.records: List[dict] = []
        self.fees_collected = 0

    def _day_timestamp(self, day: int) -> int:
        return day * DAY_IN_SECONDS

    def _deposit(self, user: str) -> None:
        amount = int(self.rng.lognormal(np.log(self.params.deposit_mean), self.params.deposit_sigma) * ONE_ETHER)
        amount = min(amount, self.vault.max_capacity() - self.vault.total_deposited())
        if amount <= 0:
            return
        supply, shares = self.token.total_supply(), self.token.total_shares()
        minted = amount if supply == 0 else amount * shares // supply
        self.vault.deposit(user, amount)
        self.token.mint(user, amount, minted)

    def _withdraw(self, user: str, now: int) -> None:
        amount = self.vault.user_deposit(user)
        if amount == 0:
            return
        try:
            fee = pending_fee(self.state, self.token, user)
            process_withdrawal(self.state, self.token, user, lambda: self.vault.withdraw(user, amount), now=now)
            self.fees_collected += fee
        except (StatePreconditionError, TransferFailedError) as e:
            logger.debug("Withdrawal skipped: %s", e)

    def _lock(self, user: str, now: int) -> None:
        lock = lock_of(self.state, user)
        if lock is not None and lock.unlock_time <= now:
            unlock_deposit(self.state, user, now=now)
        period = LockPeriod(int(self.rng.integers(1, len(LockPeriod))))
        try:
            lock_deposit(self.state, self.vault, user, period, now=now)
        except StatePreconditionError as e:
            logger.debug("Lock skipped: %s", e)

    def simulate(self) -> pd.DataFrame:
        p = self.params
        for day in range(p.simulation_days):
            now = self._day_timestamp(day)
            for user in self.users:
                draw = self.rng.random()
                if draw < p.deposit_probability:
                    self._deposit(user)
                elif draw < p.deposit_probability + p.withdraw_probability:
                    self._withdraw(user, now)
                elif draw < p.deposit_probability + p.withdraw_probability + p.lock_probability:
                    self._lock(user, now)

            # Accrue a day of yield at the average effective rate plus noise
            rates = np.array([effective_rate(self.state, self.vault, u, now=now) for u in self.users])
            daily_return = rates.mean() / BPS_SCALE / 365 + self.rng.normal(0, p.daily_yield_volatility)
            if self.token.total_supply() > 0:
                self.token.accrue(max(int(self.token.total_supply() * daily_return), -self.token.total_supply()))

            self.records.append({
                "day": day,
                "utilization_bps": self.vault.total_deposited() * BPS_SCALE // self.vault.max_capacity(),
                "base_rate_bps": calculate_rate(self.vault.max_capacity(), self.vault.total_deposited(), self.state.rate_curve),
                "mean_effective_rate_bps": rates.mean(),
                "locked_users": sum(is_locked(self.state, u, now=now) for u in self.users),
                "value_per_share": (self.token.total_supply() * BPS_SCALE // self.token.total_shares()) if self.token.total_shares() else BPS_SCALE,
                "pending_fees": sum(pending_fee(self.state, self.token, u) for u in self.users) / ONE_ETHER,
                "fees_collected": self.fees_collected / ONE_ETHER,
            })
        return pd.DataFrame(self.records)

    def plot_results(self, df: pd.DataFrame):
        output_dir = Path('research/results') / self.params.experiment_name
        output_dir.mkdir(parents=True, exist_ok=True)

        fig, (ax1, ax2, ax3) = plt.subplots(3, 1, figsize=(12, 12))

        ax1.plot(df["day"], df["utilization_bps"] / 100, label='Utilization')
        ax1.axhline(y=self.params.rate_curve.kink_bps / 100, color='r', linestyle='--', alpha=0.3, label='Kink')
        ax1.set_ylabel('Utilization (%)')
        ax1.set_title('Vault Utilization Over Time')
        ax1.legend()
        ax1.grid(True)

        ax2.plot(df["day"], df["base_rate_bps"] / 100, label='Base Rate')
        ax2.plot(df["day"], df["mean_effective_rate_bps"] / 100, label='Mean Effective Rate', color='orange')
        ax2.set_ylabel('Rate (%)')
        ax2.set_title('Rates Over Time')
        ax2.legend()
        ax2.grid(True)

        ax3.plot(df["day"], df["fees_collected"], label='Fees Collected')
        ax3.plot(df["day"], df["pending_fees"], label='Pending Fees', alpha=0.6)
        ax3.set_ylabel('Fees (ether)')
        ax3.set_xlabel('Time (days)')
        ax3.set_title('Performance Fees')
        ax3.legend()
        ax3.grid(True)

        plt.tight_layout()

        plot_name = f"kink_{self.params.rate_curve.kink_bps}_base_{self.params.rate_curve.base_rate_bps}"
        if self.params.random_seed is not None:
            plot_name += f"_seed_{self.params.random_seed}"

        plt.savefig(output_dir / f"{plot_name}.png")
        df.to_csv(output_dir / f"{plot_name}.csv", index=False)
        plt.close()

def rate_table(state: StrategyState, capacity: int = BPS_SCALE) -> pd.DataFrame:
    """Effective rate grid: utilization x tier, unlocked and for each lock period"""
    utilization = np.arange(0, BPS_SCALE + 1, 100)
    rows = []
    for u in utilization:
        base = calculate_rate(capacity, int(u) * capacity // BPS_SCALE, state.rate_curve)
        for tier in Tier:
            row = {"utilization_pct": u / 100, "tier": tier.name, "unlocked": base + bonus_of(state, tier)}
            for period in LockPeriod:
                multiplier = state.lock_configs[period].bonus_multiplier_bps
                row[period.name.lower()] = lock_bonus_rate(base, bonus_of(state, tier), multiplier)
            rows.append(row)
    return pd.DataFrame(rows)

def compare_rate_curves(curves: List[RateCurveConfig], base_params: SimulationParams):
    """Plot several rate curves over the full utilization range"""
    output_dir = Path('research/results/rate_curve_comparison')
    output_dir.mkdir(parents=True, exist_ok=True)

    fig, ax = plt.subplots(figsize=(12, 6))
    deposited = [base_params.capacity * i // 500 for i in range(501)]
    for curve in curves:
        rates = np.array([calculate_rate(base_params.capacity, d, curve) for d in deposited])
        label = f"kink={curve.kink_bps / 100:.0f}%, base={curve.base_rate_bps}, low={curve.low_slope}, high={curve.high_slope}"
        ax.plot(np.linspace(0, 100, len(rates)), rates / 100, label=label)

    ax.set_xlabel('Utilization (%)')
    ax.set_ylabel('Base Rate (%)')
    ax.set_title('Utilization Rate Curves')
    ax.legend(loc='upper left')
    ax.grid(True, alpha=0.3)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    plt.savefig(output_dir / f"rate_curves_{timestamp}.png", bbox_inches='tight', dpi=300)
    plt.close()

def main():
    logging.basicConfig(level=logging.WARNING, format="%(asctime)s %(name)s %(levelname)s %(message)s")

    curves = [
        RateCurveConfig(),
        RateCurveConfig(kink_bps=9000, base_rate_bps=100, low_slope=4, high_slope=80),
        RateCurveConfig(kink_bps=7000, base_rate_bps=300, low_slope=6, high_slope=30),
    ]
    base_params = SimulationParams(experiment_name="seed_config", random_seed=57, simulation_days=180)

    compare_rate_curves(curves, base_params)

    sim = YieldStrategySimulation(base_params)
    df = sim.simulate()
    sim.plot_results(df)
    print(df.describe())
    print(rate_table(sim.state).query("tier == 'GOLD'").head(20))

if __name__ == "__main__":
    main()
