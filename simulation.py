"""
Monte Carlo portfolio drawdown simulation with a constant withdrawal.
Pure functions for simulation logic, decoupled from UI.
"""
import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Protocol

import numpy as np
from loguru import logger

MAX_SIMULATIONS = 1_000
WEIGHT_TOLERANCE = 1e-4


class UniformSource(Protocol):
    """Anything that yields uniform draws in [0, 1) from random()"""

    def random(self) -> float:
        ...


@dataclass
class Fund:
    """One asset in the portfolio (annual, real returns)"""
    name: str
    mean: float
    std: float
    weight: float


def default_portfolio() -> List[Fund]:
    return [
        Fund(name="Stocks", mean=0.08, std=0.15, weight=0.5),
        Fund(name="Bonds", mean=0.03, std=0.05, weight=0.5),
    ]


@dataclass
class DrawdownParams:
    """Parameters for the drawdown simulation"""
    years: int = 30
    num_sims: int = 100
    initial_investment: float = 1_000_000
    withdraw_rate: float = 0.04
    inflation: float = 0.02
    portfolio: List[Fund] = field(default_factory=default_portfolio)
    random_seed: Optional[int] = None

    @property
    def withdrawal(self) -> float:
        """Constant annual withdrawal, fixed off the initial balance"""
        return self.initial_investment * self.withdraw_rate


@dataclass
class SimulationRun:
    """Year-end balances for one trial; index 0 is the initial balance"""
    balances: List[float]
    bankrupt: bool


@dataclass
class DrawdownResults:
    """Trials plus per-year aggregates over the trials still solvent"""
    runs: List[SimulationRun]
    years: np.ndarray
    mean: np.ndarray
    median: np.ndarray
    tenth: np.ndarray
    solvent_counts: np.ndarray

    @property
    def bankrupt_count(self) -> int:
        return sum(1 for run in self.runs if run.bankrupt)

    @property
    def bankrupt_rate(self) -> float:
        return self.bankrupt_count / len(self.runs) if self.runs else 0.0

    @property
    def success_rate(self) -> float:
        return 1.0 - self.bankrupt_rate


def box_muller(rng: UniformSource) -> float:
    """Standard normal variate from two uniform draws"""
    # 1 - u maps [0, 1) onto (0, 1] so the log stays finite
    u1 = 1.0 - rng.random()
    u2 = rng.random()
    return math.sqrt(-2.0 * math.log(u1)) * math.cos(2.0 * math.pi * u2)


class DrawdownSimulator:
    """Monte Carlo simulation of a portfolio under constant withdrawals"""

    def __init__(self, params: DrawdownParams, rng: Optional[UniformSource] = None):
        self.params = params
        self._validate_params()
        self.rng = rng if rng is not None else np.random.default_rng(params.random_seed)

    def _validate_params(self):
        """Validate simulation parameters"""
        if self.params.years < 0:
            raise ValueError(f"Years must be non-negative, got {self.params.years}")
        if not 0 < self.params.num_sims <= MAX_SIMULATIONS:
            raise ValueError(
                f"Number of simulations must be between 1 and {MAX_SIMULATIONS}, got {self.params.num_sims}")
        if not self.params.portfolio:
            raise ValueError("Portfolio must contain at least one fund")

        weight_total = sum(fund.weight for fund in self.params.portfolio)
        if abs(weight_total - 1.0) > WEIGHT_TOLERANCE:
            logger.warning(f"Portfolio weights sum to {weight_total:.4f}, not 1.0; returns are not fully allocated")

    def _portfolio_return(self) -> float:
        """Blend one independent normal draw per fund by weight"""
        return sum((fund.mean + fund.std * box_muller(self.rng)) * fund.weight
                   for fund in self.params.portfolio)

    def _run_trial(self) -> SimulationRun:
        balance = self.params.initial_investment
        withdrawal = self.params.withdrawal
        balances = [balance]

        for _ in range(self.params.years):
            balance -= withdrawal
            if balance < 0:
                break

            balance *= 1 + self._portfolio_return()
            balance *= 1 - self.params.inflation
            balances.append(balance)

        return SimulationRun(balances=balances, bankrupt=len(balances) < self.params.years + 1)

    def run_trials(self) -> List[SimulationRun]:
        """Run every trial and return the raw paths"""
        logger.debug(f"Running {self.params.num_sims} drawdown simulations over {self.params.years} years")
        return [self._run_trial() for _ in range(self.params.num_sims)]

    def run_simulation(self) -> DrawdownResults:
        """Run Monte Carlo simulation"""
        runs = self.run_trials()
        results = aggregate_paths(runs, self.params.years)
        logger.info(
            f"Drawdown simulation finished: {results.bankrupt_count}/{len(runs)} bankrupt "
            f"({results.bankrupt_rate:.1%})")
        return results


def aggregate_paths(runs: List[SimulationRun], years: int) -> DrawdownResults:
    """
    Mean, median and 10th percentile per year across solvent trials.

    Percentiles index the ascending sorted balances at floor(count * p).
    Years with no solvent trial report 0 for every statistic.
    """
    mean = np.zeros(years + 1)
    median = np.zeros(years + 1)
    tenth = np.zeros(years + 1)
    solvent_counts = np.zeros(years + 1, dtype=int)

    for year in range(years + 1):
        solvent = sorted(run.balances[year] for run in runs if len(run.balances) > year)
        count = len(solvent)
        solvent_counts[year] = count
        if count == 0:
            continue

        mean[year] = sum(solvent) / count
        median[year] = solvent[math.floor(count * 0.5)]
        tenth[year] = solvent[math.floor(count * 0.1)]

    return DrawdownResults(
        runs=runs,
        years=np.arange(years + 1),
        mean=mean,
        median=median,
        tenth=tenth,
        solvent_counts=solvent_counts,
    )


def calculate_summary_stats(results: DrawdownResults) -> Dict[str, float]:
    """Calculate summary statistics for the terminal year"""
    return {
        'mean': float(results.mean[-1]),
        'median': float(results.median[-1]),
        'p10': float(results.tenth[-1]),
        'bankrupt_count': results.bankrupt_count,
        'bankrupt_rate': results.bankrupt_rate,
        'success_rate': results.success_rate,
    }
