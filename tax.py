"""
Composable progressive tax model.
A tax rule is one of a small set of immutable variants that can nest through
filing-status dispatch; evaluate_tax reduces any rule to a dollar amount.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Tuple, Union

from loguru import logger


class FilingStatus(str, Enum):
    """Filing statuses modeled by the tax tables"""
    SINGLE = "Single"
    MARRIED = "Married"
    HEAD_OF_HOUSEHOLD = "Head of Household"


@dataclass(frozen=True)
class NoTax:
    """Jurisdiction levies no tax"""


@dataclass(frozen=True)
class Flat:
    """Fixed dollar tax independent of income (e.g. a per-capita city tax)"""
    amount: float


@dataclass(frozen=True)
class Percentage:
    """Proportional tax on the full taxable base"""
    rate: float


@dataclass(frozen=True)
class Bracket:
    """
    Progressive marginal-rate schedule.

    thresholds is an ordered sequence of (cumulative_upper_bound, marginal_rate)
    pairs. Bounds must be strictly increasing and the final bound must be
    infinite so the top rate absorbs all remaining income.
    """
    thresholds: Tuple[Tuple[float, float], ...]

    def __post_init__(self):
        thresholds = tuple((float(upper), float(rate)) for upper, rate in self.thresholds)
        if not thresholds:
            raise ValueError("Bracket requires at least one threshold")

        previous = 0.0
        for upper, _ in thresholds:
            if upper <= previous:
                raise ValueError(
                    f"Bracket thresholds must be strictly increasing and positive, got {upper} after {previous}")
            previous = upper

        if thresholds[-1][0] != float('inf'):
            raise ValueError(f"Final bracket threshold must be unbounded, got {thresholds[-1][0]}")

        object.__setattr__(self, 'thresholds', thresholds)


@dataclass(frozen=True)
class StatusBased:
    """Dispatch to a nested rule on filing status"""
    per_status: Mapping[FilingStatus, "TaxRule"] = field(default_factory=dict)

    def __post_init__(self):
        # Copy so later changes to the caller's mapping do not leak into the rule
        object.__setattr__(self, 'per_status', dict(self.per_status))


TaxRule = Union[StatusBased, Bracket, Percentage, Flat, NoTax]


def _bracket_tax(income: float, bracket: Bracket) -> float:
    if income <= 0:
        return 0.0

    tax = 0.0
    remaining = income
    lower = 0.0
    for upper, rate in bracket.thresholds:
        taxed = min(remaining, upper - lower)
        tax += taxed * rate
        remaining -= taxed
        lower = upper
        if remaining <= 0:
            break

    return tax


def evaluate_tax(income: float, rule: TaxRule, status: FilingStatus) -> float:
    """
    Reduce a tax rule to the dollar tax owed on income.

    Args:
        income: Taxable base (may be negative; only Percentage passes the sign through)
        rule: Tax rule to evaluate
        status: Filing status used for StatusBased dispatch

    Returns:
        Tax owed in dollars
    """
    if isinstance(rule, StatusBased):
        nested = rule.per_status.get(status)
        if nested is None:
            logger.warning(f"No tax rule for filing status {status.value!r}; treating as zero tax")
            return 0.0
        return evaluate_tax(income, nested, status)
    elif isinstance(rule, Bracket):
        return _bracket_tax(income, rule)
    elif isinstance(rule, Percentage):
        return income * rule.rate
    elif isinstance(rule, Flat):
        return rule.amount
    elif isinstance(rule, NoTax):
        return 0.0

    raise TypeError(f"Unsupported tax rule: {rule!r}")


def effective_tax_rate(income: float, rule: TaxRule, status: FilingStatus) -> float:
    """Tax owed as a fraction of income (0 for non-positive income)"""
    if income <= 0:
        return 0.0
    return evaluate_tax(income, rule, status) / income


def marginal_tax_rate(income: float, rule: TaxRule, status: FilingStatus) -> float:
    """
    Rate applied to the next dollar of income.

    Flat and NoTax rules have no marginal rate; a Bracket reports 0 until
    income is positive.
    """
    if isinstance(rule, StatusBased):
        nested = rule.per_status.get(status)
        return 0.0 if nested is None else marginal_tax_rate(income, nested, status)
    elif isinstance(rule, Bracket):
        if income <= 0:
            return 0.0
        for upper, rate in rule.thresholds:
            if income < upper:
                return rate
        return rule.thresholds[-1][1]
    elif isinstance(rule, Percentage):
        return rule.rate
    elif isinstance(rule, (Flat, NoTax)):
        return 0.0

    raise TypeError(f"Unsupported tax rule: {rule!r}")
