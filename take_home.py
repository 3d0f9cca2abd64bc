"""
Net take-home pay for a household.
Layers federal, state and city income tax over one taxable base, adds FICA,
retirement contributions and annualized expenses, and reports the breakdown.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List

from cost_of_living import Category
from tax import FilingStatus, evaluate_tax
from tax_utils import (
    TAX_TABLES_2024, TaxYearTables, four_oh_one_k_limit, hsa_limit,
    jurisdiction_rules, roth_ira_limit,
)


class AgeBracket(str, Enum):
    """Age ranges that change contribution limits"""
    UNDER_50 = "< 50"
    FROM_50_TO_55 = ">= 50, < 55"
    OVER_55 = ">= 55"

    @property
    def catchup_401k_roth(self) -> bool:
        return self is not AgeBracket.UNDER_50

    @property
    def catchup_hsa(self) -> bool:
        return self is AgeBracket.OVER_55


@dataclass
class ExpenseItem:
    """One monthly expense line"""
    name: str
    category: Category
    amount: float  # monthly dollars

    def __post_init__(self):
        self.category = Category(self.category)


@dataclass
class HouseholdProfile:
    """Income, contributions, location and expenses for one household"""
    city: str = "Philadelphia"
    filing_status: FilingStatus = FilingStatus.SINGLE
    age: AgeBracket = AgeBracket.UNDER_50
    salary: float = 100_000
    four_oh_one_k: float = 0.05  # fraction of salary, pre-tax
    hsa_contribution: float = 1_000
    roth_ira_contribution: float = 0.0
    after_tax_investments: float = 0.0
    expenses: List[ExpenseItem] = field(default_factory=list)

    def __post_init__(self):
        self.filing_status = FilingStatus(self.filing_status)
        self.age = AgeBracket(self.age)

    @property
    def monthly_expenses(self) -> float:
        return sum(e.amount for e in self.expenses)


@dataclass
class NetTakeHomeBreakdown:
    """Annual dollar breakdown of where gross pay goes"""
    pre_tax_income: float
    taxable_income: float
    federal_tax: float
    state_tax: float
    city_tax: float
    social_security: float
    medicare: float
    four_oh_one_k: float
    hsa: float
    roth_ira: float
    after_tax_investments: float
    expenses: float
    net_take_home: float

    @property
    def total_tax(self) -> float:
        return self.federal_tax + self.state_tax + self.city_tax + self.social_security + self.medicare

    @property
    def total_invested(self) -> float:
        return self.four_oh_one_k + self.hsa + self.roth_ira + self.after_tax_investments

    @property
    def savings_rate(self) -> float:
        """Net take-home as a fraction of gross pay (0 when there is no pay)"""
        if self.pre_tax_income == 0:
            return 0.0
        return self.net_take_home / self.pre_tax_income


def modified_agi(profile: HouseholdProfile, tables: TaxYearTables = TAX_TABLES_2024) -> float:
    """Salary less the standard deduction and pre-tax contributions"""
    return (profile.salary
            - tables.standard_deduction[profile.filing_status]
            - profile.salary * profile.four_oh_one_k
            - profile.hsa_contribution)


def compute_net_take_home(profile: HouseholdProfile,
                          tables: TaxYearTables = TAX_TABLES_2024) -> NetTakeHomeBreakdown:
    """
    Compute the annual take-home breakdown for a profile.

    Every jurisdiction taxes the same base: salary minus the standard
    deduction, 401(k) and HSA contributions. Limits are not enforced here;
    see validate_profile.
    """
    federal_rule, state_rule, city_rule = jurisdiction_rules(profile.city, tables)
    status = profile.filing_status

    pre_tax_income = profile.salary
    social_security = pre_tax_income * tables.social_security_rate
    medicare = pre_tax_income * tables.medicare_rate

    four_oh_one_k = profile.salary * profile.four_oh_one_k
    hsa = profile.hsa_contribution
    taxable_income = modified_agi(profile, tables)

    federal_tax = evaluate_tax(taxable_income, federal_rule, status)
    state_tax = evaluate_tax(taxable_income, state_rule, status)
    city_tax = evaluate_tax(taxable_income, city_rule, status)

    expenses = 12 * profile.monthly_expenses

    net_take_home = (pre_tax_income
                     - federal_tax
                     - state_tax
                     - city_tax
                     - social_security
                     - medicare
                     - four_oh_one_k
                     - hsa
                     - profile.roth_ira_contribution
                     - profile.after_tax_investments
                     - expenses)

    return NetTakeHomeBreakdown(
        pre_tax_income=pre_tax_income,
        taxable_income=taxable_income,
        federal_tax=federal_tax,
        state_tax=state_tax,
        city_tax=city_tax,
        social_security=social_security,
        medicare=medicare,
        four_oh_one_k=four_oh_one_k,
        hsa=hsa,
        roth_ira=profile.roth_ira_contribution,
        after_tax_investments=profile.after_tax_investments,
        expenses=expenses,
        net_take_home=net_take_home,
    )


def validate_profile(profile: HouseholdProfile, tables: TaxYearTables = TAX_TABLES_2024) -> List[str]:
    """
    Check a profile against contribution limits and available income.

    Returns:
        List of human-readable problems (empty when the profile is valid)
    """
    issues = []

    if profile.salary < 0:
        issues.append("Salary cannot be negative")

    if not 0 <= profile.four_oh_one_k <= 1:
        issues.append(f"401(k) contribution must be between 0% and 100%, got {profile.four_oh_one_k:.1%}")
    else:
        max_401k = four_oh_one_k_limit(profile.age.catchup_401k_roth, tables)
        if profile.salary * profile.four_oh_one_k > max_401k:
            issues.append(f"Your 401(k) contribution cannot exceed ${max_401k:,.0f}")

    max_hsa = hsa_limit(profile.filing_status, profile.age.catchup_hsa, tables)
    if profile.hsa_contribution > max_hsa:
        issues.append(f"Your HSA contribution cannot exceed ${max_hsa:,.0f}")

    magi = modified_agi(profile, tables)
    max_roth = roth_ira_limit(magi, profile.filing_status, profile.age.catchup_401k_roth, tables)
    if profile.roth_ira_contribution > max_roth:
        issues.append(
            f"Your Roth IRA contribution cannot exceed ${max_roth:,.0f} "
            f"since your modified AGI is ${magi:,.0f}")

    for value, label in [(profile.hsa_contribution, "HSA"),
                         (profile.roth_ira_contribution, "Roth IRA"),
                         (profile.after_tax_investments, "After-tax investment")]:
        if value < 0:
            issues.append(f"{label} contribution cannot be negative")

    annual_expenses = 12 * profile.monthly_expenses
    if magi - profile.roth_ira_contribution - profile.after_tax_investments - annual_expenses < 0:
        issues.append(
            f"Expenses and investments cannot exceed modified gross income (${magi:,.0f})")

    if profile.city not in tables.city_states:
        issues.append(f"Unknown city: {profile.city}")

    return issues
