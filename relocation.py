"""
Equal-standard-of-living salary solver.
Finds the salary a household needs in another city to keep the same net
take-home pay once expenses are repriced with cost-of-living indices.
"""
from dataclasses import dataclass, replace
from typing import Dict, List, Optional

from loguru import logger

from cost_of_living import COST_OF_LIVING_2024, CostOfLivingTable, convert_expenses
from solver import ConvergenceError, secant_method
from take_home import HouseholdProfile, NetTakeHomeBreakdown, compute_net_take_home, modified_agi
from tax_utils import TAX_TABLES_2024, TaxYearTables, four_oh_one_k_limit, roth_ira_limit

SALARY_SEARCH_START = (1.0, 1_000_000.0)


@dataclass
class RelocationResult:
    """Outcome of solving for the destination salary"""
    converged: bool
    source: HouseholdProfile
    source_breakdown: NetTakeHomeBreakdown
    target_net_take_home: float
    profile: Optional[HouseholdProfile] = None
    breakdown: Optional[NetTakeHomeBreakdown] = None
    message: str = ""

    @property
    def salary(self) -> Optional[float]:
        return self.profile.salary if self.profile is not None else None

    @property
    def salary_change(self) -> Optional[float]:
        if self.profile is None:
            return None
        return self.profile.salary - self.source.salary


def _with_salary(profile: HouseholdProfile, salary: float, max_401k: float) -> HouseholdProfile:
    """Profile at a new salary, with the 401(k) rate clamped to the dollar limit"""
    rate = profile.four_oh_one_k
    if salary > 0 and salary * rate > max_401k:
        rate = max_401k / salary
    return replace(profile, salary=salary, four_oh_one_k=rate)


def _roth_message(before: float, after: float) -> str:
    base = f"Roth IRA contribution has been adjusted from ${before:,.0f} to ${after:,.0f}."
    if before > after:
        return f"{base} The excess is assumed to be moved into after tax investments."
    if before < after:
        return f"{base} The increase is taken from after tax investments."
    return ""


def solve_required_salary(source: HouseholdProfile,
                          dest_city: str,
                          tables: TaxYearTables = TAX_TABLES_2024,
                          col_table: CostOfLivingTable = COST_OF_LIVING_2024,
                          housing_override: Optional[float] = None,
                          tolerance: float = 1e-6,
                          max_iterations: int = 100) -> RelocationResult:
    """
    Solve for the destination-city salary that reproduces the source net take-home.

    Roth IRA and after-tax investments are zeroed while solving, since they do
    not depend on where the household lives, and are re-derived afterwards:
    the Roth contribution is capped at the destination Roth limit and the
    remainder goes to after-tax investments.

    Args:
        source: Household profile in its current city
        dest_city: City to move to
        tables: Tax-year tables
        col_table: Cost-of-living indices
        housing_override: Monthly amount replacing the largest housing expense
        tolerance: Net take-home tolerance in dollars
        max_iterations: Secant iteration cap

    Returns:
        RelocationResult; converged is False when no salary could be found
    """
    source_breakdown = compute_net_take_home(source, tables)
    invested_after_tax = source.roth_ira_contribution + source.after_tax_investments

    max_401k = four_oh_one_k_limit(source.age.catchup_401k_roth, tables)

    # both sides of the objective use the clamped 401(k)
    working = _with_salary(replace(source, roth_ira_contribution=0.0, after_tax_investments=0.0),
                           source.salary, max_401k)
    target = compute_net_take_home(working, tables).net_take_home

    dest_base = replace(
        working,
        city=dest_city,
        expenses=convert_expenses(source.expenses, source.city, dest_city, col_table, housing_override),
    )

    def objective(salary: float) -> float:
        candidate = _with_salary(dest_base, salary, max_401k)
        return compute_net_take_home(candidate, tables).net_take_home - target

    try:
        salary = secant_method(objective, *SALARY_SEARCH_START,
                               tolerance=tolerance, max_iterations=max_iterations)
    except ConvergenceError as e:
        logger.warning(f"Could not solve salary for {source.city} -> {dest_city}: {e}")
        return RelocationResult(
            converged=False,
            source=source,
            source_breakdown=source_breakdown,
            target_net_take_home=target,
            message=f"Could not find a salary in {dest_city} matching your take-home pay: {e}",
        )

    dest = _with_salary(dest_base, salary, max_401k)
    max_roth = roth_ira_limit(modified_agi(dest, tables), dest.filing_status,
                              dest.age.catchup_401k_roth, tables)
    roth = max(0.0, min(invested_after_tax, max_roth))
    dest = replace(dest, roth_ira_contribution=roth, after_tax_investments=invested_after_tax - roth)

    logger.info(f"Salary for {dest_city} matching {source.city} take-home: ${salary:,.2f}")
    return RelocationResult(
        converged=True,
        source=source,
        source_breakdown=source_breakdown,
        target_net_take_home=target,
        profile=dest,
        breakdown=compute_net_take_home(dest, tables),
        message=_roth_message(source.roth_ira_contribution, roth),
    )


def compare_breakdowns(local: NetTakeHomeBreakdown,
                       remote: NetTakeHomeBreakdown) -> List[Dict[str, float]]:
    """Side-by-side tax and contribution rows for the comparison chart"""
    fields = [
        ("Federal tax", "federal_tax"),
        ("State tax", "state_tax"),
        ("City tax", "city_tax"),
        ("Social Security", "social_security"),
        ("Medicare", "medicare"),
        ("401(k)", "four_oh_one_k"),
        ("HSA", "hsa"),
        ("Roth IRA", "roth_ira"),
        ("After Tax", "after_tax_investments"),
    ]
    return [
        {'name': name, 'local': getattr(local, attr), 'remote': getattr(remote, attr)}
        for name, attr in fields
    ]


def compare_expenses(local: HouseholdProfile, remote: HouseholdProfile) -> List[Dict[str, float]]:
    """Per-line monthly expense rows, local vs remote"""
    return [
        {'name': mine.name, 'local': mine.amount, 'remote': theirs.amount}
        for mine, theirs in zip(local.expenses, remote.expenses)
    ]
