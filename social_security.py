"""
Social Security benefit estimate from a flat salary history.
AIME is approximated without wage indexing; PIA uses the 2024 bend points.
"""
import math
from dataclasses import dataclass
from typing import Optional

FULL_RETIREMENT_AGE = 67
MIN_CLAIM_AGE = 62
MAX_DELAY_AGE = 70
TAXABLE_WAGE_BASE = 168_600
TOP_EARNING_YEARS = 35

BEND_POINT_1 = 1_174
BEND_POINT_2 = 7_078
BEND_POINT_RATES = (0.90, 0.32, 0.15)

EARLY_REDUCTION_PER_MONTH = 5 / 9 / 100
EARLY_REDUCTION_PER_MONTH_EXTENDED = 5 / 12 / 100
DELAYED_CREDIT_PER_MONTH = 2 / 3 / 100


@dataclass
class SocialSecurityInput:
    """Earnings history assumptions for one worker"""
    current_age: int
    retirement_age: int  # stops working; need not equal claim_age
    annual_income: float  # constant, no raises
    claim_age: Optional[float] = None  # defaults to retirement_age
    work_start_age: int = 22


def calculate_aime(annual_income: float, years_worked: float) -> float:
    """Average indexed monthly earnings over the top 35 years"""
    capped = min(annual_income, TAXABLE_WAGE_BASE)
    return capped * years_worked / TOP_EARNING_YEARS / 12


def calculate_pia(aime: float) -> float:
    """Primary insurance amount from AIME via the three-tier bend-point formula"""
    rate1, rate2, rate3 = BEND_POINT_RATES
    if aime <= BEND_POINT_1:
        return aime * rate1
    elif aime <= BEND_POINT_2:
        return BEND_POINT_1 * rate1 + (aime - BEND_POINT_1) * rate2
    return (BEND_POINT_1 * rate1
            + (BEND_POINT_2 - BEND_POINT_1) * rate2
            + (aime - BEND_POINT_2) * rate3)


def calculate_adjustment_factor(claim_age: float) -> float:
    """
    Multiplier on PIA for claiming before or after full retirement age.

    Early claims lose 5/9% per month for the first 36 months and 5/12% per
    month beyond that. Delayed claims earn 2/3% per month up to age 70.
    """
    months_from_fra = (claim_age - FULL_RETIREMENT_AGE) * 12

    if months_from_fra < 0:
        months_early = abs(months_from_fra)
        if months_early <= 36:
            return 1 - months_early * EARLY_REDUCTION_PER_MONTH
        return (1
                - 36 * EARLY_REDUCTION_PER_MONTH
                - (months_early - 36) * EARLY_REDUCTION_PER_MONTH_EXTENDED)
    elif months_from_fra > 0:
        months_delayed = min(months_from_fra, (MAX_DELAY_AGE - FULL_RETIREMENT_AGE) * 12)
        return 1 + months_delayed * DELAYED_CREDIT_PER_MONTH

    return 1.0


def estimate_annual_social_security(ss_input: SocialSecurityInput) -> float:
    """
    Estimate the annual benefit at the claim age.

    Returns 0 for claims before 62, when retirement is not after the current
    age, or when the estimate is not a finite positive number.
    """
    claim_age = ss_input.retirement_age if ss_input.claim_age is None else ss_input.claim_age

    if claim_age < MIN_CLAIM_AGE or ss_input.retirement_age <= ss_input.current_age:
        return 0.0

    years_worked = min(max(0, ss_input.retirement_age - ss_input.work_start_age), TOP_EARNING_YEARS)
    aime = calculate_aime(ss_input.annual_income, years_worked)
    monthly = round(calculate_pia(aime) * calculate_adjustment_factor(claim_age), 2)
    annual = 12 * monthly

    if not math.isfinite(annual) or annual <= 0:
        return 0.0
    return annual
