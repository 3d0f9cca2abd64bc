"""
Coast FIRE projection using expected returns (no randomness).
Compares a portfolio left to compound against one that keeps receiving
monthly contributions, and finds when each reaches the retirement target.
"""
from dataclasses import dataclass
from typing import List, Optional

from loguru import logger

from social_security import SocialSecurityInput, estimate_annual_social_security


@dataclass
class CoastFireParams:
    """Inputs for the Coast FIRE calculator"""
    current_age: int = 30
    retirement_age: int = 67
    retirement_spend: float = 30_000  # annual, today's dollars
    current_invested: float = 100_000
    monthly_contribution: float = 500
    annual_return: float = 0.068  # real equity return
    safe_withdraw_rate: float = 0.04

    # Social Security offsets the spend target when enabled
    include_social_security: bool = False
    annual_income: float = 0.0
    claim_age: Optional[float] = None


@dataclass
class CoastFirePoint:
    """One year of the projection"""
    age: int
    coast_value: float  # no further contributions
    with_contributions: float
    target: float
    coast_from: Optional[float] = None  # contribute until the Coast FIRE age, then coast


@dataclass
class CoastFireProjection:
    points: List[CoastFirePoint]
    target_at_retirement: float
    fire_age: Optional[int]
    coast_fire_age: Optional[int]
    is_coast_fire: bool


def future_value_of_contributions(monthly_contribution: float, annual_return: float, months: int) -> float:
    """Future value of a monthly annuity compounded at annual_return / 12"""
    if months <= 0:
        return 0.0
    monthly_return = annual_return / 12
    if monthly_return == 0:
        return monthly_contribution * months
    return monthly_contribution * ((1 + monthly_return) ** months - 1) / monthly_return


class CoastFireProjector:
    """Year-by-year Coast FIRE projection"""

    def __init__(self, params: CoastFireParams):
        self.params = params
        self._validate_params()

    def _validate_params(self):
        if self.params.retirement_age < self.params.current_age:
            raise ValueError(
                f"Retirement age ({self.params.retirement_age}) must not be before "
                f"current age ({self.params.current_age})")
        if self.params.safe_withdraw_rate <= 0:
            raise ValueError(f"Safe withdrawal rate must be positive, got {self.params.safe_withdraw_rate}")

    def coast_value(self, year: int) -> float:
        """Current balance compounded annually for `year` years"""
        return self.params.current_invested * (1 + self.params.annual_return) ** year

    def with_contributions(self, year: int) -> float:
        """Coast value plus monthly contributions made for `year` years"""
        return self.coast_value(year) + future_value_of_contributions(
            self.params.monthly_contribution, self.params.annual_return, 12 * year)

    def target(self, age: int) -> float:
        """Portfolio needed to retire at `age`"""
        spend = self.params.retirement_spend
        if self.params.include_social_security:
            benefit = estimate_annual_social_security(SocialSecurityInput(
                current_age=self.params.current_age,
                retirement_age=age,
                annual_income=self.params.annual_income,
                claim_age=self.params.claim_age,
            ))
            spend = max(spend - benefit, 0.0)
        return spend / self.params.safe_withdraw_rate

    def _grow_to_retirement(self, balance: float, age: int) -> float:
        return balance * (1 + self.params.annual_return) ** (self.params.retirement_age - age)

    def find_coast_fire_age(self, target_at_retirement: float) -> Optional[int]:
        """First age at which contributions can stop and still reach the target at retirement"""
        for year in range(self.params.retirement_age - self.params.current_age + 1):
            age = self.params.current_age + year
            if self._grow_to_retirement(self.with_contributions(year), age) >= target_at_retirement:
                return age
        return None

    def project(self) -> CoastFireProjection:
        """Run the projection from the current age through retirement"""
        years = self.params.retirement_age - self.params.current_age
        target_at_retirement = self.target(self.params.retirement_age)
        coast_fire_age = self.find_coast_fire_age(target_at_retirement)

        stop_balance = None
        if coast_fire_age is not None:
            stop_balance = self.with_contributions(coast_fire_age - self.params.current_age)

        points = []
        fire_age = None
        for year in range(years + 1):
            age = self.params.current_age + year
            with_contributions = self.with_contributions(year)
            target = self.target(age)

            coast_from = None
            if coast_fire_age is not None:
                if age <= coast_fire_age:
                    coast_from = with_contributions
                else:
                    coast_from = stop_balance * (1 + self.params.annual_return) ** (age - coast_fire_age)

            points.append(CoastFirePoint(
                age=age,
                coast_value=self.coast_value(year),
                with_contributions=with_contributions,
                target=target,
                coast_from=coast_from,
            ))

            if fire_age is None and with_contributions >= target:
                fire_age = age

        is_coast_fire = self.coast_value(years) >= target_at_retirement
        logger.info(
            f"Coast FIRE projection: target ${target_at_retirement:,.0f}, "
            f"FIRE age {fire_age}, Coast FIRE age {coast_fire_age}")

        return CoastFireProjection(
            points=points,
            target_at_retirement=target_at_retirement,
            fire_age=fire_age,
            coast_fire_age=coast_fire_age,
            is_coast_fire=is_coast_fire,
        )
