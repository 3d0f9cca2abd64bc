#!/usr/bin/env python3
"""
Demo script showing how to use the household finance modules programmatically.
This demonstrates the core functionality without the Streamlit UI.
"""

import sys

from loguru import logger

from coast_fire import CoastFireParams, CoastFireProjector
from config_utils import get_default_profile
from io_utils import create_profile_download_json, format_currency
from relocation import compare_breakdowns, solve_required_salary
from simulation import DrawdownParams, DrawdownSimulator, calculate_summary_stats
from social_security import SocialSecurityInput, estimate_annual_social_security
from take_home import compute_net_take_home


def main():
    # Configure loguru
    logger.remove()
    logger.add(sys.stderr, format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {message}", level="WARNING")

    print("🚀 Household Finance Demo")
    print("=" * 50)

    # 1. Net take-home pay
    print("\n💰 Net take-home pay...")
    profile = get_default_profile()
    breakdown = compute_net_take_home(profile)

    print(f"   {profile.city}, {profile.filing_status.value}, salary {format_currency(profile.salary)}")
    print(f"   Federal / state / city tax: ${breakdown.federal_tax:,.2f} / "
          f"${breakdown.state_tax:,.2f} / ${breakdown.city_tax:,.2f}")
    print(f"   Net take-home: ${breakdown.net_take_home:,.2f} ({breakdown.savings_rate:.1%} of salary)")

    # 2. Salary needed after moving
    print("\n🚚 Moving to San Francisco...")
    result = solve_required_salary(profile, "San Francisco")
    if result.converged:
        print(f"   Salary needed: ${result.salary:,.2f} ({result.salary_change:+,.0f})")
        print(f"   {'Item':<16} {'Local':>12} {'Remote':>12}")
        print(f"   {'-'*16} {'-'*12} {'-'*12}")
        for row in compare_breakdowns(result.source_breakdown, result.breakdown):
            print(f"   {row['name']:<16} {row['local']:>12,.0f} {row['remote']:>12,.0f}")
    else:
        print(f"   {result.message}")

    # 3. Monte Carlo drawdown
    print("\n🎲 Running Monte Carlo drawdown simulation...")
    params = DrawdownParams(num_sims=1_000, random_seed=42)
    results = DrawdownSimulator(params).run_simulation()
    summary = calculate_summary_stats(results)

    print(f"   {format_currency(params.initial_investment)} at {params.withdraw_rate:.1%} "
          f"for {params.years} years, {params.num_sims:,} simulations")
    print(f"   Success rate: {summary['success_rate']:.1%}")
    print(f"   Final balance (P10 / median / mean): {format_currency(summary['p10'])} / "
          f"{format_currency(summary['median'])} / {format_currency(summary['mean'])}")

    # 4. Coast FIRE with Social Security
    print("\n🏖️ Coast FIRE projection...")
    coast_params = CoastFireParams(include_social_security=True, annual_income=profile.salary, claim_age=67)
    projection = CoastFireProjector(coast_params).project()
    benefit = estimate_annual_social_security(SocialSecurityInput(
        current_age=coast_params.current_age,
        retirement_age=coast_params.retirement_age,
        annual_income=coast_params.annual_income,
        claim_age=coast_params.claim_age,
    ))

    print(f"   Estimated Social Security at 67: ${benefit:,.2f}/yr")
    print(f"   Target at retirement: {format_currency(projection.target_at_retirement)}")
    print(f"   Coast FIRE age: {projection.coast_fire_age}, FIRE age: {projection.fire_age}")

    # 5. Profile export
    print(f"\n💾 Profile Export Demo:")
    json_profile = create_profile_download_json(profile)
    print(f"   Profile exported to JSON ({len(json_profile)} characters)")

    print(f"\n✅ Demo completed successfully!")
    print(f"   To run the full Streamlit UI: streamlit run main.py")
    print(f"   To run tests: python3 -m pytest tests/ -v")


if __name__ == "__main__":
    main()
