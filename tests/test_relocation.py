"""
Unit tests for the equal-take-home salary solver.
"""
import pytest
from cost_of_living import Category
from relocation import compare_breakdowns, compare_expenses, solve_required_salary
from take_home import ExpenseItem, HouseholdProfile, compute_net_take_home


def _profile(**overrides):
    values = dict(
        city="Philadelphia",
        salary=100_000,
        four_oh_one_k=0.05,
        hsa_contribution=1_000,
        expenses=[
            ExpenseItem("Rent", Category.HOUSING, 1_500),
            ExpenseItem("Food", Category.GROCERY, 300),
            ExpenseItem("Car", Category.TRANSPORTATION, 500),
            ExpenseItem("Student loan", Category.FIXED, 200),
        ],
    )
    values.update(overrides)
    return HouseholdProfile(**values)


class TestSolveRequiredSalary:
    """Test the salary solver end to end"""

    def test_same_city_keeps_salary(self):
        result = solve_required_salary(_profile(), "Philadelphia")
        assert result.converged
        assert result.salary == pytest.approx(100_000, abs=0.01)
        assert result.salary_change == pytest.approx(0, abs=0.01)

    def test_same_city_keeps_salary_over_401k_limit(self):
        """A contribution above the dollar limit is clamped on both sides of the match"""
        profile = _profile(salary=400_000, four_oh_one_k=0.10,
                           expenses=[ExpenseItem("Rent", Category.HOUSING, 3_000)])
        result = solve_required_salary(profile, "Philadelphia")
        assert result.converged
        assert result.salary == pytest.approx(400_000, abs=0.01)
        assert result.profile.four_oh_one_k * result.salary == pytest.approx(23_000)

    def test_matches_take_home_in_destination(self):
        """The solved salary reproduces the source take-home pay"""
        for city in ("San Francisco", "Austin", "New York City", "Denver"):
            result = solve_required_salary(_profile(), city)
            assert result.converged, city
            assert result.breakdown.net_take_home == pytest.approx(result.target_net_take_home, abs=1e-4)
            assert result.profile.city == city

    def test_expensive_city_needs_more(self):
        result = solve_required_salary(_profile(), "San Francisco")
        assert result.salary > 100_000
        assert result.salary_change > 0

    def test_expenses_are_converted(self):
        result = solve_required_salary(_profile(), "San Francisco")
        amounts = {e.name: e.amount for e in result.profile.expenses}
        assert amounts["Rent"] == pytest.approx(1_500 * 274.9 / 97.4)
        assert amounts["Student loan"] == 200

    def test_housing_override(self):
        """A cheaper custom rent lowers the required salary"""
        default = solve_required_salary(_profile(), "San Francisco")
        cheaper = solve_required_salary(_profile(), "San Francisco", housing_override=2_000)
        assert cheaper.converged
        assert cheaper.profile.expenses[0].amount == 2_000
        assert cheaper.salary < default.salary

    def test_roth_and_after_tax_preserved(self):
        """Roth IRA plus after-tax investments total the same after moving"""
        source = _profile(roth_ira_contribution=7_000, after_tax_investments=3_000)
        result = solve_required_salary(source, "San Francisco")
        assert result.converged
        dest = result.profile
        assert dest.roth_ira_contribution + dest.after_tax_investments == pytest.approx(10_000)
        assert dest.roth_ira_contribution == pytest.approx(7_000)
        assert result.message == ""

    def test_target_excludes_roth_and_after_tax(self):
        source = _profile(roth_ira_contribution=5_000, after_tax_investments=1_000)
        result = solve_required_salary(source, "Austin")
        plain = compute_net_take_home(_profile())
        assert result.target_net_take_home == pytest.approx(plain.net_take_home)
        assert result.source_breakdown.net_take_home == pytest.approx(plain.net_take_home - 6_000)

    def test_401k_rate_clamped_to_limit(self):
        """A high-earning destination never contributes above the dollar limit"""
        source = _profile(salary=400_000, four_oh_one_k=0.05)
        result = solve_required_salary(source, "New York City")
        assert result.converged
        assert result.profile.salary * result.profile.four_oh_one_k <= 23_000 + 1e-6

    def test_non_convergence_reported(self, log_messages):
        result = solve_required_salary(_profile(), "San Francisco", max_iterations=0)
        assert not result.converged
        assert result.profile is None
        assert result.salary is None
        assert result.salary_change is None
        assert "San Francisco" in result.message
        assert log_messages

    def test_source_not_mutated(self):
        source = _profile(roth_ira_contribution=1_000)
        solve_required_salary(source, "Boston")
        assert source.city == "Philadelphia"
        assert source.roth_ira_contribution == 1_000
        assert source.expenses[0].amount == 1_500


class TestComparisons:
    """Test comparison rows for charts"""

    def test_compare_breakdowns(self):
        result = solve_required_salary(_profile(), "Austin")
        rows = compare_breakdowns(result.source_breakdown, result.breakdown)
        names = [row['name'] for row in rows]
        assert names[:3] == ["Federal tax", "State tax", "City tax"]
        assert len(rows) == 9
        state = rows[1]
        assert state['local'] == pytest.approx(result.source_breakdown.state_tax)
        assert state['remote'] == 0

    def test_compare_expenses(self):
        result = solve_required_salary(_profile(), "Austin")
        rows = compare_expenses(result.source, result.profile)
        assert [row['name'] for row in rows] == ["Rent", "Food", "Car", "Student loan"]
        assert rows[3]['local'] == rows[3]['remote'] == 200
