"""
Unit tests for tax-year tables and contribution limits.
"""
import pytest
from cost_of_living import COST_OF_LIVING_2024
from tax import FilingStatus, NoTax, Percentage, evaluate_tax
from tax_utils import (
    TAX_TABLES_2024, city_label, four_oh_one_k_limit, hsa_limit,
    jurisdiction_rules, roth_ira_limit,
)


class TestJurisdictionRules:
    """Test (federal, state, city) rule lookup"""

    def test_philadelphia(self):
        federal, state, city = jurisdiction_rules("Philadelphia", TAX_TABLES_2024)
        assert federal is TAX_TABLES_2024.federal
        assert state == Percentage(0.0307)
        assert city == Percentage(0.0375)

    def test_city_without_local_tax(self):
        _, state, city = jurisdiction_rules("Austin", TAX_TABLES_2024)
        assert state == NoTax()
        assert city == NoTax()

    def test_unknown_city(self):
        with pytest.raises(KeyError, match="Atlantis"):
            jurisdiction_rules("Atlantis", TAX_TABLES_2024)

    def test_every_city_is_fully_described(self):
        """Each taxed city has a state rule and cost-of-living indices"""
        for city, state in TAX_TABLES_2024.city_states.items():
            assert state in TAX_TABLES_2024.states
            assert state in TAX_TABLES_2024.state_abbreviations
            assert city in COST_OF_LIVING_2024.cities

    def test_portland_exemption_depends_on_status(self):
        """Portland metro tax starts above a status-dependent exemption"""
        _, _, city = jurisdiction_rules("Portland", TAX_TABLES_2024)
        assert evaluate_tax(200_000, city, FilingStatus.SINGLE) == pytest.approx(750)
        assert evaluate_tax(200_000, city, FilingStatus.MARRIED) == 0

    def test_city_label(self):
        assert city_label("Portland") == "Portland, OR"
        assert city_label("Nowhere") == "Nowhere"


class TestContributionLimits:
    """Test 401(k), HSA and Roth IRA limits"""

    def test_401k_limit(self):
        assert four_oh_one_k_limit(False, TAX_TABLES_2024) == 23_000
        assert four_oh_one_k_limit(True, TAX_TABLES_2024) == 30_500

    def test_hsa_limit_by_status(self):
        assert hsa_limit(FilingStatus.SINGLE, False, TAX_TABLES_2024) == 4_150
        assert hsa_limit(FilingStatus.MARRIED, False, TAX_TABLES_2024) == 8_300
        assert hsa_limit(FilingStatus.HEAD_OF_HOUSEHOLD, True, TAX_TABLES_2024) == 9_300

    def test_roth_full_below_phase_out(self):
        assert roth_ira_limit(100_000, FilingStatus.SINGLE, False, TAX_TABLES_2024) == 7_000
        assert roth_ira_limit(100_000, FilingStatus.SINGLE, True, TAX_TABLES_2024) == 8_000

    def test_roth_zero_above_phase_out(self):
        assert roth_ira_limit(161_000, FilingStatus.SINGLE, False, TAX_TABLES_2024) == 0
        assert roth_ira_limit(500_000, FilingStatus.MARRIED, False, TAX_TABLES_2024) == 0

    def test_roth_linear_phase_out(self):
        """Midpoint of the phase-out range allows half the contribution"""
        assert roth_ira_limit(153_500, FilingStatus.SINGLE, False, TAX_TABLES_2024) == pytest.approx(3_500)
        assert roth_ira_limit(235_000, FilingStatus.MARRIED, True, TAX_TABLES_2024) == pytest.approx(4_000)

    def test_standard_deduction_by_status(self):
        deduction = TAX_TABLES_2024.standard_deduction
        assert deduction[FilingStatus.SINGLE] == 14_600
        assert deduction[FilingStatus.MARRIED] == 29_200
        assert deduction[FilingStatus.HEAD_OF_HOUSEHOLD] == 21_900
