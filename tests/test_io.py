"""
Unit tests for IO utilities (profile save/load, exports).
"""
import pytest
import json
import pandas as pd
from io import StringIO
from coast_fire import CoastFireParams, CoastFireProjector
from cost_of_living import Category
from io_utils import (
    PROFILE_FORMAT_VERSION, create_profile_download_json, dict_to_drawdown_params,
    dict_to_profile, drawdown_params_to_dict, export_coast_fire_csv, export_comparison_csv,
    export_drawdown_aggregates_csv, export_drawdown_paths_csv, format_currency, funds_from_records,
    load_profile_json, migrate_payload, parse_profile_upload_json, profile_to_dict,
    save_profile_json, validate_profile_json,
)
from simulation import DrawdownParams, DrawdownSimulator, Fund
from take_home import AgeBracket, ExpenseItem, HouseholdProfile
from tax import FilingStatus


def _profile():
    return HouseholdProfile(
        city="Boston",
        filing_status=FilingStatus.HEAD_OF_HOUSEHOLD,
        age=AgeBracket.FROM_50_TO_55,
        salary=120_000,
        four_oh_one_k=0.08,
        hsa_contribution=2_000,
        roth_ira_contribution=7_000,
        expenses=[
            ExpenseItem("Rent", Category.HOUSING, 2_400),
            ExpenseItem("Car payment", Category.FIXED, 350),
        ],
    )


class TestProfileSerialization:
    """Test profile save/load functionality"""

    def test_profile_to_dict_uses_plain_values(self):
        profile_dict = profile_to_dict(_profile())
        assert profile_dict['filing_status'] == "Head of Household"
        assert profile_dict['age'] == ">= 50, < 55"
        assert profile_dict['expenses'][1] == {'name': "Car payment", 'category': "Fixed", 'amount': 350}
        json.dumps(profile_dict)

    def test_dict_to_profile(self):
        profile = dict_to_profile({
            'city': "Austin",
            'filing_status': "Married",
            'salary': 90_000,
            'expenses': [{'name': "Rent", 'category': "Housing", 'amount': 1_800}],
        })
        assert profile.filing_status is FilingStatus.MARRIED
        assert profile.expenses[0].category is Category.HOUSING
        assert profile.four_oh_one_k == 0.05

    def test_download_json_is_versioned(self):
        payload = json.loads(create_profile_download_json(_profile()))
        assert payload['version'] == PROFILE_FORMAT_VERSION
        assert payload['data']['city'] == "Boston"

    def test_upload_round_trip(self):
        profile = _profile()
        assert parse_profile_upload_json(create_profile_download_json(profile)) == profile

    def test_file_round_trip(self, tmp_path):
        path = tmp_path / "profile.json"
        save_profile_json(_profile(), str(path))
        assert load_profile_json(str(path)) == _profile()


class TestVersioning:
    """Test the versioned wrapper and migration"""

    def test_unversioned_payload_is_migrated(self):
        bare = profile_to_dict(_profile())
        migrated = migrate_payload(bare)
        assert migrated == {'version': PROFILE_FORMAT_VERSION, 'data': bare}
        assert parse_profile_upload_json(json.dumps(bare)) == _profile()

    def test_unknown_version_rejected(self):
        with pytest.raises(ValueError, match="Unsupported profile format version: 99"):
            migrate_payload({'version': 99, 'data': {}})

    def test_current_version_unchanged(self):
        payload = {'version': PROFILE_FORMAT_VERSION, 'data': {'city': "Miami"}}
        assert migrate_payload(payload) is payload


class TestValidateProfileJson:
    """Test upload validation"""

    def test_valid(self):
        assert validate_profile_json(create_profile_download_json(_profile())) == (True, "")

    def test_invalid_json(self):
        is_valid, error = validate_profile_json("{not json")
        assert not is_valid
        assert "Invalid JSON" in error

    def test_not_an_object(self):
        is_valid, _ = validate_profile_json("[1, 2, 3]")
        assert not is_valid

    def test_bad_category(self):
        payload = {'version': 1, 'data': {'expenses': [{'name': "X", 'category': "Yachts", 'amount': 1}]}}
        is_valid, error = validate_profile_json(json.dumps(payload))
        assert not is_valid
        assert "Yachts" in error

    def test_unknown_field(self):
        payload = {'version': 1, 'data': {'pets': 3}}
        is_valid, _ = validate_profile_json(json.dumps(payload))
        assert not is_valid

    def test_unknown_version(self):
        is_valid, error = validate_profile_json(json.dumps({'version': 2, 'data': {}}))
        assert not is_valid
        assert "version" in error

    def test_unknown_city(self):
        payload = {'version': 1, 'data': {'city': "Atlantis"}}
        is_valid, error = validate_profile_json(json.dumps(payload))
        assert not is_valid
        assert "Atlantis" in error


class TestDrawdownParamsSerialization:
    def test_round_trip_rebuilds_funds(self):
        params = DrawdownParams(years=20, portfolio=[Fund("Stocks", 0.07, 0.18, 1.0)], random_seed=5)
        restored = dict_to_drawdown_params(json.loads(json.dumps(drawdown_params_to_dict(params))))
        assert restored == params
        assert isinstance(restored.portfolio[0], Fund)


class TestFundsFromRecords:
    """Test portfolio rows coming from the fund editor"""

    def test_complete_rows(self):
        funds = funds_from_records([{'name': "Stocks", 'mean': 0.08, 'std': 0.15, 'weight': 1.0}])
        assert funds == [Fund("Stocks", 0.08, 0.15, 1.0)]

    def test_incomplete_rows_skipped(self):
        nan = float('nan')
        records = [
            {'name': "Stocks", 'mean': 0.08, 'std': 0.15, 'weight': 0.5},
            {'name': "Bonds", 'mean': nan, 'std': 0.05, 'weight': 0.5},
            {'name': "Gold", 'mean': 0.04, 'std': None, 'weight': 0.2},
            {'name': None, 'mean': 0.03, 'std': 0.05, 'weight': 0.2},
        ]
        assert [f.name for f in funds_from_records(records)] == ["Stocks"]


class TestExports:
    """Test CSV exports"""

    @pytest.fixture
    def results(self):
        return DrawdownSimulator(DrawdownParams(years=5, num_sims=4, random_seed=1)).run_simulation()

    def test_aggregates_csv(self, results):
        df = pd.read_csv(StringIO(export_drawdown_aggregates_csv(results)))
        assert list(df.columns) == ['year', 'mean', 'median', 'p10', 'solvent_trials']
        assert len(df) == 6
        assert df['mean'].iloc[0] == pytest.approx(1_000_000)

    def test_paths_csv(self, results):
        df = pd.read_csv(StringIO(export_drawdown_paths_csv(results)))
        assert list(df.columns) == ['simulation', 'year', 'balance']
        assert len(df) == sum(len(r.balances) for r in results.runs)
        assert sorted(df['simulation'].unique()) == [1, 2, 3, 4]

    def test_coast_fire_csv(self):
        projection = CoastFireProjector(CoastFireParams()).project()
        df = pd.read_csv(StringIO(export_coast_fire_csv(projection)))
        assert list(df['age']) == list(range(30, 68))
        assert {'coast_value', 'with_contributions', 'target', 'coast_from'} <= set(df.columns)

    def test_comparison_csv(self):
        rows = [{'name': "Federal tax", 'local': 10_000, 'remote': 12_500}]
        df = pd.read_csv(StringIO(export_comparison_csv(rows)))
        assert df['difference'].iloc[0] == 2_500


class TestFormatCurrency:
    def test_scales(self):
        assert format_currency(3_000_000) == "$3M"
        assert format_currency(2_500_000, precision=1) == "$2.5M"
        assert format_currency(45_000) == "$45K"
        assert format_currency(999) == "$999"

    def test_negative(self):
        assert format_currency(-45_000) == "-$45K"
