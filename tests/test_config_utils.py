"""
Unit tests for configuration defaults and UI config persistence.
"""
import json

from config_utils import (
    HOUSING_OVERRIDES_KEY, get_default_coast_fire_params, get_default_drawdown_params,
    get_default_profile, get_housing_override, load_ui_config, save_ui_config, set_housing_override,
)
from take_home import compute_net_take_home, validate_profile


class TestUiConfig:
    """Test ui_config.json load/save"""

    def test_missing_file_is_empty(self, tmp_path):
        assert load_ui_config(str(tmp_path / "missing.json")) == {}

    def test_invalid_json_is_empty(self, tmp_path, log_messages):
        path = tmp_path / "ui_config.json"
        path.write_text("{broken")
        assert load_ui_config(str(path)) == {}
        assert any("Could not load" in m for m in log_messages)

    def test_non_object_is_empty(self, tmp_path):
        path = tmp_path / "ui_config.json"
        path.write_text("[1, 2]")
        assert load_ui_config(str(path)) == {}

    def test_save_then_load(self, tmp_path):
        path = str(tmp_path / "ui_config.json")
        config = set_housing_override({}, "Seattle", 2_100)
        assert save_ui_config(config, path)
        assert load_ui_config(path) == {HOUSING_OVERRIDES_KEY: {"Seattle": 2_100.0}}
        with open(path) as f:
            assert json.load(f) == config

    def test_save_failure_reported(self, tmp_path, log_messages):
        assert not save_ui_config({}, str(tmp_path / "no_such_dir" / "ui_config.json"))
        assert any("Could not save" in m for m in log_messages)


class TestHousingOverrides:
    """Test per-city custom housing costs"""

    def test_get_missing(self):
        assert get_housing_override({}, "Miami") is None

    def test_set_and_get(self):
        config = set_housing_override({'other': 1}, "Miami", 1_800)
        assert get_housing_override(config, "Miami") == 1_800
        assert config['other'] == 1

    def test_set_does_not_mutate(self):
        original = {HOUSING_OVERRIDES_KEY: {"Miami": 1_800.0}}
        set_housing_override(original, "Austin", 1_500)
        assert original == {HOUSING_OVERRIDES_KEY: {"Miami": 1_800.0}}

    def test_clear(self):
        config = set_housing_override({HOUSING_OVERRIDES_KEY: {"Miami": 1_800.0}}, "Miami", None)
        assert get_housing_override(config, "Miami") is None


class TestDefaults:
    """Test default form values"""

    def test_default_profile_is_valid(self):
        profile = get_default_profile()
        assert validate_profile(profile) == []
        assert profile.monthly_expenses == 2_610

    def test_default_profile_take_home(self):
        breakdown = compute_net_take_home(get_default_profile())
        assert round(breakdown.net_take_home, 2) == 37_093.92

    def test_default_profiles_are_independent(self):
        first = get_default_profile()
        first.expenses.clear()
        assert get_default_profile().expenses

    def test_calculator_defaults(self):
        assert get_default_drawdown_params().num_sims == 100
        assert get_default_coast_fire_params().annual_return == 0.068
