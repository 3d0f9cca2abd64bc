"""
Configuration Utilities for the household finance calculators
Default form values for each calculator and persistence of UI settings.
"""

import json
import os
from typing import Any, Dict, List, Optional

from loguru import logger

from coast_fire import CoastFireParams
from cost_of_living import Category
from simulation import DrawdownParams
from take_home import ExpenseItem, HouseholdProfile

UI_CONFIG_PATH = 'ui_config.json'
HOUSING_OVERRIDES_KEY = 'housing_overrides'


def load_ui_config(path: str = UI_CONFIG_PATH) -> Dict[str, Any]:
    """Load UI configuration like custom housing costs from ui_config.json"""
    if not os.path.exists(path):
        logger.debug(f"{path} does not exist, using empty config")
        return {}

    try:
        with open(path, 'r') as f:
            config = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Could not load {path}: {e}")
        return {}

    if not isinstance(config, dict):
        logger.error(f"Ignoring {path}: expected a JSON object, got {type(config).__name__}")
        return {}

    logger.debug(f"Loaded UI config with {len(config)} keys")
    return config


def save_ui_config(config: Dict[str, Any], path: str = UI_CONFIG_PATH) -> bool:
    """Save UI configuration to ui_config.json; returns False if the write failed"""
    try:
        with open(path, 'w') as f:
            json.dump(config, f, indent=2)
    except OSError as e:
        logger.error(f"Could not save {path}: {e}")
        return False

    logger.debug(f"Saved UI config with {len(config)} keys to {path}")
    return True


def get_housing_override(config: Dict[str, Any], city: str) -> Optional[float]:
    """Custom monthly housing cost saved for a destination city, if any"""
    value = config.get(HOUSING_OVERRIDES_KEY, {}).get(city)
    return float(value) if value is not None else None


def set_housing_override(config: Dict[str, Any], city: str, amount: Optional[float]) -> Dict[str, Any]:
    """Return a copy of config with the city's housing override set, or cleared when amount is None"""
    overrides = dict(config.get(HOUSING_OVERRIDES_KEY, {}))
    if amount is None:
        overrides.pop(city, None)
    else:
        overrides[city] = float(amount)
    return {**config, HOUSING_OVERRIDES_KEY: overrides}


def get_default_expenses() -> List[ExpenseItem]:
    """Sample monthly budget for a single renter"""
    return [
        ExpenseItem("Rent", Category.HOUSING, 1_500),
        ExpenseItem("Renter's Insurance", Category.HOUSING, 10),
        ExpenseItem("Food", Category.GROCERY, 300),
        ExpenseItem("Utilities", Category.UTILITIES, 100),
        ExpenseItem("Car", Category.TRANSPORTATION, 500),
        ExpenseItem("Entertainment", Category.MISCELLANEOUS, 100),
        ExpenseItem("Misc", Category.MISCELLANEOUS, 100),
    ]


def get_default_profile() -> HouseholdProfile:
    """Get default household profile for the cost of living calculator"""
    return HouseholdProfile(expenses=get_default_expenses())


def get_default_drawdown_params() -> DrawdownParams:
    """Get default Monte Carlo drawdown parameters"""
    return DrawdownParams()


def get_default_coast_fire_params() -> CoastFireParams:
    """Get default Coast FIRE parameters"""
    return CoastFireParams()
