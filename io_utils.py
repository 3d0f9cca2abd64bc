"""
IO utilities for saving/loading household profiles and exporting results.
Handles versioned JSON serialization of profiles and CSV exports via pandas.
"""
import json
from dataclasses import asdict
from typing import Any, Dict, List, Tuple

import pandas as pd
from loguru import logger

from coast_fire import CoastFireProjection
from cost_of_living import COST_OF_LIVING_2024
from simulation import DrawdownParams, DrawdownResults, Fund
from take_home import ExpenseItem, HouseholdProfile
from tax_utils import TAX_TABLES_2024

PROFILE_FORMAT_VERSION = 1


def profile_to_dict(profile: HouseholdProfile) -> Dict[str, Any]:
    """
    Convert HouseholdProfile to dictionary for JSON serialization.

    Args:
        profile: HouseholdProfile object

    Returns:
        Dictionary representation with enums stored as their values
    """
    profile_dict = asdict(profile)
    profile_dict['filing_status'] = profile.filing_status.value
    profile_dict['age'] = profile.age.value
    for expense_dict, expense in zip(profile_dict['expenses'], profile.expenses):
        expense_dict['category'] = expense.category.value
    return profile_dict


def dict_to_profile(profile_dict: Dict[str, Any]) -> HouseholdProfile:
    """
    Convert dictionary to HouseholdProfile object.

    Raises:
        ValueError: unknown filing status, age bracket or expense category
    """
    # Create a copy to avoid modifying the original
    filtered_dict = profile_dict.copy()
    filtered_dict['expenses'] = [ExpenseItem(**e) for e in filtered_dict.get('expenses', [])]
    return HouseholdProfile(**filtered_dict)


def wrap_profile(profile: HouseholdProfile) -> Dict[str, Any]:
    """Versioned wrapper stored on disk"""
    return {'version': PROFILE_FORMAT_VERSION, 'data': profile_to_dict(profile)}


def migrate_payload(payload: Dict[str, Any]) -> Dict[str, Any]:
    """
    Bring a stored payload up to the current format version.

    A bare profile dict with no version key is version 0 and gets wrapped.

    Raises:
        ValueError: version is not one this code can read
    """
    if 'version' not in payload:
        logger.info(f"Migrating unversioned profile to version {PROFILE_FORMAT_VERSION}")
        return {'version': PROFILE_FORMAT_VERSION, 'data': payload}

    version = payload['version']
    if version != PROFILE_FORMAT_VERSION:
        raise ValueError(f"Unsupported profile format version: {version}")
    return payload


def unwrap_profile(payload: Dict[str, Any]) -> HouseholdProfile:
    return dict_to_profile(migrate_payload(payload)['data'])


def save_profile_json(profile: HouseholdProfile, filepath: str) -> None:
    """
    Save household profile to JSON file.

    Args:
        profile: HouseholdProfile object to save
        filepath: Path to save JSON file
    """
    with open(filepath, 'w') as f:
        json.dump(wrap_profile(profile), f, indent=2)


def load_profile_json(filepath: str) -> HouseholdProfile:
    """
    Load household profile from JSON file.

    Args:
        filepath: Path to JSON file

    Returns:
        HouseholdProfile object
    """
    with open(filepath, 'r') as f:
        payload = json.load(f)

    return unwrap_profile(payload)


def create_profile_download_json(profile: HouseholdProfile) -> str:
    """JSON string for the download button"""
    return json.dumps(wrap_profile(profile), indent=2)


def parse_profile_upload_json(json_string: str) -> HouseholdProfile:
    """Parse uploaded JSON string to HouseholdProfile"""
    return unwrap_profile(json.loads(json_string))


def validate_profile_json(json_string: str) -> Tuple[bool, str]:
    """
    Validate uploaded profile JSON.

    Args:
        json_string: JSON string to validate

    Returns:
        (is_valid, error_message)
    """
    try:
        payload = json.loads(json_string)
    except json.JSONDecodeError as e:
        return False, f"Invalid JSON: {str(e)}"

    if not isinstance(payload, dict):
        return False, "Profile JSON must be an object"

    try:
        profile = unwrap_profile(payload)
    except (ValueError, TypeError, KeyError) as e:
        return False, f"Profile validation error: {str(e)}"

    if profile.city not in TAX_TABLES_2024.city_states or profile.city not in COST_OF_LIVING_2024.cities:
        return False, f"Profile validation error: Unknown city: {profile.city}"

    return True, ""


def funds_from_records(records: List[Dict[str, Any]]) -> List[Fund]:
    """
    Build portfolio funds from edited table rows, skipping incomplete rows.

    Args:
        records: Rows with name, mean, std and weight columns

    Returns:
        Funds for every row with a name and all numeric fields set
    """
    return [Fund(row['name'], float(row['mean']), float(row['std']), float(row['weight']))
            for row in records
            if row.get('name') and all(pd.notna(row.get(k)) for k in ('mean', 'std', 'weight'))]


def drawdown_params_to_dict(params: DrawdownParams) -> Dict[str, Any]:
    return asdict(params)


def dict_to_drawdown_params(param_dict: Dict[str, Any]) -> DrawdownParams:
    filtered_dict = param_dict.copy()
    if 'portfolio' in filtered_dict:
        filtered_dict['portfolio'] = [Fund(**f) for f in filtered_dict['portfolio']]
    return DrawdownParams(**filtered_dict)


def export_drawdown_aggregates_csv(results: DrawdownResults) -> str:
    """
    Export per-year drawdown aggregates to CSV string.

    Args:
        results: DrawdownResults from a simulation run

    Returns:
        CSV string with mean, median and 10th percentile per year
    """
    df = pd.DataFrame({
        'year': results.years,
        'mean': results.mean,
        'median': results.median,
        'p10': results.tenth,
        'solvent_trials': results.solvent_counts,
    })

    return df.to_csv(index=False)


def export_drawdown_paths_csv(results: DrawdownResults) -> str:
    """Every trial's balance path in long format (simulation, year, balance)"""
    rows = [
        {'simulation': i + 1, 'year': year, 'balance': balance}
        for i, run in enumerate(results.runs)
        for year, balance in enumerate(run.balances)
    ]
    df = pd.DataFrame(rows, columns=['simulation', 'year', 'balance'])

    return df.to_csv(index=False)


def export_coast_fire_csv(projection: CoastFireProjection) -> str:
    """Export the Coast FIRE trajectory to CSV string"""
    df = pd.DataFrame([asdict(point) for point in projection.points])

    return df.to_csv(index=False)


def export_comparison_csv(rows: List[Dict[str, Any]]) -> str:
    """Export local vs remote comparison rows to CSV string"""
    df = pd.DataFrame(rows, columns=['name', 'local', 'remote'])
    df['difference'] = df['remote'] - df['local']

    return df.to_csv(index=False)


def format_currency(value: float, precision: int = 0) -> str:
    """
    Format currency values for display.

    Args:
        value: Numeric value to format
        precision: Number of decimal places

    Returns:
        Formatted string
    """
    sign = "-" if value < 0 else ""
    magnitude = abs(value)
    if magnitude >= 1_000_000:
        return f"{sign}${magnitude/1_000_000:.{precision}f}M"
    elif magnitude >= 1_000:
        return f"{sign}${magnitude/1_000:.{precision}f}K"
    return f"{sign}${magnitude:.{precision}f}"
