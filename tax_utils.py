"""
Tax-year tables and statutory contribution limits.
Tables are plain data passed into the calculators so several tax years or
jurisdiction sets can coexist.
"""
from dataclasses import dataclass, field
from typing import Dict, Mapping, Tuple

from tax import Bracket, Flat, FilingStatus, NoTax, Percentage, StatusBased, TaxRule

INF = float('inf')


@dataclass(frozen=True)
class ContributionLimits:
    """Annual account contribution limits for one tax year"""
    four_oh_one_k: float
    four_oh_one_k_catchup: float
    hsa: Mapping[FilingStatus, float]
    hsa_catchup: float
    roth_ira: float
    roth_ira_catchup: float
    # (low, high) modified AGI range over which the Roth limit phases out
    roth_phase_out: Mapping[FilingStatus, Tuple[float, float]]


@dataclass(frozen=True)
class TaxYearTables:
    """Everything the take-home calculator needs for one tax year"""
    year: int
    federal: TaxRule
    states: Mapping[str, TaxRule]
    cities: Mapping[str, TaxRule]
    city_states: Mapping[str, str]
    standard_deduction: Mapping[FilingStatus, float]
    social_security_rate: float
    medicare_rate: float
    limits: ContributionLimits
    state_abbreviations: Mapping[str, str] = field(default_factory=dict)


def _by_status(single: TaxRule, married: TaxRule, head_of_household: TaxRule) -> StatusBased:
    return StatusBased({
        FilingStatus.SINGLE: single,
        FilingStatus.MARRIED: married,
        FilingStatus.HEAD_OF_HOUSEHOLD: head_of_household,
    })


_FEDERAL_2024 = _by_status(
    single=Bracket((
        (11_600, 0.10), (47_150, 0.12), (100_525, 0.22), (191_950, 0.24),
        (243_725, 0.32), (609_350, 0.35), (INF, 0.37),
    )),
    married=Bracket((
        (23_200, 0.10), (94_300, 0.12), (201_050, 0.22), (383_900, 0.24),
        (487_450, 0.32), (731_200, 0.35), (INF, 0.37),
    )),
    head_of_household=Bracket((
        (16_550, 0.10), (63_100, 0.12), (100_500, 0.22), (191_950, 0.24),
        (243_700, 0.32), (609_350, 0.35), (INF, 0.37),
    )),
)

_GEORGIA_JOINT = Bracket((
    (1_000, 0.01), (3_000, 0.02), (5_000, 0.03), (7_000, 0.04), (10_000, 0.05), (INF, 0.0575),
))

_OREGON_SINGLE = Bracket(((3_750, 0.0475), (9_450, 0.0675), (125_000, 0.0875), (INF, 0.099)))

_NEW_YORK_STATE_2024 = _by_status(
    single=Bracket((
        (8_500, 0.04), (11_700, 0.045), (13_900, 0.0525), (80_650, 0.055),
        (215_400, 0.06), (1_077_550, 0.0685), (5_000_000, 0.0965),
        (25_000_000, 0.103), (INF, 0.109),
    )),
    married=Bracket((
        (17_150, 0.04), (23_600, 0.045), (27_900, 0.0525), (161_550, 0.055),
        (323_200, 0.06), (2_155_350, 0.0685), (5_000_000, 0.0965),
        (25_000_000, 0.103), (INF, 0.109),
    )),
    head_of_household=Bracket((
        (12_800, 0.04), (17_650, 0.045), (20_900, 0.0525), (107_650, 0.055),
        (269_300, 0.06), (1_616_450, 0.0685), (5_000_000, 0.0965),
        (25_000_000, 0.103), (INF, 0.109),
    )),
)

STATE_TAX_2024: Dict[str, TaxRule] = {
    'Pennsylvania': Percentage(0.0307),
    'California': _by_status(
        single=Bracket((
            (10_756, 0.01), (25_499, 0.02), (40_245, 0.04), (55_866, 0.06),
            (70_606, 0.08), (360_659, 0.093), (432_787, 0.103),
            (721_314, 0.113), (INF, 0.123),
        )),
        married=Bracket((
            (21_512, 0.01), (50_998, 0.02), (80_490, 0.04), (111_732, 0.06),
            (141_212, 0.08), (721_318, 0.093), (865_574, 0.103),
            (1_442_628, 0.113), (INF, 0.123),
        )),
        head_of_household=Bracket((
            (21_527, 0.01), (51_000, 0.02), (65_744, 0.04), (81_364, 0.06),
            (96_107, 0.08), (490_493, 0.093), (588_593, 0.103),
            (980_987, 0.113), (INF, 0.123),
        )),
    ),
    'Illinois': Percentage(0.0495),
    'Texas': NoTax(),
    'Arizona': Percentage(0.025),
    'Massachusetts': Percentage(0.05),
    'Georgia': _by_status(
        single=Bracket((
            (750, 0.01), (2_250, 0.02), (3_750, 0.03), (5_250, 0.04), (7_000, 0.05), (INF, 0.0575),
        )),
        married=_GEORGIA_JOINT,
        head_of_household=_GEORGIA_JOINT,
    ),
    'Oregon': _by_status(
        single=_OREGON_SINGLE,
        married=Bracket(((8_100, 0.0475), (20_400, 0.0675), (250_000, 0.0875), (INF, 0.099))),
        head_of_household=_OREGON_SINGLE,
    ),
    'Washington': NoTax(),
    'Colorado': Percentage(0.0425),
    'Florida': NoTax(),
    'New York': _NEW_YORK_STATE_2024,
}

_NYC_JOINT = Bracket(((21_600, 0.0378), (45_000, 0.03762), (90_000, 0.03819), (INF, 0.03876)))

CITY_TAX_2024: Dict[str, TaxRule] = {
    'Philadelphia': Percentage(0.0375),
    'Pittsburgh': Percentage(0.03),
    # Metro supportive housing services tax: 1% above the exemption
    'Portland': _by_status(
        single=Bracket(((125_000, 0.0), (INF, 0.01))),
        married=Bracket(((250_000, 0.0), (INF, 0.01))),
        head_of_household=Bracket(((250_000, 0.0), (INF, 0.01))),
    ),
    # Occupational privilege tax, $5.75/month
    'Denver': Flat(5.75 * 12),
    'New York City': _by_status(
        single=Bracket(((12_000, 0.0378), (25_000, 0.03762), (50_000, 0.03819), (INF, 0.03876))),
        married=_NYC_JOINT,
        head_of_household=_NYC_JOINT,
    ),
    'San Francisco': NoTax(),
    'Los Angeles': NoTax(),
    'Chicago': NoTax(),
    'Houston': NoTax(),
    'Phoenix': NoTax(),
    'San Diego': NoTax(),
    'Dallas': NoTax(),
    'Austin': NoTax(),
    'Boston': NoTax(),
    'Atlanta': NoTax(),
    'Seattle': NoTax(),
    'Miami': NoTax(),
}

CITY_STATES: Dict[str, str] = {
    'Austin': 'Texas',
    'Dallas': 'Texas',
    'Houston': 'Texas',
    'Los Angeles': 'California',
    'San Francisco': 'California',
    'San Diego': 'California',
    'Portland': 'Oregon',
    'Phoenix': 'Arizona',
    'Seattle': 'Washington',
    'Miami': 'Florida',
    'Pittsburgh': 'Pennsylvania',
    'Philadelphia': 'Pennsylvania',
    'New York City': 'New York',
    'Boston': 'Massachusetts',
    'Atlanta': 'Georgia',
    'Denver': 'Colorado',
    'Chicago': 'Illinois',
}

STATE_ABBREVIATIONS: Dict[str, str] = {
    'Pennsylvania': 'PA',
    'California': 'CA',
    'Illinois': 'IL',
    'Texas': 'TX',
    'Arizona': 'AZ',
    'Massachusetts': 'MA',
    'Georgia': 'GA',
    'Oregon': 'OR',
    'Washington': 'WA',
    'Colorado': 'CO',
    'Florida': 'FL',
    'New York': 'NY',
}

LIMITS_2024 = ContributionLimits(
    four_oh_one_k=23_000,
    four_oh_one_k_catchup=7_500,
    hsa={
        FilingStatus.SINGLE: 4_150,
        FilingStatus.MARRIED: 8_300,
        FilingStatus.HEAD_OF_HOUSEHOLD: 8_300,
    },
    hsa_catchup=1_000,
    roth_ira=7_000,
    roth_ira_catchup=1_000,
    roth_phase_out={
        FilingStatus.SINGLE: (146_000, 161_000),
        FilingStatus.MARRIED: (230_000, 240_000),
        FilingStatus.HEAD_OF_HOUSEHOLD: (146_000, 161_000),
    },
)

TAX_TABLES_2024 = TaxYearTables(
    year=2024,
    federal=_FEDERAL_2024,
    states=STATE_TAX_2024,
    cities=CITY_TAX_2024,
    city_states=CITY_STATES,
    standard_deduction={
        FilingStatus.SINGLE: 14_600,
        FilingStatus.MARRIED: 29_200,
        FilingStatus.HEAD_OF_HOUSEHOLD: 21_900,
    },
    social_security_rate=0.062,
    medicare_rate=0.0145,
    limits=LIMITS_2024,
    state_abbreviations=STATE_ABBREVIATIONS,
)


def jurisdiction_rules(city: str, tables: TaxYearTables) -> Tuple[TaxRule, TaxRule, TaxRule]:
    """
    Get the (federal, state, city) tax rules that apply to a city.

    Raises:
        KeyError: city (or its state) is not in the tables
    """
    if city not in tables.city_states:
        raise KeyError(f"City {city!r} is not in the {tables.year} tax tables")
    state = tables.city_states[city]
    if state not in tables.states:
        raise KeyError(f"State {state!r} (for {city!r}) is not in the {tables.year} tax tables")
    return tables.federal, tables.states[state], tables.cities.get(city, NoTax())


def city_label(city: str, tables: TaxYearTables = TAX_TABLES_2024) -> str:
    """Display label such as 'Portland, OR'"""
    state = tables.city_states.get(city)
    abbreviation = tables.state_abbreviations.get(state, state) if state else None
    return f"{city}, {abbreviation}" if abbreviation else city


def four_oh_one_k_limit(age_50_or_older: bool, tables: TaxYearTables) -> float:
    """Maximum elective 401(k) deferral in dollars"""
    limits = tables.limits
    return limits.four_oh_one_k + (limits.four_oh_one_k_catchup if age_50_or_older else 0)


def hsa_limit(status: FilingStatus, age_55_or_older: bool, tables: TaxYearTables) -> float:
    """Maximum HSA contribution in dollars"""
    limits = tables.limits
    return limits.hsa[status] + (limits.hsa_catchup if age_55_or_older else 0)


def roth_ira_limit(modified_agi: float,
                   status: FilingStatus,
                   age_50_or_older: bool,
                   tables: TaxYearTables) -> float:
    """
    Maximum Roth IRA contribution after the income phase-out.

    The limit falls linearly from the full amount at the low end of the
    phase-out range to zero at the high end.
    """
    limits = tables.limits
    full = limits.roth_ira + (limits.roth_ira_catchup if age_50_or_older else 0)
    low, high = limits.roth_phase_out[status]

    if modified_agi <= low:
        return full
    if modified_agi >= high:
        return 0.0
    return full - (modified_agi - low) * (full / (high - low))
