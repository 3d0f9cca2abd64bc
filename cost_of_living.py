"""
Cost-of-living table and category-based expense conversion between cities.
"""
from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, List, Mapping, Optional, Sequence, TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from take_home import ExpenseItem


class Category(str, Enum):
    """Expense categories; FIXED passes through conversion unchanged"""
    HOUSING = "Housing"
    TRANSPORTATION = "Transportation"
    GROCERY = "Grocery"
    UTILITIES = "Utilities"
    HEALTHCARE = "Healthcare"
    MISCELLANEOUS = "Miscellaneous"
    FIXED = "Fixed"


ADJUSTABLE_CATEGORIES = tuple(c for c in Category if c is not Category.FIXED)


class UnknownCityError(KeyError):
    """City/category combination missing from a cost-of-living table"""

    def __str__(self):
        return str(self.args[0]) if self.args else super().__str__()


@dataclass(frozen=True)
class CostOfLivingTable:
    """City -> category -> relative cost index (100 = national average)"""
    indices: Mapping[str, Mapping[Category, float]]

    def __post_init__(self):
        for city, categories in self.indices.items():
            for category, value in categories.items():
                if value <= 0:
                    raise ValueError(
                        f"Cost-of-living index must be positive, got {value} for {city} / {category.value}")

    @property
    def cities(self) -> List[str]:
        return sorted(self.indices)

    def index(self, city: str, category: Category) -> float:
        """Look up one index, failing loudly when it is missing"""
        if city not in self.indices:
            raise UnknownCityError(f"City {city!r} is not in the cost-of-living table")
        categories = self.indices[city]
        if category not in categories:
            raise UnknownCityError(
                f"Category {category.value!r} has no cost-of-living index for {city!r}")
        return categories[category]


def _row(housing, transportation, grocery, utilities, healthcare, miscellaneous) -> Dict[Category, float]:
    return {
        Category.HOUSING: housing,
        Category.TRANSPORTATION: transportation,
        Category.GROCERY: grocery,
        Category.UTILITIES: utilities,
        Category.HEALTHCARE: healthcare,
        Category.MISCELLANEOUS: miscellaneous,
    }


COST_OF_LIVING_2024 = CostOfLivingTable({
    'San Francisco': _row(274.9, 147.1, 127.6, 134.2, 126.5, 125),
    'Los Angeles': _row(233.3, 142.6, 111.4, 108.7, 111.9, 110),
    'Philadelphia': _row(97.4, 108.7, 106.3, 113.5, 101.4, 100),
    'Pittsburgh': _row(94.9, 110, 101.8, 106.9, 95.8, 100),
    'Chicago': _row(139, 99.5, 103.3, 98.2, 102.9, 100),
    'Houston': _row(80.6, 92.7, 94.5, 104.1, 91.7, 100),
    'Phoenix': _row(113.5, 99.8, 101.2, 104.6, 92.3, 100),
    'San Diego': _row(210.9, 142.9, 109.8, 121.1, 108.4, 110),
    'Dallas': _row(97.3, 88.8, 96.7, 101.3, 102.6, 105),
    'Austin': _row(105.2, 93.9, 92.4, 94.6, 99.7, 95),
    'Boston': _row(212.8, 113.8, 106.6, 135.7, 122.8, 120),
    'Atlanta': _row(91.1, 98.6, 100.4, 91.5, 104.3, 100),
    'Portland': _row(147.4, 133.3, 109.9, 88.4, 117.6, 105),
    'Seattle': _row(209.2, 130.1, 120.2, 99.8, 120.4, 115),
    'Denver': _row(124.4, 91.6, 101.1, 91.9, 104.8, 100),
    'Miami': _row(153.3, 103.9, 108.4, 95.3, 104.1, 105),
    'New York City': _row(485.3, 110.5, 130.3, 122.7, 120.8, 125),
})


def convert_amount(amount: float,
                   source_city: str,
                   dest_city: str,
                   category: Category,
                   table: CostOfLivingTable = COST_OF_LIVING_2024) -> float:
    """
    Convert an expense from one city's prices to another's.

    Args:
        amount: Expense in source-city dollars
        source_city: City the amount was observed in
        dest_city: City to express the amount in
        category: Expense category; FIXED is returned unchanged
        table: Cost-of-living indices

    Returns:
        Equivalent expense in destination-city dollars

    Raises:
        UnknownCityError: either city lacks an index for the category
    """
    category = Category(category)
    if category is Category.FIXED:
        return amount

    source_index = table.index(source_city, category)
    dest_index = table.index(dest_city, category)
    return amount * (dest_index / source_index)


def _largest_housing_index(expenses: Sequence["ExpenseItem"]) -> Optional[int]:
    largest = None
    for i, expense in enumerate(expenses):
        if Category(expense.category) is not Category.HOUSING:
            continue
        if largest is None or expense.amount > expenses[largest].amount:
            largest = i
    return largest


def convert_expenses(expenses: Sequence["ExpenseItem"],
                     source_city: str,
                     dest_city: str,
                     table: CostOfLivingTable = COST_OF_LIVING_2024,
                     housing_override: Optional[float] = None) -> List["ExpenseItem"]:
    """
    Convert every expense line item into destination-city dollars.

    When housing_override is given, the single largest Housing item takes the
    override amount as-is and any other Housing items are converted normally.
    """
    converted = [
        replace(e, amount=convert_amount(e.amount, source_city, dest_city, e.category, table))
        for e in expenses
    ]

    if housing_override is not None:
        target = _largest_housing_index(expenses)
        if target is None:
            logger.warning(
                f"Housing override {housing_override:,.0f} for {dest_city} ignored: no Housing expenses")
        else:
            converted[target] = replace(converted[target], amount=float(housing_override))

    return converted
