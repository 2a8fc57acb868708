"""
Budget Statistics - totals, usage and cost ranking for a trip
"""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable, List, Sequence

from tripindo.errors import InvalidBudgetError

TOP_EXPENSES_LIMIT = 5


@dataclass(frozen=True)
class CostItem:
    """A priced destination or activity, in fetch order"""
    kind: str
    id: object
    name: str
    price: Decimal


@dataclass
class TripStats:
    budget: Decimal
    total_destinations_cost: Decimal
    total_activities_cost: Decimal
    total_cost: Decimal
    remaining_budget: Decimal
    budget_usage_percentage: float
    destination_count: int
    activity_count: int
    top_expenses: List[CostItem] = field(default_factory=list)


def _to_decimal(value) -> Decimal:
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _cost_items(kind: str, rows: Iterable) -> List[CostItem]:
    return [
        CostItem(kind=kind, id=row.id, name=row.name, price=_to_decimal(row.price))
        for row in rows
    ]


def rank_by_price(items: Sequence[CostItem], limit: int = TOP_EXPENSES_LIMIT) -> List[CostItem]:
    """Most expensive first; sorted() is stable so equal prices keep fetch order"""
    return sorted(items, key=lambda item: item.price, reverse=True)[:limit]


def compute_trip_stats(budget, destinations: Sequence, activities: Sequence) -> TripStats:
    """
    Aggregate a trip's costs against its budget.

    Args:
        budget: Trip budget, must be strictly positive
        destinations: Objects with id, name and price, in fetch order
        activities: Objects with id, name and price, in fetch order

    Raises:
        InvalidBudgetError: If the budget is zero or negative
    """
    budget = _to_decimal(budget)
    if budget <= 0:
        raise InvalidBudgetError(f"Budget must be greater than zero, got {budget}")

    destination_items = _cost_items("destination", destinations)
    activity_items = _cost_items("activity", activities)

    total_destinations = sum((item.price for item in destination_items), Decimal("0"))
    total_activities = sum((item.price for item in activity_items), Decimal("0"))
    total = total_destinations + total_activities

    return TripStats(
        budget=budget,
        total_destinations_cost=total_destinations,
        total_activities_cost=total_activities,
        total_cost=total,
        remaining_budget=budget - total,
        budget_usage_percentage=round(float(total / budget * 100), 2),
        destination_count=len(destination_items),
        activity_count=len(activity_items),
        top_expenses=rank_by_price(destination_items + activity_items),
    )
