"""Unit tests for trip budget statistics."""

from decimal import Decimal
from types import SimpleNamespace
from uuid import uuid4

import pytest

from tripindo.errors import ErrorCode, InvalidBudgetError
from tripindo.services.budget import CostItem, compute_trip_stats, rank_by_price


def priced(name, price):
    return SimpleNamespace(id=uuid4(), name=name, price=Decimal(str(price)))


def test_totals_remaining_and_usage():
    """Budget 1000 against 600 of destinations and 300 of activities."""
    destinations = [priced("Ubud", 400), priced("Canggu", 200)]
    activities = [priced("Rafting", 200), priced("Cooking class", 100)]

    stats = compute_trip_stats(Decimal("1000"), destinations, activities)

    assert stats.total_destinations_cost == Decimal("600")
    assert stats.total_activities_cost == Decimal("300")
    assert stats.total_cost == Decimal("900")
    assert stats.remaining_budget == Decimal("100")
    assert stats.budget_usage_percentage == 90.0
    assert stats.destination_count == 2
    assert stats.activity_count == 2


def test_usage_is_rounded_to_two_decimals():
    stats = compute_trip_stats(Decimal("300"), [priced("Lombok", 100)], [])

    assert stats.budget_usage_percentage == 33.33


def test_over_budget_goes_negative():
    stats = compute_trip_stats(Decimal("100"), [priced("Komodo", 150)], [])

    assert stats.remaining_budget == Decimal("-50")
    assert stats.budget_usage_percentage == 150.0


def test_top_expenses_sorted_by_price_descending():
    """A(50), B(200), C(10) ranks as B, A, C."""
    stats = compute_trip_stats(
        Decimal("1000"),
        [priced("A", 50), priced("B", 200)],
        [priced("C", 10)],
    )

    assert [item.name for item in stats.top_expenses] == ["B", "A", "C"]
    assert stats.top_expenses[0].kind == "destination"
    assert stats.top_expenses[2].kind == "activity"


def test_top_expenses_capped_at_five():
    destinations = [priced(f"D{i}", i) for i in range(1, 5)]
    activities = [priced(f"A{i}", i * 10) for i in range(1, 5)]

    stats = compute_trip_stats(Decimal("5000"), destinations, activities)

    assert len(stats.top_expenses) == 5
    assert [item.name for item in stats.top_expenses] == ["A4", "A3", "A2", "A1", "D4"]


def test_equal_prices_keep_fetch_order():
    """Destinations come before activities when prices tie."""
    items = [
        CostItem(kind="destination", id=1, name="first", price=Decimal("20")),
        CostItem(kind="destination", id=2, name="second", price=Decimal("20")),
        CostItem(kind="activity", id=3, name="third", price=Decimal("20")),
    ]

    assert [item.name for item in rank_by_price(items)] == ["first", "second", "third"]


def test_empty_trip_has_zero_usage():
    stats = compute_trip_stats(Decimal("500"), [], [])

    assert stats.total_cost == Decimal("0")
    assert stats.remaining_budget == Decimal("500")
    assert stats.budget_usage_percentage == 0.0
    assert stats.top_expenses == []


@pytest.mark.parametrize("budget", [0, Decimal("0"), Decimal("-10")])
def test_non_positive_budget_rejected(budget):
    with pytest.raises(InvalidBudgetError) as exc_info:
        compute_trip_stats(budget, [priced("Bromo", 10)], [])

    assert exc_info.value.code == ErrorCode.INVALID_BUDGET
    assert exc_info.value.status_code == 422
