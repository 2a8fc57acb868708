"""Unit tests for expense splitting and summaries."""

from decimal import Decimal
from types import SimpleNamespace
from uuid import uuid4

from tripindo.services.expenses import split_amount, summarize


def test_even_split():
    users = [uuid4(), uuid4()]

    shares = split_amount(Decimal("90.00"), users)

    assert shares == [(users[0], Decimal("45.00")), (users[1], Decimal("45.00"))]


def test_remainder_goes_to_first_user():
    users = [uuid4(), uuid4(), uuid4()]

    shares = split_amount(Decimal("10.00"), users)

    assert [amount for _, amount in shares] == [Decimal("3.34"), Decimal("3.33"), Decimal("3.33")]
    assert sum(amount for _, amount in shares) == Decimal("10.00")


def test_split_without_users_is_empty():
    assert split_amount(Decimal("25.00"), []) == []


def test_summarize_lists_every_category():
    expenses = [
        SimpleNamespace(amount=Decimal("12.50"), category="Food"),
        SimpleNamespace(amount=Decimal("7.50"), category="Food"),
        SimpleNamespace(amount=Decimal("30.00"), category="Transport"),
    ]

    total, by_category = summarize(expenses, ["Transport", "Food", "Other"])

    assert total == Decimal("50.00")
    assert list(by_category) == ["Transport", "Food", "Other"]
    assert by_category["Food"] == Decimal("20.00")
    assert by_category["Other"] == Decimal("0")
