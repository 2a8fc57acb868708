"""
Expense Splitting & Summary
"""
from collections import OrderedDict
from decimal import Decimal, ROUND_DOWN
from typing import Dict, List, Optional, Sequence, Tuple
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from tripindo.models.expense import Expense, ExpenseShare
from tripindo.models.participant import TripParticipant

CENT = Decimal("0.01")


def split_amount(amount: Decimal, user_ids: Sequence[UUID]) -> List[Tuple[UUID, Decimal]]:
    """
    Split an amount equally in cents; the leftover cents go to the first user,
    so 10.00 over three users becomes 3.34, 3.33, 3.33.
    """
    if not user_ids:
        return []
    base = (amount / len(user_ids)).quantize(CENT, rounding=ROUND_DOWN)
    remainder = amount - base * len(user_ids)
    shares = [(user_id, base) for user_id in user_ids]
    shares[0] = (shares[0][0], base + remainder)
    return shares


async def reconciled_participant_ids(db: AsyncSession, trip_id: UUID) -> List[UUID]:
    """User ids of the trip's participants, in join order"""
    result = await db.execute(
        select(TripParticipant.user_id)
        .where(TripParticipant.trip_id == trip_id, TripParticipant.user_id.is_not(None))
        .order_by(TripParticipant.joined_at, TripParticipant.id)
    )
    return list(result.scalars().all())


async def build_shares(db: AsyncSession, expense: Expense) -> List[ExpenseShare]:
    if expense.paid_for_user_id is not None:
        split = [(expense.paid_for_user_id, Decimal(expense.amount))]
    else:
        split = split_amount(Decimal(expense.amount), await reconciled_participant_ids(db, expense.trip_id))

    return [
        ExpenseShare(expense_id=expense.id, user_id=user_id, share_amount=share)
        for user_id, share in split
    ]


async def delete_expense_with_shares(db: AsyncSession, expense_id: UUID) -> None:
    """Shares go first; the expense row has no database cascade"""
    await db.execute(delete(ExpenseShare).where(ExpenseShare.expense_id == expense_id))
    await db.execute(delete(Expense).where(Expense.id == expense_id))


def summarize(expenses: Sequence[Expense], categories: Optional[Sequence[str]] = None) -> Tuple[Decimal, Dict[str, Decimal]]:
    """Total and per-category totals; listed categories appear even when empty"""
    by_category: Dict[str, Decimal] = OrderedDict((name, Decimal("0")) for name in categories or [])
    total = Decimal("0")
    for expense in expenses:
        amount = Decimal(expense.amount)
        total += amount
        by_category[expense.category] = by_category.get(expense.category, Decimal("0")) + amount
    return total, by_category
