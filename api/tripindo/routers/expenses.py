"""
Expense Endpoints
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from datetime import date
from typing import Dict, List
from uuid import UUID
import logging

from tripindo.utils.database import get_db
from tripindo.errors import ValidationError
from tripindo.services.auth import get_current_user
from tripindo.models.user import User
from tripindo.models.expense import Expense, ExpenseShare
from tripindo.schemas.expense import (
    ExpenseCategory,
    ExpenseCreate,
    ExpenseResponse,
    ExpenseShareResponse,
    ExpenseSummaryResponse,
)
from tripindo.services.expenses import (
    build_shares,
    delete_expense_with_shares,
    reconciled_participant_ids,
    summarize,
)
from tripindo.services.trip_access import get_trip_for_member

router = APIRouter()
logger = logging.getLogger(__name__)


def to_response(expense: Expense, shares: List[ExpenseShare]) -> ExpenseResponse:
    return ExpenseResponse(
        id=expense.id,
        trip_id=expense.trip_id,
        title=expense.title,
        amount=expense.amount,
        category=expense.category,
        date=expense.date,
        paid_by_user_id=expense.paid_by_user_id,
        paid_for_user_id=expense.paid_for_user_id,
        created_at=expense.created_at,
        shares=[ExpenseShareResponse.model_validate(share) for share in shares],
    )


@router.post(
    "/trips/{trip_id}/expenses",
    response_model=ExpenseResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_expense(
    trip_id: UUID,
    payload: ExpenseCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Record an expense paid by one participant, for one participant or shared by all
    """
    trip, _ = await get_trip_for_member(db, trip_id, current_user)

    participant_ids = set(await reconciled_participant_ids(db, trip.id))
    paid_by = payload.paid_by_user_id or current_user.id

    if paid_by not in participant_ids:
        raise ValidationError("Payer is not a participant of this trip")
    if payload.paid_for_user_id and payload.paid_for_user_id not in participant_ids:
        raise ValidationError("Beneficiary is not a participant of this trip")

    expense = Expense(
        trip_id=trip.id,
        title=payload.title.strip(),
        amount=payload.amount,
        category=payload.category.value,
        date=payload.date or date.today(),
        paid_by_user_id=paid_by,
        paid_for_user_id=payload.paid_for_user_id,
    )
    db.add(expense)
    await db.flush()

    shares = await build_shares(db, expense)
    db.add_all(shares)
    await db.commit()
    await db.refresh(expense)

    logger.info(f"Expense {expense.id} ({expense.amount}) added to trip {trip.id} with {len(shares)} shares")

    return to_response(expense, shares)


@router.get("/trips/{trip_id}/expenses", response_model=List[ExpenseResponse])
async def list_expenses(
    trip_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    List a trip's expenses, most recent date first
    """
    await get_trip_for_member(db, trip_id, current_user)

    result = await db.execute(
        select(Expense)
        .where(Expense.trip_id == trip_id)
        .order_by(Expense.date.desc(), Expense.created_at.desc())
    )
    expenses = result.scalars().all()

    shares_by_expense: Dict[UUID, List[ExpenseShare]] = {expense.id: [] for expense in expenses}
    if expenses:
        result = await db.execute(
            select(ExpenseShare).where(ExpenseShare.expense_id.in_(list(shares_by_expense)))
        )
        for share in result.scalars().all():
            shares_by_expense[share.expense_id].append(share)

    return [to_response(expense, shares_by_expense[expense.id]) for expense in expenses]


@router.get("/trips/{trip_id}/expenses/summary", response_model=ExpenseSummaryResponse)
async def get_expense_summary(
    trip_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Total spent and the total per category
    """
    await get_trip_for_member(db, trip_id, current_user)

    result = await db.execute(select(Expense).where(Expense.trip_id == trip_id))
    expenses = result.scalars().all()

    total, by_category = summarize(expenses, [category.value for category in ExpenseCategory])

    return ExpenseSummaryResponse(
        trip_id=trip_id,
        total=total,
        expense_count=len(expenses),
        by_category=by_category,
    )


@router.delete("/expenses/{expense_id}")
async def delete_expense(
    expense_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Delete an expense and its shares
    """
    expense = await db.get(Expense, expense_id)
    if not expense:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Expense not found")

    await get_trip_for_member(db, expense.trip_id, current_user)

    await delete_expense_with_shares(db, expense.id)
    await db.commit()

    logger.info(f"Expense {expense_id} deleted")

    return {"message": "Expense deleted successfully"}
