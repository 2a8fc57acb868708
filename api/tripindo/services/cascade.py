"""
Manual cascading deletes. No foreign key declares ON DELETE CASCADE, so
children are removed before their parents.
"""
from typing import Sequence
from uuid import UUID
import logging

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from tripindo.models.expense import Expense, ExpenseShare
from tripindo.models.participant import TripInvitation, TripParticipant
from tripindo.models.trip import Activity, Destination, Trip

logger = logging.getLogger(__name__)


async def delete_destinations(db: AsyncSession, destination_ids: Sequence[UUID]) -> None:
    if not destination_ids:
        return
    await db.execute(delete(Activity).where(Activity.destination_id.in_(destination_ids)))
    await db.execute(delete(Destination).where(Destination.id.in_(destination_ids)))


async def delete_trip(db: AsyncSession, trip_id: UUID) -> None:
    destination_ids = (
        await db.execute(select(Destination.id).where(Destination.trip_id == trip_id))
    ).scalars().all()
    await delete_destinations(db, destination_ids)

    expense_ids = (
        await db.execute(select(Expense.id).where(Expense.trip_id == trip_id))
    ).scalars().all()
    if expense_ids:
        await db.execute(delete(ExpenseShare).where(ExpenseShare.expense_id.in_(expense_ids)))
        await db.execute(delete(Expense).where(Expense.id.in_(expense_ids)))

    await db.execute(delete(TripInvitation).where(TripInvitation.trip_id == trip_id))
    await db.execute(delete(TripParticipant).where(TripParticipant.trip_id == trip_id))
    await db.execute(delete(Trip).where(Trip.id == trip_id))

    logger.info(
        f"Trip {trip_id} deleted with {len(destination_ids)} destinations and {len(expense_ids)} expenses"
    )
