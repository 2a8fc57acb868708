"""
Trip Access - membership and ownership checks shared by the trip-scoped routers
"""
from typing import Optional, Tuple
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tripindo.models.participant import ParticipantRole, TripParticipant
from tripindo.models.trip import Activity, Destination, Trip
from tripindo.models.user import User


async def get_membership(db: AsyncSession, trip_id: UUID, user_id: UUID) -> Optional[TripParticipant]:
    result = await db.execute(
        select(TripParticipant).where(
            TripParticipant.trip_id == trip_id,
            TripParticipant.user_id == user_id,
        )
    )
    return result.scalar_one_or_none()


async def get_trip_for_member(db: AsyncSession, trip_id: UUID, user: User) -> Tuple[Trip, TripParticipant]:
    """Load a trip the user participates in; 404 if missing, 403 if not a participant"""
    trip = await db.get(Trip, trip_id)
    if not trip:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Trip not found")

    membership = await get_membership(db, trip_id, user.id)
    if not membership:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You are not a participant of this trip"
        )
    return trip, membership


async def get_trip_for_owner(db: AsyncSession, trip_id: UUID, user: User) -> Trip:
    trip, membership = await get_trip_for_member(db, trip_id, user)
    if membership.role != ParticipantRole.OWNER:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only the trip owner can do this"
        )
    return trip


async def get_destination_for_member(db: AsyncSession, destination_id: UUID, user: User) -> Destination:
    destination = await db.get(Destination, destination_id)
    if not destination:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Destination not found")
    await get_trip_for_member(db, destination.trip_id, user)
    return destination


async def get_activity_for_member(db: AsyncSession, activity_id: UUID, user: User) -> Activity:
    activity = await db.get(Activity, activity_id)
    if not activity:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Activity not found")
    await get_destination_for_member(db, activity.destination_id, user)
    return activity
