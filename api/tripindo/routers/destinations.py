"""
Destination & Activity Endpoints
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import List
from uuid import UUID
import logging

from tripindo.utils.database import get_db
from tripindo.services.auth import get_current_user
from tripindo.models.user import User
from tripindo.models.trip import Destination, Activity
from tripindo.schemas.trip import (
    DestinationCreate,
    DestinationUpdate,
    DestinationResponse,
    ActivityCreate,
    ActivityUpdate,
    ActivityResponse,
)
from tripindo.services.cascade import delete_destinations
from tripindo.services.trip_access import (
    get_trip_for_member,
    get_destination_for_member,
    get_activity_for_member,
)

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post(
    "/trips/{trip_id}/destinations",
    response_model=DestinationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_destination(
    trip_id: UUID,
    payload: DestinationCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Add a destination to a trip
    """
    trip, _ = await get_trip_for_member(db, trip_id, current_user)

    destination = Destination(
        trip_id=trip.id,
        name=payload.name.strip(),
        description=payload.description,
        country=payload.country,
        price=payload.price,
    )
    db.add(destination)
    await db.commit()
    await db.refresh(destination)

    logger.info(f"Destination {destination.id} added to trip {trip.id}")

    return destination


@router.get("/trips/{trip_id}/destinations", response_model=List[DestinationResponse])
async def list_destinations(
    trip_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    List a trip's destinations in creation order
    """
    await get_trip_for_member(db, trip_id, current_user)

    result = await db.execute(
        select(Destination)
        .where(Destination.trip_id == trip_id)
        .order_by(Destination.created_at.asc())
    )
    return result.scalars().all()


@router.patch("/destinations/{destination_id}", response_model=DestinationResponse)
async def update_destination(
    destination_id: UUID,
    updates: DestinationUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    destination = await get_destination_for_member(db, destination_id, current_user)

    for field, value in updates.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(destination, field, value)

    await db.commit()
    await db.refresh(destination)

    return destination


@router.delete("/destinations/{destination_id}")
async def delete_destination(
    destination_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Delete a destination together with its activities
    """
    destination = await get_destination_for_member(db, destination_id, current_user)

    await delete_destinations(db, [destination.id])
    await db.commit()

    logger.info(f"Destination {destination_id} deleted")

    return {"message": "Destination deleted successfully"}


@router.post(
    "/destinations/{destination_id}/activities",
    response_model=ActivityResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_activity(
    destination_id: UUID,
    payload: ActivityCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Add an activity to a destination
    """
    destination = await get_destination_for_member(db, destination_id, current_user)

    activity = Activity(
        destination_id=destination.id,
        name=payload.name.strip(),
        description=payload.description,
        price=payload.price,
        duration=payload.duration,
    )
    db.add(activity)
    await db.commit()
    await db.refresh(activity)

    logger.info(f"Activity {activity.id} added to destination {destination.id}")

    return activity


@router.get("/destinations/{destination_id}/activities", response_model=List[ActivityResponse])
async def list_activities(
    destination_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    List a destination's activities in creation order
    """
    await get_destination_for_member(db, destination_id, current_user)

    result = await db.execute(
        select(Activity)
        .where(Activity.destination_id == destination_id)
        .order_by(Activity.created_at.asc())
    )
    return result.scalars().all()


@router.patch("/activities/{activity_id}", response_model=ActivityResponse)
async def update_activity(
    activity_id: UUID,
    updates: ActivityUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    activity = await get_activity_for_member(db, activity_id, current_user)

    for field, value in updates.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(activity, field, value)

    await db.commit()
    await db.refresh(activity)

    return activity


@router.delete("/activities/{activity_id}")
async def delete_activity(
    activity_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    activity = await get_activity_for_member(db, activity_id, current_user)

    await db.delete(activity)
    await db.commit()

    return {"message": "Activity deleted successfully"}
