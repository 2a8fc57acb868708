"""
Trip Endpoints - CRUD and budget statistics
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import List
from uuid import UUID
import logging

from tripindo.utils.database import get_db
from tripindo.errors import ValidationError
from tripindo.services.auth import get_current_user
from tripindo.models.user import User
from tripindo.models.trip import Trip, Destination, Activity
from tripindo.models.participant import TripParticipant, ParticipantRole
from tripindo.schemas.trip import (
    TripCreate,
    TripUpdate,
    TripResponse,
    TripStatsResponse,
    RankedItem,
)
from tripindo.services.budget import compute_trip_stats
from tripindo.services.cascade import delete_trip as cascade_delete_trip
from tripindo.services.trip_access import get_trip_for_member, get_trip_for_owner

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("", response_model=TripResponse, status_code=status.HTTP_201_CREATED)
async def create_trip(
    trip_data: TripCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Create a new trip; the creator becomes its owner participant
    """
    trip = Trip(
        owner_id=current_user.id,
        title=trip_data.title.strip(),
        description=trip_data.description,
        start_date=trip_data.start_date,
        end_date=trip_data.end_date,
        budget=trip_data.budget,
    )
    db.add(trip)
    await db.flush()

    db.add(TripParticipant(
        trip_id=trip.id,
        user_id=current_user.id,
        role=ParticipantRole.OWNER,
    ))
    await db.commit()
    await db.refresh(trip)

    logger.info(f"Trip created: {trip.id} by user {current_user.id}")

    return trip


@router.get("", response_model=List[TripResponse])
async def list_trips(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    List all trips for current user (owned or participating), newest first
    """
    query = (
        select(Trip)
        .join(TripParticipant, TripParticipant.trip_id == Trip.id)
        .where(TripParticipant.user_id == current_user.id)
        .order_by(Trip.created_at.desc())
    )

    result = await db.execute(query)
    return result.scalars().unique().all()


@router.get("/{trip_id}", response_model=TripResponse)
async def get_trip(
    trip_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Get trip details
    """
    trip, _ = await get_trip_for_member(db, trip_id, current_user)
    return trip


@router.patch("/{trip_id}", response_model=TripResponse)
async def update_trip(
    trip_id: UUID,
    updates: TripUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Update a trip (owner only)
    """
    trip = await get_trip_for_owner(db, trip_id, current_user)

    changes = updates.model_dump(exclude_unset=True, exclude_none=True)
    start_date = changes.get("start_date", trip.start_date)
    end_date = changes.get("end_date", trip.end_date)
    if start_date and end_date and end_date < start_date:
        raise ValidationError("end_date must not be before start_date")

    for field, value in changes.items():
        setattr(trip, field, value)

    await db.commit()
    await db.refresh(trip)

    logger.info(f"Trip updated: {trip.id}")

    return trip


@router.delete("/{trip_id}")
async def delete_trip(
    trip_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Delete a trip with its destinations, activities, expenses, invitations and participants
    """
    await get_trip_for_owner(db, trip_id, current_user)

    await cascade_delete_trip(db, trip_id)
    await db.commit()

    return {"message": "Trip deleted successfully"}


@router.get("/{trip_id}/stats", response_model=TripStatsResponse)
async def get_trip_stats(
    trip_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Budget statistics: totals, remaining budget, usage and the five costliest items
    """
    trip, _ = await get_trip_for_member(db, trip_id, current_user)

    result = await db.execute(
        select(Destination)
        .where(Destination.trip_id == trip.id)
        .order_by(Destination.created_at.asc())
    )
    destinations = result.scalars().all()

    activities = []
    if destinations:
        result = await db.execute(
            select(Activity)
            .where(Activity.destination_id.in_([d.id for d in destinations]))
            .order_by(Activity.created_at.asc())
        )
        activities = result.scalars().all()

    stats = compute_trip_stats(trip.budget, destinations, activities)

    return TripStatsResponse(
        trip_id=trip.id,
        budget=stats.budget,
        total_destinations_cost=stats.total_destinations_cost,
        total_activities_cost=stats.total_activities_cost,
        total_cost=stats.total_cost,
        remaining_budget=stats.remaining_budget,
        budget_usage_percentage=stats.budget_usage_percentage,
        destination_count=stats.destination_count,
        activity_count=stats.activity_count,
        top_expenses=[
            RankedItem(kind=item.kind, id=item.id, name=item.name, price=item.price)
            for item in stats.top_expenses
        ],
    )
