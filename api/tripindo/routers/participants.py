"""
Trip Participant Endpoints
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import List
from uuid import UUID
import logging

from tripindo.utils.database import get_db
from tripindo.services.auth import get_current_user
from tripindo.models.user import User, Profile
from tripindo.models.participant import TripParticipant, ParticipantRole
from tripindo.schemas.participant import ParticipantAdd, ParticipantResponse
from tripindo.services.participant_sync import normalize_email
from tripindo.services.trip_access import get_trip_for_member, get_trip_for_owner

router = APIRouter()
logger = logging.getLogger(__name__)


def to_response(participant: TripParticipant, profile: Profile = None) -> ParticipantResponse:
    return ParticipantResponse(
        id=participant.id,
        trip_id=participant.trip_id,
        user_id=participant.user_id,
        email=participant.email,
        role=participant.role,
        joined_at=participant.joined_at,
        first_name=profile.first_name if profile else None,
        last_name=profile.last_name if profile else None,
    )


@router.get("/trips/{trip_id}/participants", response_model=List[ParticipantResponse])
async def list_participants(
    trip_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    List a trip's participants in join order, with profile names where reconciled
    """
    await get_trip_for_member(db, trip_id, current_user)

    result = await db.execute(
        select(TripParticipant, Profile)
        .outerjoin(Profile, Profile.id == TripParticipant.user_id)
        .where(TripParticipant.trip_id == trip_id)
        .order_by(TripParticipant.joined_at.asc(), TripParticipant.id.asc())
    )
    return [to_response(participant, profile) for participant, profile in result.all()]


@router.post(
    "/trips/{trip_id}/participants",
    response_model=ParticipantResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_participant(
    trip_id: UUID,
    payload: ParticipantAdd,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Add a participant by email (owner only). The row stays a placeholder until
    someone with that email signs in.
    """
    trip = await get_trip_for_owner(db, trip_id, current_user)

    participant = TripParticipant(
        trip_id=trip.id,
        email=normalize_email(payload.email),
        role=ParticipantRole.PARTICIPANT,
    )
    db.add(participant)
    await db.commit()
    await db.refresh(participant)

    logger.info(f"Placeholder participant {participant.email} added to trip {trip.id}")

    return to_response(participant)


@router.delete("/trips/{trip_id}/participants/{participant_id}")
async def remove_participant(
    trip_id: UUID,
    participant_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Remove a participant (owner only)
    """
    await get_trip_for_owner(db, trip_id, current_user)

    participant = await db.get(TripParticipant, participant_id)
    if not participant or participant.trip_id != trip_id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Participant not found")

    if participant.role == ParticipantRole.OWNER or participant.user_id == current_user.id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="The trip owner cannot be removed")

    await db.delete(participant)
    await db.commit()

    logger.info(f"Participant {participant_id} removed from trip {trip_id}")

    return {"message": "Participant removed successfully"}
