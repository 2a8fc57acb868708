"""
Trip Invitation Endpoints
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import List
from uuid import UUID
import logging

from tripindo.utils.database import get_db
from tripindo.services.auth import get_current_user
from tripindo.models.user import User, Profile
from tripindo.models.trip import Trip
from tripindo.models.participant import TripInvitation, InvitationStatus
from tripindo.schemas.participant import (
    InvitationCreate,
    InvitationResponse,
    InvitationCreatedResponse,
    InvitationDecisionResponse,
    InvitationTripSummary,
    InviterSummary,
    ParticipantResponse,
    ReceivedInvitationResponse,
)
from tripindo.services import invitations as invitation_service
from tripindo.services.email import InvitationMailer, get_mailer
from tripindo.services.participant_sync import normalize_email
from tripindo.services.trip_access import get_trip_for_owner

router = APIRouter()
logger = logging.getLogger(__name__)


def to_decision_response(decision: invitation_service.InvitationDecision) -> InvitationDecisionResponse:
    participant = decision.participant
    return InvitationDecisionResponse(
        invitation=InvitationResponse.model_validate(decision.invitation),
        participant=ParticipantResponse.model_validate(participant) if participant else None,
        participant_created=decision.participant_created,
    )


@router.post(
    "/trips/{trip_id}/invitations",
    response_model=InvitationCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def invite_to_trip(
    trip_id: UUID,
    payload: InvitationCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    mailer: InvitationMailer = Depends(get_mailer),
):
    """
    Invite someone to a trip by email (owner only). The invitation is kept even
    when the email cannot be delivered.
    """
    trip = await get_trip_for_owner(db, trip_id, current_user)

    invitation = await invitation_service.create_invitation(db, trip, current_user, payload.email)
    email_sent, message = await invitation_service.notify_invitee(mailer, trip, current_user, invitation)

    return InvitationCreatedResponse(
        invitation=InvitationResponse.model_validate(invitation),
        email_sent=email_sent,
        message=message,
    )


@router.get("/invitations/received", response_model=List[ReceivedInvitationResponse])
async def list_received_invitations(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Pending invitations addressed to the current user, newest first
    """
    result = await db.execute(
        select(TripInvitation, Trip, User, Profile)
        .join(Trip, Trip.id == TripInvitation.trip_id)
        .join(User, User.id == TripInvitation.inviter_id)
        .outerjoin(Profile, Profile.id == TripInvitation.inviter_id)
        .where(
            TripInvitation.invitee_email == normalize_email(current_user.email),
            TripInvitation.status == InvitationStatus.PENDING,
        )
        .order_by(TripInvitation.created_at.desc())
    )

    invitations = []
    for invitation, trip, inviter, profile in result.all():
        item = ReceivedInvitationResponse.model_validate(invitation)
        item.trip = InvitationTripSummary(
            title=trip.title,
            description=trip.description,
            start_date=trip.start_date,
            end_date=trip.end_date,
            budget=trip.budget,
        )
        item.inviter = InviterSummary(
            id=inviter.id,
            email=inviter.email,
            first_name=profile.first_name if profile else None,
            last_name=profile.last_name if profile else None,
        )
        invitations.append(item)

    return invitations


@router.get("/invitations/sent", response_model=List[InvitationResponse])
async def list_sent_invitations(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Every invitation the current user has sent, newest first
    """
    result = await db.execute(
        select(TripInvitation)
        .where(TripInvitation.inviter_id == current_user.id)
        .order_by(TripInvitation.created_at.desc())
    )
    return result.scalars().all()


@router.post("/invitations/{invitation_id}/accept", response_model=InvitationDecisionResponse)
async def accept_invitation(
    invitation_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Accept a pending invitation and join the trip
    """
    decision = await invitation_service.accept_invitation(db, invitation_id, current_user)
    return to_decision_response(decision)


@router.post("/invitations/{invitation_id}/decline", response_model=InvitationDecisionResponse)
async def decline_invitation(
    invitation_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    decision = await invitation_service.decline_invitation(db, invitation_id, current_user)
    return to_decision_response(decision)
