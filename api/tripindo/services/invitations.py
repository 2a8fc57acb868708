"""
Invitation Lifecycle

    pending --accept--> accepted
    pending --decline--> declined

Both decided states are terminal. Accepting writes the status change and the
participant row in one transaction, and never inserts a second participant
for the same (trip, user).
"""
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Tuple
from uuid import UUID
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tripindo.errors import ConflictError, EmailDeliveryError, InvitationStateError, NotFoundError, PermissionDeniedError
from tripindo.models.participant import InvitationStatus, ParticipantRole, TripInvitation, TripParticipant
from tripindo.models.trip import Trip
from tripindo.models.user import User
from tripindo.services.email import InvitationMailer
from tripindo.services.participant_sync import normalize_email

logger = logging.getLogger(__name__)


@dataclass
class InvitationDecision:
    invitation: TripInvitation
    participant: Optional[TripParticipant] = None
    participant_created: bool = False


async def create_invitation(db: AsyncSession, trip: Trip, inviter: User, invitee_email: str) -> TripInvitation:
    """Create a pending invitation; the caller has already checked ownership"""
    email = normalize_email(invitee_email)

    existing = await db.execute(
        select(TripInvitation.id).where(
            TripInvitation.trip_id == trip.id,
            TripInvitation.invitee_email == email,
            TripInvitation.status == InvitationStatus.PENDING,
        )
    )
    if existing.first():
        raise ConflictError(f"{email} already has a pending invitation to this trip")

    invitation = TripInvitation(
        trip_id=trip.id,
        inviter_id=inviter.id,
        invitee_email=email,
        status=InvitationStatus.PENDING,
    )
    db.add(invitation)
    await db.commit()
    await db.refresh(invitation)

    logger.info(f"Invitation {invitation.id} created for {email} on trip {trip.id}")
    return invitation


async def notify_invitee(mailer: InvitationMailer, trip: Trip, inviter: User, invitation: TripInvitation) -> Tuple[bool, str]:
    """
    Best-effort invitation email. Failure leaves the invitation in place.

    Returns:
        (email_sent, user-facing message)
    """
    try:
        await mailer.send_invitation(
            trip_name=trip.title,
            inviter_email=inviter.email,
            invitee_email=invitation.invitee_email,
        )
    except EmailDeliveryError as e:
        logger.warning(f"Invitation {invitation.id} created but email failed: {e.message}")
        return False, f"Invitation created but the email could not be sent: {e.message}"

    return True, f"Invitation sent to {invitation.invitee_email}"


async def _load_for_invitee(db: AsyncSession, invitation_id: UUID, user: User) -> TripInvitation:
    invitation = await db.get(TripInvitation, invitation_id)
    if not invitation:
        raise NotFoundError("Invitation not found")

    if normalize_email(invitation.invitee_email) != normalize_email(user.email):
        raise PermissionDeniedError("This invitation is addressed to someone else")

    if invitation.status != InvitationStatus.PENDING:
        raise InvitationStateError(f"Invitation has already been {invitation.status}")

    return invitation


async def accept_invitation(db: AsyncSession, invitation_id: UUID, user: User) -> InvitationDecision:
    invitation = await _load_for_invitee(db, invitation_id, user)

    invitation.status = InvitationStatus.ACCEPTED
    invitation.responded_at = datetime.now(timezone.utc)

    result = await db.execute(
        select(TripParticipant).where(
            TripParticipant.trip_id == invitation.trip_id,
            TripParticipant.user_id == user.id,
        )
    )
    participant = result.scalar_one_or_none()
    created = participant is None

    if created:
        participant = TripParticipant(
            trip_id=invitation.trip_id,
            user_id=user.id,
            role=ParticipantRole.PARTICIPANT,
        )
        db.add(participant)

    await db.commit()
    await db.refresh(participant)

    if created:
        logger.info(f"Invitation {invitation.id} accepted; user {user.id} joined trip {invitation.trip_id}")
    else:
        logger.info(f"Invitation {invitation.id} accepted; user {user.id} was already a participant")

    return InvitationDecision(invitation=invitation, participant=participant, participant_created=created)


async def decline_invitation(db: AsyncSession, invitation_id: UUID, user: User) -> InvitationDecision:
    invitation = await _load_for_invitee(db, invitation_id, user)

    invitation.status = InvitationStatus.DECLINED
    invitation.responded_at = datetime.now(timezone.utc)
    await db.commit()

    logger.info(f"Invitation {invitation.id} declined by user {user.id}")
    return InvitationDecision(invitation=invitation)
