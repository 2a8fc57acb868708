"""
TripParticipant & TripInvitation Models
"""
from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint, Uuid, func
import uuid

from tripindo.utils.database import Base


class ParticipantRole:
    OWNER = "owner"
    PARTICIPANT = "participant"


class InvitationStatus:
    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"


class TripParticipant(Base):
    __tablename__ = "trip_participants"
    __table_args__ = (
        UniqueConstraint("trip_id", "user_id", name="uq_trip_participants_trip_user"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    trip_id = Column(Uuid, ForeignKey("trips.id"), nullable=False, index=True)
    user_id = Column(Uuid, ForeignKey("users.id"), nullable=True, index=True)  # Null until reconciled
    email = Column(String(255), nullable=True, index=True)  # Placeholder before reconciliation
    role = Column(String(50), nullable=False, default=ParticipantRole.PARTICIPANT)

    joined_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<TripParticipant {self.user_id or self.email} ({self.role})>"


class TripInvitation(Base):
    __tablename__ = "trip_invitations"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    trip_id = Column(Uuid, ForeignKey("trips.id"), nullable=False, index=True)
    inviter_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    invitee_email = Column(String(255), nullable=False, index=True)
    status = Column(String(50), nullable=False, default=InvitationStatus.PENDING)  # pending, accepted, declined

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    responded_at = Column(DateTime(timezone=True), nullable=True)

    def __repr__(self):
        return f"<TripInvitation {self.invitee_email} -> {self.trip_id} [{self.status}]>"
