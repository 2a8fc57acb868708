"""
Participant & Invitation Schemas
"""
from pydantic import BaseModel, EmailStr
from typing import Optional
from datetime import date, datetime
from uuid import UUID


class ParticipantAdd(BaseModel):
    """Schema for adding a participant placeholder by email"""
    email: EmailStr


class ParticipantResponse(BaseModel):
    """Schema for participant response"""
    id: UUID
    trip_id: UUID
    user_id: Optional[UUID]
    email: Optional[str]
    role: str
    joined_at: Optional[datetime]
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    class Config:
        from_attributes = True


class InvitationCreate(BaseModel):
    """Schema for inviting someone to a trip"""
    email: EmailStr


class InvitationResponse(BaseModel):
    id: UUID
    trip_id: UUID
    inviter_id: UUID
    invitee_email: str
    status: str
    created_at: Optional[datetime]
    responded_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class InvitationCreatedResponse(BaseModel):
    """Invitation row plus the outcome of the best-effort email"""
    invitation: InvitationResponse
    email_sent: bool
    message: str


class InvitationTripSummary(BaseModel):
    title: str
    description: Optional[str]
    start_date: Optional[date]
    end_date: Optional[date]
    budget: float


class InviterSummary(BaseModel):
    id: UUID
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class ReceivedInvitationResponse(InvitationResponse):
    """Pending invitation with its trip and inviter embedded"""
    trip: Optional[InvitationTripSummary] = None
    inviter: Optional[InviterSummary] = None


class InvitationDecisionResponse(BaseModel):
    invitation: InvitationResponse
    participant: Optional[ParticipantResponse] = None
    participant_created: bool = False


class SendInvitationEmailResponse(BaseModel):
    success: bool
    message: str
    data: Optional[dict] = None
