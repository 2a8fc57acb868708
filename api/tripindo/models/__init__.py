"""SQLAlchemy Models"""
from tripindo.models.user import User, Profile, AuthSession
from tripindo.models.trip import Trip, Destination, Activity
from tripindo.models.participant import TripParticipant, TripInvitation, ParticipantRole, InvitationStatus
from tripindo.models.expense import Expense, ExpenseShare

__all__ = [
    "User", "Profile", "AuthSession",
    "Trip", "Destination", "Activity",
    "TripParticipant", "TripInvitation", "ParticipantRole", "InvitationStatus",
    "Expense", "ExpenseShare",
]
