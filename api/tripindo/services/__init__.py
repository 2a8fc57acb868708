"""Services for Trip Indo."""
from .budget import compute_trip_stats
from .participant_sync import sync_user_participants
from .email import InvitationMailer

__all__ = [
    "compute_trip_stats",
    "sync_user_participants",
    "InvitationMailer",
]
