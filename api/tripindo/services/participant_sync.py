"""
Participant Reconciliation

Binds email placeholders in trip_participants to a real user id once that
user signs in. Rows are updated and committed one at a time; a failing row is
rolled back, logged and skipped while earlier rows stay applied.
"""
from dataclasses import dataclass, field
from typing import List
from uuid import UUID
import logging

from sqlalchemy import func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from tripindo.models.participant import TripParticipant

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


@dataclass
class ReconciliationResult:
    matched: int = 0
    updated: int = 0
    skipped: int = 0
    failed: int = 0
    trip_ids: List[UUID] = field(default_factory=list)


async def sync_user_participants(db: AsyncSession, email: str, user_id: UUID) -> ReconciliationResult:
    """
    Rewrite every unreconciled participant row for `email` to reference `user_id`.

    Rows already carrying a user id never match, so running this twice is a no-op.
    """
    result = ReconciliationResult()
    if not email:
        return result

    normalized = normalize_email(email)
    logger.info(f"Syncing participant placeholders for {normalized}")

    rows = await db.execute(
        select(TripParticipant.id, TripParticipant.trip_id)
        .where(
            func.lower(func.trim(TripParticipant.email)) == normalized,
            TripParticipant.user_id.is_(None),
        )
        .order_by(TripParticipant.joined_at)
    )
    placeholders = rows.all()
    result.matched = len(placeholders)

    if not placeholders:
        logger.info(f"No placeholder participants found for {normalized}")
        return result

    joined = await db.execute(
        select(TripParticipant.trip_id).where(TripParticipant.user_id == user_id)
    )
    already_joined = set(joined.scalars().all())

    for participant_id, trip_id in placeholders:
        if trip_id in already_joined:
            # A second row for (trip, user) would break the unique constraint
            logger.warning(
                f"Skipping placeholder {participant_id}: user {user_id} already participates in trip {trip_id}"
            )
            result.skipped += 1
            continue

        try:
            await db.execute(
                update(TripParticipant)
                .where(TripParticipant.id == participant_id, TripParticipant.user_id.is_(None))
                .values(user_id=user_id, email=None)
            )
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error(f"Failed to reconcile participant {participant_id}: {e}")
            result.failed += 1
            continue

        already_joined.add(trip_id)
        result.updated += 1
        result.trip_ids.append(trip_id)
        logger.info(f"Participant {participant_id} bound to user {user_id} for trip {trip_id}")

    logger.info(
        f"Participant sync finished for {normalized}: "
        f"{result.updated} updated, {result.skipped} skipped, {result.failed} failed"
    )
    return result
