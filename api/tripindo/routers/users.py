"""
User Profile Endpoints
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from tripindo.utils.database import get_db
from tripindo.services.auth import get_current_user
from tripindo.models.user import User, Profile
from tripindo.schemas.user import ProfileResponse, ProfileUpdate, UserResponse
from tripindo.routers.auth import build_user_response

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/me", response_model=UserResponse)
async def get_profile(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Get current user profile
    """
    return await build_user_response(db, current_user)


@router.patch("/me", response_model=ProfileResponse)
async def update_profile(
    updates: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Update current user's first and last name
    """
    profile = await db.get(Profile, current_user.id)
    if profile is None:
        profile = Profile(id=current_user.id)
        db.add(profile)

    for field, value in updates.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(profile, field, value.strip())

    await db.commit()
    await db.refresh(profile)

    logger.info(f"User profile updated: {current_user.id}")

    return profile
