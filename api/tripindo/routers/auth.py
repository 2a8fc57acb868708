"""
Authentication Endpoints - sign up, sign in, sign out, current user & session
"""
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from tripindo.utils.database import get_db
from tripindo.models.user import Profile, User
from tripindo.schemas.user import (
    SignUpRequest,
    SignInRequest,
    SessionResponse,
    UserResponse,
    ProfileResponse,
)
from tripindo.services import auth as auth_service
from tripindo.services.auth import SessionContext, get_current_session, get_current_user
from tripindo.services.auth_events import AuthEvent, AuthEventBus

router = APIRouter()
logger = logging.getLogger(__name__)


def get_auth_events(request: Request) -> AuthEventBus:
    return request.app.state.auth_events


async def build_user_response(db: AsyncSession, user: User) -> UserResponse:
    profile = await db.get(Profile, user.id)
    return UserResponse(
        id=user.id,
        email=user.email,
        created_at=user.created_at,
        profile=ProfileResponse.model_validate(profile) if profile else None,
    )


async def build_session_response(db: AsyncSession, ctx: SessionContext) -> SessionResponse:
    return SessionResponse(
        access_token=ctx.access_token,
        expires_at=ctx.session.expires_at,
        user=await build_user_response(db, ctx.user),
    )


@router.post("/signup", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
async def sign_up(
    payload: SignUpRequest,
    db: AsyncSession = Depends(get_db),
    events: AuthEventBus = Depends(get_auth_events),
):
    """
    Create an account with its profile and sign in
    """
    user = await auth_service.sign_up(
        db,
        email=payload.email,
        password=payload.password,
        first_name=payload.first_name,
        last_name=payload.last_name,
    )
    ctx = await auth_service.open_session(db, user)
    response = await build_session_response(db, ctx)
    await events.publish(AuthEvent.SIGNED_IN, db, user)

    return response


@router.post("/login", response_model=SessionResponse)
async def sign_in_with_password(
    payload: SignInRequest,
    db: AsyncSession = Depends(get_db),
    events: AuthEventBus = Depends(get_auth_events),
):
    """
    Sign in with email and password
    """
    user = await auth_service.authenticate(db, payload.email, payload.password)
    ctx = await auth_service.open_session(db, user)
    response = await build_session_response(db, ctx)
    logger.info(f"User signed in: {user.id}")
    await events.publish(AuthEvent.SIGNED_IN, db, user)

    return response


@router.post("/logout")
async def sign_out(
    ctx: SessionContext = Depends(get_current_session),
    db: AsyncSession = Depends(get_db),
    events: AuthEventBus = Depends(get_auth_events),
):
    """
    Revoke the current session
    """
    await auth_service.revoke_session(db, ctx.session)
    await events.publish(AuthEvent.SIGNED_OUT, db, ctx.user)

    return {"message": "Signed out successfully"}


@router.get("/user", response_model=UserResponse)
async def get_user(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Get the authenticated user
    """
    return await build_user_response(db, current_user)


@router.get("/session", response_model=SessionResponse)
async def get_session(
    ctx: SessionContext = Depends(get_current_session),
    db: AsyncSession = Depends(get_db),
):
    """
    Get the active session for the presented token
    """
    return await build_session_response(db, ctx)
