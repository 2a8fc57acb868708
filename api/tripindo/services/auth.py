"""
Authentication - accounts, sessions and the session guard dependency
"""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID
import logging
import uuid

import jwt
from fastapi import Depends, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from passlib.context import CryptContext
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tripindo.config import settings
from tripindo.errors import AuthenticationError, ConflictError, ErrorCode
from tripindo.models.user import AuthSession, Profile, User
from tripindo.services.participant_sync import normalize_email
from tripindo.utils.database import get_db

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

auth_scheme = HTTPBearer(auto_error=False)


@dataclass
class SessionContext:
    """The authenticated user and the session their token belongs to"""
    user: User
    session: AuthSession
    access_token: str


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    return pwd_context.verify(password, password_hash)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands timestamps back without tzinfo
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def create_access_token(user: User, session: AuthSession) -> str:
    payload = {
        "sub": str(user.id),
        "email": user.email,
        "jti": str(session.id),
        "iat": int(_utcnow().timestamp()),
        "exp": int(_as_utc(session.expires_at).timestamp()),
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except jwt.ExpiredSignatureError as e:
        raise AuthenticationError("Session has expired", code=ErrorCode.SESSION_EXPIRED) from e
    except jwt.InvalidTokenError as e:
        raise AuthenticationError(f"Invalid token: {e}", code=ErrorCode.INVALID_TOKEN) from e


async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    result = await db.execute(select(User).where(User.email == normalize_email(email)))
    return result.scalar_one_or_none()


async def sign_up(db: AsyncSession, email: str, password: str, first_name: str, last_name: str) -> User:
    """Create the account and its profile in one transaction"""
    if await get_user_by_email(db, email):
        raise ConflictError("An account with this email already exists")

    user = User(email=normalize_email(email), password_hash=hash_password(password))
    db.add(user)
    await db.flush()

    db.add(Profile(id=user.id, first_name=first_name, last_name=last_name))
    await db.commit()
    await db.refresh(user)

    logger.info(f"User registered: {user.id}")
    return user


async def authenticate(db: AsyncSession, email: str, password: str) -> User:
    user = await get_user_by_email(db, email)
    if not user or not verify_password(password, user.password_hash):
        raise AuthenticationError("Invalid login credentials")
    return user


async def open_session(db: AsyncSession, user: User) -> SessionContext:
    session = AuthSession(
        id=uuid.uuid4(),
        user_id=user.id,
        expires_at=_utcnow() + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    )
    db.add(session)
    await db.commit()

    logger.info(f"Session {session.id} opened for user {user.id}")
    return SessionContext(user=user, session=session, access_token=create_access_token(user, session))


async def revoke_session(db: AsyncSession, session: AuthSession) -> None:
    session.revoked_at = _utcnow()
    await db.commit()
    logger.info(f"Session {session.id} revoked")


def is_session_active(session: AuthSession) -> bool:
    if session.revoked_at is not None:
        return False
    return _as_utc(session.expires_at) > _utcnow()


async def get_current_session(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(auth_scheme),
    db: AsyncSession = Depends(get_db),
) -> SessionContext:
    """
    Session guard: resolves the bearer token to an active session and its user.
    Usage: ctx: SessionContext = Depends(get_current_session)
    """
    if credentials is None:
        raise AuthenticationError("Not authenticated")

    claims = decode_access_token(credentials.credentials)
    try:
        session_id = UUID(str(claims.get("jti")))
        user_id = UUID(str(claims.get("sub")))
    except ValueError as e:
        raise AuthenticationError("Malformed token claims", code=ErrorCode.INVALID_TOKEN) from e

    session = await db.get(AuthSession, session_id)
    if session is None or session.user_id != user_id or not is_session_active(session):
        raise AuthenticationError("Session is no longer active", code=ErrorCode.SESSION_EXPIRED)

    user = await db.get(User, user_id)
    if user is None:
        raise AuthenticationError("User not found")

    return SessionContext(user=user, session=session, access_token=credentials.credentials)


async def get_current_user(ctx: SessionContext = Depends(get_current_session)) -> User:
    """
    Dependency that provides the authenticated user
    Usage: current_user: User = Depends(get_current_user)
    """
    return ctx.user
