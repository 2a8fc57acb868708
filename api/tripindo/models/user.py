"""
User, Profile & AuthSession Models
"""
from sqlalchemy import Column, String, DateTime, ForeignKey, Uuid, func
import uuid

from tripindo.utils.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    email = Column(String(255), unique=True, nullable=False, index=True)  # stored lower-cased
    password_hash = Column(String(255), nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<User {self.email}>"


class Profile(Base):
    """Display identity, keyed by the user id"""
    __tablename__ = "profiles"

    id = Column(Uuid, ForeignKey("users.id"), primary_key=True)
    first_name = Column(String(100))
    last_name = Column(String(100))

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    @property
    def display_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()

    def __repr__(self):
        return f"<Profile {self.display_name or self.id}>"


class AuthSession(Base):
    """Issued login session; its id is the `jti` claim of the access token"""
    __tablename__ = "auth_sessions"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    revoked_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<AuthSession {self.id} user={self.user_id}>"
