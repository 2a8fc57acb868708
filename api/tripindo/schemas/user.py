"""
User, Profile & Auth Schemas
"""
from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional
from datetime import datetime
from uuid import UUID


class SignUpRequest(BaseModel):
    """Schema for account registration"""
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=100)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)

    @field_validator("first_name", "last_name")
    @classmethod
    def strip_names(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value


class SignInRequest(BaseModel):
    """Schema for password sign-in"""
    email: EmailStr
    password: str = Field(..., min_length=1)


class ProfileUpdate(BaseModel):
    """Schema for updating the current profile"""
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)


class ProfileResponse(BaseModel):
    id: UUID
    first_name: Optional[str]
    last_name: Optional[str]

    class Config:
        from_attributes = True


class UserResponse(BaseModel):
    """Schema for the authenticated user"""
    id: UUID
    email: EmailStr
    created_at: Optional[datetime]
    profile: Optional[ProfileResponse] = None


class SessionResponse(BaseModel):
    """Schema for an issued session"""
    access_token: str
    token_type: str = "bearer"
    expires_at: datetime
    user: UserResponse
