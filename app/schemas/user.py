"""
Pydantic schemas for users, authentication and job applications.
"""

from pydantic import ConfigDict, EmailStr, Field
from typing import List, Optional
from app.schemas.base import CamelModel, PartialUpdateModel


class UserRegisterRequest(CamelModel):
    """Request schema for self-registration. New accounts are never admins."""
    model_config = ConfigDict(extra="forbid")

    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(
        ...,
        min_length=5,
        max_length=72,  # bcrypt limit
        description="Password must be 5-72 characters",
    )
    first_name: str = Field(..., min_length=1, max_length=25)
    last_name: str = Field(..., min_length=1, max_length=25)
    email: EmailStr


class UserCreateRequest(UserRegisterRequest):
    """Admin-only user creation; may create other admins."""
    is_admin: bool = False


class UserLoginRequest(CamelModel):
    """Request schema for obtaining a token."""
    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(..., min_length=1)


class UserUpdateRequest(PartialUpdateModel):
    """Partial user update; username and isAdmin cannot be changed here"""
    first_name: str = Field(None, min_length=1, max_length=25)
    last_name: str = Field(None, min_length=1, max_length=25)
    password: str = Field(None, min_length=5, max_length=72)
    email: EmailStr = Field(None)


class TokenResponse(CamelModel):
    """JWT token response."""
    token: str


class UserResponse(CamelModel):
    """User profile response (no password)."""
    username: str
    first_name: str
    last_name: str
    email: str
    is_admin: bool


class UserDetailResponse(UserResponse):
    """User profile plus the ids of the jobs applied to."""
    jobs: List[int] = []


class UserEnvelope(CamelModel):
    user: UserResponse


class UserDetailEnvelope(CamelModel):
    user: UserDetailResponse


class UserTokenResponse(CamelModel):
    user: UserResponse
    token: str


class UserListResponse(CamelModel):
    users: List[UserResponse]


class ApplicationResponse(CamelModel):
    applied: int
