from typing import Optional

from pydantic import Field

from meeting_api.models.enums import UserRole
from meeting_api.schemas.common import ApiModel, EmailAddress, PositiveId, Timestamp
from meeting_api.schemas.position import PositionResponse


class RegisterRequest(ApiModel):
    """Schema for user registration."""

    name: str = Field(min_length=1, max_length=255)
    email: EmailAddress
    password: str = Field(min_length=8)
    role: UserRole
    position_id: Optional[PositiveId] = None


class LoginRequest(ApiModel):
    """Schema for login credentials."""

    email: EmailAddress
    password: str = Field(min_length=1)


class TokenPayload(ApiModel):
    """Identity carried inside a bearer token."""

    user_id: int
    email: str
    role: str


class UserPublic(ApiModel):
    """User projection safe to send to clients (never carries the hash)."""

    id: int
    name: str
    email: str
    role: str
    position_id: Optional[int] = None


class AuthResponse(ApiModel):
    token: str
    user: UserPublic


class CurrentUserResponse(UserPublic):
    """Profile of the authenticated user."""

    position: Optional[PositionResponse] = None
    last_login: Optional[Timestamp] = None
