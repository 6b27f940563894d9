"""
Authentication API endpoints.

Registration and login issue a JWT bearer token; logout is stateless.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from meeting_api.api.deps import get_current_user
from meeting_api.collections import users as users_store
from meeting_api.core.errors import BadRequest, NotFound, Unauthorized, failure_message
from meeting_api.core.security import create_access_token, verify_password
from meeting_api.db.errors import DuplicateRecordError
from meeting_api.db.session import get_db
from meeting_api.schemas.auth import (
    AuthResponse,
    CurrentUserResponse,
    LoginRequest,
    RegisterRequest,
    TokenPayload,
    UserPublic,
)
from meeting_api.schemas.common import MessageResponse

router = APIRouter()

DUPLICATE_EMAIL_MESSAGE = "User with this email already exists"
INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"


def issue_token(user: UserPublic) -> str:
    claims = TokenPayload(user_id=user.id, email=user.email, role=user.role)
    return create_access_token(claims.model_dump(by_alias=True))


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
@failure_message("Failed to register user")
def register(user_data: RegisterRequest, db: Session = Depends(get_db)):
    """
    Register a new user.

    Rejects an email that is already registered with 400.
    """
    if users_store.find_user_by_email(db, user_data.email):
        raise BadRequest(DUPLICATE_EMAIL_MESSAGE)

    try:
        user = users_store.create_user(db, user_data)
    except DuplicateRecordError as exc:
        # Lost a race with a concurrent registration
        raise BadRequest(DUPLICATE_EMAIL_MESSAGE) from exc

    return AuthResponse(token=issue_token(user), user=user)


@router.post("/login", response_model=AuthResponse)
@failure_message("Failed to login")
def login(credentials: LoginRequest, db: Session = Depends(get_db)):
    """
    Exchange email and password for a bearer token.

    Unknown email and wrong password get the same 401 answer.
    """
    user = users_store.find_user_by_email(db, credentials.email)
    if user is None or not verify_password(credentials.password, user.password_hash):
        raise Unauthorized(INVALID_CREDENTIALS_MESSAGE)

    users_store.update_user_last_login(db, user.id)

    public = UserPublic.model_validate(user)
    return AuthResponse(token=issue_token(public), user=public)


@router.post("/logout", response_model=MessageResponse)
async def logout():
    """Tokens are not tracked server-side; clients discard theirs."""
    return MessageResponse(message="Logged out successfully")


@router.get("/me", response_model=CurrentUserResponse)
@failure_message("Failed to fetch current user")
def get_me(
    current_user: TokenPayload = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Profile of the authenticated user, including their position."""
    user = users_store.find_user_by_id(db, current_user.user_id)
    if user is None:
        raise NotFound("User not found")
    return CurrentUserResponse.model_validate(user)
