"""User store operations."""

from typing import Optional

from sqlalchemy.orm import Session, joinedload

from meeting_api.core.security import get_password_hash
from meeting_api.db.errors import transaction
from meeting_api.models import User
from meeting_api.models.timestamps import utcnow
from meeting_api.schemas.auth import RegisterRequest, UserPublic


def create_user(db: Session, data: RegisterRequest) -> UserPublic:
    """Hash the password, insert the user and return it without the hash."""
    user = User(
        name=data.name,
        email=data.email,
        role=data.role,
        password_hash=get_password_hash(data.password),
        position_id=data.position_id,
    )

    with transaction(db):
        db.add(user)

    return UserPublic.model_validate(user)


def find_user_by_email(db: Session, email: str) -> Optional[User]:
    """Full user row, password hash included, for credential checks."""
    return db.query(User).filter(User.email == email).first()


def find_user_by_id(db: Session, user_id: int) -> Optional[User]:
    return (
        db.query(User)
        .options(joinedload(User.position))
        .filter(User.id == user_id)
        .first()
    )


def update_user_last_login(db: Session, user_id: int) -> None:
    with transaction(db):
        db.query(User).filter(User.id == user_id).update(
            {User.last_login: utcnow()},
            synchronize_session=False,
        )
