"""Position and applied-position lookups."""

from typing import Optional

from sqlalchemy.orm import Session

from meeting_api.models import AppliedPosition, Position


def find_all_positions(db: Session) -> list[Position]:
    return db.query(Position).order_by(Position.name.asc()).all()


def find_all_applied_positions(db: Session) -> list[AppliedPosition]:
    return db.query(AppliedPosition).order_by(AppliedPosition.name.asc()).all()


def find_position_by_id(db: Session, position_id: int) -> Optional[Position]:
    return db.query(Position).filter(Position.id == position_id).first()


def find_applied_position_by_id(db: Session, position_id: int) -> Optional[AppliedPosition]:
    return db.query(AppliedPosition).filter(AppliedPosition.id == position_id).first()
