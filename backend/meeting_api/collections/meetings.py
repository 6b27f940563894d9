"""Meeting store operations."""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload, selectinload

from meeting_api.collections.paging import fetch_page
from meeting_api.db.errors import RecordNotFoundError, transaction
from meeting_api.models import InterviewParticipant, Meeting
from meeting_api.models.timestamps import utcnow
from meeting_api.schemas.meeting import MeetingCreate, MeetingUpdate


def _with_relations(query):
    return query.options(
        joinedload(Meeting.user),
        joinedload(Meeting.candidate),
        selectinload(Meeting.participants).joinedload(InterviewParticipant.user),
    )


def create_meeting(db: Session, organizer_id: int, data: MeetingCreate) -> Meeting:
    """
    Insert a meeting and its participant rows in one transaction.

    A failed participant insert rolls back the meeting as well. Repeated
    ids in `participant_ids` produce a single row each.
    """
    meeting = Meeting(
        **data.model_dump(exclude={"participant_ids"}),
        user_id=organizer_id,
    )
    if data.participant_ids:
        meeting.participants = [
            InterviewParticipant(user_id=user_id)
            for user_id in dict.fromkeys(data.participant_ids)
        ]

    with transaction(db):
        db.add(meeting)

    return find_meeting_by_id(db, meeting.id)


def find_meetings(
    db: Session,
    page: int,
    page_size: int,
    include_deleted: bool = False,
) -> tuple[list[Meeting], int]:
    """Return one page of meetings (latest start first) and the total count."""
    query = db.query(Meeting)
    if not include_deleted:
        query = query.filter(Meeting.deleted_at.is_(None))

    total = query.count()
    ordered = _with_relations(query).order_by(Meeting.start_time.desc(), Meeting.id.desc())
    return fetch_page(ordered, total, page, page_size), total


def find_meeting_by_id(db: Session, meeting_id: int) -> Optional[Meeting]:
    """Look up a meeting by id, soft-deleted ones included."""
    return _with_relations(db.query(Meeting)).filter(Meeting.id == meeting_id).first()


def update_meeting(db: Session, meeting_id: int, data: MeetingUpdate) -> Optional[Meeting]:
    """
    Write only the supplied fields; participant ids are never touched here.

    Returns None when no meeting has this id.
    """
    changes = data.changes()

    with transaction(db):
        if changes:
            matched = (
                db.query(Meeting)
                .filter(Meeting.id == meeting_id)
                .update(changes, synchronize_session=False)
            )
        else:
            matched = db.query(Meeting.id).filter(Meeting.id == meeting_id).count()

    if not matched:
        return None
    return find_meeting_by_id(db, meeting_id)


def soft_delete_meeting(db: Session, meeting_id: int) -> bool:
    """Stamp `deleted_at` (keeping an earlier stamp); False when no row matched."""
    with transaction(db):
        matched = (
            db.query(Meeting)
            .filter(Meeting.id == meeting_id)
            .update(
                {Meeting.deleted_at: func.coalesce(Meeting.deleted_at, utcnow())},
                synchronize_session=False,
            )
        )
    return bool(matched)


def hard_delete_meeting(db: Session, meeting_id: int) -> None:
    """
    Remove the meeting row outright.

    Raises:
        RecordNotFoundError: no meeting has this id
        ForeignKeyViolationError: dependent rows block the delete
    """
    with transaction(db):
        deleted = (
            db.query(Meeting)
            .filter(Meeting.id == meeting_id)
            .delete(synchronize_session=False)
        )
        if not deleted:
            raise RecordNotFoundError("Meeting not found")
