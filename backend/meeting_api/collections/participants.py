"""Meeting participant store operations."""

from sqlalchemy.orm import Session, joinedload

from meeting_api.db.errors import RecordNotFoundError, transaction
from meeting_api.models import InterviewParticipant


def add_participant(db: Session, meeting_id: int, user_id: int) -> InterviewParticipant:
    """
    Attach a user to a meeting.

    Raises:
        DuplicateRecordError: the user is already a participant
        ForeignKeyViolationError: the meeting or user does not exist
    """
    participant = InterviewParticipant(meeting_id=meeting_id, user_id=user_id)

    with transaction(db):
        db.add(participant)

    return (
        db.query(InterviewParticipant)
        .options(joinedload(InterviewParticipant.user))
        .filter(InterviewParticipant.id == participant.id)
        .one()
    )


def remove_participant(db: Session, meeting_id: int, user_id: int) -> None:
    """
    Detach a user from a meeting.

    Raises:
        RecordNotFoundError: the user is not a participant of the meeting
    """
    with transaction(db):
        deleted = (
            db.query(InterviewParticipant)
            .filter(
                InterviewParticipant.meeting_id == meeting_id,
                InterviewParticipant.user_id == user_id,
            )
            .delete(synchronize_session=False)
        )
        if not deleted:
            raise RecordNotFoundError("Participant not found in this meeting")


def find_participants_by_meeting_id(db: Session, meeting_id: int) -> list[InterviewParticipant]:
    return (
        db.query(InterviewParticipant)
        .options(joinedload(InterviewParticipant.user))
        .filter(InterviewParticipant.meeting_id == meeting_id)
        .order_by(InterviewParticipant.id.asc())
        .all()
    )
