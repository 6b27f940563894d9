"""
Meeting participant API endpoints.

Membership changes only through these routes; meeting updates never
touch participants.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from meeting_api.api.deps import meeting_id_path, participant_path
from meeting_api.collections import meetings as meetings_store
from meeting_api.collections import participants as participants_store
from meeting_api.core.errors import BadRequest, NotFound, failure_message
from meeting_api.db.errors import (
    DuplicateRecordError,
    ForeignKeyViolationError,
    RecordNotFoundError,
)
from meeting_api.db.session import get_db
from meeting_api.schemas.common import MessageResponse
from meeting_api.schemas.participant import ParticipantAdd, ParticipantResponse

router = APIRouter()


@router.post(
    "/{meeting_id}/participants",
    response_model=ParticipantResponse,
    status_code=status.HTTP_201_CREATED,
)
@failure_message("Failed to add participant")
def add_participant(
    participant_data: ParticipantAdd,
    meeting_id: int = Depends(meeting_id_path),
    db: Session = Depends(get_db),
):
    """Add a user to a meeting; adding the same user twice is a 400."""
    if meetings_store.find_meeting_by_id(db, meeting_id) is None:
        raise NotFound("Meeting not found")

    try:
        participant = participants_store.add_participant(db, meeting_id, participant_data.user_id)
    except DuplicateRecordError as exc:
        raise BadRequest("Participant already added to this meeting") from exc
    except ForeignKeyViolationError as exc:
        raise BadRequest("User does not exist") from exc

    return ParticipantResponse.model_validate(participant)


@router.delete("/{meeting_id}/participants/{user_id}", response_model=MessageResponse)
@failure_message("Failed to remove participant")
def remove_participant(
    ids: tuple[int, int] = Depends(participant_path),
    db: Session = Depends(get_db),
):
    meeting_id, user_id = ids
    try:
        participants_store.remove_participant(db, meeting_id, user_id)
    except RecordNotFoundError as exc:
        raise NotFound("Participant not found in this meeting") from exc

    return MessageResponse(message="Participant removed successfully")
