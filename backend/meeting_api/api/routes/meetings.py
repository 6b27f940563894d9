"""
Meeting API endpoints.

Deletion is soft: deleted meetings drop out of the listing but stay
readable by id.
"""

from fastapi import APIRouter, Depends, Query, status
from pydantic_core import PydanticCustomError
from sqlalchemy.orm import Session

from meeting_api.api.deps import get_current_user, meeting_id_path, page_params
from meeting_api.collections import meetings as meetings_store
from meeting_api.core.errors import InputValidationError, NotFound, failure_message
from meeting_api.db.session import get_db
from meeting_api.schemas.auth import TokenPayload
from meeting_api.schemas.common import MessageResponse, PageParams, PaginationMeta
from meeting_api.schemas.meeting import (
    MeetingCreate,
    MeetingListResponse,
    MeetingResponse,
    MeetingUpdate,
    ensure_end_after_start,
)

router = APIRouter()

MEETING_NOT_FOUND = "Meeting not found"


@router.get("", response_model=MeetingListResponse)
@failure_message("Failed to fetch meetings")
def list_meetings(
    paging: PageParams = Depends(page_params),
    include_deleted: bool = Query(default=False, alias="includeDeleted"),
    db: Session = Depends(get_db),
):
    """List meetings, latest start time first."""
    meetings, total = meetings_store.find_meetings(
        db, paging.page, paging.page_size, include_deleted=include_deleted
    )
    return MeetingListResponse(
        meetings=[MeetingResponse.model_validate(meeting) for meeting in meetings],
        pagination=PaginationMeta.build(total, paging.page, paging.page_size),
    )


@router.post("", response_model=MeetingResponse, status_code=status.HTTP_201_CREATED)
@failure_message("Failed to create meeting")
def create_meeting(
    meeting_data: MeetingCreate,
    current_user: TokenPayload = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Create a meeting organised by the caller, with optional participants."""
    meeting = meetings_store.create_meeting(db, current_user.user_id, meeting_data)
    return MeetingResponse.model_validate(meeting)


@router.get("/{meeting_id}", response_model=MeetingResponse)
@failure_message("Failed to fetch meeting")
def get_meeting(
    meeting_id: int = Depends(meeting_id_path),
    db: Session = Depends(get_db),
):
    meeting = meetings_store.find_meeting_by_id(db, meeting_id)
    if meeting is None:
        raise NotFound(MEETING_NOT_FOUND)
    return MeetingResponse.model_validate(meeting)


@router.put("/{meeting_id}", response_model=MeetingResponse)
@failure_message("Failed to update meeting")
def update_meeting(
    meeting_data: MeetingUpdate,
    meeting_id: int = Depends(meeting_id_path),
    db: Session = Depends(get_db),
):
    """
    Partially update a meeting.

    When only one of startTime/endTime is sent, the stored value stands in
    for the other so the range is still checked.
    """
    existing = meetings_store.find_meeting_by_id(db, meeting_id)
    if existing is None:
        raise NotFound(MEETING_NOT_FOUND)

    changes = meeting_data.changes()
    try:
        ensure_end_after_start(
            changes.get("start_time", existing.start_time),
            changes.get("end_time", existing.end_time),
        )
    except PydanticCustomError as exc:
        raise InputValidationError(
            details=[{"path": ["endTime"], "message": exc.message(), "code": exc.type}]
        ) from exc

    meeting = meetings_store.update_meeting(db, meeting_id, meeting_data)
    if meeting is None:
        raise NotFound(MEETING_NOT_FOUND)
    return MeetingResponse.model_validate(meeting)


@router.delete("/{meeting_id}", response_model=MessageResponse)
@failure_message("Failed to delete meeting")
def delete_meeting(
    meeting_id: int = Depends(meeting_id_path),
    db: Session = Depends(get_db),
):
    """Soft-delete a meeting."""
    if not meetings_store.soft_delete_meeting(db, meeting_id):
        raise NotFound(MEETING_NOT_FOUND)
    return MessageResponse(message="Meeting deleted successfully")
