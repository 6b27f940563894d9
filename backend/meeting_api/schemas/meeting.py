from datetime import datetime
from typing import Any, Optional

from pydantic import Field, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

from meeting_api.models.enums import MeetingStatus, MeetingType
from meeting_api.schemas.common import (
    ApiModel,
    IsoDatetime,
    PaginationMeta,
    PositiveId,
    Timestamp,
)

DATE_RANGE_MESSAGE = "End time must be after start time"


def ensure_end_after_start(start_time: Optional[datetime], end_time: Optional[datetime]) -> None:
    """Raise a validation error when both bounds are known and out of order."""
    if start_time is not None and end_time is not None and end_time <= start_time:
        raise PydanticCustomError("date_range", DATE_RANGE_MESSAGE)


# ============== Requests ==============


class MeetingCreate(ApiModel):
    """Schema for creating a meeting."""

    title: str = Field(min_length=1, max_length=255)
    start_time: IsoDatetime
    end_time: IsoDatetime
    location: Optional[str] = Field(default=None, max_length=255)
    meeting_type: MeetingType
    notes: Optional[str] = None
    status: MeetingStatus
    candidate_id: Optional[PositiveId] = None
    participant_ids: Optional[list[PositiveId]] = None

    @field_validator("end_time")
    @classmethod
    def end_after_start(cls, value: datetime, info: ValidationInfo) -> datetime:
        ensure_end_after_start(info.data.get("start_time"), value)
        return value


class MeetingUpdate(ApiModel):
    """
    Schema for partially updating a meeting.

    Omitted fields are left untouched. Required columns cannot be set to
    null. `participantIds` is accepted for client compatibility but never
    written; membership is managed through the participant endpoints.
    """

    title: str = Field(default=None, min_length=1, max_length=255)
    start_time: IsoDatetime = None
    end_time: IsoDatetime = None
    location: Optional[str] = Field(default=None, max_length=255)
    meeting_type: MeetingType = None
    notes: Optional[str] = None
    status: MeetingStatus = None
    candidate_id: Optional[PositiveId] = None
    participant_ids: Optional[list[PositiveId]] = None

    @field_validator("end_time")
    @classmethod
    def end_after_start(cls, value: datetime, info: ValidationInfo) -> datetime:
        ensure_end_after_start(info.data.get("start_time"), value)
        return value

    def changes(self) -> dict[str, Any]:
        """Column values explicitly supplied by the client."""
        return self.model_dump(exclude_unset=True, exclude={"participant_ids"})


# ============== Responses ==============


class UserSummary(ApiModel):
    id: int
    name: str
    email: str


class CandidateSummary(ApiModel):
    id: int
    name: str
    email: str


class MeetingResponse(ApiModel):
    """Meeting with organizer, candidate and participants flattened."""

    id: int
    title: str
    start_time: Timestamp
    end_time: Timestamp
    location: Optional[str] = None
    meeting_type: str
    notes: Optional[str] = None
    status: str
    user_id: int
    candidate_id: Optional[int] = None
    created_at: Timestamp
    updated_at: Timestamp
    deleted_at: Optional[Timestamp] = None
    user: Optional[UserSummary] = None
    candidate: Optional[CandidateSummary] = None
    participants: list[UserSummary] = []

    @field_validator("participants", mode="before")
    @classmethod
    def flatten_participants(cls, value: Any) -> list[Any]:
        # ORM rows are InterviewParticipant join rows; expose their users
        return [getattr(item, "user", item) for item in value or []]


class MeetingListResponse(ApiModel):
    meetings: list[MeetingResponse]
    pagination: PaginationMeta
