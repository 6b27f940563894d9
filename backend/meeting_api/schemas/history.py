from typing import Optional

from pydantic import Field

from meeting_api.schemas.common import ApiModel, PositiveId, Timestamp


class CandidateHistoryCreate(ApiModel):
    """Schema for recording feedback against a candidate."""

    meeting_id: Optional[PositiveId] = None
    feedback: str = Field(min_length=1)


class HistoryMeetingSummary(ApiModel):
    id: int
    title: str
    start_time: Timestamp


class CandidateHistoryResponse(ApiModel):
    id: int
    candidate_id: int
    meeting_id: Optional[int] = None
    feedback: str
    recorded_at: Timestamp
    meeting: Optional[HistoryMeetingSummary] = None
