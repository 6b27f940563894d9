from typing import Any, Optional

from pydantic import Field

from meeting_api.models.enums import CandidateStatus
from meeting_api.schemas.common import (
    ApiModel,
    EmailAddress,
    PaginationMeta,
    PositiveId,
    Timestamp,
)
from meeting_api.schemas.position import PositionResponse


class CandidateCreate(ApiModel):
    """Schema for creating a candidate."""

    name: str = Field(min_length=1, max_length=255)
    email: EmailAddress
    applied_position_id: PositiveId
    status: CandidateStatus
    interview_notes: Optional[str] = None


class CandidateUpdate(ApiModel):
    """Schema for partially updating a candidate; omitted fields are kept."""

    name: str = Field(default=None, min_length=1, max_length=255)
    email: EmailAddress = None
    applied_position_id: PositiveId = None
    status: CandidateStatus = None
    interview_notes: Optional[str] = None

    def changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class CandidateResponse(ApiModel):
    id: int
    name: str
    email: str
    applied_position_id: int
    status: str
    interview_notes: Optional[str] = None
    created_at: Timestamp
    updated_at: Timestamp
    applied_position: Optional[PositionResponse] = None


class CandidateListResponse(ApiModel):
    candidates: list[CandidateResponse]
    pagination: PaginationMeta
