from meeting_api.schemas.common import ApiModel, PositiveId
from meeting_api.schemas.meeting import UserSummary


class ParticipantAdd(ApiModel):
    """Schema for adding a user to a meeting."""

    user_id: PositiveId


class ParticipantResponse(ApiModel):
    id: int
    meeting_id: int
    user: UserSummary
