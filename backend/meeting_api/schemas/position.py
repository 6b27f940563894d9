from meeting_api.schemas.common import ApiModel


class PositionResponse(ApiModel):
    """Position or applied position, both serialised as {id, name}."""

    id: int
    name: str
