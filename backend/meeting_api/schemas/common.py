"""
Shared Pydantic building blocks.

Request and response bodies use camelCase keys on the wire and
snake_case attributes in Python; unknown request fields are ignored.
"""

import math
import re
from datetime import datetime, timezone
from typing import Annotated, Any, Optional

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    PlainSerializer,
    StrictInt,
)
from pydantic.alias_generators import to_camel
from pydantic.networks import validate_email
from pydantic_core import PydanticCustomError

ISO_DATETIME_PATTERN = re.compile(
    r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}(:\d{2}(\.\d{1,6})?)?(Z|[+-]\d{2}:\d{2})?$"
)


class ApiModel(BaseModel):
    """Base model for every request and response body."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        use_enum_values=True,
    )


# ============== Field Types ==============


def format_timestamp(value: datetime) -> str:
    """Render a stored (naive UTC) datetime as ISO-8601 with millisecond precision."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def _require_iso_string(value: Any) -> Any:
    if not isinstance(value, str) or not ISO_DATETIME_PATTERN.match(value):
        raise PydanticCustomError(
            "datetime_format",
            "Invalid datetime format, expected ISO-8601 (e.g. 2025-01-31T09:30:00Z)",
        )
    return value


def _to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def _normalize_email(value: str) -> str:
    # Stored lower-cased so uniqueness ignores case
    _, email = validate_email(value.strip())
    return email.lower()


# Datetimes accepted only as ISO-8601 strings; offsets normalised to naive UTC
IsoDatetime = Annotated[
    datetime,
    BeforeValidator(_require_iso_string),
    AfterValidator(_to_naive_utc),
]

Timestamp = Annotated[datetime, PlainSerializer(format_timestamp, return_type=str)]

# Largest id the integer key columns hold
MAX_ID = 2**31 - 1

PositiveId = Annotated[StrictInt, Field(ge=1, le=MAX_ID)]

EmailAddress = Annotated[str, Field(max_length=255), AfterValidator(_normalize_email)]


# ============== Shared Bodies ==============


class PaginationMeta(ApiModel):
    """Pagination envelope attached to every list response."""

    total: int
    page: int
    page_size: int
    total_pages: int

    @classmethod
    def build(cls, total: int, page: int, page_size: int) -> "PaginationMeta":
        return cls(
            total=total,
            page=page,
            page_size=page_size,
            total_pages=math.ceil(total / page_size),
        )


class PageParams(ApiModel):
    """Validated paging query parameters."""

    page: int = 1
    page_size: int = 10


class MessageResponse(ApiModel):
    message: str


class ErrorResponse(ApiModel):
    """Uniform error envelope."""

    error: str
    message: str
    details: Optional[list[dict[str, Any]]] = None
