"""
Request dependencies shared by the routers.

Authentication, the role policy, strict path-id parsing and paging.
"""

import logging
import re
from typing import Callable, Iterable, Optional

from fastapi import Depends, Header, Path, Query

from meeting_api.core.errors import BadRequest, Forbidden, Unauthorized
from meeting_api.core.security import TokenError, decode_access_token
from meeting_api.models.enums import UserRole
from meeting_api.schemas.auth import TokenPayload
from meeting_api.schemas.common import MAX_ID, PageParams

logger = logging.getLogger("auth")

BEARER_PREFIX = "Bearer "
_DIGITS = re.compile(r"[0-9]+")


# ============== Authentication ==============


async def get_current_user(
    authorization: Optional[str] = Header(default=None),
) -> TokenPayload:
    """
    Resolve the caller's identity from the Authorization header.

    The "Bearer " prefix is optional. Missing, expired and invalid tokens
    are all answered with 401.
    """
    if not authorization:
        raise Unauthorized("No token provided")

    token = authorization[len(BEARER_PREFIX):] if authorization.startswith(BEARER_PREFIX) else authorization

    try:
        return decode_access_token(token)
    except TokenError as exc:
        logger.debug("Rejected bearer token: %s", exc)
        raise Unauthorized(str(exc)) from exc


# ============== Role Policy ==============


def authorize(identity: TokenPayload, allowed_roles: Iterable[str]) -> bool:
    """Return True when the identity's role is one of `allowed_roles`."""
    allowed = {getattr(role, "value", role) for role in allowed_roles}
    return identity.role in allowed


def require_roles(*roles: UserRole) -> Callable:
    """Dependency factory: authenticate, then enforce `authorize`."""

    async def dependency(current_user: TokenPayload = Depends(get_current_user)) -> TokenPayload:
        if not authorize(current_user, roles):
            raise Forbidden("Insufficient permissions")
        return current_user

    return dependency


# Every staff role may use the protected API
any_staff_role = require_roles(UserRole.HR, UserRole.MANAGER, UserRole.STAFF)


# ============== Path Parameters ==============


def parse_id(value: str, message: str) -> int:
    """Strictly parse a positive integer path segment or raise BadRequest."""
    if not _DIGITS.fullmatch(value) or len(value.lstrip("0")) > len(str(MAX_ID)):
        raise BadRequest(message)
    parsed = int(value)
    if parsed > MAX_ID:
        raise BadRequest(message)
    return parsed


def meeting_id_path(meeting_id: str = Path()) -> int:
    return parse_id(meeting_id, "Invalid meeting ID")


def candidate_id_path(candidate_id: str = Path()) -> int:
    return parse_id(candidate_id, "Invalid candidate ID")


def participant_path(meeting_id: str = Path(), user_id: str = Path()) -> tuple[int, int]:
    message = "Invalid meeting ID or user ID"
    return parse_id(meeting_id, message), parse_id(user_id, message)


# ============== Query Parameters ==============


def page_params(
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=10, ge=1, le=100, alias="pageSize"),
) -> PageParams:
    return PageParams(page=page, page_size=page_size)
