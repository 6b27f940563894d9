"""
API Router Aggregator.

Combines the resource routers into a single router mounted at /api.
Everything except the auth router sits behind the role policy.
"""

from fastapi import APIRouter, Depends

from meeting_api.api.deps import any_staff_role
from meeting_api.api.routes import (
    auth,
    candidate_history,
    candidates,
    meetings,
    participants,
    positions,
)
from meeting_api.schemas.common import ErrorResponse

api_router = APIRouter()

protected = [Depends(any_staff_role)]

# Error envelopes every router can answer with
error_responses = {
    code: {"model": ErrorResponse}
    for code in (400, 401, 403, 404, 429, 500)
}

api_router.include_router(
    auth.router,
    prefix="/auth",
    tags=["Authentication"],
    responses=error_responses,
)

api_router.include_router(
    meetings.router,
    prefix="/meetings",
    tags=["Meetings"],
    responses=error_responses,
    dependencies=protected,
)

api_router.include_router(
    participants.router,
    prefix="/meetings",
    tags=["Participants"],
    responses=error_responses,
    dependencies=protected,
)

api_router.include_router(
    candidates.router,
    prefix="/candidates",
    tags=["Candidates"],
    responses=error_responses,
    dependencies=protected,
)

api_router.include_router(
    candidate_history.router,
    prefix="/candidates",
    tags=["Candidate History"],
    responses=error_responses,
    dependencies=protected,
)

api_router.include_router(
    positions.router,
    prefix="/positions",
    tags=["Positions"],
    responses=error_responses,
    dependencies=protected,
)
