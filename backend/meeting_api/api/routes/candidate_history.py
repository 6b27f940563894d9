"""
Candidate history API endpoints.

Feedback entries recorded against a candidate, optionally linked to a
meeting.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from meeting_api.api.deps import candidate_id_path
from meeting_api.collections import candidate_history as history_store
from meeting_api.collections import candidates as candidates_store
from meeting_api.core.errors import BadRequest, NotFound, failure_message
from meeting_api.db.errors import ForeignKeyViolationError
from meeting_api.db.session import get_db
from meeting_api.schemas.history import CandidateHistoryCreate, CandidateHistoryResponse

router = APIRouter()

CANDIDATE_NOT_FOUND = "Candidate not found"


@router.get("/{candidate_id}/history", response_model=list[CandidateHistoryResponse])
@failure_message("Failed to fetch candidate history")
def get_candidate_history(
    candidate_id: int = Depends(candidate_id_path),
    db: Session = Depends(get_db),
):
    """History for a candidate, most recent first."""
    if candidates_store.find_candidate_by_id(db, candidate_id) is None:
        raise NotFound(CANDIDATE_NOT_FOUND)

    history = history_store.find_candidate_history(db, candidate_id)
    return [CandidateHistoryResponse.model_validate(entry) for entry in history]


@router.post(
    "/{candidate_id}/history",
    response_model=CandidateHistoryResponse,
    status_code=status.HTTP_201_CREATED,
)
@failure_message("Failed to create candidate history")
def create_candidate_history(
    history_data: CandidateHistoryCreate,
    candidate_id: int = Depends(candidate_id_path),
    db: Session = Depends(get_db),
):
    if candidates_store.find_candidate_by_id(db, candidate_id) is None:
        raise NotFound(CANDIDATE_NOT_FOUND)

    try:
        entry = history_store.create_candidate_history(db, candidate_id, history_data)
    except ForeignKeyViolationError as exc:
        raise BadRequest("Meeting does not exist") from exc

    return CandidateHistoryResponse.model_validate(entry)
