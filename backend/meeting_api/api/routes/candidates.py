"""
Candidate API endpoints.

Listing supports paging plus an optional name/email search and a status
filter.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from meeting_api.api.deps import candidate_id_path, page_params
from meeting_api.collections import candidates as candidates_store
from meeting_api.collections.candidates import CandidateFilter
from meeting_api.core.errors import BadRequest, NotFound, failure_message
from meeting_api.db.errors import DuplicateRecordError
from meeting_api.db.session import get_db
from meeting_api.models.enums import CandidateStatus
from meeting_api.schemas.candidate import (
    CandidateCreate,
    CandidateListResponse,
    CandidateResponse,
    CandidateUpdate,
)
from meeting_api.schemas.common import MessageResponse, PageParams, PaginationMeta

router = APIRouter()

CANDIDATE_NOT_FOUND = "Candidate not found"
DUPLICATE_EMAIL_MESSAGE = "Candidate with this email already exists"


@router.get("", response_model=CandidateListResponse)
@failure_message("Failed to fetch candidates")
def list_candidates(
    paging: PageParams = Depends(page_params),
    search: Optional[str] = Query(default=None, max_length=255),
    candidate_status: Optional[CandidateStatus] = Query(default=None, alias="status"),
    db: Session = Depends(get_db),
):
    """List candidates, newest first."""
    filters = CandidateFilter(
        search=search or None,
        status=candidate_status.value if candidate_status else None,
    )
    candidates, total = candidates_store.find_candidates(
        db, paging.page, paging.page_size, filters
    )
    return CandidateListResponse(
        candidates=[CandidateResponse.model_validate(c) for c in candidates],
        pagination=PaginationMeta.build(total, paging.page, paging.page_size),
    )


@router.post("", response_model=CandidateResponse, status_code=status.HTTP_201_CREATED)
@failure_message("Failed to create candidate")
def create_candidate(
    candidate_data: CandidateCreate,
    db: Session = Depends(get_db),
):
    if candidates_store.find_candidate_by_email(db, candidate_data.email):
        raise BadRequest(DUPLICATE_EMAIL_MESSAGE)

    try:
        candidate = candidates_store.create_candidate(db, candidate_data)
    except DuplicateRecordError as exc:
        raise BadRequest(DUPLICATE_EMAIL_MESSAGE) from exc

    return CandidateResponse.model_validate(candidate)


@router.get("/{candidate_id}", response_model=CandidateResponse)
@failure_message("Failed to fetch candidate")
def get_candidate(
    candidate_id: int = Depends(candidate_id_path),
    db: Session = Depends(get_db),
):
    candidate = candidates_store.find_candidate_by_id(db, candidate_id)
    if candidate is None:
        raise NotFound(CANDIDATE_NOT_FOUND)
    return CandidateResponse.model_validate(candidate)


@router.put("/{candidate_id}", response_model=CandidateResponse)
@failure_message("Failed to update candidate")
def update_candidate(
    candidate_data: CandidateUpdate,
    candidate_id: int = Depends(candidate_id_path),
    db: Session = Depends(get_db),
):
    """Partially update a candidate; changing to a taken email is a 400."""
    try:
        candidate = candidates_store.update_candidate(db, candidate_id, candidate_data)
    except DuplicateRecordError as exc:
        raise BadRequest(DUPLICATE_EMAIL_MESSAGE) from exc

    if candidate is None:
        raise NotFound(CANDIDATE_NOT_FOUND)
    return CandidateResponse.model_validate(candidate)


@router.delete("/{candidate_id}", response_model=MessageResponse)
@failure_message("Failed to delete candidate")
def delete_candidate(
    candidate_id: int = Depends(candidate_id_path),
    db: Session = Depends(get_db),
):
    if not candidates_store.delete_candidate(db, candidate_id):
        raise NotFound(CANDIDATE_NOT_FOUND)
    return MessageResponse(message="Candidate deleted successfully")
