"""Candidate feedback history store operations."""

from sqlalchemy.orm import Session, joinedload

from meeting_api.db.errors import transaction
from meeting_api.models import CandidateHistory
from meeting_api.schemas.history import CandidateHistoryCreate


def create_candidate_history(
    db: Session,
    candidate_id: int,
    data: CandidateHistoryCreate,
) -> CandidateHistory:
    entry = CandidateHistory(
        candidate_id=candidate_id,
        meeting_id=data.meeting_id,
        feedback=data.feedback,
    )

    with transaction(db):
        db.add(entry)

    return (
        db.query(CandidateHistory)
        .options(joinedload(CandidateHistory.meeting))
        .filter(CandidateHistory.id == entry.id)
        .one()
    )


def find_candidate_history(db: Session, candidate_id: int) -> list[CandidateHistory]:
    """History entries for a candidate, most recent first."""
    return (
        db.query(CandidateHistory)
        .options(joinedload(CandidateHistory.meeting))
        .filter(CandidateHistory.candidate_id == candidate_id)
        .order_by(CandidateHistory.recorded_at.desc(), CandidateHistory.id.desc())
        .all()
    )
