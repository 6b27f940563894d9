"""Candidate store operations."""

from dataclasses import dataclass
from typing import Optional

from sqlalchemy import and_, or_
from sqlalchemy.orm import Session, joinedload

from meeting_api.collections.paging import fetch_page
from meeting_api.db.errors import transaction
from meeting_api.models import Candidate
from meeting_api.schemas.candidate import CandidateCreate, CandidateUpdate


def _substring_pattern(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


@dataclass(frozen=True)
class CandidateFilter:
    """
    Optional listing filters, combined with AND.

    `search` matches a case-insensitive substring of name or email;
    `status` is an exact match.
    """

    search: Optional[str] = None
    status: Optional[str] = None

    def conditions(self) -> list:
        clauses = []
        if self.search:
            pattern = _substring_pattern(self.search.strip())
            clauses.append(
                or_(
                    Candidate.name.ilike(pattern, escape="\\"),
                    Candidate.email.ilike(pattern, escape="\\"),
                )
            )
        if self.status:
            clauses.append(Candidate.status == self.status)
        return clauses


def _with_position(query):
    return query.options(joinedload(Candidate.applied_position))


def create_candidate(db: Session, data: CandidateCreate) -> Candidate:
    candidate = Candidate(**data.model_dump())

    with transaction(db):
        db.add(candidate)

    return find_candidate_by_id(db, candidate.id)


def find_candidates(
    db: Session,
    page: int,
    page_size: int,
    filters: Optional[CandidateFilter] = None,
) -> tuple[list[Candidate], int]:
    """Return one page of candidates (newest first) and the filtered total."""
    conditions = (filters or CandidateFilter()).conditions()

    query = db.query(Candidate)
    if conditions:
        query = query.filter(and_(*conditions))

    total = query.count()
    ordered = _with_position(query).order_by(Candidate.created_at.desc(), Candidate.id.desc())
    return fetch_page(ordered, total, page, page_size), total


def find_candidate_by_id(db: Session, candidate_id: int) -> Optional[Candidate]:
    return _with_position(db.query(Candidate)).filter(Candidate.id == candidate_id).first()


def find_candidate_by_email(db: Session, email: str) -> Optional[Candidate]:
    return db.query(Candidate).filter(Candidate.email == email).first()


def update_candidate(db: Session, candidate_id: int, data: CandidateUpdate) -> Optional[Candidate]:
    """
    Write only the supplied fields.

    Returns None when no candidate has this id, so callers can answer 404
    without a separate existence check.
    """
    changes = data.changes()

    with transaction(db):
        if changes:
            matched = (
                db.query(Candidate)
                .filter(Candidate.id == candidate_id)
                .update(changes, synchronize_session=False)
            )
        else:
            matched = db.query(Candidate.id).filter(Candidate.id == candidate_id).count()

    if not matched:
        return None
    return find_candidate_by_id(db, candidate_id)


def delete_candidate(db: Session, candidate_id: int) -> bool:
    """Hard-delete a candidate; False when no row matched."""
    with transaction(db):
        deleted = (
            db.query(Candidate)
            .filter(Candidate.id == candidate_id)
            .delete(synchronize_session=False)
        )
    return bool(deleted)
