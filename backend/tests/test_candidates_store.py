"""Tests for candidate, history, user and position store operations."""

from datetime import timedelta

import pytest

from conftest import BASE_TIME, make_applied_position, make_candidate, make_history, make_meeting, make_position
from meeting_api.collections import candidate_history as history_store
from meeting_api.collections import candidates as candidates_store
from meeting_api.collections import positions as positions_store
from meeting_api.collections import users as users_store
from meeting_api.collections.candidates import CandidateFilter
from meeting_api.core.security import verify_password
from meeting_api.db.errors import DuplicateRecordError, ForeignKeyViolationError
from meeting_api.models import CandidateHistory, Meeting
from meeting_api.schemas.auth import RegisterRequest, UserPublic
from meeting_api.schemas.candidate import CandidateCreate, CandidateUpdate
from meeting_api.schemas.history import CandidateHistoryCreate


@pytest.fixture
def pipeline(db_session, applied_position):
    """Four candidates across three statuses."""
    rows = [
        ("Alice Smith", "alice@example.com", "interview"),
        ("Bob Jones", "bob@example.com", "applied"),
        ("Carol Alison", "carol@corp.io", "applied"),
        ("Dan 100%_Real", "dan@example.com", "rejected"),
    ]
    return [
        make_candidate(db_session, applied_position.id, name=name, email=email, status=status)
        for name, email, status in rows
    ]


# ============== Candidates ==============


def test_create_candidate_loads_applied_position(db_session, applied_position):
    candidate = candidates_store.create_candidate(
        db_session,
        CandidateCreate(
            name="Erin", email="erin@example.com", applied_position_id=applied_position.id, status="applied"
        ),
    )

    assert candidate.id is not None
    assert candidate.applied_position.name == "Backend Developer"
    assert candidate.created_at is not None


def test_create_candidate_duplicate_email(db_session, applied_position):
    make_candidate(db_session, applied_position.id, email="erin@example.com")

    with pytest.raises(DuplicateRecordError):
        candidates_store.create_candidate(
            db_session,
            CandidateCreate(
                name="Erin", email="erin@example.com", applied_position_id=applied_position.id, status="applied"
            ),
        )


def test_create_candidate_unknown_position(db_session):
    with pytest.raises(ForeignKeyViolationError):
        candidates_store.create_candidate(
            db_session,
            CandidateCreate(name="Erin", email="erin@example.com", applied_position_id=99, status="applied"),
        )


def test_search_matches_name_or_email_case_insensitively(db_session, pipeline):
    rows, total = candidates_store.find_candidates(db_session, 1, 10, CandidateFilter(search="ALI"))

    assert total == 2
    assert {c.email for c in rows} == {"alice@example.com", "carol@corp.io"}

    rows, total = candidates_store.find_candidates(db_session, 1, 10, CandidateFilter(search="corp.io"))
    assert [c.name for c in rows] == ["Carol Alison"]


def test_search_treats_wildcards_literally(db_session, pipeline):
    rows, total = candidates_store.find_candidates(db_session, 1, 10, CandidateFilter(search="100%_"))

    assert total == 1
    assert rows[0].email == "dan@example.com"

    _, total = candidates_store.find_candidates(db_session, 1, 10, CandidateFilter(search="%"))
    assert total == 1


def test_filters_combine_with_and(db_session, pipeline):
    rows, total = candidates_store.find_candidates(
        db_session, 1, 10, CandidateFilter(search="ali", status="applied")
    )

    assert total == 1
    assert rows[0].name == "Carol Alison"


def test_find_candidates_newest_first_and_paged(db_session, pipeline):
    rows, total = candidates_store.find_candidates(db_session, 1, 3)

    assert total == 4
    assert [c.id for c in rows] == [pipeline[3].id, pipeline[2].id, pipeline[1].id]

    rows, _ = candidates_store.find_candidates(db_session, 2, 3)
    assert [c.id for c in rows] == [pipeline[0].id]


def test_update_candidate_partial(db_session, pipeline):
    alice = pipeline[0]

    updated = candidates_store.update_candidate(
        db_session, alice.id, CandidateUpdate.model_validate({"status": "offer", "interviewNotes": "Strong"})
    )

    assert updated.status == "offer"
    assert updated.interview_notes == "Strong"
    assert updated.name == "Alice Smith"


def test_update_candidate_to_taken_email(db_session, pipeline):
    with pytest.raises(DuplicateRecordError):
        candidates_store.update_candidate(
            db_session, pipeline[0].id, CandidateUpdate(email="bob@example.com")
        )


def test_update_and_delete_missing_candidate(db_session):
    assert candidates_store.update_candidate(db_session, 5, CandidateUpdate(name="Ghost")) is None
    assert candidates_store.delete_candidate(db_session, 5) is False


def test_delete_candidate_removes_history_and_detaches_meetings(db_session, hr_user, pipeline):
    alice = pipeline[0]
    meeting = make_meeting(db_session, hr_user.id, candidate_id=alice.id)
    make_history(db_session, alice.id, meeting_id=meeting.id)

    assert candidates_store.delete_candidate(db_session, alice.id) is True

    assert candidates_store.find_candidate_by_id(db_session, alice.id) is None
    assert db_session.query(CandidateHistory).count() == 0
    db_session.expire_all()
    assert db_session.get(Meeting, meeting.id).candidate_id is None


# ============== History ==============


def test_history_newest_first_with_meeting_summary(db_session, hr_user, pipeline):
    alice = pipeline[0]
    meeting = make_meeting(db_session, hr_user.id, title="Panel", candidate_id=alice.id)
    older = make_history(db_session, alice.id, feedback="Phone screen ok", recorded_at=BASE_TIME)
    newer = history_store.create_candidate_history(
        db_session, alice.id, CandidateHistoryCreate(meeting_id=meeting.id, feedback="Panel went well")
    )
    make_history(db_session, pipeline[1].id, feedback="Someone else", recorded_at=BASE_TIME + timedelta(days=1))

    history = history_store.find_candidate_history(db_session, alice.id)

    assert [h.id for h in history] == [newer.id, older.id]
    assert history[0].meeting.title == "Panel"
    assert history[1].meeting is None


def test_history_with_unknown_meeting(db_session, pipeline):
    with pytest.raises(ForeignKeyViolationError):
        history_store.create_candidate_history(
            db_session, pipeline[0].id, CandidateHistoryCreate(meeting_id=321, feedback="Lost meeting")
        )


# ============== Users and positions ==============


def test_create_user_hashes_password_and_hides_it(db_session):
    position = make_position(db_session)
    user = users_store.create_user(
        db_session,
        RegisterRequest(
            name="Mia", email="mia@example.com", password="password123", role="manager", position_id=position.id
        ),
    )

    assert isinstance(user, UserPublic)
    assert "password_hash" not in user.model_dump()

    stored = users_store.find_user_by_email(db_session, "mia@example.com")
    assert stored.password_hash != "password123"
    assert verify_password("password123", stored.password_hash)
    assert users_store.find_user_by_id(db_session, user.id).position.name == "Senior Engineer"


def test_create_user_duplicate_email(db_session, hr_user):
    with pytest.raises(DuplicateRecordError):
        users_store.create_user(
            db_session,
            RegisterRequest(name="Again", email=hr_user.email, password="password123", role="hr"),
        )


def test_update_last_login(db_session, hr_user):
    assert hr_user.last_login is None

    users_store.update_user_last_login(db_session, hr_user.id)

    assert users_store.find_user_by_id(db_session, hr_user.id).last_login is not None


def test_positions_sorted_by_name(db_session):
    for name in ("Recruiter", "Engineering Manager", "Designer"):
        make_position(db_session, name)
    for name in ("QA Engineer", "Data Analyst"):
        make_applied_position(db_session, name)

    assert [p.name for p in positions_store.find_all_positions(db_session)] == [
        "Designer",
        "Engineering Manager",
        "Recruiter",
    ]
    applied = positions_store.find_all_applied_positions(db_session)
    assert [p.name for p in applied] == ["Data Analyst", "QA Engineer"]
    assert positions_store.find_applied_position_by_id(db_session, applied[0].id).name == "Data Analyst"
    assert positions_store.find_position_by_id(db_session, 999) is None
