"""Shared fixtures: an in-memory store per test, an app bound to it, factories."""

import os

# Must be set before meeting_api reads its settings
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from datetime import datetime, timedelta  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from meeting_api.core.config import Settings  # noqa: E402
from meeting_api.core.security import create_access_token, get_password_hash  # noqa: E402
from meeting_api.db.session import Database  # noqa: E402
from meeting_api.main import create_app  # noqa: E402
from meeting_api.models import (  # noqa: E402
    AppliedPosition,
    Candidate,
    CandidateHistory,
    InterviewParticipant,
    Meeting,
    Position,
    User,
)

DEFAULT_PASSWORD = "password123"
BASE_TIME = datetime(2025, 3, 10, 9, 0, 0)


@pytest.fixture
def database():
    database = Database("sqlite://")
    database.create_all()
    yield database
    database.drop_all()
    database.dispose()


@pytest.fixture
def db_session(database):
    session = database.session()
    yield session
    session.close()


@pytest.fixture
def test_settings():
    return Settings(DATABASE_URL="sqlite://", RATE_LIMIT_ENABLED=False, LOG_LEVEL="WARNING")


@pytest.fixture
def app(test_settings, database):
    return create_app(test_settings, database=database)


@pytest.fixture
def client(app):
    return TestClient(app)


# ============== Factories ==============


def _save(db, obj):
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj


def make_position(db, name="Senior Engineer"):
    return _save(db, Position(name=name))


def make_applied_position(db, name="Backend Developer"):
    return _save(db, AppliedPosition(name=name))


def make_user(db, email="hr@example.com", role="hr", name="Hannah Reyes",
              password=DEFAULT_PASSWORD, position_id=None):
    return _save(
        db,
        User(
            name=name,
            email=email,
            role=role,
            password_hash=get_password_hash(password),
            position_id=position_id,
        ),
    )


def make_candidate(db, applied_position_id, email="alice@example.com",
                   name="Alice Smith", status="applied", **extra):
    return _save(
        db,
        Candidate(
            name=name,
            email=email,
            applied_position_id=applied_position_id,
            status=status,
            **extra,
        ),
    )


def make_meeting(db, organizer_id, title="Technical Interview", start=BASE_TIME,
                 duration=timedelta(hours=1), participant_ids=(), **extra):
    meeting = Meeting(
        title=title,
        start_time=start,
        end_time=start + duration,
        meeting_type=extra.pop("meeting_type", "onsite"),
        status=extra.pop("status", "confirmed"),
        user_id=organizer_id,
        participants=[InterviewParticipant(user_id=uid) for uid in participant_ids],
        **extra,
    )
    return _save(db, meeting)


def make_history(db, candidate_id, feedback="Solid fundamentals", meeting_id=None, recorded_at=None):
    entry = CandidateHistory(candidate_id=candidate_id, meeting_id=meeting_id, feedback=feedback)
    if recorded_at is not None:
        entry.recorded_at = recorded_at
    return _save(db, entry)


def token_for(user) -> str:
    return create_access_token({"userId": user.id, "email": user.email, "role": user.role})


def bearer(user) -> dict[str, str]:
    return {"Authorization": f"Bearer {token_for(user)}"}


# ============== Common Rows ==============


@pytest.fixture
def hr_user(db_session):
    return make_user(db_session)


@pytest.fixture
def staff_user(db_session):
    return make_user(db_session, email="sam@example.com", role="staff", name="Sam Staff")


@pytest.fixture
def auth_headers(hr_user):
    return bearer(hr_user)


@pytest.fixture
def applied_position(db_session):
    return make_applied_position(db_session)
