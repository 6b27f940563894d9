"""Tests for the database seeder."""

from fastapi.testclient import TestClient

from meeting_api.models import Candidate, InterviewParticipant, Meeting, User
from seed_db import SEED_PASSWORD, seed_database


def test_seed_runs_once(database, db_session):
    assert seed_database(database) is True
    assert seed_database(database) is False

    assert db_session.query(User).count() == 3
    assert db_session.query(Candidate).count() == 3
    assert db_session.query(Meeting).count() == 3
    assert db_session.query(InterviewParticipant).count() == 3


def test_seeded_user_can_log_in(database, app):
    seed_database(database)
    client = TestClient(app)

    response = client.post("/api/auth/login", json={"email": "sarah@company.com", "password": SEED_PASSWORD})

    assert response.status_code == 200
    token = response.json()["token"]

    meetings = client.get("/api/meetings", headers={"Authorization": f"Bearer {token}"}).json()
    assert meetings["pagination"]["total"] == 3
    assert meetings["meetings"][0]["title"] == "Hiring Sync"
