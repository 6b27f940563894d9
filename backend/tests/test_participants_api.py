"""Tests for adding and removing meeting participants."""

import pytest

from conftest import make_meeting
from meeting_api.collections import participants as participants_store


@pytest.fixture
def meeting(db_session, hr_user):
    return make_meeting(db_session, hr_user.id)


def test_add_participant(client, auth_headers, meeting, staff_user):
    response = client.post(
        f"/api/meetings/{meeting.id}/participants", json={"userId": staff_user.id}, headers=auth_headers
    )

    assert response.status_code == 201
    data = response.json()
    assert data["meetingId"] == meeting.id
    assert data["user"] == {"id": staff_user.id, "name": "Sam Staff", "email": "sam@example.com"}

    fetched = client.get(f"/api/meetings/{meeting.id}", headers=auth_headers).json()
    assert [p["id"] for p in fetched["participants"]] == [staff_user.id]


def test_add_participant_twice(client, auth_headers, meeting, staff_user):
    url = f"/api/meetings/{meeting.id}/participants"
    assert client.post(url, json={"userId": staff_user.id}, headers=auth_headers).status_code == 201

    response = client.post(url, json={"userId": staff_user.id}, headers=auth_headers)

    assert response.status_code == 400
    assert response.json() == {"error": "BadRequest", "message": "Participant already added to this meeting"}


def test_add_unknown_user(client, auth_headers, meeting):
    response = client.post(
        f"/api/meetings/{meeting.id}/participants", json={"userId": 8080}, headers=auth_headers
    )

    assert response.status_code == 400
    assert response.json() == {"error": "BadRequest", "message": "User does not exist"}


def test_add_to_missing_meeting_never_reaches_the_store(client, auth_headers, monkeypatch):
    calls = []
    monkeypatch.setattr(participants_store, "add_participant", lambda *args: calls.append(args))

    response = client.post("/api/meetings/1/participants", json={"userId": 2}, headers=auth_headers)

    assert response.status_code == 404
    assert response.json() == {"error": "NotFound", "message": "Meeting not found"}
    assert calls == []


def test_add_participant_requires_user_id(client, auth_headers, meeting):
    response = client.post(f"/api/meetings/{meeting.id}/participants", json={}, headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["error"] == "ValidationError"
    assert response.json()["details"][0]["path"] == ["userId"]


@pytest.mark.parametrize("user_id", [10**20, 2**31])
def test_add_participant_user_id_out_of_range(client, auth_headers, meeting, user_id):
    response = client.post(
        f"/api/meetings/{meeting.id}/participants", json={"userId": user_id}, headers=auth_headers
    )

    assert response.status_code == 400
    assert response.json()["error"] == "ValidationError"
    assert response.json()["details"][0]["path"] == ["userId"]


def test_add_participant_invalid_meeting_id(client, auth_headers):
    response = client.post("/api/meetings/x1/participants", json={"userId": 1}, headers=auth_headers)

    assert response.status_code == 400
    assert response.json() == {"error": "BadRequest", "message": "Invalid meeting ID"}


def test_remove_participant(client, auth_headers, db_session, hr_user, staff_user):
    meeting = make_meeting(db_session, hr_user.id, participant_ids=[hr_user.id, staff_user.id])
    url = f"/api/meetings/{meeting.id}/participants/{staff_user.id}"

    response = client.delete(url, headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == {"message": "Participant removed successfully"}

    again = client.delete(url, headers=auth_headers)
    assert again.status_code == 404
    assert again.json() == {"error": "NotFound", "message": "Participant not found in this meeting"}

    fetched = client.get(f"/api/meetings/{meeting.id}", headers=auth_headers).json()
    assert [p["id"] for p in fetched["participants"]] == [hr_user.id]


@pytest.mark.parametrize("path", ["abc/participants/1", "1/participants/abc", "0x1/participants/2"])
def test_remove_participant_invalid_ids(client, auth_headers, path):
    response = client.delete(f"/api/meetings/{path}", headers=auth_headers)

    assert response.status_code == 400
    assert response.json() == {"error": "BadRequest", "message": "Invalid meeting ID or user ID"}
