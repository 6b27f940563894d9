"""
Meeting API Database Seeder

Creates positions, applied positions, three staff users (one per role),
candidates, meetings with participants, and candidate feedback history.

Run from the backend/ directory: python seed_db.py
"""

from datetime import timedelta

from meeting_api.core.config import settings
from meeting_api.core.security import get_password_hash
from meeting_api.db.session import Database
from meeting_api.models import (
    AppliedPosition,
    Candidate,
    CandidateHistory,
    InterviewParticipant,
    Meeting,
    Position,
    User,
)
from meeting_api.models.timestamps import utcnow

SEED_PASSWORD = "password123"


def seed_database(database: Database) -> bool:
    """Seed the database once; returns False when it already holds data."""

    database.create_all()
    db = database.session()

    try:
        if db.query(User).filter(User.email == "sarah@company.com").first():
            print("Database already seeded. Skipping...")
            return False

        print("Seeding database...")

        # 1. Positions held by staff
        positions = [
            Position(name=name)
            for name in ("HR Manager", "Engineering Manager", "Product Manager", "Senior Engineer")
        ]
        db.add_all(positions)

        # 2. Openings candidates apply for
        applied = [
            AppliedPosition(name=name)
            for name in (
                "Software Engineer",
                "Frontend Developer",
                "Backend Developer",
                "Full Stack Developer",
                "DevOps Engineer",
            )
        ]
        db.add_all(applied)
        db.flush()  # Get IDs

        # 3. One user per role
        password_hash = get_password_hash(SEED_PASSWORD)
        sarah = User(name="Sarah Johnson", email="sarah@company.com", role="hr",
                     password_hash=password_hash, position_id=positions[0].id)
        mike = User(name="Mike Chen", email="mike@company.com", role="manager",
                    password_hash=password_hash, position_id=positions[1].id)
        emily = User(name="Emily Davis", email="emily@company.com", role="staff",
                     password_hash=password_hash, position_id=positions[3].id)
        db.add_all([sarah, mike, emily])

        # 4. Candidates at different pipeline stages
        alice = Candidate(name="Alice Smith", email="alice@example.com",
                          applied_position_id=applied[0].id, status="interview",
                          interview_notes="Strong technical background in React and TypeScript")
        bob = Candidate(name="Bob Wilson", email="bob@example.com",
                        applied_position_id=applied[1].id, status="screening",
                        interview_notes="Good portfolio, needs technical assessment")
        carol = Candidate(name="Carol Martinez", email="carol@example.com",
                          applied_position_id=applied[2].id, status="applied")
        db.add_all([alice, bob, carol])
        db.flush()

        # 5. Meetings, one with a panel
        start = utcnow().replace(minute=0, second=0, microsecond=0) + timedelta(days=1)
        technical = Meeting(
            title="Technical Interview - Alice Smith",
            start_time=start,
            end_time=start + timedelta(hours=1),
            location="Conference Room A",
            meeting_type="onsite",
            notes="Focus on system design",
            status="confirmed",
            user_id=sarah.id,
            candidate_id=alice.id,
            participants=[
                InterviewParticipant(user_id=mike.id),
                InterviewParticipant(user_id=emily.id),
            ],
        )
        screening = Meeting(
            title="Screening Call - Bob Wilson",
            start_time=start + timedelta(days=1),
            end_time=start + timedelta(days=1, minutes=30),
            meeting_type="zoom",
            status="pending",
            user_id=sarah.id,
            candidate_id=bob.id,
        )
        sync = Meeting(
            title="Hiring Sync",
            start_time=start + timedelta(days=2),
            end_time=start + timedelta(days=2, minutes=45),
            meeting_type="google_meet",
            status="confirmed",
            user_id=mike.id,
            participants=[InterviewParticipant(user_id=sarah.id)],
        )
        db.add_all([technical, screening, sync])
        db.flush()

        # 6. Feedback history
        db.add_all([
            CandidateHistory(candidate_id=alice.id, meeting_id=technical.id,
                             feedback="Excellent problem solving, clear communication"),
            CandidateHistory(candidate_id=bob.id,
                             feedback="Portfolio reviewed, moving to screening"),
        ])

        db.commit()

        print("Database seeded successfully!")
        print("\nCreated Users (password: %s):" % SEED_PASSWORD)
        print("   - sarah@company.com [hr]")
        print("   - mike@company.com [manager]")
        print("   - emily@company.com [staff]")
        return True

    except Exception as e:
        db.rollback()
        print(f"Error seeding database: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed_database(Database(settings.DATABASE_URL))
