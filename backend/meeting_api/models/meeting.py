from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from meeting_api.db.base import Base
from meeting_api.models.timestamps import utcnow


class Meeting(Base):
    """
    Scheduled meeting or interview.

    Rows are soft-deleted: a non-null `deleted_at` hides the meeting from
    default listings while keeping it retrievable by id.
    """

    __tablename__ = "meetings"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    start_time = Column(DateTime, nullable=False, index=True)
    end_time = Column(DateTime, nullable=False)
    location = Column(String(255), nullable=True)
    meeting_type = Column(String(50), nullable=False)  # 'onsite' | 'zoom' | 'google_meet'
    notes = Column(Text, nullable=True)
    status = Column(String(50), nullable=False, index=True)  # 'confirmed' | 'pending'

    # Organizer
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    candidate_id = Column(
        Integer,
        ForeignKey("candidates.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
    deleted_at = Column(DateTime, nullable=True, index=True)

    # Relationships
    user = relationship("User", back_populates="organized_meetings")
    candidate = relationship("Candidate", back_populates="meetings")
    participants = relationship(
        "InterviewParticipant",
        back_populates="meeting",
        order_by="InterviewParticipant.id",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class InterviewParticipant(Base):
    """Join row between a meeting and an attending user."""

    __tablename__ = "interview_participants"
    __table_args__ = (
        UniqueConstraint("meeting_id", "user_id", name="uq_interview_participants_meeting_user"),
    )

    id = Column(Integer, primary_key=True)
    meeting_id = Column(
        Integer,
        ForeignKey("meetings.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    meeting = relationship("Meeting", back_populates="participants")
    user = relationship("User", back_populates="participations")
