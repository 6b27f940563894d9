from sqlalchemy import Column, DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship

from meeting_api.db.base import Base
from meeting_api.models.timestamps import utcnow


class CandidateHistory(Base):
    """
    Feedback recorded against a candidate.

    Optionally tied to the meeting the feedback came out of; entries are
    read newest first.
    """

    __tablename__ = "candidate_histories"

    id = Column(Integer, primary_key=True)
    candidate_id = Column(
        Integer,
        ForeignKey("candidates.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    meeting_id = Column(
        Integer,
        ForeignKey("meetings.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    feedback = Column(Text, nullable=False)
    recorded_at = Column(DateTime, default=utcnow, nullable=False, index=True)

    candidate = relationship("Candidate", back_populates="history")
    meeting = relationship("Meeting")
