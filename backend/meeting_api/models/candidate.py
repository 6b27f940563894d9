from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from meeting_api.db.base import Base
from meeting_api.models.timestamps import utcnow


class Candidate(Base):
    """Job applicant tracked through the hiring pipeline."""

    __tablename__ = "candidates"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    applied_position_id = Column(
        Integer,
        ForeignKey("applied_positions.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    # 'applied' | 'screening' | 'interview' | 'offer' | 'rejected' | 'hired'
    status = Column(String(50), nullable=False, index=True)
    interview_notes = Column(Text, nullable=True)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    # Relationships
    applied_position = relationship("AppliedPosition", back_populates="candidates")
    meetings = relationship("Meeting", back_populates="candidate")
    history = relationship(
        "CandidateHistory",
        back_populates="candidate",
        passive_deletes=True,
    )
