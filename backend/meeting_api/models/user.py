from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from meeting_api.db.base import Base


class User(Base):
    """Staff account used to log in and organise meetings."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    role = Column(String(50), nullable=False)  # 'hr' | 'manager' | 'staff'
    password_hash = Column(String(255), nullable=False)
    last_login = Column(DateTime, nullable=True)
    position_id = Column(
        Integer,
        ForeignKey("positions.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    # Relationships
    position = relationship("Position", back_populates="users")
    organized_meetings = relationship("Meeting", back_populates="user")
    participations = relationship("InterviewParticipant", back_populates="user")
