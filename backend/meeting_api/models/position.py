from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from meeting_api.db.base import Base


class Position(Base):
    """Internal job title held by a staff user."""

    __tablename__ = "positions"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), unique=True, nullable=False)

    users = relationship("User", back_populates="position")


class AppliedPosition(Base):
    """Opening a candidate has applied for."""

    __tablename__ = "applied_positions"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), unique=True, nullable=False)

    candidates = relationship("Candidate", back_populates="applied_position")
