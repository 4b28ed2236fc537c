"""Votable time option for a poll. Immutable once inserted (no update path exists)."""
from sqlalchemy import Column, ForeignKey, String
from sqlalchemy.orm import relationship

from plantomeet.db.base import Base


class PollTimeSlot(Base):
    __tablename__ = "time_slots"

    id = Column(String(36), primary_key=True)
    poll_id = Column(String(36), ForeignKey("polls.id", ondelete="CASCADE"), nullable=False, index=True)
    day = Column(String(10), nullable=False)  # YYYY-MM-DD
    start_time = Column(String(5), nullable=False)  # HH:MM
    end_time = Column(String(5), nullable=False)

    poll = relationship("Poll", back_populates="time_slots")
    responses = relationship("PollResponse", cascade="all")
