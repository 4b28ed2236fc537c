"""Participant: display name for a session id within one poll."""
from sqlalchemy import Column, DateTime, ForeignKey, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from plantomeet.db.base import Base


class PollParticipant(Base):
    __tablename__ = "participants"

    poll_id = Column(String(36), ForeignKey("polls.id", ondelete="CASCADE"), primary_key=True)
    participant_id = Column(String(64), primary_key=True)
    display_name = Column(String(100), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    poll = relationship("Poll", back_populates="participants")
