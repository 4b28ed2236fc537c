"""Reaction to a finalized poll: one emoji (+ optional comment) per participant."""
from sqlalchemy import Column, DateTime, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from plantomeet.db.base import Base


class PollReaction(Base):
    __tablename__ = "reactions"
    __table_args__ = (UniqueConstraint("poll_id", "participant_id", name="uq_reactions_poll_participant"),)

    id = Column(String(36), primary_key=True)
    poll_id = Column(String(36), ForeignKey("polls.id", ondelete="CASCADE"), nullable=False, index=True)
    participant_id = Column(String(64), nullable=False)
    emoji = Column(String(16), nullable=False)
    comment = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    poll = relationship("Poll", back_populates="reactions")
