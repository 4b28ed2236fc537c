"""One vote per (poll, slot, participant). Re-voting updates availability in place."""
from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from plantomeet.db.base import Base


class PollResponse(Base):
    __tablename__ = "responses"
    __table_args__ = (
        UniqueConstraint("poll_id", "slot_id", "participant_id", name="uq_responses_poll_slot_participant"),
        CheckConstraint("availability IN ('yes', 'maybe', 'no')", name="ck_responses_availability"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    poll_id = Column(String(36), ForeignKey("polls.id", ondelete="CASCADE"), nullable=False, index=True)
    slot_id = Column(String(36), ForeignKey("time_slots.id", ondelete="CASCADE"), nullable=False)
    participant_id = Column(String(64), nullable=False)
    availability = Column(String(8), nullable=False)  # yes | maybe | no
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    poll = relationship("Poll", back_populates="responses")
