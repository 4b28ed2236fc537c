"""Poll: title, meeting duration, date window and the open -> finalized state.

status: 'open' | 'finalized'. finalized_slot_id is set iff status == 'finalized' and never changes after.
parent_poll_id: set when the poll was cloned onto new dates from another poll.
Slots, responses, participants and reactions are owned by the poll and go with it on delete.
"""
from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from plantomeet.core.constants import POLL_STATUS_OPEN
from plantomeet.db.base import Base


class Poll(Base):
    __tablename__ = "polls"
    __table_args__ = (
        CheckConstraint("duration_minutes > 0", name="ck_polls_duration_positive"),
        CheckConstraint(
            "(status = 'finalized') = (finalized_slot_id IS NOT NULL)",
            name="ck_polls_finalized_slot_iff_finalized",
        ),
    )

    id = Column(String(36), primary_key=True)
    title = Column(String(200), nullable=False)
    duration_minutes = Column(Integer, nullable=False)
    status = Column(String(16), nullable=False, default=POLL_STATUS_OPEN, server_default=POLL_STATUS_OPEN)
    finalized_slot_id = Column(String(36), nullable=True)
    finalized_at = Column(DateTime(timezone=True), nullable=True)
    date_range_start = Column(String(10), nullable=False)  # YYYY-MM-DD
    date_range_end = Column(String(10), nullable=False)
    creator_id = Column(String(64), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    parent_poll_id = Column(String(36), ForeignKey("polls.id", ondelete="SET NULL"), nullable=True, index=True)

    time_slots = relationship("PollTimeSlot", back_populates="poll", cascade="all")
    responses = relationship("PollResponse", back_populates="poll", cascade="all")
    participants = relationship("PollParticipant", back_populates="poll", cascade="all")
    reactions = relationship("PollReaction", back_populates="poll", cascade="all")
