"""Initial schema: polls, time_slots, responses, participants."""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "polls",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("duration_minutes", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(16), nullable=False, server_default="open"),
        sa.Column("finalized_slot_id", sa.String(36), nullable=True),
        sa.Column("finalized_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("date_range_start", sa.String(10), nullable=False),
        sa.Column("date_range_end", sa.String(10), nullable=False),
        sa.Column("creator_id", sa.String(64), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint("duration_minutes > 0", name="ck_polls_duration_positive"),
        sa.CheckConstraint(
            "(status = 'finalized') = (finalized_slot_id IS NOT NULL)",
            name="ck_polls_finalized_slot_iff_finalized",
        ),
    )
    op.create_index("ix_polls_creator_id", "polls", ["creator_id"])

    op.create_table(
        "time_slots",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("poll_id", sa.String(36), sa.ForeignKey("polls.id", ondelete="CASCADE"), nullable=False),
        sa.Column("day", sa.String(10), nullable=False),
        sa.Column("start_time", sa.String(5), nullable=False),
        sa.Column("end_time", sa.String(5), nullable=False),
    )
    op.create_index("ix_time_slots_poll_id", "time_slots", ["poll_id"])

    op.create_table(
        "responses",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("poll_id", sa.String(36), sa.ForeignKey("polls.id", ondelete="CASCADE"), nullable=False),
        sa.Column("slot_id", sa.String(36), sa.ForeignKey("time_slots.id", ondelete="CASCADE"), nullable=False),
        sa.Column("participant_id", sa.String(64), nullable=False),
        sa.Column("availability", sa.String(8), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint("poll_id", "slot_id", "participant_id", name="uq_responses_poll_slot_participant"),
        sa.CheckConstraint("availability IN ('yes', 'maybe', 'no')", name="ck_responses_availability"),
    )
    op.create_index("ix_responses_poll_id", "responses", ["poll_id"])

    op.create_table(
        "participants",
        sa.Column("poll_id", sa.String(36), sa.ForeignKey("polls.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("participant_id", sa.String(64), primary_key=True),
        sa.Column("display_name", sa.String(100), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )


def downgrade() -> None:
    op.drop_table("participants")
    op.drop_index("ix_responses_poll_id", table_name="responses")
    op.drop_table("responses")
    op.drop_index("ix_time_slots_poll_id", table_name="time_slots")
    op.drop_table("time_slots")
    op.drop_index("ix_polls_creator_id", table_name="polls")
    op.drop_table("polls")
