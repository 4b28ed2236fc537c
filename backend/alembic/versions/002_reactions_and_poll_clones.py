"""Add reactions table and polls.parent_poll_id for polls cloned onto new dates."""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "reactions",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("poll_id", sa.String(36), sa.ForeignKey("polls.id", ondelete="CASCADE"), nullable=False),
        sa.Column("participant_id", sa.String(64), nullable=False),
        sa.Column("emoji", sa.String(16), nullable=False),
        sa.Column("comment", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint("poll_id", "participant_id", name="uq_reactions_poll_participant"),
    )
    op.create_index("ix_reactions_poll_id", "reactions", ["poll_id"])

    op.add_column(
        "polls",
        sa.Column("parent_poll_id", sa.String(36), sa.ForeignKey("polls.id", ondelete="SET NULL"), nullable=True),
    )
    op.create_index(
        "ix_polls_parent_poll_id",
        "polls",
        ["parent_poll_id"],
        postgresql_where=sa.text("parent_poll_id IS NOT NULL"),
    )


def downgrade() -> None:
    op.drop_index("ix_polls_parent_poll_id", table_name="polls")
    op.drop_column("polls", "parent_poll_id")
    op.drop_index("ix_reactions_poll_id", table_name="reactions")
    op.drop_table("reactions")
