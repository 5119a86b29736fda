"""Initial schema: members, groups, events, ballots and event history

Revision ID: 0001
Revises:
Create Date: 2026-10-19

Tables added:
- members: Nominees and reviewers with their group memberships
- groups: Groups and their reviewer rosters (people_map)
- events: Nominations awaiting or past quorum
- ballots: One reviewer vote per event and roster entry
- event_history: Event status transitions
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create workflow tables."""
    
    # --- members ---
    op.create_table(
        "members",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("group_names", sa.JSON(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_members"),
    )
    op.create_index("ix_members_name", "members", ["name"])
    
    # --- groups ---
    op.create_table(
        "groups",
        sa.Column("id", sa.String(255), nullable=False),
        sa.Column("people_map", sa.JSON(), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_groups"),
    )
    
    # --- events ---
    op.create_table(
        "events",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("nominee_id", sa.String(64), nullable=False),
        sa.Column("nominee_name", sa.String(255), nullable=False),
        sa.Column("group_id", sa.String(255), nullable=False),
        sa.Column("points", sa.Integer(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("is_approved", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("approved_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id", name="pk_events"),
    )
    op.create_index("ix_events_nominee_id", "events", ["nominee_id"])
    op.create_index("ix_events_nominee_name", "events", ["nominee_name"])
    op.create_index("ix_events_group_id", "events", ["group_id"])
    op.create_index("ix_events_is_approved", "events", ["is_approved"])
    op.create_index("ix_events_created_at", "events", ["created_at"])
    
    # --- ballots ---
    op.create_table(
        "ballots",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("event_id", sa.Uuid(), nullable=False),
        sa.Column("reviewed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("approved", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("reviewed_at", sa.DateTime(), nullable=True),
        sa.Column("nominee_id", sa.String(64), nullable=False),
        sa.Column("nominee_name", sa.String(255), nullable=False),
        sa.Column("reviewer_id", sa.String(64), nullable=False),
        sa.Column("reviewer_name", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id", name="pk_ballots"),
        sa.ForeignKeyConstraint(["event_id"], ["events.id"], name="fk_ballots_event_id", ondelete="CASCADE"),
        sa.UniqueConstraint("event_id", "reviewer_id", name="uq_ballots_event_reviewer"),
    )
    op.create_index("ix_ballots_event_id", "ballots", ["event_id"])
    op.create_index("ix_ballots_reviewer_id", "ballots", ["reviewer_id"])
    op.create_index("ix_ballots_reviewed", "ballots", ["reviewed"])
    op.create_index("ix_ballots_created_at", "ballots", ["created_at"])
    
    # --- event_history ---
    op.create_table(
        "event_history",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("event_id", sa.Uuid(), nullable=False),
        sa.Column("from_status", sa.String(50), nullable=False),
        sa.Column("to_status", sa.String(50), nullable=False),
        sa.Column("transition", sa.String(50), nullable=False),
        sa.Column("approval_percentage", sa.Float(), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id", name="pk_event_history"),
        sa.ForeignKeyConstraint(["event_id"], ["events.id"], name="fk_event_history_event_id", ondelete="CASCADE"),
    )
    op.create_index("ix_event_history_event_id", "event_history", ["event_id"])
    op.create_index("ix_event_history_created_at", "event_history", ["created_at"])


def downgrade() -> None:
    """Drop workflow tables."""
    op.drop_table("event_history")
    op.drop_table("ballots")
    op.drop_table("events")
    op.drop_table("groups")
    op.drop_table("members")
