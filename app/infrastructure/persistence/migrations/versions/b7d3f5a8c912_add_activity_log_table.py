"""add_activity_log_table

Revision ID: b7d3f5a8c912
Revises: a1c9e2d4f601
Create Date: 2026-09-28

Append-only record of every data-layer mutation: who changed what, when,
from where. A trigger blocks UPDATE at the database level (in addition to
the ORM guard). DELETE stays allowed for the retention cleanup.
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "b7d3f5a8c912"
down_revision: Union[str, Sequence[str], None] = "a1c9e2d4f601"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _trigger_function() -> str:
    """Return SQL for trigger function that blocks activity_log UPDATE."""
    return """
    CREATE OR REPLACE FUNCTION prevent_activity_log_update()
    RETURNS TRIGGER
    LANGUAGE plpgsql
    AS $$
    BEGIN
        RAISE EXCEPTION 'activity_log rows are append-only and cannot be updated'
            USING ERRCODE = 'integrity_constraint_violation';
    END;
    $$
    """


def upgrade() -> None:
    """Create activity_log table, indexes and the update guard."""
    op.create_table(
        "activity_log",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("action", sa.String(), nullable=False),
        sa.Column("entity_type", sa.String(), nullable=False),
        sa.Column("entity_id", sa.String(), nullable=True),
        sa.Column("actor_role", sa.String(), nullable=True),
        sa.Column("actor_name", sa.String(), nullable=True),
        sa.Column("actor_email", sa.String(), nullable=True),
        sa.Column("actor_id", sa.String(), nullable=True),
        sa.Column("ip_address", sa.String(), nullable=True),
        sa.Column("user_agent", sa.Text(), nullable=True),
        sa.Column("changes", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_activity_log_created_at", "activity_log", ["created_at"])
    op.create_index("ix_activity_log_entity", "activity_log", ["entity_type", "entity_id"])
    op.create_index("ix_activity_log_action", "activity_log", ["action"])
    op.create_index("ix_activity_log_actor_email", "activity_log", ["actor_email"])

    if op.get_bind().dialect.name == "postgresql":
        op.execute(_trigger_function())
        op.execute(
            "CREATE TRIGGER prevent_activity_log_update "
            "BEFORE UPDATE ON activity_log "
            "FOR EACH ROW EXECUTE PROCEDURE prevent_activity_log_update()"
        )


def downgrade() -> None:
    """Drop the update guard, indexes and activity_log table."""
    if op.get_bind().dialect.name == "postgresql":
        op.execute("DROP TRIGGER IF EXISTS prevent_activity_log_update ON activity_log")
        op.execute("DROP FUNCTION IF EXISTS prevent_activity_log_update()")
    op.drop_index("ix_activity_log_actor_email", table_name="activity_log")
    op.drop_index("ix_activity_log_action", table_name="activity_log")
    op.drop_index("ix_activity_log_entity", table_name="activity_log")
    op.drop_index("ix_activity_log_created_at", table_name="activity_log")
    op.drop_table("activity_log")
