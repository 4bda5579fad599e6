"""Activity log ORM model. Append-only record of every data-layer mutation."""

from datetime import datetime
from typing import Any

from sqlalchemy import Connection, DateTime, Index, String, Text, event
from sqlalchemy.orm import Mapped, Mapper, mapped_column
from sqlalchemy.sql import func

from app.infrastructure.persistence.database import Base
from app.shared.utils.generators import generate_cuid


class ActivityLog(Base):
    """Who changed what, when, from where. No update/delete through the ORM."""

    __tablename__ = "activity_log"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=generate_cuid)
    action: Mapped[str] = mapped_column(String, nullable=False)
    entity_type: Mapped[str] = mapped_column(String, nullable=False)
    entity_id: Mapped[str | None] = mapped_column(String, nullable=True)
    actor_role: Mapped[str | None] = mapped_column(String, nullable=True)
    actor_name: Mapped[str | None] = mapped_column(String, nullable=True)
    actor_email: Mapped[str | None] = mapped_column(String, nullable=True)
    actor_id: Mapped[str | None] = mapped_column(String, nullable=True)
    ip_address: Mapped[str | None] = mapped_column(String, nullable=True)
    user_agent: Mapped[str | None] = mapped_column(Text, nullable=True)
    changes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    __table_args__ = (
        Index("ix_activity_log_created_at", "created_at"),
        Index("ix_activity_log_entity", "entity_type", "entity_id"),
        Index("ix_activity_log_action", "action"),
        Index("ix_activity_log_actor_email", "actor_email"),
    )


@event.listens_for(ActivityLog, "before_update")
def _prevent_activity_log_updates(
    _mapper: Mapper[Any], _connection: Connection, _target: ActivityLog
) -> None:
    """Activity log entries are append-only; updates are forbidden."""
    raise ValueError("Activity log entries are immutable and cannot be updated.")


@event.listens_for(ActivityLog, "before_delete")
def _prevent_activity_log_deletes(
    _mapper: Mapper[Any], _connection: Connection, _target: ActivityLog
) -> None:
    """Entries leave the table only through the retention job's bulk delete."""
    raise ValueError("Activity log entries cannot be deleted.")
