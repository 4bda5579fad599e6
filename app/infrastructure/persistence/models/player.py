"""Player ORM model."""

from datetime import date
from typing import TYPE_CHECKING

from sqlalchemy import Date, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import EntityModel

if TYPE_CHECKING:
    from app.infrastructure.persistence.models.club import Club


class Player(EntityModel, Base):
    """Registered player, optionally attached to a club. Table: player."""

    __tablename__ = "player"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    aadhar_number: Mapped[str | None] = mapped_column(String(20), nullable=True)
    date_of_birth: Mapped[date | None] = mapped_column(Date, nullable=True)
    club_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("club.id", ondelete="SET NULL"), nullable=True, index=True
    )

    club: Mapped["Club | None"] = relationship(back_populates="players")
