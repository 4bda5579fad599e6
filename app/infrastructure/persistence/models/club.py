"""Club ORM model."""

from typing import TYPE_CHECKING

from sqlalchemy import Boolean, String, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import EntityModel

if TYPE_CHECKING:
    from app.infrastructure.persistence.models.player import Player


class Club(EntityModel, Base):
    """Affiliated club. Table: club. registration_number is unique."""

    __tablename__ = "club"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    registration_number: Mapped[str | None] = mapped_column(
        String(64), nullable=True, unique=True
    )
    contact_email: Mapped[str | None] = mapped_column(String, nullable=True)
    # API client secret for the club's scoring integration.
    client_secret: Mapped[str | None] = mapped_column(String, nullable=True)
    active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("true")
    )

    players: Mapped[list["Player"]] = relationship(back_populates="club")
