"""User ORM model: the identity store used for authentication and actor attribution."""

from sqlalchemy import Boolean, String, text
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import EntityModel


class User(EntityModel, Base):
    """Association user (admin, club manager, referee, member). Table: app_user."""

    __tablename__ = "app_user"

    name: Mapped[str] = mapped_column(String, nullable=False)
    email: Mapped[str] = mapped_column(String, nullable=False, unique=True, index=True)
    role: Mapped[str] = mapped_column(String, nullable=False, server_default=text("'member'"))
    hashed_password: Mapped[str] = mapped_column(String, nullable=False)
    active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("true")
    )
