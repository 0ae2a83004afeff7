"""User ORM model. Looked up by the core; mutated only by seeding/admin tooling."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from taskflow.domain.enums import UserRole
from taskflow.infrastructure.persistence.database import Base
from taskflow.infrastructure.persistence.models.mixins import TimestampedModel


class User(TimestampedModel, Base):
    """User model. Table: app_user. Email is unique."""

    __tablename__ = "app_user"

    username: Mapped[str] = mapped_column(String(150), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True)
    password_hash: Mapped[str] = mapped_column(String, nullable=False)
    role: Mapped[str] = mapped_column(
        String(16), nullable=False, default=UserRole.USER.value
    )
