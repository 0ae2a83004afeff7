"""User repository (lookup for the core; create for seeding and tests)."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from taskflow.application.dtos.user import UserResult
from taskflow.domain.enums import UserRole
from taskflow.infrastructure.persistence.models.user import User
from taskflow.infrastructure.persistence.repositories.base import BaseRepository


def _to_result(u: User) -> UserResult:
    """Map User ORM to UserResult (no password hash)."""
    return UserResult(
        id=u.id,
        username=u.username,
        email=u.email,
        role=UserRole(u.role),
    )


class UserRepository(BaseRepository[User]):
    """User repository. Implements IUserRepository."""

    resource_type = "user"

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, User)

    async def get_by_id(self, user_id: int) -> UserResult | None:
        user = await self._get_model(user_id)
        return _to_result(user) if user else None

    async def get_by_email(self, email: str) -> UserResult | None:
        result = await self.db.execute(select(User).where(User.email == email))
        user = result.scalar_one_or_none()
        return _to_result(user) if user else None

    async def create_user(
        self,
        username: str,
        email: str,
        password_hash: str,
        role: UserRole,
        *,
        now: datetime,
    ) -> UserResult:
        user = User(
            username=username,
            email=email,
            password_hash=password_hash,
            role=role.value,
            created_at=now,
            updated_at=now,
        )
        return _to_result(await self._add(user))
