"""DTOs for users and the calling actor (no dependency on ORM)."""

from dataclasses import dataclass

from taskflow.domain.enums import UserRole


@dataclass(frozen=True)
class UserResult:
    """User read-model. No password hash."""

    id: int
    username: str
    email: str
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


@dataclass(frozen=True)
class ActorContext:
    """Resolved caller: who is acting and whether they hold the Admin role."""

    actor_id: int
    is_admin: bool = False
