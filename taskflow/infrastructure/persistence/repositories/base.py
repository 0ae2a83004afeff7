"""Base repository: ORM lookup, flush/refresh helpers shared by all repositories."""

from typing import Any, Generic, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from taskflow.domain.exceptions import ResourceNotFoundException
from taskflow.infrastructure.persistence.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository over one ORM model and one session.

    Writes flush immediately (sessions run with autoflush=False) so later
    reads in the same unit of work see them; nothing is committed here.
    Subclasses map ORM rows to application DTOs before returning them.
    """

    resource_type: str = "resource"

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def _get_model(self, entity_id: int) -> ModelType | None:
        """Return the ORM row by primary key (identity map first), or None."""
        return await self.db.get(self.model, entity_id)

    async def _require_model(self, entity_id: int) -> ModelType:
        """Return the ORM row by primary key; raise ResourceNotFoundException if missing."""
        obj = await self._get_model(entity_id)
        if obj is None:
            raise ResourceNotFoundException(self.resource_type, entity_id)
        return obj

    async def _add(self, obj: ModelType) -> ModelType:
        """Persist a new row and reload server-generated columns."""
        self.db.add(obj)
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def _save(self, obj: ModelType, fields: dict[str, Any] | None = None) -> ModelType:
        """Apply fields (if any) to an attached row, flush and reload it."""
        for key, value in (fields or {}).items():
            setattr(obj, key, value)
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def _remove(self, obj: ModelType) -> None:
        """Delete an attached row."""
        await self.db.delete(obj)
        await self.db.flush()
