"""SQLAlchemy unit of work: one AsyncSession and one commit per operation.

Services open a unit of work per public operation; repositories share its
session so every read that informs a decision and every write that follows
land in the same transaction. Concurrent-modification failures reported by
the database are surfaced as StoreConflictException (retryable).
"""

from __future__ import annotations

import logging
from types import TracebackType

from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from taskflow.domain.exceptions import StoreConflictException
from taskflow.infrastructure.persistence.repositories import (
    TaskAssignmentRepository,
    TaskDependencyRepository,
    TaskRepository,
    UserRepository,
    WorkflowRepository,
)

logger = logging.getLogger(__name__)

# serialization_failure, deadlock_detected
_RETRYABLE_SQLSTATES = frozenset({"40001", "40P01"})


def _is_retryable(exc: DBAPIError) -> bool:
    """Return whether a driver error means another transaction won a race."""
    if isinstance(exc, IntegrityError):
        return True
    orig = exc.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate in _RETRYABLE_SQLSTATES:
        return True
    return "database is locked" in str(orig).lower()


class SqlAlchemyUnitOfWork:
    """Implements IUnitOfWork over an async_sessionmaker.

    Usage:
        async with SqlAlchemyUnitOfWork(session_factory) as uow:
            ...
            await uow.commit()

    Exiting without commit() rolls back.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory
        self.session: AsyncSession | None = None
        self._committed = False

    async def __aenter__(self) -> SqlAlchemyUnitOfWork:
        self.session = self._session_factory()
        self._committed = False
        self.tasks = TaskRepository(self.session)
        self.users = UserRepository(self.session)
        self.workflows = WorkflowRepository(self.session)
        self.dependencies = TaskDependencyRepository(self.session)
        self.assignments = TaskAssignmentRepository(self.session)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        session = self.session
        self.session = None
        if session is None:
            return
        try:
            if not self._committed:
                await session.rollback()
        finally:
            await session.close()
        # Flushes inside the block can also lose a race (e.g. unique pair insert).
        if isinstance(exc, DBAPIError) and _is_retryable(exc):
            logger.warning("Store conflict during flush: %s", exc.orig)
            raise StoreConflictException() from exc

    async def commit(self) -> None:
        """Commit the transaction; map concurrent-modification errors to StoreConflictException."""
        if self.session is None:
            raise RuntimeError("Unit of work is not active")
        try:
            await self.session.commit()
        except DBAPIError as exc:
            await self.session.rollback()
            if _is_retryable(exc):
                logger.warning("Store conflict on commit: %s", exc.orig)
                raise StoreConflictException() from exc
            raise
        self._committed = True
