"""Unit-of-work dependency (composition root)."""

from __future__ import annotations

from taskflow.application.interfaces.repositories import IUnitOfWork, UnitOfWorkFactory
from taskflow.infrastructure.persistence.database import get_session_factory
from taskflow.infrastructure.persistence.unit_of_work import SqlAlchemyUnitOfWork


def get_uow_factory() -> UnitOfWorkFactory:
    """Return a factory of SQLAlchemy units of work bound to the process-wide engine.

    Raises SqlNotConfiguredException (503) when the database is not configured.
    Tests override this dependency to point at their own engine.
    """
    session_factory = get_session_factory()

    def _factory() -> IUnitOfWork:
        return SqlAlchemyUnitOfWork(session_factory)

    return _factory
