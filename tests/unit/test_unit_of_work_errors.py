"""Tests for mapping driver errors to retryable store conflicts."""

from sqlalchemy.exc import IntegrityError, OperationalError

from taskflow.infrastructure.persistence.unit_of_work import _is_retryable


class _PgError(Exception):
    def __init__(self, message: str, sqlstate: str) -> None:
        super().__init__(message)
        self.sqlstate = sqlstate


def test_integrity_error_is_retryable() -> None:
    exc = IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed"))
    assert _is_retryable(exc)


def test_serialization_failure_is_retryable() -> None:
    exc = OperationalError("UPDATE", {}, _PgError("could not serialize access", "40001"))
    assert _is_retryable(exc)


def test_deadlock_is_retryable() -> None:
    exc = OperationalError("UPDATE", {}, _PgError("deadlock detected", "40P01"))
    assert _is_retryable(exc)


def test_sqlite_lock_is_retryable() -> None:
    exc = OperationalError("UPDATE", {}, Exception("database is locked"))
    assert _is_retryable(exc)


def test_other_operational_error_is_not_retryable() -> None:
    exc = OperationalError("SELECT", {}, _PgError("connection refused", "08006"))
    assert not _is_retryable(exc)
