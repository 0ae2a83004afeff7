"""Unit of work tests: commit visibility, rollback, and store conflict mapping."""

import pytest

from taskflow.domain.enums import UserRole
from taskflow.domain.exceptions import StoreConflictException
from taskflow.shared.utils.datetime import utc_now


@pytest.mark.requires_db
async def test_commit_makes_writes_visible(uow_factory) -> None:
    async with uow_factory() as uow:
        workflow = await uow.workflows.create_workflow("W", "", now=utc_now())
        await uow.commit()
    async with uow_factory() as uow:
        assert await uow.workflows.get_by_id(workflow.id) is not None


@pytest.mark.requires_db
async def test_exit_without_commit_rolls_back(uow_factory) -> None:
    async with uow_factory() as uow:
        workflow = await uow.workflows.create_workflow("W", "", now=utc_now())
    async with uow_factory() as uow:
        assert await uow.workflows.get_by_id(workflow.id) is None


@pytest.mark.requires_db
async def test_duplicate_edge_insert_is_store_conflict(
    uow_factory, workflow_service, make_task, edge_pairs
) -> None:
    """A pair inserted by a concurrent writer surfaces as a retryable conflict."""
    workflow = await workflow_service.create_workflow("W")
    a = await make_task("A", workflow_id=workflow.id)
    b = await make_task("B", workflow_id=workflow.id)
    async with uow_factory() as uow:
        await uow.dependencies.create(a.id, b.id)
        await uow.commit()

    with pytest.raises(StoreConflictException) as exc_info:
        async with uow_factory() as uow:
            await uow.dependencies.create(a.id, b.id)
            await uow.commit()
    assert exc_info.value.details == {"retryable": True}
    assert await edge_pairs(a.id, b.id) == {(a.id, b.id)}


@pytest.mark.requires_db
async def test_duplicate_email_is_store_conflict(uow_factory, alice) -> None:
    with pytest.raises(StoreConflictException):
        async with uow_factory() as uow:
            await uow.users.create_user(
                "alice2", alice.email, "hash", UserRole.USER, now=utc_now()
            )
            await uow.commit()


@pytest.mark.requires_db
async def test_commit_outside_context_is_an_error(uow_factory) -> None:
    uow = uow_factory()
    with pytest.raises(RuntimeError):
        await uow.commit()
