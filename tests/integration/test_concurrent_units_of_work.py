"""Overlapping units of work against a file-backed SQLite store.

Each unit of work gets its own connection here (no StaticPool), so the
second one to start has to wait for the first one's write lock.
"""

import pytest

from taskflow.domain.exceptions import CyclicDependencyException, StoreConflictException
from taskflow.infrastructure.persistence.database import build_engine, init_models


@pytest.fixture
async def engine(tmp_path):
    """File database with a short busy timeout; disposed after the test."""
    db_engine = build_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'taskflow.db'}",
        connect_args={"timeout": 0.2},
    )
    await init_models(db_engine)
    yield db_engine
    await db_engine.dispose()


@pytest.fixture
async def pair(workflow_service, make_task):
    """(workflow, a, b) with a and b members and no edges yet."""
    workflow = await workflow_service.create_workflow("Release")
    a = await make_task("A", workflow_id=workflow.id)
    b = await make_task("B", workflow_id=workflow.id)
    return workflow, a, b


@pytest.mark.requires_db
async def test_opposite_edges_cannot_both_pass_cycle_check(
    uow_factory, graph, pair, edge_pairs
) -> None:
    """While one unit of work has read the edges, another cannot start its own check."""
    _, a, b = pair
    async with uow_factory() as first:
        assert await graph.has_cycle(first, b.id, a.id) is False

        with pytest.raises(StoreConflictException) as exc_info:
            async with uow_factory() as second:
                await graph.has_cycle(second, a.id, b.id)
        assert exc_info.value.details == {"retryable": True}

        await graph.add_dependency(first, b.id, a.id)
        await first.commit()

    assert await edge_pairs(a.id, b.id) == {(b.id, a.id)}


@pytest.mark.requires_db
async def test_add_task_conflicts_then_retry_sees_cycle(
    workflow_service, uow_factory, graph, pair, edge_pairs
) -> None:
    workflow, a, b = pair
    async with uow_factory() as first:
        await graph.add_dependency(first, b.id, a.id)
        with pytest.raises(StoreConflictException):
            await workflow_service.add_task_to_workflow(workflow.id, b.id, depends_on_id=a.id)
        await first.commit()

    with pytest.raises(CyclicDependencyException):
        await workflow_service.add_task_to_workflow(workflow.id, b.id, depends_on_id=a.id)
    assert await edge_pairs(a.id, b.id) == {(b.id, a.id)}
