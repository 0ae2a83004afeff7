"""Dependency graph service tests, run inside explicit units of work."""

import pytest

from taskflow.domain.exceptions import (
    CyclicDependencyException,
    ResourceNotFoundException,
    WorkflowMismatchException,
)


@pytest.fixture
async def members(workflow_service, make_task):
    """Three tasks in one workflow, no edges yet."""
    workflow = await workflow_service.create_workflow("Graph")
    tasks = [await make_task(name) for name in ("A", "B", "C")]
    for task in tasks:
        await workflow_service.add_task_to_workflow(workflow.id, task.id)
    return workflow, [t.id for t in tasks]


@pytest.mark.requires_db
async def test_add_dependency_and_has_cycle(graph, uow_factory, members, edge_pairs) -> None:
    _, (a, b, _c) = members
    async with uow_factory() as uow:
        edge = await graph.add_dependency(uow, a, b)
        assert edge.id is not None
        assert await graph.has_cycle(uow, b, a) is True
        assert await graph.has_cycle(uow, a, b) is False
        await uow.commit()
    assert await edge_pairs(a) == {(a, b)}


@pytest.mark.requires_db
async def test_add_dependency_rejects_reverse_edge(graph, uow_factory, members, edge_pairs) -> None:
    _, (a, b, _c) = members
    async with uow_factory() as uow:
        await graph.add_dependency(uow, a, b)
        await uow.commit()
    async with uow_factory() as uow:
        with pytest.raises(CyclicDependencyException):
            await graph.add_dependency(uow, b, a)
    assert await edge_pairs(a, b) == {(a, b)}


@pytest.mark.requires_db
async def test_add_dependency_requires_shared_workflow(
    graph, uow_factory, members, make_task
) -> None:
    _, (a, _b, _c) = members
    outsider = await make_task("Outsider")
    async with uow_factory() as uow:
        with pytest.raises(WorkflowMismatchException):
            await graph.add_dependency(uow, a, outsider.id)
        with pytest.raises(WorkflowMismatchException):
            await graph.add_dependency(uow, outsider.id, a)
        with pytest.raises(ResourceNotFoundException):
            await graph.add_dependency(uow, a, 999)


@pytest.mark.requires_db
async def test_uncommitted_edges_are_rolled_back(graph, uow_factory, members, edge_pairs) -> None:
    _, (a, b, _c) = members
    async with uow_factory() as uow:
        await graph.add_dependency(uow, a, b)
    assert await edge_pairs(a, b) == set()


@pytest.mark.requires_db
async def test_cascade_remove_and_list(graph, uow_factory, members, edge_pairs) -> None:
    _, (a, b, c) = members
    async with uow_factory() as uow:
        await graph.add_dependency(uow, a, b)
        await graph.add_dependency(uow, b, c)
        await graph.add_dependency(uow, a, c)
        assert len(await graph.list_dependencies(uow, b)) == 2
        removed = await graph.cascade_remove_task_dependencies(uow, b)
        await uow.commit()
    assert removed == 2
    assert await edge_pairs(a, b, c) == {(a, c)}


@pytest.mark.requires_db
async def test_reassign_dependency_chain_skips_cycle_check(
    graph, uow_factory, members, edge_pairs
) -> None:
    """The chain is written as given even when it reverses an existing edge."""
    workflow, (a, b, c) = members
    async with uow_factory() as uow:
        await graph.add_dependency(uow, b, c)
        await uow.commit()
    async with uow_factory() as uow:
        chain = await graph.reassign_dependency_chain(uow, workflow.id, a, [a, c, b])
        await uow.commit()
    assert [(e.task_item_id, e.dependent_task_item_id) for e in chain] == [(a, c), (c, b)]
    assert await edge_pairs(a, b, c) == {(a, c), (c, b), (b, c)}
