"""Dependency graph: edge value object and pure edge-set logic.

An edge (task_item_id, dependent_task_item_id) reads "task_item_id depends on
dependent_task_item_id": the dependent_task_item_id task must complete first.

Nothing here touches storage; services load the relevant edges through the
unit of work and use these functions to decide what to write.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class DependencyEdge:
    """Directed dependency edge between two tasks of the same workflow."""

    task_item_id: int
    dependent_task_item_id: int
    id: int | None = None

    def same_pair(self, task_item_id: int, dependent_task_item_id: int) -> bool:
        """Return whether this edge connects exactly the given (from, to) pair."""
        return (
            self.task_item_id == task_item_id
            and self.dependent_task_item_id == dependent_task_item_id
        )


def is_direct_reversal(
    edges: Iterable[DependencyEdge],
    task_item_id: int,
    dependent_task_item_id: int,
) -> bool:
    """Return True if inserting (task_item_id -> dependent_task_item_id) closes a cycle.

    Only the immediate reverse edge (dependent_task_item_id -> task_item_id) is
    looked for, so two-node cycles are caught while longer ones (A->B->C->A)
    are not. A self-edge is always reported as a cycle.
    """
    if task_item_id == dependent_task_item_id:
        return True
    return any(e.same_pair(dependent_task_item_id, task_item_id) for e in edges)


def linear_chain(order: Sequence[int]) -> list[tuple[int, int]]:
    """Return consecutive (current, next) pairs: each task depends on the one after it."""
    return [(order[i], order[i + 1]) for i in range(len(order) - 1)]


def dependencies_of(edges: Iterable[DependencyEdge], task_id: int) -> list[int]:
    """Return ids of the tasks that task_id depends on."""
    return [e.dependent_task_item_id for e in edges if e.task_item_id == task_id]


def dependents_of(edges: Iterable[DependencyEdge], task_id: int) -> list[int]:
    """Return ids of the tasks that depend on task_id (deduplicated, in edge order)."""
    seen: dict[int, None] = {}
    for e in edges:
        if e.dependent_task_item_id == task_id:
            seen.setdefault(e.task_item_id, None)
    return list(seen)


def has_other_dependencies(
    edges: Iterable[DependencyEdge], task_id: int, excluding: int
) -> bool:
    """Return whether task_id depends on anything besides `excluding`."""
    return any(dep != excluding for dep in dependencies_of(edges, task_id))
