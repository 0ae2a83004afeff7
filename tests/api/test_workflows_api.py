"""Workflow API tests: admin-only restructuring and conflict responses."""

import pytest
from httpx import AsyncClient


@pytest.fixture
async def workflow(client: AsyncClient, admin_headers) -> dict:
    response = await client.post(
        "/api/v1/workflows",
        headers=admin_headers,
        json={"name": "Release", "description": "Ship 1.0"},
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
async def task_ids(client: AsyncClient, alice, admin_headers) -> list[int]:
    """Three standalone tasks assigned to alice."""
    ids = []
    for title in ("A", "B", "C"):
        response = await client.post(
            "/api/v1/tasks",
            headers=admin_headers,
            json={
                "title": title,
                "description": f"{title} description",
                "status": "Pending",
                "assignee_id": alice.id,
            },
        )
        assert response.status_code == 201, response.text
        ids.append(response.json()["id"])
    return ids


async def _add(client: AsyncClient, headers, workflow_id: int, task_id: int, depends_on=None):
    return await client.post(
        f"/api/v1/workflows/{workflow_id}/tasks",
        headers=headers,
        json={"task_id": task_id, "depends_on_task_id": depends_on},
    )


@pytest.mark.requires_db
async def test_create_workflow_requires_admin(client: AsyncClient, alice_headers) -> None:
    response = await client.post(
        "/api/v1/workflows", headers=alice_headers, json={"name": "Nope"}
    )
    assert response.status_code == 403
    assert response.json()["details"] == {"resource": "workflow", "action": "create"}


@pytest.mark.requires_db
async def test_get_and_list_workflows(
    client: AsyncClient, workflow, task_ids, admin_headers, alice_headers
) -> None:
    await _add(client, admin_headers, workflow["id"], task_ids[0])
    response = await client.get(f"/api/v1/workflows/{workflow['id']}", headers=alice_headers)
    assert response.status_code == 200
    assert response.json()["task_ids"] == [task_ids[0]]

    response = await client.get("/api/v1/workflows", headers=alice_headers)
    assert [w["id"] for w in response.json()] == [workflow["id"]]


@pytest.mark.requires_db
async def test_add_task_and_cycle_conflict(
    client: AsyncClient, workflow, task_ids, admin_headers
) -> None:
    a, b, _ = task_ids
    assert (await _add(client, admin_headers, workflow["id"], a)).status_code == 200
    response = await _add(client, admin_headers, workflow["id"], b, depends_on=a)
    assert response.status_code == 200
    assert response.json()["workflow_id"] == workflow["id"]

    response = await _add(client, admin_headers, workflow["id"], a, depends_on=b)
    assert response.status_code == 409
    assert response.json()["error"] == "CYCLIC_DEPENDENCY"


@pytest.mark.requires_db
async def test_add_task_requires_admin(
    client: AsyncClient, workflow, task_ids, alice_headers
) -> None:
    response = await _add(client, alice_headers, workflow["id"], task_ids[0])
    assert response.status_code == 403


@pytest.mark.requires_db
async def test_add_task_from_other_workflow_is_409(
    client: AsyncClient, workflow, task_ids, admin_headers
) -> None:
    response = await client.post(
        "/api/v1/workflows", headers=admin_headers, json={"name": "Other"}
    )
    other = response.json()
    await _add(client, admin_headers, other["id"], task_ids[0])
    response = await _add(client, admin_headers, workflow["id"], task_ids[0])
    assert response.status_code == 409
    assert response.json()["error"] == "TASK_IN_ANOTHER_WORKFLOW"


@pytest.mark.requires_db
async def test_replace_task(client: AsyncClient, workflow, task_ids, admin_headers) -> None:
    a, b, c = task_ids
    await _add(client, admin_headers, workflow["id"], a)
    await _add(client, admin_headers, workflow["id"], b, depends_on=a)
    response = await client.put(
        f"/api/v1/workflows/{workflow['id']}/tasks/{b}",
        headers=admin_headers,
        json={"new_task_id": c},
    )
    assert response.status_code == 200
    assert response.json()["id"] == c

    response = await client.get(f"/api/v1/tasks/{c}/dependencies", headers=admin_headers)
    assert [(e["task_item_id"], e["dependent_task_item_id"]) for e in response.json()] == [
        (a, c)
    ]


@pytest.mark.requires_db
async def test_reorder_dependencies(client: AsyncClient, workflow, task_ids, admin_headers) -> None:
    a, b, c = task_ids
    for task_id in task_ids:
        await _add(client, admin_headers, workflow["id"], task_id)
    response = await client.put(
        f"/api/v1/workflows/{workflow['id']}/tasks/{a}/dependencies",
        headers=admin_headers,
        json={"new_order": [a, c]},
    )
    assert response.status_code == 200
    assert [(e["task_item_id"], e["dependent_task_item_id"]) for e in response.json()] == [
        (a, c)
    ]
    response = await client.get(f"/api/v1/workflows/{workflow['id']}", headers=admin_headers)
    assert response.json()["task_ids"] == [a, c]


@pytest.mark.requires_db
async def test_reorder_with_empty_order_is_422(
    client: AsyncClient, workflow, task_ids, admin_headers
) -> None:
    await _add(client, admin_headers, workflow["id"], task_ids[0])
    response = await client.put(
        f"/api/v1/workflows/{workflow['id']}/tasks/{task_ids[0]}/dependencies",
        headers=admin_headers,
        json={"new_order": []},
    )
    assert response.status_code == 422


@pytest.mark.requires_db
async def test_remove_task_from_workflow(
    client: AsyncClient, workflow, task_ids, admin_headers
) -> None:
    a, b, _ = task_ids
    await _add(client, admin_headers, workflow["id"], a)
    await _add(client, admin_headers, workflow["id"], b, depends_on=a)
    response = await client.delete(
        f"/api/v1/workflows/{workflow['id']}/tasks/{b}", headers=admin_headers
    )
    assert response.status_code == 200
    assert response.json() == {"workflow_id": workflow["id"], "evicted_task_ids": [b, a]}

    response = await client.delete(
        f"/api/v1/workflows/{workflow['id']}/tasks/{b}", headers=admin_headers
    )
    assert response.status_code == 409
    assert response.json()["error"] == "WORKFLOW_MISMATCH"


@pytest.mark.requires_db
async def test_delete_workflow(client: AsyncClient, workflow, task_ids, admin_headers) -> None:
    await _add(client, admin_headers, workflow["id"], task_ids[0])
    response = await client.delete(f"/api/v1/workflows/{workflow['id']}", headers=admin_headers)
    assert response.status_code == 204
    response = await client.get(f"/api/v1/workflows/{workflow['id']}", headers=admin_headers)
    assert response.status_code == 404
    response = await client.get(f"/api/v1/tasks/{task_ids[0]}", headers=admin_headers)
    assert response.json()["workflow_id"] is None
