"""Smoke tests for health and app wiring."""

from httpx import AsyncClient


async def test_health_returns_ok(client: AsyncClient) -> None:
    """GET /api/v1/health returns 200 and status ok without authentication."""
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    data = response.json()
    assert data.get("status") == "ok"
    assert data.get("version") == "1.0.0"


async def test_request_id_is_echoed(client: AsyncClient) -> None:
    """A safe client X-Request-ID is returned unchanged on the response."""
    response = await client.get("/api/v1/health", headers={"X-Request-ID": "trace-123"})
    assert response.headers.get("X-Request-ID") == "trace-123"


async def test_request_id_generated_when_missing(client: AsyncClient) -> None:
    response = await client.get("/api/v1/health")
    assert len(response.headers.get("X-Request-ID", "")) == 36


async def test_unknown_route_returns_json_404(client: AsyncClient) -> None:
    response = await client.get("/api/v1/nope")
    assert response.status_code == 404
    assert response.json()["error"] == "HTTP_ERROR"
