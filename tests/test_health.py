"""Smoke tests for health and app wiring."""

from httpx import AsyncClient


async def test_health_returns_ok(client: AsyncClient) -> None:
    """GET /api/v1/health returns 200, status ok and the app version."""
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    data = response.json()
    assert data.get("status") == "ok"
    assert data.get("version") == "1.0.0"


async def test_ready_without_database_returns_503(client: AsyncClient) -> None:
    """GET /api/v1/health/ready with no DATABASE_URL reports not ready."""
    response = await client.get("/api/v1/health/ready")
    assert response.status_code == 503
    assert response.json() == {"status": "not_ready", "message": "Database not configured"}


async def test_ready_with_database_returns_200(store_client: AsyncClient) -> None:
    """GET /api/v1/health/ready answers ok once the SQL store responds."""
    response = await store_client.get("/api/v1/health/ready")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


async def test_lifespan_wires_activity_log_pipeline(application) -> None:
    """Startup puts the dispatcher and interceptor on app.state."""
    assert application.state.activity_log_dispatcher.mode == "background"
    assert application.state.mutation_interceptor is not None
    assert not application.state.activity_log_retention.enabled
