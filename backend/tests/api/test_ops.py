import pytest

from app.settings import settings


@pytest.mark.asyncio
async def test_liveness(api_client):
	resp = await api_client.get("/health/live")
	assert resp.status_code == 200
	assert resp.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_readiness_with_healthy_backends(api_client, fake_conn):
	resp = await api_client.get("/health/ready")
	assert resp.status_code == 200
	checks = resp.json()["checks"]
	assert checks["redis"]["ok"] is True
	assert checks["postgres"]["ok"] is True


@pytest.mark.asyncio
async def test_metrics_requires_admin_token(api_client, monkeypatch):
	monkeypatch.setattr(settings, "obs_metrics_public", False)
	monkeypatch.setattr(settings, "obs_admin_token", "s3cret")
	denied = await api_client.get("/metrics")
	assert denied.status_code == 403
	allowed = await api_client.get("/metrics", headers={"X-Admin-Token": "s3cret"})
	assert allowed.status_code == 200
	assert "buddyfinder_matches_queries_total" in allowed.text


@pytest.mark.asyncio
async def test_request_id_is_echoed(api_client):
	resp = await api_client.get("/health/live", headers={"X-Request-Id": "req-123"})
	assert resp.headers["X-Request-Id"] == "req-123"
