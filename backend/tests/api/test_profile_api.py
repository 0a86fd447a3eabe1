import pytest

from app.domain.profiles import service as profile_service
from app.domain.profiles.exceptions import ProfileNotFound
from app.domain.profiles.schemas import ProfileOut

USER_ID = "4b1f3c1e-0000-0000-0000-000000000001"
HEADERS = {"X-User-Id": USER_ID}


def _profile(**overrides) -> ProfileOut:
	data = {
		"id": USER_ID,
		"username": "ola",
		"display_name": "Ola",
		"location": {"type": "Point", "coordinates": [21.01, 52.23]},
		"default_range_km": 10,
		"social_links": {},
	}
	data.update(overrides)
	return ProfileOut(**data)


@pytest.mark.asyncio
async def test_get_profile(api_client, monkeypatch):
	async def fake_get(user_id):
		assert user_id == USER_ID
		return _profile()

	monkeypatch.setattr(profile_service, "get_profile", fake_get)
	resp = await api_client.get("/api/profiles/me", headers=HEADERS)
	assert resp.status_code == 200
	body = resp.json()
	assert body["location"] == {"type": "Point", "coordinates": [21.01, 52.23]}
	assert body["default_range_km"] == 10


@pytest.mark.asyncio
async def test_get_missing_profile(api_client, monkeypatch):
	async def fake_get(user_id):
		return None

	monkeypatch.setattr(profile_service, "get_profile", fake_get)
	resp = await api_client.get("/api/profiles/me", headers=HEADERS)
	assert resp.status_code == 404
	assert resp.json()["error"] == {"code": "NOT_FOUND", "message": "Profile not found", "details": "PROFILE_NOT_FOUND"}


@pytest.mark.asyncio
async def test_patch_profile(api_client, monkeypatch):
	received = {}

	async def fake_update(user_id, command):
		received["fields"] = command.model_dump(exclude_unset=True)
		return _profile(default_range_km=command.default_range_km)

	monkeypatch.setattr(profile_service, "update_profile", fake_update)
	resp = await api_client.patch("/api/profiles/me", json={"default_range_km": 25}, headers=HEADERS)
	assert resp.status_code == 200
	assert resp.json()["default_range_km"] == 25
	assert received["fields"] == {"default_range_km": 25}


@pytest.mark.asyncio
async def test_patch_profile_rejects_unknown_fields(api_client):
	resp = await api_client.patch("/api/profiles/me", json={"avatar": "x"}, headers=HEADERS)
	assert resp.status_code == 400
	body = resp.json()
	assert body["error"]["code"] == "VALIDATION_ERROR"
	assert body["error"]["message"] == "Invalid request data"
	assert body["error"]["details"][0]["path"][-1] == "avatar"


@pytest.mark.asyncio
async def test_patch_missing_profile(api_client, monkeypatch):
	async def fake_update(user_id, command):
		raise ProfileNotFound()

	monkeypatch.setattr(profile_service, "update_profile", fake_update)
	resp = await api_client.patch("/api/profiles/me", json={"display_name": "Ola K"}, headers=HEADERS)
	assert resp.status_code == 404
