import pytest

from app.domain.sports import service as sports_service
from app.domain.sports import user_sports
from app.domain.sports.exceptions import DuplicateSport, SportNotFound, UserSportNotFound
from app.domain.sports.schemas import SportOut, UserSportOut

HEADERS = {"X-User-Id": "4b1f3c1e-0000-0000-0000-000000000001"}


@pytest.mark.asyncio
async def test_list_sports_is_cacheable(api_client, monkeypatch):
	async def fake_list():
		return [SportOut(id=1, name="bieganie")]

	monkeypatch.setattr(sports_service, "list_sports", fake_list)
	resp = await api_client.get("/api/sports", headers=HEADERS)
	assert resp.status_code == 200
	assert resp.json() == [{"id": 1, "name": "bieganie"}]
	assert resp.headers["Cache-Control"] == "public, max-age=3600"


@pytest.mark.asyncio
async def test_list_sports_requires_auth(api_client):
	resp = await api_client.get("/api/sports")
	assert resp.status_code == 401


@pytest.mark.asyncio
async def test_add_sport_created(api_client, monkeypatch):
	async def fake_add(user_id, command):
		return UserSportOut(sport_id=command.sport_id, name="bieganie", parameters=command.parameters)

	monkeypatch.setattr(user_sports, "add_user_sport", fake_add)
	resp = await api_client.post(
		"/api/profiles/me/sports",
		json={"sport_id": 1, "parameters": {"dystans": 10}},
		headers=HEADERS,
	)
	assert resp.status_code == 201
	assert resp.json() == {"sport_id": 1, "name": "bieganie", "parameters": {"dystans": 10}, "custom_range_km": None}


@pytest.mark.asyncio
@pytest.mark.parametrize(
	"error, status, code",
	[(SportNotFound(9), 404, "NOT_FOUND"), (DuplicateSport(9), 400, "VALIDATION_ERROR")],
)
async def test_add_sport_domain_errors(api_client, monkeypatch, error, status, code):
	async def fake_add(user_id, command):
		raise error

	monkeypatch.setattr(user_sports, "add_user_sport", fake_add)
	resp = await api_client.post(
		"/api/profiles/me/sports",
		json={"sport_id": 9, "parameters": {"dystans": 10}},
		headers=HEADERS,
	)
	assert resp.status_code == status
	assert resp.json()["error"]["code"] == code
	assert resp.json()["error"]["message"] == error.message


@pytest.mark.asyncio
async def test_add_sport_rejects_empty_parameters(api_client):
	resp = await api_client.post("/api/profiles/me/sports", json={"sport_id": 1, "parameters": {}}, headers=HEADERS)
	assert resp.status_code == 400
	assert resp.json()["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_update_sport_parses_path_id(api_client, monkeypatch):
	seen = {}

	async def fake_update(user_id, sport_id, command):
		seen["sport_id"] = sport_id
		return UserSportOut(sport_id=sport_id, name="rolki", parameters={"styl": "szybki"}, custom_range_km=command.custom_range_km)

	monkeypatch.setattr(user_sports, "update_user_sport", fake_update)
	resp = await api_client.put("/api/profiles/me/sports/3abc", json={"custom_range_km": 30}, headers=HEADERS)
	assert resp.status_code == 200
	assert seen["sport_id"] == 3
	assert resp.json()["custom_range_km"] == 30


@pytest.mark.asyncio
async def test_update_sport_requires_a_field(api_client):
	resp = await api_client.put("/api/profiles/me/sports/3", json={}, headers=HEADERS)
	assert resp.status_code == 400


@pytest.mark.asyncio
@pytest.mark.parametrize("sport_id", ["0", "abc", "-2"])
async def test_invalid_sport_id(api_client, sport_id):
	resp = await api_client.delete(f"/api/profiles/me/sports/{sport_id}", headers=HEADERS)
	assert resp.status_code == 400
	assert resp.json()["error"]["details"][0]["path"] == ["sport_id"]


@pytest.mark.asyncio
async def test_update_missing_user_sport(api_client, monkeypatch):
	async def fake_update(user_id, sport_id, command):
		raise UserSportNotFound(sport_id)

	monkeypatch.setattr(user_sports, "update_user_sport", fake_update)
	resp = await api_client.put("/api/profiles/me/sports/4", json={"parameters": {"a": 1}}, headers=HEADERS)
	assert resp.status_code == 404


@pytest.mark.asyncio
async def test_delete_sport(api_client, monkeypatch):
	deleted = []

	async def fake_delete(user_id, sport_id):
		deleted.append(sport_id)

	monkeypatch.setattr(user_sports, "delete_user_sport", fake_delete)
	resp = await api_client.delete("/api/profiles/me/sports/2", headers=HEADERS)
	assert resp.status_code == 204
	assert resp.content == b""
	assert deleted == [2]


@pytest.mark.asyncio
async def test_delete_missing_sport(api_client, monkeypatch):
	async def fake_delete(user_id, sport_id):
		raise UserSportNotFound(sport_id)

	monkeypatch.setattr(user_sports, "delete_user_sport", fake_delete)
	resp = await api_client.delete("/api/profiles/me/sports/2", headers=HEADERS)
	assert resp.status_code == 404
	assert resp.json()["error"]["details"] == "SPORT_NOT_FOUND"
