import sys
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from fakeredis.aioredis import FakeRedis

# Ensure backend package is importable when tests run from repo root
BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
	sys.path.insert(0, str(BACKEND_ROOT))

from app.infra import postgres
from app.main import app
from app.settings import settings


class FakeConnection:
	"""Records queries and replays canned results in call order."""

	def __init__(self) -> None:
		self.calls: list[tuple[str, str, tuple]] = []
		self.results: dict[str, list] = {"fetch": [], "fetchrow": [], "fetchval": [], "execute": []}

	def queue(self, method: str, *values) -> None:
		self.results[method].extend(values)

	def _next(self, method: str, query: str, args: tuple, default=None):
		self.calls.append((method, " ".join(query.split()), args))
		queued = self.results[method]
		value = queued.pop(0) if queued else default
		if isinstance(value, BaseException):
			raise value
		return value

	async def fetch(self, query: str, *args):
		return self._next("fetch", query, args, default=[])

	async def fetchrow(self, query: str, *args):
		return self._next("fetchrow", query, args)

	async def fetchval(self, query: str, *args):
		return self._next("fetchval", query, args)

	async def execute(self, query: str, *args):
		return self._next("execute", query, args, default="OK")

	def transaction(self):
		return _NullContext(None)


class _NullContext:
	def __init__(self, value) -> None:
		self._value = value

	async def __aenter__(self):
		return self._value

	async def __aexit__(self, exc_type, exc, tb):
		return False


class FakePool:
	def __init__(self, conn: FakeConnection) -> None:
		self.conn = conn

	def acquire(self):
		return _NullContext(self.conn)


@pytest_asyncio.fixture(autouse=True)
async def fake_redis():
	from app.infra.redis import redis_client, set_redis_client
	original = redis_client.client
	client = FakeRedis(decode_responses=True)
	set_redis_client(client)
	try:
		yield client
	finally:
		set_redis_client(original)
		await client.flushall()


@pytest.fixture(autouse=True)
def patch_postgres(monkeypatch):
	async def _noop():
		return None

	monkeypatch.setattr(postgres, "init_pool", _noop)
	monkeypatch.setattr(postgres, "close_pool", _noop)


@pytest.fixture
def fake_conn(monkeypatch) -> FakeConnection:
	"""Route ``get_pool()`` to an in-memory connection double."""
	conn = FakeConnection()
	pool = FakePool(conn)

	async def _get_pool():
		return pool

	monkeypatch.setattr(postgres, "get_pool", _get_pool)
	for module in (
		"app.domain.matching.gateway",
		"app.domain.profiles.service",
		"app.domain.sports.service",
		"app.domain.sports.user_sports",
	):
		monkeypatch.setattr(f"{module}.get_pool", _get_pool)
	return conn


@pytest.fixture(autouse=True)
def force_test_settings():
	"""Ensure a consistent test environment.

	API tests authenticate via the X-User-Id header, which is only accepted in
	dev mode.
	"""
	original_env = settings.environment
	settings.environment = "dev"
	try:
		yield
	finally:
		settings.environment = original_env


@pytest.fixture(autouse=True)
def clear_overrides():
	yield
	app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def api_client():
	transport = ASGITransport(app=app)
	async with AsyncClient(transport=transport, base_url="http://testserver") as client:
		yield client
