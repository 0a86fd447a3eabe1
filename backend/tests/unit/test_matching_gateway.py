import json

import pytest

from app.domain.matching.exceptions import IncompleteProfile, InvalidArgument, MalformedUpstreamResponse
from app.domain.matching.gateway import MatchesService, call_matching_function, error_code


def _user(idx: int) -> dict:
	return {
		"id": f"user-{idx}",
		"username": f"user{idx}",
		"display_name": None,
		"email": f"user{idx}@example.com",
		"social_links": None,
		"distance_km": float(idx),
		"sports": [],
	}


class DatabaseError(Exception):
	def __init__(self, message: str, sqlstate: str | None = None, code: str | None = None) -> None:
		super().__init__(message)
		self.sqlstate = sqlstate
		self.code = code


def _returning(payload):
	calls = []

	async def _fn(user_id, limit, offset):
		calls.append((user_id, limit, offset))
		if isinstance(payload, BaseException):
			raise payload
		return payload

	_fn.calls = calls
	return _fn


@pytest.mark.asyncio
async def test_total_of_three_returns_three_and_no_next_page():
	fn = _returning({"matched_users": [_user(1), _user(2), _user(3)], "total_count": 3})
	page = await MatchesService(fn).get_matches("me", 20, 0)
	assert len(page.data) == 3
	assert page.pagination.total == 3
	assert page.pagination.has_next_page is False
	assert fn.calls == [("me", 20, 0)]


@pytest.mark.asyncio
async def test_window_is_passed_through_unchanged():
	fn = _returning({"matched_users": [_user(5)], "total_count": 9})
	page = await MatchesService(fn).get_matches("me", 1, 4)
	assert fn.calls == [("me", 1, 4)]
	assert (page.pagination.limit, page.pagination.offset) == (1, 4)
	assert page.pagination.has_next_page is True


@pytest.mark.asyncio
@pytest.mark.parametrize(
	"exc",
	[DatabaseError("no location", sqlstate="PT400"), DatabaseError("no location", code="PGRST400")],
)
async def test_incomplete_profile_code_is_recognised(exc):
	with pytest.raises(IncompleteProfile):
		await MatchesService(_returning(exc)).get_matches("me")


@pytest.mark.asyncio
async def test_other_database_errors_propagate():
	exc = DatabaseError("boom", sqlstate="42P01")
	with pytest.raises(DatabaseError):
		await MatchesService(_returning(exc)).get_matches("me")


@pytest.mark.asyncio
async def test_empty_user_id_is_rejected_before_calling():
	fn = _returning({"matched_users": [], "total_count": 0})
	with pytest.raises(InvalidArgument):
		await MatchesService(fn).get_matches("")
	assert fn.calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
	"payload",
	[
		None,
		"nope",
		[],
		{"matched_users": []},
		{"matched_users": None, "total_count": 0},
		{"matched_users": [], "total_count": -1},
		{"matched_users": [], "total_count": 1.5},
		{"matched_users": [{"id": "x", "distance_km": -2}], "total_count": 1},
	],
)
async def test_malformed_payloads_are_rejected(payload):
	with pytest.raises(MalformedUpstreamResponse):
		await MatchesService(_returning(payload)).get_matches("me")


@pytest.mark.asyncio
async def test_single_row_result_is_unwrapped():
	fn = _returning([{"matched_users": [_user(1)], "total_count": 1}])
	page = await MatchesService(fn).get_matches("me")
	assert [user.id for user in page.data] == ["user-1"]
	assert page.data[0].social_links == {}
	assert page.data[0].display_name == "user1"


@pytest.mark.asyncio
async def test_overflowing_page_is_truncated_to_limit():
	fn = _returning({"matched_users": [_user(1), _user(2), _user(3)], "total_count": 10})
	page = await MatchesService(fn).get_matches("me", 2, 0)
	assert [user.id for user in page.data] == ["user-1", "user-2"]


@pytest.mark.asyncio
async def test_empty_page_past_the_end():
	fn = _returning({"matched_users": [], "total_count": 3})
	page = await MatchesService(fn).get_matches("me", 20, 40)
	assert page.data == []
	assert page.pagination.total == 3


@pytest.mark.asyncio
async def test_call_matching_function_decodes_text_payload(fake_conn):
	fake_conn.queue("fetchval", json.dumps({"matched_users": [], "total_count": 0}))
	result = await call_matching_function("4b1f3c1e-0000-0000-0000-000000000001", 20, 0)
	assert result == {"matched_users": [], "total_count": 0}
	method, query, args = fake_conn.calls[0]
	assert method == "fetchval"
	assert "get_matches_for_user" in query
	assert args == ("4b1f3c1e-0000-0000-0000-000000000001", 20, 0)


def test_error_code_prefers_sqlstate():
	assert error_code(DatabaseError("x", sqlstate="PT400", code="other")) == "PT400"
	assert error_code(ValueError("x")) is None
