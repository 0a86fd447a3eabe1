import pytest
from starlette.datastructures import QueryParams

from app.api.pagination import first_query_value, matches_window_from_query, parse_int_prefix, validate_matches_query
from app.domain.matching.exceptions import ValidationError


def test_defaults_when_absent_or_empty():
	window = validate_matches_query()
	assert (window.limit, window.offset) == (20, 0)
	window = validate_matches_query("", "")
	assert (window.limit, window.offset) == (20, 0)


def test_unparseable_values_fall_back_to_defaults():
	window = validate_matches_query("abc", "xyz")
	assert (window.limit, window.offset) == (20, 0)


@pytest.mark.parametrize(
	"raw, expected",
	[("10.5", 10), (" 7 ", 7), ("12abc", 12), ("+5", 5), ("100", 100), ("1", 1)],
)
def test_leading_integer_is_used(raw, expected):
	assert validate_matches_query(raw, None).limit == expected


def test_parse_int_prefix_returns_none_without_digits():
	assert parse_int_prefix(None) is None
	assert parse_int_prefix("abc") is None
	assert parse_int_prefix("-3x") == -3


@pytest.mark.parametrize(
	"limit, offset, field, constraint",
	[
		("0", None, "limit", "min"),
		("-5", None, "limit", "min"),
		("101", None, "limit", "max"),
		(None, "-1", "offset", "min"),
	],
)
def test_out_of_range_values_are_rejected(limit, offset, field, constraint):
	with pytest.raises(ValidationError) as exc_info:
		validate_matches_query(limit, offset)
	assert exc_info.value.field == field
	assert exc_info.value.constraint == constraint
	details = exc_info.value.to_details()
	assert details[0]["path"] == [field]


def test_limit_max_message_names_the_bound():
	with pytest.raises(ValidationError) as exc_info:
		validate_matches_query("500")
	assert exc_info.value.message == "Maximum limit is 100 items per page"


@pytest.mark.parametrize("limit, offset", [("1", "0"), ("20", "40"), ("100", "999"), (None, None)])
def test_validation_is_idempotent(limit, offset):
	first = validate_matches_query(limit, offset)
	second = validate_matches_query(first.limit, first.offset)
	assert second == first


def test_first_occurrence_of_duplicate_key_wins():
	params = QueryParams("limit=5&limit=50&offset=10&offset=0")
	assert first_query_value(params, "limit") == "5"
	window = matches_window_from_query(params)
	assert (window.limit, window.offset) == (5, 10)


def test_plain_mapping_is_accepted():
	window = matches_window_from_query({"limit": "3"})
	assert (window.limit, window.offset) == (3, 0)


def test_offset_beyond_int4_is_rejected():
	with pytest.raises(ValidationError) as exc_info:
		validate_matches_query(None, "99999999999")
	assert exc_info.value.field == "offset"
	assert exc_info.value.constraint == "max"
	assert validate_matches_query(None, str(2_147_483_647)).offset == 2_147_483_647
