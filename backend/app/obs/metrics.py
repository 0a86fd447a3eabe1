"""Central registry for Prometheus metrics used across the backend."""

from __future__ import annotations

from prometheus_client import Counter, Gauge, Histogram, Summary


REQUEST_COUNTER = Counter(
	"buddyfinder_http_requests_total",
	"Total HTTP requests processed",
	["route", "method", "status"],
)

REQUEST_LATENCY = Histogram(
	"buddyfinder_http_request_duration_seconds",
	"HTTP request latency in seconds",
	["route", "method"],
	buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 5.0),
)

MATCHES_QUERIES = Counter(
	"buddyfinder_matches_queries_total",
	"Matching function invocations by outcome",
	["outcome"],
)

MATCHES_RESULTS = Summary(
	"buddyfinder_matches_results",
	"Matched users returned per page",
)

PROFILE_UPDATE = Counter(
	"buddyfinder_profile_updates_total",
	"Profile updates applied",
)

USER_SPORTS_CHANGES = Counter(
	"buddyfinder_user_sports_changes_total",
	"User sport mutations",
	["action"],
)

SPORTS_CACHE = Counter(
	"buddyfinder_sports_cache_total",
	"Sports taxonomy cache lookups",
	["result"],
)

REDIS_UP = Gauge("buddyfinder_redis_up", "Redis availability (1=up,0=down)")
REDIS_LATENCY = Summary("buddyfinder_redis_latency_seconds", "Redis ping latency (seconds)")

POSTGRES_UP = Gauge("buddyfinder_postgres_up", "Postgres availability (1=up,0=down)")
POSTGRES_LATENCY = Summary("buddyfinder_postgres_latency_seconds", "Postgres ping latency (seconds)")


def observe_request(route: str, method: str, status: int, elapsed_seconds: float) -> None:
	REQUEST_COUNTER.labels(route=route, method=method, status=str(status)).inc()
	REQUEST_LATENCY.labels(route=route, method=method).observe(elapsed_seconds)


def inc_matches_query(outcome: str) -> None:
	MATCHES_QUERIES.labels(outcome=outcome).inc()


def observe_matches_results(count: int) -> None:
	MATCHES_RESULTS.observe(count)


def inc_profile_update() -> None:
	PROFILE_UPDATE.inc()


def inc_user_sport_change(action: str) -> None:
	USER_SPORTS_CHANGES.labels(action=action).inc()


def inc_sports_cache(result: str) -> None:
	SPORTS_CACHE.labels(result=result).inc()


def mark_redis(ok: bool, *, latency_seconds: float | None = None) -> None:
	REDIS_UP.set(1 if ok else 0)
	if ok and latency_seconds is not None:
		REDIS_LATENCY.observe(latency_seconds)


def mark_postgres(ok: bool, *, latency_seconds: float | None = None) -> None:
	POSTGRES_UP.set(1 if ok else 0)
	if ok and latency_seconds is not None:
		POSTGRES_LATENCY.observe(latency_seconds)
