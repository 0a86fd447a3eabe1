"""Sports taxonomy with a Redis read-through cache."""

from __future__ import annotations

import json
import logging
from typing import List

from app.domain.sports.schemas import SportOut
from app.infra.postgres import get_pool
from app.infra.redis import redis_client
from app.obs import metrics as obs_metrics
from app.settings import settings

logger = logging.getLogger(__name__)

SPORTS_CACHE_KEY = "sports:all"


async def _load_sports() -> List[SportOut]:
	pool = await get_pool()
	async with pool.acquire() as conn:
		rows = await conn.fetch("SELECT id, name FROM sports ORDER BY id ASC")
	return [SportOut(id=row["id"], name=row["name"]) for row in rows]


async def list_sports() -> List[SportOut]:
	"""Return every sport; the list is static so it is cached for an hour."""
	cached = await redis_client.get(SPORTS_CACHE_KEY)
	if cached:
		if isinstance(cached, bytes):
			cached = cached.decode("utf-8")
		obs_metrics.inc_sports_cache("hit")
		return [SportOut(**item) for item in json.loads(cached)]
	obs_metrics.inc_sports_cache("miss")
	sports = await _load_sports()
	await redis_client.set(
		SPORTS_CACHE_KEY,
		json.dumps([sport.model_dump(mode="json") for sport in sports]),
		ex=settings.sports_cache_ttl_seconds,
	)
	logger.info("sports_cache_refreshed", extra={"count": len(sports)})
	return sports


