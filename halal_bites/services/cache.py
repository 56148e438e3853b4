# halal_bites/services/cache.py

from typing import Any, Optional
import json
import logging

import redis

from halal_bites.core.exceptions import CacheUnavailable

logger = logging.getLogger(__name__)


class CacheService:
    """
    JSON read-through cache over a Redis client.

    Reads raise `CacheUnavailable` so callers can tell a cache outage
    from a miss. Writes and deletes are best-effort.
    """

    def __init__(self, client):
        self.client = client

    def get(self, key: str) -> Optional[Any]:
        try:
            value = self.client.get(key)
        except redis.RedisError as exc:
            raise CacheUnavailable(f"cache read failed for {key}") from exc

        if value is None:
            return None
        try:
            return json.loads(value)
        except ValueError:
            logger.warning("Discarding undecodable cache entry %s", key)
            return None

    def set(self, key: str, value: Any, ttl: int = 60) -> bool:
        try:
            self.client.setex(key, ttl, json.dumps(value, default=str))
            return True
        except redis.RedisError:
            logger.warning("Cache write failed for %s", key, exc_info=True)
            return False

    def delete(self, *keys: str) -> bool:
        try:
            self.client.delete(*keys)
            return True
        except redis.RedisError:
            logger.warning("Cache delete failed for %s", ", ".join(keys), exc_info=True)
            return False

    def ping(self) -> bool:
        try:
            return bool(self.client.ping())
        except redis.RedisError:
            return False
