import redis

from halal_bites.core.config import get_settings

redis_client = redis.StrictRedis.from_url(get_settings().REDIS_URL, decode_responses=True)
