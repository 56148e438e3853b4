"""
Drop the cached restaurant listings so the next request reads Postgres.

Usage: python -m scripts.clear_listing_cache
"""

import sys

from dotenv import load_dotenv

load_dotenv()

from halal_bites.services.cache import CacheService  # noqa: E402
from halal_bites.services.listing import LISTING_CACHE_KEYS  # noqa: E402
from halal_bites.utils.redis_client import redis_client  # noqa: E402


def main() -> int:
    cache = CacheService(redis_client)
    if not cache.delete(*LISTING_CACHE_KEYS):
        print("ERROR: could not clear listing cache (is Redis reachable?)")
        return 1
    print(f"Cleared listing cache keys: {', '.join(LISTING_CACHE_KEYS)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
