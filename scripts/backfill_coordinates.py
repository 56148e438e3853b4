"""
Geocode restaurants that are missing latitude/longitude.

Rows without coordinates never show up in proximity search, so run this
after a geocoding outage. Nominatim asks for at most one request per
second, hence the delay.

Usage: python -m scripts.backfill_coordinates [--dry-run]
"""

import argparse
import time

from dotenv import load_dotenv

load_dotenv()

from halal_bites.core.config import get_settings  # noqa: E402
from halal_bites.repositories.restaurant import RestaurantRepository  # noqa: E402
from halal_bites.services.cache import CacheService  # noqa: E402
from halal_bites.services.geocoding import Geocoder  # noqa: E402
from halal_bites.services.listing import ListingService  # noqa: E402
from halal_bites.utils.redis_client import redis_client  # noqa: E402

RATE_LIMIT_DELAY = 1.0  # seconds between lookups


def backfill(repo, geocoder, listing, dry_run=False, delay=RATE_LIMIT_DELAY):
    rows = repo.list_missing_coordinates()
    print(f"Found {len(rows)} restaurants without coordinates")

    updated = 0
    for i, row in enumerate(rows, start=1):
        lat, lng = geocoder.geocode(row["address"])
        if lat is None:
            print(f"  {i}/{len(rows)} no match: {row['name']} ({row['address']})")
        else:
            print(f"  {i}/{len(rows)} {row['name']} -> {lat:.5f}, {lng:.5f}")
            if not dry_run:
                repo.update(row["id"], {"latitude": lat, "longitude": lng})
            updated += 1
        if i < len(rows):
            time.sleep(delay)

    if updated and not dry_run:
        listing.invalidate()
    return updated


def main():
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--dry-run", action="store_true", help="geocode but do not write")
    args = parser.parse_args()

    settings = get_settings()
    repo = RestaurantRepository()
    listing = ListingService(repo, CacheService(redis_client), settings.RESTAURANTS_CACHE_TTL)

    updated = backfill(repo, Geocoder.from_settings(settings), listing, dry_run=args.dry_run)
    print(f"Done. {updated} restaurants geocoded{' (dry run)' if args.dry_run else ''}.")


if __name__ == "__main__":
    main()
