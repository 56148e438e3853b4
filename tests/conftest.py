from __future__ import annotations

from datetime import datetime, timedelta, timezone
import hashlib
import itertools
import uuid

import pytest
import redis
from fastapi.testclient import TestClient

from halal_bites.core.config import Settings, get_settings
from halal_bites.core.dependencies import (
    get_cache_service,
    get_comment_repo,
    get_geocoder,
    get_restaurant_repo,
)
from halal_bites.core.exceptions import StoreUnavailable
from halal_bites.core.rate_limit import limiter
from halal_bites.main import app
from halal_bites.services.cache import CacheService

ADMIN_EMAIL = "admin@halalbites.test"
ADMIN_PASSWORD = "bismillah"

ATLANTA = (33.7490, -84.3880)

_EPOCH = datetime(2024, 1, 1, tzinfo=timezone.utc)


# ── Fakes ────────────────────────────────────────────────────────────────


class FakeRedis:
    """Just enough of redis.StrictRedis for CacheService."""

    def __init__(self):
        self.store: dict[str, str] = {}
        self.ttls: dict[str, int] = {}
        self.down = False

    def _check(self):
        if self.down:
            raise redis.ConnectionError("redis is down")

    def get(self, key):
        self._check()
        return self.store.get(key)

    def setex(self, key, ttl, value):
        self._check()
        self.store[key] = value
        self.ttls[key] = ttl
        return True

    def delete(self, *keys):
        self._check()
        return sum(1 for k in keys if self.store.pop(k, None) is not None)

    def ping(self):
        self._check()
        return True


def make_row(**overrides) -> dict:
    row = {
        "id": str(uuid.uuid4()),
        "name": "Restaurant",
        "cuisine_type": "MIDDLE_EASTERN",
        "address": "1 Peachtree St, Atlanta, GA",
        "description": "",
        "price_range": "MEDIUM",
        "has_prayer_room": False,
        "has_outdoor_seating": False,
        "has_high_chair": False,
        "serves_alcohol": False,
        "is_fully_halal": True,
        "is_zabiha": False,
        "is_partially_halal": False,
        "partially_halal_chicken": False,
        "partially_halal_lamb": False,
        "partially_halal_beef": False,
        "partially_halal_goat": False,
        "image_url": None,
        "zabiha_chicken": False,
        "zabiha_lamb": False,
        "zabiha_beef": False,
        "zabiha_goat": False,
        "zabiha_verified": None,
        "zabiha_verified_by": None,
        "created_at": _EPOCH,
        "updated_at": _EPOCH,
        "brand_id": None,
        "latitude": None,
        "longitude": None,
        "is_featured": False,
    }
    row.update(overrides)
    return row


class FakeCommentRepo:
    def __init__(self):
        self.rows: list[dict] = []
        self._clock = itertools.count(1)

    def list_for_restaurant(self, restaurant_id):
        rows = [r for r in self.rows if r["restaurant_id"] == restaurant_id]
        return sorted(rows, key=lambda r: r["created_at"], reverse=True)

    def create(self, data):
        row = {
            "id": str(uuid.uuid4()),
            "image_url": None,
            "created_at": _EPOCH + timedelta(minutes=next(self._clock)),
            **data,
        }
        self.rows.append(row)
        return dict(row)

    def delete(self, comment_id):
        for row in self.rows:
            if row["id"] == comment_id:
                self.rows.remove(row)
                return dict(row)
        return None

    def delete_for_restaurant(self, restaurant_id):
        self.rows = [r for r in self.rows if r["restaurant_id"] != restaurant_id]

    def count_for(self, restaurant_id):
        return sum(1 for r in self.rows if r["restaurant_id"] == restaurant_id)

    def count(self):
        return len(self.rows)


class FakeRestaurantRepo:
    """In-memory RestaurantRepository that counts listing queries."""

    def __init__(self, comments: FakeCommentRepo):
        self.rows: list[dict] = []
        self.comments = comments
        self.list_calls = 0
        self.fail = False
        self._clock = itertools.count(1)

    def add(self, **overrides) -> dict:
        overrides.setdefault("created_at", _EPOCH + timedelta(minutes=next(self._clock)))
        row = make_row(**overrides)
        self.rows.append(row)
        return row

    def _with_count(self, row):
        return {**row, "comment_count": self.comments.count_for(row["id"])}

    def _check(self):
        if self.fail:
            raise StoreUnavailable("restaurants query failed: connection refused")

    def list_with_comment_counts(self, featured=False):
        self.list_calls += 1
        self._check()
        rows = [r for r in self.rows if r["is_featured"] or not featured]
        rows.sort(key=lambda r: r["created_at"], reverse=True)
        return [self._with_count(r) for r in rows]

    def list_missing_coordinates(self):
        self._check()
        return [r for r in self.rows if r["latitude"] is None or r["longitude"] is None]

    def get(self, restaurant_id):
        self._check()
        for row in self.rows:
            if row["id"] == restaurant_id:
                return self._with_count(row)
        return None

    def find_by_name_or_address(self, name, address, exclude_id=None):
        self._check()
        for row in self.rows:
            if row["id"] == exclude_id:
                continue
            if row["name"] == name or row["address"] == address:
                return row
        return None

    def create(self, data):
        self._check()
        row = self.add(**data)
        return self._with_count(row)

    def update(self, restaurant_id, data):
        self._check()
        for row in self.rows:
            if row["id"] == restaurant_id:
                row.update(data)
                return self._with_count(row)
        return None

    def delete(self, restaurant_id):
        self._check()
        before = len(self.rows)
        self.rows = [r for r in self.rows if r["id"] != restaurant_id]
        if len(self.rows) == before:
            return False
        self.comments.delete_for_restaurant(restaurant_id)
        return True

    def count(self):
        self._check()
        return len(self.rows)


class FakeGeocoder:
    def __init__(self, known: dict | None = None):
        self.known = known or {}
        self.calls: list[str] = []

    def geocode(self, address):
        self.calls.append(address)
        return self.known.get(address, (None, None))


# ── Fixtures ─────────────────────────────────────────────────────────────


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def cache(fake_redis):
    return CacheService(fake_redis)


@pytest.fixture
def comment_repo():
    return FakeCommentRepo()


@pytest.fixture
def restaurant_repo(comment_repo):
    return FakeRestaurantRepo(comment_repo)


@pytest.fixture
def geocoder():
    return FakeGeocoder()


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        ENVIRONMENT="test",
        ADMIN_USERS=f"someone@else.test, {ADMIN_EMAIL}",
        ADMIN_PASSWORD_HASHES=",".join([
            hashlib.sha256(b"other-password").hexdigest(),
            hashlib.sha256(ADMIN_PASSWORD.encode()).hexdigest(),
        ]),
        ADMIN_SESSION_SECRET="test-secret",
    )


@pytest.fixture
def client(fake_redis, restaurant_repo, comment_repo, geocoder, settings):
    app.dependency_overrides[get_cache_service] = lambda: CacheService(fake_redis)
    app.dependency_overrides[get_restaurant_repo] = lambda: restaurant_repo
    app.dependency_overrides[get_comment_repo] = lambda: comment_repo
    app.dependency_overrides[get_geocoder] = lambda: geocoder
    app.dependency_overrides[get_settings] = lambda: settings
    limiter.enabled = False
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
        limiter.enabled = True


def login_admin(c):
    resp = c.post("/api/admin-login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert resp.status_code == 200
    return resp
