import pytest

from halal_bites.core.exceptions import CacheUnavailable


def test_get_missing_key_returns_none(cache):
    assert cache.get("nope") is None


def test_set_then_get(cache, fake_redis):
    assert cache.set("k", [{"id": "1", "distance": 1.5}], ttl=30)
    assert cache.get("k") == [{"id": "1", "distance": 1.5}]
    assert fake_redis.ttls["k"] == 30


def test_default_ttl(cache, fake_redis):
    cache.set("k", {"a": 1})
    assert fake_redis.ttls["k"] == 60


def test_undecodable_entry_is_a_miss(cache, fake_redis):
    fake_redis.store["k"] = "{not json"
    assert cache.get("k") is None


def test_read_outage_raises(cache, fake_redis):
    fake_redis.down = True
    with pytest.raises(CacheUnavailable):
        cache.get("k")


def test_write_and_delete_outage_are_reported(cache, fake_redis):
    fake_redis.down = True
    assert cache.set("k", 1) is False
    assert cache.delete("k") is False
    assert cache.ping() is False


def test_delete_many(cache, fake_redis):
    cache.set("a", 1)
    cache.set("b", 2)
    cache.set("c", 3)

    assert cache.delete("a", "b")

    assert set(fake_redis.store) == {"c"}
