"""
Integration tests for the Redis token store.

Requires Redis running on localhost:6379
Skip tests if Redis is not available.
"""

import pytest
import redis

from admin_auth.adapters import RedisTokenStore
from admin_auth.domain.admin import SysAdmin


@pytest.fixture
def redis_store():
    """Create Redis token store (skip if Redis unavailable)."""
    r = redis.Redis(host="localhost", port=6379, decode_responses=True)
    try:
        r.ping()
    except redis.exceptions.ConnectionError:
        pytest.skip("Redis not available")

    yield RedisTokenStore(redis_client=r, prefix="test:admin:auth:")

    for key in r.scan_iter("test:admin:auth:*"):
        r.delete(key)


@pytest.fixture
def admin():
    return SysAdmin(id=42, username="alice", roles=["auditor"], permissions=["log:read"])


class TestRedisTokenStore:
    """Test Redis token storage."""

    def test_save_and_load(self, redis_store, admin):
        redis_store.save("tok-a", admin, ttl=60)

        loaded = redis_store.load("tok-a")
        assert loaded.id == 42
        assert loaded.username == "alice"
        assert loaded.permissions == ["log:read"]

    def test_load_missing(self, redis_store):
        assert redis_store.load("nope") is None

    def test_replace_keeps_ttl(self, redis_store, admin):
        redis_store.save("tok-a", admin, ttl=60)

        admin.real_name = "Alice"
        assert redis_store.replace("tok-a", admin) is True
        assert redis_store.load("tok-a").real_name == "Alice"
        assert 0 < redis_store._get_redis().ttl(redis_store._key("tok-a")) <= 60

        assert redis_store.replace("missing", admin) is False

    def test_delete(self, redis_store, admin):
        redis_store.save("tok-a", admin, ttl=60)

        assert redis_store.delete("tok-a") is True
        assert redis_store.load("tok-a") is None
        assert redis_store.delete("tok-a") is False
        assert redis_store.tokens_for_admin(42) == []

    def test_tokens_for_admin(self, redis_store, admin):
        redis_store.save("tok-a", admin, ttl=60)
        redis_store.save("tok-b", admin, ttl=60)
        redis_store.save("tok-c", SysAdmin(id=7, username="bob"), ttl=60)

        assert sorted(redis_store.tokens_for_admin(42)) == ["tok-a", "tok-b"]

    def test_blacklist(self, redis_store):
        assert redis_store.is_blacklisted("tok-a") is False

        assert redis_store.blacklist("tok-a", ttl=60) is True
        assert redis_store.blacklist("tok-a", ttl=60) is False
        assert redis_store.is_blacklisted("tok-a") is True

    def test_raw_token_not_in_cache_keys(self, redis_store, admin):
        redis_store.save("raw-token-value", admin, ttl=60)

        keys = list(redis_store._get_redis().scan_iter("test:admin:auth:token:*"))
        assert keys
        assert all("raw-token-value" not in key for key in keys)
