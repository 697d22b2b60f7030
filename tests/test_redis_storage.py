import os
import uuid

import pytest

from authcache.cache.auth_cache import AuthCache
from authcache.cache.keys import build_authority_correlation_key
from authcache.constants import CacheLocation
from authcache.errors import ConfigurationError, StorageUnavailableError
from authcache.storage.redis import RedisStorage

REDIS_URL = os.getenv("REDIS_TEST_URL", "redis://localhost:6379/0")


@pytest.fixture
def redis_storage():
    try:
        import redis  # type: ignore
    except Exception:
        pytest.skip("redis library not installed")

    storage = RedisStorage(url=REDIS_URL, namespace=f"authcache-test-{uuid.uuid4().hex}")
    try:
        storage.keys()
    except StorageUnavailableError:
        pytest.skip("Redis server not reachable")
    yield storage
    storage.clear()
    storage.close()


def test_redis_storage_crud(redis_storage):
    assert redis_storage.get_item("missing") == ""
    redis_storage.set_item("msal.c1.idtoken", "tok")
    assert redis_storage.get_item("msal.c1.idtoken") == "tok"
    assert redis_storage.keys() == ["msal.c1.idtoken"]
    redis_storage.remove_item("msal.c1.idtoken")
    assert redis_storage.keys() == []


def test_redis_cookies(redis_storage):
    redis_storage.set_item_cookie("nonce", "n", 1)
    assert redis_storage.get_item_cookie("nonce") == "n"
    redis_storage.clear_item_cookie("nonce")
    assert redis_storage.get_item_cookie("nonce") == ""


def test_redis_locations_are_isolated(redis_storage):
    session = RedisStorage(
        url=REDIS_URL,
        cache_location=CacheLocation.SESSION_STORAGE,
        namespace=redis_storage.namespace,
        session_ttl=60,
    )
    session.set_item("k", "session")
    redis_storage.set_item("k", "local")
    assert session.get_item("k") == "session"
    assert redis_storage.get_item("k") == "local"
    session.clear()
    session.close()


def test_auth_cache_over_redis(redis_storage):
    cache = AuthCache("c1", storage=redis_storage)
    cache.set_item(build_authority_correlation_key("s1"), "https://login")
    assert sorted(redis_storage.keys()) == ["msal.authority|s1", "msal.c1.authority|s1"]
    assert cache.remove_temporary_entries("s1") == 2
    assert redis_storage.keys() == []


def test_unreachable_server_raises():
    try:
        import redis  # type: ignore
    except Exception:
        pytest.skip("redis library not installed")

    storage = RedisStorage(url="redis://127.0.0.1:1/0")
    with pytest.raises(StorageUnavailableError):
        storage.get_item("anything")


class RecordingClient:
    def __init__(self):
        self.calls = []

    def set(self, key, value, ex=None):
        self.calls.append((key, value, ex))


def test_zero_session_ttl_means_no_expiry():
    pytest.importorskip("redis")
    client = RecordingClient()
    storage = RedisStorage(
        cache_location=CacheLocation.SESSION_STORAGE,
        namespace="ns",
        session_ttl=0,
        client=client,
    )
    storage.set_item("k", "v")
    assert client.calls == [("ns:sessionStorage:data:k", "v", None)]


def test_session_ttl_applies_to_session_entries():
    pytest.importorskip("redis")
    client = RecordingClient()
    storage = RedisStorage(
        cache_location=CacheLocation.SESSION_STORAGE,
        namespace="ns",
        session_ttl=60,
        client=client,
    )
    storage.set_item("k", "v")
    assert client.calls == [("ns:sessionStorage:data:k", "v", 60)]


def test_injected_client_requires_redis(monkeypatch):
    import authcache.storage.redis as redis_module

    monkeypatch.setattr(redis_module, "redis", None)
    with pytest.raises(ConfigurationError):
        RedisStorage(client=RecordingClient())
