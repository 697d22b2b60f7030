import pytest

from authcache.cache.auth_cache import AuthCache
from authcache.config import CacheConfig, create_auth_cache
from authcache.constants import CacheLocation
from authcache.errors import ConfigurationError
from authcache.storage.memory import MemoryStorage
from authcache.storage.redis import RedisStorage


def test_create_auth_cache_defaults_to_memory():
    cache = create_auth_cache(client_id="c1")
    assert isinstance(cache, AuthCache)
    assert isinstance(cache.storage, MemoryStorage)
    assert cache.cache_location == CacheLocation.LOCAL_STORAGE
    assert cache.rollback_enabled


def test_config_location_accepts_strings():
    config = CacheConfig(client_id="c1", cache_location="sessionStorage")
    cache = create_auth_cache(config)
    assert cache.cache_location == CacheLocation.SESSION_STORAGE


def test_custom_prefix():
    cache = create_auth_cache(client_id="c1", cache_prefix="app")
    cache.set_item("idtoken", "v")
    assert sorted(cache.storage.keys()) == ["app.c1.idtoken", "app.idtoken"]


def test_redis_url_selects_redis_storage():
    config = CacheConfig(client_id="c1", redis_url="redis://localhost:6379/0", session_ttl=30)
    storage = config.create_storage()
    assert isinstance(storage, RedisStorage)
    assert storage.session_ttl == 30


@pytest.mark.parametrize(
    "kwargs",
    [
        {"client_id": ""},
        {"client_id": "c1", "cache_prefix": ""},
        {"client_id": "c1", "cache_location": "cookieStorage"},
    ],
)
def test_invalid_config(kwargs):
    with pytest.raises(ConfigurationError):
        create_auth_cache(**kwargs)
