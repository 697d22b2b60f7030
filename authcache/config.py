"""
Configuration for building an auth cache.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from .cache.auth_cache import AuthCache
from .constants import CacheLocation, Constants
from .errors import ConfigurationError
from .storage.base import StorageBackend
from .storage.memory import MemoryStorage
from .storage.redis import RedisStorage

logger = logging.getLogger(__name__)


@dataclass
class CacheConfig:
    """Configuration for the auth cache."""
    client_id: str
    cache_location: CacheLocation = CacheLocation.LOCAL_STORAGE
    store_auth_state_in_cookie: bool = False
    cache_prefix: str = Constants.cache_prefix
    # Shared Redis area; in-process memory when unset
    redis_url: Optional[str] = None
    redis_namespace: str = "authcache"
    session_ttl: Optional[int] = None

    def validate(self) -> None:
        if not self.client_id:
            raise ConfigurationError("client_id is required")
        if not self.cache_prefix:
            raise ConfigurationError("cache_prefix must not be empty")
        try:
            self.cache_location = CacheLocation(self.cache_location)
        except ValueError:
            raise ConfigurationError(f"Unsupported cache location: {self.cache_location}")

    def create_storage(self) -> StorageBackend:
        if self.redis_url:
            return RedisStorage(
                url=self.redis_url,
                cache_location=self.cache_location,
                namespace=self.redis_namespace,
                session_ttl=self.session_ttl,
            )
        return MemoryStorage(self.cache_location)


def create_auth_cache(config: Optional[CacheConfig] = None, **kwargs) -> AuthCache:
    """
    Create an auth cache.

    Args:
        config: Cache configuration; built from ``kwargs`` when omitted

    Returns:
        AuthCache over the configured storage backend
    """
    if config is None:
        config = CacheConfig(**kwargs)
    config.validate()
    storage = config.create_storage()
    logger.debug(
        "Creating auth cache for client %s on %s (%s)",
        config.client_id,
        config.cache_location.value,
        type(storage).__name__,
    )
    return AuthCache(
        client_id=config.client_id,
        cache_location=config.cache_location,
        store_auth_state_in_cookie=config.store_auth_state_in_cookie,
        storage=storage,
        cache_prefix=config.cache_prefix,
    )


__all__ = ["CacheConfig", "create_auth_cache"]
