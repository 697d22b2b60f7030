"""
authcache

Client-side authentication token cache over a pluggable key/value store.
"""

__version__ = "0.1.0"

from .constants import (
    CacheLocation,
    Constants,
    PersistentCacheKeys,
    TemporaryCacheKeys,
)
from .errors import (
    AuthCacheError,
    ConfigurationError,
    StorageError,
    StorageUnavailableError,
)
from .cache import (
    AuthCache,
    AccessTokenCacheItem,
    AccessTokenKey,
    AccessTokenValue,
)
from .storage import (
    StorageBackend,
    MemoryStorage,
    RedisStorage,
)
from .config import CacheConfig, create_auth_cache

__all__ = [
    "AuthCache",
    "CacheConfig",
    "create_auth_cache",
    "CacheLocation",
    "Constants",
    "PersistentCacheKeys",
    "TemporaryCacheKeys",
    "AccessTokenCacheItem",
    "AccessTokenKey",
    "AccessTokenValue",
    "StorageBackend",
    "MemoryStorage",
    "RedisStorage",
    "AuthCacheError",
    "ConfigurationError",
    "StorageError",
    "StorageUnavailableError",
]
