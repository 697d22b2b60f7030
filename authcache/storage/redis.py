"""Redis-backed storage backend.

Lets several processes share one cache area the way browser tabs of one
origin share ``localStorage``.

Design Notes:
- Entries are stored at ``{namespace}:{location}:data:{key}`` so the durable
  and session areas never see each other's keys.
- Cookies are stored at ``{namespace}:cookie:{name}`` with a Redis TTL
  derived from the cookie lifetime in days. A negative lifetime deletes.
- ``sessionStorage`` entries optionally carry ``session_ttl`` seconds so an
  abandoned session ages out.
- Key enumeration uses SCAN with a safety cap to prevent unbounded iteration.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional

try:  # Optional dependency
    import redis  # type: ignore
    from redis.exceptions import ConnectionError as RedisConnectionError  # type: ignore
    from redis.exceptions import TimeoutError as RedisTimeoutError  # type: ignore
except Exception:  # pragma: no cover
    redis = None  # type: ignore
    RedisConnectionError = RedisTimeoutError = None  # type: ignore

from ..constants import CacheLocation
from ..errors import ConfigurationError, StorageUnavailableError
from .base import StorageBackend

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60


class RedisStorage(StorageBackend):
    def __init__(
        self,
        url: str = "redis://localhost:6379/0",
        cache_location: CacheLocation = CacheLocation.LOCAL_STORAGE,
        namespace: str = "authcache",
        session_ttl: Optional[int] = None,
        scan_page_size: int = 500,
        max_scan: int = 10000,
        client: Any = None,
    ):
        super().__init__(cache_location)
        self.url = url
        self.namespace = namespace.rstrip(":")
        self.session_ttl = session_ttl
        self.scan_page_size = scan_page_size
        self.max_scan = max_scan
        if client is not None and redis is None:
            raise ConfigurationError("redis not installed; an injected client needs redis>=4.5")
        self._client = client

    def _get_client(self):
        if self._client is None:
            if redis is None:
                raise ConfigurationError("redis not installed; pip install redis>=4.5")
            self._client = redis.from_url(self.url, decode_responses=True)
        return self._client

    def _call(self, op: Callable[[Any], Any]) -> Any:
        client = self._get_client()
        try:
            return op(client)
        except (RedisConnectionError, RedisTimeoutError) as e:
            logger.warning(f"Redis storage unreachable at {self.url}: {e}")
            raise StorageUnavailableError(
                f"Redis storage unavailable: {e}",
                details={"url": self.url, "location": self.cache_location.value},
            ) from e

    # Key helpers
    def _data_prefix(self) -> str:
        return f"{self.namespace}:{self.cache_location.value}:data:"

    def _data_key(self, key: str) -> str:
        return f"{self._data_prefix()}{key}"

    def _cookie_key(self, name: str) -> str:
        return f"{self.namespace}:cookie:{name}"

    def _entry_ttl(self) -> Optional[int]:
        if self.cache_location == CacheLocation.SESSION_STORAGE:
            return self.session_ttl or None
        return None

    def get_item(self, key: str) -> str:
        return self._call(lambda c: c.get(self._data_key(key))) or ""

    def set_item(self, key: str, value: str) -> None:
        ttl = self._entry_ttl()
        self._call(lambda c: c.set(self._data_key(key), value, ex=ttl))

    def remove_item(self, key: str) -> None:
        self._call(lambda c: c.delete(self._data_key(key)))

    def keys(self) -> List[str]:
        prefix = self._data_prefix()
        out: List[str] = []

        def scan(c):
            cursor = 0
            while True:
                cursor, keys = c.scan(cursor=cursor, match=f"{prefix}*", count=self.scan_page_size)
                out.extend(k[len(prefix):] for k in keys)
                if cursor == 0:
                    break
                if len(out) >= self.max_scan:
                    logger.warning("Key scan stopped at %d keys (max_scan)", len(out))
                    break

        self._call(scan)
        return out

    def clear(self) -> None:
        keys = [self._data_key(k) for k in self.keys()]
        if keys:
            self._call(lambda c: c.delete(*keys))

    def get_item_cookie(self, name: str) -> str:
        return self._call(lambda c: c.get(self._cookie_key(name))) or ""

    def set_item_cookie(self, name: str, value: str, expires_days: Optional[int] = None) -> None:
        key = self._cookie_key(name)
        if expires_days is not None and expires_days < 0:
            self._call(lambda c: c.delete(key))
            return
        ttl = expires_days * SECONDS_PER_DAY if expires_days else None
        self._call(lambda c: c.set(key, value, ex=ttl))

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None


__all__ = ["RedisStorage"]
