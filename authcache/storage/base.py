"""
Storage backend contract consumed by the auth cache.

A backend is a flat string key/value area (durable or session scoped) plus a
cookie side-channel with expiry. It applies no namespacing of its own: the
keys it receives are the exact physical keys computed by the cache.
Absence is always reported as an empty string, never as an exception.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from ..constants import CacheLocation


class StorageBackend(ABC):
    """Abstract key/value area with a parallel cookie jar."""

    def __init__(self, cache_location: CacheLocation = CacheLocation.LOCAL_STORAGE):
        self.cache_location = CacheLocation(cache_location)

    @abstractmethod
    def get_item(self, key: str) -> str:
        """Return the value stored under ``key`` or an empty string."""

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``."""

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Remove ``key``; missing keys are ignored."""

    @abstractmethod
    def keys(self) -> List[str]:
        """Snapshot of every key currently present in the storage area."""

    @abstractmethod
    def get_item_cookie(self, name: str) -> str:
        """Return the cookie value or an empty string."""

    @abstractmethod
    def set_item_cookie(self, name: str, value: str, expires_days: Optional[int] = None) -> None:
        """Set a cookie.

        ``expires_days`` of ``None`` or ``0`` makes a session cookie; a
        negative value expires the cookie immediately.
        """

    @abstractmethod
    def clear(self) -> None:
        """Drop every entry of the storage area."""

    def contains(self, key: str) -> bool:
        return key in self.keys()

    def clear_item_cookie(self, name: str) -> None:
        self.set_item_cookie(name, "", -1)

    def remove_item_cookie(self, name: str) -> None:
        self.clear_item_cookie(name)

    @staticmethod
    def cookie_expiration_time(expires_days: int, now: Optional[datetime] = None) -> datetime:
        now = now or datetime.now(timezone.utc)
        return now + timedelta(days=expires_days)


__all__ = ["StorageBackend"]
