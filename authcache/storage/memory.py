"""
In-process storage backend.

Entries live in a plain dict; cookies live in a jar keyed by name together
with an optional absolute expiry. Expired cookies read as empty and are
purged lazily. A reentrant lock guards both so one instance can be shared by
several threads, the in-process analogue of several browser tabs sharing one
origin.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

from ..constants import CacheLocation
from .base import StorageBackend

logger = logging.getLogger(__name__)


class MemoryStorage(StorageBackend):
    def __init__(self, cache_location: CacheLocation = CacheLocation.LOCAL_STORAGE):
        super().__init__(cache_location)
        self._lock = threading.RLock()
        self._items: Dict[str, str] = {}
        self._cookies: Dict[str, Tuple[str, Optional[datetime]]] = {}

    def get_item(self, key: str) -> str:
        with self._lock:
            return self._items.get(key, "")

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            self._items[key] = value

    def remove_item(self, key: str) -> None:
        with self._lock:
            self._items.pop(key, None)

    def keys(self) -> List[str]:
        with self._lock:
            return list(self._items.keys())

    def clear(self) -> None:
        with self._lock:
            self._items.clear()
            self._cookies.clear()

    def get_item_cookie(self, name: str) -> str:
        with self._lock:
            entry = self._cookies.get(name)
            if entry is None:
                return ""
            value, expires_at = entry
            if expires_at is not None and expires_at <= datetime.now(timezone.utc):
                del self._cookies[name]
                return ""
            return value

    def set_item_cookie(self, name: str, value: str, expires_days: Optional[int] = None) -> None:
        expires_at = self.cookie_expiration_time(expires_days) if expires_days else None
        with self._lock:
            if expires_at is not None and expires_at <= datetime.now(timezone.utc):
                # An already-expired cookie is a deletion
                self._cookies.pop(name, None)
                logger.debug("Expired cookie %s", name)
                return
            self._cookies[name] = (value, expires_at)

    def cookie_names(self) -> List[str]:
        with self._lock:
            return list(self._cookies.keys())


def create_memory_storage(cache_location: CacheLocation = CacheLocation.LOCAL_STORAGE) -> MemoryStorage:
    """Create an in-memory storage backend."""
    return MemoryStorage(cache_location)


__all__ = ["MemoryStorage", "create_memory_storage"]
