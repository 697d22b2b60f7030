"""
Client-side authentication cache.

This module provides the cache shared by every client application and every
in-flight authentication attempt on one storage area. It owns:

- the key namespace (``prefix.clientId.key``) and its legacy twin
  (``prefix.key``), written side by side while rollback is enabled;
- a one-time migration of legacy persistent entries on construction;
- the sweep of temporary entries belonging to finished attempts, guarded by
  each attempt's renewal status marker;
- lookup of cached access tokens by client id and account.

The storage area may be shared with other processes or threads. The renewal
status marker is the only coordination primitive: an attempt whose marker
reads "In Progress" is never swept.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from ..constants import (
    AUTH_FLOW_COOKIES,
    MIGRATED_PERSISTENT_KEYS,
    SWEPT_TEMPORARY_KEYS,
    CacheLocation,
    Constants,
    TemporaryCacheKeys,
)
from ..errors import ConfigurationError
from ..storage.base import StorageBackend
from ..storage.memory import MemoryStorage
from .keys import (
    KeyNamespace,
    build_account_correlation_key,
    build_authority_correlation_key,
    extract_state,
    renew_status_key,
)
from .records import AccessTokenCacheItem

logger = logging.getLogger(__name__)


class AuthCache:
    """Namespaced, rollback-compatible view over a storage backend."""

    def __init__(
        self,
        client_id: str,
        cache_location: Optional[CacheLocation] = None,
        store_auth_state_in_cookie: bool = False,
        storage: Optional[StorageBackend] = None,
        cache_prefix: str = Constants.cache_prefix,
    ):
        if not client_id:
            raise ConfigurationError("client_id is required")
        location = None
        if cache_location is not None:
            try:
                location = CacheLocation(cache_location)
            except ValueError:
                raise ConfigurationError(
                    f"Unsupported cache location: {cache_location}",
                    details={"supported": [loc.value for loc in CacheLocation]},
                )
        if storage is None:
            storage = MemoryStorage(location or CacheLocation.LOCAL_STORAGE)
        elif location is not None and location != storage.cache_location:
            raise ConfigurationError(
                f"cache_location {location.value} does not match storage area {storage.cache_location.value}",
            )
        self.client_id = client_id
        self.storage = storage
        self.cache_location = self.storage.cache_location
        self.store_auth_state_in_cookie = store_auth_state_in_cookie
        self.namespace = KeyNamespace(client_id, cache_prefix)
        # Fixed for now; legacy readers must keep working until the next major release
        self.rollback_enabled = True
        self._migrate_cache_entries()

    def _migrate_cache_entries(self) -> int:
        """Copy legacy persistent entries into the current schema."""
        migrated = 0
        for cache_key in MIGRATED_PERSISTENT_KEYS:
            value = self.storage.get_item(self.namespace.legacy(cache_key.value))
            if value:
                self.set_item(cache_key.value, value, self.store_auth_state_in_cookie)
                migrated += 1
        if migrated:
            logger.debug("Migrated %d legacy cache entries for client %s", migrated, self.client_id)
        return migrated

    def derive_key(self, key: str, use_client_scope: bool = True) -> str:
        return self.namespace.derive(key, use_client_scope)

    # Primary store
    def set_item(self, key: str, value: str, enable_cookie_storage: bool = False) -> None:
        self._write(self.namespace.current(key), value, enable_cookie_storage)
        if self.rollback_enabled:
            self._write(self.namespace.legacy(key), value, enable_cookie_storage)

    def get_item(self, key: str, enable_cookie_storage: bool = False) -> str:
        physical = self.namespace.current(key)
        if enable_cookie_storage:
            cookie = self.storage.get_item_cookie(physical)
            if cookie:
                return cookie
        return self.storage.get_item(physical)

    def remove_item(self, key: str) -> None:
        self.storage.remove_item(self.namespace.current(key))
        if self.rollback_enabled:
            self.storage.remove_item(self.namespace.legacy(key))

    def _write(self, physical: str, value: str, enable_cookie_storage: bool) -> None:
        self.storage.set_item(physical, value)
        if enable_cookie_storage:
            self.storage.set_item_cookie(physical, value)

    # Cookie side-channel
    def set_item_cookie(self, name: str, value: str, expires_days: Optional[int] = None) -> None:
        self.storage.set_item_cookie(self.namespace.current(name), value, expires_days)
        if self.rollback_enabled:
            self.storage.set_item_cookie(self.namespace.legacy(name), value, expires_days)

    def get_item_cookie(self, name: str) -> str:
        return self.storage.get_item_cookie(self.namespace.current(name))

    def remove_item_cookie(self, name: str) -> None:
        self.set_item_cookie(name, "", -1)

    def clear_auth_cookies(self) -> None:
        """Clear the request-scoped cookies of the authentication flow."""
        for name in AUTH_FLOW_COOKIES:
            self.remove_item_cookie(name.value)

    # Temporary entries
    def _renew_status_keys(self, state: str) -> List[str]:
        # Markers written by other client ids are only visible through the legacy or bare key
        marker = renew_status_key(state)
        return [self.namespace.current(marker), self.namespace.legacy(marker), marker]

    def token_renewal_in_progress(self, state: str) -> bool:
        return any(
            self.storage.get_item(key) == Constants.token_renew_status_in_progress
            for key in self._renew_status_keys(state)
        )

    @staticmethod
    def is_correlation_key(key: str) -> bool:
        # Either marker qualifies. The account marker is a real containment test,
        # not the always-true comparison against index 1 of older releases.
        return (
            TemporaryCacheKeys.AUTHORITY.value in key
            or TemporaryCacheKeys.ACQUIRE_TOKEN_ACCOUNT.value in key
        )

    def remove_temporary_entries(self, state: Optional[str] = None) -> int:
        """Sweep temporary entries of finished attempts.

        Only keys carrying a correlation state are considered, and only when
        that attempt has no renewal in progress. Returns the number of
        correlation entries removed.
        """
        removed = 0
        for key in self.storage.keys():
            if not self.is_correlation_key(key):
                continue
            if state and state not in key:
                continue
            key_state = extract_state(key)
            if not key_state:
                continue
            if self.token_renewal_in_progress(key_state):
                logger.debug("Skipping %s: renewal in progress for state %s", key, key_state)
                continue
            self.storage.remove_item(key)
            for marker in self._renew_status_keys(key_state):
                self.storage.remove_item(marker)
            for temporary_key in SWEPT_TEMPORARY_KEYS:
                self.remove_item(temporary_key.value)
            self.storage.clear_item_cookie(key)
            removed += 1

        self.clear_auth_cookies()
        if removed:
            logger.debug("Removed %d temporary cache entries", removed)
        return removed

    def reset_all(self) -> int:
        """Remove every namespaced entry in the storage area, for all client ids."""
        self.remove_temporary_entries()
        removed = 0
        for key in self.storage.keys():
            if self.namespace.owns(key):
                self.storage.remove_item(key)
                removed += 1
        logger.info("Reset auth cache: removed %d entries", removed)
        return removed

    # Access tokens
    def get_all_access_tokens(self, client_id: str, home_account_identifier: str) -> List[AccessTokenCacheItem]:
        """Cached access tokens whose key mentions both ``client_id`` and the account.

        Matching is by substring, so a client id contained in another client
        id matches both.
        """
        results: List[AccessTokenCacheItem] = []
        for key in self.storage.keys():
            if client_id not in key or home_account_identifier not in key:
                continue
            value = self.get_item(key)
            if not value:
                continue
            try:
                results.append(AccessTokenCacheItem.from_raw(key, value))
            except ValueError as e:
                logger.debug(f"Skipping unparseable access token entry {key}: {e}")
        return results

    # Key builders
    @staticmethod
    def build_account_correlation_key(account_id, state: str) -> str:
        return build_account_correlation_key(account_id, state)

    @staticmethod
    def build_authority_correlation_key(state: str) -> str:
        return build_authority_correlation_key(state)


__all__ = ["AuthCache"]
