"""
Auth cache package.

Key namespacing, rollback dual-writes, temporary entry cleanup and access
token lookup on top of a storage backend.
"""

from .auth_cache import AuthCache

from .keys import (
    KeyNamespace,
    PlainKey,
    StructuredKey,
    build_account_correlation_key,
    build_authority_correlation_key,
    classify_key,
    extract_state,
    renew_status_key,
)

from .records import (
    AccessTokenCacheItem,
    AccessTokenKey,
    AccessTokenValue,
)

__all__ = [
    "AuthCache",
    "KeyNamespace",
    "PlainKey",
    "StructuredKey",
    "build_account_correlation_key",
    "build_authority_correlation_key",
    "classify_key",
    "extract_state",
    "renew_status_key",
    "AccessTokenCacheItem",
    "AccessTokenKey",
    "AccessTokenValue",
]
