"""
Error types for the auth cache package.
"""

from typing import Optional


class AuthCacheError(Exception):
    """Base error for the auth cache."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(AuthCacheError):
    """Raised when the cache is constructed with an invalid configuration."""


class StorageError(AuthCacheError):
    """Raised by a storage backend when an operation cannot be carried out."""


class StorageUnavailableError(StorageError):
    """Raised when the underlying storage area cannot be reached."""


__all__ = [
    "AuthCacheError",
    "ConfigurationError",
    "StorageError",
    "StorageUnavailableError",
]
