"""
Storage backends for the auth cache.

This package provides the backend contract plus in-memory and Redis-based
implementations of it.
"""

from .base import StorageBackend

from .memory import (
    MemoryStorage,
    create_memory_storage,
)

from .redis import RedisStorage

__all__ = [
    "StorageBackend",
    "MemoryStorage",
    "create_memory_storage",
    "RedisStorage",
]
