"""
Logical key classification and physical key derivation.

A logical key is either a structured key (a serialized JSON object such as
an access-token record key, already unique and schema-versioned) or a plain
identifier. Structured keys pass through untouched; plain keys are
namespaced as ``prefix.clientId.key`` (current schema) or ``prefix.key``
(legacy schema).
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, Union

from ..constants import Constants, TemporaryCacheKeys


@dataclass(frozen=True)
class StructuredKey:
    text: str
    data: Dict[str, Any]


@dataclass(frozen=True)
class PlainKey:
    text: str


LogicalKey = Union[StructuredKey, PlainKey]


def classify_key(key: str) -> LogicalKey:
    """Classify ``key`` once; never raises."""
    try:
        data = json.loads(key)
    except (TypeError, ValueError, RecursionError):
        return PlainKey(key)
    if isinstance(data, dict):
        return StructuredKey(key, data)
    # Scalars like "42" or "null" parse as JSON but are still plain identifiers
    return PlainKey(key)


class KeyNamespace:
    """Derives physical keys for one client id under one prefix."""

    def __init__(self, client_id: str, prefix: str = Constants.cache_prefix):
        self.client_id = client_id
        self.prefix = prefix

    @property
    def client_scope(self) -> str:
        return f"{self.prefix}.{self.client_id}"

    def derive(self, key: str, use_client_scope: bool = True) -> str:
        logical = classify_key(key)
        if isinstance(logical, StructuredKey):
            return logical.text
        if logical.text.startswith(self.client_scope):
            return logical.text
        if use_client_scope:
            return f"{self.client_scope}.{logical.text}"
        return f"{self.prefix}.{logical.text}"

    def current(self, key: str) -> str:
        return self.derive(key, True)

    def legacy(self, key: str) -> str:
        return self.derive(key, False)

    def owns(self, physical_key: str) -> bool:
        """Whether a physical key carries the namespace prefix (any client id)."""
        return self.prefix in physical_key


def build_account_correlation_key(account_id: Any, state: str) -> str:
    """Correlation key caching the account of an acquire-token attempt."""
    return Constants.resource_delimiter.join(
        [TemporaryCacheKeys.ACQUIRE_TOKEN_ACCOUNT.value, f"{account_id}", f"{state}"]
    )


def build_authority_correlation_key(state: str) -> str:
    """Correlation key caching the authority of an attempt."""
    return Constants.resource_delimiter.join([TemporaryCacheKeys.AUTHORITY.value, f"{state}"])


def extract_state(physical_key: str) -> str:
    """Trailing correlation state of a key, or an empty string without a delimiter."""
    parts = physical_key.split(Constants.resource_delimiter)
    if len(parts) > 1:
        return parts[-1]
    return ""


def renew_status_key(state: str) -> str:
    return TemporaryCacheKeys.RENEW_STATUS.value + state


__all__ = [
    "StructuredKey",
    "PlainKey",
    "LogicalKey",
    "classify_key",
    "KeyNamespace",
    "build_account_correlation_key",
    "build_authority_correlation_key",
    "extract_state",
    "renew_status_key",
]
