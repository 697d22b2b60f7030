"""
Access-token cache records.

The cache never interprets token material; it only pairs a structured key
with its value when reading back entries for an owner.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional


@dataclass
class AccessTokenKey:
    """Structured key identifying one cached access token."""
    authority: str
    client_id: str
    scopes: str
    home_account_identifier: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "authority": self.authority,
            "clientId": self.client_id,
            "scopes": self.scopes,
            "homeAccountIdentifier": self.home_account_identifier,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AccessTokenKey":
        return cls(
            authority=data["authority"],
            client_id=data["clientId"],
            scopes=data["scopes"],
            home_account_identifier=data.get("homeAccountIdentifier"),
        )

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_json(cls, raw: str) -> "AccessTokenKey":
        return cls.from_dict(json.loads(raw))

    def cache_key(self) -> str:
        """Serialized form used directly as the storage key."""
        return self.to_json()

    @property
    def scope_list(self) -> List[str]:
        return self.scopes.split()


@dataclass
class AccessTokenValue:
    """Token material cached under an ``AccessTokenKey``."""
    access_token: str
    id_token: str
    expires_in: str
    home_account_identifier: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "accessToken": self.access_token,
            "idToken": self.id_token,
            "expiresIn": self.expires_in,
            "homeAccountIdentifier": self.home_account_identifier,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AccessTokenValue":
        return cls(
            access_token=data["accessToken"],
            id_token=data.get("idToken", ""),
            expires_in=str(data["expiresIn"]),
            home_account_identifier=data.get("homeAccountIdentifier"),
        )

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_json(cls, raw: str) -> "AccessTokenValue":
        return cls.from_dict(json.loads(raw))


@dataclass
class AccessTokenCacheItem:
    key: AccessTokenKey
    value: AccessTokenValue

    @classmethod
    def from_raw(cls, raw_key: str, raw_value: str) -> "AccessTokenCacheItem":
        """Parse a stored key/value pair; raises ``ValueError`` if malformed."""
        try:
            key_data = json.loads(raw_key)
            value_data = json.loads(raw_value)
            if not isinstance(key_data, dict) or not isinstance(value_data, dict):
                raise ValueError("access token key and value must be JSON objects")
            return cls(AccessTokenKey.from_dict(key_data), AccessTokenValue.from_dict(value_data))
        except (KeyError, TypeError) as e:
            raise ValueError(f"malformed access token record: {e}") from e


__all__ = ["AccessTokenKey", "AccessTokenValue", "AccessTokenCacheItem"]
