"""
Cache key constants shared by the auth cache and its callers.
"""

from enum import Enum


class Constants:
    """Namespace prefix, delimiters and renewal sentinels."""
    cache_prefix = "msal"
    resource_delimiter = "|"
    token_renew_status_in_progress = "In Progress"
    token_renew_status_completed = "Completed"
    token_renew_status_cancelled = "Cancelled"


class CacheLocation(str, Enum):
    """Storage area the cache lives in."""
    LOCAL_STORAGE = "localStorage"
    SESSION_STORAGE = "sessionStorage"


class PersistentCacheKeys(str, Enum):
    """Keys that outlive a single authentication attempt."""
    IDTOKEN = "idtoken"
    CLIENT_INFO = "client.info"
    ERROR = "error"
    ERROR_DESC = "error.description"


class TemporaryCacheKeys(str, Enum):
    """Keys scoped to an in-flight authentication attempt."""
    AUTHORITY = "authority"
    ACQUIRE_TOKEN_ACCOUNT = "acquireTokenAccount"
    SESSION_STATE = "session.state"
    STATE_LOGIN = "state.login"
    STATE_ACQ_TOKEN = "state.acquireToken"
    NONCE_IDTOKEN = "nonce.idtoken"
    LOGIN_REQUEST = "login.request"
    RENEW_STATUS = "token.renew.status"


# Legacy persistent entries copied forward on cache construction
MIGRATED_PERSISTENT_KEYS = (
    PersistentCacheKeys.IDTOKEN,
    PersistentCacheKeys.CLIENT_INFO,
    PersistentCacheKeys.ERROR,
    PersistentCacheKeys.ERROR_DESC,
)

# Fixed temporary entries dropped whenever an inactive attempt is swept
SWEPT_TEMPORARY_KEYS = (
    TemporaryCacheKeys.STATE_LOGIN,
    TemporaryCacheKeys.STATE_ACQ_TOKEN,
    TemporaryCacheKeys.NONCE_IDTOKEN,
    TemporaryCacheKeys.LOGIN_REQUEST,
)

# Request-scoped cookies cleared after every sweep
AUTH_FLOW_COOKIES = (
    TemporaryCacheKeys.NONCE_IDTOKEN,
    TemporaryCacheKeys.STATE_LOGIN,
    TemporaryCacheKeys.LOGIN_REQUEST,
    TemporaryCacheKeys.STATE_ACQ_TOKEN,
)

__all__ = [
    "Constants",
    "CacheLocation",
    "PersistentCacheKeys",
    "TemporaryCacheKeys",
    "MIGRATED_PERSISTENT_KEYS",
    "SWEPT_TEMPORARY_KEYS",
    "AUTH_FLOW_COOKIES",
]
