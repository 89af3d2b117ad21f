"""Application constants module."""

from .auth import *
from .http import *
from .validation import *

__all__ = [
    # Auth constants
    "JWT_ALGORITHM_DEFAULT",
    "LINK_TTL_SECONDS_DEFAULT",
    "TOKEN_TYPE_BEARER",
    # HTTP constants
    "SECURITY_HEADERS",
    "RATE_LIMIT_STORAGE_URL",
    # Validation constants
    "JWT_TOKEN_REGEX",
    "DOCUMENT_ID_MAX_BYTES",
]
