"""Rate limiter shared by the API routes."""

from slowapi import Limiter
from slowapi.util import get_remote_address

from experiment_api.constants.http import RATE_LIMIT_STORAGE_URL
from experiment_api.core.config import (
    Environment,
    settings,
)

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=settings.RATE_LIMIT_ENDPOINTS["default"],
    storage_uri=RATE_LIMIT_STORAGE_URL,
    enabled=settings.APP_ENV != Environment.TEST,
)
