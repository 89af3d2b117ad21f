"""Standard response models."""

from .base import (
    BaseResponse,
    ErrorResponse,
    HealthResponse,
)

__all__ = [
    "BaseResponse",
    "ErrorResponse",
    "HealthResponse",
]
