"""Response envelopes shared by every endpoint.

Successful lookups are wrapped as ``{success: true, data}``; every failure,
whatever its origin, is rendered as ``{success: false, error, message}``.
"""

from datetime import (
    UTC,
    datetime,
)
from typing import (
    Any,
    Dict,
    Generic,
    Optional,
    TypeVar,
)

from pydantic import (
    BaseModel,
    Field,
)

DataT = TypeVar("DataT")


def _now() -> datetime:
    return datetime.now(UTC)


class BaseResponse(BaseModel, Generic[DataT]):
    """Success envelope."""

    success: bool = Field(True, description="Always true for successful responses")
    data: Optional[DataT] = Field(None, description="Response payload")


class ErrorResponse(BaseModel):
    """Failure envelope. Never carries stack traces or store details."""

    success: bool = Field(False, description="Always false for errors")
    error: str = Field(description="Machine readable error code")
    message: str = Field(description="Message safe to show to the viewer")
    details: Optional[Dict[str, Any]] = Field(None, description="Validation errors or error id")
    timestamp: datetime = Field(default_factory=_now, description="When the error was produced")


class HealthResponse(BaseModel):
    """Liveness probe response."""

    ok: bool = Field(True, description="Process is up")
