"""Schemas for the external link signing endpoint."""

from typing import Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
)

from experiment_api.core.config import settings


class SignLinkRequest(BaseModel):
    """Request body for issuing a signed external link.

    ``sessionId`` is optional at the schema level so that a missing value is
    reported as a 400 by the signer rather than a validation error. Numeric
    ids are accepted and signed as strings.
    """

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    session_id: Optional[str] = Field(None, alias="sessionId", description="Session to grant access to")
    user_id: Optional[str] = Field(None, alias="userId", description="Owner of the session")
    exp_sec: int = Field(
        settings.LINK_DEFAULT_TTL_SECONDS,
        alias="expSec",
        gt=0,
        description="Token lifetime in seconds",
    )


class SignLinkResponse(BaseModel):
    """Issued link token."""

    model_config = ConfigDict(populate_by_name=True)

    token: str = Field(description="Signed link token")
    expires_in: int = Field(alias="expiresIn", description="Token lifetime in seconds")
