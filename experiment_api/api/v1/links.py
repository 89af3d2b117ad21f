"""External link signing endpoint.

Intended for tooling that embeds a viewer link in an uploaded score. In
production the upstream platform issues these links itself.
"""

from typing import Optional

from fastapi import (
    APIRouter,
    Body,
    Request,
)

from experiment_api.core.config import settings
from experiment_api.core.limiter import limiter
from experiment_api.dependencies import LinkSignerDep
from experiment_api.schemas.links import (
    SignLinkRequest,
    SignLinkResponse,
)

router = APIRouter()


@router.post("/sign", response_model=SignLinkResponse)
@limiter.limit(settings.RATE_LIMIT_ENDPOINTS["sign"][0])
async def sign_link(
    request: Request,
    signer: LinkSignerDep,
    payload: Optional[SignLinkRequest] = Body(None),
) -> SignLinkResponse:
    """Issue a signed, time-limited link token for one session.

    Args:
        request: The incoming request
        signer: Link signer
        payload: Session, optional user and lifetime

    Returns:
        SignLinkResponse: The token and its lifetime in seconds
    """
    payload = payload or SignLinkRequest()
    signed = signer.sign(payload.session_id, payload.user_id, payload.exp_sec)
    return SignLinkResponse(token=signed.token, expires_in=signed.expires_in)
