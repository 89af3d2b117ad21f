"""Experiment session endpoints for external viewers."""

from typing import Optional

from fastapi import (
    APIRouter,
    Request,
)
from fastapi.security.utils import get_authorization_scheme_param

from experiment_api.constants.auth import TOKEN_TYPE_BEARER
from experiment_api.core.config import settings
from experiment_api.core.limiter import limiter
from experiment_api.core.logging import logger
from experiment_api.dependencies import SessionLookupServiceDep
from experiment_api.schemas.experiments import ExperimentResponse

router = APIRouter()


def extract_bearer_token(request: Request) -> Optional[str]:
    """Return the bearer token from the Authorization header, if any."""
    scheme, credentials = get_authorization_scheme_param(request.headers.get("Authorization"))
    if scheme.lower() != TOKEN_TYPE_BEARER or not credentials:
        return None
    return credentials


# Ids may contain "/", which arrives already decoded from %2F
@router.get("/external/{experiment_id:path}", response_model=ExperimentResponse)
@limiter.limit(settings.RATE_LIMIT_ENDPOINTS["experiments"][0])
async def get_external_experiment(
    request: Request,
    experiment_id: str,
    lookup_service: SessionLookupServiceDep,
) -> ExperimentResponse:
    """Get one session record by plain id or signed link token.

    A valid bearer token's session id takes precedence over the path id. An
    invalid or expired token is ignored and the path id is used.

    Args:
        request: The incoming request
        experiment_id: Session identifier from the path
        lookup_service: Session lookup service

    Returns:
        ExperimentResponse: The normalized session record
    """
    bearer_token = extract_bearer_token(request)
    logger.info("external_experiment_requested", bearer_present=bearer_token is not None)

    record = await lookup_service.lookup(experiment_id, bearer_token)
    return ExperimentResponse(data=record.to_dict())
