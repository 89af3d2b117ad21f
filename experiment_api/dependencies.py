"""Dependency injection for the experiment API.

The experiment repository is created once in the application lifespan and
kept on ``app.state``; services are assembled per request from it.
"""

from typing import Annotated

from fastapi import (
    Depends,
    Request,
)

from experiment_api.domain.exceptions import SigningUnavailableError
from experiment_api.domain.repositories import ExperimentRepositoryInterface
from experiment_api.domain.services.session_lookup_service import SessionLookupService
from experiment_api.shared.utils import link_tokens
from experiment_api.shared.utils.link_tokens import (
    LinkSigner,
    LinkVerifier,
)


def get_experiment_repository(request: Request) -> ExperimentRepositoryInterface:
    """Get the experiment repository attached at startup.

    Returns:
        ExperimentRepositoryInterface: The shared repository instance
    """
    return request.app.state.experiment_repository


def get_link_signer() -> LinkSigner:
    """Get a link signer configured from settings."""
    return link_tokens.get_link_signer()


def get_link_verifier() -> LinkVerifier:
    """Get a link verifier configured from settings."""
    return link_tokens.get_link_verifier()


def get_configured_link_signer(
    signer: Annotated[LinkSigner, Depends(get_link_signer)],
) -> LinkSigner:
    """Get the link signer, failing before body validation when no secret is set.

    Raises:
        SigningUnavailableError: If no signing secret is configured
    """
    if not signer.secret_key:
        raise SigningUnavailableError()
    return signer


def get_session_lookup_service(
    experiment_repository: Annotated[ExperimentRepositoryInterface, Depends(get_experiment_repository)],
    link_verifier: Annotated[LinkVerifier, Depends(get_link_verifier)],
) -> SessionLookupService:
    """Assemble the session lookup service.

    Returns:
        SessionLookupService: Service bound to the shared repository
    """
    return SessionLookupService(experiment_repository, link_verifier)


# Type aliases for cleaner endpoint signatures
LinkSignerDep = Annotated[LinkSigner, Depends(get_configured_link_signer)]
SessionLookupServiceDep = Annotated[SessionLookupService, Depends(get_session_lookup_service)]
