"""Session lookup domain service.

Resolves a session identifier, optionally carried by a signed link token,
against the experiment store and returns the normalized record.
"""

from typing import Optional

from experiment_api.core.logging import logger
from experiment_api.domain.entities import SessionRecord
from experiment_api.domain.exceptions import RecordNotFoundError
from experiment_api.domain.repositories import ExperimentRepositoryInterface
from experiment_api.domain.services.identifier_resolver import (
    build_query,
    resolve,
)
from experiment_api.domain.services.record_normalizer import normalize
from experiment_api.shared.utils.link_tokens import LinkVerifier


class SessionLookupService:
    """Looks up one session record for an external viewer.

    The flow is token check, resolve, query, then normalize. A token that
    fails verification never fails the request: the lookup proceeds with the
    identifier supplied by the caller.
    """

    def __init__(
        self,
        experiment_repository: ExperimentRepositoryInterface,
        link_verifier: LinkVerifier,
    ):
        """Initialize the lookup service.

        Args:
            experiment_repository: Store of raw experiment documents
            link_verifier: Verifier for bearer link tokens
        """
        self.experiment_repository = experiment_repository
        self.link_verifier = link_verifier

    async def lookup(self, raw_id: Optional[str], bearer_token: Optional[str] = None) -> SessionRecord:
        """Find and normalize the session record for a request.

        Args:
            raw_id: Identifier supplied in the request path
            bearer_token: Link token from the Authorization header, if any

        Returns:
            SessionRecord: The normalized record

        Raises:
            MissingIdentifierError: If no identifier is available
            RecordNotFoundError: If no document matches
            StorageError: If the store query fails
        """
        grant = None
        if bearer_token:
            verification = self.link_verifier.check(bearer_token)
            if verification.is_valid:
                grant = verification.grant
            else:
                logger.info(
                    "lookup_falling_back_to_path_id",
                    reason=verification.failure.value,
                )

        session_id = resolve(raw_id, grant)
        query = build_query(session_id)

        document = await self.experiment_repository.find_first(query)
        if document is None:
            logger.info("experiment_not_found", session_id=session_id, via_link=grant is not None)
            raise RecordNotFoundError(session_id)

        logger.info("experiment_found", session_id=session_id, via_link=grant is not None)
        return normalize(document)
