"""Signed external link tokens.

A link token is a JWT carrying ``{sessionId, userId?, iat, exp}``. It lets an
unauthenticated viewer read one session record until it expires. Nothing is
persisted, so tokens cannot be revoked early.

Both signing and verification fail closed when no secret is configured.
"""

from dataclasses import dataclass
from datetime import (
    UTC,
    datetime,
    timedelta,
)
from enum import Enum
from typing import (
    Callable,
    Optional,
)

from jose import jwt
from jose.exceptions import (
    ExpiredSignatureError,
    JWTClaimsError,
    JWTError,
)

from experiment_api.constants.auth import (
    CLAIM_EXPIRES_AT,
    CLAIM_ISSUED_AT,
    CLAIM_SESSION_ID,
    CLAIM_USER_ID,
    JWT_ALGORITHM_DEFAULT,
    LINK_TTL_SECONDS_DEFAULT,
)
from experiment_api.constants.validation import (
    JWT_TOKEN_MAX_LENGTH,
    JWT_TOKEN_MIN_LENGTH,
    JWT_TOKEN_REGEX,
)
from experiment_api.core.config import settings
from experiment_api.core.logging import logger
from experiment_api.domain.entities import (
    AccessToken,
    SignedLink,
)
from experiment_api.domain.exceptions import (
    InvalidRequestError,
    SigningUnavailableError,
)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class VerificationFailure(str, Enum):
    """Why a presented token was not accepted. Only ever logged."""

    EMPTY = "empty"
    UNCONFIGURED = "unconfigured"
    MALFORMED = "malformed"
    BAD_SIGNATURE = "bad_signature"
    EXPIRED = "expired"
    MISSING_SESSION = "missing_session"


@dataclass(frozen=True)
class VerificationResult:
    """Outcome of a token check: either a grant or a failure reason."""

    grant: Optional[AccessToken] = None
    failure: Optional[VerificationFailure] = None

    @property
    def is_valid(self) -> bool:
        return self.grant is not None

    @classmethod
    def accepted(cls, grant: AccessToken) -> "VerificationResult":
        return cls(grant=grant)

    @classmethod
    def rejected(cls, failure: VerificationFailure) -> "VerificationResult":
        return cls(failure=failure)


class LinkSigner:
    """Issues signed, time-bound external link tokens."""

    def __init__(
        self,
        secret_key: Optional[str],
        algorithm: str = JWT_ALGORITHM_DEFAULT,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.clock = clock

    def sign(
        self,
        session_id: str,
        user_id: Optional[str] = None,
        ttl_seconds: int = LINK_TTL_SECONDS_DEFAULT,
    ) -> SignedLink:
        """Create a token granting read access to one session.

        Args:
            session_id: Session the token grants access to
            user_id: Optional user the session belongs to
            ttl_seconds: Validity window in seconds

        Returns:
            SignedLink: The encoded token and its expiry

        Raises:
            SigningUnavailableError: If no signing secret is configured
            InvalidRequestError: If session_id is empty
        """
        if not self.secret_key:
            logger.warning("link_signing_unavailable")
            raise SigningUnavailableError()

        if session_id is None or not str(session_id).strip():
            raise InvalidRequestError("Missing sessionId")

        issued_at = self.clock()
        expires_at = issued_at + timedelta(seconds=ttl_seconds)

        claims = {
            CLAIM_SESSION_ID: session_id,
            CLAIM_ISSUED_AT: int(issued_at.timestamp()),
            CLAIM_EXPIRES_AT: int(expires_at.timestamp()),
        }
        if user_id is not None:
            claims[CLAIM_USER_ID] = user_id

        encoded = jwt.encode(claims, self.secret_key, algorithm=self.algorithm)

        logger.info(
            "link_signed",
            session_id=session_id,
            user_id=user_id,
            expires_at=expires_at.isoformat(),
            algorithm=self.algorithm,
        )

        return SignedLink(token=encoded, expires_in=ttl_seconds, expires_at=expires_at)


class LinkVerifier:
    """Validates presented link tokens."""

    def __init__(self, secret_key: Optional[str], algorithm: str = JWT_ALGORITHM_DEFAULT):
        self.secret_key = secret_key
        self.algorithm = algorithm

    def check(self, token: Optional[str]) -> VerificationResult:
        """Verify a token and report the outcome explicitly.

        Args:
            token: The raw token string

        Returns:
            VerificationResult: The grant, or the reason it was rejected
        """
        if not token or not token.strip():
            return VerificationResult.rejected(VerificationFailure.EMPTY)

        if not self.secret_key:
            return self._reject(VerificationFailure.UNCONFIGURED)

        token = token.strip()
        if (
            len(token) < JWT_TOKEN_MIN_LENGTH
            or len(token) > JWT_TOKEN_MAX_LENGTH
            or not JWT_TOKEN_REGEX.match(token)
        ):
            return self._reject(VerificationFailure.MALFORMED)

        try:
            claims = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"require_exp": True},
            )
        except ExpiredSignatureError:
            return self._reject(VerificationFailure.EXPIRED)
        except JWTClaimsError:
            return self._reject(VerificationFailure.MALFORMED)
        except JWTError as e:
            # Signature mismatch and undecodable segments both land here
            if "signature" in str(e).lower():
                return self._reject(VerificationFailure.BAD_SIGNATURE)
            return self._reject(VerificationFailure.MALFORMED)

        session_id = claims.get(CLAIM_SESSION_ID)
        if session_id is None or not str(session_id).strip():
            return self._reject(VerificationFailure.MISSING_SESSION)

        grant = AccessToken.from_claims(claims)
        logger.info(
            "link_verified",
            session_id=grant.session_id,
            expires_at=grant.expires_at.isoformat(),
        )
        return VerificationResult.accepted(grant)

    def verify(self, token: Optional[str]) -> Optional[AccessToken]:
        """Verify a token, returning None when it is not acceptable."""
        return self.check(token).grant

    def _reject(self, failure: VerificationFailure) -> VerificationResult:
        logger.warning("link_rejected", reason=failure.value)
        return VerificationResult.rejected(failure)


def get_link_signer() -> LinkSigner:
    """Build a signer from application settings."""
    return LinkSigner(settings.EXTERNAL_LINK_SECRET, settings.LINK_JWT_ALGORITHM)


def get_link_verifier() -> LinkVerifier:
    """Build a verifier from application settings."""
    return LinkVerifier(settings.EXTERNAL_LINK_SECRET, settings.LINK_JWT_ALGORITHM)
