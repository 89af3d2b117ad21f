"""Access token domain entity."""

from dataclasses import dataclass
from datetime import (
    UTC,
    datetime,
)
from typing import (
    Any,
    Dict,
    Optional,
)

from experiment_api.constants.auth import (
    CLAIM_EXPIRES_AT,
    CLAIM_SESSION_ID,
    CLAIM_USER_ID,
)


@dataclass(frozen=True)
class AccessToken:
    """Decoded claim set of a verified external link token.

    Validity lives entirely in the signature and ``expires_at``; nothing is
    stored server side, so a token cannot be revoked before it expires.
    """

    session_id: str
    expires_at: datetime
    user_id: Optional[str] = None

    @classmethod
    def from_claims(cls, claims: Dict[str, Any]) -> "AccessToken":
        """Build an access token from decoded JWT claims."""
        user_id = claims.get(CLAIM_USER_ID)
        return cls(
            session_id=str(claims[CLAIM_SESSION_ID]),
            expires_at=datetime.fromtimestamp(claims[CLAIM_EXPIRES_AT], tz=UTC),
            user_id=str(user_id) if user_id is not None else None,
        )


@dataclass(frozen=True)
class SignedLink:
    """A freshly issued external link token."""

    token: str
    expires_in: int
    expires_at: datetime
