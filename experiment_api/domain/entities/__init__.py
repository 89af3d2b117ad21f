"""Domain entities."""

from .access_token import (
    AccessToken,
    SignedLink,
)
from .lookup_query import (
    DOCUMENT_ID_FIELD,
    LookupQuery,
    MatchClause,
)
from .session_record import SessionRecord

__all__ = [
    "AccessToken",
    "DOCUMENT_ID_FIELD",
    "LookupQuery",
    "MatchClause",
    "SessionRecord",
    "SignedLink",
]
