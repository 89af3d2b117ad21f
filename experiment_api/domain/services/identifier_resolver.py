"""Session identifier resolution and lookup query construction.

Stored experiment documents were written by several generations of the
tracking client, so the same session identifier can live under different
field names. The query built here matches any of them.
"""

from typing import Optional
from urllib.parse import unquote

from experiment_api.constants.validation import (
    DOCUMENT_ID_FORBIDDEN_VALUES,
    DOCUMENT_ID_MAX_BYTES,
    DOCUMENT_ID_RESERVED_REGEX,
)
from experiment_api.domain.entities import (
    DOCUMENT_ID_FIELD,
    AccessToken,
    LookupQuery,
    MatchClause,
)
from experiment_api.domain.exceptions import MissingIdentifierError

# Field clauses always present in a lookup, in this order.
SESSION_ID_FIELDS = ("sessionId", "SessionId")
EXTERNAL_ID_FIELDS = ("externalId", "externalID")


def is_valid_document_id(value: str) -> bool:
    """Check whether a value can be used as a Firestore document id.

    This is a format check only, no lookup happens.
    """
    if not value or not isinstance(value, str):
        return False
    if len(value.encode("utf-8")) > DOCUMENT_ID_MAX_BYTES:
        return False
    if "/" in value or value in DOCUMENT_ID_FORBIDDEN_VALUES:
        return False
    return not DOCUMENT_ID_RESERVED_REGEX.match(value)


def resolve(raw_id: Optional[str], decoded_token: Optional[AccessToken] = None) -> str:
    """Determine the canonical session identifier for a lookup.

    A verified token's session id overrides the request-supplied id.

    Args:
        raw_id: Identifier from the request path, possibly URL-encoded
        decoded_token: Verified access token, if any

    Returns:
        str: The canonical identifier

    Raises:
        MissingIdentifierError: If neither source yields a non-empty id
    """
    if decoded_token is not None and decoded_token.session_id:
        canonical = str(decoded_token.session_id)
    else:
        canonical = unquote(raw_id or "").strip()

    if not canonical:
        raise MissingIdentifierError()
    return canonical


def build_query(canonical_id: str) -> LookupQuery:
    """Build the OR query matching every known identifier field."""
    clauses = [MatchClause(field, canonical_id) for field in SESSION_ID_FIELDS]
    clauses.extend(MatchClause(field, canonical_id) for field in EXTERNAL_ID_FIELDS)

    # The driver rejects values that cannot form a document path
    if is_valid_document_id(canonical_id):
        clauses.append(MatchClause(DOCUMENT_ID_FIELD, canonical_id))

    return LookupQuery(clauses=tuple(clauses))
