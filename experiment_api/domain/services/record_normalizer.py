"""Mapping of raw stored documents into SessionRecord."""

from typing import (
    Any,
    Dict,
    Mapping,
    Optional,
    Tuple,
)

from experiment_api.domain.entities import SessionRecord

# Candidate field names per logical attribute, highest priority first.
FIELD_VARIANTS: Dict[str, Tuple[str, ...]] = {
    "id": ("id", "_id"),
    "session_id": ("sessionId", "SessionId"),
    "user_id": ("userId", "UserId"),
    "smile_percentage": ("smilePercentage", "SmilePercentage"),
    "neutral_percentage": ("neutralPercentage", "NeutralPercentage"),
    "surprised_percentage": ("surprisedPercentage", "SurprisedPercentage"),
    "total_expression_count": ("totalExpressionCount", "TotalExpressionCount"),
}

# Fields copied as stored.
PASSTHROUGH_FIELDS: Dict[str, str] = {
    "session_name": "sessionName",
    "created_at": "createdAt",
    "updated_at": "updatedAt",
    "start_time": "startTime",
    "end_time": "endTime",
    "metadata": "metadata",
    "source": "source",
    "server_info": "serverInfo",
}


def pick_first_defined(*values: Any) -> Optional[Any]:
    """Return the first value that is not None and not blank as a string."""
    for value in values:
        if value is not None and str(value).strip() != "":
            return value
    return None


def normalize(doc: Mapping[str, Any]) -> SessionRecord:
    """Normalize a raw stored document.

    Missing or blank values become None, never an error. No range checks
    are applied to percentages or counts.

    Args:
        doc: Raw document as returned by the store

    Returns:
        SessionRecord: The normalized record
    """
    values: Dict[str, Any] = {
        attribute: pick_first_defined(*(doc.get(name) for name in candidates))
        for attribute, candidates in FIELD_VARIANTS.items()
    }
    values.update(
        {attribute: doc.get(name) for attribute, name in PASSTHROUGH_FIELDS.items()}
    )

    if values["id"] is not None:
        values["id"] = str(values["id"])

    chat_messages = doc.get("chatMessages")
    values["chat_messages"] = list(chat_messages) if isinstance(chat_messages, list) else []

    return SessionRecord(**values)
