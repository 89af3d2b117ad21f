"""Session record domain entity.

A session record is one stored experiment result: expression metrics
collected during the session plus the chat transcript. Records are produced
by the tracking client and are read-only inside this service.
"""

from dataclasses import (
    dataclass,
    field,
)
from typing import (
    Any,
    Dict,
    List,
    Optional,
)


@dataclass
class SessionRecord:
    """Normalized, stable external shape of a stored session document.

    Percentages and counts are carried as stored; range handling belongs to
    the presentation layer.
    """

    id: Optional[str] = None
    session_id: Optional[Any] = None
    user_id: Optional[Any] = None
    session_name: Optional[Any] = None
    smile_percentage: Optional[Any] = None
    neutral_percentage: Optional[Any] = None
    surprised_percentage: Optional[Any] = None
    total_expression_count: Optional[Any] = None
    chat_messages: List[Any] = field(default_factory=list)
    created_at: Optional[Any] = None
    updated_at: Optional[Any] = None
    start_time: Optional[Any] = None
    end_time: Optional[Any] = None
    metadata: Optional[Dict[str, Any]] = None
    source: Optional[Any] = None
    server_info: Optional[Any] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the external camelCase representation.

        Fields without a value are left out, as the viewer treats a missing
        key and an empty value the same way.
        """
        data = {
            "id": self.id,
            "sessionId": self.session_id,
            "userId": self.user_id,
            "sessionName": self.session_name,
            "smilePercentage": self.smile_percentage,
            "neutralPercentage": self.neutral_percentage,
            "surprisedPercentage": self.surprised_percentage,
            "totalExpressionCount": self.total_expression_count,
            "chatMessages": self.chat_messages,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "metadata": self.metadata,
            "source": self.source,
            "serverInfo": self.server_info,
        }
        return {key: value for key, value in data.items() if value is not None}
