"""Firestore experiment repository.

Translates a LookupQuery into a single Firestore OR query over the
experiments collection.
"""

import base64
from typing import (
    Any,
    Dict,
    List,
    Optional,
)

from google.api_core.exceptions import GoogleAPIError
from google.cloud.firestore import (
    AsyncClient,
    AsyncCollectionReference,
    GeoPoint,
)
from google.cloud.firestore_v1.base_document import BaseDocumentReference
from google.cloud.firestore_v1.base_query import (
    FieldFilter,
    Or,
)
from google.cloud.firestore_v1.field_path import FieldPath

from experiment_api.core.logging import logger
from experiment_api.domain.entities import LookupQuery
from experiment_api.domain.exceptions import StorageError
from experiment_api.domain.repositories import ExperimentRepositoryInterface


def to_json_safe(value: Any) -> Any:
    """Convert Firestore-native values into plain JSON types.

    Timestamps are datetimes and are left to the response serializer. Maps
    and arrays are converted recursively.
    """
    if isinstance(value, dict):
        return {key: to_json_safe(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json_safe(item) for item in value]
    if isinstance(value, GeoPoint):
        return {"latitude": value.latitude, "longitude": value.longitude}
    if isinstance(value, BaseDocumentReference):
        return value.path
    if isinstance(value, bytes):
        return base64.b64encode(value).decode("ascii")
    return value


class FirestoreExperimentRepository(ExperimentRepositoryInterface):
    """Firestore implementation of the experiment repository."""

    def __init__(self, client: Optional[AsyncClient], collection_name: str = "experiments"):
        """Initialize the repository.

        Args:
            client: Connected Firestore client, None when the store is unavailable
            collection_name: Name of the experiments collection
        """
        self.collection_name = collection_name
        self._client = client

    @property
    def collection(self) -> AsyncCollectionReference:
        """Get collection reference."""
        if self._client is None:
            raise StorageError("find_first", "Firestore client is not connected")
        return self._client.collection(self.collection_name)

    def _build_filters(self, query: LookupQuery) -> List[FieldFilter]:
        filters = []
        for clause in query.clauses:
            if clause.is_document_id:
                filters.append(
                    FieldFilter(
                        FieldPath.document_id(),
                        "==",
                        self.collection.document(clause.value),
                    )
                )
            else:
                filters.append(FieldFilter(clause.field, "==", clause.value))
        return filters

    async def find_first(self, query: LookupQuery) -> Optional[Dict[str, Any]]:
        """Return the first document matching any clause of the query.

        Args:
            query: OR-combined match clauses

        Returns:
            Optional[Dict[str, Any]]: Document data with its id, or None

        Raises:
            StorageError: If Firestore fails to answer
        """
        try:
            firestore_query = self.collection.where(
                filter=Or(filters=self._build_filters(query))
            ).limit(1)

            async for snapshot in firestore_query.stream():
                data = to_json_safe(snapshot.to_dict() or {})
                data["id"] = snapshot.id
                return data
        except (GoogleAPIError, ValueError) as e:
            logger.error(
                "experiment_query_failed",
                collection=self.collection_name,
                error=str(e),
                exc_info=True,
            )
            raise StorageError("find_first", str(e)) from e

        return None
