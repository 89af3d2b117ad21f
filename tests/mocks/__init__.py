"""Mock services for testing.

This package contains in-memory implementations of external services
to facilitate testing without requiring actual service connections.
"""

from typing import (
    Any,
    Dict,
    List,
    Optional,
    Tuple,
)

from experiment_api.domain.entities import (
    LookupQuery,
    MatchClause,
)
from experiment_api.domain.exceptions import StorageError
from experiment_api.domain.repositories import ExperimentRepositoryInterface


class InMemoryExperimentRepository(ExperimentRepositoryInterface):
    """Experiment store that evaluates lookup queries over dicts.

    Documents are scanned in insertion order, so the first inserted match
    is the one returned.
    """

    def __init__(self):
        self.documents: List[Tuple[str, Dict[str, Any]]] = []
        self.queries: List[LookupQuery] = []
        self.fail_with: Optional[Exception] = None
        self._next_id = 1

    def add(self, data: Dict[str, Any], doc_id: Optional[str] = None) -> str:
        """Store a document and return its id."""
        if doc_id is None:
            doc_id = f"doc{self._next_id:017d}"
            self._next_id += 1
        self.documents.append((doc_id, dict(data)))
        return doc_id

    def _matches(self, doc_id: str, data: Dict[str, Any], clause: MatchClause) -> bool:
        if clause.is_document_id:
            return doc_id == clause.value
        return data.get(clause.field) == clause.value

    async def find_first(self, query: LookupQuery) -> Optional[Dict[str, Any]]:
        self.queries.append(query)
        if self.fail_with is not None:
            raise StorageError("find_first", str(self.fail_with)) from self.fail_with

        for doc_id, data in self.documents:
            if any(self._matches(doc_id, data, clause) for clause in query.clauses):
                result = dict(data)
                result["id"] = doc_id
                return result
        return None
