"""Lookup query value objects."""

from dataclasses import dataclass
from typing import Tuple

# Marker field for a match on the store's own document id.
DOCUMENT_ID_FIELD = "__name__"


@dataclass(frozen=True)
class MatchClause:
    """Single equality clause of a lookup query."""

    field: str
    value: str

    @property
    def is_document_id(self) -> bool:
        return self.field == DOCUMENT_ID_FIELD


@dataclass(frozen=True)
class LookupQuery:
    """Alternative match clauses combined with logical OR.

    At most one document is expected to match. When several do, the first
    one the store returns wins.
    """

    clauses: Tuple[MatchClause, ...]

    @property
    def has_document_id_clause(self) -> bool:
        return any(clause.is_document_id for clause in self.clauses)
