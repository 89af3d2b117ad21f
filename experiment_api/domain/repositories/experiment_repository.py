"""Experiment repository interface.

This module defines the contract for reading stored experiment documents
without specifying the storage engine.
"""

from abc import (
    ABC,
    abstractmethod,
)
from typing import (
    Any,
    Dict,
    Optional,
)

from experiment_api.domain.entities import LookupQuery


class ExperimentRepositoryInterface(ABC):
    """Abstract repository interface for experiment documents."""

    @abstractmethod
    async def find_first(self, query: LookupQuery) -> Optional[Dict[str, Any]]:
        """Return the first document matching any clause of the query.

        Args:
            query: OR-combined match clauses

        Returns:
            Raw document data or None if nothing matches

        Raises:
            StorageError: If the store fails to answer
        """
        pass
