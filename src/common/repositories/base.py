"""
Repository Interface Definitions

Defines the abstract interface for collection access used by the list
endpoints. Listings only read; the write methods exist for seeding and
maintenance scripts.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional


@dataclass
class WriteResult:
    """
    Result of a write operation.

    Attributes:
        matched_count: Number of documents that matched the filter
        modified_count: Number of documents modified (or deleted)
        inserted_ids: IDs of inserted documents, as strings
    """
    matched_count: int
    modified_count: int
    inserted_ids: Optional[List[str]] = None


class CollectionRepositoryInterface(ABC):
    """
    Abstract interface for a single MongoDB collection.

    Implementations:
    - MongoCollectionRepository: pymongo-backed, shared client

    All methods are fail-fast: driver errors propagate to the caller.
    """

    @property
    @abstractmethod
    def collection_name(self) -> str:
        """Name of the underlying collection."""

    @abstractmethod
    def find_one(
        self, filter: Dict[str, Any], projection: Optional[Dict[str, Any]] = None
    ) -> Optional[Dict[str, Any]]:
        """
        Find a single document.

        Args:
            filter: MongoDB query filter (e.g., {"_id": ObjectId(...)})
            projection: Fields to include/exclude

        Returns:
            Document dict if found, None otherwise
        """

    @abstractmethod
    def find(
        self,
        filter: Dict[str, Any],
        projection: Optional[Dict[str, Any]] = None,
        sort: Optional[List[tuple]] = None,
        limit: int = 0,
        skip: int = 0,
    ) -> List[Dict[str, Any]]:
        """
        Find multiple documents.

        Args:
            filter: MongoDB query filter
            projection: Fields to include/exclude
            sort: Sort order as list of (field, direction) tuples
            limit: Maximum documents to return (0 = no limit)
            skip: Number of documents to skip

        Returns:
            List of matching documents
        """

    @abstractmethod
    def count_documents(self, filter: Dict[str, Any]) -> int:
        """Count documents matching the filter."""

    @abstractmethod
    def distinct(self, key: str, filter: Optional[Dict[str, Any]] = None) -> List[Any]:
        """Distinct values of `key` among documents matching the filter."""

    @abstractmethod
    def insert_many(self, documents: List[Dict[str, Any]]) -> WriteResult:
        """Insert documents; returns WriteResult with inserted_ids set."""

    @abstractmethod
    def delete_many(self, filter: Dict[str, Any]) -> WriteResult:
        """Delete documents matching the filter."""

    @abstractmethod
    def ping(self) -> bool:
        """Check the backing store is reachable. Raises on failure."""
