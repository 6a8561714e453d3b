"""
MongoDB Collection Repository

pymongo-backed implementation of CollectionRepositoryInterface. All
repositories share one MongoClient so the connection pool is reused across
collections and requests.
"""

import logging
from typing import Any, Dict, List, Optional

from pymongo import MongoClient
from pymongo.collection import Collection

from .base import CollectionRepositoryInterface, WriteResult

logger = logging.getLogger(__name__)


class MongoCollectionRepository(CollectionRepositoryInterface):
    """
    Repository for one collection of the TalentHub database.

    Connection Management:
    - Class-level MongoClient created on first use and shared
    - PyMongo handles the connection pool internally

    Error Handling:
    - Fail-fast: all driver errors propagate to the caller
    """

    _client: Optional[MongoClient] = None

    def __init__(
        self,
        mongodb_uri: str,
        database: str = "talenthub",
        collection: str = "jobs",
        server_selection_timeout_ms: int = 5000,
    ):
        """
        Args:
            mongodb_uri: MongoDB connection string
            database: Database name (default: "talenthub")
            collection: Collection name
            server_selection_timeout_ms: How long to wait for a server
        """
        self._mongodb_uri = mongodb_uri
        self._database_name = database
        self._collection_name = collection
        self._server_selection_timeout_ms = server_selection_timeout_ms

    @property
    def collection_name(self) -> str:
        return self._collection_name

    def _get_collection(self) -> Collection:
        """Get the collection, creating the shared client if needed."""
        if MongoCollectionRepository._client is None:
            MongoCollectionRepository._client = MongoClient(
                self._mongodb_uri,
                serverSelectionTimeoutMS=self._server_selection_timeout_ms,
            )
            logger.info(f"MongoDB client created for database '{self._database_name}'")
        return MongoCollectionRepository._client[self._database_name][self._collection_name]

    def find_one(
        self, filter: Dict[str, Any], projection: Optional[Dict[str, Any]] = None
    ) -> Optional[Dict[str, Any]]:
        collection = self._get_collection()
        return collection.find_one(filter, projection)

    def find(
        self,
        filter: Dict[str, Any],
        projection: Optional[Dict[str, Any]] = None,
        sort: Optional[List[tuple]] = None,
        limit: int = 0,
        skip: int = 0,
    ) -> List[Dict[str, Any]]:
        collection = self._get_collection()
        cursor = collection.find(filter, projection)

        if sort:
            cursor = cursor.sort(sort)
        if skip > 0:
            cursor = cursor.skip(skip)
        if limit > 0:
            cursor = cursor.limit(limit)

        return list(cursor)

    def count_documents(self, filter: Dict[str, Any]) -> int:
        collection = self._get_collection()
        return collection.count_documents(filter)

    def distinct(self, key: str, filter: Optional[Dict[str, Any]] = None) -> List[Any]:
        collection = self._get_collection()
        return list(collection.distinct(key, filter or {}))

    def insert_many(self, documents: List[Dict[str, Any]]) -> WriteResult:
        if not documents:
            return WriteResult(matched_count=0, modified_count=0, inserted_ids=[])
        collection = self._get_collection()
        result = collection.insert_many(documents)
        return WriteResult(
            matched_count=0,
            modified_count=0,
            inserted_ids=[str(i) for i in result.inserted_ids],
        )

    def delete_many(self, filter: Dict[str, Any]) -> WriteResult:
        collection = self._get_collection()
        result = collection.delete_many(filter)
        return WriteResult(
            matched_count=result.deleted_count,
            modified_count=result.deleted_count,
        )

    def ping(self) -> bool:
        """Check the server is reachable. Raises on failure."""
        self._get_collection()
        MongoCollectionRepository._client.admin.command("ping")
        return True

    @classmethod
    def reset_connection(cls) -> None:
        """
        Reset the shared client.

        Used for testing or connection recovery.
        """
        if cls._client:
            cls._client.close()
        cls._client = None
        logger.info("MongoDB repository connection reset")
