"""
Repository Configuration and Factory

Provides a factory returning one repository per collection, configured from
environment variables.
"""

import os
import logging
from dataclasses import dataclass
from typing import Dict, Optional

from .base import CollectionRepositoryInterface

logger = logging.getLogger(__name__)

# Collections served by the list endpoints
JOBS = "jobs"
APPLICATIONS = "applications"
USERS = "users"
TALENTS = "talents"
NOTIFICATIONS = "notifications"
SAVED_JOBS = "savedjobs"
MESSAGES = "messages"

KNOWN_COLLECTIONS = (JOBS, APPLICATIONS, USERS, TALENTS, NOTIFICATIONS, SAVED_JOBS, MESSAGES)


@dataclass
class RepositoryConfig:
    """
    Configuration for repository initialization.

    Loaded from environment variables with sensible defaults.
    """
    mongodb_uri: str
    database: str = "talenthub"
    server_selection_timeout_ms: int = 5000

    @classmethod
    def from_env(cls) -> "RepositoryConfig":
        """
        Load configuration from environment variables.

        Environment variables:
        - MONGODB_URI (required): MongoDB connection string
        - MONGO_DB_NAME: Database name (default: talenthub)
        - MONGO_SERVER_SELECTION_TIMEOUT_MS: Server selection timeout

        Raises:
            ValueError: If MONGODB_URI is not set
        """
        mongodb_uri = os.getenv("MONGODB_URI")
        if not mongodb_uri:
            raise ValueError("MONGODB_URI environment variable is required")

        timeout_str = os.getenv("MONGO_SERVER_SELECTION_TIMEOUT_MS", "5000")
        try:
            timeout_ms = int(timeout_str)
        except ValueError:
            logger.warning(
                f"Invalid MONGO_SERVER_SELECTION_TIMEOUT_MS '{timeout_str}', defaulting to 5000"
            )
            timeout_ms = 5000

        return cls(
            mongodb_uri=mongodb_uri,
            database=os.getenv("MONGO_DB_NAME", "talenthub"),
            server_selection_timeout_ms=timeout_ms,
        )


# One repository per collection
_repositories: Dict[str, CollectionRepositoryInterface] = {}
_config: Optional[RepositoryConfig] = None


def configure_repositories(config: RepositoryConfig) -> None:
    """
    Use an explicit configuration instead of reading the environment.

    Drops previously cached repositories so new ones pick up the config.
    """
    global _config
    reset_repositories()
    _config = config


def get_repository(collection: str) -> CollectionRepositoryInterface:
    """
    Get the repository for a collection.

    Instances are cached per collection name; all of them share the same
    MongoClient.

    Raises:
        ValueError: If the collection is unknown or MONGODB_URI is not set
    """
    global _config

    if collection not in KNOWN_COLLECTIONS:
        raise ValueError(f"Unknown collection '{collection}'")

    if collection not in _repositories:
        if _config is None:
            _config = RepositoryConfig.from_env()

        from .mongo_repository import MongoCollectionRepository
        _repositories[collection] = MongoCollectionRepository(
            mongodb_uri=_config.mongodb_uri,
            database=_config.database,
            collection=collection,
            server_selection_timeout_ms=_config.server_selection_timeout_ms,
        )
        logger.info(f"Initialized repository for '{_config.database}.{collection}'")

    return _repositories[collection]


def reset_repositories() -> None:
    """
    Drop cached repositories and close the shared client.

    Used for testing or when configuration changes.
    """
    global _config

    if _repositories:
        from .mongo_repository import MongoCollectionRepository
        MongoCollectionRepository.reset_connection()

    _repositories.clear()
    _config = None
    logger.info("Repository cache reset")
