"""
Repository Pattern for MongoDB Operations

Provides an abstraction layer over the TalentHub collections.

Public API:
- get_repository(name): Factory returning the repository for a collection
- CollectionRepositoryInterface: Abstract interface for a collection
- WriteResult: Result dataclass for write operations
"""

from .base import CollectionRepositoryInterface, WriteResult
from .config import (
    APPLICATIONS,
    JOBS,
    KNOWN_COLLECTIONS,
    MESSAGES,
    NOTIFICATIONS,
    SAVED_JOBS,
    TALENTS,
    USERS,
    RepositoryConfig,
    configure_repositories,
    get_repository,
    reset_repositories,
)

__all__ = [
    "get_repository",
    "configure_repositories",
    "reset_repositories",
    "CollectionRepositoryInterface",
    "WriteResult",
    "RepositoryConfig",
    "KNOWN_COLLECTIONS",
    "JOBS",
    "APPLICATIONS",
    "USERS",
    "TALENTS",
    "NOTIFICATIONS",
    "SAVED_JOBS",
    "MESSAGES",
]
