"""
Global fixtures for all unit tests.

This conftest provides autouse fixtures that prevent real external service calls:
- MongoDB connection attempts (would cause 5-30s timeout per test)
- Environment variable isolation (prevents credential leakage)
- Repository factory state leaking between tests

These fixtures apply automatically to ALL tests in tests/unit/.
"""

import os
import pytest
from unittest.mock import patch, MagicMock

from src.common.repositories import reset_repositories
from src.common.repositories.mongo_repository import MongoCollectionRepository

# Set test environment BEFORE any imports to prevent Config from loading real values
os.environ["ENVIRONMENT"] = "development"


@pytest.fixture(autouse=True)
def mock_mongodb():
    """
    Prevent MongoDB connection attempts in all unit tests.

    MongoClient("mongodb://localhost:27017") would try to reach a server,
    causing a 5-30s timeout per test.
    """
    with patch("src.common.repositories.mongo_repository.MongoClient") as mock_client:
        mock_instance = MagicMock()
        mock_db = MagicMock()
        mock_collection = MagicMock()

        # Setup chain: client["db"]["collection"]
        mock_instance.__getitem__ = MagicMock(return_value=mock_db)
        mock_db.__getitem__ = MagicMock(return_value=mock_collection)
        mock_collection.find_one = MagicMock(return_value=None)
        mock_collection.find = MagicMock(return_value=[])

        mock_client.return_value = mock_instance
        yield mock_client


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch):
    """
    Isolate test environment from real credentials and configurations.

    This prevents:
    - A developer's .env pointing tests at a real database
    - A real API token being sent by the list clients
    """
    monkeypatch.setenv("ENVIRONMENT", "development")
    monkeypatch.setenv("MONGODB_URI", "mongodb://localhost:27017")
    monkeypatch.setenv("MONGO_DB_NAME", "talenthub_test")
    monkeypatch.delenv("API_SECRET", raising=False)
    monkeypatch.delenv("TALENTHUB_API_TOKEN", raising=False)


@pytest.fixture(autouse=True)
def reset_repository_state():
    """Drop cached repositories and the shared client around every test."""
    reset_repositories()
    MongoCollectionRepository.reset_connection()
    yield
    reset_repositories()
    MongoCollectionRepository.reset_connection()
