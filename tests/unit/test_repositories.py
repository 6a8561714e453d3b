"""
Tests for the repository pattern implementation.

Tests the collection repository abstraction the listing service reads
through.
"""

import pytest
from unittest.mock import MagicMock, patch

from src.common.repositories import (
    JOBS,
    USERS,
    CollectionRepositoryInterface,
    RepositoryConfig,
    WriteResult,
    configure_repositories,
    get_repository,
    reset_repositories,
)
from src.common.repositories.mongo_repository import MongoCollectionRepository


class TestWriteResult:
    """Tests for WriteResult dataclass."""

    def test_write_result_defaults(self):
        result = WriteResult(matched_count=1, modified_count=1)

        assert result.matched_count == 1
        assert result.modified_count == 1
        assert result.inserted_ids is None


class TestRepositoryConfig:
    """Tests for RepositoryConfig."""

    def test_config_from_env_minimal(self):
        """Should load minimal config from environment."""
        with patch.dict("os.environ", {"MONGODB_URI": "mongodb://atlas"}, clear=True):
            config = RepositoryConfig.from_env()

            assert config.mongodb_uri == "mongodb://atlas"
            assert config.database == "talenthub"
            assert config.server_selection_timeout_ms == 5000

    def test_config_from_env_custom(self):
        env = {
            "MONGODB_URI": "mongodb://atlas",
            "MONGO_DB_NAME": "marketplace",
            "MONGO_SERVER_SELECTION_TIMEOUT_MS": "1500",
        }
        with patch.dict("os.environ", env, clear=True):
            config = RepositoryConfig.from_env()

            assert config.database == "marketplace"
            assert config.server_selection_timeout_ms == 1500

    def test_config_invalid_timeout_falls_back(self):
        env = {"MONGODB_URI": "mongodb://atlas", "MONGO_SERVER_SELECTION_TIMEOUT_MS": "soon"}
        with patch.dict("os.environ", env, clear=True):
            assert RepositoryConfig.from_env().server_selection_timeout_ms == 5000

    def test_config_requires_mongodb_uri(self):
        """Should raise if MONGODB_URI not set."""
        with patch.dict("os.environ", {}, clear=True):
            with pytest.raises(ValueError, match="MONGODB_URI"):
                RepositoryConfig.from_env()


class TestRepositoryFactory:
    """Tests for get_repository factory function."""

    def test_returns_interface_implementation(self):
        repo = get_repository(JOBS)

        assert isinstance(repo, CollectionRepositoryInterface)
        assert repo.collection_name == "jobs"

    def test_caches_per_collection(self):
        assert get_repository(JOBS) is get_repository(JOBS)
        assert get_repository(JOBS) is not get_repository(USERS)

    def test_unknown_collection(self):
        with pytest.raises(ValueError, match="Unknown collection"):
            get_repository("payments")

    def test_reset_creates_new_instance(self):
        first = get_repository(JOBS)
        reset_repositories()

        assert get_repository(JOBS) is not first

    def test_configure_overrides_environment(self, mock_mongodb):
        configure_repositories(RepositoryConfig(mongodb_uri="mongodb://explicit", database="other"))

        get_repository(JOBS).count_documents({})

        mock_mongodb.assert_called_once_with("mongodb://explicit", serverSelectionTimeoutMS=5000)
        mock_mongodb.return_value.__getitem__.assert_called_with("other")


class TestMongoCollectionRepository:
    """Tests for the pymongo-backed repository."""

    @pytest.fixture
    def collection(self, mock_mongodb):
        collection = MagicMock()
        mock_mongodb.return_value.__getitem__.return_value.__getitem__.return_value = collection
        return collection

    @pytest.fixture
    def repo(self):
        return MongoCollectionRepository("mongodb://localhost:27017", collection="jobs")

    def test_find_applies_sort_skip_limit(self, repo, collection):
        cursor = MagicMock()
        cursor.sort.return_value = cursor
        cursor.skip.return_value = cursor
        cursor.limit.return_value = cursor
        cursor.__iter__.return_value = iter([{"title": "A"}])
        collection.find.return_value = cursor

        result = repo.find({"status": "active"}, sort=[("createdAt", -1)], limit=10, skip=20)

        collection.find.assert_called_once_with({"status": "active"}, None)
        cursor.sort.assert_called_once_with([("createdAt", -1)])
        cursor.skip.assert_called_once_with(20)
        cursor.limit.assert_called_once_with(10)
        assert result == [{"title": "A"}]

    def test_find_without_skip_or_limit(self, repo, collection):
        cursor = MagicMock()
        cursor.__iter__.return_value = iter([])
        collection.find.return_value = cursor

        repo.find({})

        cursor.skip.assert_not_called()
        cursor.limit.assert_not_called()

    def test_count_documents(self, repo, collection):
        collection.count_documents.return_value = 25

        assert repo.count_documents({"status": "active"}) == 25

    def test_distinct_defaults_to_empty_filter(self, repo, collection):
        collection.distinct.return_value = ["a", "b"]

        assert repo.distinct("_id") == ["a", "b"]
        collection.distinct.assert_called_once_with("_id", {})

    def test_insert_many_empty_is_noop(self, repo, collection):
        result = repo.insert_many([])

        assert result.inserted_ids == []
        collection.insert_many.assert_not_called()

    def test_insert_many_returns_ids(self, repo, collection):
        collection.insert_many.return_value = MagicMock(inserted_ids=["x", "y"])

        assert repo.insert_many([{}, {}]).inserted_ids == ["x", "y"]

    def test_delete_many_counts(self, repo, collection):
        collection.delete_many.return_value = MagicMock(deleted_count=3)

        assert repo.delete_many({}).modified_count == 3

    def test_client_is_shared(self, mock_mongodb, collection):
        MongoCollectionRepository("mongodb://localhost:27017", collection="jobs").count_documents({})
        MongoCollectionRepository("mongodb://localhost:27017", collection="users").count_documents({})

        assert mock_mongodb.call_count == 1

    def test_ping(self, repo, mock_mongodb):
        assert repo.ping() is True
        mock_mongodb.return_value.admin.command.assert_called_once_with("ping")
