"""
Tests for the Flask listing proxy.

Covers:
- Request building (defaults, filters, job board page size)
- Response shape with pager
- Upstream failure mapping
"""

import pytest

from frontend.api_client import ListResult
from frontend.app import resource_key_for
from src.common.error_handling import ListFetchFailed
from src.common.pagination import PaginationDescriptor


class TestResourceKey:
    @pytest.mark.parametrize("path,key", [
        ("jobs", "jobs"),
        ("jobs/search", "jobs"),
        ("jobs/category/Design", "jobs"),
        ("jobs/65a0/applications", "applications"),
        ("recruiters/65a0/jobs", "jobs"),
        ("talents/search", "talents"),
        ("admin/users", "users"),
        ("notifications/65a0", "notifications"),
        ("jobs/saved/65a0", "jobs"),
        ("applications/65a0/messages", "messages"),
        ("messages/unread/65a0", "messages"),
        ("users/search", "users"),
        ("recruiters/65a0/search-talents", "talents"),
        ("admin/notifications", "notifications"),
        ("payments", None),
    ])
    def test_key_from_path(self, path, key):
        assert resource_key_for(path) == key


class TestListProxy:
    """Tests for GET /api/<resource>."""

    def test_job_board_defaults_to_twelve(self, client, mock_api):
        client.get("/api/jobs")

        request, resource_key = mock_api.fetch.call_args.args
        assert request.path == "/jobs"
        assert request.params == {"page": 1, "limit": 12}
        assert resource_key == "jobs"

    def test_other_listings_default_to_ten(self, client, mock_api):
        client.get("/api/jobs/search?q=python&location=")

        request, _ = mock_api.fetch.call_args.args
        assert request.params == {"page": 1, "limit": 10, "q": "python"}

    def test_page_and_limit_forwarded(self, client, mock_api):
        client.get("/api/recruiters/65a000000000000000000001/applications?page=3&limit=5&status=pending")

        request, resource_key = mock_api.fetch.call_args.args
        assert request.params == {"page": 3, "limit": 5, "status": "pending"}
        assert resource_key == "applications"

    def test_response_includes_pager(self, client, mock_api):
        mock_api.fetch.return_value = ListResult(
            items=[{"title": "Designer"}],
            pagination=PaginationDescriptor.build(page=2, limit=10, total=25),
        )

        response = client.get("/api/jobs?page=2&limit=10")

        assert response.status_code == 200
        body = response.get_json()
        assert body["status"] == "success"
        assert body["data"]["jobs"] == [{"title": "Designer"}]
        assert body["data"]["pagination"]["pages"] == 3
        assert [p["page"] for p in body["pager"]["pages"]] == [1, 2, 3]
        assert body["pager"]["previous"]["page"] == 1

    def test_single_page_has_null_pager(self, client, mock_api):
        body = client.get("/api/jobs").get_json()

        assert body["pager"] is None

    def test_unknown_listing(self, client, mock_api):
        response = client.get("/api/payments")

        assert response.status_code == 404
        mock_api.fetch.assert_not_called()

    def test_non_integer_page(self, client, mock_api):
        response = client.get("/api/jobs?page=two")

        assert response.status_code == 400
        assert response.get_json()["status"] == "error"

    @pytest.mark.parametrize("query", ["page=0", "page=-2", "limit=0", "limit=-5"])
    def test_non_positive_page_or_limit_rejected(self, client, mock_api, query):
        response = client.get(f"/api/jobs?{query}")

        assert response.status_code == 400
        assert response.get_json()["status"] == "error"
        mock_api.fetch.assert_not_called()


class TestUpstreamFailures:
    @pytest.mark.parametrize("status_code,expected", [
        (504, 504),
        (503, 503),
        (500, 502),
        (None, 502),
        (400, 400),
    ])
    def test_status_mapping(self, client, mock_api, status_code, expected):
        mock_api.fetch.side_effect = ListFetchFailed("failed", resource="/jobs", status_code=status_code)

        response = client.get("/api/jobs")

        assert response.status_code == expected
        assert response.get_json() == {"status": "error", "message": "failed"}

    def test_server_message_is_surfaced(self, client, mock_api):
        mock_api.fetch.side_effect = ListFetchFailed(
            "List API returned 400", status_code=400, server_message="Invalid status 'x'"
        )

        assert client.get("/api/jobs?status=x").get_json()["message"] == "Invalid status 'x'"


class TestHealth:
    def test_health(self, client):
        body = client.get("/health").get_json()

        assert body["status"] == "healthy"
        assert body["version"]
