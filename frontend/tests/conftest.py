"""
Shared fixtures for frontend tests.

Provides a mock list API client patched in place of the lazily created
ListFetchClient used by frontend/app.py.
"""

import pytest
from unittest.mock import MagicMock, patch

from frontend.api_client import ListResult
from src.common.pagination import PaginationDescriptor


@pytest.fixture
def client():
    """Create a test client for the Flask app."""
    # Import app here to avoid import-time side effects during collection
    from frontend.app import app

    app.config['TESTING'] = True
    with app.test_client() as client:
        yield client


@pytest.fixture
def mock_api():
    """Mock the list API client.

    frontend/app.py calls _get_client() for every proxied listing; this
    fixture patches it and defaults to an empty first page.
    """
    with patch('frontend.app._get_client') as mock_get_client:
        mock_client = MagicMock()
        mock_client.fetch.return_value = ListResult(
            items=[],
            pagination=PaginationDescriptor.build(page=1, limit=10, total=0),
        )
        mock_get_client.return_value = mock_client
        yield mock_client
