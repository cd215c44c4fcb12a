"""Test configuration and fixtures."""

import os
from unittest.mock import AsyncMock, MagicMock

import pytest

# Set test environment variables BEFORE importing the package
os.environ["LINEAR_ENVIRONMENT"] = "test"
os.environ["LINEAR_API_KEY"] = "lin_api_test_key"

from linear_node.config import get_settings
from linear_node.connectors.pagination import CursorPaginator


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are cached; reset them around each test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def mock_client():
    """A stand-in GraphQLClient whose send() is an AsyncMock."""
    client = MagicMock()
    client.send = AsyncMock()
    return client


@pytest.fixture
def paginator(mock_client):
    """Paginator over mock_client with a small page size."""
    return CursorPaginator(mock_client, page_size=10)


def connection_page(path, nodes, has_next_page=False, end_cursor=None):
    """Build a decoded response holding one connection page at ``path``."""
    page = {
        "nodes": nodes,
        "pageInfo": {"hasNextPage": has_next_page, "endCursor": end_cursor},
    }
    for key in reversed(path.split(".")):
        page = {key: page}
    return page


@pytest.fixture
def make_page():
    """Factory fixture for connection_page."""
    return connection_page
