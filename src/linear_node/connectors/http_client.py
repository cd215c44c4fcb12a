"""Shared async HTTP client.

A single httpx.AsyncClient is reused for every API call so connections
are pooled across items and pages.
"""

import logging
from typing import Optional

import httpx

from ..config import get_settings

logger = logging.getLogger(__name__)

_http_client: Optional[httpx.AsyncClient] = None


def get_http_client() -> httpx.AsyncClient:
    """Return the shared client, creating it on first use."""
    global _http_client
    if _http_client is None or _http_client.is_closed:
        settings = get_settings()
        _http_client = httpx.AsyncClient(
            timeout=httpx.Timeout(settings.request_timeout),
            limits=httpx.Limits(max_connections=20, max_keepalive_connections=10),
        )
        logger.debug("Created shared HTTP client (timeout=%.1fs)", settings.request_timeout)
    return _http_client


async def close_http_client() -> None:
    """Close the shared client and release pooled connections."""
    global _http_client
    if _http_client is not None:
        await _http_client.aclose()
        _http_client = None
