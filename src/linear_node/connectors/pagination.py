"""Relay-style cursor pagination over the GraphQL transport.

Expects the query to accept ``$first`` (Int) and ``$after`` (String) and
the connection at ``path`` to have the shape::

    { nodes: [...], pageInfo: { hasNextPage, endCursor } }
"""

import logging
from collections.abc import Mapping
from typing import Any, List, Optional

from pydantic import ValidationError

from ..config import DEFAULT_PAGE_SIZE
from ..models.graphql import Connection, GraphQLRequest
from .exceptions import ApiError
from .graphql import GraphQLClient
from .paths import ABSENT, extract

logger = logging.getLogger(__name__)


class CursorPaginator:
    """Collects every node of a connection, page by page."""

    def __init__(self, client: GraphQLClient, page_size: int = DEFAULT_PAGE_SIZE):
        if page_size < 1:
            raise ValueError("page_size must be at least 1")
        self.client = client
        self.page_size = page_size

    async def fetch_all(
        self,
        path: str,
        request: GraphQLRequest,
        limit: Optional[int] = None,
    ) -> List[Any]:
        """Follow ``endCursor`` until the connection is exhausted or ``limit`` is hit.

        Args:
            path: Dot-separated path to the connection in the response,
                  e.g. "data.issues".
            request: Base request; ``first`` and ``after`` are injected per page.
            limit: Maximum number of nodes to return. None means all.

        Returns:
            Nodes in page order, truncated to ``limit``.

        Raises:
            ApiError: A page request failed (nodes already collected are
                discarded) or the connection shape is malformed.
        """
        if limit is not None and limit < 0:
            raise ValueError("limit must not be negative")
        if limit == 0:
            return []

        first = min(limit, self.page_size) if limit is not None else self.page_size
        collected: List[Any] = []
        cursor: Optional[str] = None
        page = 0

        while True:
            response = await self.client.send(
                request.with_variables(first=first, after=cursor)
            )
            page += 1
            connection = _connection_at(response, path)
            collected.extend(connection.nodes)

            logger.debug(
                "Fetched page %d of %s: %d nodes (%d total)",
                page,
                path,
                len(connection.nodes),
                len(collected),
            )

            if limit is not None and len(collected) >= limit:
                if len(collected) > limit:
                    logger.debug("Truncating %s to limit=%d", path, limit)
                return collected[:limit]

            if not connection.page_info.has_next_page:
                return collected

            previous_cursor, cursor = cursor, connection.page_info.end_cursor
            if not cursor:
                logger.warning(
                    "%s reported hasNextPage without an endCursor; stopping after page %d",
                    path,
                    page,
                )
                return collected
            if cursor == previous_cursor:
                logger.warning(
                    "%s returned endCursor %r twice; stopping after page %d",
                    path,
                    cursor,
                    page,
                )
                return collected


def _connection_at(response: Any, path: str) -> Connection:
    """Parse the connection at ``path``; a missing or null one is empty."""
    value = extract(response, path)
    if value is ABSENT or value is None:
        return Connection()

    if not isinstance(value, Mapping):
        raise ApiError(f"Expected a connection at '{path}', got {type(value).__name__}")

    try:
        return Connection.model_validate(value)
    except ValidationError as exc:
        raise ApiError(f"Malformed connection at '{path}': {exc}") from exc
