"""Tests for CursorPaginator.fetch_all.

Verifies:
- Pages are followed via endCursor and nodes come back in page order.
- A limit truncates to exactly min(limit, total) items and stops requesting.
- hasNextPage=False ends pagination regardless of the remaining limit.
- An absent connection path is an empty result, not an error.
- limit=0 issues no request.
- A failing page aborts the whole fetch.
- A repeated endCursor stops pagination instead of looping.
"""

import pytest

from linear_node.config import Settings
from linear_node.connectors.exceptions import ApiError
from linear_node.connectors.pagination import CursorPaginator
from linear_node.models.graphql import GraphQLRequest


REQUEST = GraphQLRequest(query="query Teams ($first: Int, $after: String) { ... }")


def _nodes(start, count):
    return [{"id": str(i), "name": f"Team {i}"} for i in range(start, start + count)]


def _sent_variables(mock_client):
    return [call.args[0].variables for call in mock_client.send.await_args_list]


def _paged(make_page, path, total, page_size):
    """Responses for a provider holding ``total`` nodes."""
    pages = []
    for start in range(0, max(total, 1), page_size):
        count = min(page_size, total - start)
        has_next = start + page_size < total
        pages.append(
            make_page(path, _nodes(start, count), has_next, f"c{start + count}" if has_next else None)
        )
    return pages


pytestmark = pytest.mark.asyncio


class TestFetchAll:
    """Tests for unlimited pagination."""

    async def test_three_pages_in_order(self, mock_client, paginator, make_page):
        """10/10/5 nodes across three pages yields 25 nodes in page order."""
        mock_client.send.side_effect = [
            make_page("data.teams", _nodes(0, 10), True, "c10"),
            make_page("data.teams", _nodes(10, 10), True, "c20"),
            make_page("data.teams", _nodes(20, 5), False, None),
        ]

        nodes = await paginator.fetch_all("data.teams", REQUEST)

        assert [n["id"] for n in nodes] == [str(i) for i in range(25)]
        assert mock_client.send.await_count == 3

    async def test_cursor_advancement(self, mock_client, paginator, make_page):
        """First call has after=None; later calls pass the previous endCursor."""
        mock_client.send.side_effect = [
            make_page("data.teams", _nodes(0, 10), True, "c10"),
            make_page("data.teams", _nodes(10, 2), False, "c12"),
        ]

        await paginator.fetch_all("data.teams", REQUEST)

        sent = _sent_variables(mock_client)
        assert sent[0] == {"first": 10, "after": None}
        assert sent[1] == {"first": 10, "after": "c10"}

    async def test_base_request_not_mutated(self, mock_client, paginator, make_page):
        base = GraphQLRequest(query="q", variables={"filter": {"x": 1}})
        mock_client.send.return_value = make_page("data.teams", [], False)

        await paginator.fetch_all("data.teams", base)

        assert base.variables == {"filter": {"x": 1}}
        assert _sent_variables(mock_client)[0]["filter"] == {"x": 1}

    async def test_stops_when_no_next_page(self, mock_client, paginator, make_page):
        """hasNextPage=False ends pagination even with a cursor present."""
        mock_client.send.return_value = make_page("data.teams", _nodes(0, 3), False, "c3")

        nodes = await paginator.fetch_all("data.teams", REQUEST, limit=100)

        assert len(nodes) == 3
        assert mock_client.send.await_count == 1

    async def test_absent_path_is_empty(self, mock_client, paginator):
        mock_client.send.return_value = {"data": {"somethingElse": {}}}

        nodes = await paginator.fetch_all("data.teams", REQUEST)

        assert nodes == []
        assert mock_client.send.await_count == 1

    async def test_null_connection_is_empty(self, mock_client, paginator):
        mock_client.send.return_value = {"data": {"teams": None}}

        assert await paginator.fetch_all("data.teams", REQUEST) == []

    async def test_missing_cursor_stops(self, mock_client, paginator, make_page):
        """hasNextPage without an endCursor cannot be followed."""
        mock_client.send.return_value = make_page("data.teams", _nodes(0, 10), True, None)

        nodes = await paginator.fetch_all("data.teams", REQUEST)

        assert len(nodes) == 10
        assert mock_client.send.await_count == 1

    async def test_repeated_cursor_stops(self, mock_client, paginator, make_page):
        """A provider that keeps returning the same endCursor is not followed forever."""
        mock_client.send.return_value = make_page("data.teams", _nodes(0, 10), True, "c10")

        nodes = await paginator.fetch_all("data.teams", REQUEST)

        assert len(nodes) == 20
        assert mock_client.send.await_count == 2
        assert [v["after"] for v in _sent_variables(mock_client)] == [None, "c10"]

    async def test_malformed_connection(self, mock_client, paginator):
        mock_client.send.return_value = {"data": {"teams": {"nodes": "oops"}}}

        with pytest.raises(ApiError, match="Malformed connection"):
            await paginator.fetch_all("data.teams", REQUEST)

    async def test_non_mapping_connection(self, mock_client, paginator):
        mock_client.send.return_value = {"data": {"teams": [1, 2]}}

        with pytest.raises(ApiError, match="Expected a connection"):
            await paginator.fetch_all("data.teams", REQUEST)

    async def test_failure_mid_sequence_discards_pages(self, mock_client, paginator, make_page):
        mock_client.send.side_effect = [
            make_page("data.teams", _nodes(0, 10), True, "c10"),
            ApiError("GraphQL error: boom"),
        ]

        with pytest.raises(ApiError, match="boom"):
            await paginator.fetch_all("data.teams", REQUEST)

        assert mock_client.send.await_count == 2


class TestFetchAllLimit:
    """Tests for limited pagination."""

    @pytest.mark.parametrize(
        "limit,total",
        [(1, 25), (5, 7), (10, 25), (15, 25), (25, 25), (30, 25), (3, 0), (None, 25), (None, 0)],
    )
    async def test_returns_min_of_limit_and_total(self, mock_client, make_page, limit, total):
        paginator = CursorPaginator(mock_client, page_size=10)
        mock_client.send.side_effect = _paged(make_page, "data.issues", total, 10)

        nodes = await paginator.fetch_all("data.issues", REQUEST, limit=limit)

        expected = total if limit is None else min(limit, total)
        assert len(nodes) == expected
        assert [n["id"] for n in nodes] == [str(i) for i in range(expected)]
        # Never more than ceil(total / page_size) calls (at least one)
        assert mock_client.send.await_count <= max(1, -(-total // 10))

    async def test_page_size_capped_by_limit(self, mock_client, paginator, make_page):
        """first = min(limit, page_size)."""
        mock_client.send.return_value = make_page("data.issues", _nodes(0, 5), True, "c5")

        nodes = await paginator.fetch_all("data.issues", REQUEST, limit=5)

        assert len(nodes) == 5
        assert _sent_variables(mock_client)[0]["first"] == 5
        assert mock_client.send.await_count == 1

    async def test_truncates_oversized_page(self, mock_client, paginator, make_page):
        """A page larger than requested is truncated to the limit."""
        mock_client.send.return_value = make_page("data.issues", _nodes(0, 10), True, "c10")

        nodes = await paginator.fetch_all("data.issues", REQUEST, limit=4)

        assert [n["id"] for n in nodes] == ["0", "1", "2", "3"]

    async def test_zero_limit_issues_no_request(self, mock_client, paginator):
        assert await paginator.fetch_all("data.issues", REQUEST, limit=0) == []
        mock_client.send.assert_not_awaited()

    async def test_negative_limit_rejected(self, mock_client, paginator):
        with pytest.raises(ValueError):
            await paginator.fetch_all("data.issues", REQUEST, limit=-1)


class TestPaginatorConfig:

    async def test_invalid_page_size(self, mock_client):
        with pytest.raises(ValueError):
            CursorPaginator(mock_client, page_size=0)

    async def test_default_page_size(self, mock_client, make_page):
        mock_client.send.return_value = make_page("data.teams", [], False)

        await CursorPaginator(mock_client).fetch_all("data.teams", REQUEST)

        assert _sent_variables(mock_client)[0]["first"] == 50

    async def test_default_page_size_matches_settings(self, mock_client):
        assert CursorPaginator(mock_client).page_size == Settings().page_size
