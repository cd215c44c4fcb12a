"""Maps (resource, operation) pairs onto Linear API calls.

Point operations issue exactly one request and unwrap the mutation or
query payload; list operations go through the cursor paginator.
"""

import logging
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Tuple, Union

from ..config import DEFAULT_PAGE_SIZE
from ..models.graphql import GraphQLRequest
from . import queries
from .exceptions import UnsupportedOperationError
from .graphql import GraphQLClient
from .pagination import CursorPaginator
from .paths import extract_or

logger = logging.getLogger(__name__)

# Callable(name, item_index[, default]) -> parameter value
ParameterLookup = Callable[..., Any]


class Resource(str, Enum):
    ISSUE = "issue"
    COMMENT = "comment"


class Operation(str, Enum):
    CREATE = "create"
    GET = "get"
    GET_ALL = "getAll"
    UPDATE = "update"
    DELETE = "delete"
    ADD_LINK = "addLink"
    ADD_COMMENT = "addComment"


Handler = Callable[[int, ParameterLookup], Awaitable[Any]]


class OperationDispatcher:
    """Runs one (resource, operation) for one input item."""

    def __init__(self, client: GraphQLClient, paginator: CursorPaginator):
        self.client = client
        self.paginator = paginator
        self._handlers: Dict[Tuple[Resource, Operation], Handler] = {
            (Resource.ISSUE, Operation.CREATE): self._create_issue,
            (Resource.ISSUE, Operation.GET): self._get_issue,
            (Resource.ISSUE, Operation.GET_ALL): self._get_all_issues,
            (Resource.ISSUE, Operation.UPDATE): self._update_issue,
            (Resource.ISSUE, Operation.DELETE): self._delete_issue,
            (Resource.ISSUE, Operation.ADD_LINK): self._add_issue_link,
            (Resource.COMMENT, Operation.ADD_COMMENT): self._add_comment,
        }

    @property
    def supported_operations(self) -> List[Tuple[Resource, Operation]]:
        return list(self._handlers)

    def resolve(
        self, resource: Union[Resource, str], operation: Union[Operation, str]
    ) -> Handler:
        """Return the handler for a pair or raise UnsupportedOperationError."""
        try:
            key = (Resource(resource), Operation(operation))
        except ValueError:
            raise UnsupportedOperationError(
                getattr(resource, "value", str(resource)),
                getattr(operation, "value", str(operation)),
            ) from None

        handler = self._handlers.get(key)
        if handler is None:
            raise UnsupportedOperationError(key[0].value, key[1].value)
        return handler

    async def execute(
        self,
        resource: Union[Resource, str],
        operation: Union[Operation, str],
        item_index: int,
        get_parameter: ParameterLookup,
    ) -> Union[Dict[str, Any], List[Any], None]:
        """Execute the operation for one item.

        Returns the unwrapped payload (a record, a list of records, or None
        when the response carried no data at the expected path).
        """
        handler = self.resolve(resource, operation)
        logger.debug(
            "Dispatching %s/%s for item %d",
            getattr(resource, "value", resource),
            getattr(operation, "value", operation),
            item_index,
        )
        return await handler(item_index, get_parameter)

    async def _point(self, query: str, variables: Dict[str, Any], path: str) -> Any:
        response = await self.client.send(
            GraphQLRequest(query=query, variables=variables)
        )
        return extract_or(response, path)

    # -- Issues ------------------------------------------------------------

    async def _create_issue(self, item_index: int, get_parameter: ParameterLookup):
        variables = {
            "teamId": get_parameter("teamId", item_index),
            "title": get_parameter("title", item_index),
            **get_parameter("additionalFields", item_index, {}),
        }
        return await self._point(
            queries.CREATE_ISSUE_MUTATION, variables, "data.issueCreate.issue"
        )

    async def _get_issue(self, item_index: int, get_parameter: ParameterLookup):
        variables = {"issueId": get_parameter("issueId", item_index)}
        return await self._point(queries.GET_ISSUE_QUERY, variables, "data.issue")

    async def _get_all_issues(self, item_index: int, get_parameter: ParameterLookup):
        return_all = get_parameter("returnAll", item_index, False)
        limit = None
        if not return_all:
            limit = int(get_parameter("limit", item_index, DEFAULT_PAGE_SIZE))
        return await self.paginator.fetch_all(
            "data.issues",
            GraphQLRequest(query=queries.GET_ISSUES_QUERY),
            limit=limit,
        )

    async def _update_issue(self, item_index: int, get_parameter: ParameterLookup):
        variables = {
            "issueId": get_parameter("issueId", item_index),
            **get_parameter("updateFields", item_index, {}),
        }
        return await self._point(
            queries.UPDATE_ISSUE_MUTATION, variables, "data.issueUpdate.issue"
        )

    async def _delete_issue(self, item_index: int, get_parameter: ParameterLookup):
        variables = {"issueId": get_parameter("issueId", item_index)}
        return await self._point(
            queries.DELETE_ISSUE_MUTATION, variables, "data.issueDelete"
        )

    async def _add_issue_link(self, item_index: int, get_parameter: ParameterLookup):
        variables = {
            "issueId": get_parameter("issueId", item_index),
            "url": get_parameter("link", item_index),
        }
        return await self._point(
            queries.ADD_ISSUE_LINK_MUTATION, variables, "data.attachmentLinkURL"
        )

    # -- Comments ----------------------------------------------------------

    async def _add_comment(self, item_index: int, get_parameter: ParameterLookup):
        variables = {
            "issueId": get_parameter("issueId", item_index),
            "body": get_parameter("comment", item_index),
        }
        additional_fields = get_parameter("additionalFields", item_index, {})
        parent_id = additional_fields.get("parentId")
        if parent_id and str(parent_id).strip():
            variables["parentId"] = parent_id

        return await self._point(
            queries.ADD_COMMENT_MUTATION, variables, "data.commentCreate"
        )
