"""Linear node implementation.

All Linear API calls go through GraphQL at https://api.linear.app/graphql.
``LinearNode`` ties together the transport, the cursor paginator and the
operation dispatcher, and exposes the three entry points a host runtime
needs: item execution, option loading and credential testing.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from ..config import Settings, get_settings
from ..models.execution import CredentialTestResult, ExecutionRecord, OptionRecord
from ..models.graphql import GraphQLRequest
from ..observability.logging import configure_logging, log_context
from ..runtime.execution import ExecutionContext, to_execution_records
from . import queries
from .auth import ApiKeyAuthenticator, build_authenticator
from .dispatcher import OperationDispatcher, Resource
from .exceptions import ApiError, AuthenticationError
from .graphql import GraphQLClient
from .pagination import CursorPaginator
from .paths import extract_or

logger = logging.getLogger(__name__)

INVALID_TOKEN_MESSAGE = "The security token included in the request is invalid"
CONNECTION_OK_MESSAGE = "Connection successful!"


def option_sort_key(option: OptionRecord) -> str:
    """Case-insensitive ordering by display name."""
    return option.name.lower()


def _to_option(node: Dict[str, Any]) -> OptionRecord:
    return OptionRecord(name=str(node.get("name") or ""), value=str(node["id"]))


class LinearNode:
    """Linear issues and comments for a workflow automation runtime."""

    def __init__(self, client: GraphQLClient, paginator: CursorPaginator):
        self.client = client
        self.paginator = paginator
        self.dispatcher = OperationDispatcher(client, paginator)

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "LinearNode":
        """Build a node whose credential and page size come from settings."""
        settings = settings or get_settings()
        client = GraphQLClient(settings.api_url, build_authenticator(settings))
        return cls(client, CursorPaginator(client, page_size=settings.page_size))

    # -- Execution ---------------------------------------------------------

    async def execute(self, context: ExecutionContext) -> List[ExecutionRecord]:
        """Run the configured operation once per input item, in order.

        With continueOnFail enabled a failing item produces an
        ``{"error": message}`` record and the run moves on; otherwise the
        first error propagates unchanged.
        """
        items = context.get_input_data()
        resource = context.get_node_parameter("resource", 0, Resource.ISSUE.value)
        operation = context.get_node_parameter("operation", 0)

        return_data: List[ExecutionRecord] = []
        for i in range(len(items)):
            with log_context(
                resource=getattr(resource, "value", resource),
                operation=getattr(operation, "value", operation),
                item_index=i,
            ):
                try:
                    response = await self.dispatcher.execute(
                        resource, operation, i, context.get_node_parameter
                    )
                except Exception as e:
                    if not context.continue_on_fail():
                        logger.exception("Error executing Linear operation for item %d", i)
                        raise
                    logger.warning("Item %d failed, continuing: %s", i, e)
                    response = {"error": str(e)}
                return_data.extend(to_execution_records(response, i))

        return return_data

    # -- Option loaders ----------------------------------------------------

    async def get_teams(self) -> List[OptionRecord]:
        """Teams in API order."""
        teams = await self.paginator.fetch_all(
            "data.teams", GraphQLRequest(query=queries.GET_TEAMS_QUERY)
        )
        return [_to_option(team) for team in teams]

    async def get_users(self) -> List[OptionRecord]:
        """Users in API order."""
        users = await self.paginator.fetch_all(
            "data.users", GraphQLRequest(query=queries.GET_USERS_QUERY)
        )
        return [_to_option(user) for user in users]

    async def get_states(
        self,
        context: ExecutionContext,
        sort_key: Callable[[OptionRecord], Any] = option_sort_key,
    ) -> List[OptionRecord]:
        """Workflow states of the relevant team, sorted with ``sort_key``.

        The team is the selected ``teamId``; failing that the ``teamId`` in
        ``updateFields``; failing that the team currently owning ``issueId``.
        """
        team_id = context.get_node_parameter("teamId", 0, None)
        if not team_id:
            update_fields = context.get_node_parameter("updateFields", 0, None) or {}
            team_id = update_fields.get("teamId")
        if not team_id:
            issue_id = context.get_node_parameter("issueId", 0)
            response = await self.client.send(
                GraphQLRequest(
                    query=queries.GET_ISSUE_TEAM_QUERY,
                    variables={"issueId": issue_id},
                )
            )
            team_id = extract_or(response, "data.issue.team.id")
            logger.debug("Resolved team %s from issue %s", team_id, issue_id)

        request = GraphQLRequest(
            query=queries.GET_STATES_QUERY,
            variables={"filter": {"team": {"id": {"eq": team_id}}}},
        )
        states = await self.paginator.fetch_all("data.workflowStates", request)
        return sorted((_to_option(state) for state in states), key=sort_key)


def create_node(settings: Optional[Settings] = None) -> LinearNode:
    """Entry point for a host runtime: configure logging, then build the node."""
    settings = settings or get_settings()
    configure_logging(settings.environment, settings.log_level)
    logger.debug("Linear node configured for %s", settings.api_url)
    return LinearNode.from_settings(settings)


# -- Credential test --------------------------------------------------------

async def validate_credentials(client: GraphQLClient) -> Any:
    """Issue the smallest authenticated query the API accepts."""
    return await client.send(GraphQLRequest(query=queries.VALIDATE_CREDENTIALS_QUERY))


async def check_credentials(
    api_key: str, settings: Optional[Settings] = None
) -> CredentialTestResult:
    """Report whether Linear accepts ``api_key``.

    Only a rejected credential is reported as an error; any other failure
    still reports the connection as successful.
    """
    settings = settings or get_settings()
    try:
        client = GraphQLClient(settings.api_url, ApiKeyAuthenticator(api_key))
        await validate_credentials(client)
    except AuthenticationError:
        return CredentialTestResult(status="Error", message=INVALID_TOKEN_MESSAGE)
    except ApiError as e:
        logger.warning("Credential test hit a non-authentication error: %s", e)
    except Exception:
        logger.warning("Credential test failed unexpectedly", exc_info=True)

    return CredentialTestResult(status="OK", message=CONNECTION_OK_MESSAGE)
