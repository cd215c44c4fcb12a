"""Async GraphQL transport for the Linear API.

One ``send`` is exactly one HTTP POST. No retries happen here; callers
that want a retry policy wrap the call themselves.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from ..models.graphql import GraphQLRequest
from .auth import Authenticator
from .exceptions import ApiError, ApiTimeoutError, AuthenticationError
from .paths import extract

logger = logging.getLogger(__name__)

AUTHENTICATION_ERROR_CODE = "AUTHENTICATION_ERROR"


class GraphQLClient:
    """Sends GraphQL requests with the configured credential attached."""

    def __init__(self, endpoint: str, authenticator: Authenticator):
        self.endpoint = endpoint
        self.authenticator = authenticator

    async def send(self, request: GraphQLRequest) -> Any:
        """Execute one GraphQL request.

        Args:
            request: Query template and variables.

        Returns:
            The full decoded JSON response (including the ``data`` key).

        Raises:
            AuthenticationError: The provider reported AUTHENTICATION_ERROR.
            ApiTimeoutError: The request timed out or could not connect.
            ApiError: Any other non-2xx status or GraphQL error.
        """
        from .http_client import get_http_client

        headers = {
            **self.authenticator.auth_headers(),
            "Content-Type": "application/json",
        }

        logger.debug(
            "POST %s (%d chars, variables=%s)",
            self.endpoint,
            len(request.query),
            sorted(request.variables),
        )

        try:
            client = get_http_client()
            response = await client.post(
                self.endpoint,
                json=request.to_payload(),
                headers=headers,
            )
        except (httpx.ConnectError, httpx.TimeoutException) as exc:
            raise ApiTimeoutError(
                f"Request to Linear failed: {type(exc).__name__}"
            ) from exc
        except httpx.TransportError as exc:
            raise ApiError(
                f"Request to Linear failed: {type(exc).__name__}: {exc}"
            ) from exc

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise error_from_response(exc.response) from exc

        try:
            body = response.json()
        except ValueError as exc:
            raise ApiError(
                "Linear returned a response that is not valid JSON",
                status_code=response.status_code,
                response_body=response.text[:500],
            ) from exc

        if isinstance(body, dict) and body.get("errors"):
            raise error_from_response(response, body)

        return body

    async def execute(
        self,
        query: str,
        variables: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Shorthand for ``send`` with a freshly built request."""
        return await self.send(GraphQLRequest(query=query, variables=variables or {}))


def is_authentication_error(errors: List[Any]) -> bool:
    """True if any GraphQL error carries the AUTHENTICATION_ERROR code."""
    return any(
        extract(error, "extensions.code") == AUTHENTICATION_ERROR_CODE
        for error in errors
    )


def error_from_response(
    response: httpx.Response, body: Any = None
) -> ApiError:
    """Build the exception describing a failed response."""
    status = response.status_code
    if body is None:
        try:
            body = response.json()
        except ValueError:
            body = None

    errors = body.get("errors") if isinstance(body, dict) else None
    if not isinstance(errors, list):
        errors = []

    messages = [
        error.get("message", "Unknown error")
        for error in errors
        if isinstance(error, dict)
    ]
    if messages:
        message = f"GraphQL error: {'; '.join(messages)}"
    else:
        message = f"API error: HTTP {status}"

    if is_authentication_error(errors):
        error_cls = AuthenticationError
    else:
        error_cls = ApiError

    return error_cls(
        message,
        status_code=status,
        errors=errors,
        response_body=response.text[:500],
    )
