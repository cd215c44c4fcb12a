"""Linear node exception types.

The transport raises ApiError / AuthenticationError; the execution loop
either converts them into error records (continueOnFail) or lets them
propagate to the host runtime unchanged.
"""

from typing import Any, Dict, List, Optional


class LinearError(Exception):
    """Base exception for all Linear node errors."""

    pass


class ApiError(LinearError):
    """The API call failed at the HTTP or GraphQL level.

    ``errors`` is the raw GraphQL ``errors`` list from the provider, if any.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 0,
        errors: Optional[List[Dict[str, Any]]] = None,
        response_body: str = "",
    ):
        self.status_code = status_code
        self.errors = errors or []
        self.response_body = response_body
        super().__init__(message)


class AuthenticationError(ApiError):
    """The provider rejected the credential, or none was configured."""

    pass


class ApiTimeoutError(ApiError):
    """Request timed out or the connection could not be established."""

    pass


class ParameterError(LinearError):
    """A required node parameter could not be resolved."""

    pass


class UnsupportedOperationError(LinearError):
    """No handler exists for the requested resource/operation pair."""

    def __init__(self, resource: str, operation: str):
        self.resource = resource
        self.operation = operation
        super().__init__(
            f"The operation '{operation}' is not supported for resource '{resource}'"
        )
