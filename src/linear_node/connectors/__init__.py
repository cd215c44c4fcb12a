"""Linear API connector: transport, pagination and operation dispatch."""

from .auth import ApiKeyAuthenticator, Authenticator, OAuth2Authenticator
from .exceptions import (
    ApiError,
    ApiTimeoutError,
    AuthenticationError,
    LinearError,
    ParameterError,
    UnsupportedOperationError,
)
from .graphql import GraphQLClient
from .pagination import CursorPaginator
from .paths import ABSENT, extract

__all__ = [
    "ABSENT",
    "ApiError",
    "ApiKeyAuthenticator",
    "ApiTimeoutError",
    "AuthenticationError",
    "Authenticator",
    "CursorPaginator",
    "GraphQLClient",
    "LinearError",
    "OAuth2Authenticator",
    "ParameterError",
    "UnsupportedOperationError",
    "extract",
]
