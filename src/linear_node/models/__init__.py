"""Data models for the Linear node."""

from .execution import CredentialTestResult, ExecutionRecord, OptionRecord
from .graphql import Connection, GraphQLRequest, PageInfo

__all__ = [
    "Connection",
    "CredentialTestResult",
    "ExecutionRecord",
    "GraphQLRequest",
    "OptionRecord",
    "PageInfo",
]
