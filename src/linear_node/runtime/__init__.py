"""Host runtime integration."""

from .execution import (
    REQUIRED,
    ExecutionContext,
    StaticExecutionContext,
    to_execution_records,
)

__all__ = [
    "REQUIRED",
    "ExecutionContext",
    "StaticExecutionContext",
    "to_execution_records",
]
