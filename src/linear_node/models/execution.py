"""Records exchanged with the host runtime."""

from typing import Any, Dict, Literal

from pydantic import BaseModel


class ExecutionRecord(BaseModel):
    """One output record, tagged with the index of the input item it came from."""

    data: Dict[str, Any]
    paired_item: int


class OptionRecord(BaseModel):
    """Display name / id pair for a dependent option list."""

    name: str
    value: str


class CredentialTestResult(BaseModel):
    status: Literal["OK", "Error"]
    message: str
