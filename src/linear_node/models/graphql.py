"""GraphQL request and Relay connection models."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class GraphQLRequest(BaseModel):
    """One logical GraphQL call: a query template plus its variables.

    Requests are immutable; pagination derives a fresh request per page
    with ``with_variables``.
    """

    model_config = ConfigDict(frozen=True)

    query: str
    variables: Dict[str, Any] = Field(default_factory=dict)

    def with_variables(self, **updates: Any) -> "GraphQLRequest":
        return self.model_copy(update={"variables": {**self.variables, **updates}})

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"query": self.query}
        if self.variables:
            payload["variables"] = dict(self.variables)
        return payload


class PageInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    has_next_page: bool = Field(default=False, alias="hasNextPage")
    end_cursor: Optional[str] = Field(default=None, alias="endCursor")

    @field_validator("has_next_page", mode="before")
    @classmethod
    def _null_is_false(cls, v):
        return False if v is None else v


class Connection(BaseModel):
    """One page of a paged resource: ``{nodes, pageInfo}``."""

    model_config = ConfigDict(populate_by_name=True)

    nodes: List[Any] = Field(default_factory=list)
    page_info: PageInfo = Field(default_factory=PageInfo, alias="pageInfo")

    @field_validator("nodes", mode="before")
    @classmethod
    def _null_nodes(cls, v):
        return [] if v is None else v

    @field_validator("page_info", mode="before")
    @classmethod
    def _null_page_info(cls, v):
        return {} if v is None else v
