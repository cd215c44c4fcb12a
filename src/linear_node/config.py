"""Configuration management for the Linear node."""

import os
from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LINEAR_API_URL = "https://api.linear.app/graphql"

# Nodes per page, and the getAll limit when none is given.
DEFAULT_PAGE_SIZE = 50


class Settings(BaseSettings):
    """Node settings, read from LINEAR_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="LINEAR_",
        env_file=".env" if os.getenv("LINEAR_ENVIRONMENT") != "test" else None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")

    # API
    api_url: str = Field(default=LINEAR_API_URL)
    request_timeout: float = Field(
        default=30.0,
        description="Seconds before an API call is abandoned",
    )

    # Credentials
    authentication: Literal["apiToken", "oAuth2"] = Field(default="apiToken")
    api_key: Optional[str] = Field(default=None)
    oauth_access_token: Optional[str] = Field(default=None)

    # Pagination
    page_size: int = Field(
        default=DEFAULT_PAGE_SIZE,
        description="Nodes requested per page of a connection",
    )

    @field_validator("page_size")
    @classmethod
    def validate_page_size(cls, v):
        if v < 1:
            raise ValueError("page_size must be at least 1")
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        return str(v).upper()


@lru_cache()
def get_settings() -> Settings:
    """Get cached node settings."""
    return Settings()
