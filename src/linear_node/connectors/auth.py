"""Credential handling for the Linear API.

The authentication mode is resolved once, when the node is configured;
the transport only ever asks the selected Authenticator for headers.
"""

from abc import ABC, abstractmethod
from typing import Dict

from ..config import Settings
from .exceptions import AuthenticationError


class Authenticator(ABC):
    """Supplies the authorization headers for one credential."""

    @abstractmethod
    def auth_headers(self) -> Dict[str, str]:
        """Headers to attach to every API request."""
        pass


class ApiKeyAuthenticator(Authenticator):
    """Personal API key, sent as-is in the Authorization header."""

    def __init__(self, api_key: str):
        if not api_key:
            raise AuthenticationError("API key not configured")
        self.api_key = api_key

    def auth_headers(self) -> Dict[str, str]:
        return {"Authorization": self.api_key}


class OAuth2Authenticator(Authenticator):
    """OAuth2 access token, sent as a bearer token."""

    def __init__(self, access_token: str):
        if not access_token:
            raise AuthenticationError("OAuth access token not configured")
        self.access_token = access_token

    def auth_headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.access_token}"}


def build_authenticator(settings: Settings) -> Authenticator:
    """Select the authenticator for the configured authentication mode."""
    if settings.authentication == "oAuth2":
        return OAuth2Authenticator(settings.oauth_access_token or "")
    return ApiKeyAuthenticator(settings.api_key or "")
