"""Credential acquisition and request authorization.

Two strategies, picked once at startup:
- ``pat``: personal access token read from AZURE_DEVOPS_EXT_PAT
- ``azurecli``: short-lived Entra ID token from the developer credential chain

Nothing here caches. Every call acquires a fresh credential, so a token that
expired between two tool calls is simply replaced by the next acquisition.
"""

import asyncio
import logging
import os
from collections.abc import Callable, Generator
from enum import StrEnum
from typing import Any

import httpx
from azure.core.credentials import AccessToken
from azure.core.exceptions import AzureError
from azure.identity import DefaultAzureCredential

from .consts import (
    ADO_RESOURCE_SCOPE,
    PAT_ENV_VAR,
    TOKEN_CREDENTIALS_DEV,
    TOKEN_CREDENTIALS_ENV_VAR,
)
from .exceptions import (
    CredentialUnavailableError,
    MissingSecretError,
    UnsupportedAuthMethodError,
)

logger = logging.getLogger("azure-devops-mcp.auth")


class AuthMethod(StrEnum):
    """How the server authenticates against Azure DevOps."""

    PAT = "pat"
    AZURE_CLI = "azurecli"

    @classmethod
    def parse(cls, value: str) -> "AuthMethod":
        """Parse a command line literal.

        Raises:
            UnsupportedAuthMethodError: If the literal is not a known method.
        """
        try:
            return cls(value)
        except ValueError as e:
            raise UnsupportedAuthMethodError(
                "Invalid authentication method. Use 'pat' or 'azurecli'.",
                suggestions=[f"Pass one of: {', '.join(m.value for m in cls)}"],
                context={"auth_method": value},
            ) from e


class CredentialSource:
    """Produces credentials on demand.

    Responsibilities:
    - Read the personal access token from the environment
    - Request Entra ID tokens scoped to Azure DevOps from the developer
      credential chain
    """

    def __init__(self, credential_factory: Callable[[], Any] | None = None):
        """Initialize CredentialSource.

        Args:
            credential_factory: Builds the azure-identity credential. If None,
                uses DefaultAzureCredential.
        """
        self.credential_factory = credential_factory or DefaultAzureCredential

    async def acquire_federated_token(self) -> AccessToken:
        """Get an Azure DevOps scoped token from the developer credential chain.

        DefaultAzureCredential takes no constructor argument for the chain
        selection, so AZURE_TOKEN_CREDENTIALS is pinned to "dev" before the
        credential is built. The write is idempotent.

        Returns:
            AccessToken with the bearer string and its expiry (epoch seconds).

        Raises:
            CredentialUnavailableError: If no token could be issued.
        """
        os.environ[TOKEN_CREDENTIALS_ENV_VAR] = TOKEN_CREDENTIALS_DEV
        logger.debug(f"Requesting token for {ADO_RESOURCE_SCOPE}")

        try:
            token = await asyncio.to_thread(self._request_token)
        except AzureError as e:
            logger.error(f"Identity broker failed: {type(e).__name__}")
            raise CredentialUnavailableError(
                "Could not acquire an Azure DevOps token from the Azure CLI",
                errors=[str(e)],
                suggestions=[
                    "Run 'az login' and try again",
                    "Or restart the server with the 'pat' auth method",
                ],
                context={"scope": ADO_RESOURCE_SCOPE},
            ) from e

        logger.debug(f"Token acquired, expires_on={token.expires_on}")
        return token

    def _request_token(self) -> AccessToken:
        """Blocking token request, run off the event loop."""
        with self.credential_factory() as credential:
            return credential.get_token(ADO_RESOURCE_SCOPE)

    def acquire_static_secret(self) -> str:
        """Read the personal access token.

        Raises:
            MissingSecretError: If AZURE_DEVOPS_EXT_PAT is unset or empty.
        """
        pat = os.environ.get(PAT_ENV_VAR)
        if not pat:
            raise MissingSecretError(
                "Personal Access Token (PAT) is not set. "
                f"Please set the {PAT_ENV_VAR} environment variable.",
                suggestions=[
                    f"Export {PAT_ENV_VAR} in the environment of the MCP host",
                ],
                context={"env_var": PAT_ENV_VAR},
            )
        return pat


class PersonalAccessTokenHandler(httpx.BasicAuth):
    """Basic auth with an empty user name, as Azure DevOps expects for PATs."""

    def __init__(self, token: str):
        super().__init__("", token)

    def __repr__(self) -> str:
        return "PersonalAccessTokenHandler(token=***)"


class BearerHandler(httpx.Auth):
    """Sets ``Authorization: Bearer <token>`` on every request."""

    def __init__(self, token: str):
        self._token = token

    def auth_flow(
        self, request: httpx.Request
    ) -> Generator[httpx.Request, httpx.Response, None]:
        request.headers["Authorization"] = f"Bearer {self._token}"
        yield request

    def __repr__(self) -> str:
        return "BearerHandler(token=***)"


async def build_handler(
    auth_method: AuthMethod, source: CredentialSource
) -> httpx.Auth:
    """Acquire one credential and wrap it for the HTTP client.

    Args:
        auth_method: Strategy selected at startup.
        source: Where credentials come from.

    Returns:
        An httpx.Auth bound to the freshly acquired credential.

    Raises:
        MissingSecretError: From the PAT path.
        CredentialUnavailableError: From the Azure CLI path.
        UnsupportedAuthMethodError: For any other auth method.
    """
    match auth_method:
        case AuthMethod.PAT:
            return PersonalAccessTokenHandler(source.acquire_static_secret())
        case AuthMethod.AZURE_CLI:
            token = await source.acquire_federated_token()
            return BearerHandler(token.token)
        case _:
            raise UnsupportedAuthMethodError(
                "Invalid authentication method. Use 'pat' or 'azurecli'.",
                context={"auth_method": str(auth_method)},
            )
