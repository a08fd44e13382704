"""Protocol definitions for the hooks handed to tool registration."""

from typing import TYPE_CHECKING, Protocol

from azure.core.credentials import AccessToken

if TYPE_CHECKING:
    from .client import AzureDevOpsClient


class TokenGetter(Protocol):
    """Returns a fresh bearer credential on every call."""

    async def __call__(self) -> AccessToken:
        """Get a bearer token scoped to Azure DevOps.

        Raises:
            CredentialUnavailableError: If the identity broker failed.
            UnsupportedAuthMethodError: If the server runs with ``pat`` auth.
        """
        ...


class ClientGetter(Protocol):
    """Returns a newly authenticated client on every call."""

    async def __call__(self) -> "AzureDevOpsClient":
        """Get an authenticated client.

        Raises:
            MissingSecretError: If ``pat`` auth has no token.
            CredentialUnavailableError: If the identity broker failed.
        """
        ...
