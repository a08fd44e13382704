"""Per-call authenticated sessions.

The two hooks the tool catalog uses to reach Azure DevOps. Both acquire a
credential on every call; concurrent calls do not share state or failures.
"""

import logging

from azure.core.credentials import AccessToken

from .auth import AuthMethod, CredentialSource, build_handler
from .client import AzureDevOpsClient, ClientMetadata, build_session, org_url_for
from .config import Config, get_config
from .exceptions import UnsupportedAuthMethodError

logger = logging.getLogger("azure-devops-mcp.session")


class SessionFactory:
    """Builds authenticated clients for one organization and auth method."""

    def __init__(
        self,
        organization: str,
        auth_method: AuthMethod,
        credential_source: CredentialSource | None = None,
        config: Config | None = None,
        metadata: ClientMetadata | None = None,
    ):
        self.organization = organization
        self.org_url = org_url_for(organization)
        self.auth_method = auth_method
        self.credential_source = credential_source or CredentialSource()
        self.config = config or get_config()
        self.metadata = metadata or ClientMetadata()

    async def get_client(self) -> AzureDevOpsClient:
        """Acquire a credential and build a client around it.

        Raises:
            MissingSecretError: Under ``pat`` auth without a token.
            CredentialUnavailableError: Under ``azurecli`` auth if the broker failed.
            UnsupportedAuthMethodError: For an unknown auth method.
        """
        handler = await build_handler(self.auth_method, self.credential_source)
        return build_session(
            self.org_url, handler, metadata=self.metadata, config=self.config
        )

    async def get_raw_token(self) -> AccessToken:
        """Acquire a bare bearer token for calls outside the organization URL.

        Only available under ``azurecli`` auth. A PAT is not a bearer token,
        so under ``pat`` auth this fails instead of falling back to the
        identity broker.

        Raises:
            UnsupportedAuthMethodError: Under ``pat`` auth.
            CredentialUnavailableError: If the broker failed.
        """
        if self.auth_method is not AuthMethod.AZURE_CLI:
            raise UnsupportedAuthMethodError(
                "This operation needs a bearer token and is only available "
                "with the 'azurecli' auth method",
                suggestions=["Restart the server with the 'azurecli' auth method"],
                context={"auth_method": str(self.auth_method)},
            )
        return await self.credential_source.acquire_federated_token()
