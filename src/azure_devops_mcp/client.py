"""Azure DevOps client — handles low-level API calls."""

import logging
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict

from .config import Config, get_config
from .consts import ORG_URL_PREFIX, PACKAGE_VERSION, PRODUCT_NAME, USER_AGENT

logger = logging.getLogger("azure-devops-mcp.client")


class ClientMetadata(BaseModel):
    """Static product identification sent with every request."""

    model_config = ConfigDict(frozen=True)

    product_name: str = PRODUCT_NAME
    product_version: str = PACKAGE_VERSION
    user_agent: str = USER_AGENT

    @property
    def user_agent_header(self) -> str:
        return f"{self.product_name}/{self.product_version} {self.user_agent}"


def org_url_for(organization: str) -> str:
    """Organization URL, e.g. ``contoso`` -> ``https://dev.azure.com/contoso``.

    Plain concatenation: the organization name is not validated.
    """
    return ORG_URL_PREFIX + organization


class AzureDevOpsClient:
    """Authenticated Azure DevOps API client.

    One instance is bound to one credential snapshot. Build a new one (see
    SessionFactory.get_client) to pick up a refreshed credential.

    Responsibilities:
    - Provide JSON GET/POST against the organization URL
    - Attach auth, product headers and api-version to every request
    """

    def __init__(
        self,
        org_url: str,
        handler: httpx.Auth,
        metadata: ClientMetadata | None = None,
        config: Config | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        """Initialize AzureDevOpsClient.

        Args:
            org_url: Organization URL, used as-is.
            handler: Authorization handler for every request.
            metadata: Product metadata. If None, uses package defaults.
            config: Config instance. If None, uses get_config().
            http_client: HTTP client. If None, creates a new one.
        """
        self.org_url = org_url
        self.handler = handler
        self.metadata = metadata or ClientMetadata()
        self.config = config or get_config()

        self.http_client = http_client or httpx.AsyncClient(
            auth=handler,
            headers={"User-Agent": self.metadata.user_agent_header},
            timeout=self.config.timeout_seconds,
            follow_redirects=True,
        )

        logger.debug(f"Azure DevOps client created for {self.org_url}")

    def url_for(self, path: str) -> str:
        """Absolute URL for a path relative to the organization."""
        return f"{self.org_url}/{path.lstrip('/')}"

    def _params(self, kwargs: dict[str, Any]) -> dict[str, Any]:
        params = dict(kwargs.pop("params", None) or {})
        params.setdefault("api-version", self.config.api_version)
        return params

    async def get_json(self, path: str, **kwargs) -> Any:
        """Get JSON from an organization-relative path.

        Args:
            path: API path, e.g. ``_apis/projects``.
            **kwargs: Additional arguments for httpx.get.

        Returns:
            Parsed JSON data.

        Raises:
            httpx.HTTPStatusError: For HTTP 4xx/5xx responses.
            httpx.RequestError: For network errors, timeouts, DNS failures.
        """
        url = self.url_for(path)
        params = self._params(kwargs)

        logger.debug(f"GET {url}")
        response = await self.http_client.get(url, params=params, **kwargs)
        response.raise_for_status()
        logger.debug(f"GET {url} successful")
        return response.json()

    async def post_json(self, path: str, **kwargs) -> Any:
        """Post JSON to an organization-relative path.

        Args:
            path: API path, e.g. ``MyProject/_apis/wit/wiql``.
            **kwargs: Additional arguments for httpx.post.

        Returns:
            Parsed JSON response data.

        Raises:
            httpx.HTTPStatusError: For HTTP 4xx/5xx responses.
            httpx.RequestError: For network errors, timeouts, DNS failures.
        """
        url = self.url_for(path)
        params = self._params(kwargs)

        logger.debug(f"POST {url}")
        response = await self.http_client.post(url, params=params, **kwargs)
        response.raise_for_status()
        logger.debug(f"POST {url} successful")
        return response.json()

    async def aclose(self) -> None:
        await self.http_client.aclose()

    async def __aenter__(self) -> "AzureDevOpsClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()


def build_session(
    org_url: str,
    handler: httpx.Auth,
    metadata: ClientMetadata | None = None,
    config: Config | None = None,
) -> AzureDevOpsClient:
    """Construct a client. Pure construction, no I/O."""
    return AzureDevOpsClient(org_url, handler, metadata=metadata, config=config)
