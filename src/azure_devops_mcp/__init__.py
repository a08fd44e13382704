"""Azure DevOps MCP Server Package

A Model Context Protocol (MCP) server exposing an Azure DevOps organization
to AI agents over stdio, authenticated with a personal access token or the
Azure CLI.
"""

from .auth import (
    AuthMethod,
    BearerHandler,
    CredentialSource,
    PersonalAccessTokenHandler,
    build_handler,
)
from .client import AzureDevOpsClient, ClientMetadata, build_session, org_url_for
from .config import Config, get_config
from .consts import PACKAGE_VERSION
from .exceptions import (
    AdoMCPError,
    CredentialUnavailableError,
    MissingSecretError,
    UnsupportedAuthMethodError,
    UsageError,
)
from .server import create_mcp_server, main
from .session import SessionFactory

__version__ = PACKAGE_VERSION

__all__ = [
    "__version__",
    "get_config",
    "build_handler",
    "build_session",
    "org_url_for",
    "create_mcp_server",
    "main",
    "AuthMethod",
    "AzureDevOpsClient",
    "BearerHandler",
    "ClientMetadata",
    "Config",
    "CredentialSource",
    "PersonalAccessTokenHandler",
    "SessionFactory",
    "AdoMCPError",
    "UsageError",
    "MissingSecretError",
    "CredentialUnavailableError",
    "UnsupportedAuthMethodError",
]
