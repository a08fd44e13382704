"""High-value constants for the Azure DevOps MCP package."""

# Package metadata
PACKAGE_VERSION = "1.0.0"
SERVER_NAME = "azure-devops-mcp"
SERVER_DISPLAY_NAME = "Azure DevOps MCP Server"
PRODUCT_NAME = "AzureDevOps.MCP"
USER_AGENT = f"{SERVER_NAME}/{PACKAGE_VERSION} (python)"
USAGE = "Usage: mcp-server-azuredevops <organization_name> <pat|azurecli>"

# External API contract consts
ORG_URL_PREFIX = "https://dev.azure.com/"
SEARCH_URL_PREFIX = "https://almsearch.dev.azure.com/"
DEFAULT_API_VERSION = "7.1"

# Azure DevOps resource id, as issued by Entra ID
ADO_RESOURCE_SCOPE = "499b84ac-1321-427f-aa17-267ca6975798/.default"

# Environment contract
PAT_ENV_VAR = "AZURE_DEVOPS_EXT_PAT"
TOKEN_CREDENTIALS_ENV_VAR = "AZURE_TOKEN_CREDENTIALS"
TOKEN_CREDENTIALS_DEV = "dev"  # developer tools only: Azure CLI, azd, PowerShell
