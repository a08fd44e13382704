"""Azure DevOps MCP custom exceptions.

Exception Design Principles:
1. Use these custom exceptions only when additional useful context can be provided
2. Handle exceptions as late as possible (preserve details until domain context is available)
3. Split on when the failure can surface:
   - Startup only, before the transport runs (UsageError)
   - Credential acquisition, at startup or inside any tool call
     (MissingSecretError, CredentialUnavailableError, UnsupportedAuthMethodError)
"""


class AdoMCPError(Exception):
    """Base exception for all Azure DevOps MCP errors.

    Provides rich context and actionable suggestions beyond standard exceptions.
    All Azure DevOps MCP custom exceptions inherit from this base class.
    """

    def __init__(
        self,
        message: str,  # the error message
        *,
        errors: list[str] = None,  # detailed list of errors (if available)
        suggestions: list[str] = None,  # remedial actions
        context: dict = None,  # additional detailed context
    ):
        """Initialize AdoMCPError.

        Args:
            message: Primary error message for users
            errors: List of specific error details
            suggestions: List of actionable suggestions for resolution
            context: Additional context information as key-value pairs
        """
        super().__init__(message)
        self.message = message
        self.errors = errors or []
        self.suggestions = suggestions or []
        self.context = context or {}


class UsageError(AdoMCPError):
    """Wrong command line - fatal at startup, before any I/O.

    Raised when the server is not started with exactly an organization
    name and an auth method.
    """

    pass


class MissingSecretError(AdoMCPError):
    """Personal access token missing - recoverable by user reconfiguration.

    Raised under ``pat`` auth when AZURE_DEVOPS_EXT_PAT is unset or empty.
    The variable is read on every credential request, so exporting it and
    retrying the tool call is enough.
    """

    pass


class CredentialUnavailableError(AdoMCPError):
    """Identity broker could not issue a token.

    Covers every way the federated (``azurecli``) path can fail:
    - No developer credential available (not logged in to the Azure CLI)
    - Interactive consent required but no interactive session
    - Network failure reaching the identity endpoint
    """

    pass


class UnsupportedAuthMethodError(AdoMCPError):
    """Auth method literal not recognised, or not valid for the request.

    Raised at startup for anything other than ``pat`` or ``azurecli``, and
    when a raw bearer token is requested under ``pat`` auth.
    """

    pass
