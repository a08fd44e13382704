"""Azure DevOps MCP server bootstrap."""

import logging
import sys

from mcp.server.fastmcp import FastMCP

from .auth import AuthMethod, CredentialSource
from .config import Config, get_config, setup_logging
from .consts import SERVER_DISPLAY_NAME, USAGE
from .exceptions import UsageError
from .prompts import register_prompts
from .session import SessionFactory
from .tools import register_tools

logger = logging.getLogger("azure-devops-mcp.server")


def parse_args(argv: list[str]) -> tuple[str, AuthMethod]:
    """Parse ``<organization_name> <pat|azurecli>``.

    Raises:
        UsageError: Unless exactly two arguments are given.
        UnsupportedAuthMethodError: If the auth method is unknown.
    """
    if len(argv) != 2:
        raise UsageError(USAGE, context={"argc": len(argv)})

    organization, auth_method = argv
    return organization, AuthMethod.parse(auth_method)


def create_mcp_server(
    organization: str,
    auth_method: AuthMethod,
    config: Config | None = None,
    credential_source: CredentialSource | None = None,
) -> FastMCP:
    """Create and configure the MCP server.

    No credential is acquired here; the first acquisition happens on the
    first tool call.

    Returns:
        Configured FastMCP server instance.
    """
    config = config or get_config()
    sessions = SessionFactory(
        organization, auth_method, credential_source=credential_source, config=config
    )
    logger.debug(f"Creating MCP server for {sessions.org_url} ({auth_method})")

    mcp = FastMCP(
        name=SERVER_DISPLAY_NAME,
        instructions=f"""
        Azure DevOps MCP server for the '{organization}' organization.

        Use the core_* tools to discover projects and teams, wit_* for work
        items, repo_* for Git repositories and pull requests, build_* for
        pipelines and search_code to search source code.
        """,
        log_level=config.log_level,
    )

    register_prompts(mcp)
    register_tools(mcp, organization, sessions.get_raw_token, sessions.get_client)

    logger.info("MCP server created")
    return mcp


def main(argv: list[str] | None = None) -> None:
    """Main entry point. Exits with status 1 on any startup failure."""
    args = sys.argv[1:] if argv is None else argv

    try:
        organization, auth_method = parse_args(args)
        config = get_config()
        setup_logging(config.log_level)

        mcp = create_mcp_server(organization, auth_method, config)
        logger.info("Starting MCP server")
        mcp.run(transport="stdio")
    except UsageError as e:
        print(e.message, file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        logger.error(f"Server failed: {e}")
        print(f"Fatal error in main(): {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
