"""Configuration management."""

import logging
import sys
from functools import cache

from pydantic import ConfigDict, Field
from pydantic_settings import BaseSettings

from .consts import DEFAULT_API_VERSION, SEARCH_URL_PREFIX


class Config(BaseSettings):
    """Runtime settings that are not part of the command line."""

    model_config = ConfigDict(
        env_prefix="ADO_MCP_", case_sensitive=False, extra="ignore"
    )
    log_level: str = Field(
        default="INFO",
        pattern=r"^(DEBUG|INFO|WARNING|ERROR)$",
        description="Logging level",
    )
    timeout_seconds: int = Field(
        default=30, gt=0, le=300, description="HTTP request timeout in seconds"
    )
    api_version: str = Field(
        default=DEFAULT_API_VERSION,
        pattern=r"^\d+\.\d+(-preview(\.\d+)?)?$",
        description="Azure DevOps REST api-version sent with every request",
    )

    def search_url(self, organization: str) -> str:
        """URL for code search, which lives on its own host."""
        return (
            f"{SEARCH_URL_PREFIX}{organization}/_apis/search/codesearchresults"
        )


@cache
def get_config() -> Config:
    """Get a cached Config instance."""
    return Config()


def setup_logging(log_level: str = "INFO") -> logging.Logger:
    """Configure logging for the entire application.

    Logs always go to stderr; stdout carries the MCP stdio transport.
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
        force=True,  # Override any existing configuration
    )
    return logging.getLogger("azure-devops-mcp")
