"""Pytest configuration and shared fixtures"""

import os
from unittest.mock import AsyncMock, MagicMock

import pytest
from azure.core.credentials import AccessToken

from azure_devops_mcp.auth import CredentialSource
from azure_devops_mcp.config import Config
from azure_devops_mcp.consts import PAT_ENV_VAR, TOKEN_CREDENTIALS_ENV_VAR

# Configure pytest-asyncio
pytest_plugins = ("pytest_asyncio",)


@pytest.fixture
def clean_env(monkeypatch):
    """Fixture that clears ADO_MCP_* and the credential environment variables.

    This ensures tests see the true defaults without interference from
    environment variables that might be set in the user's shell.
    """
    for key in list(os.environ):
        if key.startswith("ADO_MCP_"):
            monkeypatch.delenv(key)
    # setenv first so values written by the code under test are undone too
    for key in (PAT_ENV_VAR, TOKEN_CREDENTIALS_ENV_VAR):
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)


@pytest.fixture
def clean_config(clean_env):
    """Config instance built with a clean environment."""
    return Config()


@pytest.fixture
def config():
    """Config fixture for client and tool tests"""
    return Config(log_level="DEBUG", timeout_seconds=5)


def make_credential_factory(token="federated_token", expires_on=4102444800):
    """Build a stand-in for DefaultAzureCredential.

    Returns the factory (a MagicMock class) and the credential instance it
    produces, so tests can assert on get_token calls.
    """
    credential = MagicMock()
    credential.__enter__.return_value = credential
    credential.__exit__.return_value = False
    credential.get_token.return_value = AccessToken(token, expires_on)
    factory = MagicMock(return_value=credential)
    return factory, credential


@pytest.fixture
def credential_factory():
    """DefaultAzureCredential stand-in: (factory, credential)."""
    return make_credential_factory()


@pytest.fixture
def credential_source(credential_factory, clean_env):
    """CredentialSource wired to the DefaultAzureCredential stand-in."""
    factory, _ = credential_factory
    return CredentialSource(credential_factory=factory)


@pytest.fixture
def mock_client():
    """Mock AzureDevOpsClient usable as an async context manager."""
    client = AsyncMock()
    client.__aenter__.return_value = client
    client.__aexit__.return_value = None
    return client


@pytest.fixture
def get_client(mock_client):
    """Client getter returning the mock client."""
    return AsyncMock(return_value=mock_client)


@pytest.fixture
def get_token():
    """Token getter returning a fixed bearer token."""
    return AsyncMock(return_value=AccessToken("raw_token", 4102444800))
