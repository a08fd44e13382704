"""Tests for AzureDevOpsClient and session construction"""

from unittest.mock import AsyncMock, Mock

import httpx
import pytest
from pydantic import ValidationError

from azure_devops_mcp.auth import BearerHandler, PersonalAccessTokenHandler
from azure_devops_mcp.client import (
    AzureDevOpsClient,
    ClientMetadata,
    build_session,
    org_url_for,
)
from azure_devops_mcp.consts import PACKAGE_VERSION, PRODUCT_NAME, USER_AGENT


class TestOrgUrl:
    """Test organization URL derivation"""

    def test_contoso(self):
        assert org_url_for("contoso") == "https://dev.azure.com/contoso"

    def test_no_validation(self):
        """Names are concatenated as-is"""
        assert org_url_for("my org") == "https://dev.azure.com/my org"


class TestClientMetadata:
    """Test product metadata defaults"""

    def test_defaults(self):
        metadata = ClientMetadata()
        assert metadata.product_name == PRODUCT_NAME == "AzureDevOps.MCP"
        assert metadata.product_version == PACKAGE_VERSION
        assert metadata.user_agent == USER_AGENT
        assert metadata.user_agent_header == (
            f"AzureDevOps.MCP/{PACKAGE_VERSION} {USER_AGENT}"
        )

    def test_frozen(self):
        metadata = ClientMetadata()
        with pytest.raises(ValidationError):
            metadata.product_name = "other"


class TestBuildSession:
    """Test client construction"""

    def test_build_session(self, config):
        handler = BearerHandler("token")
        client = build_session("https://dev.azure.com/contoso", handler, config=config)

        assert isinstance(client, AzureDevOpsClient)
        assert client.org_url == "https://dev.azure.com/contoso"
        assert client.handler is handler
        assert client.config is config
        assert client.http_client.auth is handler
        assert client.http_client.headers["User-Agent"] == (
            ClientMetadata().user_agent_header
        )
        assert client.http_client.timeout.read == config.timeout_seconds

    def test_custom_metadata(self, config):
        metadata = ClientMetadata(
            product_name="Other", product_version="9.9", user_agent="ua/1"
        )
        client = build_session(
            "https://dev.azure.com/contoso",
            PersonalAccessTokenHandler("pat"),
            metadata=metadata,
            config=config,
        )
        assert client.metadata is metadata
        assert client.http_client.headers["User-Agent"] == "Other/9.9 ua/1"

    @pytest.mark.parametrize(
        "path,expected",
        [
            ("_apis/projects", "https://dev.azure.com/contoso/_apis/projects"),
            ("/_apis/projects", "https://dev.azure.com/contoso/_apis/projects"),
            (
                "Fabrikam/_apis/git/repositories",
                "https://dev.azure.com/contoso/Fabrikam/_apis/git/repositories",
            ),
        ],
    )
    def test_url_for(self, config, path, expected):
        client = build_session(
            "https://dev.azure.com/contoso", BearerHandler("t"), config=config
        )
        assert client.url_for(path) == expected


class TestAzureDevOpsClient:
    """Test AzureDevOpsClient HTTP operations

    This class is the authoritative source for HTTP error handling tests.
    Tools only turn these exceptions into error Responses.
    """

    @pytest.fixture
    def mock_http_client(self):
        """Mock httpx AsyncClient"""
        return Mock(spec=httpx.AsyncClient)

    @pytest.fixture
    def client_with_mocks(self, config, mock_http_client):
        """AzureDevOpsClient with mocked HTTP client"""
        return AzureDevOpsClient(
            "https://dev.azure.com/contoso",
            BearerHandler("token"),
            config=config,
            http_client=mock_http_client,
        )

    @pytest.mark.asyncio
    async def test_get_json_success(self, client_with_mocks, mock_http_client):
        mock_response = Mock()
        mock_response.json.return_value = {"count": 1, "value": [{"name": "p"}]}
        mock_response.raise_for_status.return_value = None
        mock_http_client.get = AsyncMock(return_value=mock_response)

        result = await client_with_mocks.get_json(
            "_apis/projects", params={"$top": 5}
        )

        assert result == {"count": 1, "value": [{"name": "p"}]}
        mock_http_client.get.assert_awaited_once_with(
            "https://dev.azure.com/contoso/_apis/projects",
            params={"$top": 5, "api-version": "7.1"},
        )

    @pytest.mark.asyncio
    async def test_post_json_success(self, client_with_mocks, mock_http_client):
        mock_response = Mock()
        mock_response.json.return_value = {"workItems": [{"id": 1}]}
        mock_response.raise_for_status.return_value = None
        mock_http_client.post = AsyncMock(return_value=mock_response)

        result = await client_with_mocks.post_json(
            "Fabrikam/_apis/wit/wiql", json={"query": "SELECT [System.Id]"}
        )

        assert result == {"workItems": [{"id": 1}]}
        mock_http_client.post.assert_awaited_once_with(
            "https://dev.azure.com/contoso/Fabrikam/_apis/wit/wiql",
            params={"api-version": "7.1"},
            json={"query": "SELECT [System.Id]"},
        )

    @pytest.mark.asyncio
    async def test_explicit_api_version_kept(self, client_with_mocks, mock_http_client):
        mock_response = Mock()
        mock_response.json.return_value = {}
        mock_http_client.get = AsyncMock(return_value=mock_response)

        await client_with_mocks.get_json(
            "_apis/projects", params={"api-version": "7.1-preview.4"}
        )

        _, kwargs = mock_http_client.get.call_args
        assert kwargs["params"]["api-version"] == "7.1-preview.4"

    @pytest.mark.parametrize(
        "method,http_method,error_setup,expected_exception",
        [
            (
                "get_json",
                "get",
                {"exception": httpx.ConnectError("Connection failed")},
                httpx.ConnectError,
            ),
            (
                "post_json",
                "post",
                {"exception": httpx.ConnectError("Connection failed")},
                httpx.ConnectError,
            ),
            ("get_json", "get", {"http_error": 401}, httpx.HTTPStatusError),
            ("get_json", "get", {"http_error": 404}, httpx.HTTPStatusError),
            ("post_json", "post", {"http_error": 400}, httpx.HTTPStatusError),
            ("post_json", "post", {"http_error": 500}, httpx.HTTPStatusError),
        ],
    )
    @pytest.mark.asyncio
    async def test_http_error_handling(
        self,
        client_with_mocks,
        mock_http_client,
        method,
        http_method,
        error_setup,
        expected_exception,
    ):
        """Client methods propagate httpx exceptions unchanged"""
        if "exception" in error_setup:
            setattr(
                mock_http_client,
                http_method,
                AsyncMock(side_effect=error_setup["exception"]),
            )
        else:
            mock_response = Mock()
            mock_response.raise_for_status.side_effect = httpx.HTTPStatusError(
                "Error", request=Mock(), response=Mock(status_code=error_setup["http_error"])
            )
            setattr(mock_http_client, http_method, AsyncMock(return_value=mock_response))

        with pytest.raises(expected_exception):
            await getattr(client_with_mocks, method)("_apis/test")

    @pytest.mark.asyncio
    async def test_context_manager_closes_http_client(
        self, client_with_mocks, mock_http_client
    ):
        mock_http_client.aclose = AsyncMock()

        async with client_with_mocks as client:
            assert client is client_with_mocks

        mock_http_client.aclose.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_auth_header_sent(self, config):
        """The handler is applied by httpx on the real request"""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["authorization"] = request.headers["Authorization"]
            seen["url"] = str(request.url)
            return httpx.Response(200, json={"value": []})

        auth = BearerHandler("abc")
        client = AzureDevOpsClient(
            "https://dev.azure.com/contoso",
            auth,
            config=config,
            http_client=httpx.AsyncClient(
                auth=auth, transport=httpx.MockTransport(handler)
            ),
        )

        async with client:
            result = await client.get_json("_apis/projects")

        assert result == {"value": []}
        assert seen["authorization"] == "Bearer abc"
        assert seen["url"] == (
            "https://dev.azure.com/contoso/_apis/projects?api-version=7.1"
        )
