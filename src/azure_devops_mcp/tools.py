"""MCP tools for an Azure DevOps organization.

Every tool opens its own session through the client getter, so each call
authenticates with a freshly acquired credential. Failures, including
credential failures, are returned as error Responses for that call only.
"""

import logging
from urllib.parse import quote

import httpx
from mcp.server.fastmcp import FastMCP

from .config import get_config
from .models import Response
from .protocols import ClientGetter, TokenGetter

logger = logging.getLogger("azure-devops-mcp.tools")


def _segment(value: str) -> str:
    """Quote a project or resource name for use as a path segment."""
    return quote(value, safe="")


def register_tools(
    mcp: FastMCP,
    organization: str,
    get_token: TokenGetter,
    get_client: ClientGetter,
) -> None:
    """Register all Azure DevOps tools on the server.

    Args:
        mcp: Server to register on.
        organization: Organization name, for hosts outside the org URL.
        get_token: Returns a bare bearer token.
        get_client: Returns an authenticated client.
    """

    # ===== CORE =====

    @mcp.tool()
    async def core_list_projects(top: int = 100, skip: int = 0) -> Response:
        """List the projects in the Azure DevOps organization.

        Args:
            top: Maximum number of projects to return
            skip: Number of projects to skip (for paging)
        """
        logger.info(f"Listing projects (top={top}, skip={skip})")

        try:
            async with await get_client() as client:
                result = await client.get_json(
                    "_apis/projects", params={"$top": top, "$skip": skip}
                )
            projects = result.get("value", [])

            return Response(
                status="success",
                message=f"Found {len(projects)} projects",
                data=projects,
                suggestions=[
                    "Use core_list_project_teams() to see the teams of a project",
                ],
                metadata={"count": len(projects)},
            )
        except Exception as e:
            return Response.from_error(e)

    @mcp.tool()
    async def core_list_project_teams(project: str, top: int = 100) -> Response:
        """List the teams of a project.

        Args:
            project: Project name or id
            top: Maximum number of teams to return
        """
        logger.info(f"Listing teams for project: {project}")

        try:
            async with await get_client() as client:
                result = await client.get_json(
                    f"_apis/projects/{_segment(project)}/teams",
                    params={"$top": top},
                )
            teams = result.get("value", [])

            return Response(
                status="success",
                message=f"Found {len(teams)} teams in project '{project}'",
                data=teams,
                metadata={"project": project, "count": len(teams)},
            )
        except Exception as e:
            return Response.from_error(e)

    # ===== WORK ITEMS =====

    @mcp.tool()
    async def wit_get_work_item(
        id: int, project: str, expand: str | None = None
    ) -> Response:
        """Get a single work item by id.

        Args:
            id: Work item id
            project: Project name or id
            expand: Optional expansion: None, Relations, Fields, Links or All
        """
        logger.info(f"Fetching work item {id} in project: {project}")

        try:
            params = {"$expand": expand} if expand else {}
            async with await get_client() as client:
                work_item = await client.get_json(
                    f"{_segment(project)}/_apis/wit/workitems/{id}", params=params
                )

            return Response(
                status="success",
                message=f"Work item {id} retrieved",
                data=work_item,
                metadata={"id": id, "project": project},
            )
        except Exception as e:
            return Response.from_error(e)

    @mcp.tool()
    async def wit_query_by_wiql(project: str, wiql: str, top: int = 50) -> Response:
        """Run a WIQL query and return the matching work item references.

        Args:
            project: Project name or id
            wiql: Work Item Query Language statement
            top: Maximum number of results
        """
        logger.info(
            f"Running WIQL in {project}: {wiql[:100]}{'...' if len(wiql) > 100 else ''}"
        )

        try:
            async with await get_client() as client:
                result = await client.post_json(
                    f"{_segment(project)}/_apis/wit/wiql",
                    params={"$top": top},
                    json={"query": wiql},
                )
            work_items = result.get("workItems", [])

            return Response(
                status="success",
                message=f"Query matched {len(work_items)} work items",
                data=work_items,
                suggestions=[
                    "Use wit_get_work_item() to fetch the fields of a result",
                ],
                metadata={"project": project, "count": len(work_items)},
            )
        except Exception as e:
            return Response.from_error(e)

    # ===== REPOSITORIES =====

    @mcp.tool()
    async def repo_list_repos_by_project(project: str) -> Response:
        """List the Git repositories of a project.

        Args:
            project: Project name or id
        """
        logger.info(f"Listing repositories for project: {project}")

        try:
            async with await get_client() as client:
                result = await client.get_json(
                    f"{_segment(project)}/_apis/git/repositories"
                )
            repositories = result.get("value", [])

            return Response(
                status="success",
                message=f"Found {len(repositories)} repositories in '{project}'",
                data=repositories,
                metadata={"project": project, "count": len(repositories)},
            )
        except Exception as e:
            return Response.from_error(e)

    @mcp.tool()
    async def repo_list_pull_requests_by_repo(
        project: str, repository_id: str, status: str = "active"
    ) -> Response:
        """List pull requests of a repository.

        Args:
            project: Project name or id
            repository_id: Repository name or id
            status: active, abandoned, completed or all
        """
        logger.info(f"Listing {status} pull requests for {project}/{repository_id}")

        try:
            async with await get_client() as client:
                result = await client.get_json(
                    f"{_segment(project)}/_apis/git/repositories/"
                    f"{_segment(repository_id)}/pullrequests",
                    params={"searchCriteria.status": status},
                )
            pull_requests = result.get("value", [])

            return Response(
                status="success",
                message=f"Found {len(pull_requests)} {status} pull requests",
                data=pull_requests,
                metadata={
                    "project": project,
                    "repository_id": repository_id,
                    "count": len(pull_requests),
                },
            )
        except Exception as e:
            return Response.from_error(e)

    # ===== BUILDS =====

    @mcp.tool()
    async def build_get_builds(project: str, top: int = 20) -> Response:
        """List the most recent builds of a project.

        Args:
            project: Project name or id
            top: Maximum number of builds to return
        """
        logger.info(f"Listing builds for project: {project}")

        try:
            async with await get_client() as client:
                result = await client.get_json(
                    f"{_segment(project)}/_apis/build/builds",
                    params={"$top": top},
                )
            builds = result.get("value", [])

            return Response(
                status="success",
                message=f"Found {len(builds)} builds in '{project}'",
                data=builds,
                metadata={"project": project, "count": len(builds)},
            )
        except Exception as e:
            return Response.from_error(e)

    # ===== SEARCH =====

    @mcp.tool()
    async def search_code(
        search_text: str, project: str | None = None, top: int = 10
    ) -> Response:
        """Search source code across the organization's repositories.

        Requires the 'azurecli' auth method.

        Args:
            search_text: Text to search for
            project: Optional project name to restrict the search to
            top: Maximum number of results
        """
        logger.info(f"Searching code for: {search_text[:100]}")

        config = get_config()
        payload = {
            "searchText": search_text,
            "$skip": 0,
            "$top": top,
            "includeFacets": False,
        }
        if project:
            payload["filters"] = {"Project": [project]}

        try:
            token = await get_token()
            # Code search is served from its own host, not the org URL
            async with httpx.AsyncClient(timeout=config.timeout_seconds) as http:
                response = await http.post(
                    config.search_url(organization),
                    params={"api-version": config.api_version},
                    headers={"Authorization": f"Bearer {token.token}"},
                    json=payload,
                )
                response.raise_for_status()
                result = response.json()
            matches = result.get("results", [])

            return Response(
                status="success",
                message=f"Found {result.get('count', len(matches))} code matches",
                data=matches,
                metadata={"search_text": search_text, "project": project},
            )
        except Exception as e:
            return Response.from_error(e)

    logger.debug("Tools registered")
