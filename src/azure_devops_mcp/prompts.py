"""MCP prompts: canned instructions that steer the agent to the right tool."""

import logging

from mcp.server.fastmcp import FastMCP

logger = logging.getLogger("azure-devops-mcp.prompts")


def register_prompts(mcp: FastMCP) -> None:
    """Register all prompts on the server."""

    @mcp.prompt(
        name="list_projects",
        description="Lists all projects in the Azure DevOps organization.",
    )
    def list_projects() -> str:
        return (
            "List all projects in my Azure DevOps organization.\n"
            "Use the 'core_list_projects' tool, then show the results as a "
            "table with the project name and description."
        )

    @mcp.prompt(
        name="list_project_teams",
        description="Lists all teams in an Azure DevOps project.",
    )
    def list_project_teams(project: str) -> str:
        return (
            f"List all teams in the Azure DevOps project '{project}'.\n"
            "Use the 'core_list_project_teams' tool, then show the results "
            "as a table with the team name and description."
        )

    @mcp.prompt(
        name="get_work_item",
        description="Retrieves a work item and summarizes it.",
    )
    def get_work_item(id: str, project: str) -> str:
        return (
            f"Get work item {id} from the Azure DevOps project '{project}'.\n"
            "Use the 'wit_get_work_item' tool with expand='Relations', then "
            "summarize its title, state, assignee and linked items."
        )

    logger.debug("Prompts registered")
