from __future__ import annotations

from github_projects_mcp.core.client import GitHubClientError, GitHubGraphQLClient
from github_projects_mcp.core.definitions import ToolResult, define_tool
from github_projects_mcp.core.models import (
    AddIssueToProjectV2Input,
    GetIssueNodeIdInput,
    GetProjectV2Input,
    ListProjectsV2Input,
)
from github_projects_mcp.core.operations import (
    ADD_PROJECT_V2_ITEM_BY_ID,
    GET_ISSUE_NODE_ID,
    GET_PROJECT_V2,
    LIST_PROJECTS_V2,
)
from github_projects_mcp.core.tools._formatting import (
    format_added_item,
    format_issue_node_id,
    format_project_v2_detail,
    format_projects_v2,
)

OWNER_BRANCHES = {"organization": "user", "user": "organization"}


@define_tool(
    name="list_projects_v2",
    title="List Projects v2",
    description="List Projects v2 for an organization or user.",
    input_model=ListProjectsV2Input,
    read_only=True,
)
async def list_projects_v2(
    client: GitHubGraphQLClient, params: ListProjectsV2Input
) -> ToolResult:
    """
    List the first 20 Projects v2 of an organization or user.

    Both owner branches are queried; only the one named by ``owner_type`` is
    read, and a NOT_FOUND on the other branch is expected and ignored.
    """
    try:
        data = await client.query(
            LIST_PROJECTS_V2,
            {"login": params.owner},
            tool="list_projects_v2",
            ignore_not_found=(OWNER_BRANCHES[params.owner_type],),
        )
    except GitHubClientError as exc:
        return ToolResult.error(f"Failed to query projects v2: {exc}")

    return ToolResult.ok(format_projects_v2(data.projects_for(params.owner_type)))


@define_tool(
    name="get_project_v2",
    title="Get Projects v2 details",
    description="Get details of a specific Projects v2.",
    input_model=GetProjectV2Input,
    read_only=True,
)
async def get_project_v2(
    client: GitHubGraphQLClient, params: GetProjectV2Input
) -> ToolResult:
    """
    Fetch one project (and its first 20 fields) through a node lookup.
    An id that is not a ProjectV2, or that resolves to nothing, renders an
    empty report rather than an error.
    """
    try:
        data = await client.query(
            GET_PROJECT_V2,
            {"id": params.project_id},
            tool="get_project_v2",
            ignore_not_found=("node",),
        )
    except GitHubClientError as exc:
        return ToolResult.error(f"Failed to query project v2: {exc}")

    return ToolResult.ok(format_project_v2_detail(data.node))


@define_tool(
    name="get_issue_node_id",
    title="Get issue node ID",
    description="Get the node ID of an issue for use with Projects v2.",
    input_model=GetIssueNodeIdInput,
    read_only=True,
)
async def get_issue_node_id(
    client: GitHubGraphQLClient, params: GetIssueNodeIdInput
) -> ToolResult:
    try:
        data = await client.query(
            GET_ISSUE_NODE_ID,
            {
                "owner": params.owner,
                "name": params.repo,
                "issue_number": params.issue_number,
            },
            tool="get_issue_node_id",
        )
    except GitHubClientError as exc:
        return ToolResult.error(f"Failed to get issue node ID: {exc}")

    return ToolResult.ok(format_issue_node_id(data.repository.issue))


@define_tool(
    name="add_issue_to_project_v2",
    title="Add issue to Projects v2",
    description="Add an issue to a Projects v2.",
    input_model=AddIssueToProjectV2Input,
    read_only=False,
)
async def add_issue_to_project_v2(
    client: GitHubGraphQLClient, params: AddIssueToProjectV2Input
) -> ToolResult:
    """Add the issue as a new project item. Not idempotent; never retried."""
    try:
        data = await client.mutate(
            ADD_PROJECT_V2_ITEM_BY_ID,
            {"projectId": params.project_id, "contentId": params.issue_id},
            tool="add_issue_to_project_v2",
        )
    except GitHubClientError as exc:
        return ToolResult.error(f"Failed to add issue to project v2: {exc}")

    return ToolResult.ok(format_added_item(data.add_project_v2_item_by_id.item.id))
