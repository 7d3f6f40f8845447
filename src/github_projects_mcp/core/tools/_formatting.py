"""
Text reports for Projects v2 tool results.
"""

from typing import List

from github_projects_mcp.core.models import (
    IssueNode,
    ProjectV2Detail,
    ProjectV2Summary,
)

NO_PROJECTS_TEXT = "No Projects v2 found."


def _fmt_bool(value: bool) -> str:
    return "true" if value else "false"


def format_projects_v2(projects: List[ProjectV2Summary]) -> str:
    if not projects:
        return NO_PROJECTS_TEXT

    lines = [f"Found {len(projects)} Projects v2:\n\n"]
    for project in projects:
        lines.append(f"- **{project.title}** (#{project.number})\n")
        lines.append(f"  - ID: {project.id}\n")
        lines.append(f"  - State: {project.state}\n")
        lines.append(f"  - URL: {project.url}\n\n")
    return "".join(lines)


def format_project_v2_detail(project: ProjectV2Detail) -> str:
    lines = [
        f"**{project.title}** (#{project.number})\n",
        f"- ID: {project.id}\n",
        f"- State: {project.state}\n",
        f"- Public: {_fmt_bool(project.public)}\n",
        f"- URL: {project.url}\n",
    ]

    fields = project.field_nodes
    if fields:
        lines.append("\n**Custom Fields:**\n")
        for field in fields:
            lines.append(f"- {field.name} (ID: {field.id})\n")

    return "".join(lines)


def format_issue_node_id(issue: IssueNode) -> str:
    return f"Issue #{issue.number}: {issue.title}\nNode ID: {issue.id}"


def format_added_item(item_id: str) -> str:
    return f"Successfully added issue to project v2. Item ID: {item_id}"
