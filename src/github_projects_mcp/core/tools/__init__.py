"""
Tool namespace for the GitHub Projects v2 MCP server.

Modules here are imported by core.registry.discover_tool_modules; every
handler decorated with define_tool is exposed.
"""

from .projects import (
    add_issue_to_project_v2,
    get_issue_node_id,
    get_project_v2,
    list_projects_v2,
)

__all__ = [
    "list_projects_v2",
    "get_project_v2",
    "get_issue_node_id",
    "add_issue_to_project_v2",
]
