"""github_projects_mcp package exports."""

from .core import (
    GitHubClientError,
    GitHubClientUnavailableError,
    GitHubGraphQLClient,
    GitHubGraphQLError,
    GitHubHTTPError,
    GitHubModelValidationError,
    GitHubParseError,
    RetryConfig,
    ToolDefinition,
    ToolResult,
    collect_tool_definitions,
    discover_tool_modules,
    register_discovered_tools,
)

__all__ = [
    # Client
    "GitHubGraphQLClient",
    "RetryConfig",
    # Exceptions
    "GitHubClientError",
    "GitHubHTTPError",
    "GitHubGraphQLError",
    "GitHubParseError",
    "GitHubModelValidationError",
    "GitHubClientUnavailableError",
    # Tools
    "ToolDefinition",
    "ToolResult",
    "collect_tool_definitions",
    "discover_tool_modules",
    "register_discovered_tools",
]
