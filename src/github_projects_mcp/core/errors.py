from .client import (
    GitHubClientError,
    GitHubGraphQLError,
    GitHubHTTPError,
    GitHubModelValidationError,
    GitHubParseError,
)


class ToolParameterError(ValueError):
    """Tool arguments could not be bound to the tool's input model."""


class GitHubClientUnavailableError(RuntimeError):
    """The client accessor could not produce a usable client."""


class ToolExecutionError(Exception):
    """Raised at the MCP boundary to mark a tool result as an error."""


__all__ = [
    "GitHubClientError",
    "GitHubHTTPError",
    "GitHubGraphQLError",
    "GitHubParseError",
    "GitHubModelValidationError",
    "ToolParameterError",
    "GitHubClientUnavailableError",
    "ToolExecutionError",
]
