"""Core domain surface for github-projects-mcp (transport-agnostic)."""

from .client import (
    DEFAULT_GRAPHQL_URL,
    GitHubClientError,
    GitHubGraphQLClient,
    GitHubGraphQLError,
    GitHubHTTPError,
    GitHubModelValidationError,
    GitHubParseError,
    RetryConfig,
)
from .config import ServerConfig, create_client_from_env, load_env_config
from .context import (
    ClientAccessor,
    MissingGraphQLURLError,
    MissingTokenError,
    RequestContext,
    apply_request_context,
    client_from_context,
    ensure_request_id,
    get_context,
    reset_context,
    seed_from_env,
)
from .definitions import ToolDefinition, ToolResult, bind_params, define_tool
from .errors import (
    GitHubClientUnavailableError,
    ToolExecutionError,
    ToolParameterError,
)
from .registry import (
    ToolRegistration,
    build_tool_registrations,
    collect_tool_definitions,
    discover_tool_modules,
    iter_tool_definitions,
    register_discovered_tools,
)
from .translations import TranslationHelper, null_translation_helper

__all__ = [
    # Client
    "GitHubGraphQLClient",
    "RetryConfig",
    "DEFAULT_GRAPHQL_URL",
    # Exceptions
    "GitHubClientError",
    "GitHubHTTPError",
    "GitHubGraphQLError",
    "GitHubParseError",
    "GitHubModelValidationError",
    "GitHubClientUnavailableError",
    "ToolParameterError",
    "ToolExecutionError",
    # Config helpers
    "ServerConfig",
    "create_client_from_env",
    "load_env_config",
    # Tool definitions
    "ToolDefinition",
    "ToolResult",
    "bind_params",
    "define_tool",
    # Registry helpers
    "ToolRegistration",
    "build_tool_registrations",
    "collect_tool_definitions",
    "discover_tool_modules",
    "iter_tool_definitions",
    "register_discovered_tools",
    # Translations
    "TranslationHelper",
    "null_translation_helper",
    # Context
    "ClientAccessor",
    "RequestContext",
    "MissingTokenError",
    "MissingGraphQLURLError",
    "seed_from_env",
    "get_context",
    "apply_request_context",
    "reset_context",
    "ensure_request_id",
    "client_from_context",
]
