"""
Tool definitions: declared metadata plus the bind -> acquire -> execute flow
shared by every tool.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Type

from pydantic import BaseModel, ValidationError

from .client import GitHubGraphQLClient
from .context import ClientAccessor
from .errors import GitHubClientUnavailableError, ToolParameterError
from .observability import TOOL_CALL, timed_event
from .translations import TranslationHelperFunc, null_translation_helper

TOOL_DEFINITION_ATTR = "__tool_definition__"


@dataclass(frozen=True)
class ToolResult:
    text: str
    is_error: bool = False

    @classmethod
    def ok(cls, text: str) -> "ToolResult":
        return cls(text=text)

    @classmethod
    def error(cls, text: str) -> "ToolResult":
        return cls(text=text, is_error=True)


ToolHandler = Callable[[GitHubGraphQLClient, Any], Awaitable[ToolResult]]


def _describe_validation_error(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "arguments"
        parts.append(f"{loc}: {err.get('msg', 'invalid value')}")
    return "; ".join(parts)


def bind_params(
    model: Type[BaseModel],
    arguments: Optional[Mapping[str, Any]],
    *,
    tool: Optional[str] = None,
) -> BaseModel:
    """Validate an untyped argument mapping into ``model``."""
    label = f"Invalid arguments for {tool}" if tool else "Invalid arguments"
    if arguments is None:
        arguments = {}
    if not isinstance(arguments, Mapping):
        raise ToolParameterError(
            f"{label}: expected an object, got {type(arguments).__name__}"
        )
    try:
        return model.model_validate(dict(arguments))
    except ValidationError as exc:
        raise ToolParameterError(f"{label}: {_describe_validation_error(exc)}") from exc


def acquire_client(get_client: ClientAccessor) -> GitHubGraphQLClient:
    try:
        return get_client()
    except Exception as exc:
        raise GitHubClientUnavailableError(
            f"failed to get GitHub GraphQL client: {exc}"
        ) from exc


@dataclass(frozen=True)
class ToolDefinition:
    name: str
    title: str
    description: str
    input_model: Type[BaseModel]
    read_only: bool
    handler: ToolHandler

    @property
    def translation_prefix(self) -> str:
        return f"TOOL_{self.name.upper()}"

    def localized_title(self, t: TranslationHelperFunc = null_translation_helper) -> str:
        return t(f"{self.translation_prefix}_USER_TITLE", self.title)

    def localized_description(
        self, t: TranslationHelperFunc = null_translation_helper
    ) -> str:
        return t(f"{self.translation_prefix}_DESCRIPTION", self.description)

    def input_schema(self) -> Dict[str, Any]:
        return self.input_model.model_json_schema()

    async def call(
        self, get_client: ClientAccessor, arguments: Optional[Mapping[str, Any]]
    ) -> ToolResult:
        """
        Bind arguments, obtain a client, run the handler.
        Binding failures come back as error results before the accessor is
        touched; accessor failures raise GitHubClientUnavailableError.
        """
        with timed_event(TOOL_CALL, tool=self.name) as event:
            try:
                params = bind_params(self.input_model, arguments, tool=self.name)
            except ToolParameterError as exc:
                event["outcome"] = "invalid_params"
                return ToolResult.error(str(exc))

            event["outcome"] = "client_unavailable"
            client = acquire_client(get_client)
            event["request_id"] = client.request_id
            event["outcome"] = "exception"

            result = await self.handler(client, params)
            event["outcome"] = "error" if result.is_error else "ok"
            return result


def define_tool(
    *,
    name: str,
    title: str,
    description: str,
    input_model: Type[BaseModel],
    read_only: bool,
) -> Callable[[ToolHandler], ToolHandler]:
    """Attach a ToolDefinition to a handler so the registry can discover it."""

    def decorator(func: ToolHandler) -> ToolHandler:
        definition = ToolDefinition(
            name=name,
            title=title,
            description=description,
            input_model=input_model,
            read_only=read_only,
            handler=func,
        )
        setattr(func, TOOL_DEFINITION_ATTR, definition)
        return func

    return decorator


def get_tool_definition(func: Any) -> Optional[ToolDefinition]:
    definition = getattr(func, TOOL_DEFINITION_ATTR, None)
    return definition if isinstance(definition, ToolDefinition) else None


__all__ = [
    "ToolResult",
    "ToolDefinition",
    "ToolHandler",
    "bind_params",
    "acquire_client",
    "define_tool",
    "get_tool_definition",
]
