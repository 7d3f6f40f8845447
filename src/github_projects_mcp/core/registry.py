from __future__ import annotations

import importlib
import inspect
import logging
import pkgutil
from dataclasses import dataclass
from types import ModuleType
from typing import Annotated, Any, Callable, Dict, Iterable, List, Set

from mcp.types import ToolAnnotations
from pydantic import Field

from .client import GitHubGraphQLClient
from .context import ClientAccessor
from .definitions import ToolDefinition, get_tool_definition
from .errors import ToolExecutionError
from .translations import TranslationHelperFunc, null_translation_helper

log = logging.getLogger("github_projects_mcp.core.registry")


# --- Discovery helpers ----------------------------------------------------- #


def discover_tool_modules(
    package_name: str = "github_projects_mcp.core.tools",
) -> List[ModuleType]:
    """Import all modules under the given tools package, skipping failures."""
    modules: List[ModuleType] = []
    base_pkg = importlib.import_module(package_name)

    for finder in pkgutil.iter_modules(base_pkg.__path__, base_pkg.__name__ + "."):
        name = finder.name
        try:
            module = importlib.import_module(name)
            modules.append(module)
        except Exception as exc:  # pragma: no cover - logged, not fatal
            log.error("Failed importing tool module %s: %s", name, exc)
            continue

    return modules


def iter_tool_definitions(module: ModuleType) -> Iterable[ToolDefinition]:
    """Yield definitions of handlers declared (not imported) in ``module``."""
    for _, func in inspect.getmembers(module, inspect.iscoroutinefunction):
        definition = get_tool_definition(func)
        if definition is None:
            continue
        if func.__module__ != module.__name__:
            # Skip imported handlers
            continue
        yield definition


def collect_tool_definitions(
    modules: List[ModuleType] | None = None,
) -> List[ToolDefinition]:
    modules = modules if modules is not None else discover_tool_modules()
    seen_names: Set[str] = set()
    definitions: List[ToolDefinition] = []

    for module in modules:
        for definition in iter_tool_definitions(module):
            if definition.name in seen_names:
                raise ValueError(f"Duplicate tool name detected: {definition.name}")
            seen_names.add(definition.name)
            definitions.append(definition)

    return definitions


# --- Wrapping / registration ---------------------------------------------- #


def _signature_for(definition: ToolDefinition) -> inspect.Signature:
    """Expose the input model's fields as keyword-only parameters."""
    params = []
    for name, field in definition.input_model.model_fields.items():
        annotation: Any = Annotated[
            (field.annotation, *field.metadata, Field(description=field.description))
        ]
        default = inspect.Parameter.empty if field.is_required() else field.default
        params.append(
            inspect.Parameter(
                name,
                inspect.Parameter.KEYWORD_ONLY,
                default=default,
                annotation=annotation,
            )
        )
    return inspect.Signature(parameters=params, return_annotation=str)


def _wrap_tool(
    definition: ToolDefinition,
    client_provider: ClientAccessor,
    description: str,
) -> Callable:
    """Return a wrapper that injects the client accessor and hides it from the signature."""

    async def wrapped(**kwargs):
        result = await definition.call(client_provider, kwargs)
        if result.is_error:
            raise ToolExecutionError(result.text)
        return result.text

    wrapped.__name__ = definition.name
    wrapped.__doc__ = description
    wrapped.__module__ = definition.handler.__module__
    wrapped.__signature__ = _signature_for(definition)  # type: ignore[attr-defined]
    return wrapped


@dataclass(frozen=True)
class ToolRegistration:
    """Everything a server needs to expose one tool."""

    definition: ToolDefinition
    fn: Callable
    title: str
    description: str
    annotations: ToolAnnotations

    @property
    def name(self) -> str:
        return self.definition.name

    def input_schema(self) -> Dict[str, Any]:
        return self.definition.input_schema()


def build_tool_registrations(
    client_provider: ClientAccessor | GitHubGraphQLClient,
    modules: List[ModuleType] | None = None,
    *,
    translate: TranslationHelperFunc = null_translation_helper,
    read_only: bool = False,
) -> List[ToolRegistration]:
    if isinstance(client_provider, GitHubGraphQLClient):
        _client = client_provider

        def client_provider():
            return _client

    registrations: List[ToolRegistration] = []
    for definition in collect_tool_definitions(modules):
        if read_only and not definition.read_only:
            log.info("Skipping %s (read-only mode)", definition.name)
            continue

        title = definition.localized_title(translate)
        description = definition.localized_description(translate)
        registrations.append(
            ToolRegistration(
                definition=definition,
                fn=_wrap_tool(definition, client_provider, description),
                title=title,
                description=description,
                annotations=ToolAnnotations(
                    title=title, readOnlyHint=definition.read_only
                ),
            )
        )
    return registrations


def register_discovered_tools(
    app,
    client_provider: ClientAccessor | GitHubGraphQLClient,
    modules: List[ModuleType] | None = None,
    *,
    translate: TranslationHelperFunc = null_translation_helper,
    read_only: bool = False,
) -> List[str]:
    """
    Register discovered tools on any app that exposes a .tool decorator.
    The decorator derives argument handling from the wrapper signature, so
    unknown keys are up to the app; FastMCP servers are built with
    transports.fastmcp_app.build_app, which rejects them.
    """
    if not hasattr(app, "tool"):
        raise TypeError("app must expose a 'tool' decorator")

    registered: List[str] = []
    for reg in build_tool_registrations(
        client_provider, modules, translate=translate, read_only=read_only
    ):
        app.tool(
            name=reg.name,
            title=reg.title,
            description=reg.description,
            annotations=reg.annotations,
        )(reg.fn)
        registered.append(reg.name)
        log.info("Registered tool: %s (%s)", reg.name, reg.fn.__module__)

    return registered
