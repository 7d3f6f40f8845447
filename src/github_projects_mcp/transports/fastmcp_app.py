"""
FastMCP app assembly.

FastMCP derives a tool's argument model and JSON schema from the function
signature, and that model ignores unknown keys. Tools here are rebuilt so
the advertised schema is the input model's own schema and argument
validation rejects keys outside it.
"""

from __future__ import annotations

import logging
from typing import List

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.tools import Tool
from pydantic import ConfigDict

from github_projects_mcp.core.config import ServerConfig
from github_projects_mcp.core.context import ClientAccessor
from github_projects_mcp.core.registry import ToolRegistration, build_tool_registrations
from github_projects_mcp.core.translations import (
    TranslationHelperFunc,
    null_translation_helper,
)

SERVER_NAME = "github-projects-mcp"

log = logging.getLogger(__name__)


def to_fastmcp_tool(reg: ToolRegistration) -> Tool:
    tool = Tool.from_function(
        reg.fn,
        name=reg.name,
        title=reg.title,
        description=reg.description,
        annotations=reg.annotations,
    )
    base_args = tool.fn_metadata.arg_model

    class StrictArguments(base_args):
        model_config = ConfigDict(extra="forbid")

    fn_metadata = tool.fn_metadata.model_copy(update={"arg_model": StrictArguments})
    return tool.model_copy(
        update={"parameters": reg.input_schema(), "fn_metadata": fn_metadata}
    )


def build_tools(
    client_provider: ClientAccessor,
    *,
    translate: TranslationHelperFunc = null_translation_helper,
    read_only: bool = False,
) -> List[Tool]:
    return [
        to_fastmcp_tool(reg)
        for reg in build_tool_registrations(
            client_provider, translate=translate, read_only=read_only
        )
    ]


def build_app(
    cfg: ServerConfig,
    client_provider: ClientAccessor,
    translate: TranslationHelperFunc = null_translation_helper,
) -> FastMCP:
    tools = build_tools(client_provider, translate=translate, read_only=cfg.read_only)
    app = FastMCP(SERVER_NAME, tools=tools)
    log.info("Registered %d tools: %s", len(tools), ", ".join(t.name for t in tools))
    return app


__all__ = ["SERVER_NAME", "build_app", "build_tools", "to_fastmcp_tool"]
