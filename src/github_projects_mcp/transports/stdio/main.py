from __future__ import annotations

import asyncio

from github_projects_mcp.core.config import ServerConfig
from github_projects_mcp.core.context import (
    apply_request_context,
    client_from_context,
    reset_context,
    seed_from_env,
)
from github_projects_mcp.core.logging import setup_logging
from github_projects_mcp.core.translations import TranslationHelper
from github_projects_mcp.transports.fastmcp_app import build_app


async def main() -> None:
    cfg = ServerConfig.from_env()
    setup_logging(cfg.log_level)
    translate = TranslationHelper()

    # Seed ContextVars from env (stdio bootstrap)
    ctx = seed_from_env(use_dotenv=True)
    tokens = list(
        apply_request_context(
            token=ctx.token,
            graphql_url=ctx.graphql_url,
            request_id=ctx.request_id,
            user_agent=ctx.user_agent,
        )
    )
    client = client_from_context()

    app = build_app(cfg, lambda: client, translate)
    if cfg.export_translations:
        translate.dump()

    try:
        await app.run_stdio_async()
    finally:
        await client.aclose()
        reset_context(tokens)


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
