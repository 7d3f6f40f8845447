#!/usr/bin/env python3
"""
Enforce import boundaries inside src/github_projects_mcp/core/.

- Nothing in core may import a transport (MCP server, ASGI stacks, our own
  transports package).
- Tool modules under core/tools/ reach GitHub only through the GraphQL
  client, and read no environment.
"""

from __future__ import annotations

import ast
import sys
from pathlib import Path
from typing import Iterator, Tuple

REPO_ROOT = Path(__file__).resolve().parent.parent
CORE_DIR = REPO_ROOT / "src" / "github_projects_mcp" / "core"
TOOLS_DIR = CORE_DIR / "tools"

TRANSPORT_PREFIXES = (
    "starlette",
    "uvicorn",
    "mcp.server",
    "fastmcp",
    "github_projects_mcp.transports",
)
TOOL_ONLY_PREFIXES = (
    "httpx",
    "os",
    "dotenv",
)


def _matches(module: str, prefixes: Tuple[str, ...]) -> bool:
    return any(module == p or module.startswith(p + ".") for p in prefixes)


def iter_imports(path: Path) -> Iterator[Tuple[int, str]]:
    tree = ast.parse(path.read_text(encoding="utf-8"))
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                yield node.lineno, alias.name
        elif isinstance(node, ast.ImportFrom) and node.level == 0 and node.module:
            yield node.lineno, node.module


def check_file(path: Path) -> list[str]:
    forbidden = TRANSPORT_PREFIXES
    if TOOLS_DIR in path.parents:
        forbidden = forbidden + TOOL_ONLY_PREFIXES

    return [
        f"{path}:{lineno}: forbidden import '{module}'"
        for lineno, module in iter_imports(path)
        if _matches(module, forbidden)
    ]


def main() -> int:
    violations: list[str] = []
    for py_file in sorted(CORE_DIR.rglob("*.py")):
        violations.extend(check_file(py_file))

    for v in violations:
        print(v, file=sys.stderr)
    return 1 if violations else 0


if __name__ == "__main__":
    sys.exit(main())
