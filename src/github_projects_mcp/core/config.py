from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Tuple

from dotenv import load_dotenv

from .client import DEFAULT_GRAPHQL_URL, GitHubGraphQLClient


def _get_bool_env(name: str, default: bool) -> bool:
    """Parse a boolean environment variable with a safe default."""
    raw = os.getenv(name)
    if raw is None:
        return default
    val = raw.strip().lower()
    if val in {"1", "true", "t", "yes", "y", "on"}:
        return True
    if val in {"0", "false", "f", "no", "n", "off"}:
        return False
    return default


def graphql_url_for_host(host: str) -> str:
    """GitHub Enterprise Server serves GraphQL under /api/graphql."""
    host = host.strip().rstrip("/")
    if not host:
        return DEFAULT_GRAPHQL_URL
    if "://" not in host:
        host = f"https://{host}"
    if host in {"https://github.com", "https://api.github.com"}:
        return DEFAULT_GRAPHQL_URL
    return f"{host}/api/graphql"


def load_env_config(*, use_dotenv: bool = True) -> Tuple[str, str]:
    """Load GraphQL URL and token from environment (optional .env)."""
    if use_dotenv:
        load_dotenv()
    token = (
        os.getenv("GITHUB_PERSONAL_ACCESS_TOKEN", "").strip()
        or os.getenv("GITHUB_TOKEN", "").strip()
    )
    graphql_url = os.getenv("GITHUB_GRAPHQL_URL", "").strip()
    if not graphql_url:
        graphql_url = graphql_url_for_host(os.getenv("GITHUB_HOST", ""))
    return graphql_url, token


def create_client_from_env(**kwargs) -> GitHubGraphQLClient:
    """Create a GitHubGraphQLClient from environment variables."""
    graphql_url, token = load_env_config()
    if not token:
        raise ValueError("Missing GITHUB_PERSONAL_ACCESS_TOKEN in environment.")
    return GitHubGraphQLClient(token=token, graphql_url=graphql_url, **kwargs)


@dataclass(frozen=True)
class ServerConfig:
    read_only: bool = False
    export_translations: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, *, use_dotenv: bool = True) -> "ServerConfig":
        if use_dotenv:
            load_dotenv()
        return cls(
            read_only=_get_bool_env("GITHUB_READ_ONLY", False),
            export_translations=_get_bool_env("GITHUB_MCP_EXPORT_TRANSLATIONS", False),
            log_level=os.getenv("LOG_LEVEL", "INFO").strip() or "INFO",
        )


__all__ = [
    "load_env_config",
    "create_client_from_env",
    "graphql_url_for_host",
    "ServerConfig",
]
