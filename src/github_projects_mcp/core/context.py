"""Request context and DI contract using ContextVars."""

from __future__ import annotations

import uuid
from contextvars import ContextVar, Token
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from .client import GitHubGraphQLClient
from .config import load_env_config

# Context variables
_token_var: ContextVar[str | None] = ContextVar("token", default=None)
_graphql_url_var: ContextVar[str | None] = ContextVar("graphql_url", default=None)
_request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)
_user_agent_var: ContextVar[str | None] = ContextVar("user_agent", default=None)

ClientAccessor = Callable[[], GitHubGraphQLClient]


class MissingTokenError(ValueError):
    """Raised when a GitHub token is required but missing."""


class MissingGraphQLURLError(ValueError):
    """Raised when the GraphQL endpoint URL is required but missing."""


@dataclass(frozen=True)
class RequestContext:
    token: str
    graphql_url: str
    request_id: str
    user_agent: Optional[str] = None


def ensure_request_id(candidate: Optional[str] = None) -> str:
    return candidate or uuid.uuid4().hex


def seed_from_env(*, use_dotenv: bool = False) -> RequestContext:
    graphql_url, token = load_env_config(use_dotenv=use_dotenv)
    if not graphql_url:
        raise MissingGraphQLURLError("GITHUB_GRAPHQL_URL not set")
    if not token:
        raise MissingTokenError("GITHUB_PERSONAL_ACCESS_TOKEN not set")
    return RequestContext(
        token=token,
        graphql_url=graphql_url,
        request_id=ensure_request_id(None),
        user_agent=None,
    )


def apply_request_context(
    token: str,
    graphql_url: str,
    request_id: Optional[str] = None,
    user_agent: Optional[str] = None,
) -> Iterable[Token]:
    """Set ContextVars for the duration of a request; returns tokens for reset()."""
    tokens = []
    tokens.append(_token_var.set(token))
    tokens.append(_graphql_url_var.set(graphql_url))
    tokens.append(_request_id_var.set(ensure_request_id(request_id)))
    tokens.append(_user_agent_var.set(user_agent))
    return tokens


def reset_context(tokens: Iterable[Token]) -> None:
    for token in tokens:
        token.var.reset(token)


def get_context(
    *, require_token: bool = True, require_graphql_url: bool = True
) -> RequestContext:
    token = _token_var.get()
    graphql_url = _graphql_url_var.get()
    request_id = ensure_request_id(_request_id_var.get())
    user_agent = _user_agent_var.get()

    if require_token and not token:
        raise MissingTokenError("GitHub token is required and missing.")
    if require_graphql_url and not graphql_url:
        raise MissingGraphQLURLError("GraphQL URL is required and missing.")

    return RequestContext(
        token=token or "",
        graphql_url=graphql_url or "",
        request_id=request_id,
        user_agent=user_agent,
    )


def client_from_context() -> GitHubGraphQLClient:
    ctx = get_context(require_token=True, require_graphql_url=True)
    return GitHubGraphQLClient(
        token=ctx.token,
        graphql_url=ctx.graphql_url,
        request_id=ctx.request_id,
        user_agent=ctx.user_agent,
    )


__all__ = [
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
