import uuid

import pytest
from github_projects_mcp.core.client import DEFAULT_GRAPHQL_URL
from github_projects_mcp.core.context import (
    MissingGraphQLURLError,
    MissingTokenError,
    apply_request_context,
    client_from_context,
    get_context,
    reset_context,
    seed_from_env,
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in (
        "GITHUB_PERSONAL_ACCESS_TOKEN",
        "GITHUB_TOKEN",
        "GITHUB_HOST",
        "GITHUB_GRAPHQL_URL",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_seed_from_env_missing_token(clean_env):
    with pytest.raises(MissingTokenError):
        seed_from_env()


def test_seed_from_env_defaults_to_public_endpoint(clean_env):
    clean_env.setenv("GITHUB_PERSONAL_ACCESS_TOKEN", "env-token")
    ctx = seed_from_env()
    assert ctx.token == "env-token"
    assert ctx.graphql_url == DEFAULT_GRAPHQL_URL


def test_seed_from_env_falls_back_to_github_token(clean_env):
    clean_env.setenv("GITHUB_TOKEN", "fallback-token")
    clean_env.setenv("GITHUB_HOST", "ghe.example.com")
    ctx = seed_from_env()
    assert ctx.token == "fallback-token"
    assert ctx.graphql_url == "https://ghe.example.com/api/graphql"


def test_apply_and_get_context_isolated():
    tokens = apply_request_context(
        token="t1",
        graphql_url="https://g1/graphql",
        request_id="r1",
        user_agent="ua1",
    )
    ctx = get_context()
    assert ctx.token == "t1"
    assert ctx.graphql_url == "https://g1/graphql"
    assert ctx.request_id == "r1"
    assert ctx.user_agent == "ua1"
    reset_context(tokens)
    with pytest.raises(MissingTokenError):
        get_context()


def test_missing_graphql_url():
    tokens = apply_request_context(token="t", graphql_url="")
    try:
        with pytest.raises(MissingGraphQLURLError):
            get_context()
        assert get_context(require_graphql_url=False).graphql_url == ""
    finally:
        reset_context(tokens)


def test_request_id_generated():
    tokens = apply_request_context(token="t", graphql_url="https://g/graphql")
    ctx = get_context()
    uuid.UUID(hex=ctx.request_id)  # should parse
    reset_context(tokens)


@pytest.mark.asyncio
async def test_client_from_context_uses_context_values():
    tokens = apply_request_context(
        token="ctx-token",
        graphql_url="https://ghe.example.com/api/graphql",
        request_id="rid-1",
        user_agent="custom-agent",
    )
    try:
        client = client_from_context()
        assert client.graphql_url == "https://ghe.example.com/api/graphql"
        assert client.request_id == "rid-1"
        assert client.http.headers["Authorization"] == "Bearer ctx-token"
        assert client.http.headers["User-Agent"] == "custom-agent"
        await client.aclose()
    finally:
        reset_context(tokens)


def test_client_from_context_without_token_raises():
    with pytest.raises(MissingTokenError):
        client_from_context()
