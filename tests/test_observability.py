import logging

import httpx
import pytest
import respx
from github_projects_mcp.core.client import (
    DEFAULT_GRAPHQL_URL,
    GitHubClientError,
    GitHubGraphQLClient,
    RetryConfig,
)
from github_projects_mcp.core.definitions import get_tool_definition
from github_projects_mcp.core.errors import GitHubClientUnavailableError
from github_projects_mcp.core.logging import LogfmtFormatter
from github_projects_mcp.core.operations import GET_ISSUE_NODE_ID
from github_projects_mcp.core.tools.projects import get_issue_node_id

ISSUE_DATA = {
    "data": {"repository": {"issue": {"id": "I_kwDOA", "number": 42, "title": "Fix bug"}}}
}


@pytest.mark.asyncio
@respx.mock
async def test_gql_client_logs_success(caplog):
    caplog.set_level(logging.INFO, logger="github_projects_mcp.observability")
    route = respx.post(DEFAULT_GRAPHQL_URL).mock(
        return_value=httpx.Response(200, json=ISSUE_DATA)
    )
    client = GitHubGraphQLClient(token="key", request_id="rid-success")
    try:
        await client.query(GET_ISSUE_NODE_ID, {}, tool="foo")
    finally:
        await client.aclose()

    assert route.called
    record = next(r for r in caplog.records if r.getMessage() == "gql_call")
    assert record.request_id == "rid-success"
    assert record.tool == "foo"
    assert record.operation == "GetIssueNodeId"
    assert record.status == 200
    assert record.attempt == 0
    assert record.duration_ms >= 0


@pytest.mark.asyncio
@respx.mock
async def test_gql_client_logs_exception(caplog):
    caplog.set_level(logging.INFO, logger="github_projects_mcp.observability")
    respx.post(DEFAULT_GRAPHQL_URL).mock(side_effect=httpx.ConnectTimeout("boom"))
    client = GitHubGraphQLClient(
        token="key",
        request_id="rid-fail",
        retry=RetryConfig(max_retries=0),
    )
    with pytest.raises(GitHubClientError):
        await client.query(GET_ISSUE_NODE_ID, {}, tool="bar")
    await client.aclose()

    record = next(r for r in caplog.records if r.getMessage() == "gql_call")
    assert record.request_id == "rid-fail"
    assert record.tool == "bar"
    assert record.status == "exception"
    assert record.error_type == "ConnectTimeout"


@pytest.mark.asyncio
@respx.mock
async def test_tool_call_outcomes_logged(caplog):
    caplog.set_level(logging.INFO, logger="github_projects_mcp.observability")
    respx.post(DEFAULT_GRAPHQL_URL).mock(return_value=httpx.Response(200, json=ISSUE_DATA))
    definition = get_tool_definition(get_issue_node_id)

    async with GitHubGraphQLClient(token="key", request_id="rid-tool") as client:
        await definition.call(
            lambda: client, {"owner": "octo", "repo": "hello", "issue_number": 42}
        )
        await definition.call(lambda: client, {"owner": "octo"})

    records = [r for r in caplog.records if r.getMessage() == "tool_call"]
    assert [(r.tool, r.outcome) for r in records] == [
        ("get_issue_node_id", "ok"),
        ("get_issue_node_id", "invalid_params"),
    ]
    assert records[0].request_id == "rid-tool"
    assert records[0].duration_ms >= 0
    assert not hasattr(records[1], "request_id")


@pytest.mark.asyncio
async def test_tool_call_logged_when_client_unavailable(caplog):
    caplog.set_level(logging.INFO, logger="github_projects_mcp.observability")
    definition = get_tool_definition(get_issue_node_id)

    def accessor():
        raise ValueError("no token")

    with pytest.raises(GitHubClientUnavailableError):
        await definition.call(
            accessor, {"owner": "octo", "repo": "hello", "issue_number": 42}
        )

    record = next(r for r in caplog.records if r.getMessage() == "tool_call")
    assert record.outcome == "client_unavailable"


def test_logfmt_formatter_renders_extras():
    record = logging.LogRecord(
        name="github_projects_mcp.observability",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="gql_call",
        args=(),
        exc_info=None,
    )
    record.tool = "list_projects_v2"
    record.status = 200
    record.operation = "List Projects"

    line = LogfmtFormatter().format(record)

    assert line == (
        "level=info logger=github_projects_mcp.observability event=gql_call "
        'tool=list_projects_v2 operation="List Projects" status=200'
    )
