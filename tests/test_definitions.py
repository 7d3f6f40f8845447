import pytest
from github_projects_mcp.core.definitions import bind_params, get_tool_definition
from github_projects_mcp.core.errors import ToolParameterError
from github_projects_mcp.core.models import GetIssueNodeIdInput, ListProjectsV2Input
from github_projects_mcp.core.tools.projects import (
    add_issue_to_project_v2,
    get_issue_node_id,
    get_project_v2,
    list_projects_v2,
)

EXPECTED = {
    list_projects_v2: {
        "name": "list_projects_v2",
        "title": "List Projects v2",
        "read_only": True,
        "required": ["owner", "owner_type"],
    },
    get_project_v2: {
        "name": "get_project_v2",
        "title": "Get Projects v2 details",
        "read_only": True,
        "required": ["project_id"],
    },
    get_issue_node_id: {
        "name": "get_issue_node_id",
        "title": "Get issue node ID",
        "read_only": True,
        "required": ["owner", "repo", "issue_number"],
    },
    add_issue_to_project_v2: {
        "name": "add_issue_to_project_v2",
        "title": "Add issue to Projects v2",
        "read_only": False,
        "required": ["project_id", "issue_id"],
    },
}


@pytest.mark.parametrize("handler", list(EXPECTED))
def test_tool_definition_metadata(handler):
    definition = get_tool_definition(handler)
    expected = EXPECTED[handler]

    assert definition.name == expected["name"]
    assert definition.title == expected["title"]
    assert definition.read_only is expected["read_only"]
    assert definition.description

    schema = definition.input_schema()
    assert schema["type"] == "object"
    assert sorted(schema["required"]) == sorted(expected["required"])
    assert set(schema["properties"]) == set(expected["required"])
    assert schema["additionalProperties"] is False
    for prop in schema["properties"].values():
        assert prop["description"]


def test_owner_type_schema_is_enumerated():
    schema = get_tool_definition(list_projects_v2).input_schema()
    assert schema["properties"]["owner_type"]["enum"] == ["organization", "user"]


def test_issue_number_schema_is_integer():
    schema = get_tool_definition(get_issue_node_id).input_schema()
    assert schema["properties"]["issue_number"]["type"] == "integer"


def test_translation_keys():
    definition = get_tool_definition(add_issue_to_project_v2)
    seen = []

    def translate(key, default):
        seen.append(key)
        return default

    definition.localized_title(translate)
    definition.localized_description(translate)

    assert seen == [
        "TOOL_ADD_ISSUE_TO_PROJECT_V2_USER_TITLE",
        "TOOL_ADD_ISSUE_TO_PROJECT_V2_DESCRIPTION",
    ]


def test_bind_params_returns_model():
    params = bind_params(
        GetIssueNodeIdInput, {"owner": "octo", "repo": "hello", "issue_number": 7}
    )
    assert isinstance(params, GetIssueNodeIdInput)
    assert params.issue_number == 7


def test_bind_params_none_is_empty_object():
    with pytest.raises(ToolParameterError) as exc:
        bind_params(ListProjectsV2Input, None, tool="list_projects_v2")
    message = str(exc.value)
    assert message.startswith("Invalid arguments for list_projects_v2: ")
    assert "owner: Field required" in message
    assert "owner_type: Field required" in message


def test_bind_params_rejects_non_mapping():
    with pytest.raises(ToolParameterError) as exc:
        bind_params(ListProjectsV2Input, ["octo"])
    assert str(exc.value) == "Invalid arguments: expected an object, got list"


def test_bind_params_rejects_empty_strings():
    with pytest.raises(ToolParameterError) as exc:
        bind_params(ListProjectsV2Input, {"owner": "", "owner_type": "user"})
    assert "owner:" in str(exc.value)
