from __future__ import annotations

from typing import Any, List, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class GraphQLModel(BaseModel):
    """
    Base model for GraphQL response data.
    GitHub returns null for unresolved nodes and for fields the token
    cannot see; nulls are dropped so every field falls back to its zero value.
    An inline fragment that does not match the node type yields {} and
    therefore a fully zero-valued record.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        if data is None:
            return {}
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


def _drop_null_nodes(value: Any) -> Any:
    if isinstance(value, list):
        return [v for v in value if v is not None]
    return value


# --- Input Models (Tool Payloads) ---


class ListProjectsV2Input(BaseModel):
    owner: str = Field(min_length=1, description="Organization or user login")
    owner_type: Literal["organization", "user"] = Field(
        description="Owner type: organization or user"
    )

    model_config = ConfigDict(extra="forbid")


class GetProjectV2Input(BaseModel):
    project_id: str = Field(min_length=1, description="Projects v2 ID")

    model_config = ConfigDict(extra="forbid")


class GetIssueNodeIdInput(BaseModel):
    owner: str = Field(min_length=1, description="Repository owner")
    repo: str = Field(min_length=1, description="Repository name")
    issue_number: int = Field(gt=0, description="Issue number")

    model_config = ConfigDict(extra="forbid")


class AddIssueToProjectV2Input(BaseModel):
    project_id: str = Field(min_length=1, description="Projects v2 ID")
    issue_id: str = Field(min_length=1, description="Issue ID")

    model_config = ConfigDict(extra="forbid")


# --- Response Models (GraphQL data) ---


class ProjectV2Summary(GraphQLModel):
    id: str = ""
    title: str = ""
    number: int = 0
    url: str = ""
    state: str = ""


class ProjectV2Connection(GraphQLModel):
    nodes: List[ProjectV2Summary] = Field(default_factory=list)

    @field_validator("nodes", mode="before")
    @classmethod
    def skip_null_nodes(cls, value: Any) -> Any:
        return _drop_null_nodes(value)


class ProjectV2Owner(GraphQLModel):
    projects_v2: ProjectV2Connection = Field(
        default_factory=ProjectV2Connection, alias="projectsV2"
    )


class ListProjectsV2Response(GraphQLModel):
    organization: ProjectV2Owner = Field(default_factory=ProjectV2Owner)
    user: ProjectV2Owner = Field(default_factory=ProjectV2Owner)

    def projects_for(self, owner_type: str) -> List[ProjectV2Summary]:
        owner = self.organization if owner_type == "organization" else self.user
        return owner.projects_v2.nodes


class ProjectV2Field(GraphQLModel):
    id: str = ""
    name: str = ""


class ProjectV2FieldConnection(GraphQLModel):
    nodes: List[ProjectV2Field] = Field(default_factory=list)

    @field_validator("nodes", mode="before")
    @classmethod
    def skip_null_nodes(cls, value: Any) -> Any:
        return _drop_null_nodes(value)


class ProjectV2Detail(ProjectV2Summary):
    public: bool = False
    field_configs: ProjectV2FieldConnection = Field(
        default_factory=ProjectV2FieldConnection, alias="fields"
    )

    @property
    def field_nodes(self) -> List[ProjectV2Field]:
        return self.field_configs.nodes


class GetProjectV2Response(GraphQLModel):
    node: ProjectV2Detail = Field(default_factory=ProjectV2Detail)


class IssueNode(GraphQLModel):
    id: str = ""
    number: int = 0
    title: str = ""


class RepositoryIssue(GraphQLModel):
    issue: IssueNode = Field(default_factory=IssueNode)


class GetIssueNodeIdResponse(GraphQLModel):
    repository: RepositoryIssue = Field(default_factory=RepositoryIssue)


class ProjectV2Item(GraphQLModel):
    id: str = ""


class AddProjectV2ItemPayload(GraphQLModel):
    item: ProjectV2Item = Field(default_factory=ProjectV2Item)


class AddProjectV2ItemByIdResponse(GraphQLModel):
    add_project_v2_item_by_id: AddProjectV2ItemPayload = Field(
        default_factory=AddProjectV2ItemPayload, alias="addProjectV2ItemById"
    )
