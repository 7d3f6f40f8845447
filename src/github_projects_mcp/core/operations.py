"""
GraphQL operations used by the Projects v2 tools.

Each operation pairs a document with the pydantic model its ``data`` is
validated into, so the wire contract can be reviewed and tested on its own.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Type, TypeVar

from pydantic import BaseModel

from .models import (
    AddProjectV2ItemByIdResponse,
    GetIssueNodeIdResponse,
    GetProjectV2Response,
    ListProjectsV2Response,
)

T = TypeVar("T", bound=BaseModel)

PROJECTS_PAGE_SIZE = 20
FIELDS_PAGE_SIZE = 20


@dataclass(frozen=True)
class GraphQLOperation(Generic[T]):
    name: str
    document: str
    response_model: Type[T]
    mutation: bool = False


LIST_PROJECTS_V2: GraphQLOperation[ListProjectsV2Response] = GraphQLOperation(
    name="ListProjectsV2",
    document=f"""
query ListProjectsV2($login: String!) {{
  organization(login: $login) {{
    projectsV2(first: {PROJECTS_PAGE_SIZE}) {{
      nodes {{ id title number url state }}
    }}
  }}
  user(login: $login) {{
    projectsV2(first: {PROJECTS_PAGE_SIZE}) {{
      nodes {{ id title number url state }}
    }}
  }}
}}
""",
    response_model=ListProjectsV2Response,
)

GET_PROJECT_V2: GraphQLOperation[GetProjectV2Response] = GraphQLOperation(
    name="GetProjectV2",
    document=f"""
query GetProjectV2($id: ID!) {{
  node(id: $id) {{
    ... on ProjectV2 {{
      id
      title
      number
      url
      state
      public
      fields(first: {FIELDS_PAGE_SIZE}) {{
        nodes {{
          ... on ProjectV2FieldCommon {{ id name }}
        }}
      }}
    }}
  }}
}}
""",
    response_model=GetProjectV2Response,
)

GET_ISSUE_NODE_ID: GraphQLOperation[GetIssueNodeIdResponse] = GraphQLOperation(
    name="GetIssueNodeId",
    document="""
query GetIssueNodeId($owner: String!, $name: String!, $issue_number: Int!) {
  repository(owner: $owner, name: $name) {
    issue(number: $issue_number) { id number title }
  }
}
""",
    response_model=GetIssueNodeIdResponse,
)

ADD_PROJECT_V2_ITEM_BY_ID: GraphQLOperation[AddProjectV2ItemByIdResponse] = (
    GraphQLOperation(
        name="AddProjectV2ItemById",
        document="""
mutation AddProjectV2ItemById($input: AddProjectV2ItemByIdInput!) {
  addProjectV2ItemById(input: $input) {
    item { id }
  }
}
""",
        response_model=AddProjectV2ItemByIdResponse,
        mutation=True,
    )
)


__all__ = [
    "GraphQLOperation",
    "LIST_PROJECTS_V2",
    "GET_PROJECT_V2",
    "GET_ISSUE_NODE_ID",
    "ADD_PROJECT_V2_ITEM_BY_ID",
    "PROJECTS_PAGE_SIZE",
    "FIELDS_PAGE_SIZE",
]
