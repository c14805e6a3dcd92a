from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class IssueStatus(str, Enum):
    OPEN = "open"
    CLOSED = "closed"


def normalize_status(state: str | None) -> IssueStatus:
    """Collapse a provider state string into the two-valued IssueStatus.

    Only ``closed`` (any case) maps to CLOSED. GitLab's ``opened`` and
    ``reopened``, GitHub's ``open`` and a missing state all map to OPEN.
    """
    if state is not None and state.lower() == "closed":
        return IssueStatus.CLOSED
    return IssueStatus.OPEN


class IssueRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str = Field(min_length=1)
    description: str


class IssueResponse(BaseModel):
    """Upstream issue state as reported by the provider at call time."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    issue_number: int
    url: str | None = None
    status: IssueStatus
