"""Pydantic models for the GitLab API adapter."""

from pydantic import BaseModel, ConfigDict


class GitLabIssuePayload(BaseModel):
    """The fields of a GitLab issue object that the adapter reads.

    ``iid`` is the project-scoped issue number, not the global ``id``.
    """

    model_config = ConfigDict(extra="ignore")

    iid: int
    web_url: str | None
    state: str | None = None
