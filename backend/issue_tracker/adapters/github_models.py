"""Pydantic models for the GitHub API adapter."""

from pydantic import BaseModel, ConfigDict


class GitHubIssuePayload(BaseModel):
    """The fields of a GitHub issue object that the adapter reads."""

    model_config = ConfigDict(extra="ignore")

    number: int
    # Required key, but GitHub may send null.
    html_url: str | None
    state: str | None = None
