"""HTTP dispatch for issue operations on GitHub and GitLab.

The router only routes, logs, and maps adapter failures to status codes; all
provider-specific translation happens in the adapters.
"""

from __future__ import annotations

from typing import Annotated, NoReturn
from urllib.parse import quote

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from issue_tracker.adapters.errors import AdapterError, MalformedResponseError
from issue_tracker.adapters.github_client import GitHubClient
from issue_tracker.adapters.gitlab_client import GitLabClient
from issue_tracker.schemas.issue import IssueRequest, IssueResponse

router = APIRouter(prefix="/api/issues", tags=["issues"])
logger = structlog.get_logger(__name__)


def get_github_client(request: Request) -> GitHubClient:
    """FastAPI dependency — reads from app.state.github_client, 503 when not configured."""
    client = getattr(request.app.state, "github_client", None)
    if client is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="GitHub token not configured. Set GITHUB_TOKEN in the backend .env file.",
        )
    return client


def get_gitlab_client(request: Request) -> GitLabClient:
    """FastAPI dependency — reads from app.state.gitlab_client, 503 when not configured."""
    client = getattr(request.app.state, "gitlab_client", None)
    if client is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="GitLab token not configured. Set GITLAB_TOKEN in the backend .env file.",
        )
    return client


def _escaped(repository: str) -> str:
    # The ASGI server has already decoded %2F; hand adapters the identifier as the caller sent it.
    return quote(repository, safe="")


def _raise_upstream(exc: AdapterError) -> NoReturn:
    if isinstance(exc, MalformedResponseError):
        detail = f"Unexpected response from {exc.provider}: {exc}"
    else:
        detail = f"{exc.provider} API error: {exc}"
    raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=detail) from exc


def _close_failed() -> NoReturn:
    raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to close issue.")


# ----------------------------------------------------------------------
# GitHub
# ----------------------------------------------------------------------


@router.post("/github/{repository:path}", response_model=IssueResponse)
async def create_github_issue(
    repository: str,
    body: IssueRequest,
    client: Annotated[GitHubClient, Depends(get_github_client)],
) -> IssueResponse:
    logger.info("create_issue_requested", provider="github", repository=repository)
    try:
        return await client.create_issue(_escaped(repository), body)
    except AdapterError as exc:
        logger.error("create_issue_error", provider="github", repository=repository, error=str(exc))
        _raise_upstream(exc)


@router.put("/github/{repository:path}/{issue_number:int}", response_model=IssueResponse)
async def update_github_issue(
    repository: str,
    issue_number: int,
    body: IssueRequest,
    client: Annotated[GitHubClient, Depends(get_github_client)],
) -> IssueResponse:
    logger.info("update_issue_requested", provider="github", repository=repository, issue_number=issue_number)
    try:
        return await client.update_issue(_escaped(repository), issue_number, body)
    except AdapterError as exc:
        logger.error(
            "update_issue_error", provider="github", repository=repository, issue_number=issue_number, error=str(exc)
        )
        _raise_upstream(exc)


@router.delete("/github/{repository:path}/{issue_number:int}", status_code=status.HTTP_204_NO_CONTENT)
async def close_github_issue(
    repository: str,
    issue_number: int,
    client: Annotated[GitHubClient, Depends(get_github_client)],
) -> None:
    logger.info("close_issue_requested", provider="github", repository=repository, issue_number=issue_number)
    if not await client.close_issue(_escaped(repository), issue_number):
        logger.warning("close_issue_unsuccessful", provider="github", repository=repository, issue_number=issue_number)
        _close_failed()


# ----------------------------------------------------------------------
# GitLab
# ----------------------------------------------------------------------


@router.get("/gitlab/{repository:path}", response_model=list[IssueResponse])
async def list_gitlab_issues(
    repository: str,
    client: Annotated[GitLabClient, Depends(get_gitlab_client)],
    page: Annotated[int | None, Query(ge=1)] = None,
    per_page: Annotated[int | None, Query(ge=1, le=100)] = None,
) -> list[IssueResponse]:
    logger.info("list_issues_requested", provider="gitlab", repository=repository, page=page)
    try:
        return await client.list_issues(_escaped(repository), page=page, per_page=per_page)
    except AdapterError as exc:
        logger.error("list_issues_error", provider="gitlab", repository=repository, error=str(exc))
        _raise_upstream(exc)


@router.post("/gitlab/{repository:path}", response_model=IssueResponse)
async def create_gitlab_issue(
    repository: str,
    body: IssueRequest,
    client: Annotated[GitLabClient, Depends(get_gitlab_client)],
) -> IssueResponse:
    logger.info("create_issue_requested", provider="gitlab", repository=repository)
    try:
        return await client.create_issue(_escaped(repository), body)
    except AdapterError as exc:
        logger.error("create_issue_error", provider="gitlab", repository=repository, error=str(exc))
        _raise_upstream(exc)


@router.put("/gitlab/{repository:path}/{issue_number:int}", response_model=IssueResponse)
async def update_gitlab_issue(
    repository: str,
    issue_number: int,
    body: IssueRequest,
    client: Annotated[GitLabClient, Depends(get_gitlab_client)],
) -> IssueResponse:
    logger.info("update_issue_requested", provider="gitlab", repository=repository, issue_number=issue_number)
    try:
        return await client.update_issue(_escaped(repository), issue_number, body)
    except AdapterError as exc:
        logger.error(
            "update_issue_error", provider="gitlab", repository=repository, issue_number=issue_number, error=str(exc)
        )
        _raise_upstream(exc)


@router.delete("/gitlab/{repository:path}/{issue_number:int}", status_code=status.HTTP_204_NO_CONTENT)
async def close_gitlab_issue(
    repository: str,
    issue_number: int,
    client: Annotated[GitLabClient, Depends(get_gitlab_client)],
) -> None:
    logger.info("close_issue_requested", provider="gitlab", repository=repository, issue_number=issue_number)
    if not await client.close_issue(_escaped(repository), issue_number):
        logger.warning("close_issue_unsuccessful", provider="gitlab", repository=repository, issue_number=issue_number)
        _close_failed()
