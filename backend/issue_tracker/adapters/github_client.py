"""HTTP adapter for the GitHub REST API v3 issue endpoints."""

from urllib.parse import unquote

import structlog

from issue_tracker.adapters.base import IssueTracker
from issue_tracker.adapters.errors import AdapterError, UpstreamTransportError
from issue_tracker.adapters.github_models import GitHubIssuePayload
from issue_tracker.config.config import settings
from issue_tracker.schemas.issue import IssueRequest, IssueResponse, IssueStatus, normalize_status

logger = structlog.get_logger(__name__)


class GitHubClient(IssueTracker):
    provider = "github"

    def __init__(self, token: str | None, base_url: str | None = None, user_agent: str | None = None) -> None:
        super().__init__(token, base_url or settings.github_base_url, user_agent)

    async def create_issue(self, repository: str, request: IssueRequest) -> IssueResponse:
        """Open a new issue.

        Args:
            repository: ``owner/repo``, optionally percent-encoded (``owner%2Frepo``).
            request: Title and description; the description is sent as ``body``.

        Returns:
            The new issue. Status is always OPEN since GitHub cannot create a closed issue.

        Raises:
            UpstreamTransportError: On a network failure or non-2xx response.
            MalformedResponseError: When ``number`` or ``html_url`` is missing.
        """
        repo = unquote(repository)
        try:
            resp = await self._request(
                "POST",
                f"/repos/{repo}/issues",
                operation="create_issue",
                repository=repo,
                json_body={"title": request.title, "body": request.description},
            )
            issue = self._parse(resp, GitHubIssuePayload, operation="create_issue", repository=repo)
        except AdapterError as exc:
            logger.error("issue_create_failed", provider=self.provider, repository=repo, error=str(exc))
            raise
        logger.info("issue_created", provider=self.provider, repository=repo, issue_number=issue.number)
        return IssueResponse(issue_number=issue.number, url=issue.html_url, status=IssueStatus.OPEN)

    async def update_issue(self, repository: str, issue_number: int, request: IssueRequest) -> IssueResponse:
        """Edit title and body of an existing issue and report its current state."""
        repo = unquote(repository)
        context = {"operation": "update_issue", "repository": repo, "issue_number": issue_number}
        try:
            resp = await self._request(
                "PATCH",
                f"/repos/{repo}/issues/{issue_number}",
                json_body={"title": request.title, "body": request.description},
                **context,
            )
            issue = self._parse(resp, GitHubIssuePayload, **context)
        except AdapterError as exc:
            logger.error(
                "issue_update_failed",
                provider=self.provider,
                repository=repo,
                issue_number=issue_number,
                error=str(exc),
            )
            raise
        logger.info("issue_updated", provider=self.provider, repository=repo, issue_number=issue_number)
        return IssueResponse(issue_number=issue.number, url=issue.html_url, status=normalize_status(issue.state))

    async def close_issue(self, repository: str, issue_number: int) -> bool:
        """Set the issue state to closed.

        Returns False instead of raising when the upstream call fails. Closing an
        already-closed issue still succeeds upstream.
        """
        repo = unquote(repository)
        try:
            await self._request(
                "PATCH",
                f"/repos/{repo}/issues/{issue_number}",
                operation="close_issue",
                repository=repo,
                issue_number=issue_number,
                json_body={"state": "closed"},
            )
        except UpstreamTransportError as exc:
            logger.error(
                "issue_close_failed",
                provider=self.provider,
                repository=repo,
                issue_number=issue_number,
                error=str(exc),
            )
            return False
        logger.info("issue_closed", provider=self.provider, repository=repo, issue_number=issue_number)
        return True
