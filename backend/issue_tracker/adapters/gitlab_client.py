"""HTTP adapter for the GitLab REST API v4 issue endpoints.

Repository identifiers are embedded in the path exactly as given. GitLab
expects a numeric project id or a URL-encoded namespace path
(``group%2Fproject``), so the value is never decoded here.
"""

from typing import Any

import structlog

from issue_tracker.adapters.base import IssueTracker
from issue_tracker.adapters.errors import AdapterError, UpstreamTransportError
from issue_tracker.adapters.gitlab_models import GitLabIssuePayload
from issue_tracker.config.config import settings
from issue_tracker.schemas.issue import IssueRequest, IssueResponse, IssueStatus, normalize_status

logger = structlog.get_logger(__name__)


class GitLabClient(IssueTracker):
    provider = "gitlab"

    def __init__(self, token: str | None, base_url: str | None = None, user_agent: str | None = None) -> None:
        super().__init__(token, base_url or settings.gitlab_base_url, user_agent)

    async def list_issues(
        self,
        repository: str,
        page: int | None = None,
        per_page: int | None = None,
    ) -> list[IssueResponse]:
        """Fetch a single page of project issues, in upstream order.

        Without ``page``/``per_page`` GitLab's defaults apply (first page, 20 items).
        """
        params: dict[str, Any] = {}
        if page is not None:
            params["page"] = page
        if per_page is not None:
            params["per_page"] = per_page
        try:
            resp = await self._request(
                "GET",
                f"/projects/{repository}/issues",
                operation="list_issues",
                repository=repository,
                params=params or None,
            )
            issues = self._parse_list(resp, GitLabIssuePayload, operation="list_issues", repository=repository)
        except AdapterError as exc:
            logger.error("issue_list_failed", provider=self.provider, repository=repository, error=str(exc))
            raise
        return [
            IssueResponse(issue_number=issue.iid, url=issue.web_url, status=normalize_status(issue.state))
            for issue in issues
        ]

    async def create_issue(self, repository: str, request: IssueRequest) -> IssueResponse:
        try:
            resp = await self._request(
                "POST",
                f"/projects/{repository}/issues",
                operation="create_issue",
                repository=repository,
                json_body={"title": request.title, "description": request.description},
            )
            issue = self._parse(resp, GitLabIssuePayload, operation="create_issue", repository=repository)
        except AdapterError as exc:
            logger.error("issue_create_failed", provider=self.provider, repository=repository, error=str(exc))
            raise
        logger.info("issue_created", provider=self.provider, repository=repository, issue_number=issue.iid)
        return IssueResponse(issue_number=issue.iid, url=issue.web_url, status=IssueStatus.OPEN)

    async def update_issue(self, repository: str, issue_number: int, request: IssueRequest) -> IssueResponse:
        """Replace title and description; the returned status reflects the upstream ``state``."""
        context = {"operation": "update_issue", "repository": repository, "issue_number": issue_number}
        try:
            resp = await self._request(
                "PUT",
                f"/projects/{repository}/issues/{issue_number}",
                json_body={"title": request.title, "description": request.description},
                **context,
            )
            issue = self._parse(resp, GitLabIssuePayload, **context)
        except AdapterError as exc:
            logger.error(
                "issue_update_failed",
                provider=self.provider,
                repository=repository,
                issue_number=issue_number,
                error=str(exc),
            )
            raise
        logger.info("issue_updated", provider=self.provider, repository=repository, issue_number=issue_number)
        return IssueResponse(issue_number=issue.iid, url=issue.web_url, status=normalize_status(issue.state))

    async def close_issue(self, repository: str, issue_number: int) -> bool:
        """Send the ``close`` state event. Upstream failures yield False, never an exception."""
        try:
            await self._request(
                "PUT",
                f"/projects/{repository}/issues/{issue_number}",
                operation="close_issue",
                repository=repository,
                issue_number=issue_number,
                json_body={"state_event": "close"},
            )
        except UpstreamTransportError as exc:
            logger.error(
                "issue_close_failed",
                provider=self.provider,
                repository=repository,
                issue_number=issue_number,
                error=str(exc),
            )
            return False
        logger.info("issue_closed", provider=self.provider, repository=repository, issue_number=issue_number)
        return True
