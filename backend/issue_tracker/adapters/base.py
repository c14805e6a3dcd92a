"""Capability interface shared by the provider adapters.

Only the transport plumbing lives here (auth headers, status checks, JSON
validation). Field mapping and repository-identifier rules stay in each
adapter because the two providers genuinely differ on both.
"""

from abc import ABC, abstractmethod
from typing import Any, TypeVar

import httpx
import pydantic

from issue_tracker.adapters.errors import ConfigurationError, MalformedResponseError, UpstreamTransportError
from issue_tracker.config.config import settings
from issue_tracker.schemas.issue import IssueRequest, IssueResponse

_T = TypeVar("_T", bound=pydantic.BaseModel)


class IssueTracker(ABC):
    provider: str

    def __init__(self, token: str | None, base_url: str, user_agent: str | None = None) -> None:
        if not token:
            raise ConfigurationError(f"{self.provider} token is not configured.", provider=self.provider)
        headers = {
            "Accept": "application/json",
            "Authorization": f"Bearer {token}",
            "User-Agent": user_agent or settings.user_agent,
        }
        self._http = httpx.AsyncClient(base_url=base_url.rstrip("/"), headers=headers)

    async def __aenter__(self) -> "IssueTracker":
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    async def close(self) -> None:
        if not self._http.is_closed:
            await self._http.aclose()

    @abstractmethod
    async def create_issue(self, repository: str, request: IssueRequest) -> IssueResponse: ...

    @abstractmethod
    async def update_issue(self, repository: str, issue_number: int, request: IssueRequest) -> IssueResponse: ...

    @abstractmethod
    async def close_issue(self, repository: str, issue_number: int) -> bool: ...

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _request(
        self,
        method: str,
        path: str,
        *,
        operation: str,
        repository: str,
        issue_number: int | None = None,
        json_body: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """Send one request upstream; no retries.

        Raises:
            UpstreamTransportError: On a network failure, a URL httpx cannot build (e.g. a
                decoded repository containing control characters), or any non-2xx response.
        """
        context = {"operation": operation, "repository": repository, "issue_number": issue_number}
        try:
            resp = await self._http.request(method, path, json=json_body, params=params)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise UpstreamTransportError(
                f"{self.provider} request failed during {operation}: {exc}", provider=self.provider, **context
            ) from exc
        if not resp.is_success:
            raise UpstreamTransportError(
                f"{self.provider} API error {resp.status_code} during {operation}: {resp.text}",
                provider=self.provider,
                status_code=resp.status_code,
                **context,
            )
        return resp

    def _parse(
        self,
        resp: httpx.Response,
        model: type[_T],
        *,
        operation: str,
        repository: str,
        issue_number: int | None = None,
    ) -> _T:
        """Validate a JSON object body against a provider payload model.

        Raises MalformedResponseError for non-JSON bodies and for missing or
        mistyped fields, so callers never see json or pydantic errors directly.
        """
        context = {"operation": operation, "repository": repository, "issue_number": issue_number}
        data = self._json(resp, **context)
        try:
            return model.model_validate(data)
        except pydantic.ValidationError as exc:
            raise MalformedResponseError(
                f"{self.provider} response schema mismatch during {operation}: {exc}",
                provider=self.provider,
                status_code=resp.status_code,
                **context,
            ) from exc

    def _parse_list(self, resp: httpx.Response, model: type[_T], *, operation: str, repository: str) -> list[_T]:
        """Validate a JSON array body element by element, preserving order."""
        context = {"operation": operation, "repository": repository}
        items = self._json(resp, **context)
        if not isinstance(items, list):
            raise MalformedResponseError(
                f"{self.provider} returned unexpected shape during {operation}: expected array, got {type(items).__name__}",
                provider=self.provider,
                status_code=resp.status_code,
                **context,
            )
        try:
            return [model.model_validate(item) for item in items]
        except pydantic.ValidationError as exc:
            raise MalformedResponseError(
                f"{self.provider} response schema mismatch during {operation}: {exc}",
                provider=self.provider,
                status_code=resp.status_code,
                **context,
            ) from exc

    def _json(self, resp: httpx.Response, **context: Any) -> Any:
        try:
            return resp.json()
        except ValueError as exc:
            # JSONDecodeError and UnicodeDecodeError (non-UTF-8 body) are both ValueErrors.
            raise MalformedResponseError(
                f"{self.provider} returned non-JSON body (status {resp.status_code}): {exc}",
                provider=self.provider,
                status_code=resp.status_code,
                **context,
            ) from exc
