from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from issue_tracker.adapters.base import IssueTracker
from issue_tracker.adapters.errors import ConfigurationError
from issue_tracker.adapters.github_client import GitHubClient
from issue_tracker.adapters.gitlab_client import GitLabClient
from issue_tracker.config.config import settings
from issue_tracker.routers import health, issues

structlog.configure(
    processors=[
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.add_log_level,
        structlog.processors.JSONRenderer(),
    ]
)

logger = structlog.get_logger(__name__)


def _build_adapter(factory: type[GitHubClient] | type[GitLabClient], token: str | None) -> IssueTracker | None:
    """Construct one adapter; a missing token disables only that provider."""
    try:
        return factory(token=token)
    except ConfigurationError as exc:
        logger.warning("provider_unavailable", provider=exc.provider, reason=str(exc))
        return None


@asynccontextmanager
async def lifespan(app: FastAPI):
    github_client = _build_adapter(GitHubClient, settings.github_token)
    gitlab_client = _build_adapter(GitLabClient, settings.gitlab_token)
    app.state.github_client = github_client
    app.state.gitlab_client = gitlab_client
    logger.info("startup", github=github_client is not None, gitlab=gitlab_client is not None)

    yield

    for client in (github_client, gitlab_client):
        if client is not None:
            await client.close()
    logger.info("shutdown")


app = FastAPI(
    title="GitIssueTracker",
    description="Unified issue API over GitHub and GitLab",
    version=settings.app_version,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(issues.router)
