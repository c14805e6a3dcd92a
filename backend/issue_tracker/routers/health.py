from fastapi import APIRouter, Request
from pydantic import BaseModel

from issue_tracker.config.config import settings

router = APIRouter()


class ProvidersStatus(BaseModel):
    github: bool
    gitlab: bool


class HealthResponse(BaseModel):
    """``degraded`` when at least one provider has no token configured."""

    status: str
    version: str
    providers: ProvidersStatus


@router.get("/health", response_model=HealthResponse)
async def health(request: Request) -> HealthResponse:
    providers = ProvidersStatus(
        github=getattr(request.app.state, "github_client", None) is not None,
        gitlab=getattr(request.app.state, "gitlab_client", None) is not None,
    )
    return HealthResponse(
        status="ok" if providers.github and providers.gitlab else "degraded",
        version=settings.app_version,
        providers=providers,
    )
