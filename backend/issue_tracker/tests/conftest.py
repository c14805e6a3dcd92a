import pytest
from httpx import ASGITransport, AsyncClient

from issue_tracker.adapters.github_client import GitHubClient
from issue_tracker.adapters.gitlab_client import GitLabClient
from issue_tracker.main import app
from issue_tracker.schemas.issue import IssueRequest

GITHUB_API = "https://api.github.com"
GITLAB_API = "https://gitlab.com/api/v4"


@pytest.fixture
def issue_request() -> IssueRequest:
    return IssueRequest(title="Test Issue", description="Test Desc")


@pytest.fixture
async def api_client():
    """Test client with both adapters configured on app.state."""
    github_client = GitHubClient(token="test-token", base_url=GITHUB_API)
    gitlab_client = GitLabClient(token="test-token", base_url=GITLAB_API)
    app.state.github_client = github_client
    app.state.gitlab_client = gitlab_client
    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            yield ac
    finally:
        app.state.github_client = None
        app.state.gitlab_client = None
        await github_client.close()
        await gitlab_client.close()


@pytest.fixture
async def api_client_unconfigured():
    """Test client without any adapter (no tokens configured)."""
    app.state.github_client = None
    app.state.gitlab_client = None
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
