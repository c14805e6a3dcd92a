from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_version: str = "0.1.0"
    cors_origins: list[str] = []
    user_agent: str = "GitIssueTracker/1.0"
    github_token: str | None = None
    github_base_url: str = "https://api.github.com"
    gitlab_token: str | None = None
    gitlab_base_url: str = "https://gitlab.com/api/v4"


settings = Settings()
