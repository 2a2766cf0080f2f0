"""Configuration of the GitHub API session."""

from __future__ import annotations

from pydantic import BaseModel, Field

DEFAULT_API_URL = "https://api.github.com"


class GitHubApiConfig(BaseModel):
    """Settings for the authenticated REST client."""

    base_url: str = Field(default=DEFAULT_API_URL, description="REST API endpoint")
    token: str = Field(..., min_length=1, description="Access token (never logged)", repr=False)
    api_version: str = Field(default="2022-11-28", description="X-GitHub-Api-Version header")
    user_agent: str = Field(default="manage-branch")
    timeout: float = Field(default=30.0, description="Transport timeout in seconds")
    per_page: int = Field(default=100, ge=1, le=100, description="Page size for reference listings")

    @property
    def headers(self) -> dict[str, str]:
        """Default headers sent with every request."""
        return {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {self.token}",
            "User-Agent": self.user_agent,
            "X-GitHub-Api-Version": self.api_version,
        }
