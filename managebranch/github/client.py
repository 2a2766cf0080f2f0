"""GitHub REST API client.

API Documentation: https://docs.github.com/en/rest/git/refs

Authentication: token in the Authorization header (Bearer)
Rate Limits: reported through X-RateLimit-* headers, tracked but not enforced
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from managebranch.errors import (
    AuthenticationError,
    ConfigurationError,
    ManageBranchError,
    MutationError,
    TransportError,
)
from managebranch.github.base import GitHubAPI, RateLimitInfo, RepositoryAPI
from managebranch.models.config import GitHubApiConfig
from managebranch.models.ref import Reference

logger = logging.getLogger(__name__)


def _error_message(response: httpx.Response) -> str:
    """Extract the API error message from a failed response."""
    try:
        data = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    return response.reason_phrase


class GitHubClient(GitHubAPI):
    """GitHub REST API implementation backed by httpx."""

    def __init__(self, config: GitHubApiConfig) -> None:
        self.config = config
        self._client: httpx.AsyncClient | None = None
        self._rate_limit: RateLimitInfo | None = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.config.base_url,
                headers=self.config.headers,
                timeout=self.config.timeout,
                follow_redirects=True,
            )
        return self._client

    @property
    def rate_limit(self) -> RateLimitInfo | None:
        """Rate limit status from the most recent response."""
        return self._rate_limit

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    def update_rate_limit(self, headers: httpx.Headers) -> None:
        info = RateLimitInfo.from_headers(headers)
        if info is None:
            return
        self._rate_limit = info
        if info.is_low:
            logger.warning(
                f"GitHub API rate limit low: {info.remaining}/{info.limit} "
                f"{info.resource} requests left, reset in {info.seconds_until_reset():.0f}s"
            )

    async def request(
        self,
        method: str,
        url: str,
        *,
        error_cls: type[ManageBranchError] = TransportError,
        auth_errors: bool = False,
        allow_status: tuple[int, ...] = (),
        **kwargs: Any,
    ) -> httpx.Response:
        """Send a request and translate failures into the action's error types.

        Args:
            method: HTTP method
            url: Path relative to the API endpoint, or an absolute URL
            error_cls: Error raised for network failures and error responses
            auth_errors: Raise AuthenticationError on 401/403 instead of error_cls
            allow_status: Error statuses returned to the caller instead of raised
        """
        logger.debug(f"{method} {url}")
        try:
            response = await self.client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            raise error_cls(f"{method} {url} failed: {e}") from e

        self.update_rate_limit(response.headers)

        if response.is_error and response.status_code not in allow_status:
            message = f"{method} {url} failed with {response.status_code}: {_error_message(response)}"
            if auth_errors and response.status_code in (401, 403):
                raise AuthenticationError(message)
            if issubclass(error_cls, MutationError):
                raise error_cls(message, status_code=response.status_code)
            raise error_cls(message)
        return response

    async def validate_endpoint(self) -> None:
        """Check that the endpoint is a GitHub API root and accepts the token."""
        response = await self.request("GET", "/", auth_errors=True)

        try:
            data = response.json()
        except ValueError as e:
            raise TransportError(f"{self.config.base_url} did not return JSON") from e
        if not isinstance(data, dict) or "current_user_url" not in data:
            raise TransportError(f"{self.config.base_url} is not a valid GitHub API endpoint")

    async def get_repository(self, full_name: str) -> "GitHubRepository":
        """Resolve an ``owner/repo`` identifier."""
        owner, sep, name = full_name.partition("/")
        if not sep or not owner or not name or "/" in name:
            raise ConfigurationError(f"Invalid repository identifier: {full_name!r}")

        response = await self.request("GET", f"/repos/{owner}/{name}", auth_errors=True)
        data = response.json()
        return GitHubRepository(self, full_name=data.get("full_name", full_name))


class GitHubRepository(RepositoryAPI):
    """Git references of one repository, through the REST API."""

    def __init__(self, api: GitHubClient, full_name: str) -> None:
        self.api = api
        self.full_name = full_name

    def _refs_url(self, path: str = "") -> str:
        base = f"/repos/{self.full_name}/git/refs"
        if path:
            return f"{base}/{quote(path, safe='/')}"
        return base

    async def list_refs(self, namespace: str | None = None) -> list[Reference]:
        """List references, following pagination.

        A repository without any commit answers 409; that is an empty listing.
        """
        if namespace:
            url: str | None = f"/repos/{self.full_name}/git/matching-refs/{quote(namespace, safe='/')}/"
        else:
            url = self._refs_url()
        params: dict[str, Any] | None = {"per_page": self.api.config.per_page}

        refs: list[Reference] = []
        while url:
            response = await self.api.request("GET", url, params=params, allow_status=(409,))
            if response.status_code == 409:
                logger.debug(f"Repository {self.full_name} is empty")
                return []

            data = response.json()
            if isinstance(data, dict):
                data = [data]
            refs.extend(Reference.from_api(item) for item in data)

            url = response.links.get("next", {}).get("url")
            # The next link already carries the query string
            params = None
        return refs

    async def create_ref(self, ref: str, sha: str) -> Reference:
        response = await self.api.request(
            "POST",
            self._refs_url(),
            json={"ref": ref, "sha": sha},
            error_cls=MutationError,
        )
        return Reference.from_api(response.json())

    async def update_ref(self, existing: Reference, sha: str, force: bool = True) -> Reference:
        response = await self.api.request(
            "PATCH",
            self._refs_url(existing.api_path),
            json={"sha": sha, "force": force},
            error_cls=MutationError,
        )
        return Reference.from_api(response.json())

    async def delete_ref(self, existing: Reference) -> None:
        await self.api.request("DELETE", self._refs_url(existing.api_path), error_cls=MutationError)
