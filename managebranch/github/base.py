"""Abstract GitHub API surface used by the reconciliation logic.

The action only talks to GitHub through these two interfaces, so a test
double (or another host) can be substituted for the REST client.
"""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field

from managebranch.models.ref import Reference


@dataclass
class RateLimitInfo:
    """Rate limit status reported by the API.

    Only tracked for diagnostics: requests are never delayed or retried.
    """
    limit: int = 5000
    remaining: int = 5000
    reset_at: int = 0  # Epoch seconds when the window resets
    resource: str = "core"
    timestamp: float = field(default_factory=time.time)

    @property
    def is_low(self) -> bool:
        """Check if rate limit is getting low (< 10% remaining)."""
        return self.remaining < (self.limit * 0.1)

    def seconds_until_reset(self) -> float:
        return max(0.0, self.reset_at - time.time())

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> "RateLimitInfo | None":
        """Parse rate limit info from response headers, if present."""
        if "x-ratelimit-limit" not in {k.lower() for k in headers}:
            return None
        lowered = {k.lower(): v for k, v in headers.items()}
        return cls(
            limit=int(lowered.get("x-ratelimit-limit", 5000)),
            remaining=int(lowered.get("x-ratelimit-remaining", 5000)),
            reset_at=int(lowered.get("x-ratelimit-reset", 0)),
            resource=lowered.get("x-ratelimit-resource", "core"),
        )


class RepositoryAPI(ABC):
    """Reference operations on a single repository."""

    full_name: str

    @abstractmethod
    async def list_refs(self, namespace: str | None = None) -> list[Reference]:
        """List references, optionally restricted to a namespace ("heads", "tags")."""
        ...

    @abstractmethod
    async def create_ref(self, ref: str, sha: str) -> Reference:
        """Create a reference and return it as stored by the server."""
        ...

    @abstractmethod
    async def update_ref(self, existing: Reference, sha: str, force: bool = True) -> Reference:
        """Move an existing reference and return its new state."""
        ...

    @abstractmethod
    async def delete_ref(self, existing: Reference) -> None:
        """Delete an existing reference."""
        ...


class GitHubAPI(ABC):
    """An authenticated handle to a GitHub API endpoint."""

    @abstractmethod
    async def validate_endpoint(self) -> None:
        """Fail if the endpoint is unreachable, invalid, or rejects the token."""
        ...

    @abstractmethod
    async def get_repository(self, full_name: str) -> RepositoryAPI:
        """Resolve an ``owner/repo`` identifier to a repository handle."""
        ...

    async def close(self) -> None:
        """Release any transport resources."""
