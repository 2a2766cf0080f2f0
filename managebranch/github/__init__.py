"""GitHub API access for reference management."""

from managebranch.github.base import GitHubAPI, RateLimitInfo, RepositoryAPI
from managebranch.github.client import GitHubClient, GitHubRepository

__all__ = [
    "GitHubAPI",
    "RepositoryAPI",
    "RateLimitInfo",
    "GitHubClient",
    "GitHubRepository",
]
