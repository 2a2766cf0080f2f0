"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path
from typing import Callable, Generator

import httpx
import pytest

from managebranch.errors import MutationError, TransportError
from managebranch.github.base import GitHubAPI, RepositoryAPI
from managebranch.github.client import GitHubClient
from managebranch.models.config import GitHubApiConfig
from managebranch.models.ref import Reference
from managebranch.runtime.kit import ActionsKit


class FakeRepository(RepositoryAPI):
    """In-memory repository recording every call."""

    def __init__(self, refs: list[Reference] | None = None, full_name: str = "octocat/Hello-World") -> None:
        self.full_name = full_name
        self.refs: list[Reference] = list(refs or [])
        self.calls: list[tuple] = []
        self.listing_error: TransportError | None = None
        self.mutation_error: MutationError | None = None

    async def list_refs(self, namespace: str | None = None) -> list[Reference]:
        self.calls.append(("list_refs", namespace))
        if self.listing_error:
            raise self.listing_error
        if namespace is None:
            return list(self.refs)
        return [r for r in self.refs if r.ref.startswith(f"refs/{namespace}/")]

    async def create_ref(self, ref: str, sha: str) -> Reference:
        self.calls.append(("create_ref", ref, sha))
        if self.mutation_error:
            raise self.mutation_error
        created = Reference(ref=ref, sha=sha)
        self.refs.append(created)
        return created

    async def update_ref(self, existing: Reference, sha: str, force: bool = True) -> Reference:
        self.calls.append(("update_ref", existing.ref, sha, force))
        if self.mutation_error:
            raise self.mutation_error
        updated = Reference(ref=existing.ref, sha=sha)
        self.refs = [updated if r.ref == existing.ref else r for r in self.refs]
        return updated

    async def delete_ref(self, existing: Reference) -> None:
        self.calls.append(("delete_ref", existing.ref))
        if self.mutation_error:
            raise self.mutation_error
        self.refs = [r for r in self.refs if r.ref != existing.ref]

    def mutations(self) -> list[tuple]:
        return [c for c in self.calls if c[0] != "list_refs"]


class FakeGitHub(GitHubAPI):
    """In-memory API handle serving a single FakeRepository."""

    def __init__(self, repository: FakeRepository) -> None:
        self.repository = repository
        self.validations = 0
        self.requested: list[str] = []
        self.closed = False
        self.validation_error: Exception | None = None

    async def validate_endpoint(self) -> None:
        self.validations += 1
        if self.validation_error:
            raise self.validation_error

    async def get_repository(self, full_name: str) -> FakeRepository:
        self.requested.append(full_name)
        return self.repository

    async def close(self) -> None:
        self.closed = True


@pytest.fixture(autouse=True)
def reset_package_logger() -> Generator[None, None, None]:
    """Undo logging setup done by CLI tests so caplog keeps working."""
    yield
    logger = logging.getLogger("managebranch")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def output_file(temp_dir: Path) -> Path:
    path = temp_dir / "github_output"
    path.touch()
    return path


@pytest.fixture
def runner_env(output_file: Path) -> dict[str, str]:
    """Environment of a workflow run."""
    return {
        "GITHUB_TOKEN": "test_token",
        "GITHUB_REPOSITORY": "octocat/Hello-World",
        "GITHUB_SHA": "abcdef0123456789",
        "GITHUB_OUTPUT": str(output_file),
    }


@pytest.fixture
def make_kit(runner_env: dict[str, str]) -> Callable[..., ActionsKit]:
    """Build an ActionsKit with the given action inputs."""

    def factory(**inputs: str) -> ActionsKit:
        environ = dict(runner_env)
        for name, value in inputs.items():
            environ[ActionsKit.input_env_name(name.rstrip("_"))] = value
        return ActionsKit(environ=environ)

    return factory


@pytest.fixture
def read_outputs(output_file: Path) -> Callable[[], dict[str, str]]:
    """Parse the GITHUB_OUTPUT file written by the kit."""

    def reader() -> dict[str, str]:
        outputs: dict[str, str] = {}
        lines = output_file.read_text(encoding="utf-8").splitlines()
        i = 0
        while i < len(lines):
            key, delimiter = lines[i].split("<<", 1)
            i += 1
            value_lines = []
            while lines[i] != delimiter:
                value_lines.append(lines[i])
                i += 1
            outputs[key] = "\n".join(value_lines)
            i += 1
        return outputs

    return reader


@pytest.fixture
def sample_refs() -> list[Reference]:
    """References of a small repository, deliberately unsorted."""
    return [
        Reference(ref="refs/heads/main", sha="aaa111"),
        Reference(ref="refs/tags/v1.0.0", sha="ccc333", object_type="tag"),
        Reference(ref="refs/heads/BRANCH-name", sha="bbb222"),
        Reference(ref="refs/pull/1/head", sha="ddd444"),
    ]


@pytest.fixture
def fake_repository_cls() -> type[FakeRepository]:
    return FakeRepository


@pytest.fixture
def fake_repository(sample_refs: list[Reference]) -> FakeRepository:
    return FakeRepository(sample_refs)


@pytest.fixture
def fake_github(fake_repository: FakeRepository) -> FakeGitHub:
    return FakeGitHub(fake_repository)


@pytest.fixture
def api_config() -> GitHubApiConfig:
    return GitHubApiConfig(token="test_token")


@pytest.fixture
def make_client(api_config: GitHubApiConfig) -> Callable[..., GitHubClient]:
    """Create a GitHubClient whose HTTP client is served by a handler function."""

    def factory(handler: Callable[[httpx.Request], httpx.Response]) -> GitHubClient:
        client = GitHubClient(api_config)
        client._client = httpx.AsyncClient(
            base_url=api_config.base_url,
            headers=api_config.headers,
            transport=httpx.MockTransport(handler),
            follow_redirects=True,
        )
        return client

    return factory


# Markers for test categories
def pytest_configure(config):
    config.addinivalue_line("markers", "mock: tests using mocked API responses")
