"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import logging
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from repofleet.models.listing import PlatformOptions, Repository, RepositoryListing
from repofleet.models.platform import (
    PlatformCapabilities,
    PlatformConfig,
    PlatformName,
)
from repofleet.platforms.base import VersionController

TOKEN_ENV_VARS = ("GITHUB_TOKEN", "GITLAB_TOKEN", "GITEA_TOKEN")


@pytest.fixture(autouse=True)
def clean_token_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Tests must not pick up tokens from the developer's environment."""
    for name in TOKEN_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo configure_logging() calls made by CLI invocations."""
    yield
    logger = logging.getLogger("repofleet")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


FAKE_CONFIG = PlatformConfig(
    id=PlatformName.GITHUB,
    name="Fake",
    default_base_url="https://fake.invalid/",
    token_env="FAKE_TOKEN",
)

FAKE_COMPLETING_CONFIG = PlatformConfig(
    id=PlatformName.GITHUB,
    name="FakeCompleting",
    default_base_url="https://fake.invalid/",
    token_env="FAKE_TOKEN",
    capabilities=PlatformCapabilities(autocomplete_organizations=True, autocomplete_users=True),
)


class FakeController(VersionController):
    """Controller without any completion capability."""

    config = FAKE_CONFIG

    def __init__(self, repositories: list[Repository] | None = None) -> None:
        super().__init__("fake-token", None, RepositoryListing())
        self.repositories = repositories or []
        self.closed = False

    async def get_repositories(self) -> list[Repository]:
        return self.repositories

    async def close(self) -> None:
        self.closed = True


class FakeCompletingController(FakeController):
    """Controller that completes organizations from a fixed list and fails on users."""

    config = FAKE_COMPLETING_CONFIG

    ORGS = ["acme", "acme-labs", "globex"]

    async def get_autocomplete_organizations(self, partial: str) -> list[str]:
        return [o for o in self.ORGS if o.startswith(partial)]

    async def get_autocomplete_users(self, partial: str) -> list[str]:
        raise RuntimeError("user search failed")


@pytest.fixture
def fake_controller() -> FakeController:
    return FakeController(
        repositories=[
            Repository(owner="acme", name="api", clone_url="https://git.invalid/acme/api.git"),
            Repository(owner="acme", name="web", clone_url="https://git.invalid/acme/web.git", default_branch="master"),
        ]
    )


@pytest.fixture
def completing_controller() -> FakeCompletingController:
    return FakeCompletingController()


@pytest.fixture
def github_options() -> PlatformOptions:
    return PlatformOptions(platform="github", token="gh-token", orgs=["acme"])


def _github_repo(owner: str, name: str, archived: bool = False) -> dict[str, Any]:
    return {
        "name": name,
        "owner": {"login": owner},
        "clone_url": f"https://github.com/{owner}/{name}.git",
        "default_branch": "main",
        "archived": archived,
    }


@pytest.fixture
def mock_github_responses() -> dict[str, Any]:
    """Sample GitHub API responses keyed by path."""
    return {
        "/orgs/acme/repos": [
            _github_repo("acme", "api"),
            _github_repo("acme", "web"),
            _github_repo("acme", "legacy", archived=True),
        ],
        "/users/octocat/repos": [_github_repo("octocat", "hello-world")],
        "/repos/acme/api": _github_repo("acme", "api"),
        "/user/orgs": [{"login": "acme"}, {"login": "Acme-Labs"}, {"login": "globex"}],
        "/search/users": {"items": [{"login": "octocat"}, {"login": "octo-org"}]},
        "/search/repositories": {"items": [{"full_name": "octocat/hello-world"}]},
    }


@pytest.fixture
def mock_gitlab_responses() -> dict[str, Any]:
    """Sample GitLab API responses keyed by path."""

    def project(namespace: str, path: str, archived: bool = False) -> dict[str, Any]:
        return {
            "path": path,
            "namespace": {"full_path": namespace},
            "http_url_to_repo": f"https://gitlab.com/{namespace}/{path}.git",
            "default_branch": "main",
            "archived": archived,
        }

    return {
        "/groups/acme/projects": [project("acme", "api"), project("acme/tools", "cli")],
        "/users/jdoe/projects": [project("jdoe", "dotfiles", archived=True)],
        "/projects/acme%2Ftools%2Fcli": project("acme/tools", "cli"),
    }


@pytest.fixture
def mock_gitea_responses() -> dict[str, Any]:
    """Sample Gitea API responses keyed by path."""
    return {
        "/orgs/acme/repos": [_github_repo("acme", "api")],
        "/repos/jdoe/notes": _github_repo("jdoe", "notes"),
    }


def make_mock_client(responses: dict[str, Any]) -> AsyncMock:
    """Create a mock httpx client answering GET requests from a path mapping.

    Every call is recorded in client.calls as (path, params).
    """
    mock_client = AsyncMock()
    mock_client.calls = []

    async def mock_get(path, params=None, **kwargs):
        mock_client.calls.append((path, params))
        mock_response = MagicMock()
        mock_response.status_code = 200
        mock_response.raise_for_status = MagicMock()
        mock_response.json = MagicMock(return_value=responses[path])
        return mock_response

    mock_client.get = mock_get
    return mock_client


@pytest.fixture
def mock_client_factory():
    return make_mock_client


@pytest.fixture
def github_controller(mock_github_responses):
    """GitHub controller for org acme, user octocat and repo acme/api, with mocked HTTP client."""
    from repofleet.models.reference import RepositoryReference
    from repofleet.platforms.github import GitHubController

    listing = RepositoryListing(
        organizations=["acme"],
        users=["octocat"],
        repositories=[RepositoryReference(owner="acme", name="api")],
    )
    controller = GitHubController("gh-token", None, listing)
    controller._client = make_mock_client(mock_github_responses)
    return controller


# Markers for test categories
def pytest_configure(config):
    config.addinivalue_line("markers", "mock: tests using mocked API responses")
    config.addinivalue_line("markers", "integration: tests requiring real API tokens")
    config.addinivalue_line("markers", "slow: tests that take a long time")
