"""GitHub version controller.

API Documentation: https://docs.github.com/en/rest

Authentication: Bearer token in the Authorization header, from --token or
GITHUB_TOKEN. Set --base-url for GitHub Enterprise (https://host/api/v3/).
"""

from __future__ import annotations

from typing import Any

from repofleet.models.listing import PlatformOptions, Repository, RepositoryListing
from repofleet.models.platform import (
    MergeType,
    PlatformCapabilities,
    PlatformConfig,
    PlatformName,
)
from repofleet.platforms.base import VersionController


GITHUB_CONFIG = PlatformConfig(
    id=PlatformName.GITHUB,
    name="GitHub",
    default_base_url="https://api.github.com/",
    token_env="GITHUB_TOKEN",
    organization_label="organization",
    reference_label="repository",
    merge_types=(MergeType.MERGE, MergeType.SQUASH, MergeType.REBASE),
    capabilities=PlatformCapabilities(
        autocomplete_organizations=True,
        autocomplete_users=True,
        autocomplete_repositories=True,
    ),
)


class GitHubController(VersionController):
    """GitHub implementation.

    In fork mode changes are pushed to a fork owned by the token's user
    instead of to the target repository.
    """

    config = GITHUB_CONFIG

    def __init__(
        self,
        token: str,
        base_url: str | None,
        listing: RepositoryListing,
        merge_types: tuple[MergeType, ...] = (),
        fork: bool = False,
    ) -> None:
        super().__init__(token, base_url, listing, merge_types)
        self.fork = fork

    @classmethod
    def extension_options(cls, options: PlatformOptions) -> dict[str, Any]:
        return {"fork": options.fork}

    def get_auth_headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.token}",
            "Accept": "application/vnd.github+json",
        }

    def _parse_repository(self, data: dict[str, Any]) -> Repository:
        return Repository(
            owner=data["owner"]["login"],
            name=data["name"],
            clone_url=data["clone_url"],
            default_branch=data.get("default_branch") or "main",
            archived=data.get("archived", False),
        )

    async def get_repositories(self) -> list[Repository]:
        raw: list[dict[str, Any]] = []
        for org in self.listing.organizations:
            raw.extend(await self._get_paginated(f"/orgs/{org}/repos"))
        for user in self.listing.users:
            raw.extend(await self._get_paginated(f"/users/{user}/repos"))
        for ref in self.listing.repositories:
            raw.append(await self._get_json(f"/repos/{ref.owner}/{ref.name}"))

        repos = [self._parse_repository(r) for r in raw]
        return self._dedupe([r for r in repos if not r.archived])

    async def get_autocomplete_organizations(self, partial: str) -> list[str]:
        orgs = await self._get_json("/user/orgs", {"per_page": 100})
        return [o["login"] for o in orgs if o["login"].lower().startswith(partial.lower())]

    async def get_autocomplete_users(self, partial: str) -> list[str]:
        if not partial:
            return []
        data = await self._get_json("/search/users", {"q": partial, "per_page": 20})
        return [u["login"] for u in data.get("items", [])]

    async def get_autocomplete_repositories(self, partial: str) -> list[str]:
        if not partial:
            return []
        query = partial
        if "/" in partial:
            owner, name = partial.split("/", 1)
            query = f"{name} user:{owner}" if name else f"user:{owner}"
        data = await self._get_json("/search/repositories", {"q": query, "per_page": 20})
        return [r["full_name"] for r in data.get("items", [])]
