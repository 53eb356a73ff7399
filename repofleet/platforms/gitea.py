"""Gitea version controller.

API Documentation: https://docs.gitea.com/api/

Gitea has no public instance, so --base-url (the instance URL, e.g.
https://gitea.example.com) is always required. Authentication uses the
"token" Authorization scheme, from --token or GITEA_TOKEN.
"""

from __future__ import annotations

from typing import Any

from repofleet.models.listing import Repository, RepositoryListing
from repofleet.models.platform import MergeType, PlatformConfig, PlatformName
from repofleet.platforms.base import VersionController


GITEA_CONFIG = PlatformConfig(
    id=PlatformName.GITEA,
    name="Gitea",
    default_base_url=None,
    token_env="GITEA_TOKEN",
    organization_label="organization",
    reference_label="repository",
    merge_types=(MergeType.MERGE, MergeType.SQUASH, MergeType.REBASE),
)

API_PATH = "/api/v1"


class GiteaController(VersionController):
    """Gitea implementation."""

    config = GITEA_CONFIG

    def __init__(
        self,
        token: str,
        base_url: str | None,
        listing: RepositoryListing,
        merge_types: tuple[MergeType, ...] = (),
    ) -> None:
        super().__init__(token, base_url, listing, merge_types)
        if not self.base_url.endswith(API_PATH):
            self.base_url = f"{self.base_url}{API_PATH}"

    def get_auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"token {self.token}"}

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
            raw.extend(await self._get_paginated(f"/orgs/{org}/repos", page_param="limit", per_page=50))
        for user in self.listing.users:
            raw.extend(await self._get_paginated(f"/users/{user}/repos", page_param="limit", per_page=50))
        for ref in self.listing.repositories:
            raw.append(await self._get_json(f"/repos/{ref.owner}/{ref.name}"))

        repos = [self._parse_repository(r) for r in raw]
        return self._dedupe([r for r in repos if not r.archived])
