"""GitLab version controller.

API Documentation: https://docs.gitlab.com/ee/api/rest/

Authentication: PRIVATE-TOKEN header, from --token or GITLAB_TOKEN.
Projects are referenced by their full path, which may include subgroups
(group/subgroup/project).
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

from pydantic import BaseModel, Field

from repofleet.models.listing import PlatformOptions, Repository, RepositoryListing
from repofleet.models.platform import MergeType, PlatformConfig, PlatformName
from repofleet.platforms.base import VersionController


GITLAB_CONFIG = PlatformConfig(
    id=PlatformName.GITLAB,
    name="GitLab",
    default_base_url="https://gitlab.com/api/v4/",
    token_env="GITLAB_TOKEN",
    organization_label="group",
    reference_label="project",
    organization_option="groups",
    reference_option="projects",
    nested_owner=True,
    merge_types=(),  # merge method is a project setting on GitLab
)


class GitLabConfig(BaseModel):
    """GitLab-only settings."""

    include_subgroups: bool = Field(default=False, description="Also use projects in subgroups of --group")


class GitLabController(VersionController):
    """GitLab implementation. Organizations are groups, repositories are projects."""

    config = GITLAB_CONFIG

    def __init__(
        self,
        token: str,
        base_url: str | None,
        listing: RepositoryListing,
        merge_types: tuple[MergeType, ...] = (),
        gitlab_config: GitLabConfig | None = None,
    ) -> None:
        super().__init__(token, base_url, listing, merge_types)
        self.gitlab_config = gitlab_config or GitLabConfig()

    @classmethod
    def extension_options(cls, options: PlatformOptions) -> dict[str, Any]:
        return {"gitlab_config": GitLabConfig(include_subgroups=options.include_subgroups)}

    def get_auth_headers(self) -> dict[str, str]:
        return {"PRIVATE-TOKEN": self.token}

    def _parse_project(self, data: dict[str, Any]) -> Repository:
        return Repository(
            owner=data["namespace"]["full_path"],
            name=data["path"],
            clone_url=data["http_url_to_repo"],
            default_branch=data.get("default_branch") or "main",
            archived=data.get("archived", False),
        )

    async def get_repositories(self) -> list[Repository]:
        raw: list[dict[str, Any]] = []
        for group in self.listing.organizations:
            params = {"include_subgroups": str(self.gitlab_config.include_subgroups).lower()}
            raw.extend(await self._get_paginated(f"/groups/{quote(group, safe='')}/projects", params))
        for user in self.listing.users:
            raw.extend(await self._get_paginated(f"/users/{quote(user, safe='')}/projects"))
        for ref in self.listing.repositories:
            raw.append(await self._get_json(f"/projects/{quote(str(ref), safe='')}"))

        projects = [self._parse_project(p) for p in raw]
        return self._dedupe([p for p in projects if not p.archived])
