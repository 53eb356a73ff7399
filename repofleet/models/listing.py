"""Repository listing and selection models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from repofleet.models.reference import RepositoryReference


class RepositoryListing(BaseModel):
    """Which repositories a run targets.

    On GitLab, organizations are groups and repositories are projects.
    """

    organizations: list[str] = Field(default_factory=list)
    users: list[str] = Field(default_factory=list)
    repositories: list[RepositoryReference] = Field(default_factory=list)


class Repository(BaseModel):
    """A repository returned by a version controller."""

    owner: str
    name: str
    clone_url: str
    default_branch: str = "main"
    archived: bool = False

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


class PlatformOptions(BaseModel):
    """Platform selection as given on the command line or in a config file."""

    platform: str = Field(default="github", description="github, gitlab or gitea")
    base_url: str | None = Field(default=None, description="API URL of a self-hosted instance")
    token: str | None = Field(default=None, description="Personal access token")
    orgs: list[str] = Field(default_factory=list)
    groups: list[str] = Field(default_factory=list)
    users: list[str] = Field(default_factory=list)
    repos: list[str] = Field(default_factory=list)
    projects: list[str] = Field(default_factory=list)
    include_subgroups: bool = Field(default=False, description="GitLab only")
    fork: bool = Field(default=False, description="GitHub only")
    merge_types: list[str] = Field(default_factory=list, description="GitHub and Gitea only")
