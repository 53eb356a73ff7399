"""Platform descriptor models."""

from __future__ import annotations

from enum import Enum
from typing import Iterable

from pydantic import BaseModel, Field

from repofleet.exceptions import UnsupportedMergeTypeError


class PlatformName(str, Enum):
    """Source-control platforms a version controller can be built for."""
    GITHUB = "github"
    GITLAB = "gitlab"
    GITEA = "gitea"


class MergeType(str, Enum):
    """How a pull request is merged."""
    MERGE = "merge"
    SQUASH = "squash"
    REBASE = "rebase"


class AutocompleteKind(str, Enum):
    """Kinds of shell-completion queries a platform may answer."""
    ORGANIZATIONS = "organizations"
    USERS = "users"
    REPOSITORIES = "repositories"


class PlatformCapabilities(BaseModel):
    """Optional queries supported by a platform's controller."""

    autocomplete_organizations: bool = Field(default=False, description="Completes --org values")
    autocomplete_users: bool = Field(default=False, description="Completes --user values")
    autocomplete_repositories: bool = Field(default=False, description="Completes --repo values")

    def supports(self, kind: AutocompleteKind) -> bool:
        return getattr(self, f"autocomplete_{kind.value}")

    @property
    def autocomplete_kinds(self) -> list[AutocompleteKind]:
        return [kind for kind in AutocompleteKind if self.supports(kind)]


class PlatformConfig(BaseModel):
    """Everything that differs between platforms when building a controller."""

    id: PlatformName
    name: str
    default_base_url: str | None = Field(default=None, description="Public instance API URL")
    token_env: str = Field(..., description="Environment variable holding the access token")
    organization_label: str = Field(default="organization", description="What the platform calls an organization")
    reference_label: str = Field(default="repository", description="What the platform calls a repository")
    organization_option: str = Field(default="orgs", description="PlatformOptions field listing organizations")
    reference_option: str = Field(default="repos", description="PlatformOptions field listing references")
    nested_owner: bool = Field(default=False, description="References may name nested groups as owner")
    merge_types: tuple[MergeType, ...] = Field(
        default=(), description="Merge types that can be requested, empty if not configurable"
    )
    capabilities: PlatformCapabilities = Field(default_factory=PlatformCapabilities)

    @property
    def requires_base_url(self) -> bool:
        """Platforms without a public instance must be given a base URL."""
        return self.default_base_url is None

    @property
    def scope_labels(self) -> list[str]:
        return [self.organization_label, "user", self.reference_label]


def parse_merge_types(
    raw: Iterable[str],
    supported: Iterable[MergeType] = tuple(MergeType),
) -> tuple[MergeType, ...]:
    """Validate merge type names against the supported set.

    Matching is case-insensitive and duplicates are dropped. The first
    occurrence of each type keeps its position, so callers that care can use
    the result as a preference order.
    """
    allowed = set(supported)
    result: list[MergeType] = []
    for entry in raw:
        name = entry.strip().lower()
        try:
            merge_type = MergeType(name)
        except ValueError:
            raise UnsupportedMergeTypeError(entry, [mt.value for mt in MergeType if mt in allowed]) from None
        if merge_type not in allowed:
            raise UnsupportedMergeTypeError(entry, [mt.value for mt in MergeType if mt in allowed])
        if merge_type not in result:
            result.append(merge_type)
    return tuple(result)
