"""Source-control platforms for repofleet.

A platform is selected by name, validated against its PlatformConfig and
turned into a VersionController by the registry.
"""

from repofleet.platforms.base import VersionController, resolve_token
from repofleet.platforms.completion import complete, try_autocomplete
from repofleet.platforms.gitea import GITEA_CONFIG, GiteaController
from repofleet.platforms.github import GITHUB_CONFIG, GitHubController
from repofleet.platforms.gitlab import GITLAB_CONFIG, GitLabConfig, GitLabController
from repofleet.platforms.registry import (
    PLATFORM_CLASSES,
    build_controller,
    get_platform_class,
    list_configs,
    list_platforms,
    resolve_version_controller,
)

__all__ = [
    # Base classes
    "VersionController",
    "resolve_token",
    # Platforms
    "GITHUB_CONFIG",
    "GitHubController",
    "GITLAB_CONFIG",
    "GitLabConfig",
    "GitLabController",
    "GITEA_CONFIG",
    "GiteaController",
    # Registry
    "PLATFORM_CLASSES",
    "build_controller",
    "get_platform_class",
    "list_configs",
    "list_platforms",
    "resolve_version_controller",
    # Completion
    "complete",
    "try_autocomplete",
]
