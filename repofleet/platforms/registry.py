"""Platform registry and version controller resolution.

Turns PlatformOptions into a ready-to-use VersionController. All three
platforms share one construction algorithm; what differs between them lives
in their PlatformConfig and their extension_options().
"""

from __future__ import annotations

import logging

from repofleet.exceptions import (
    MissingBaseURLError,
    NoScopeSpecifiedError,
    UnknownPlatformError,
)
from repofleet.logging import mask_token
from repofleet.models.listing import PlatformOptions, RepositoryListing
from repofleet.models.platform import PlatformConfig, PlatformName, parse_merge_types
from repofleet.models.reference import RepositoryReference
from repofleet.platforms.base import VersionController, resolve_token
from repofleet.platforms.gitea import GiteaController
from repofleet.platforms.github import GitHubController
from repofleet.platforms.gitlab import GitLabController

logger = logging.getLogger(__name__)

# Built-in platforms
PLATFORM_CLASSES: dict[PlatformName, type[VersionController]] = {
    PlatformName.GITHUB: GitHubController,
    PlatformName.GITLAB: GitLabController,
    PlatformName.GITEA: GiteaController,
}


def list_platforms() -> list[str]:
    """List all platform names, in the order they are offered on the CLI."""
    return [name.value for name in PLATFORM_CLASSES]


def list_configs() -> list[PlatformConfig]:
    """List the descriptors of all platforms."""
    return [cls.config for cls in PLATFORM_CLASSES.values()]


def get_platform_class(name: str) -> type[VersionController]:
    """Look up a controller class by platform name.

    Raises:
        UnknownPlatformError: If the name is not a supported platform
    """
    try:
        return PLATFORM_CLASSES[PlatformName(name)]
    except ValueError:
        raise UnknownPlatformError(name) from None


def _scope_values(config: PlatformConfig, options: PlatformOptions) -> tuple[list[str], list[str], list[str]]:
    """Pick the scope options this platform reads (orgs/repos or groups/projects)."""
    return (
        getattr(options, config.organization_option),
        options.users,
        getattr(options, config.reference_option),
    )


def build_controller(
    controller_class: type[VersionController],
    options: PlatformOptions,
    verify: bool = True,
) -> VersionController:
    """Validate the options for one platform and construct its controller.

    Args:
        controller_class: Controller to build, its config drives validation
        options: Platform selection
        verify: Require at least one organization, user or repository.
            Shell completion passes False since the scope is still being typed.

    Raises:
        NoScopeSpecifiedError, MissingBaseURLError, MissingCredentialError,
        InvalidReferenceFormatError, UnsupportedMergeTypeError
    """
    config = controller_class.config
    orgs, users, refs = _scope_values(config, options)

    if verify and not (orgs or users or refs):
        raise NoScopeSpecifiedError(config.scope_labels)

    if config.requires_base_url and not options.base_url:
        raise MissingBaseURLError(config.name)

    token = resolve_token(options.token, config.token_env)

    references = [RepositoryReference.parse(raw, nested_owner=config.nested_owner) for raw in refs]

    merge_types = parse_merge_types(options.merge_types, config.merge_types) if config.merge_types else ()

    listing = RepositoryListing(organizations=list(orgs), users=list(users), repositories=references)
    logger.debug(
        f"Building {config.name} controller: {len(orgs)} {config.organization_label}(s), "
        f"{len(users)} user(s), {len(references)} {config.reference_label}(s), token {mask_token(token)}"
    )

    return controller_class(
        token,
        options.base_url,
        listing,
        merge_types,
        **controller_class.extension_options(options),
    )


def resolve_version_controller(
    options: PlatformOptions,
    verify: bool = True,
    override: VersionController | None = None,
) -> VersionController:
    """Get the version controller selected by the options.

    Args:
        options: Platform selection
        verify: See build_controller
        override: Returned as-is when given, without looking at the options

    Raises:
        UnknownPlatformError: If options.platform is not supported
        ConfigurationError: Any validation error from build_controller
    """
    if override is not None:
        return override

    controller_class = get_platform_class(options.platform)
    return build_controller(controller_class, options, verify)
