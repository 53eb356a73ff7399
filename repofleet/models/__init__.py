"""Data models for repofleet."""

from repofleet.models.listing import PlatformOptions, Repository, RepositoryListing
from repofleet.models.platform import (
    AutocompleteKind,
    MergeType,
    PlatformCapabilities,
    PlatformConfig,
    PlatformName,
    parse_merge_types,
)
from repofleet.models.reference import RepositoryReference

__all__ = [
    # Selection
    "PlatformOptions",
    "RepositoryListing",
    "RepositoryReference",
    "Repository",
    # Platform descriptors
    "AutocompleteKind",
    "MergeType",
    "PlatformCapabilities",
    "PlatformConfig",
    "PlatformName",
    "parse_merge_types",
]
