"""repofleet - resolve a source-control platform selection into a version controller."""

__version__ = "0.1.0"

from repofleet.exceptions import RepofleetError  # noqa: E402
from repofleet.platforms import VersionController, resolve_version_controller  # noqa: E402

__all__ = ["RepofleetError", "VersionController", "resolve_version_controller", "__version__"]
