"""Shell completion queries against a version controller.

Completion is best effort: a platform that does not declare a query kind
gets None back, and the CLI turns both None and query errors into an empty
completion list.
"""

from __future__ import annotations

import asyncio
import logging

from repofleet.models.listing import PlatformOptions
from repofleet.models.platform import AutocompleteKind
from repofleet.platforms.base import VersionController
from repofleet.platforms.registry import resolve_version_controller

logger = logging.getLogger(__name__)

# Seconds a completion query may take before the shell gets nothing
COMPLETION_TIMEOUT = 10.0


async def try_autocomplete(
    vc: VersionController,
    kind: AutocompleteKind,
    partial: str,
) -> list[str] | None:
    """Run a completion query if the controller's platform supports it.

    Returns:
        Completion candidates, or None if the platform does not support kind

    Errors raised by the query itself propagate to the caller. Cancelling the
    awaiting task cancels the in-flight request.
    """
    if not vc.config.capabilities.supports(kind):
        logger.debug(f"{vc.config.name} does not support {kind.value} completion")
        return None
    return await vc.autocomplete(kind, partial)


async def _complete(
    options: PlatformOptions,
    kind: AutocompleteKind,
    partial: str,
    override: VersionController | None,
    timeout: float,
) -> list[str]:
    vc = resolve_version_controller(options, verify=False, override=override)
    try:
        result = await asyncio.wait_for(try_autocomplete(vc, kind, partial), timeout)
    finally:
        if override is None:
            await vc.close()
    return result or []


def complete(
    options: PlatformOptions,
    kind: AutocompleteKind,
    partial: str,
    override: VersionController | None = None,
    timeout: float = COMPLETION_TIMEOUT,
) -> list[str]:
    """Synchronous completion entry point for the CLI.

    Never raises: resolution failures, unsupported kinds, query errors,
    timeouts and interrupts all produce an empty list.
    """
    try:
        return asyncio.run(_complete(options, kind, partial, override, timeout))
    except KeyboardInterrupt:
        return []
    except Exception as e:
        logger.debug(f"No {kind.value} completions: {e}")
        return []
