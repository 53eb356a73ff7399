"""Base version controller and credential resolution.

A version controller is the handle the rest of repofleet uses to reach one
hosting platform. Controllers are cheap to build: no request is made until
one of the async methods is awaited.
"""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from typing import Any, ClassVar

import httpx

from repofleet.exceptions import MissingCredentialError
from repofleet.logging import log_request, log_response
from repofleet.models.listing import PlatformOptions, Repository, RepositoryListing
from repofleet.models.platform import AutocompleteKind, MergeType, PlatformConfig


def resolve_token(token: str | None, env_var: str) -> str:
    """Return the explicit token, or fall back to the environment variable."""
    if token:
        return token
    env_token = os.environ.get(env_var, "")
    if env_token:
        return env_token
    raise MissingCredentialError(env_var)


_AUTOCOMPLETE_METHODS: dict[AutocompleteKind, str] = {
    AutocompleteKind.ORGANIZATIONS: "get_autocomplete_organizations",
    AutocompleteKind.USERS: "get_autocomplete_users",
    AutocompleteKind.REPOSITORIES: "get_autocomplete_repositories",
}


class VersionController(ABC):
    """Abstract base class for platform controllers.

    Implementations must provide:
    - A class-level PlatformConfig describing the platform
    - Repository enumeration for the configured listing
    - The autocomplete queries declared in config.capabilities
    """

    config: ClassVar[PlatformConfig]

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        config = cls.__dict__.get("config")
        if config is None:
            return
        for kind in config.capabilities.autocomplete_kinds:
            method = _AUTOCOMPLETE_METHODS[kind]
            if getattr(cls, method) is getattr(VersionController, method):
                raise TypeError(f"{cls.__name__} declares {kind.value} completion but does not override {method}()")

    def __init__(
        self,
        token: str,
        base_url: str | None,
        listing: RepositoryListing,
        merge_types: tuple[MergeType, ...] = (),
    ) -> None:
        self.token = token
        self.base_url = (base_url or self.config.default_base_url or "").rstrip("/")
        self.listing = listing
        self.merge_types = merge_types
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def extension_options(cls, options: PlatformOptions) -> dict[str, Any]:
        """Platform-specific constructor arguments taken from the options."""
        return {}

    @property
    def client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=30.0,
                headers=self.get_auth_headers(),
                event_hooks={"request": [log_request], "response": [log_response]},
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    def get_auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}

    async def _get_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        response = await self.client.get(path, params=params)
        response.raise_for_status()
        return response.json()

    async def _get_paginated(
        self,
        path: str,
        params: dict[str, Any] | None = None,
        per_page: int = 100,
        page_param: str = "per_page",
    ) -> list[dict[str, Any]]:
        """Fetch all pages of a list endpoint using page/per_page parameters."""
        results: list[dict[str, Any]] = []
        page = 1
        while True:
            batch = await self._get_json(path, {**(params or {}), page_param: per_page, "page": page})
            results.extend(batch)
            if len(batch) < per_page:
                return results
            page += 1

    @abstractmethod
    async def get_repositories(self) -> list[Repository]:
        """Get every repository selected by the listing."""
        ...

    async def autocomplete(self, kind: AutocompleteKind, partial: str) -> list[str]:
        """Answer a completion query declared in config.capabilities."""
        if not self.config.capabilities.supports(kind):
            raise NotImplementedError(f"{self.config.name} does not complete {kind.value}")
        return await getattr(self, _AUTOCOMPLETE_METHODS[kind])(partial)

    async def get_autocomplete_organizations(self, partial: str) -> list[str]:
        raise NotImplementedError

    async def get_autocomplete_users(self, partial: str) -> list[str]:
        raise NotImplementedError

    async def get_autocomplete_repositories(self, partial: str) -> list[str]:
        raise NotImplementedError

    @staticmethod
    def _dedupe(repos: list[Repository]) -> list[Repository]:
        seen: set[str] = set()
        unique = []
        for repo in repos:
            if repo.full_name in seen:
                continue
            seen.add(repo.full_name)
            unique.append(repo)
        return unique

    def __repr__(self) -> str:
        return f"{type(self).__name__}(base_url={self.base_url!r}, listing={self.listing!r})"
