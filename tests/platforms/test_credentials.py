"""Tests for access token resolution."""

from __future__ import annotations

import pytest

from repofleet.exceptions import MissingCredentialError
from repofleet.platforms.base import resolve_token


class TestResolveToken:
    """Flag first, then the platform's environment variable."""

    def test_flag_wins_over_env(self, monkeypatch):
        monkeypatch.setenv("GITHUB_TOKEN", "env-token")
        assert resolve_token("flag-token", "GITHUB_TOKEN") == "flag-token"

    def test_env_fallback(self, monkeypatch):
        monkeypatch.setenv("GITHUB_TOKEN", "env-token")
        assert resolve_token(None, "GITHUB_TOKEN") == "env-token"

    def test_empty_flag_falls_back(self, monkeypatch):
        monkeypatch.setenv("GITLAB_TOKEN", "env-token")
        assert resolve_token("", "GITLAB_TOKEN") == "env-token"

    def test_missing(self):
        with pytest.raises(MissingCredentialError) as exc_info:
            resolve_token(None, "GITHUB_TOKEN")
        assert "GITHUB_TOKEN" in str(exc_info.value)
        assert exc_info.value.code == "MISSING_CREDENTIAL"

    def test_empty_env_is_missing(self, monkeypatch):
        monkeypatch.setenv("GITEA_TOKEN", "")
        with pytest.raises(MissingCredentialError):
            resolve_token("", "GITEA_TOKEN")

    def test_other_platform_env_not_used(self, monkeypatch):
        monkeypatch.setenv("GITLAB_TOKEN", "gl-token")
        with pytest.raises(MissingCredentialError):
            resolve_token(None, "GITHUB_TOKEN")
