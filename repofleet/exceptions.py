"""repofleet exception classes."""

from __future__ import annotations


class RepofleetError(Exception):
    """Base exception for all repofleet errors."""

    def __init__(self, code: str, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(message)


class ConfigurationError(RepofleetError):
    """Raised when the platform selection cannot be turned into a controller."""


class UnknownPlatformError(ConfigurationError):
    """Raised when the platform name is not one of the supported platforms."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__("UNKNOWN_PLATFORM", f"unknown platform: {name}")


class NoScopeSpecifiedError(ConfigurationError):
    """Raised when no organization, user or repository was selected."""

    def __init__(self, scopes: list[str]) -> None:
        self.scopes = scopes
        super().__init__("NO_SCOPE_SPECIFIED", f"no {', '.join(scopes[:-1])} or {scopes[-1]} set")


class InvalidReferenceFormatError(ConfigurationError):
    """Raised when a repository reference is not in the "owner/name" format."""

    def __init__(self, raw: str) -> None:
        self.raw = raw
        super().__init__(
            "INVALID_REFERENCE_FORMAT",
            f'could not parse repository reference "{raw}", expected the format "owner/name"',
        )


class MissingCredentialError(ConfigurationError):
    """Raised when neither --token nor the token environment variable is set."""

    def __init__(self, env_var: str) -> None:
        self.env_var = env_var
        super().__init__(
            "MISSING_CREDENTIAL",
            f"either the --token flag or the {env_var} environment variable has to be set",
        )


class MissingBaseURLError(ConfigurationError):
    """Raised when a platform without a public instance has no --base-url."""

    def __init__(self, platform: str) -> None:
        self.platform = platform
        super().__init__("MISSING_BASE_URL", f"no base-url set, it is required for {platform}")


class UnsupportedMergeTypeError(ConfigurationError):
    """Raised when a merge type is unknown or not supported by the platform."""

    def __init__(self, name: str, supported: list[str] | None = None) -> None:
        self.name = name
        self.supported = supported or []
        message = f"unsupported merge type: {name}"
        if self.supported:
            message += f" (supported: {', '.join(self.supported)})"
        super().__init__("UNSUPPORTED_MERGE_TYPE", message)


class ConfigFileError(ConfigurationError):
    """Raised when a configuration file cannot be read or has invalid content."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        super().__init__("CONFIG_FILE_ERROR", f"could not load config file {path}: {reason}")
