"""Repository reference model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from repofleet.exceptions import InvalidReferenceFormatError


class RepositoryReference(BaseModel):
    """A repository (or GitLab project) identified by owner and name."""

    model_config = ConfigDict(frozen=True)

    owner: str = Field(..., description="Owning organization, group path or user")
    name: str = Field(..., description="Repository name")

    def __str__(self) -> str:
        return f"{self.owner}/{self.name}"

    @classmethod
    def parse(cls, raw: str, nested_owner: bool = False) -> "RepositoryReference":
        """Parse an "owner/name" string.

        With nested_owner the owner may itself contain slashes (GitLab
        subgroups), and the last segment is taken as the name.
        """
        parts = raw.split("/")
        if len(parts) < 2 or any(not part for part in parts):
            raise InvalidReferenceFormatError(raw)
        if len(parts) > 2 and not nested_owner:
            raise InvalidReferenceFormatError(raw)
        return cls(owner="/".join(parts[:-1]), name=parts[-1])
