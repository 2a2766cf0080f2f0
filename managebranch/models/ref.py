"""Reference models and reference-name helpers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field

from managebranch.errors import ConfigurationError

BRANCH_PREFIX = "refs/heads/"
TAG_PREFIX = "refs/tags/"


class BranchState(str, Enum):
    """Desired state of the managed branch."""
    PRESENT = "present"
    ABSENT = "absent"


def branch_ref(name: str | None) -> str:
    """Get the full reference path of a branch name."""
    if not name:
        raise ConfigurationError("Branch name must not be empty")
    return f"{BRANCH_PREFIX}{name}"


def tag_ref(name: str | None) -> str:
    """Get the full reference path of a tag name."""
    if not name:
        raise ConfigurationError("Tag name must not be empty")
    return f"{TAG_PREFIX}{name}"


def normalize_ref(value: str) -> str:
    """Normalize a reference path for comparison.

    Hosts may report reference names with different casing than requested,
    so every comparison of reference paths goes through this function.
    """
    return value.casefold()


class Reference(BaseModel):
    """Snapshot of a remote named pointer (branch or tag)."""

    model_config = ConfigDict(frozen=True)

    ref: str = Field(..., description="Full reference path, e.g. refs/heads/main")
    sha: str = Field(..., description="Revision id the reference points at")
    object_type: str = Field(default="commit")

    @property
    def api_path(self) -> str:
        """Path segment used by the git refs endpoints (without 'refs/')."""
        return self.ref.removeprefix("refs/")

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Reference":
        """Parse a GitHub git reference payload."""
        obj = data.get("object") or {}
        return cls(
            ref=data["ref"],
            sha=obj["sha"],
            object_type=obj.get("type", "commit"),
        )


@dataclass(frozen=True)
class Found:
    """Lookup result carrying an existing reference."""
    reference: Reference


@dataclass(frozen=True)
class NotFound:
    """Lookup result when no reference matched."""


RefLookup = Union[Found, NotFound]
