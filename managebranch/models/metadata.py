"""Model of the action.yml metadata file."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


class InputSpec(BaseModel):
    """A declared action input."""

    description: str = ""
    required: bool = False
    default: str | None = None


class OutputSpec(BaseModel):
    """A declared action output."""

    description: str = ""


class ActionMetadata(BaseModel):
    """Parsed action.yml."""

    name: str
    description: str = ""
    author: str | None = None
    inputs: dict[str, InputSpec] = Field(default_factory=dict)
    outputs: dict[str, OutputSpec] = Field(default_factory=dict)
    runs: dict[str, Any] = Field(default_factory=dict)

    model_config = {"extra": "allow"}

    @classmethod
    def from_yaml(cls, path: Path) -> "ActionMetadata":
        """Load action metadata from a YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f)
        return cls.model_validate(data)
