"""Data models for managebranch."""

from managebranch.models.config import DEFAULT_API_URL, GitHubApiConfig
from managebranch.models.metadata import ActionMetadata, InputSpec, OutputSpec
from managebranch.models.ref import (
    BranchState,
    Found,
    NotFound,
    RefLookup,
    Reference,
    branch_ref,
    normalize_ref,
    tag_ref,
)
from managebranch.models.run import EMPTY_OUTPUT, RunInputs, RunOutputs

__all__ = [
    # Reference models
    "BranchState",
    "Reference",
    "Found",
    "NotFound",
    "RefLookup",
    "branch_ref",
    "tag_ref",
    "normalize_ref",
    # Run models
    "RunInputs",
    "RunOutputs",
    "EMPTY_OUTPUT",
    # Configuration
    "GitHubApiConfig",
    "DEFAULT_API_URL",
    "ActionMetadata",
    "InputSpec",
    "OutputSpec",
]
