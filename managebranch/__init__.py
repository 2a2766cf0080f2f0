"""manage-branch - Reconcile a GitHub branch against a desired state."""

from managebranch.action import ManageBranchAction
from managebranch.errors import (
    ActionFailed,
    AuthenticationError,
    ConfigurationError,
    ManageBranchError,
    MutationError,
    OutputError,
    TransportError,
)
from managebranch.models.ref import BranchState, Reference
from managebranch.models.run import RunInputs, RunOutputs

__version__ = "0.1.0"
__all__ = [
    "ManageBranchAction",
    "BranchState",
    "Reference",
    "RunInputs",
    "RunOutputs",
    "ManageBranchError",
    "ConfigurationError",
    "AuthenticationError",
    "TransportError",
    "MutationError",
    "OutputError",
    "ActionFailed",
]
