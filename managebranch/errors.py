"""Error taxonomy for the branch management action."""

from __future__ import annotations


class ManageBranchError(Exception):
    """Base class for all errors raised by managebranch."""


class ConfigurationError(ManageBranchError):
    """An input or environment value is missing or invalid."""


class AuthenticationError(ManageBranchError):
    """The access token is missing or was rejected by the API."""


class TransportError(ManageBranchError):
    """The API could not be reached or a read call failed."""


class MutationError(ManageBranchError):
    """A create, update or delete of a reference was rejected."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class OutputError(ManageBranchError):
    """A step output was written more than once."""


class ActionFailed(ManageBranchError):
    """Terminal failure of a run. The original error is chained as ``__cause__``."""
