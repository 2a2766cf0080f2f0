"""Action runtime plumbing."""

from managebranch.runtime.kit import ActionsKit
from managebranch.runtime.logs import WorkflowCommandHandler, escape_data, setup_logging

__all__ = ["ActionsKit", "WorkflowCommandHandler", "escape_data", "setup_logging"]
