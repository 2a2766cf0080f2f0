"""Create, update or delete the managed branch."""

from __future__ import annotations

import logging
from enum import Enum

from managebranch.errors import ManageBranchError
from managebranch.github.base import RepositoryAPI
from managebranch.models.ref import BranchState, Found, RefLookup, Reference, branch_ref

logger = logging.getLogger(__name__)


class Decision(str, Enum):
    """What a run does to the branch."""
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    SKIP_DELETE = "skip_delete"

    @property
    def needs_source(self) -> bool:
        """Whether the source revision must be resolved before applying."""
        return self in (Decision.CREATE, Decision.UPDATE)


def decide(state: BranchState, existing: RefLookup) -> Decision:
    """Pick the single action for a desired state and the current branch."""
    exists = isinstance(existing, Found)
    if state == BranchState.PRESENT:
        return Decision.UPDATE if exists else Decision.CREATE
    return Decision.DELETE if exists else Decision.SKIP_DELETE


async def apply(
    repository: RepositoryAPI,
    decision: Decision,
    name: str,
    existing: RefLookup,
    source_sha: str | None = None,
) -> Reference | None:
    """Carry out ``decision`` on the branch ``name``.

    CREATE and UPDATE return the reference reported by the server and need
    ``source_sha``. DELETE and SKIP_DELETE return None. An update is always
    forced.
    """
    if decision.needs_source and not source_sha:
        raise ManageBranchError(f"{decision.value} requires a source revision")

    if decision is Decision.CREATE:
        ref = branch_ref(name)
        logger.info(f"creating {ref} at {source_sha}")
        return await repository.create_ref(ref, source_sha)

    if decision is Decision.SKIP_DELETE:
        logger.info("skipping branch deletion as it does not exist")
        return None

    if not isinstance(existing, Found):
        raise ManageBranchError(f"{decision.value} requires an existing reference")

    if decision is Decision.UPDATE:
        logger.info(f"updating {existing.reference.ref} to {source_sha}")
        return await repository.update_ref(existing.reference, source_sha, force=True)

    logger.info(f"deleting {existing.reference.ref}")
    await repository.delete_ref(existing.reference)
    return None
