"""Read-only lookups of existing references."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from managebranch.github.base import RepositoryAPI
from managebranch.models.ref import (
    Found,
    NotFound,
    RefLookup,
    Reference,
    branch_ref,
    normalize_ref,
    tag_ref,
)

logger = logging.getLogger(__name__)


def _first_match(refs: Iterable[Reference], candidates: Iterable[str]) -> RefLookup:
    wanted = {normalize_ref(c) for c in candidates}
    for reference in refs:
        if normalize_ref(reference.ref) in wanted:
            return Found(reference)
    return NotFound()


async def find_branch(repository: RepositoryAPI, name: str) -> RefLookup:
    """Find the branch ``name``, ignoring case.

    The listing order is not assumed to be sorted; the first match wins.
    """
    wanted = branch_ref(name)
    lookup = _first_match(await repository.list_refs("heads"), [wanted])
    logger.debug(f"branch lookup {wanted}: {'found' if isinstance(lookup, Found) else 'not found'}")
    return lookup


async def find_any(repository: RepositoryAPI, identifier: str) -> RefLookup:
    """Find a branch, tag or full reference path matching ``identifier``.

    The whole listing is scanned once and the first reference matching any of
    ``refs/heads/<id>``, ``refs/tags/<id>`` or ``<id>`` itself is returned.
    """
    candidates = [branch_ref(identifier), tag_ref(identifier), identifier]
    return _first_match(await repository.list_refs(), candidates)


async def resolve_source_sha(repository: RepositoryAPI, identifier: str) -> str:
    """Resolve a branch, tag or revision id to a revision id.

    An identifier that matches no reference is assumed to be a revision id
    already and is returned unchanged. It is not validated here; GitHub
    rejects an unknown revision when the reference is written.
    """
    lookup = await find_any(repository, identifier)
    if isinstance(lookup, Found):
        logger.debug(f"source {identifier} resolved through {lookup.reference.ref} to {lookup.reference.sha}")
        return lookup.reference.sha
    logger.debug(f"source {identifier} matches no reference, using it as a revision id")
    return identifier
