"""Inputs and outputs of a single run."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from managebranch.models.ref import BranchState, Reference

# Value written for every output when the branch ends up absent.
EMPTY_OUTPUT = ""


class RunInputs(BaseModel):
    """Resolved action inputs, read once per run."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(..., min_length=1, description="Bare branch name")
    state: BranchState = Field(default=BranchState.PRESENT)
    source: str = Field(..., alias="from", description="Branch, tag or revision id to start from")


class RunOutputs(BaseModel):
    """The ref/name/sha triple emitted at the end of a run."""

    model_config = ConfigDict(frozen=True)

    ref: str
    name: str
    sha: str

    @classmethod
    def present(cls, name: str, reference: Reference) -> "RunOutputs":
        """Outputs for a branch that exists after the run."""
        return cls(ref=reference.ref, name=name, sha=reference.sha)

    @classmethod
    def absent(cls) -> "RunOutputs":
        """Outputs for a branch that does not exist after the run."""
        return cls(ref=EMPTY_OUTPUT, name=EMPTY_OUTPUT, sha=EMPTY_OUTPUT)

    @property
    def is_empty(self) -> bool:
        return self.ref == EMPTY_OUTPUT and self.name == EMPTY_OUTPUT and self.sha == EMPTY_OUTPUT

    def as_dict(self) -> dict[str, str]:
        return {"ref": self.ref, "name": self.name, "sha": self.sha}
