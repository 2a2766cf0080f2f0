"""The branch management action: one reconciliation per run."""

from __future__ import annotations

import logging

from managebranch.errors import ActionFailed, AuthenticationError
from managebranch.github.base import GitHubAPI, RepositoryAPI
from managebranch.github.client import GitHubClient
from managebranch.locator import find_branch, resolve_source_sha
from managebranch.models.config import GitHubApiConfig
from managebranch.models.ref import BranchState
from managebranch.models.run import RunInputs, RunOutputs
from managebranch.mutator import apply, decide
from managebranch.runtime.kit import ActionsKit

logger = logging.getLogger(__name__)


class ManageBranchAction:
    """Makes a branch exist at a revision, or not exist at all.

    The runtime kit, API handle and repository handle can be injected; any
    that is missing is built from the runner environment.
    """

    def __init__(
        self,
        kit: ActionsKit | None = None,
        api: GitHubAPI | None = None,
        repository: RepositoryAPI | None = None,
    ) -> None:
        self.kit = kit or ActionsKit()
        self.api = api
        self.repository = repository
        self._owns_api = False

    # Inputs

    def get_input_name(self) -> str:
        return self.kit.get_required_input("name")

    def get_input_state(self) -> BranchState:
        return self.kit.get_enum_input("state", BranchState) or BranchState.PRESENT

    def get_input_from(self) -> str:
        return self.kit.get_input("from") or self.kit.github_sha

    def resolve_inputs(self) -> RunInputs:
        return RunInputs(
            name=self.get_input_name(),
            state=self.get_input_state(),
            source=self.get_input_from(),
        )

    # API session

    async def connect_api(self) -> GitHubAPI:
        """Build the API handle unless one was injected, then validate it."""
        logger.debug("github api url connection: check.")

        token = self.kit.get_env("GITHUB_TOKEN")
        if not token:
            raise AuthenticationError("GITHUB_TOKEN is not set")

        if self.api is None:
            config = GitHubApiConfig(base_url=self.kit.github_api_url, token=token)
            self.api = GitHubClient(config)
            self._owns_api = True

        await self.api.validate_endpoint()
        logger.debug("github api url connection: ok.")
        return self.api

    async def get_repository(self) -> RepositoryAPI:
        if self.repository is None:
            api = self.api or await self.connect_api()
            self.repository = await api.get_repository(self.kit.github_repository)
        return self.repository

    # Outputs

    def emit_outputs(self, outputs: RunOutputs) -> None:
        for key, value in outputs.as_dict().items():
            if outputs.is_empty:
                self.kit.set_empty_output(key)
            else:
                self.kit.set_output(key, value)

    # Run

    async def reconcile(self, inputs: RunInputs) -> RunOutputs:
        """Apply the desired state to the branch and return the outputs."""
        repository = await self.get_repository()
        existing = await find_branch(repository, inputs.name)
        decision = decide(inputs.state, existing)
        logger.debug(f"decision: {decision.value}")

        source_sha = None
        if decision.needs_source:
            source_sha = await resolve_source_sha(repository, inputs.source)
        reference = await apply(repository, decision, inputs.name, existing, source_sha)
        if reference is None:
            return RunOutputs.absent()
        return RunOutputs.present(inputs.name, reference)

    async def run(self) -> RunOutputs:
        """Execute the action.

        Every failure is raised as ActionFailed with the original error as its
        cause. Outputs are written only once the branch has been reconciled.
        """
        try:
            inputs = self.resolve_inputs()
            logger.debug(
                f"parameters: [name: {inputs.name}, state: {inputs.state.value}, from: {inputs.source}]"
            )
            await self.connect_api()
            outputs = await self.reconcile(inputs)
            self.emit_outputs(outputs)
            return outputs
        except Exception as e:
            raise ActionFailed(str(e) or type(e).__name__) from e
        finally:
            if self._owns_api and self.api is not None:
                await self.api.close()
