"""Access to the GitHub Actions runtime: inputs, environment and outputs."""

from __future__ import annotations

import logging
import os
import sys
import uuid
from collections.abc import Mapping
from enum import Enum
from typing import TextIO, TypeVar

from managebranch.errors import ConfigurationError, OutputError
from managebranch.models.config import DEFAULT_API_URL
from managebranch.models.run import EMPTY_OUTPUT
from managebranch.runtime.logs import escape_data

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)


class ActionsKit:
    """Reads action inputs and the runner environment, writes step outputs.

    Inputs come from ``INPUT_<NAME>`` variables unless an explicit override
    was given (used by the command line).
    """

    def __init__(
        self,
        environ: Mapping[str, str] | None = None,
        overrides: Mapping[str, str | None] | None = None,
        stdout: TextIO | None = None,
    ) -> None:
        self.environ = environ if environ is not None else os.environ
        self.overrides = {k: v for k, v in (overrides or {}).items() if v is not None}
        self.stdout = stdout
        self.outputs: dict[str, str] = {}

    @staticmethod
    def input_env_name(name: str) -> str:
        """Environment variable the runner uses for an input."""
        return f"INPUT_{name.replace(' ', '_').upper()}"

    # Inputs

    def get_input(self, name: str) -> str | None:
        """Get an input value, or None if unset or blank."""
        if name in self.overrides:
            value = self.overrides[name]
        else:
            value = self.environ.get(self.input_env_name(name), "")
        value = value.strip()
        return value or None

    def get_required_input(self, name: str) -> str:
        value = self.get_input(name)
        if value is None:
            raise ConfigurationError(f"Input required and not supplied: {name}")
        return value

    def get_enum_input(self, name: str, enum_cls: type[E]) -> E | None:
        """Parse an input into an enum member, matching values case-insensitively."""
        value = self.get_input(name)
        if value is None:
            return None
        wanted = value.lower()
        for member in enum_cls:
            if str(member.value).lower() == wanted:
                return member
        allowed = ", ".join(str(m.value) for m in enum_cls)
        raise ConfigurationError(f"Invalid value for input {name}: {value!r} (expected one of: {allowed})")

    # Environment

    def get_env(self, name: str) -> str | None:
        value = self.environ.get(name, "")
        return value or None

    def get_required_env(self, name: str) -> str:
        value = self.get_env(name)
        if value is None:
            raise ConfigurationError(f"Environment variable required and not set: {name}")
        return value

    @property
    def github_repository(self) -> str:
        """The ``owner/repo`` the workflow runs for."""
        return self.get_required_env("GITHUB_REPOSITORY")

    @property
    def github_sha(self) -> str:
        """The revision that triggered the workflow."""
        return self.get_required_env("GITHUB_SHA")

    @property
    def github_api_url(self) -> str:
        return self.get_env("GITHUB_API_URL") or DEFAULT_API_URL

    @property
    def on_runner(self) -> bool:
        return self.get_env("GITHUB_ACTIONS") == "true"

    @property
    def debug_enabled(self) -> bool:
        return self.get_env("RUNNER_DEBUG") == "1"

    # Outputs

    def set_output(self, key: str, value: str) -> None:
        """Write a step output. Each key may be written once."""
        if key in self.outputs:
            raise OutputError(f"Output already set: {key}")
        self.outputs[key] = value

        output_file = self.get_env("GITHUB_OUTPUT")
        if output_file:
            delimiter = f"ghadelimiter_{uuid.uuid4()}"
            with open(output_file, "a", encoding="utf-8") as f:
                f.write(f"{key}<<{delimiter}\n{value}\n{delimiter}\n")
        else:
            stream = self.stdout or sys.stdout
            stream.write(f"::set-output name={key}::{escape_data(value)}\n")
        logger.debug(f"output {key}={value!r}")

    def set_empty_output(self, key: str) -> None:
        """Write an output explicitly set to the empty marker."""
        self.set_output(key, EMPTY_OUTPUT)
