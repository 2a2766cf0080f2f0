"""CLI commands for manage-branch."""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from managebranch.action import ManageBranchAction
from managebranch.errors import ActionFailed
from managebranch.models.metadata import ActionMetadata
from managebranch.runtime.kit import ActionsKit
from managebranch.runtime.logs import setup_logging

console = Console()
logger = logging.getLogger("managebranch")


@click.group()
def main() -> None:
    """manage-branch - Create, update or delete a GitHub branch."""


@main.command()
@click.option("--name", "-n", default=None, help="Branch name (overrides INPUT_NAME)")
@click.option(
    "--state",
    "-s",
    type=click.Choice(["present", "absent"], case_sensitive=False),
    default=None,
    help="Desired branch state (overrides INPUT_STATE)",
)
@click.option("--from", "source", default=None, help="Branch, tag or revision to start from (overrides INPUT_FROM)")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def run(name: str | None, state: str | None, source: str | None, debug: bool) -> None:
    """Reconcile the branch against its desired state."""
    kit = ActionsKit(overrides={"name": name, "state": state, "from": source})
    setup_logging(debug=debug or kit.debug_enabled, on_runner=kit.on_runner)

    action = ManageBranchAction(kit=kit)
    try:
        outputs = asyncio.run(action.run())
    except ActionFailed as e:
        logger.error(str(e))
        sys.exit(1)

    if not kit.on_runner:
        table = Table(title="Outputs")
        table.add_column("Key", style="cyan")
        table.add_column("Value", style="green")
        for key, value in outputs.as_dict().items():
            table.add_row(key, value or "[dim](empty)[/dim]")
        console.print(table)


@main.command()
@click.option("--metadata", "-m", default="action.yml", help="Path to action.yml")
def inputs(metadata: str) -> None:
    """Show the inputs and outputs declared in action.yml."""
    path = Path(metadata)
    if not path.exists():
        console.print(f"[red]Metadata file not found: {path}[/red]")
        sys.exit(1)

    meta = ActionMetadata.from_yaml(path)
    console.print(f"[bold cyan]{meta.name}[/bold cyan]")
    if meta.description:
        console.print(f"  {meta.description}")

    table = Table(title="Inputs")
    table.add_column("Name", style="cyan")
    table.add_column("Required")
    table.add_column("Default", style="green")
    table.add_column("Description")
    for input_name, spec in meta.inputs.items():
        table.add_row(input_name, "yes" if spec.required else "no", spec.default or "-", spec.description)
    console.print(table)

    table = Table(title="Outputs")
    table.add_column("Name", style="cyan")
    table.add_column("Description")
    for output_name, spec in meta.outputs.items():
        table.add_row(output_name, spec.description)
    console.print(table)
