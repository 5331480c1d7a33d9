"""
niri single-output CLI

Usage:
    niri-single-output [--path SOCKET] [--state FILE] test
    niri-single-output [--path SOCKET] [--state FILE] init [--json]
    niri-single-output [--path SOCKET] [--state FILE] next [--json]
"""

import json
import logging
import sys
from pathlib import Path
from typing import Callable, List, Optional

import click
from rich.console import Console
from rich.markup import escape

from . import __version__
from .activator import activate
from .errors import SingleOutputError
from .ipc_client import NiriClient
from .models import ActivationCommand, OutputAction, OutputSnapshot
from .selector import advance_to_next, restore_or_first
from .state_store import StateStore

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity level.

    Args:
        verbose: Enable verbose (DEBUG) logging
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s [%(name)s] %(message)s",
    )


def display_result(chosen: str, commands: List[ActivationCommand], console: Console, output_json: bool) -> None:
    """Print the selected output and the commands sent."""
    if output_json:
        click.echo(json.dumps({
            "chosen": chosen,
            "commands": [
                {"output": c.target_name, "action": c.desired_state.value} for c in commands
            ],
        }, indent=2))
        return

    for command in commands:
        color = "green" if command.desired_state == OutputAction.ON else "dim"
        console.print(f"For output [bold]{command.target_name}[/bold] call [{color}]{command.desired_state.value}[/{color}]")
    console.print(f"[green]Active output:[/green] {chosen}")


def display_error(error: SingleOutputError, console: Console, output_json: bool) -> None:
    if output_json:
        click.echo(json.dumps({"error": error.to_dict()}, indent=2))
        return

    console.print(f"[red]Error: {escape(error.message)}[/red]")
    if error.suggestion:
        console.print(f"[yellow]Suggestion:[/yellow] {escape(error.suggestion)}")


def run_selection(
    ctx: click.Context,
    select: Callable[[OutputSnapshot, StateStore], str],
    output_json: bool,
) -> None:
    """Query outputs, pick one with ``select`` and switch to it."""
    console = Console()
    state = StateStore(ctx.obj["state"])

    try:
        client = NiriClient(ctx.obj["path"])
        snapshot = client.get_snapshot()
        chosen = select(snapshot, state)
        commands = activate(client, state, snapshot, chosen)
    except SingleOutputError as e:
        logger.debug(f"{ctx.info_name} failed: {e.to_dict()}")
        display_error(e, console, output_json)
        sys.exit(e.exit_code)

    display_result(chosen, commands, console, output_json)


@click.group()
@click.option("-p", "--path", type=click.Path(path_type=Path), default=None,
              help="Path to niri socket (default: $NIRI_SOCKET)")
@click.option("-s", "--state", type=click.Path(path_type=Path), default=None,
              help="Path to state file (default: $XDG_STATE_HOME/niri/last-output)")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose logging")
@click.version_option(__version__, prog_name="niri-single-output")
@click.pass_context
def cli(ctx: click.Context, path: Optional[Path], state: Optional[Path], verbose: bool):
    """Control niri outputs within a single-output scheme."""
    setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["path"] = path
    ctx.obj["state"] = state


@cli.command()
@click.pass_context
def test(ctx: click.Context):
    """
    Check niri availability.

    Exits with success if the niri socket accepts connections.
    """
    console = Console()

    try:
        NiriClient(ctx.obj["path"]).ping()
    except SingleOutputError as e:
        display_error(e, console, output_json=False)
        sys.exit(e.exit_code)


@cli.command()
@click.option("--json", "output_json", is_flag=True, help="Output JSON instead of text")
@click.pass_context
def init(ctx: click.Context, output_json: bool):
    """
    Init outputs at startup.

    Switches on the output named in the state file and switches off all
    others. If the file is missing or names an output that is gone, keeps the
    first active output, or the first output by name when none is active.
    """
    run_selection(ctx, lambda snapshot, state: restore_or_first(snapshot, state.read()), output_json)


@cli.command(name="next")
@click.option("--json", "output_json", is_flag=True, help="Output JSON instead of text")
@click.pass_context
def next_output(ctx: click.Context, output_json: bool):
    """
    Switch to next output.

    Switches on the output that follows the first active output by name
    (wrapping around) and switches off all others.
    """
    run_selection(ctx, lambda snapshot, state: advance_to_next(snapshot), output_json)


if __name__ == "__main__":
    cli()
