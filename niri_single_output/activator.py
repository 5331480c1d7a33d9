"""Switches the chosen output on and every other output off."""

import logging
from typing import List

from .ipc_client import OutputProvider
from .models import ActivationCommand, OutputAction, OutputSnapshot
from .state_store import StateStore

logger = logging.getLogger(__name__)


def plan_commands(snapshot: OutputSnapshot, chosen_name: str) -> List[ActivationCommand]:
    """Build one On/Off command per output, in name order.

    Raises:
        ValueError: If chosen_name is not in the snapshot
    """
    if chosen_name not in snapshot:
        raise ValueError(f"Output {chosen_name} is not present in snapshot {snapshot.names()}")

    return [
        ActivationCommand(
            target_name=output.name,
            desired_state=OutputAction.ON if output.name == chosen_name else OutputAction.OFF,
        )
        for output in snapshot.ordered()
    ]


def activate(
    provider: OutputProvider,
    store: StateStore,
    snapshot: OutputSnapshot,
    chosen_name: str,
) -> List[ActivationCommand]:
    """Apply the selection and persist it.

    Commands are sent one at a time and the first failure aborts the run;
    commands already sent are not rolled back. The state file is written only
    after every command succeeded.

    Args:
        provider: niri client (or any OutputProvider)
        store: State store for the last selected output
        snapshot: Outputs to switch
        chosen_name: Output to switch on

    Returns:
        Commands that were sent

    Raises:
        TransportError: If sending a command fails
        StateIOError: If the state file cannot be written
    """
    commands = plan_commands(snapshot, chosen_name)

    for command in commands:
        logger.info(f"For output {command.target_name} call {command.desired_state.value}")
        provider.set_output(command.target_name, command.desired_state)

    store.write(chosen_name)
    return commands
