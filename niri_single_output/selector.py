"""Output selection policies.

Both policies are pure functions of their inputs and only ever look at
outputs in name order (``OutputSnapshot.ordered()``), so the result does not
depend on the order niri listed outputs in. When several outputs are active,
the first active one by name is treated as the current output.
"""

import logging
from typing import Optional

from .errors import EmptySnapshotError
from .models import OutputSnapshot

logger = logging.getLogger(__name__)


def restore_or_first(snapshot: OutputSnapshot, persisted_name: Optional[str]) -> str:
    """Choose the output to switch on at startup.

    Resolution order:
    1. The persisted output, if it is still present
    2. The first active output by name
    3. The first output by name

    Args:
        snapshot: Current outputs
        persisted_name: Last selected output name from the state file, if any

    Returns:
        Name of the output to activate

    Raises:
        EmptySnapshotError: If the snapshot has no outputs
    """
    if len(snapshot) == 0:
        raise EmptySnapshotError("restore output")

    if persisted_name is not None:
        if persisted_name in snapshot:
            logger.debug(f"Restoring last output {persisted_name}")
            return persisted_name
        logger.info(f"Last output {persisted_name} is no longer present, falling back")

    active = snapshot.first_active()
    if active is not None:
        logger.debug(f"Keeping currently active output {active.name}")
        return active.name

    first = snapshot.ordered()[0]
    logger.debug(f"No active output, choosing first output {first.name}")
    return first.name


def advance_to_next(snapshot: OutputSnapshot) -> str:
    """Choose the output following the currently active one.

    Outputs are cycled by name and wrap around at the end. With no active
    output the first output by name is chosen.

    Raises:
        EmptySnapshotError: If the snapshot has no outputs
    """
    ordered = snapshot.ordered()
    if not ordered:
        raise EmptySnapshotError("advance to next output")

    current = snapshot.first_active()
    if current is None:
        # Virtual position before the first entry
        index = 0
    else:
        index = (snapshot.names().index(current.name) + 1) % len(ordered)

    chosen = ordered[index].name
    logger.debug(f"Advancing from {current.name if current else None} to {chosen}")
    return chosen
