"""In-memory niri output provider that records issued commands."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from niri_single_output.errors import StateIOError, TransportError
from niri_single_output.models import Output, OutputAction, OutputSnapshot
from niri_single_output.state_store import StateStore


def make_snapshot(outputs: Dict[str, bool]) -> OutputSnapshot:
    """Build a snapshot from {name: is_active}, preserving the given order."""
    return OutputSnapshot.from_outputs(
        Output(name=name, is_active=active) for name, active in outputs.items()
    )


@dataclass
class RecordingProvider:
    """Mock OutputProvider.

    Commands are recorded in ``sent`` in the order they were issued. When
    ``fail_on`` names an output, the command for that output raises
    TransportError and is not recorded.
    """
    snapshot: OutputSnapshot
    fail_on: Optional[str] = None
    sent: List[Tuple[str, OutputAction]] = field(default_factory=list)
    queries: int = 0

    def get_snapshot(self) -> OutputSnapshot:
        self.queries += 1
        return self.snapshot

    def set_output(self, name: str, action: OutputAction) -> None:
        if name == self.fail_on:
            raise TransportError(f"Output {name} {action.value}", "simulated failure")
        self.sent.append((name, action))

    def actions_for(self, action: OutputAction) -> List[str]:
        return [name for name, sent_action in self.sent if sent_action == action]


class FailingStateStore(StateStore):
    """State store whose writes always fail."""

    def write(self, name: str) -> None:
        raise StateIOError(str(self.path), "Permission denied")
