"""Data models for niri output switching.

Outputs and snapshots are immutable pydantic models built from niri's
``Outputs`` IPC reply. Any change of output state goes through a new
``ActivationCommand`` followed by a fresh query, never by mutating a model.
"""

from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class OutputAction(str, Enum):
    """Power action for a single output (niri wire names)."""

    ON = "On"
    OFF = "Off"


class Output(BaseModel):
    """One display output known to niri.

    Attributes:
        name: Connector name (eDP-1, HDMI-A-1, ...), unique within a snapshot.
        is_active: True when niri reports a current mode for the output.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(..., description="Output connector name")
    is_active: bool = Field(False, description="Whether output has a current mode")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate output name is non-empty."""
        if not v or v.strip() == "":
            raise ValueError("Output name cannot be empty")
        return v


class OutputSnapshot(BaseModel):
    """Point-in-time set of outputs keyed by name.

    ``ordered()`` is the only iteration order used for selection: outputs
    sorted by name, independent of the order niri returned them in.
    """

    model_config = ConfigDict(frozen=True)

    outputs: Dict[str, Output] = Field(default_factory=dict)

    @model_validator(mode="after")
    def validate_keys(self) -> "OutputSnapshot":
        """Keys must match the name of the output they map to."""
        for key, output in self.outputs.items():
            if key != output.name:
                raise ValueError(f"Snapshot key '{key}' does not match output name '{output.name}'")
        return self

    @classmethod
    def from_outputs(cls, outputs: Iterable[Output]) -> "OutputSnapshot":
        """Build a snapshot from outputs, rejecting duplicate names."""
        by_name: Dict[str, Output] = {}
        for output in outputs:
            if output.name in by_name:
                raise ValueError(f"Duplicate output name in snapshot: {output.name}")
            by_name[output.name] = output
        return cls(outputs=by_name)

    @classmethod
    def from_niri_reply(cls, reply: Mapping[str, Any]) -> "OutputSnapshot":
        """Build a snapshot from the payload of niri's ``Outputs`` response.

        Args:
            reply: Mapping of output name to niri output object

        Returns:
            OutputSnapshot where an output is active iff ``current_mode`` is set

        Raises:
            ValueError: If the payload is not a mapping of name to object
        """
        if not isinstance(reply, Mapping):
            raise ValueError(f"Expected mapping of outputs, got {type(reply).__name__}")

        outputs = []
        for name, info in reply.items():
            if not isinstance(info, Mapping):
                raise ValueError(f"Output '{name}' is not an object")
            outputs.append(Output(name=name, is_active=info.get("current_mode") is not None))
        return cls.from_outputs(outputs)

    def ordered(self) -> List[Output]:
        """Outputs sorted lexicographically by name."""
        return [self.outputs[name] for name in sorted(self.outputs)]

    def first_active(self) -> Optional[Output]:
        """First active output in name order (tie-break for multiple active)."""
        for output in self.ordered():
            if output.is_active:
                return output
        return None

    def names(self) -> List[str]:
        return sorted(self.outputs)

    def __contains__(self, name: object) -> bool:
        return name in self.outputs

    def __len__(self) -> int:
        return len(self.outputs)


class ActivationCommand(BaseModel):
    """Single On/Off instruction for one output. Never persisted."""

    model_config = ConfigDict(frozen=True)

    target_name: str
    desired_state: OutputAction

    def to_request(self) -> Dict[str, Any]:
        """niri IPC request body for this command."""
        return {"Output": {"output": self.target_name, "action": self.desired_state.value}}
