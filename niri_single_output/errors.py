"""
Error types for niri single-output switching.

Each fatal condition has its own exception so the CLI can tell "nothing to
select" apart from "compositor down" and "local disk problem".
"""

from enum import Enum
from typing import Optional, Dict, Any


class ErrorCode(Enum):
    """
    Error codes for niri-single-output.

    Ranges:
    - 1400-1499: niri IPC errors
    - 1500-1599: Selection errors
    - 1200-1299: State file errors
    """

    # niri IPC errors (1400-1499)
    NIRI_NOT_RUNNING = 1400
    NIRI_IPC_FAILED = 1401
    NIRI_UNEXPECTED_REPLY = 1402

    # Selection errors (1500-1599)
    NO_OUTPUTS = 1500

    # State file errors (1200-1299)
    STATE_WRITE_ERROR = 1202


class SingleOutputError(Exception):
    """Base exception for output switching errors."""

    exit_code = 1

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        suggestion: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize output switching error.

        Args:
            code: Error code from ErrorCode enum
            message: Human-readable error message
            suggestion: Suggested recovery action
            context: Additional context for debugging
        """
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.context = context or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert error to dictionary for JSON output.

        Returns:
            Error dictionary with code, message, suggestion, and context
        """
        result = {
            "code": self.code.value,
            "message": self.message
        }

        if self.suggestion:
            result["suggestion"] = self.suggestion

        if self.context:
            result["context"] = self.context

        return result


class TransportError(SingleOutputError):
    """niri is unreachable or replied with something unexpected."""

    exit_code = 2

    def __init__(
        self,
        operation: str,
        reason: str,
        code: ErrorCode = ErrorCode.NIRI_IPC_FAILED,
        suggestion: Optional[str] = None
    ):
        """
        Initialize niri IPC error.

        Args:
            operation: IPC operation that failed (e.g., "Outputs", "Output eDP-1 On")
            reason: Reason for failure
            code: More specific error code
            suggestion: Recovery suggestion
        """
        super().__init__(
            code=code,
            message=f"niri IPC {operation} failed: {reason}",
            suggestion=suggestion or "Ensure niri is running and NIRI_SOCKET points to its socket",
            context={"operation": operation, "reason": reason}
        )


class EmptySnapshotError(SingleOutputError):
    """The compositor reported no outputs, so there is nothing to select."""

    exit_code = 3

    def __init__(self, operation: str):
        super().__init__(
            code=ErrorCode.NO_OUTPUTS,
            message=f"Cannot {operation}: niri reported no outputs",
            suggestion="Check `niri msg outputs` and connected displays",
            context={"operation": operation}
        )


class StateIOError(SingleOutputError):
    """State file could not be written."""

    exit_code = 4

    def __init__(self, file_path: str, reason: str):
        """
        Initialize state file error.

        Args:
            file_path: Path to the state file
            reason: Reason for write failure
        """
        super().__init__(
            code=ErrorCode.STATE_WRITE_ERROR,
            message=f"Failed to write state file {file_path}: {reason}",
            suggestion="Outputs were already switched; fix permissions and re-run to save the selection",
            context={"file_path": file_path, "reason": reason}
        )
