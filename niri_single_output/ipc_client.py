"""
niri IPC client.

Talks to niri over its Unix socket using newline-delimited JSON. Every
request opens a fresh connection, writes one request line, half-closes the
socket and reads one reply line.
"""

import json
import logging
import socket
from pathlib import Path
from typing import Any, Optional, Protocol

from pydantic import ValidationError

from .config import IPC_TIMEOUT, resolve_socket_path
from .errors import ErrorCode, TransportError
from .models import ActivationCommand, OutputAction, OutputSnapshot

logger = logging.getLogger(__name__)


class OutputProvider(Protocol):
    """Query/command capability over the compositor's outputs."""

    def get_snapshot(self) -> OutputSnapshot:
        ...

    def set_output(self, name: str, action: OutputAction) -> None:
        ...


class NiriClient:
    """Blocking JSON client for the niri IPC socket."""

    def __init__(self, socket_path: Optional[Path] = None, timeout: float = IPC_TIMEOUT):
        """
        Initialize niri client.

        Args:
            socket_path: Path to niri socket (default: $NIRI_SOCKET)
            timeout: Per-request socket timeout in seconds

        Raises:
            TransportError: If no socket path can be resolved
        """
        self.socket_path = resolve_socket_path(socket_path)
        self.timeout = timeout

    def _connect(self, operation: str) -> socket.socket:
        sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        sock.settimeout(self.timeout)
        try:
            sock.connect(str(self.socket_path))
        except FileNotFoundError:
            sock.close()
            raise TransportError(
                operation,
                f"socket not found: {self.socket_path}",
                code=ErrorCode.NIRI_NOT_RUNNING,
            )
        except OSError as e:
            sock.close()
            raise TransportError(operation, f"cannot connect to {self.socket_path}: {e}",
                                 code=ErrorCode.NIRI_NOT_RUNNING)
        return sock

    def ping(self) -> None:
        """
        Check that niri accepts connections on its socket.

        Raises:
            TransportError: If the socket is unavailable
        """
        self._connect("connect").close()
        logger.debug(f"niri socket {self.socket_path} is available")

    def request(self, payload: Any, operation: str) -> Any:
        """
        Send one request and return the ``Ok`` payload of the reply.

        Args:
            payload: JSON-serializable request
            operation: Operation name for error messages

        Returns:
            Contents of the reply's ``Ok`` field

        Raises:
            TransportError: On connection failure, timeout, malformed reply or ``Err`` reply
        """
        sock = self._connect(operation)
        try:
            sock.sendall(json.dumps(payload).encode() + b"\n")
            sock.shutdown(socket.SHUT_WR)

            response_data = b""
            while True:
                chunk = sock.recv(4096)
                if not chunk:
                    break
                response_data += chunk
                if b"\n" in chunk:
                    break
        except socket.timeout:
            raise TransportError(operation, f"timed out after {self.timeout}s")
        except OSError as e:
            raise TransportError(operation, str(e))
        finally:
            sock.close()

        line = response_data.split(b"\n", 1)[0]
        if not line:
            raise TransportError(operation, "connection closed without a reply",
                                 code=ErrorCode.NIRI_UNEXPECTED_REPLY)

        try:
            reply = json.loads(line.decode())
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise TransportError(operation, f"invalid JSON reply: {e}",
                                 code=ErrorCode.NIRI_UNEXPECTED_REPLY)

        if isinstance(reply, dict) and "Err" in reply:
            raise TransportError(operation, f"niri returned error: {reply['Err']}")
        if not isinstance(reply, dict) or "Ok" not in reply:
            raise TransportError(operation, f"unexpected reply: {reply!r}",
                                 code=ErrorCode.NIRI_UNEXPECTED_REPLY)

        return reply["Ok"]

    def get_snapshot(self) -> OutputSnapshot:
        """
        Query niri for all outputs.

        Returns:
            OutputSnapshot of the current outputs

        Raises:
            TransportError: If niri is unreachable or the reply is not an Outputs response
        """
        result = self.request("Outputs", "Outputs")

        if not isinstance(result, dict) or "Outputs" not in result:
            raise TransportError("Outputs", f"unexpected response type: {result!r}",
                                 code=ErrorCode.NIRI_UNEXPECTED_REPLY)

        try:
            snapshot = OutputSnapshot.from_niri_reply(result["Outputs"])
        except (ValueError, ValidationError) as e:
            raise TransportError("Outputs", f"malformed outputs: {e}",
                                 code=ErrorCode.NIRI_UNEXPECTED_REPLY)

        logger.debug(
            f"niri outputs: {[(o.name, o.is_active) for o in snapshot.ordered()]}"
        )
        return snapshot

    def set_output(self, name: str, action: OutputAction) -> None:
        """
        Switch a single output on or off.

        Raises:
            TransportError: If the command fails
        """
        command = ActivationCommand(target_name=name, desired_state=action)
        self.request(
            command.to_request(),
            f"Output {name} {action.value}",
        )
