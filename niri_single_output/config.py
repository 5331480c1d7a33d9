"""Runtime path resolution for niri-single-output.

Handles locating the niri IPC socket and the state file that remembers the
last selected output.
"""

import logging
import os
from pathlib import Path
from typing import Mapping, Optional

from .errors import ErrorCode, TransportError

logger = logging.getLogger(__name__)

# Socket timeout for niri IPC requests (seconds)
IPC_TIMEOUT = 5.0

NIRI_SOCKET_ENV = "NIRI_SOCKET"

# State file lives at $XDG_STATE_HOME/niri/last-output
STATE_FILE_SUFFIX = Path("niri") / "last-output"


def default_state_file(environ: Optional[Mapping[str, str]] = None) -> Path:
    """Default state file location.

    Uses ``$XDG_STATE_HOME`` when set, otherwise ``$HOME/.local/state``.

    Args:
        environ: Environment mapping (defaults to os.environ)

    Returns:
        Path to the last-output state file
    """
    env = os.environ if environ is None else environ

    state_dir = env.get("XDG_STATE_HOME")
    if state_dir:
        base = Path(state_dir)
    else:
        home = env.get("HOME")
        base = Path(home) / ".local" / "state" if home else Path.home() / ".local" / "state"

    return base / STATE_FILE_SUFFIX


def resolve_socket_path(
    path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Path:
    """Resolve the niri IPC socket path.

    Args:
        path: Explicit socket path (takes precedence)
        environ: Environment mapping (defaults to os.environ)

    Returns:
        Socket path

    Raises:
        TransportError: If no path is given and NIRI_SOCKET is unset
    """
    if path is not None:
        return Path(path)

    env = os.environ if environ is None else environ
    socket_path = env.get(NIRI_SOCKET_ENV)
    if not socket_path:
        raise TransportError(
            "connect",
            f"{NIRI_SOCKET_ENV} is not set",
            code=ErrorCode.NIRI_NOT_RUNNING,
            suggestion="Run inside a niri session or pass --path",
        )

    logger.debug(f"Using niri socket from {NIRI_SOCKET_ENV}: {socket_path}")
    return Path(socket_path)
