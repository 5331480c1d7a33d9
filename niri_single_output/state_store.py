"""Persistence of the last selected output.

The state file holds exactly the UTF-8 name of the output that was last
switched on, with no trailing newline. It is absent on first run.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from .config import default_state_file
from .errors import StateIOError

logger = logging.getLogger(__name__)


class StateStore:
    """Reads and writes the last-output state file."""

    def __init__(self, path: Optional[Path] = None):
        """Initialize state store.

        Args:
            path: Optional custom path (defaults to $XDG_STATE_HOME/niri/last-output)
        """
        self.path = Path(path) if path is not None else default_state_file()

    def read(self) -> Optional[str]:
        """Return the persisted output name.

        A missing, empty, unreadable or non-UTF-8 file counts as "no prior
        state" and returns None.
        """
        try:
            content = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug(f"State file not found: {self.path}")
            return None
        except UnicodeDecodeError as e:
            logger.warning(f"State file {self.path} is not valid UTF-8, ignoring: {e}")
            return None
        except OSError as e:
            logger.warning(f"Failed to read state file {self.path}, ignoring: {e}")
            return None

        if not content:
            return None

        logger.debug(f"Last output from {self.path}: {content}")
        return content

    def write(self, name: str) -> None:
        """Persist ``name`` as the last selected output.

        Creates parent directories and replaces the file through a temporary
        file in the same directory, so the state file is never half-written.

        Raises:
            StateIOError: If the directory or file cannot be written
        """
        tmp_path = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)

            fd, tmp_path = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(name)
                f.flush()
                os.fsync(f.fileno())

            os.replace(tmp_path, self.path)
            tmp_path = None
        except OSError as e:
            raise StateIOError(str(self.path), str(e)) from e
        finally:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.unlink(tmp_path)

        logger.debug(f"Saved last output {name} to {self.path}")
