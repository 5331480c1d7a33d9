"""niri single-output switching.

Keeps exactly one niri output switched on and remembers it across restarts.
"""

__version__ = "0.1.0"
