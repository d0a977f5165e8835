"""Switchable debug output for the entry engine and trial sequencer.

Quiet mode routes messages to the ``DebugUtil`` logger (one child logger per
component), loud mode prints them to stdout with a ``[DEBUG]`` tag.
"""

import logging
import os
from typing import Optional

DEBUG_MODE_ENV_VAR = "CIRCULAR_ENTRY_DEBUG_MODE"
VALID_MODES = ("quiet", "loud")


class DebugUtil:
    """Manage debug output based on debug mode setting.

    Supports two modes:
    - "quiet": Debug messages are logged only
    - "loud": Debug messages are printed to stdout
    """

    def __init__(self, mode: Optional[str] = None) -> None:
        """Initialize the mode from `mode` or CIRCULAR_ENTRY_DEBUG_MODE.

        Anything other than "quiet" or "loud" falls back to "quiet".
        """
        if mode is None:
            mode = os.environ.get(DEBUG_MODE_ENV_VAR, "quiet")
        self.set_mode(mode)

        self._logger = logging.getLogger(self.__class__.__name__)
        if not self._logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
            handler.setFormatter(formatter)
            self._logger.addHandler(handler)
            self._logger.setLevel(logging.DEBUG)

    def debug_mode(self) -> str:
        """Get the current debug mode ("quiet" or "loud")."""
        return self._mode

    def debugMessage(self, component: str, *args: object) -> None:
        """Output a debug message tagged with the emitting component.

        In "loud" mode the message is printed as ``[DEBUG] <component>: ...``.
        In "quiet" mode it goes to the ``DebugUtil.<component>`` logger.
        """
        message = " ".join(str(arg) for arg in args)
        if self._mode == "loud":
            print(f"[DEBUG] {component}: {message}")
        elif message:
            self._logger.getChild(component).debug(message)

    def set_mode(self, mode: str) -> None:
        """Change the debug mode. Invalid values default to "quiet"."""
        self._mode = mode.lower() if mode.lower() in VALID_MODES else "quiet"

    def is_loud(self) -> bool:
        return self._mode == "loud"

    def is_quiet(self) -> bool:
        return self._mode == "quiet"
