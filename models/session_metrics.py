"""Speed (WPM) and accuracy (MSD) metrics for the active entry buffer."""

import time
from typing import Callable, Optional

from models.edit_distance import levenshtein_distance
from models.engine_state import EngineState

Clock = Callable[[], float]

CHARS_PER_WORD = 5.0
MS_PER_MINUTE = 60000.0


def monotonic_ms() -> float:
    """Milliseconds since an arbitrary monotonic origin."""
    return time.monotonic() * 1000.0


class SessionMetrics:
    """Tracks session timestamps and derives words-per-minute and edit distance.

    `session_start` is set on the first input of a non-empty buffer and
    cleared whenever the buffer becomes empty. `session_end` is set only by a
    terminal character and is not overwritten until the session resets or the
    terminal character is deleted.
    """

    def __init__(self, state: EngineState, clock: Clock = monotonic_ms) -> None:
        self.state = state
        self.clock = clock
        self.session_start: Optional[float] = None
        self.last_input_time: Optional[float] = None
        self.session_end: Optional[float] = None

    def reset(self) -> None:
        self.session_start = None
        self.last_input_time = None
        self.session_end = None

    def clear_end(self) -> None:
        self.session_end = None

    def on_input(self, is_terminal: bool = False, now: Optional[float] = None) -> None:
        """Update timestamps after the buffer changed.

        now defaults to a fresh clock reading.
        """
        if not self.state.typed_text:
            self.reset()
            return
        if now is None:
            now = self.clock()
        if self.session_start is None:
            self.session_start = now
        self.last_input_time = now
        if is_terminal and self.session_end is None:
            self.session_end = now

    def wpm(self) -> Optional[float]:
        """Words per minute using the five-characters-per-word convention.

        Returns None when no input has been timed yet, the buffer is empty, or
        no time has elapsed.
        """
        if self.session_start is None or self.last_input_time is None:
            return None
        if not self.state.typed_text:
            return None
        end_time = self.session_end if self.session_end is not None else self.last_input_time
        elapsed_minutes = (end_time - self.session_start) / MS_PER_MINUTE
        if elapsed_minutes <= 0:
            return None
        return (len(self.state.typed_text) / CHARS_PER_WORD) / elapsed_minutes

    def current_edit_distance(self) -> Optional[int]:
        """Edit distance between the target and the buffer; None without a target."""
        return self.edit_distance_for(self.state.typed_text)

    def edit_distance_for(self, text: str) -> Optional[int]:
        if not self.state.target_text:
            return None
        return levenshtein_distance(self.state.target_text, text)
