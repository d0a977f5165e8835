"""Mutable state of one text-entry session."""

from typing import List

from pydantic import BaseModel, ConfigDict

from models.characters import START_MARKER


class HistorySnapshot(BaseModel):
    """State captured before an insertion so it can be undone in one step."""

    model_config = ConfigDict(frozen=True)

    current_char: str
    typed_text: str


class EngineState:
    """Owned session state shared by the metrics, log and entry engine.

    Holds the entry buffer, the most recently committed character, the undo
    stack, the target phrase and the display modes. `reset()` returns
    everything except the target phrase to its initial values.
    """

    def __init__(self, target_text: str = "") -> None:
        self.target_text = target_text
        self.typed_text = ""
        self.current_char = START_MARKER
        self.history: List[HistorySnapshot] = []
        self.is_uppercase = False
        self.is_numbers_mode = False
        self.initial_full_ring = True

    def reset(self) -> None:
        self.typed_text = ""
        self.current_char = START_MARKER
        self.history.clear()
        self.is_uppercase = False
        self.is_numbers_mode = False
        self.initial_full_ring = True

    def push_history(self) -> None:
        self.history.append(
            HistorySnapshot(current_char=self.current_char, typed_text=self.typed_text)
        )

    def pop_history(self) -> bool:
        """Restore the most recent snapshot. Returns False when there is nothing to undo."""
        if not self.history:
            return False
        snapshot = self.history.pop()
        self.current_char = snapshot.current_char
        self.typed_text = snapshot.typed_text
        return True
