"""Append-only, timestamped record of insert and delete events."""

from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from models.engine_state import EngineState
from models.session_metrics import Clock, monotonic_ms

EntryKind = Literal["insert", "delete"]


class KeystrokeEntry(BaseModel):
    """One logged event and the buffer content it produced."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: EntryKind
    char: str
    timestamp_ms: float
    text_after: str = Field(default="", description="Buffer content after the event")


class KeystrokeLog:
    """Collection of KeystrokeEntry objects for one text-entry session."""

    def __init__(self, state: EngineState, clock: Clock = monotonic_ms) -> None:
        self.state = state
        self.clock = clock
        self._entries: List[KeystrokeEntry] = []

    def append(
        self, kind: EntryKind, char: str, timestamp_ms: Optional[float] = None
    ) -> KeystrokeEntry:
        """Stamp the post-event buffer content and a time onto a new entry.

        timestamp_ms defaults to a fresh clock reading.
        """
        entry = KeystrokeEntry(
            kind=kind,
            char=char,
            timestamp_ms=self.clock() if timestamp_ms is None else timestamp_ms,
            text_after=self.state.typed_text,
        )
        self._entries.append(entry)
        return entry

    def snapshot(self) -> Tuple[KeystrokeEntry, ...]:
        """Immutable copy of the log for trial results and export."""
        return tuple(self._entries)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
