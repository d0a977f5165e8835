"""Command interface for circular text entry.

The rendering layer calls `submit_char`, `submit_delete` and `submit_reset`
and subscribes to state changes through `add_listener`; the engine never
calls into rendering. Every command runs to completion before returning.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from db.interfaces import KeyValueStore
from db.key_value_store import InMemoryKeyValueStore, SQLiteKeyValueStore
from helpers.debug_util import DebugUtil
from models.candidate_ranker import CandidateRanker
from models.characters import ALPHABET, DIGITS, SPACE, SYMBOLS, is_letter
from models.engine_config import EngineConfig
from models.engine_state import EngineState
from models.frequency_model import FrequencyModel
from models.keystroke_log import KeystrokeLog
from models.session_metrics import Clock, SessionMetrics, monotonic_ms
from services.report_exporter import ReportExporter

logger = logging.getLogger(__name__)

EngineEvent = Literal["insert", "delete", "reset", "target", "mode"]


class EngineSnapshot(BaseModel):
    """Read-only view of the engine after a command."""

    model_config = ConfigDict(frozen=True)

    typed_text: str
    current_char: str
    target_text: str
    candidates: Tuple[str, ...]
    wpm: Optional[float]
    edit_distance: Optional[int]
    is_uppercase: bool
    is_numbers_mode: bool
    initial_full_ring: bool


Listener = Callable[[EngineEvent, EngineSnapshot], None]


class EntryEngine:
    """Owns one session's state and routes entry commands to the components."""

    def __init__(
        self,
        model: Optional[FrequencyModel] = None,
        ranker: Optional[CandidateRanker] = None,
        clock: Clock = monotonic_ms,
        terminal_chars: str = ".!?",
        debug_util: Optional[DebugUtil] = None,
    ) -> None:
        """Initialize the engine with an empty buffer.

        Args:
            model: Frequency statistics; defaults to an in-memory model.
            ranker: Candidate ranker; defaults to one over `model`.
            clock: Millisecond clock shared by metrics and the keystroke log.
            terminal_chars: Characters that end timing for the session.
            debug_util: Optional debug output sink.
        """
        self.model = model or FrequencyModel()
        self.ranker = ranker or CandidateRanker(self.model)
        self.terminal_chars = terminal_chars
        self.debug_util = debug_util
        self.clock = clock
        self.state = EngineState()
        self.metrics = SessionMetrics(self.state, clock)
        self.log = KeystrokeLog(self.state, clock)
        self._listeners: List[Listener] = []

    @classmethod
    def from_config(
        cls,
        config: EngineConfig,
        clock: Clock = monotonic_ms,
        debug_util: Optional[DebugUtil] = None,
    ) -> "EntryEngine":
        """Wire store, model and ranker from config and load persisted counts."""
        store: KeyValueStore
        if config.storage_path:
            store = SQLiteKeyValueStore(config.storage_path)
        else:
            store = InMemoryKeyValueStore()
        model = FrequencyModel(store, storage_key=config.storage_key)
        model.load()
        ranker = CandidateRanker(model, k=config.candidate_count)
        return cls(
            model=model,
            ranker=ranker,
            clock=clock,
            terminal_chars=config.terminal_chars,
            debug_util=debug_util,
        )

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def submit_char(self, char: str) -> EngineSnapshot:
        """Append one character to the buffer and learn from it.

        Raises:
            ValueError: If char is not exactly one character.
        """
        if len(char) != 1:
            raise ValueError(f"Expected a single character, got {char!r}")
        state = self.state
        state.push_history()
        prev_char = state.typed_text[-1] if state.typed_text else SPACE
        lowered = char.lower()

        if is_letter(lowered):
            added = lowered.upper() if state.is_uppercase else char
            self.model.observe(prev_char, lowered)
        elif char == SPACE:
            added = char
            self.model.observe(prev_char, char)
        else:
            added = char
            self.model.observe_unigram(char)
        state.typed_text += added
        state.current_char = lowered
        state.initial_full_ring = False

        now = self.clock()
        self.log.append("insert", added, now)
        state.is_uppercase = False
        self.metrics.on_input(is_terminal=char in self.terminal_chars, now=now)
        self._debug("insert", repr(added), "->", repr(state.typed_text))
        return self._notify("insert")

    def submit_space(self) -> EngineSnapshot:
        return self.submit_char(SPACE)

    def submit_period(self) -> EngineSnapshot:
        return self.submit_char(".")

    def submit_delete(self) -> EngineSnapshot:
        """Undo the most recent insertion. A no-op when there is nothing to undo."""
        state = self.state
        if not state.history:
            return self.snapshot()
        removed = state.typed_text[-1:]
        state.pop_history()
        self.metrics.clear_end()
        now = self.clock()
        self.log.append("delete", removed, now)
        self.metrics.on_input(now=now)
        self._debug("delete", repr(removed), "->", repr(state.typed_text))
        return self._notify("delete")

    def submit_reset(self) -> EngineSnapshot:
        """Clear the buffer, undo history, log, timestamps and display modes."""
        self.state.reset()
        self.log.clear()
        self.metrics.reset()
        self._debug("reset")
        return self._notify("reset")

    def set_target(self, text: str) -> EngineSnapshot:
        self.state.target_text = text or ""
        return self._notify("target")

    def toggle_shift(self) -> EngineSnapshot:
        self.state.is_uppercase = not self.state.is_uppercase
        return self._notify("mode")

    def toggle_numbers(self) -> EngineSnapshot:
        self.state.is_numbers_mode = not self.state.is_numbers_mode
        return self._notify("mode")

    def candidates(self) -> List[str]:
        return self.ranker.rank(self.state.current_char)

    def ring_characters(self) -> List[str]:
        """Characters on the outer ring: digits and symbols in numbers mode, else letters."""
        if self.state.is_numbers_mode:
            return list(DIGITS + SYMBOLS)
        return list(ALPHABET)

    def snapshot(self) -> EngineSnapshot:
        state = self.state
        return EngineSnapshot(
            typed_text=state.typed_text,
            current_char=state.current_char,
            target_text=state.target_text,
            candidates=tuple(self.candidates()),
            wpm=self.metrics.wpm(),
            edit_distance=self.metrics.current_edit_distance(),
            is_uppercase=state.is_uppercase,
            is_numbers_mode=state.is_numbers_mode,
            initial_full_ring=state.initial_full_ring,
        )

    def session_report(self, exporter: Optional[ReportExporter] = None) -> str:
        """Delimited report of the current session's log and metrics."""
        exporter = exporter or ReportExporter()
        return exporter.session_report(
            target_text=self.state.target_text,
            wpm=self.metrics.wpm(),
            edit_distance=self.metrics.current_edit_distance(),
            log=self.log.snapshot(),
            session_start_ms=self.metrics.session_start,
        )

    def _notify(self, event: EngineEvent) -> EngineSnapshot:
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            listener(event, snapshot)
        return snapshot

    def _debug(self, *args: object) -> None:
        if self.debug_util is not None:
            self.debug_util.debugMessage("EntryEngine", *args)
