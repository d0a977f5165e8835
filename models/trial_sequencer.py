"""Multi-phrase trial runs: Idle -> Running(index) -> Complete.

The sequencer listens to an EntryEngine. Each insert that makes the buffer
equal the current phrase finalizes that trial; completing the last phrase
ends the run and exports every recorded trial. `advance()` moves on manually,
recording a partially typed phrase as an abandoned trial.
"""

from __future__ import annotations

import enum
import logging
from typing import Callable, List, Optional, Sequence, Set, Tuple

from helpers.debug_util import DebugUtil
from models.engine_config import EngineConfig
from models.entry_engine import EngineEvent, EngineSnapshot, EntryEngine
from models.trial_result import TrialResult
from services.phrase_source import load_phrases, phrases_or_default
from services.report_exporter import ReportExporter

logger = logging.getLogger(__name__)


class TrialPhase(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETE = "complete"


class TrialSequencer:
    """Sequences target phrases over one engine and aggregates per-trial results."""

    def __init__(
        self,
        engine: EntryEngine,
        phrases: Optional[Sequence[str]] = None,
        exporter: Optional[ReportExporter] = None,
        on_export: Optional[Callable[[str], None]] = None,
        debug_util: Optional[DebugUtil] = None,
    ) -> None:
        """
        Args:
            engine: Engine whose buffer is checked against the phrases.
            phrases: Ordered target phrases; None uses the built-in list.
            exporter: Report builder used when the run completes.
            on_export: Receives the multi-trial report text on completion.
            debug_util: Optional debug output sink.
        Raises:
            ValueError: If an explicitly supplied phrase list is empty.
        """
        if phrases is not None and len(phrases) == 0:
            raise ValueError("Trial phrase list must not be empty")
        self.engine = engine
        self.phrases: Tuple[str, ...] = tuple(phrases_or_default(phrases or ()))
        self.exporter = exporter or ReportExporter()
        self.on_export = on_export
        self.debug_util = debug_util
        self.last_report: Optional[str] = None
        self._phase = TrialPhase.IDLE
        self._index = 0
        self._results: List[TrialResult] = []
        self._finalized: Set[int] = set()
        engine.add_listener(self._on_engine_event)

    @classmethod
    def from_config(
        cls,
        engine: EntryEngine,
        config: EngineConfig,
        on_export: Optional[Callable[[str], None]] = None,
        debug_util: Optional[DebugUtil] = None,
    ) -> "TrialSequencer":
        """Build a sequencer over the phrases file named in config, or the defaults."""
        phrases = load_phrases(config.phrases_path) if config.phrases_path else []
        return cls(
            engine, phrases_or_default(phrases), on_export=on_export, debug_util=debug_util
        )

    @property
    def phase(self) -> TrialPhase:
        return self._phase

    @property
    def current_index(self) -> int:
        return self._index

    @property
    def results(self) -> Tuple[TrialResult, ...]:
        return tuple(self._results)

    @property
    def is_last(self) -> bool:
        return self._index >= len(self.phrases) - 1

    def start(self) -> None:
        """Begin a run at the first phrase, discarding earlier results."""
        self._results.clear()
        self._finalized.clear()
        self.last_report = None
        self._index = 0
        self._phase = TrialPhase.RUNNING
        self._load_phrase()
        self._debug("started", len(self.phrases), "trials")

    def restart(self) -> None:
        self.start()

    def advance(self) -> None:
        """Move to the next phrase, or finish the run when on the last one.

        A non-empty buffer is recorded as the current trial's result unless
        that trial was already finalized. Does nothing unless running.
        """
        if self._phase is not TrialPhase.RUNNING:
            return
        if self.engine.state.typed_text:
            self.finalize_current()
        if self.is_last:
            self._complete()
            return
        self._index += 1
        self._load_phrase()

    def finalize_current(self) -> bool:
        """Record the current trial's result once. Returns False if already recorded."""
        if self._index in self._finalized:
            return False
        metrics = self.engine.metrics
        result = TrialResult(
            trial_number=self._index + 1,
            target_text=self.phrases[self._index],
            wpm=metrics.wpm(),
            edit_distance=metrics.current_edit_distance(),
            session_start_ms=metrics.session_start,
            log=self.engine.log.snapshot(),
        )
        self._results.append(result)
        self._finalized.add(self._index)
        self._debug("finalized trial", result.trial_number, "wpm", result.wpm)
        return True

    def counter_text(self) -> str:
        if self._phase is TrialPhase.RUNNING:
            return f"Trial {self._index + 1} of {len(self.phrases)}"
        if self._phase is TrialPhase.COMPLETE:
            return "All trials complete!"
        return ""

    def advance_label(self) -> str:
        return "Finish" if self.is_last else "Next Trial"

    def _on_engine_event(self, event: EngineEvent, snapshot: EngineSnapshot) -> None:
        if self._phase is not TrialPhase.RUNNING or event != "insert":
            return
        if snapshot.typed_text != self.phrases[self._index]:
            return
        self.finalize_current()
        if self.is_last:
            self._complete()

    def _load_phrase(self) -> None:
        self.engine.submit_reset()
        self.engine.set_target(self.phrases[self._index])

    def _complete(self) -> None:
        self._phase = TrialPhase.COMPLETE
        self.last_report = self.exporter.trials_report(self._results, len(self.phrases))
        logger.info("Trial run complete with %d recorded trials", len(self._results))
        if self.on_export is not None:
            self.on_export(self.last_report)

    def _debug(self, *args: object) -> None:
        if self.debug_util is not None:
            self.debug_util.debugMessage("TrialSequencer", *args)
