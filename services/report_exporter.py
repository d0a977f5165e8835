"""
Report exporter for session and trial keystroke logs.

Produces comma-delimited text in two layouts:
- Single session: summary rows, a blank row, a column header, a synthetic
  start row and one row per logged event.
- Multi-trial: a banner followed by one single-session block per trial.

Quoting follows the csv module's minimal quoting, so any field holding a
comma, quote or newline is double-quoted with inner quotes doubled.
"""

from __future__ import annotations

import csv
import io
import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Sequence, Union

from models.edit_distance import levenshtein_distance
from models.keystroke_log import KeystrokeEntry
from models.trial_result import TrialResult

logger = logging.getLogger(__name__)

Row = List[object]

COLUMN_HEADER: Row = ["index", "type", "value", "timestamp_s", "text_after", "msd"]
TRIALS_BANNER = "Trial System Results"


class ReportExporter:
    """Serializes keystroke logs and metrics into delimited text reports."""

    def session_report(
        self,
        target_text: str,
        wpm: Optional[float],
        edit_distance: Optional[int],
        log: Sequence[KeystrokeEntry],
        session_start_ms: Optional[float] = None,
    ) -> str:
        """Build the report for a single text-entry session."""
        rows = self._session_rows(target_text, wpm, edit_distance, log, session_start_ms)
        return self._to_text(rows)

    def trials_report(self, results: Sequence[TrialResult], total_trials: int) -> str:
        """Build the report for a multi-trial run.

        Args:
            results: Finalized trials in the order they were recorded.
            total_trials: Number of phrases in the run, including unfinished ones.
        """
        rows: List[Row] = [[TRIALS_BANNER], ["Total Trials", total_trials], []]
        for result in results:
            rows.append([f"Trial {result.trial_number}"])
            rows.extend(
                self._session_rows(
                    result.target_text,
                    result.wpm,
                    result.edit_distance,
                    result.log,
                    result.session_start_ms,
                )
            )
            rows.append([])
        logger.debug("Built trials report with %d of %d trials", len(results), total_trials)
        return self._to_text(rows)

    def _session_rows(
        self,
        target_text: str,
        wpm: Optional[float],
        edit_distance: Optional[int],
        log: Sequence[KeystrokeEntry],
        session_start_ms: Optional[float],
    ) -> List[Row]:
        rows: List[Row] = [
            ["target_phrase", target_text or ""],
            ["wpm", f"{wpm:.2f}" if wpm else ""],
            ["msd", edit_distance if edit_distance is not None else ""],
            [],
            list(COLUMN_HEADER),
            [0, "start", "", "0.000", "", self._msd(target_text, "")],
        ]
        origin = self._origin(log, session_start_ms)
        for idx, entry in enumerate(log, start=1):
            rows.append(
                [
                    idx,
                    entry.kind,
                    entry.char,
                    f"{(entry.timestamp_ms - origin) / 1000:.3f}",
                    entry.text_after,
                    self._msd(target_text, entry.text_after),
                ]
            )
        return rows

    @staticmethod
    def _origin(log: Sequence[KeystrokeEntry], session_start_ms: Optional[float]) -> float:
        if session_start_ms is not None:
            return session_start_ms
        if log:
            return log[0].timestamp_ms
        return 0.0

    @staticmethod
    def _msd(target_text: str, text: str) -> Union[int, str]:
        if not target_text:
            return ""
        return levenshtein_distance(target_text, text)

    @staticmethod
    def _to_text(rows: Sequence[Row]) -> str:
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n", quoting=csv.QUOTE_MINIMAL)
        writer.writerows(rows)
        return buffer.getvalue()


def _timestamp_slug(now: Optional[datetime]) -> str:
    moment = now or datetime.now(timezone.utc)
    return re.sub(r"[:.]", "-", moment.isoformat())


def session_filename(target_text: str, now: Optional[datetime] = None) -> str:
    """File name for a single-session report, e.g. entry-log-hello-world-<ts>.csv."""
    slug = re.sub(r"[^a-z0-9]+", "-", (target_text or "target").lower()).strip("-")
    return f"entry-log-{slug or 'target'}-{_timestamp_slug(now)}.csv"


def trials_filename(now: Optional[datetime] = None) -> str:
    """File name for a multi-trial report, e.g. trial-results-<ts>.csv."""
    return f"trial-results-{_timestamp_slug(now)}.csv"


def write_report(path: Union[str, Path], report: str) -> Path:
    """Write a report to path as UTF-8 and return the path written."""
    target = Path(path)
    target.write_text(report, encoding="utf-8")
    logger.info("Wrote report to %s", target)
    return target
