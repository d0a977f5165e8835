"""Service package: report export and phrase loading."""

from .phrase_source import DEFAULT_TRIAL_PHRASES, load_phrases, phrases_or_default
from .report_exporter import ReportExporter, session_filename, trials_filename, write_report

__all__ = [
    "DEFAULT_TRIAL_PHRASES",
    "ReportExporter",
    "load_phrases",
    "phrases_or_default",
    "session_filename",
    "trials_filename",
    "write_report",
]
