"""Target phrase loading for trial runs."""

import logging
from pathlib import Path
from typing import List, Sequence, Union

from pydantic import TypeAdapter, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_TRIAL_PHRASES: tuple[str, ...] = (
    "She packed twelve blue pens in her small bag.",
    "Every bird sang sweet songs in the quiet dawn.",
    "They watched clouds drift across the golden sky.",
    "A clever mouse slipped past the sleepy cat.",
    "Green leaves danced gently in the warm breeze.",
    "He quickly wrote notes before the test began.",
    "The tall man wore boots made of soft leather.",
    "Old clocks ticked loudly in the silent room.",
)

_PHRASE_LIST = TypeAdapter(List[str])


def load_phrases(path: Union[str, Path]) -> List[str]:
    """Read a JSON array of phrases from path.

    Returns an empty list if the file is missing, unreadable, or not a JSON
    array of strings; the failure is logged.
    """
    try:
        raw = Path(path).read_text(encoding="utf-8")
        return _PHRASE_LIST.validate_json(raw)
    except (OSError, UnicodeDecodeError, ValidationError) as e:
        logger.error("Error loading phrases from %s: %s", path, e)
        return []


def phrases_or_default(phrases: Sequence[str]) -> List[str]:
    """Return phrases, or the built-in trial phrases when none were supplied."""
    return list(phrases) if phrases else list(DEFAULT_TRIAL_PHRASES)
