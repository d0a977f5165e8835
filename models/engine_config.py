"""Engine configuration.

Values default to the widget's built-in behaviour and can be overridden from
CIRCULAR_ENTRY_* environment variables.
"""

from __future__ import annotations

import os
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator

from models.frequency_model import STORAGE_KEY

ENV_PREFIX = "CIRCULAR_ENTRY_"


class EngineConfig(BaseModel):
    """Validated settings for building an EntryEngine.

    Attributes:
        candidate_count: Maximum number of characters on the prediction ring.
        storage_key: Key the frequency counts are persisted under.
        storage_path: SQLite file for persisted counts; None keeps them in memory.
        phrases_path: JSON file with the trial phrase list; None uses the defaults.
        terminal_chars: Characters that mark the end of a session for WPM timing.
    """

    candidate_count: int = Field(default=6, ge=1)
    storage_key: str = Field(default=STORAGE_KEY, min_length=1)
    storage_path: Optional[str] = None
    phrases_path: Optional[str] = None
    terminal_chars: str = ".!?"

    model_config = {
        "extra": "forbid",
        "validate_assignment": True,
    }

    @field_validator("storage_path", "phrases_path")
    @classmethod
    def blank_path_is_none(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            return None
        return v

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> "EngineConfig":
        """Build a config from CIRCULAR_ENTRY_* variables, ignoring unset ones.

        Raises:
            pydantic.ValidationError: If a variable holds an invalid value.
        """
        env = os.environ if environ is None else environ
        data: Dict[str, Any] = {}
        for name in cls.model_fields:
            value = env.get(ENV_PREFIX + name.upper())
            if value is not None:
                data[name] = value
        return cls.model_validate(data)
