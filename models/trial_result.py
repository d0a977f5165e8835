"""Result record of one completed or abandoned trial."""

from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from models.keystroke_log import KeystrokeEntry


class TrialResult(BaseModel):
    """Pydantic model for a finalized trial, including its keystroke log."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    trial_number: int = Field(..., ge=1, description="1-based position in the phrase list")
    target_text: str
    wpm: Optional[float] = None
    edit_distance: Optional[int] = Field(default=None, ge=0)
    session_start_ms: Optional[float] = None
    log: Tuple[KeystrokeEntry, ...] = ()
