"""Digram/unigram frequency statistics for next-character prediction.

Counts are learned from every committed character and persisted through a
`KeyValueStore` after each observation. Storage is best-effort: read and write
failures are logged and leave the in-memory counts untouched, so prediction
degrades to the fallback order instead of failing.
"""

import logging
from typing import Dict, Optional, Tuple

from pydantic import BaseModel, Field, NonNegativeInt, ValidationError

from db.exceptions import StorageCorruptError, StorageError
from db.interfaces import KeyValueStore
from models.characters import normalize_char

logger = logging.getLogger(__name__)

STORAGE_KEY = "circular_text_entry_counts_v1"


class FrequencyCounts(BaseModel):
    """Persisted shape of the model: {"bi": {"<prev><next>": n}, "uni": {"<char>": n}}."""

    bi: Dict[str, NonNegativeInt] = Field(default_factory=dict)
    uni: Dict[str, NonNegativeInt] = Field(default_factory=dict)

    model_config = {"extra": "ignore"}


class FrequencyModel:
    """Owns digram and unigram counts and their persistence lifecycle."""

    def __init__(
        self, store: Optional[KeyValueStore] = None, storage_key: str = STORAGE_KEY
    ) -> None:
        """Initialize an empty model.

        Args:
            store: Backing key-value store. None keeps the model in memory only.
            storage_key: Key the serialized counts are stored under.
        """
        self.store = store
        self.storage_key = storage_key
        self._digrams: Dict[Tuple[str, str], int] = {}
        self._unigrams: Dict[str, int] = {}

    @property
    def digrams(self) -> Dict[Tuple[str, str], int]:
        """Copy of the digram table keyed by (prev_char, next_char)."""
        return dict(self._digrams)

    @property
    def unigrams(self) -> Dict[str, int]:
        """Copy of the unigram table keyed by character."""
        return dict(self._unigrams)

    def digram(self, prev_char: str, next_char: str) -> int:
        return self._digrams.get((prev_char, next_char), 0)

    def unigram(self, char: str) -> int:
        return self._unigrams.get(char, 0)

    def is_empty(self) -> bool:
        return not self._digrams and not self._unigrams

    def observe(self, prev_char: Optional[str], next_char: Optional[str]) -> None:
        """Record that next_char followed prev_char, then persist.

        Both characters are lower-cased; None or empty counts as a space.
        Increments exactly one unigram entry and one digram entry.
        """
        prev = normalize_char(prev_char)
        nxt = normalize_char(next_char)
        self._unigrams[nxt] = self._unigrams.get(nxt, 0) + 1
        self._digrams[(prev, nxt)] = self._digrams.get((prev, nxt), 0) + 1
        self.save()

    def observe_unigram(self, char: str) -> None:
        """Record a character that only contributes to the unigram table, then persist."""
        key = normalize_char(char)
        self._unigrams[key] = self._unigrams.get(key, 0) + 1
        self.save()

    def to_counts(self) -> FrequencyCounts:
        return FrequencyCounts(
            bi={prev + nxt: count for (prev, nxt), count in self._digrams.items()},
            uni=dict(self._unigrams),
        )

    def init_from(self, counts: FrequencyCounts) -> None:
        """Replace the in-memory tables with the given persisted counts."""
        self._digrams = {(key[:1], key[1:]): count for key, count in counts.bi.items() if key}
        self._unigrams = dict(counts.uni)

    def load(self) -> bool:
        """Restore counts from the store.

        Returns:
            True if counts were restored; False if the store is absent, the key
            is missing, or the stored data could not be read or decoded. The
            in-memory state is unchanged on False.
        """
        if self.store is None:
            return False
        try:
            raw = self.store.get(self.storage_key)
            if raw is None:
                logger.debug("No stored counts under '%s'", self.storage_key)
                return False
            counts = self._decode(raw)
        except (StorageError, OSError) as e:
            logger.warning("Could not load frequency counts, using fallback order: %s", e)
            return False
        self.init_from(counts)
        logger.debug(
            "Loaded %d digrams and %d unigrams", len(self._digrams), len(self._unigrams)
        )
        return True

    def save(self) -> bool:
        """Persist counts to the store. Returns False if the write failed."""
        if self.store is None:
            return False
        try:
            self.store.set(self.storage_key, self.to_counts().model_dump_json())
        except (StorageError, OSError) as e:
            logger.warning("Could not save frequency counts: %s", e)
            return False
        return True

    def _decode(self, raw: str) -> FrequencyCounts:
        try:
            return FrequencyCounts.model_validate_json(raw)
        except ValidationError as e:
            raise StorageCorruptError(f"Stored counts under '{self.storage_key}' are invalid") from e
