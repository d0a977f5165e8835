"""Ranks the most likely next characters for the prediction ring."""

import logging
from typing import List, Optional

from models.characters import ALPHABET, SPACE, SPACE_AFTER_PUNCTUATION, is_letter, normalize_char
from models.frequency_model import FrequencyModel

logger = logging.getLogger(__name__)

DEFAULT_CANDIDATE_COUNT = 6
DEFAULT_STARTERS = ("t", "a", "s", "i", "o", "h")
DEFAULT_UNIGRAM_ORDER = "etaoinshrdlcumwfgypbvkjxqz"
UNIGRAM_WEIGHT = 0.1


class CandidateRanker:
    """
    Produces an ordered list of up to k distinct candidate characters.

    Ranking decides which letters make the cut; the returned letters are always
    in alphabetical order so their positions on the ring stay stable between
    predictions. A space, when offered, is always the first element.
    """

    def __init__(self, model: FrequencyModel, k: int = DEFAULT_CANDIDATE_COUNT) -> None:
        """
        Args:
            model: Frequency statistics to rank from.
            k: Default maximum number of candidates returned.
        Raises:
            ValueError: If k is less than 1.
        """
        if k < 1:
            raise ValueError(f"k must be at least 1, got {k}")
        self.model = model
        self.k = k

    def rank(self, prev_char: Optional[str], k: Optional[int] = None) -> List[str]:
        """
        Return up to k candidates for the character following prev_char.

        Never includes anything outside the alphabet and space, and never
        returns duplicates.
        """
        k = self.k if k is None else k
        if k < 1:
            raise ValueError(f"k must be at least 1, got {k}")
        prev = normalize_char(prev_char)
        allow_space = is_letter(prev) or prev in SPACE_AFTER_PUNCTUATION

        scores = [
            (c, self.model.digram(prev, c) + UNIGRAM_WEIGHT * self.model.unigram(c))
            for c in ALPHABET
        ]
        if all(score == 0 for _, score in scores):
            if prev == SPACE:
                # Empty model only: a word start offers the space slot plus
                # k-1 starters. Once any count exists this context ranks
                # letters like any other and the space slot is dropped.
                return self._finalize(list(DEFAULT_STARTERS[: k - 1]), with_space=True)
            letters = self._fallback_letters(prev, k - 1 if allow_space else k)
        else:
            take = k - 1 if allow_space else k
            ranked = sorted(scores, key=lambda item: -item[1])
            letters = [c for c, _ in ranked[:take]]
            if is_letter(prev) and prev not in letters:
                letters = [prev] + letters
                letters = letters[:take]
        return self._finalize(letters, with_space=allow_space)

    def _fallback_letters(self, prev: str, take: int) -> List[str]:
        order = list(DEFAULT_UNIGRAM_ORDER)
        if is_letter(prev):
            order = [prev] + [c for c in order if c != prev]
        return order[:take]

    @staticmethod
    def _finalize(letters: List[str], with_space: bool) -> List[str]:
        unique = sorted({c for c in letters if is_letter(c)})
        return [SPACE] + unique if with_space else unique
