"""Tests for CandidateRanker."""

from typing import List

import pytest

from models.candidate_ranker import DEFAULT_STARTERS, CandidateRanker
from models.characters import ALPHABET
from models.frequency_model import FrequencyModel


@pytest.fixture
def ranker(model: FrequencyModel) -> CandidateRanker:
    return CandidateRanker(model)


def _assert_well_formed(result: List[str], k: int) -> None:
    assert 1 <= len(result) <= k
    assert len(set(result)) == len(result)
    letters = result[1:] if result and result[0] == " " else result
    assert letters == sorted(letters)
    assert all(c in ALPHABET for c in letters)


class TestFallbackRanking:
    """Rankings produced before any statistics exist."""

    def test_space_on_empty_model(self, ranker: CandidateRanker) -> None:
        result = ranker.rank(" ")
        assert result[0] == " "
        assert len(result) <= 6
        assert set(result[1:]) == set(DEFAULT_STARTERS[:5])
        assert result == [" ", "a", "i", "o", "s", "t"]

    def test_letter_forces_repeat_option(self, ranker: CandidateRanker) -> None:
        assert ranker.rank("z") == [" ", "a", "e", "o", "t", "z"]

    def test_letter_already_in_fallback_order(self, ranker: CandidateRanker) -> None:
        assert ranker.rank("a") == [" ", "a", "e", "i", "o", "t"]

    def test_punctuation_allows_space(self, ranker: CandidateRanker) -> None:
        assert ranker.rank(".") == [" ", "a", "e", "i", "o", "t"]

    def test_digit_gets_full_letter_set(self, ranker: CandidateRanker) -> None:
        assert ranker.rank("5") == ["a", "e", "i", "n", "o", "t"]

    @pytest.mark.parametrize("prev", [None, ""])
    def test_missing_prev_treated_as_space(self, ranker: CandidateRanker, prev: None) -> None:
        assert ranker.rank(prev) == ranker.rank(" ")


class TestScoredRanking:
    """Rankings driven by observed statistics."""

    def test_membership_by_score_and_forced_repeat(self, model: FrequencyModel) -> None:
        for _ in range(3):
            model.observe("t", "h")
        for _ in range(2):
            model.observe("t", "e")
        model.observe("t", "o")
        # h, e, o win on score, a and b fill by alphabet order, t is forced in.
        assert CandidateRanker(model).rank("t") == [" ", "a", "e", "h", "o", "t"]

    def test_digram_dominates_unigram(self, model: FrequencyModel) -> None:
        for _ in range(5):
            model.observe("x", "a")
        model.observe("1", "b")
        ranker = CandidateRanker(model)
        assert ranker.rank("1", k=1) == ["b"]
        assert ranker.rank("1", k=2) == ["a", "b"]

    def test_space_context_with_statistics_has_no_space(self, model: FrequencyModel) -> None:
        model.observe(" ", "t")
        assert CandidateRanker(model).rank(" ") == ["a", "b", "c", "d", "e", "t"]

    def test_space_slot_dropped_after_first_observation(self, model: FrequencyModel) -> None:
        ranker = CandidateRanker(model)
        assert ranker.rank(" ")[0] == " "
        model.observe("a", "n")
        assert " " not in ranker.rank(" ")

    def test_uppercase_prev_is_normalized(self, model: FrequencyModel) -> None:
        model.observe("t", "h")
        ranker = CandidateRanker(model)
        assert ranker.rank("T") == ranker.rank("t")

    def test_repeated_calls_are_deterministic(self, model: FrequencyModel) -> None:
        for prev, nxt in [("t", "h"), ("h", "e"), ("e", " "), (" ", "c")]:
            model.observe(prev, nxt)
        ranker = CandidateRanker(model)
        first = ranker.rank("e")
        assert all(ranker.rank("e") == first for _ in range(5))


class TestCandidateCount:
    """Bounds on the number of candidates."""

    @pytest.mark.parametrize("k", [0, -3])
    def test_invalid_k_rejected(self, model: FrequencyModel, k: int) -> None:
        with pytest.raises(ValueError):
            CandidateRanker(model, k=k)
        with pytest.raises(ValueError):
            CandidateRanker(model).rank("a", k=k)

    def test_single_slot_after_letter_is_space(self, ranker: CandidateRanker) -> None:
        assert ranker.rank("a", k=1) == [" "]

    @pytest.mark.parametrize("k", [1, 2, 6, 10])
    @pytest.mark.parametrize("prev", [" ", "a", "q", ".", ",", "7", "#", "Z"])
    def test_output_is_well_formed(self, model: FrequencyModel, prev: str, k: int) -> None:
        model.observe("q", "u")
        model.observe("a", "n")
        model.observe(" ", "a")
        _assert_well_formed(CandidateRanker(model).rank(prev, k=k), k)
        _assert_well_formed(CandidateRanker(FrequencyModel()).rank(prev, k=k), k)
