"""Tests for levenshtein_distance."""

import pytest

from models.edit_distance import levenshtein_distance

SAMPLES = ["", "a", "ab", "kitten", "sitting", "flaw", "lawn", "hello world", "Hello, world."]


@pytest.mark.parametrize(
    "a,b,expected",
    [
        ("kitten", "sitting", 3),
        ("flaw", "lawn", 2),
        ("", "abc", 3),
        ("abc", "", 3),
        ("abc", "abc", 0),
        ("abc", "abd", 1),
        ("ab", "ba", 2),
        ("She packed", "She", 7),
    ],
)
def test_known_distances(a: str, b: str, expected: int) -> None:
    assert levenshtein_distance(a, b) == expected


@pytest.mark.parametrize("a", SAMPLES)
@pytest.mark.parametrize("b", SAMPLES)
def test_metric_properties(a: str, b: str) -> None:
    d = levenshtein_distance(a, b)
    assert d == levenshtein_distance(b, a)
    assert levenshtein_distance(a, a) == 0
    assert 0 <= d <= len(a) + len(b)
    assert d >= abs(len(a) - len(b))


def test_triangle_inequality() -> None:
    for a in SAMPLES:
        for b in SAMPLES:
            for c in SAMPLES:
                assert levenshtein_distance(a, c) <= (
                    levenshtein_distance(a, b) + levenshtein_distance(b, c)
                )


def test_case_sensitive() -> None:
    assert levenshtein_distance("A", "a") == 1
