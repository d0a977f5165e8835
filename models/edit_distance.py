"""Levenshtein edit distance, used as the minimum string distance (MSD) accuracy metric."""

from functools import lru_cache


@lru_cache(maxsize=1024)
def levenshtein_distance(a: str, b: str) -> int:
    """Return the minimum number of single-character insertions, deletions and
    substitutions needed to turn a into b.

    Results are cached because the metric is recomputed against a growing
    prefix of the same target after every keystroke.
    """
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i] + [0] * len(b)
        for j, char_b in enumerate(b, start=1):
            cost = 0 if char_a == char_b else 1
            current[j] = min(
                previous[j] + 1,  # deletion
                current[j - 1] + 1,  # insertion
                previous[j - 1] + cost,  # substitution
            )
        previous = current
    return previous[-1]
