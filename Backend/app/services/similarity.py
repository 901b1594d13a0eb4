from typing import List


def levenshtein(a: str, b: str) -> int:
    """
    Exact edit distance (insert, delete, substitute all cost 1).
    Two-row DP table, O(len(a) * len(b)).
    """
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)

    prev: List[int] = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        cur = [i] + [0] * len(b)
        for j, cb in enumerate(b, start=1):
            cost = 0 if ca == cb else 1
            cur[j] = min(
                prev[j] + 1,         # deletion
                cur[j - 1] + 1,      # insertion
                prev[j - 1] + cost,  # substitution
            )
        prev = cur
    return prev[-1]


def similarity_score(a: str, b: str) -> float:
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return 1.0 - levenshtein(a, b) / longest


def similar(a: str, b: str, threshold: float) -> bool:
    # Two empty strings are trivially similar, whatever the threshold.
    if not a and not b:
        return True
    return similarity_score(a, b) > threshold
