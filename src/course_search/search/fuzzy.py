"""Fuzzy matching for typo-tolerant search.

This module provides edit distance calculation and fuzzy term matching
for handling typos in search queries.

Length-scaled tolerance (``min(cap, len // 3)``):
- 1-2 chars: exact matches only
- 3-5 chars: max 1 edit
- 6+ chars: max 2 edits
"""

from __future__ import annotations

from collections.abc import Iterable

DEFAULT_MAX_DISTANCE = 2


def levenshtein_distance(s1: str, s2: str) -> int:
    """Calculate the Levenshtein (edit) distance between two strings.

    Classic dynamic programming over a ``(len(s1)+1) x (len(s2)+1)`` table
    with unit cost for insertions, deletions and substitutions.

    Examples:
        >>> levenshtein_distance("kitten", "sitting")
        3
        >>> levenshtein_distance("", "abc")
        3
    """
    rows, cols = len(s1) + 1, len(s2) + 1
    table = [[0] * cols for _ in range(rows)]

    for i in range(rows):
        table[i][0] = i
    for j in range(cols):
        table[0][j] = j

    for i in range(1, rows):
        for j in range(1, cols):
            cost = 0 if s1[i - 1] == s2[j - 1] else 1
            table[i][j] = min(
                table[i - 1][j] + 1,  # deletion
                table[i][j - 1] + 1,  # insertion
                table[i - 1][j - 1] + cost,  # substitution
            )

    return table[rows - 1][cols - 1]


def get_max_edit_distance(term_length: int, cap: int = DEFAULT_MAX_DISTANCE) -> int:
    """Get the maximum allowed edit distance for a term of ``term_length`` chars."""
    return min(cap, term_length // 3)


def find_fuzzy_matches(
    query_term: str,
    vocabulary: Iterable[str],
    max_distance: int | None = None,
    *,
    cap: int = DEFAULT_MAX_DISTANCE,
) -> list[tuple[str, int]]:
    """Find terms in vocabulary that fuzzy-match the query term.

    Args:
        query_term: The (already analyzed) term to match, may contain a typo.
        vocabulary: Indexed terms to match against.
        max_distance: Maximum edit distance allowed. If None, derived from
            the term length via ``get_max_edit_distance``.
        cap: Upper bound for the derived distance.

    Returns:
        List of (matching_term, edit_distance) tuples sorted by distance
        (exact matches first), then alphabetically.
    """
    if not query_term:
        return []

    if max_distance is None:
        max_distance = get_max_edit_distance(len(query_term), cap)

    matches: list[tuple[str, int]] = []
    for term in vocabulary:
        # Length difference is a lower bound on the distance
        if abs(len(query_term) - len(term)) > max_distance:
            continue
        distance = levenshtein_distance(query_term, term)
        if distance <= max_distance:
            matches.append((term, distance))

    matches.sort(key=lambda x: (x[1], x[0]))
    return matches
