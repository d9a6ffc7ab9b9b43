"""
Fuzzy string matching used for "did you mean" suggestions.

Shared by the query lexer (unknown field names) and by reference resolution
against workspace configuration (dartboard, status, tag and assignee names).
"""

from collections.abc import Iterable

DEFAULT_THRESHOLD = 2


def levenshtein_distance(a: str, b: str) -> int:
    """Minimum number of single-character insertions, deletions and substitutions
    needed to turn `a` into `b`."""
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, 1):
        current = [i]
        for j, char_b in enumerate(b, 1):
            if char_a == char_b:
                current.append(previous[j - 1])
            else:
                current.append(
                    min(
                        previous[j - 1] + 1,  # substitution
                        current[j - 1] + 1,  # insertion
                        previous[j] + 1,  # deletion
                    )
                )
        previous = current
    return previous[-1]


def find_closest(
    value: str, candidates: Iterable[str], threshold: int = DEFAULT_THRESHOLD
) -> str | None:
    """Return the candidate closest to `value`, or None if none is within `threshold`.

    Ties keep the earliest candidate.
    """
    closest = None
    best = threshold + 1
    for candidate in candidates:
        distance = levenshtein_distance(value, candidate)
        if distance < best:
            best = distance
            closest = candidate
    return closest


def find_closest_matches(
    value: str,
    candidates: Iterable[str],
    threshold: int = DEFAULT_THRESHOLD,
    limit: int = 3,
) -> list[str]:
    """Case-insensitive variant returning up to `limit` candidates, closest first.

    Used when resolving human-readable names (e.g. a dartboard typed in a CSV
    row) where several near matches are worth showing.
    """
    needle = value.lower()
    scored = []
    for index, candidate in enumerate(candidates):
        distance = levenshtein_distance(needle, candidate.lower())
        if distance <= threshold:
            scored.append((distance, index, candidate))
    scored.sort()
    return [candidate for _, _, candidate in scored[:limit]]
