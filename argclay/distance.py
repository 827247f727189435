"""
Fuzzy matching for “did you mean …” hints.

Similarity is the Jaccard index of the two character sets: order and
repetition are ignored, case is significant. It only feeds suggestions and
never decides whether parsing succeeds.
"""


def similarity(first, second, /):
    """
    Jaccard index of the characters of two strings (0.0 … 1.0).

    Two empty strings have a similarity of 0.0.
    """
    first, second = set(first), set(second)
    union = len(first | second)
    if not union:
        return 0.0
    return len(first & second) / union


def closest(query, candidates, /):
    """
    Return the candidate most similar to query, or None without candidates.

    Candidates are scanned in their natural order and a candidate replaces the
    current best whenever it scores at least as high, so the last candidate
    reaching the maximum score wins.
    """
    best, score = None, 0.0
    for candidate in candidates:
        current = similarity(query, candidate)
        if score <= current:
            best, score = candidate, current
    return best


def suggest(query, candidates, /):
    """
    closest(), restricted to candidates sharing at least one character with query.
    """
    candidate = closest(query, candidates)
    if candidate is None or not similarity(query, candidate):
        return None
    return candidate


__all__ = (
    "similarity",
    "closest",
    "suggest",
)
