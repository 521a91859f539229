from __future__ import annotations

"""
Token overlap scoring between a query and a document's combined text.

A query token counts as a hit when it contains, or is contained in,
any haystack token.  This lets "floor" match "flooring" and the other
way round.  Very short tokens match generously; that is intentional.
"""

from .normalize import tokenize


def overlap(query: str, haystack: str) -> float:
    """Fraction of query tokens that hit the haystack, in ``[0, 1]``.

    The denominator is the larger of the two token counts, so long
    haystacks dilute the score.
    """
    q_tokens = tokenize(query)
    h_tokens = tokenize(haystack)
    if not q_tokens or not h_tokens:
        return 0.0

    hits = 0
    for qt in q_tokens:
        if any(qt in ht or ht in qt for ht in h_tokens):
            hits += 1
    return hits / max(len(q_tokens), len(h_tokens))
