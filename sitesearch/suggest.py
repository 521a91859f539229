from __future__ import annotations

"""
"Did you mean" suggestions for queries that produced no ranked hits.

Each entry is scored by token overlap against its title and keywords
plus a typo bonus from the edit distance between the query and the
title.  Only entries clearing the minimum combined score are kept.
"""

from typing import List, Sequence

from .config import (
    DEFAULT_SUGGEST_WEIGHTS,
    MIN_QUERY_CHARS,
    SUGGEST_DEFAULT_LIMIT,
    IndexEntry,
    SuggestWeights,
)
from .distance import distance
from .normalize import normalize
from .overlap import overlap


def suggestion_score(
    entry: IndexEntry,
    query: str,
    weights: SuggestWeights = DEFAULT_SUGGEST_WEIGHTS,
) -> float:
    """Combined overlap + typo score of ``entry`` for ``query``."""
    hay = f"{entry.title} {' '.join(entry.keywords)}"
    overlap_score = overlap(query, hay)
    dist = distance(query, entry.title)
    return overlap_score + weights.typo_bonus(dist)


def suggest(
    index: Sequence[IndexEntry],
    query: str,
    limit: int = SUGGEST_DEFAULT_LIMIT,
    weights: SuggestWeights = DEFAULT_SUGGEST_WEIGHTS,
) -> List[IndexEntry]:
    """Return up to ``limit`` entries that look like what the user meant.

    Queries whose normalized form is shorter than two characters get no
    suggestions.  Equal scores keep index order.
    """
    q = normalize(query)
    if len(q) < MIN_QUERY_CHARS or limit <= 0:
        return []

    scored = [(entry, suggestion_score(entry, q, weights)) for entry in index]
    kept = [pair for pair in scored if pair[1] >= weights.min_score]
    kept.sort(key=lambda pair: pair[1], reverse=True)
    return [entry for entry, _ in kept[:limit]]
