from __future__ import annotations

"""
Mapping utilities for search output.

Converts scored entries and suggestions into the display records
returned by the API and printed by the CLI.  Pages without a snippet
get one derived from their keywords.
"""

from typing import List, Optional, Sequence

from .config import (
    SNIPPET_KEYWORD_COUNT,
    IndexEntry,
    SearchHit,
    SearchResponse,
)
from .normalize import normalize
from .ranking import ScoredEntry


def best_keyword_snippet(entry: IndexEntry, query: str) -> str:
    """Pick a keyword-based snippet for entries whose snippet is empty.

    Prefers the first keyword containing the query; otherwise the
    first few keywords joined with commas.
    """
    q = normalize(query)
    keywords = list(entry.keywords)
    for k in keywords:
        if q in normalize(k):
            return k
    return ", ".join(keywords[:SNIPPET_KEYWORD_COUNT])


def to_hit(entry: IndexEntry, query: str, score: Optional[float] = None) -> SearchHit:
    return SearchHit(
        title=entry.title,
        url=entry.url,
        snippet=entry.snippet or best_keyword_snippet(entry, query),
        score=score,
    )


def map_results(query: str, ranked: Sequence[ScoredEntry]) -> SearchResponse:
    hits: List[SearchHit] = [to_hit(s.entry, query, s.score) for s in ranked]
    return SearchResponse(query=query, mode="results" if hits else "empty", hits=hits)


def map_suggestions(query: str, suggestions: Sequence[IndexEntry]) -> SearchResponse:
    hits: List[SearchHit] = [to_hit(e, query) for e in suggestions]
    return SearchResponse(query=query, mode="suggestions" if hits else "empty", hits=hits)
