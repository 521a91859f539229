from __future__ import annotations

"""
Ranking of index entries against a raw query.

Scores are built from raw lower-cased substring matches on the title,
keywords and URL (punctuation preserved), plus a small capped bonus
for normalized query tokens found in the title/keyword text.  Entries
that score zero are dropped rather than ranked last.

Example::

    from sitesearch.ranking import rank
    for hit in rank(index, "vinyl plank"):
        print(hit.score, hit.entry.title)

"""

from dataclasses import dataclass
from typing import List, Sequence

from pyuca import Collator

from .config import DEFAULT_RANK_WEIGHTS, IndexEntry, RankWeights
from .normalize import tokenize


@dataclass(frozen=True)
class ScoredEntry:
    entry: IndexEntry
    score: float


_collator: Collator | None = None


def _title_sort_key(title: str) -> tuple:
    """
    Unicode collation key for a title (accents and case are secondary
    and tertiary differences, so "Éclat" sorts with the E's and "oak"
    before "Oak").  The raw title breaks exact collation ties.
    """
    global _collator
    if _collator is None:
        # loading the collation table is slow; do it once, on first use
        _collator = Collator()
    return tuple(_collator.sort_key(title)), title


def score_entry(
    entry: IndexEntry,
    query: str,
    weights: RankWeights = DEFAULT_RANK_WEIGHTS,
) -> float:
    """Score one entry.  ``query`` is the raw user text."""
    q = query.lower()
    title = entry.title.lower()
    url = entry.url.lower()
    keywords = [k.lower() for k in entry.keywords]

    score = 0
    if q in title:
        score += weights.title
    if any(q in k for k in keywords):
        score += weights.keyword
    if q in url:
        score += weights.url

    # distinct tokens only; the bonus is capped so long queries don't dominate
    q_tokens = list(dict.fromkeys(tokenize(query)))
    if q_tokens:
        hay = " ".join([entry.title, *entry.keywords]).lower()
        token_hits = sum(1 for t in q_tokens if t in hay)
        score += min(weights.token_bonus_cap, token_hits)

    return float(score)


def rank(
    index: Sequence[IndexEntry],
    query: str,
    weights: RankWeights = DEFAULT_RANK_WEIGHTS,
) -> List[ScoredEntry]:
    """Score every entry and return the positive ones, best first.

    Ties on score are ordered by title.  Callers must not pass queries
    whose normalized form is shorter than two characters.
    """
    scored = [ScoredEntry(entry, score_entry(entry, query, weights)) for entry in index]
    hits = [s for s in scored if s.score > 0]
    hits.sort(key=lambda s: (-s.score, *_title_sort_key(s.entry.title)))
    return hits
