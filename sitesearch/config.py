from __future__ import annotations
"""
Configuration for the static-site search (paths, tunable weights, schemas).
"""

import os
from pathlib import Path
from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Paths
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SITE_ROOT = Path(os.getenv("SITESEARCH_SITE_ROOT", str(PROJECT_ROOT)))
INDEX_FILENAME = "search-index.json"
INDEX_PATH = Path(os.getenv("SITESEARCH_INDEX_PATH", str(SITE_ROOT / INDEX_FILENAME)))

# Ranking weights (raw lower-cased substring matches)
RANK_TITLE_WEIGHT = 4
RANK_KEYWORD_WEIGHT = 3
RANK_URL_WEIGHT = 1
RANK_TOKEN_BONUS_CAP = 2

# "Did you mean" suggestions
SUGGEST_MIN_SCORE = 0.35
SUGGEST_TYPO_CLOSE_DISTANCE = 2
SUGGEST_TYPO_CLOSE_BONUS = 0.25
SUGGEST_TYPO_NEAR_DISTANCE = 3
SUGGEST_TYPO_NEAR_BONUS = 0.15
SUGGEST_DEFAULT_LIMIT = 3

# Result policy
MIN_QUERY_CHARS = 2
# Hard cap on query text; suggestion scoring is quadratic in query length
MAX_QUERY_CHARS = 200
DEFAULT_RESULT_LIMIT = 8
RESULT_LIMIT = int(os.getenv("SITESEARCH_RESULT_LIMIT", str(DEFAULT_RESULT_LIMIT)))
SNIPPET_KEYWORD_COUNT = 3

# Index builder
INCLUDE_DIRS: List[str] = ["materials"]
INCLUDE_ROOT_FILES: List[str] = ["index.html"]
SKIP_DIRS = {"assets", "data", ".netlify", ".git", "node_modules"}
SKIP_FILES = {"_headers", "_redirects", "robots.txt", "sitemap.xml", "ads.txt", "404.html"}

STOPWORDS = {
    "a", "an", "and", "are", "as", "at", "be", "by", "can", "do", "does", "for", "from", "get", "how",
    "if", "in", "into", "is", "it", "its", "of", "on", "or", "our", "that", "the", "their", "this",
    "to", "used", "use", "vs", "what", "when", "where", "which", "why", "with", "without", "you",
    "your", "we", "they", "them", "also", "about", "page", "pages", "site", "reference", "only",
    "information", "explained", "explains", "common", "including", "overview",
}

MIN_KEYWORD_CHARS = 3
HEADING_BOOST = 3
MAX_TOP_WORDS = 12
MAX_PHRASES = 6
MAX_KEYWORDS = 18
BODY_TEXT_CHARS = 8_000


class RankWeights(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: int = Field(default=RANK_TITLE_WEIGHT, ge=0)
    keyword: int = Field(default=RANK_KEYWORD_WEIGHT, ge=0)
    url: int = Field(default=RANK_URL_WEIGHT, ge=0)
    token_bonus_cap: int = Field(default=RANK_TOKEN_BONUS_CAP, ge=0)


class SuggestWeights(BaseModel):
    model_config = ConfigDict(frozen=True)

    min_score: float = Field(default=SUGGEST_MIN_SCORE, ge=0)
    typo_close_distance: int = Field(default=SUGGEST_TYPO_CLOSE_DISTANCE, ge=0)
    typo_close_bonus: float = Field(default=SUGGEST_TYPO_CLOSE_BONUS, ge=0)
    typo_near_distance: int = Field(default=SUGGEST_TYPO_NEAR_DISTANCE, ge=0)
    typo_near_bonus: float = Field(default=SUGGEST_TYPO_NEAR_BONUS, ge=0)

    def typo_bonus(self, dist: int) -> float:
        if dist <= self.typo_close_distance:
            return self.typo_close_bonus
        if dist <= self.typo_near_distance:
            return self.typo_near_bonus
        return 0.0


DEFAULT_RANK_WEIGHTS = RankWeights()
DEFAULT_SUGGEST_WEIGHTS = SuggestWeights()


# Pydantic schemas
class IndexEntry(BaseModel):
    """One searchable page.  Immutable once loaded."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(min_length=1)
    url: str = Field(min_length=1)
    snippet: str = ""
    keywords: Tuple[str, ...] = ()

    @field_validator("title", "url", mode="before")
    @classmethod
    def _strip_required(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("snippet", mode="before")
    @classmethod
    def _snippet_or_empty(cls, value):
        return "" if value is None else value

    @field_validator("keywords", mode="before")
    @classmethod
    def _coerce_keywords(cls, value):
        if value is None:
            return ()
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, (list, tuple)):
            # left for the Tuple[str, ...] check to reject
            return value
        return tuple(str(k) for k in value if k)


class SearchHit(BaseModel):
    title: str
    url: str
    snippet: str
    score: Optional[float] = None


class SearchResponse(BaseModel):
    query: str
    mode: Literal["results", "suggestions", "empty"]
    hits: List[SearchHit]


class HealthResponse(BaseModel):
    status: str
