from __future__ import annotations

"""
FastAPI application for the site search.

- Ranks the query against the loaded index snapshot
- Falls back to "did you mean" suggestions when nothing ranks
- Queries shorter than MIN_QUERY_CHARS normalized characters return an empty response
- Queries are cut to MAX_QUERY_CHARS; the HTTP routes reject longer ones with 422
- The index is loaded once per process and shared by concurrent requests
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Sequence

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from pydantic import BaseModel, Field

from .config import (
    INDEX_PATH,
    MAX_QUERY_CHARS,
    MIN_QUERY_CHARS,
    RESULT_LIMIT,
    SUGGEST_DEFAULT_LIMIT,
    HealthResponse,
    IndexEntry,
    SearchResponse,
)
from .index_loader import IndexLoader
from .mapping import map_results, map_suggestions
from .normalize import clamp_text_length, normalize
from .ranking import rank
from .suggest import suggest

# =============================================================================
# Pipeline
# =============================================================================

def run_search(
    query: str,
    index: Sequence[IndexEntry],
    limit: int = RESULT_LIMIT,
    suggestion_limit: int = SUGGEST_DEFAULT_LIMIT,
) -> SearchResponse:
    """Rank ``query`` against ``index``; suggest alternatives when nothing ranks."""
    query = clamp_text_length((query or "").strip()).rstrip()
    if len(normalize(query)) < MIN_QUERY_CHARS:
        return SearchResponse(query=query, mode="empty", hits=[])

    ranked = rank(index, query)
    if ranked:
        return map_results(query, ranked[:limit])

    suggestions = suggest(index, query, limit=suggestion_limit)
    if suggestions:
        logger.info("No hits for {!r}; offering {} suggestion(s)", query, len(suggestions))
    else:
        logger.info("No hits or suggestions for {!r}", query)
    return map_suggestions(query, suggestions)

# =============================================================================
# FastAPI app + startup
# =============================================================================

index_loader = IndexLoader(INDEX_PATH)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    logger.info("Starting app warmup...")
    try:
        entries = await index_loader.get()
        logger.info("Search index ready with {} entries", len(entries))
    except Exception as e:
        # requests retry the load
        logger.warning("Warmup failed to load search index from {}: {}", index_loader.path, e)
    logger.info("Warmup complete.")
    yield


app = FastAPI(lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


async def _current_index() -> Sequence[IndexEntry]:
    try:
        return await index_loader.get()
    except Exception:
        logger.exception("Search index unavailable at {}", index_loader.path)
        raise HTTPException(status_code=503, detail="Search index unavailable")


@app.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(status="healthy")


class SearchRequest(BaseModel):
    query: str = Field(..., min_length=1, max_length=MAX_QUERY_CHARS)
    limit: int = Field(default=RESULT_LIMIT, ge=1, le=50)


@app.get("/search", response_model=SearchResponse)
async def search_get(
    q: str = Query(..., min_length=1, max_length=MAX_QUERY_CHARS),
    limit: int = Query(RESULT_LIMIT, ge=1, le=50),
) -> SearchResponse:
    index = await _current_index()
    return run_search(q, index, limit=limit)


@app.post("/search", response_model=SearchResponse)
async def search_post(req: SearchRequest) -> SearchResponse:
    if not req.query.strip():
        raise HTTPException(status_code=422, detail="Query must be non-empty")
    index = await _current_index()
    return run_search(req.query, index, limit=req.limit)
