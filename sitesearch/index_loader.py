from __future__ import annotations

"""
Loading of the JSON search index into an immutable snapshot.

``load_index`` is the synchronous path used by the CLI.  ``IndexLoader``
wraps it for the web app: the first ``get()`` starts a single load and
every concurrent caller awaits that same pending task, so a burst of
queries arriving before the file has been read never triggers duplicate
loads.  Records missing a title or URL are dropped here; the ranking and
suggestion functions assume every entry they see is valid.
"""

import asyncio
import json
from pathlib import Path
from typing import Any, Iterable, Optional, Tuple

from loguru import logger
from pydantic import ValidationError

from .config import INDEX_PATH, IndexEntry

Snapshot = Tuple[IndexEntry, ...]


class IndexFormatError(ValueError):
    """The index file is not a JSON array of records."""


def parse_index(records: Any) -> Snapshot:
    """Validate raw JSON records into ``IndexEntry`` values.

    Invalid records are skipped with a warning; order is preserved.
    """
    if not isinstance(records, list):
        raise IndexFormatError(
            f"Search index must be a JSON array, got {type(records).__name__}"
        )

    entries = []
    for pos, record in enumerate(records):
        try:
            entries.append(IndexEntry.model_validate(record))
        except ValidationError as e:
            logger.warning("Dropping index record {}: {} error(s)", pos, e.error_count())
    if len(entries) < len(records):
        logger.warning("Dropped {} of {} index records", len(records) - len(entries), len(records))
    return tuple(entries)


def load_index(path: Path = INDEX_PATH) -> Snapshot:
    """Read and validate the index file at ``path``."""
    path = Path(path)
    logger.info("Loading search index from {}", path)
    text = path.read_text(encoding="utf-8")
    try:
        records = json.loads(text)
    except json.JSONDecodeError as e:
        raise IndexFormatError(f"{path} is not valid JSON: {e}") from e
    entries = parse_index(records)
    logger.info("Loaded search index with {} entries", len(entries))
    return entries


def entries_to_records(entries: Iterable[IndexEntry]) -> list[dict]:
    """Plain JSON-ready dicts, in the on-disk field order."""
    return [
        {
            "title": e.title,
            "url": e.url,
            "snippet": e.snippet,
            "keywords": list(e.keywords),
        }
        for e in entries
    ]


class IndexLoader:
    """Memoized async holder of the index snapshot for one process."""

    def __init__(self, path: Path = INDEX_PATH):
        self.path = Path(path)
        self._snapshot: Optional[Snapshot] = None
        self._pending: Optional[asyncio.Task] = None
        self._lock = asyncio.Lock()

    @property
    def snapshot(self) -> Optional[Snapshot]:
        return self._snapshot

    async def get(self) -> Snapshot:
        """Return the snapshot, loading it once if needed.

        A failed load is not memoized; the next call tries again.
        """
        if self._snapshot is not None:
            return self._snapshot

        async with self._lock:
            if self._snapshot is not None:
                return self._snapshot
            if self._pending is None:
                self._pending = asyncio.create_task(self._load())
            task = self._pending

        try:
            snapshot = await asyncio.shield(task)
        finally:
            if task.done() and self._pending is task:
                self._pending = None
        return snapshot

    async def reload(self) -> Snapshot:
        """Drop the current snapshot and load the file again."""
        async with self._lock:
            self._snapshot = None
        return await self.get()

    async def _load(self) -> Snapshot:
        snapshot = await asyncio.to_thread(load_index, self.path)
        self._snapshot = snapshot
        return snapshot
