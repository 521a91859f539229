from __future__ import annotations

"""
Build ``search-index.json`` from the HTML pages of a static site.

The builder walks the configured content directories, extracts the
title, headings, description and first paragraph of every page with
BeautifulSoup, derives a keyword list from word frequencies (boosted
for words in headings) plus a few heading bigrams, and writes the
resulting entries sorted by URL.  Extraction is best-effort: pages
without a usable title are skipped.
"""

import json
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Sequence

from bs4 import BeautifulSoup
from loguru import logger

from .config import (
    BODY_TEXT_CHARS,
    HEADING_BOOST,
    INCLUDE_DIRS,
    INCLUDE_ROOT_FILES,
    INDEX_FILENAME,
    MAX_KEYWORDS,
    MAX_PHRASES,
    MAX_TOP_WORDS,
    MIN_KEYWORD_CHARS,
    SITE_ROOT,
    SKIP_DIRS,
    SKIP_FILES,
    STOPWORDS,
    IndexEntry,
)
from .index_loader import entries_to_records
from .normalize import normalize_whitespace, strip_html, tokenize


# ---------------------------
# File discovery
# ---------------------------

def _walk(dir_path: Path) -> Iterator[Path]:
    for child in sorted(dir_path.iterdir()):
        if child.is_dir():
            if child.name in SKIP_DIRS:
                continue
            yield from _walk(child)
        elif child.name not in SKIP_FILES:
            yield child


def collect_html_files(
    root: Path,
    include_dirs: Sequence[str] = INCLUDE_DIRS,
    include_root_files: Sequence[str] = INCLUDE_ROOT_FILES,
) -> List[Path]:
    """HTML files under the content directories, then the listed root files."""
    files: List[Path] = []
    for d in include_dirs:
        p = root / d
        if p.is_dir():
            files.extend(f for f in _walk(p) if f.suffix.lower() == ".html")

    for name in include_root_files:
        p = root / name
        if p.is_file():
            files.append(p)
    return files


def file_to_url(path: Path, root: Path) -> str:
    """
    Map a file to its site-relative URL.

    ``index.html`` at the root becomes ``/``, ``dir/index.html`` becomes
    ``/dir/`` and any other file keeps its relative path.
    """
    rel = path.relative_to(root).as_posix()
    if rel == "index.html":
        return "/"
    if rel.endswith("/index.html"):
        return "/" + rel[: -len("index.html")]
    return "/" + rel


# ---------------------------
# Page extraction
# ---------------------------

def _text(tag) -> str:
    return normalize_whitespace(tag.get_text(" ", strip=True)) if tag is not None else ""


def _meta_description(soup: BeautifulSoup) -> str:
    for meta in soup.find_all("meta"):
        name = (meta.get("name") or "").strip().lower()
        if name == "description":
            return normalize_whitespace(meta.get("content") or "")
    return ""


def extract_page(html: str) -> Dict[str, object]:
    """
    Pull the searchable parts out of one HTML document.

    Returns a dict with keys: title, h1, headings, description,
    first_paragraph, body_text.
    """
    soup = BeautifulSoup(html, "lxml")

    h1 = _text(soup.find("h1"))
    title = _text(soup.find("title")) or h1
    headings = [t for t in (_text(h) for h in soup.find_all(["h2", "h3"])) if t]
    description = _meta_description(soup)
    first_paragraph = _text(soup.find("p"))

    body_text = strip_html(html)[:BODY_TEXT_CHARS]

    return {
        "title": title,
        "h1": h1,
        "headings": headings,
        "description": description,
        "first_paragraph": first_paragraph,
        "body_text": body_text,
    }


# ---------------------------
# Keywords
# ---------------------------

def _keyword_candidate(tok: str) -> bool:
    return len(tok) >= MIN_KEYWORD_CHARS and tok not in STOPWORDS


def build_keywords(
    title: str,
    h1: str,
    headings: Sequence[str],
    body_text: str,
) -> List[str]:
    """
    Derive up to ``MAX_KEYWORDS`` keywords for a page.

    Heading bigrams come first (they read more naturally in a snippet),
    followed by the most frequent single words.  Words that appear in
    the title, h1 or headings get a fixed frequency boost.
    """
    heading_text = " ".join([title, h1, *headings])

    freq: Dict[str, int] = {}
    for tok in tokenize(" ".join([heading_text, body_text])):
        if _keyword_candidate(tok):
            freq[tok] = freq.get(tok, 0) + 1

    heading_tokens = tokenize(heading_text)
    for tok in set(heading_tokens):
        if tok in freq:
            freq[tok] += HEADING_BOOST

    top_words = [
        w for w, _ in sorted(freq.items(), key=lambda kv: (-kv[1], kv[0]))[:MAX_TOP_WORDS]
    ]

    phrases: List[str] = []
    for a, b in zip(heading_tokens, heading_tokens[1:]):
        if not (_keyword_candidate(a) and _keyword_candidate(b)):
            continue
        phrase = f"{a} {b}"
        if phrase not in phrases:
            phrases.append(phrase)
        if len(phrases) >= MAX_PHRASES:
            break

    return list(dict.fromkeys(phrases + top_words))[:MAX_KEYWORDS]


# ---------------------------
# Index assembly
# ---------------------------

def build_entry(path: Path, root: Path) -> Optional[IndexEntry]:
    """Build the index entry for one page, or ``None`` if it has no title."""
    page = extract_page(path.read_text(encoding="utf-8"))
    title = str(page["title"])
    if not title:
        logger.warning("Skipping {}: no <title> or <h1>", path)
        return None

    snippet = str(page["description"] or page["first_paragraph"] or "")
    keywords = build_keywords(
        title=title,
        h1=str(page["h1"]),
        headings=list(page["headings"]),  # type: ignore[arg-type]
        body_text=str(page["body_text"]),
    )
    return IndexEntry(
        title=title,
        url=file_to_url(path, root),
        snippet=snippet,
        keywords=keywords,
    )


def build_index(root: Path = SITE_ROOT) -> List[IndexEntry]:
    """Crawl ``root`` and return its entries sorted by URL."""
    root = Path(root)
    files = collect_html_files(root)
    logger.info("Indexing {} HTML files under {}", len(files), root)

    entries: List[IndexEntry] = []
    for f in files:
        entry = build_entry(f, root)
        if entry is not None:
            entries.append(entry)

    entries.sort(key=lambda e: e.url)
    return entries


def write_index(entries: Sequence[IndexEntry], out_path: Path) -> Path:
    """Write ``entries`` as pretty-printed JSON and return the path."""
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    payload = json.dumps(entries_to_records(entries), indent=2, ensure_ascii=False)
    out_path.write_text(payload + "\n", encoding="utf-8")
    logger.info("Wrote {} entries to {}", len(entries), out_path)
    return out_path


def build_and_write(root: Path = SITE_ROOT, out_path: Optional[Path] = None) -> Path:
    """
    End-to-end: crawl site → build entries → write ``search-index.json``.
    """
    root = Path(root)
    if out_path is None:
        out_path = root / INDEX_FILENAME
    return write_index(build_index(root), out_path)


# ---------------------------
# CLI entrypoint
# ---------------------------

if __name__ == "__main__":
    # Simple manual way to rebuild the index:
    # python -m sitesearch.index_build
    path = build_and_write()
    print(f"Index written to: {path}")
