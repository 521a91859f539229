# sitesearch/cli.py
"""
Command-line entry points for the site search.

- build:  crawl the site and write search-index.json
- search: run one query against an index (results or "did you mean")
- batch:  run every query from a CSV/XLSX and write a two-column CSV
          with headers: Query, Url
"""

from __future__ import annotations
import argparse
import sys
from pathlib import Path
from typing import Dict, List, Sequence, Tuple

import pandas as pd
from loguru import logger

from sitesearch.api import run_search
from sitesearch.config import INDEX_FILENAME, INDEX_PATH, RESULT_LIMIT, SITE_ROOT, IndexEntry, SearchResponse
from sitesearch.index_build import build_index, write_index
from sitesearch.index_loader import IndexFormatError, load_index


def load_queries(path: Path) -> List[str]:
    ext = path.suffix.lower()
    df = pd.read_excel(path) if ext in {".xlsx", ".xls"} else pd.read_csv(path)
    cols = {c.lower(): c for c in df.columns}
    qcol = cols.get("query")
    if not qcol:
        raise ValueError(f"Expected column 'Query' in {path}. Found: {list(df.columns)}")
    return df[qcol].fillna("").astype(str).str.strip().tolist()


def _dedup_preserve_order(seq: Sequence[str]) -> List[str]:
    seen = set()
    out: List[str] = []
    for s in seq:
        if s not in seen:
            seen.add(s)
            out.append(s)
    return out


def write_two_column_csv(preds: Dict[str, List[str]], out_path: Path) -> None:
    """
    Write exactly two columns: Query, Url.

    Each (query, url) pair becomes a row; queries without hits are omitted.
    """
    rows: List[Tuple[str, str]] = []
    for q, urls in preds.items():
        for u in urls:
            rows.append((q, u))
    df = pd.DataFrame(rows, columns=["Query", "Url"])
    out_path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(out_path, index=False)


def format_response(resp: SearchResponse) -> str:
    if resp.mode == "empty":
        return f"No results for {resp.query!r}."
    lines: List[str] = []
    if resp.mode == "suggestions":
        lines.append("Did you mean:")
    for hit in resp.hits:
        prefix = f"[{hit.score:g}] " if hit.score is not None else "  "
        lines.append(f"{prefix}{hit.title}  {hit.url}")
        if hit.snippet:
            lines.append(f"      {hit.snippet}")
    return "\n".join(lines)


def _load_or_exit(path: Path) -> Tuple[IndexEntry, ...]:
    try:
        return load_index(path)
    except (OSError, IndexFormatError) as e:
        logger.error("Cannot load search index: {}", e)
        sys.exit(1)


def cmd_build(args: argparse.Namespace) -> None:
    root = Path(args.root)
    out = Path(args.out) if args.out else root / INDEX_FILENAME
    entries = build_index(root)
    path = write_index(entries, out)
    print(f"Index written to {path} ({len(entries)} entries)")


def cmd_search(args: argparse.Namespace) -> None:
    index = _load_or_exit(Path(args.index))
    print(format_response(run_search(args.query, index, limit=args.limit)))


def cmd_batch(args: argparse.Namespace) -> None:
    index = _load_or_exit(Path(args.index))
    inp = Path(args.inp)
    out = Path(args.out)

    queries = load_queries(inp)
    print(f"Loaded {len(queries)} queries from {inp}")

    # De-duplicate identical queries to avoid re-running the same text
    unique_queries = _dedup_preserve_order(queries)

    preds: Dict[str, List[str]] = {}
    for i, uq in enumerate(unique_queries, 1):
        try:
            resp = run_search(uq, index, limit=args.topk)
            preds[uq] = [h.url for h in resp.hits]
        except Exception as e:
            logger.warning("{}/{} failed for {!r}: {}", i, len(unique_queries), uq, e)
            preds[uq] = []

    write_two_column_csv(preds, out)
    total_rows = sum(len(v) for v in preds.values())
    print(f"Wrote {total_rows} rows to {out}")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="sitesearch")
    sub = ap.add_subparsers(dest="command", required=True)

    b = sub.add_parser("build", help="crawl the site and write the search index")
    b.add_argument("--root", type=str, default=str(SITE_ROOT), help="site root directory")
    b.add_argument("--out", type=str, default=None, help="output file (default <root>/search-index.json)")
    b.set_defaults(func=cmd_build)

    s = sub.add_parser("search", help="run one query")
    s.add_argument("query", type=str)
    s.add_argument("--index", type=str, default=str(INDEX_PATH))
    s.add_argument("--limit", type=int, default=RESULT_LIMIT)
    s.set_defaults(func=cmd_search)

    bt = sub.add_parser("batch", help="run queries from a CSV/XLSX file")
    bt.add_argument("--in", dest="inp", type=str, required=True, help="file with a 'Query' column")
    bt.add_argument("--out", dest="out", type=str, default="artifacts/search_results.csv")
    bt.add_argument("--index", type=str, default=str(INDEX_PATH))
    bt.add_argument("--topk", type=int, default=RESULT_LIMIT, help="max hits per query")
    bt.set_defaults(func=cmd_batch)
    return ap


def main(argv: Sequence[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
