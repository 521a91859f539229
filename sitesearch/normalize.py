from __future__ import annotations

"""
Text normalization utilities shared by the search core and the index
builder.

``normalize`` produces the canonical comparison form used by the
fuzzy scorers: lower-cased, everything outside ``[a-z0-9]`` replaced
by a space, whitespace collapsed and trimmed.  The HTML helpers are
only used while building the index from site pages.
"""

import re
from typing import List, Optional

from bs4 import BeautifulSoup

from .config import MAX_QUERY_CHARS

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]")
_WHITESPACE_RE = re.compile(r"\s+")


# ---------------------------
# Comparison form
# ---------------------------

def clamp_text_length(text: str, max_chars: int = MAX_QUERY_CHARS) -> str:
    """
    Hard cap on input size so a pasted essay can't stall the
    edit-distance scorer.
    """
    if not isinstance(text, str):
        text = str(text)
    if len(text) <= max_chars:
        return text
    return text[:max_chars]


def normalize(text: Optional[str]) -> str:
    """
    Canonicalize free text for fuzzy comparison.

    ``None`` and the empty string both normalize to ``""``.  The result
    only contains ``[a-z0-9]`` runs separated by single spaces, so
    applying ``normalize`` twice is a no-op.
    """
    if not text:
        return ""
    lowered = str(text).lower()
    spaced = _NON_ALNUM_RE.sub(" ", lowered)
    return _WHITESPACE_RE.sub(" ", spaced).strip()


def tokenize(text: Optional[str]) -> List[str]:
    """Split the normalized form of ``text`` into tokens (duplicates kept)."""
    norm = normalize(text)
    if not norm:
        return []
    return norm.split(" ")


# ---------------------------
# Page text helpers
# ---------------------------

def normalize_whitespace(text: Optional[str]) -> str:
    """
    Collapse all whitespace runs into a single space and strip edges.
    """
    if not text:
        return ""
    return _WHITESPACE_RE.sub(" ", text).strip()


def strip_html(raw: Optional[str]) -> str:
    """
    Return the visible text of an HTML fragment with whitespace
    collapsed.  Script and style contents are dropped.
    """
    if not raw:
        return ""
    # Fast path: if there's no '<', it's almost certainly not HTML
    if "<" not in raw:
        return normalize_whitespace(raw)

    soup = BeautifulSoup(raw, "lxml")
    for tag in soup(["script", "style"]):
        tag.decompose()
    return normalize_whitespace(soup.get_text(" ", strip=True))
