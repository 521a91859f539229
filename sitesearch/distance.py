from __future__ import annotations

"""
Levenshtein edit distance used for "did you mean" typo tolerance.

Both inputs are normalized before comparison, so punctuation and case
never count as edits.
"""

import numpy as np

from .normalize import normalize


def _as_codes(text: str) -> np.ndarray:
    # normalized text is plain ASCII
    return np.frombuffer(text.encode("ascii"), dtype=np.uint8)


def distance(a: str, b: str) -> int:
    """Return the unit-cost insert/delete/substitute distance between ``a`` and ``b``.

    If either normalized string is empty the distance is the length of
    the other one.
    """
    a = normalize(a)
    b = normalize(b)
    if not a or not b:
        return max(len(a), len(b))

    codes_a = _as_codes(a)
    codes_b = _as_codes(b)
    n = len(codes_b)
    cols = np.arange(n + 1, dtype=np.int64)

    # one DP row at a time; deletions and substitutions come from the
    # previous row, insertion chains are a running minimum along the row
    prev = cols.copy()
    for i, ca in enumerate(codes_a, 1):
        cost = (codes_b != ca).astype(np.int64)
        row = np.empty(n + 1, dtype=np.int64)
        row[0] = i
        row[1:] = np.minimum(prev[1:] + 1, prev[:-1] + cost)
        prev = np.minimum.accumulate(row - cols) + cols
    return int(prev[n])
