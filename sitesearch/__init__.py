"""
Top-level package for the static-site search.

This package contains the search core (normalization, edit distance,
token overlap, ranking and "did you mean" suggestions), the builder
that crawls a site's HTML into ``search-index.json``, the loader that
turns that file into an immutable snapshot, and a small FastAPI app
and CLI on top.  There are no side-effects on import and each module
can be executed as a script for ad-hoc debugging.
"""
