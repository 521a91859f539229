"""Shared fixtures: a small flooring-site index."""

import json

import pytest

from sitesearch.config import IndexEntry

SAMPLE_RECORDS = [
    {
        "title": "Luxury Vinyl Tile (LVT)",
        "url": "/materials/lvt/",
        "snippet": "",
        "keywords": ["lvt", "vinyl", "wear layer"],
    },
    {
        "title": "Laminate Flooring",
        "url": "/materials/laminate/",
        "snippet": "HDF core boards with a printed decor layer.",
        "keywords": ["laminate", "hdf core"],
    },
    {
        "title": "Carpet",
        "url": "/materials/carpet/",
        "snippet": "Pile, fibre and backing basics.",
        "keywords": ["carpet pile", "nylon"],
    },
    {
        "title": "Hardwood",
        "url": "/materials/hardwood/",
        "keywords": ["oak", "solid wood"],
    },
]


@pytest.fixture
def sample_index():
    return tuple(IndexEntry.model_validate(r) for r in SAMPLE_RECORDS)


@pytest.fixture
def lvt_laminate_index(sample_index):
    return sample_index[:2]


@pytest.fixture
def index_file(tmp_path):
    path = tmp_path / "search-index.json"
    path.write_text(json.dumps(SAMPLE_RECORDS), encoding="utf-8")
    return path
