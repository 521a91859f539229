"""Tests for the "did you mean" suggestion engine."""

import pytest

from sitesearch.config import DEFAULT_SUGGEST_WEIGHTS, IndexEntry, SuggestWeights
from sitesearch.ranking import rank
from sitesearch.suggest import suggest, suggestion_score


def _urls(entries):
    return [e.url for e in entries]


class TestSuggest:
    def test_plural_typo_suggests_entry(self, sample_index):
        assert rank(sample_index, "carpets") == []
        assert _urls(suggest(sample_index, "carpets")) == ["/materials/carpet/"]

    def test_typo_of_short_title(self):
        index = [IndexEntry(title="LVT", url="/materials/lvt/", keywords=["lvt", "vinyl"])]
        assert rank(index, "lvtt") == []
        assert _urls(suggest(index, "lvtt", 3)) == ["/materials/lvt/"]
        # overlap 1/3 plus the close-typo bonus
        assert suggestion_score(index[0], "lvtt") == pytest.approx(1 / 3 + 0.25)

    def test_typo_against_long_title_gets_no_bonus(self, lvt_laminate_index):
        lvt, laminate = lvt_laminate_index
        assert rank(lvt_laminate_index, "lvtt") == []
        # the bonus is measured against the whole title, which is far more than 3 edits away
        assert suggestion_score(lvt, "lvtt") == pytest.approx(1 / 8)
        assert suggestion_score(laminate, "lvtt") == 0
        assert suggest(lvt_laminate_index, "lvtt", 3) == []

    def test_short_query_returns_nothing(self, sample_index):
        assert suggest(sample_index, "l") == []
        assert suggest(sample_index, " ! ") == []
        assert suggest(sample_index, "") == []

    def test_typo_bonus_alone_is_below_threshold(self):
        index = [IndexEntry(title="Carpet", url="/materials/carpet/")]
        # distance 1 but no token containment: 0.25 < 0.35
        assert suggest(index, "carpt") == []
        assert _urls(suggest(index, "carpt", weights=SuggestWeights(min_score=0.2))) == ["/materials/carpet/"]

    def test_sorted_by_combined_score(self):
        index = [
            IndexEntry(title="Oak Floor", url="/oak-floor/"),
            IndexEntry(title="Oak", url="/oak/"),
        ]
        assert _urls(suggest(index, "oak")) == ["/oak/", "/oak-floor/"]

    def test_ties_keep_index_order(self):
        index = [IndexEntry(title="Tile", url="/a/"), IndexEntry(title="Tile", url="/b/")]
        assert _urls(suggest(index, "tiles")) == ["/a/", "/b/"]
        assert _urls(suggest(list(reversed(index)), "tiles")) == ["/b/", "/a/"]

    def test_limit(self):
        index = [IndexEntry(title="Tile", url=f"/{i}/") for i in range(5)]
        assert len(suggest(index, "tiles")) == 3
        assert _urls(suggest(index, "tiles", limit=1)) == ["/0/"]
        assert suggest(index, "tiles", limit=0) == []

    def test_returns_index_entries_without_scores(self, sample_index):
        out = suggest(sample_index, "carpets")
        assert out[0] is sample_index[2]

    def test_suggestions_rank_themselves_first(self, sample_index):
        for entry in suggest(sample_index, "carpets"):
            assert rank(sample_index, entry.title)[0].entry == entry


class TestTypoBonus:
    @pytest.mark.parametrize("dist, bonus", [(0, 0.25), (2, 0.25), (3, 0.15), (4, 0.0), (20, 0.0)])
    def test_steps(self, dist, bonus):
        assert DEFAULT_SUGGEST_WEIGHTS.typo_bonus(dist) == bonus
