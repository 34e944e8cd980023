"""
Tests for query synthesis
"""
import pytest
from reelscroll.catalog.categories import CATEGORY_TABLES
from reelscroll.core.config import settings
from reelscroll.discovery.query import synthesize, year_for_page


def test_first_page_uses_anchor_year():
    assert synthesize("action movie", 1, anchor_year=2025) == "action movie 2025"


def test_each_page_steps_back_one_year():
    assert synthesize("action movie", 2, anchor_year=2025) == "action movie 2024"
    assert synthesize("action movie", 36, anchor_year=2025) == "action movie 1990"


@pytest.mark.parametrize("kind", ["movie", "tv", "anime"])
@pytest.mark.parametrize("page", [1, 2, 7, 40])
def test_every_category_keeps_prefix_and_trailing_year(kind, page):
    for category in CATEGORY_TABLES[kind]:
        query = synthesize(category.query, page, anchor_year=2025)
        prefix, year = query.rsplit(" ", 1)

        assert prefix == category.query
        assert int(year) == 2025 - (page - 1)


def test_default_anchor_from_settings(monkeypatch):
    monkeypatch.setattr(settings, "ANCHOR_YEAR", 2031)

    assert synthesize("anime", 1) == "anime 2031"
    assert year_for_page(3) == 2029


def test_page_below_one_rejected():
    with pytest.raises(ValueError):
        synthesize("movie", 0)
