"""SEO engine unit tests."""

from src.config import Settings
from src.seo.engine import SeoEngine
from src.seo.listing import ListingState
from src.seo.models import SearchTerm
from tests.factories import make_page


def _records():
    return [
        make_page(1, title="Best Shoes Online", description="Buy shoes", terms=("shoes", "socks")),
        make_page(2, title="Socks", description="Wool socks", terms=("socks",), lang_check="mismatch"),
        make_page(3, title="About", terms=()),
    ]


def test_max_points_follow_keyword_slots():
    assert SeoEngine(Settings(keyword_slots=2)).max_per_page_points == 3
    assert SeoEngine(Settings(keyword_slots=3)).max_per_page_points == 4


def test_score_pages(engine: SeoEngine):
    scored = engine.score_pages(_records())
    assert [s.score for s in scored] == [2, 1, 1]


def test_aggregate_none_when_empty(engine: SeoEngine):
    assert engine.aggregate([]) is None


def test_build_listing_aggregates_over_all_pages(engine: SeoEngine):
    view = engine.build_listing(_records(), ListingState(query="socks"))
    assert [s.page.page_id for s in view.page.items] == [2]
    assert view.total_items == 1
    # 4 points of 12, 2 of 3 languages
    assert view.aggregate.overall_percent == 33
    assert view.aggregate.language_percent == 67


def test_build_listing_uses_default_page_size():
    engine = SeoEngine(Settings(page_size=2))
    view = engine.build_listing(_records(), ListingState(page_index=2))
    assert [s.page.page_id for s in view.page.items] == [3]
    assert view.page.total_pages == 2


def test_build_listing_page_size_override(engine: SeoEngine):
    view = engine.build_listing(_records(), ListingState(), page_size=1)
    assert view.page.total_pages == 3


def test_build_listing_empty(engine: SeoEngine):
    view = engine.build_listing([], ListingState())
    assert view.page.items == []
    assert view.page.total_pages == 0
    assert view.aggregate is None


def test_editor_view(engine: SeoEngine):
    record = make_page(
        1,
        title="Best Shoes Online",
        description="Buy running shoes",
        search_terms=[SearchTerm("shoes"), SearchTerm("running shoes", quoted=True), SearchTerm("buy")],
    )
    view = engine.editor_view(record)
    assert view.search_terms_text == 'shoes, "running shoes", buy'
    assert view.title_presence == [True, False, False]
    assert view.description_presence == [True, True, True]
    assert view.title_length == len("Best Shoes Online")
    assert view.title_max_length == 70
    assert view.description_max_length == 155
    assert view.scored.score == 4
