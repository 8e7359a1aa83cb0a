"""Search-term parser tests."""

import pytest

from src.seo.models import SearchTerm
from src.seo.terms import add_term, from_stored, parse, remove_term, serialize, to_stored


def _pairs(terms):
    return [(t.text, t.quoted) for t in terms]


def test_parse_mixed_quoted_and_bare():
    terms = parse('shoes, "running shoes", socks')
    assert _pairs(terms) == [("shoes", False), ("running shoes", True), ("socks", False)]


def test_parse_splits_on_whitespace_and_commas():
    assert [t.text for t in parse("a b,c ,, d")] == ["a", "b", "c", "d"]


def test_parse_drops_empty_tokens():
    assert parse('  ,  "" , "   " ,') == []


@pytest.mark.parametrize("value", ["", None])
def test_parse_empty_input(value):
    assert parse(value) == []


def test_parse_explicit_quotes_mark_single_word_quoted():
    assert _pairs(parse('"shoes"')) == [("shoes", True)]


def test_parse_trims_inside_quotes():
    assert _pairs(parse('"  trail shoes "')) == [("trail shoes", True)]


def test_parse_unterminated_quote_runs_to_end():
    assert _pairs(parse('shoes, "red socks')) == [("shoes", False), ("red socks", True)]


def test_parse_keeps_duplicates_in_order():
    assert [t.text for t in parse("a, b, a")] == ["a", "b", "a"]


def test_serialize_quotes_only_when_needed():
    terms = [SearchTerm("shoes"), SearchTerm("running shoes"), SearchTerm("socks", quoted=True)]
    assert serialize(terms) == 'shoes, "running shoes", "socks"'


def test_serialize_empty():
    assert serialize([]) == ""


def test_round_trip_preserves_text_and_quoting():
    terms = [
        SearchTerm("shoes"),
        SearchTerm("running shoes", quoted=True),
        SearchTerm("sale", quoted=True),
        SearchTerm("a,b"),
    ]
    parsed = parse(serialize(terms))
    assert parsed == terms
    assert [t.quoted for t in parsed[:3]] == [False, True, True]


def test_round_trip_breaks_on_embedded_quotes():
    terms = [SearchTerm('say "hi"')]
    assert parse(serialize(terms)) != terms


def test_equality_ignores_quoted_flag():
    assert SearchTerm("shoes", quoted=True) == SearchTerm("shoes")
    assert SearchTerm("Shoes") != SearchTerm("shoes")


def test_add_term_appends():
    terms = add_term([SearchTerm("a")], SearchTerm("b"))
    assert [t.text for t in terms] == ["a", "b"]


def test_add_term_rejects_duplicate_text():
    original = [SearchTerm("a"), SearchTerm("b")]
    assert add_term(original, SearchTerm("a", quoted=True)) == original


def test_add_term_is_case_sensitive():
    terms = add_term([SearchTerm("shoes")], SearchTerm("Shoes"))
    assert [t.text for t in terms] == ["shoes", "Shoes"]


def test_remove_term_removes_all_matches():
    terms = [SearchTerm("a"), SearchTerm("b"), SearchTerm("a")]
    assert [t.text for t in remove_term(terms, "a")] == ["b"]


def test_remove_term_missing_is_noop():
    terms = [SearchTerm("a")]
    assert remove_term(terms, "z") == terms


def test_from_stored_skips_junk_and_flags_whitespace():
    terms = from_stored(["shoes", "", None, 3, " running shoes "])
    assert _pairs(terms) == [("shoes", False), ("running shoes", True)]


def test_from_stored_non_list():
    assert from_stored(None) == []
    assert from_stored("shoes") == []


def test_to_stored_plain_strings():
    assert to_stored([SearchTerm("a"), SearchTerm("b c", quoted=True)]) == ["a", "b c"]


def test_search_term_trims_text():
    term = SearchTerm("  shoes ")
    assert term.text == "shoes"
    assert parse(serialize([term])) == [term]


def test_round_trip_drops_empty_terms():
    terms = [SearchTerm("shoes"), SearchTerm("   ", quoted=True), SearchTerm("")]
    assert parse(serialize(terms)) == [SearchTerm("shoes")]
