"""Per-page SEO score and aggregate percentages."""

from __future__ import annotations

from typing import Sequence

from src.errors import EmptyInputError
from src.seo.models import AggregateScore, KeywordStatus, PageRecord, ScoredPage, SearchTerm

DEFAULT_KEYWORD_SLOTS = 3


def _haystack(page: PageRecord) -> str:
    # Plain concatenation: a term spanning the title/description seam matches.
    return ((page.title or "") + (page.description or "")).lower()


def _contains(haystack: str, term: SearchTerm | None) -> bool:
    if term is None:
        return False
    needle = (term.text or "").lower()
    return bool(needle) and needle in haystack


def score(page: PageRecord, slots: int = DEFAULT_KEYWORD_SLOTS) -> int:
    """Count matched keyword slots plus one point for a language match."""
    haystack = _haystack(page)
    points = sum(1 for term in page.search_terms[:slots] if _contains(haystack, term))
    if page.language_matches:
        points += 1
    return points


def score_pages(pages: Sequence[PageRecord], slots: int = DEFAULT_KEYWORD_SLOTS) -> list[ScoredPage]:
    return [ScoredPage(page=page, score=score(page, slots)) for page in pages]


def keyword_statuses(page: PageRecord, slots: int = DEFAULT_KEYWORD_SLOTS) -> list[KeywordStatus]:
    """One status per keyword column; empty slots have ``term=None``."""
    haystack = _haystack(page)
    statuses: list[KeywordStatus] = []
    for index in range(slots):
        term = page.search_terms[index] if index < len(page.search_terms) else None
        statuses.append(
            KeywordStatus(
                slot=index + 1,
                term=term.text if term is not None else None,
                present=_contains(haystack, term),
            )
        )
    return statuses


def field_presence(text: str | None, terms: Sequence[SearchTerm]) -> list[bool]:
    """Presence of each term within a single field, e.g. the title alone."""
    haystack = (text or "").lower()
    return [_contains(haystack, term) for term in terms]


def _percent(numerator: int, denominator: int) -> int:
    # round-half-up of 100 * numerator / denominator without floats
    return (200 * numerator + denominator) // (2 * denominator)


def aggregate(scored_pages: Sequence[ScoredPage], max_per_page_points: int) -> AggregateScore:
    """Reduce per-page scores to overall and language-only percentages.

    Raises:
        EmptyInputError: if *scored_pages* is empty.
        ValueError: if *max_per_page_points* is not positive.
    """
    if max_per_page_points < 1:
        raise ValueError(f"max_per_page_points must be positive, got {max_per_page_points}")
    if not scored_pages:
        raise EmptyInputError("cannot aggregate scores over zero pages")

    count = len(scored_pages)
    total_possible = count * max_per_page_points
    total_score = sum(item.score for item in scored_pages)
    language_matches = sum(1 for item in scored_pages if item.page.language_matches)

    return AggregateScore(
        overall_percent=_percent(total_score, total_possible),
        language_percent=_percent(language_matches, count),
    )
