"""SEO engine — scores, lists and prepares pages for editing."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from src.config import Settings
from src.errors import EmptyInputError
from src.seo import scoring
from src.seo.listing import ListingState, filter_pages, paginate
from src.seo.models import AggregateScore, KeywordStatus, Page, PageRecord, ScoredPage
from src.seo.terms import serialize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ListingView:
    """One rendered page of the scored list plus tenant-wide totals."""

    page: Page[ScoredPage]
    query: str
    total_items: int
    aggregate: AggregateScore | None


@dataclass(frozen=True)
class EditorView:
    """Everything the editor needs to show keyword hints for one page."""

    scored: ScoredPage
    search_terms_text: str
    title_presence: list[bool]
    description_presence: list[bool]
    title_length: int
    description_length: int
    title_max_length: int
    description_max_length: int


class SeoEngine:
    """Applies the configured scoring scheme to stored page records."""

    def __init__(self, settings: Settings) -> None:
        self._slots = settings.keyword_slots
        self._max_points = settings.max_per_page_points
        self._default_page_size = settings.page_size
        self._title_max = settings.title_max_length
        self._description_max = settings.description_max_length

    @property
    def max_per_page_points(self) -> int:
        return self._max_points

    def score_pages(self, records: Sequence[PageRecord]) -> list[ScoredPage]:
        return scoring.score_pages(records, self._slots)

    def keyword_statuses(self, record: PageRecord) -> list[KeywordStatus]:
        return scoring.keyword_statuses(record, self._slots)

    def aggregate(self, scored: Sequence[ScoredPage]) -> AggregateScore | None:
        """Aggregate percentages, or ``None`` when there is nothing to score."""
        try:
            return scoring.aggregate(scored, self._max_points)
        except EmptyInputError:
            logger.debug("no pages to aggregate")
            return None

    def build_listing(
        self,
        records: Sequence[PageRecord],
        state: ListingState,
        page_size: int | None = None,
    ) -> ListingView:
        """Score all records, then filter and paginate according to *state*.

        The aggregate always covers the full record set, not the filtered view.
        """
        scored = self.score_pages(records)
        matched = filter_pages(scored, state.query)
        page = paginate(matched, state.page_index, page_size or self._default_page_size)
        logger.debug(
            "listing built",
            extra={
                "total_items": len(scored),
                "matched_items": len(matched),
                "page_index": page.page_index,
                "total_pages": page.total_pages,
            },
        )
        return ListingView(
            page=page,
            query=state.query,
            total_items=len(matched),
            aggregate=self.aggregate(scored),
        )

    def editor_view(self, record: PageRecord) -> EditorView:
        terms = record.search_terms
        return EditorView(
            scored=ScoredPage(page=record, score=scoring.score(record, self._slots)),
            search_terms_text=serialize(terms),
            title_presence=scoring.field_presence(record.title, terms),
            description_presence=scoring.field_presence(record.description, terms),
            title_length=len(record.title or ""),
            description_length=len(record.description or ""),
            title_max_length=self._title_max,
            description_max_length=self._description_max,
        )
