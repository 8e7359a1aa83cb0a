"""Search filter and pagination over a page list."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Sequence, TypeVar

from src.seo.models import Page, PageRecord, ScoredPage

T = TypeVar("T", PageRecord, ScoredPage)


def _record(item: PageRecord | ScoredPage) -> PageRecord:
    return item.page if isinstance(item, ScoredPage) else item


def _matches(record: PageRecord, needle: str) -> bool:
    return any(
        needle in (value or "").lower()
        for value in (record.title, record.description, record.url)
    )


def filter_pages(pages: Sequence[T], query: str | None) -> list[T]:
    """Keep pages whose title, description or url contains *query* (any case)."""
    needle = (query or "").lower()
    if not needle:
        return list(pages)
    return [item for item in pages if _matches(_record(item), needle)]


def total_pages_for(count: int, page_size: int) -> int:
    if page_size < 1:
        raise ValueError(f"page_size must be positive, got {page_size}")
    return math.ceil(count / page_size)


def clamp_page_index(page_index: int, total_pages: int) -> int:
    return max(1, min(page_index, total_pages))


def paginate(items: Sequence[T], page_index: int, page_size: int) -> Page[T]:
    """Slice *items* into 1-based pages of *page_size*.

    Out-of-range indexes clamp to the first/last page. An empty input has
    ``total_pages == 0`` and an empty first page.
    """
    total = total_pages_for(len(items), page_size)
    index = clamp_page_index(page_index, total)
    start = (index - 1) * page_size
    return Page(items=list(items[start:start + page_size]), total_pages=total, page_index=index)


@dataclass(frozen=True)
class ListingState:
    """Client-side state of a list view: the search query and page index.

    The HTTP API is stateless and takes both as request parameters; a client
    holding this state calls ``with_query`` when the search box changes, so a
    new query always goes back to page 1 before the next request.
    """

    query: str = ""
    page_index: int = 1

    def with_query(self, query: str) -> ListingState:
        """A new query always starts again from the first page."""
        return ListingState(query=query, page_index=1)

    def go_to(self, page_index: int, total_pages: int) -> ListingState:
        return replace(self, page_index=clamp_page_index(page_index, total_pages))
