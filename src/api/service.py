"""Service layer — orchestrates page listing, editing and export for the API routes."""

from __future__ import annotations

import logging
from typing import Any

from src.api.schemas import (
    AggregateOut,
    KeywordStatusOut,
    PageEditorResponse,
    PageListResponse,
    PageOut,
    PageSaveResponse,
    PageUpdateRequest,
    ScoredPageOut,
    TermPresenceOut,
)
from src.errors import NotFoundError
from src.seo.engine import SeoEngine
from src.seo.export import pages_to_csv
from src.seo.listing import ListingState
from src.seo.models import PageRecord, ScoredPage, SearchTerm, Tenant
from src.seo.terms import add_term, from_stored, parse, to_stored
from src.store.redis import PageStore

logger = logging.getLogger(__name__)

LIST_PATH = "/pages"


def _page_out(scored: ScoredPage) -> PageOut:
    page = scored.page
    return PageOut(
        page_id=page.page_id,
        title=page.title,
        description=page.description,
        url=page.url,
        search_terms=to_stored(page.search_terms),
        lang_check=page.lang_check,
        score=scored.score,
    )


def _scored_page_out(engine: SeoEngine, scored: ScoredPage) -> ScoredPageOut:
    return ScoredPageOut(
        **_page_out(scored).model_dump(),
        keywords=[
            KeywordStatusOut(slot=status.slot, term=status.term, present=status.present)
            for status in engine.keyword_statuses(scored.page)
        ],
    )


def _terms_from_request(value: str | list[str]) -> list[SearchTerm]:
    """Parse the submitted terms and drop repeats, keeping first occurrences."""
    candidates = parse(value) if isinstance(value, str) else from_stored(value)
    terms: list[SearchTerm] = []
    for term in candidates:
        terms = add_term(terms, term)
    return terms


async def list_pages(
    engine: SeoEngine,
    store: PageStore,
    tenant: Tenant,
    query: str = "",
    page_index: int = 1,
    page_size: int | None = None,
) -> PageListResponse:
    """Score the tenant's pages and return one filtered page of them."""
    records = await store.find_pages(tenant.company_id)
    state = ListingState(query=query, page_index=page_index)
    view = engine.build_listing(records, state, page_size)
    logger.info(
        "pages listed",
        extra={
            "company_id": tenant.company_id,
            "page_count": len(records),
            "matched": view.total_items,
            "page_index": view.page.page_index,
        },
    )
    aggregate = None
    if view.aggregate is not None:
        aggregate = AggregateOut(
            overall_percent=view.aggregate.overall_percent,
            language_percent=view.aggregate.language_percent,
        )
    return PageListResponse(
        items=[_scored_page_out(engine, scored) for scored in view.page.items],
        page=view.page.page_index,
        total_pages=view.page.total_pages,
        total_items=view.total_items,
        query=view.query,
        max_score=engine.max_per_page_points,
        aggregate=aggregate,
    )


async def _load_page(store: PageStore, tenant: Tenant, page_id: int) -> PageRecord:
    record = await store.get_page(tenant.company_id, page_id)
    if record is None:
        raise NotFoundError(f"page {page_id} not found")
    return record


async def get_editor(
    engine: SeoEngine,
    store: PageStore,
    tenant: Tenant,
    page_id: int,
) -> PageEditorResponse:
    """Return one page with the keyword hints shown while editing it."""
    record = await _load_page(store, tenant, page_id)
    view = engine.editor_view(record)
    return PageEditorResponse(
        page=_page_out(view.scored),
        max_score=engine.max_per_page_points,
        search_terms_text=view.search_terms_text,
        terms=[
            TermPresenceOut(term=term.text, in_title=in_title, in_description=in_description)
            for term, in_title, in_description in zip(
                record.search_terms, view.title_presence, view.description_presence
            )
        ],
        title_length=view.title_length,
        title_max_length=view.title_max_length,
        description_length=view.description_length,
        description_max_length=view.description_max_length,
    )


async def save_page(
    engine: SeoEngine,
    store: PageStore,
    tenant: Tenant,
    page_id: int,
    body: PageUpdateRequest,
) -> PageSaveResponse:
    """Persist an edit of title, description and search terms.

    Only the fields present in *body* are written. Only returns (and so only
    offers a redirect) once the store confirmed the write; every failure
    propagates to the caller.
    """
    fields: dict[str, Any] = {}
    if body.title is not None:
        fields["title"] = body.title
    if body.description is not None:
        fields["description"] = body.description
    if body.search_terms is not None:
        fields["searchTerms"] = to_stored(_terms_from_request(body.search_terms))
    record = await store.update_page(tenant.company_id, page_id, fields)
    scored = engine.score_pages([record])[0]
    logger.info(
        "page saved",
        extra={
            "company_id": tenant.company_id,
            "page_id": page_id,
            "fields": sorted(fields),
            "term_count": len(record.search_terms),
            "score": scored.score,
        },
    )
    return PageSaveResponse(
        message="Page updated successfully",
        page=_page_out(scored),
        redirect=LIST_PATH,
    )


async def export_pages_csv(store: PageStore, tenant: Tenant) -> str:
    records = await store.find_pages(tenant.company_id)
    logger.info("pages exported", extra={"company_id": tenant.company_id, "page_count": len(records)})
    return pages_to_csv(records)
