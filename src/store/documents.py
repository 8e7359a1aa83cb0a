"""Conversion between stored page documents and ``PageRecord``."""

from __future__ import annotations

import re
from typing import Any

from src.errors import StoreError, ValidationError
from src.seo.models import PageRecord
from src.seo.terms import from_stored, to_stored

_PAGE_ID_RE = re.compile(r"-?\d+", re.ASCII)

_KNOWN_KEYS = {"pageId", "companyId", "title", "description", "url", "searchTerms", "lang_check", "_id"}


def coerce_page_id(value: Any) -> int:
    """Accept ints and ASCII integer strings such as ``"12"``."""
    if isinstance(value, bool):
        raise ValidationError("pageId must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and _PAGE_ID_RE.fullmatch(value.strip()):
        return int(value.strip())
    raise ValidationError("pageId must be an integer")


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def page_from_document(doc: dict[str, Any]) -> PageRecord:
    try:
        page_id = coerce_page_id(doc.get("pageId"))
    except ValidationError as exc:
        raise StoreError(f"stored page has invalid pageId: {doc.get('pageId')!r}") from exc

    return PageRecord(
        page_id=page_id,
        company_id=str(doc.get("companyId", "")),
        title=_text(doc.get("title")),
        description=_text(doc.get("description")),
        url=_text(doc.get("url")),
        search_terms=from_stored(doc.get("searchTerms")),
        lang_check=_text(doc.get("lang_check")),
        extra={k: v for k, v in doc.items() if k not in _KNOWN_KEYS},
    )


def page_to_document(page: PageRecord) -> dict[str, Any]:
    return {
        **page.extra,
        "pageId": page.page_id,
        "companyId": page.company_id,
        "title": page.title,
        "description": page.description,
        "url": page.url,
        "searchTerms": to_stored(page.search_terms),
        "lang_check": page.lang_check,
    }
