"""GET/PUT /pages, GET /pages/{id}, GET /pages/export.csv endpoint handlers."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import Response

from src.api import service
from src.api.schemas import PageEditorResponse, PageListResponse, PageSaveResponse, PageUpdateRequest
from src.auth.dependencies import get_store, require_tenant
from src.config import Settings
from src.errors import NotFoundError, StoreError, ValidationError
from src.seo.engine import SeoEngine
from src.seo.models import Tenant
from src.store.documents import coerce_page_id
from src.store.redis import PageStore

router = APIRouter()


def _get_engine(request: Request) -> SeoEngine:
    return request.app.state.engine


def _get_settings(request: Request) -> Settings:
    return request.app.state.settings


def _to_http(exc: Exception) -> HTTPException:
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=404, detail="Page not found")
    if isinstance(exc, ValidationError):
        return HTTPException(status_code=422, detail=str(exc))
    if isinstance(exc, StoreError):
        return HTTPException(status_code=503, detail="Page store unavailable")
    return HTTPException(status_code=500, detail="Internal server error")


@router.get("/pages", response_model=PageListResponse)
async def list_pages(
    q: str = "",
    page: int = 1,
    page_size: int | None = Query(None, ge=1),
    tenant: Tenant = Depends(require_tenant),
    engine: SeoEngine = Depends(_get_engine),
    store: PageStore = Depends(get_store),
    settings: Settings = Depends(_get_settings),
):
    if page_size is not None and page_size > settings.max_page_size:
        raise HTTPException(
            status_code=422,
            detail=f"page_size must be at most {settings.max_page_size}",
        )
    try:
        return await service.list_pages(engine, store, tenant, q, page, page_size)
    except StoreError as exc:
        raise _to_http(exc) from exc


@router.get("/pages/export.csv")
async def export_pages(
    tenant: Tenant = Depends(require_tenant),
    store: PageStore = Depends(get_store),
):
    try:
        body = await service.export_pages_csv(store, tenant)
    except StoreError as exc:
        raise _to_http(exc) from exc
    return Response(
        content=body,
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="pages.csv"'},
    )


@router.get("/pages/{page_id}", response_model=PageEditorResponse)
async def get_page(
    page_id: int,
    tenant: Tenant = Depends(require_tenant),
    engine: SeoEngine = Depends(_get_engine),
    store: PageStore = Depends(get_store),
):
    try:
        return await service.get_editor(engine, store, tenant, page_id)
    except (NotFoundError, StoreError) as exc:
        raise _to_http(exc) from exc


@router.put("/pages/{page_id}", response_model=PageSaveResponse)
async def update_page(
    page_id: int,
    body: PageUpdateRequest,
    tenant: Tenant = Depends(require_tenant),
    engine: SeoEngine = Depends(_get_engine),
    store: PageStore = Depends(get_store),
):
    try:
        return await service.save_page(engine, store, tenant, page_id, body)
    except (NotFoundError, ValidationError, StoreError) as exc:
        raise _to_http(exc) from exc


@router.put("/pages", response_model=PageSaveResponse)
async def update_page_by_body(
    body: PageUpdateRequest,
    tenant: Tenant = Depends(require_tenant),
    engine: SeoEngine = Depends(_get_engine),
    store: PageStore = Depends(get_store),
):
    """Original update contract: the pageId travels in the JSON body."""
    if body.page_id is None or body.page_id == "":
        raise HTTPException(status_code=400, detail="pageId is required for updates")
    try:
        page_id = coerce_page_id(body.page_id)
        return await service.save_page(engine, store, tenant, page_id, body)
    except (NotFoundError, ValidationError, StoreError) as exc:
        raise _to_http(exc) from exc
