"""Request/response Pydantic models."""

from pydantic import BaseModel, Field


class PageUpdateRequest(BaseModel):
    model_config = {"populate_by_name": True}

    # Only read by ``PUT /pages``; ``PUT /pages/{page_id}`` takes it from the path.
    page_id: int | str | None = Field(default=None, alias="pageId")
    # Fields left out (or sent as null) keep their stored value.
    title: str | None = None
    description: str | None = None
    # Free-text input ('shoes, "running shoes"') or an already split list.
    search_terms: str | list[str] | None = None


class KeywordStatusOut(BaseModel):
    slot: int
    term: str | None = None
    present: bool = False


class PageOut(BaseModel):
    page_id: int
    title: str = ""
    description: str = ""
    url: str = ""
    search_terms: list[str] = []
    lang_check: str = ""
    score: int = 0


class ScoredPageOut(PageOut):
    keywords: list[KeywordStatusOut] = []


class AggregateOut(BaseModel):
    overall_percent: int
    language_percent: int


class PageListResponse(BaseModel):
    items: list[ScoredPageOut] = []
    page: int = 1
    total_pages: int = 0
    total_items: int = 0
    query: str = ""
    max_score: int
    aggregate: AggregateOut | None = None


class TermPresenceOut(BaseModel):
    term: str
    in_title: bool = False
    in_description: bool = False


class PageEditorResponse(BaseModel):
    page: PageOut
    max_score: int
    search_terms_text: str = ""
    terms: list[TermPresenceOut] = []
    title_length: int = 0
    title_max_length: int
    description_length: int = 0
    description_max_length: int


class PageSaveResponse(BaseModel):
    message: str
    page: PageOut
    redirect: str
