"""Data models for pages, search terms and scores."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

T = TypeVar("T")

LANG_MATCH = "match"


@dataclass(frozen=True)
class SearchTerm:
    """A keyword tracked for a page. Compared by ``text`` only."""

    text: str
    quoted: bool = field(default=False, compare=False)

    def __post_init__(self) -> None:
        # parsed terms are always trimmed
        object.__setattr__(self, "text", self.text.strip())


@dataclass
class PageRecord:
    """A stored web page as seen by the core."""

    page_id: int
    company_id: str
    title: str = ""
    description: str = ""
    url: str = ""
    search_terms: list[SearchTerm] = field(default_factory=list)
    lang_check: str = ""
    extra: dict[str, Any] = field(default_factory=dict, repr=False)

    @property
    def language_matches(self) -> bool:
        return self.lang_check == LANG_MATCH


@dataclass(frozen=True)
class ScoredPage:
    """A page plus its derived score. Never persisted."""

    page: PageRecord
    score: int


@dataclass(frozen=True)
class AggregateScore:
    overall_percent: int
    language_percent: int


@dataclass(frozen=True)
class KeywordStatus:
    """Presence of one keyword slot (KW1, KW2, ...) in title + description."""

    slot: int
    term: str | None
    present: bool


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of a paginated result."""

    items: list[T]
    total_pages: int
    page_index: int


@dataclass(frozen=True)
class Tenant:
    """The company an access token resolves to."""

    user_id: str
    company_id: str
