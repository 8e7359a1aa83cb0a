"""Search-term list parsing and serialization.

Input grammar: terms are separated by commas or whitespace, and a
double-quoted run ``"running shoes"`` is a single term. Quote characters
inside a term are not escaped, so texts containing ``"`` do not survive a
serialize/parse round trip. Neither do empty terms: parsing drops them.
``SearchTerm`` trims its text, so surrounding whitespace is never an issue.
"""

from __future__ import annotations

import re
from typing import Any, Iterable, Sequence

from src.seo.models import SearchTerm

# A quoted run (closing quote optional at end of input) or a bare token.
_TOKEN_RE = re.compile(r'"([^"]*)(?:"|$)|([^,\s"]+)')
_WHITESPACE_RE = re.compile(r"\s")


def _has_whitespace(text: str) -> bool:
    return _WHITESPACE_RE.search(text) is not None


def parse(text: str | None) -> list[SearchTerm]:
    """Parse free-text input into an ordered list of search terms."""
    if not text:
        return []

    terms: list[SearchTerm] = []
    for match in _TOKEN_RE.finditer(text):
        quoted_text, bare_text = match.group(1), match.group(2)
        if quoted_text is not None:
            value = quoted_text.strip()
            if value:
                terms.append(SearchTerm(text=value, quoted=True))
        elif bare_text:
            value = bare_text.strip()
            if value:
                terms.append(SearchTerm(text=value, quoted=_has_whitespace(value)))
    return terms


def serialize(terms: Iterable[SearchTerm]) -> str:
    """Join terms with ``", "``, quoting any term that would not parse back as one token."""
    parts: list[str] = []
    for term in terms:
        if term.quoted or _has_whitespace(term.text) or "," in term.text:
            parts.append(f'"{term.text}"')
        else:
            parts.append(term.text)
    return ", ".join(parts)


def add_term(terms: Sequence[SearchTerm], term: SearchTerm) -> list[SearchTerm]:
    """Append *term* unless a term with the same text is already present."""
    if any(existing.text == term.text for existing in terms):
        return list(terms)
    return [*terms, term]


def remove_term(terms: Sequence[SearchTerm], text: str) -> list[SearchTerm]:
    """Drop every term whose text equals *text*."""
    return [term for term in terms if term.text != text]


def from_stored(values: Any) -> list[SearchTerm]:
    """Build terms from the persisted plain string array.

    Non-string and blank entries are skipped.
    """
    if not isinstance(values, (list, tuple)):
        return []
    terms: list[SearchTerm] = []
    for value in values:
        if not isinstance(value, str):
            continue
        value = value.strip()
        if value:
            terms.append(SearchTerm(text=value, quoted=_has_whitespace(value)))
    return terms


def to_stored(terms: Iterable[SearchTerm]) -> list[str]:
    return [term.text for term in terms]
