"""CSV export of a tenant's pages."""

from __future__ import annotations

import csv
import io
from typing import Iterable

from src.seo.models import PageRecord

CSV_COLUMNS = ("url", "title", "description")


def pages_to_csv(pages: Iterable[PageRecord]) -> str:
    """Render pages as CSV with every field quoted and embedded quotes doubled."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_COLUMNS)
    for page in pages:
        writer.writerow([page.url or "", page.title or "", page.description or ""])
    return buffer.getvalue()
