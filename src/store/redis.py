"""Redis-backed document store for access tokens and page records."""

from __future__ import annotations

import json
import logging
from typing import Any, Iterable

import redis.asyncio as redis
from redis.backoff import ExponentialBackoff
from redis.exceptions import WatchError
from redis.retry import Retry

from src.errors import NotFoundError, StoreError
from src.seo.models import PageRecord, Tenant
from src.store.documents import page_from_document, page_to_document

logger = logging.getLogger(__name__)


class PageStore:
    """Tenant-scoped find/update of page documents.

    Layout::

        {prefix}:token:{token}        -> {"userId": ..., "companyId": ...}
        {prefix}:pages:{companyId}    -> hash of pageId -> page document
    """

    def __init__(self, client: redis.Redis, prefix: str = "seo", save_retries: int = 3) -> None:
        self._client = client
        self._prefix = prefix
        self._save_retries = save_retries

    def _token_key(self, token: str) -> str:
        return f"{self._prefix}:token:{token}"

    def _pages_key(self, company_id: str) -> str:
        return f"{self._prefix}:pages:{company_id}"

    async def find_tenant(self, token: str) -> Tenant | None:
        """Return the tenant an access token belongs to, or ``None``."""
        try:
            raw = await self._client.get(self._token_key(token))
        except redis.RedisError as exc:
            logger.warning("token lookup failed", exc_info=True)
            raise StoreError("token lookup failed") from exc
        if raw is None:
            return None
        doc = self._decode(raw)
        if not doc.get("companyId"):
            raise StoreError("token document has no companyId")
        return Tenant(user_id=str(doc.get("userId", "")), company_id=str(doc["companyId"]))

    async def add_user(self, user_id: str, company_id: str, tokens: Iterable[str]) -> None:
        payload = json.dumps({"userId": user_id, "companyId": company_id})
        try:
            async with self._client.pipeline(transaction=True) as pipe:
                for token in tokens:
                    pipe.set(self._token_key(token), payload)
                await pipe.execute()
        except redis.RedisError as exc:
            logger.warning("user save failed", extra={"user_id": user_id}, exc_info=True)
            raise StoreError("user save failed") from exc
        logger.info("user saved", extra={"user_id": user_id, "company_id": company_id})

    async def find_pages(self, company_id: str) -> list[PageRecord]:
        """All pages of a tenant, ordered by pageId."""
        try:
            raw_docs = await self._client.hvals(self._pages_key(company_id))
        except redis.RedisError as exc:
            logger.warning("page listing failed", extra={"company_id": company_id}, exc_info=True)
            raise StoreError("page listing failed") from exc

        pages = [page_from_document(self._decode(raw)) for raw in raw_docs]
        pages.sort(key=lambda page: page.page_id)
        logger.debug("pages fetched", extra={"company_id": company_id, "page_count": len(pages)})
        return pages

    async def get_page(self, company_id: str, page_id: int) -> PageRecord | None:
        try:
            raw = await self._client.hget(self._pages_key(company_id), str(page_id))
        except redis.RedisError as exc:
            logger.warning(
                "page fetch failed", extra={"company_id": company_id, "page_id": page_id}, exc_info=True
            )
            raise StoreError("page fetch failed") from exc
        if raw is None:
            return None
        return page_from_document(self._decode(raw))

    async def put_page(self, page: PageRecord) -> None:
        """Insert or replace a whole page document."""
        try:
            await self._client.hset(
                self._pages_key(page.company_id),
                str(page.page_id),
                json.dumps(page_to_document(page)),
            )
        except redis.RedisError as exc:
            logger.warning(
                "page save failed",
                extra={"company_id": page.company_id, "page_id": page.page_id},
                exc_info=True,
            )
            raise StoreError("page save failed") from exc

    async def update_page(self, company_id: str, page_id: int, fields: dict[str, Any]) -> PageRecord:
        """Merge *fields* into a stored page document and return the result.

        The read-modify-write runs under WATCH, so concurrent saves of the
        same page are applied one after another.

        Raises:
            NotFoundError: no page with *page_id* in the tenant.
            StoreError: Redis failed or the page kept changing underneath us.
        """
        key = self._pages_key(company_id)
        field = str(page_id)
        try:
            async with self._client.pipeline(transaction=True) as pipe:
                for attempt in range(1 + self._save_retries):
                    try:
                        await pipe.watch(key)
                        raw = await pipe.hget(key, field)
                        if raw is None:
                            raise NotFoundError(f"page {page_id} not found")
                        doc = self._decode(raw)
                        doc.update(fields)
                        doc["pageId"] = page_id
                        doc["companyId"] = company_id
                        pipe.multi()
                        pipe.hset(key, field, json.dumps(doc))
                        await pipe.execute()
                    except WatchError:
                        logger.info(
                            "concurrent page update, retrying",
                            extra={"company_id": company_id, "page_id": page_id, "attempt": attempt + 1},
                        )
                        continue
                    logger.info("page updated", extra={"company_id": company_id, "page_id": page_id})
                    return page_from_document(doc)
        except redis.RedisError as exc:
            logger.warning(
                "page update failed", extra={"company_id": company_id, "page_id": page_id}, exc_info=True
            )
            raise StoreError("page update failed") from exc

        raise StoreError(f"page {page_id} changed concurrently, giving up after {self._save_retries} retries")

    @staticmethod
    def _decode(raw: str | bytes) -> dict[str, Any]:
        try:
            doc = json.loads(raw)
        except ValueError as exc:
            raise StoreError("stored document is not valid JSON") from exc
        if not isinstance(doc, dict):
            raise StoreError("stored document is not an object")
        return doc


async def create_redis_client(redis_url: str) -> redis.Redis:
    # Strip credentials for logging (everything before @ if present)
    safe_url = redis_url.split("@")[-1] if "@" in redis_url else redis_url
    logger.info("connecting to redis", extra={"redis_url": safe_url})
    retry = Retry(ExponentialBackoff(), retries=3)
    return redis.from_url(
        redis_url,
        decode_responses=True,
        socket_connect_timeout=5,
        socket_timeout=5,
        health_check_interval=30,
        retry=retry,
        retry_on_error=[redis.ConnectionError, redis.TimeoutError],
    )
