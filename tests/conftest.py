"""Fixtures — in-memory Redis, page store, engine and ASGI client."""

import httpx
import pytest
import pytest_asyncio
from fakeredis.aioredis import FakeRedis
from fastapi import FastAPI

from src.api.routes import router
from src.config import Settings
from src.seo.engine import SeoEngine
from src.store.redis import PageStore
from tests.factories import ACCESS_TOKEN, OTHER_TOKEN, make_page


@pytest.fixture
def settings() -> Settings:
    return Settings(redis_url="redis://unused:6379", keyword_slots=3, page_size=40)


@pytest.fixture
def engine(settings: Settings) -> SeoEngine:
    return SeoEngine(settings)


@pytest_asyncio.fixture
async def redis_client():
    client = FakeRedis(decode_responses=True)
    yield client
    await client.aclose()


@pytest_asyncio.fixture
async def page_store(redis_client) -> PageStore:
    """PageStore backed by an in-memory FakeRedis instance."""
    return PageStore(redis_client, prefix="test", save_retries=2)


@pytest_asyncio.fixture
async def seeded_store(page_store: PageStore) -> PageStore:
    """Two tenants: acme with three pages, globex with one."""
    await page_store.add_user("u-1", "acme", [ACCESS_TOKEN])
    await page_store.add_user("u-2", "globex", [OTHER_TOKEN])
    await page_store.put_page(
        make_page(
            1,
            title="Best Shoes Online",
            description="Buy shoes",
            terms=("shoes", "socks"),
            url="https://acme.test/shoes",
        )
    )
    await page_store.put_page(
        make_page(
            2,
            title="Running gear",
            description="Trail running shoes and jackets",
            terms=("running shoes", "jackets", "hats"),
            url="https://acme.test/running",
            lang_check="mismatch",
        )
    )
    await page_store.put_page(make_page(3, title="About us", url="https://acme.test/about"))
    await page_store.put_page(make_page(1, company_id="globex", title="Globex home", terms=("globex",)))
    return page_store


@pytest.fixture
def app(settings: Settings, engine: SeoEngine, seeded_store: PageStore) -> FastAPI:
    app = FastAPI()
    app.include_router(router)
    app.state.settings = settings
    app.state.engine = engine
    app.state.store = seeded_store
    return app


@pytest_asyncio.fixture
async def api(app: FastAPI):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
