"""FastAPI app entrypoint."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.api.routes import router
from src.config import get_settings
from src.logging_config import setup_logging
from src.seo.engine import SeoEngine
from src.store.redis import PageStore, create_redis_client

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()

    # Initialize logging FIRST so all subsequent operations produce JSON logs
    setup_logging(settings.log_level)
    logger.info("starting seo editor")

    redis_client = await create_redis_client(settings.redis_url)
    store = PageStore(redis_client, prefix=settings.store_prefix, save_retries=settings.save_retries)

    app.state.settings = settings
    app.state.store = store
    app.state.engine = SeoEngine(settings)

    logger.info(
        "seo editor ready",
        extra={
            "keyword_slots": settings.keyword_slots,
            "max_per_page_points": settings.max_per_page_points,
            "page_size": settings.page_size,
        },
    )

    yield

    logger.info("shutting down seo editor")
    await redis_client.aclose()


app = FastAPI(title="SEO Metadata Editor", lifespan=lifespan)
app.include_router(router)


@app.get("/health")
async def health():
    return {"status": "ok"}
