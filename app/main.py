import logging
from contextlib import asynccontextmanager, contextmanager

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from starlette.concurrency import run_in_threadpool

from app.db.prismic import get_prismic
from app.dependencies import page_cache
from app.routers import posts, preview
from app.services.posts_service import PostsService
from app.services.static_pages import prerender
from app.settings import settings
from app.templating import STATIC_DIR

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def warm_page_cache():
    with contextmanager(get_prismic)() as client:
        service = PostsService(
            client=client,
            page_size=settings.POSTS_PAGE_SIZE,
            words_per_minute=settings.READING_WORDS_PER_MINUTE,
        )
        return prerender(service, page_cache, settings)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if not settings.UTTERANCES_REPO:
        logger.warning("UTTERANCES_REPO is not set; comment widget disabled")

    try:
        await run_in_threadpool(warm_page_cache)
    except Exception as e:
        logger.warning(f"Page cache warm-up failed: {e}")

    try:
        yield
    finally:
        page_cache.clear()
        logger.info("Page cache cleared on shutdown")


app = FastAPI(title=settings.SITE_NAME, lifespan=lifespan)

app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")
app.include_router(preview.router)
app.include_router(posts.router)
