from fastapi import Depends

from app.db.prismic import get_prismic
from app.services.page_cache import PageCache
from app.services.posts_service import PostsService
from app.settings import Settings, get_settings, settings

page_cache = PageCache(
    revalidate_seconds=settings.REVALIDATE_SECONDS,
    max_entries=settings.PAGE_CACHE_MAX_ENTRIES,
)


def get_page_cache() -> PageCache:
    return page_cache


def get_posts_service(
    client=Depends(get_prismic),
    current_settings: Settings = Depends(get_settings),
):
    return PostsService(
        client=client,
        page_size=current_settings.POSTS_PAGE_SIZE,
        words_per_minute=current_settings.READING_WORDS_PER_MINUTE,
    )
