import logging
from typing import List

from app.preview import PreviewMode
from app.schemas.blog import PostDetail, PostPagination, PostSummary
from app.services.comments import build_comment_widget
from app.services.page_cache import PageCache
from app.services.posts_service import PostsService, is_edited, render_content
from app.settings import Settings
from app.templating import render

logger = logging.getLogger(__name__)


def render_home_page(pagination: PostPagination, preview: PreviewMode) -> str:
    return render(
        "home.html",
        posts=pagination.results,
        next_page=pagination.next_page,
        preview=preview.active,
    )


def render_post_items(posts: List[PostSummary]) -> str:
    return render("partials/_post_list_items.html", posts=posts)


def render_post_page(
    post: PostDetail,
    preview: PreviewMode,
    service: PostsService,
    current_settings: Settings,
) -> str:
    path = f"/post/{post.uid}"
    return render(
        "post.html",
        post=post,
        reading_time=service.reading_time(post),
        content_html=render_content(post),
        edited=is_edited(post),
        preview=preview.active,
        comments=build_comment_widget(path, current_settings),
    )


def prerender(service: PostsService, cache: PageCache, current_settings: Settings) -> List[str]:
    """
    Render the list page and the first page of posts into the cache.
    Returns the paths that were rendered; failures are logged and skipped.
    """
    rendered = []
    public = PreviewMode()

    try:
        cache.set("/", render_home_page(service.list_posts(), public))
        rendered.append("/")
    except Exception as e:
        logger.warning(f"Failed to prerender post list: {e}")

    try:
        slugs = service.get_static_slugs()
    except Exception as e:
        logger.warning(f"Failed to list static post paths: {e}")
        return rendered

    for slug in slugs:
        path = f"/post/{slug}"
        try:
            post = service.get_post(slug)
            if not post:
                continue
            cache.set(path, render_post_page(post, public, service, current_settings))
            rendered.append(path)
        except Exception as e:
            logger.warning(f"Failed to prerender {path}: {e}")

    logger.info(f"Prerendered {len(rendered)} pages")
    return rendered
