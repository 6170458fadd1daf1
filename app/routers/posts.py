import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import HTMLResponse, RedirectResponse

from app import dependencies as deps
from app.preview import PreviewMode, get_preview_mode
from app.schemas.blog import LoadMoreResponse
from app.services.page_cache import PageCache
from app.services.post_list import PostListState
from app.services.posts_service import PostsService
from app.services.static_pages import (
    render_home_page,
    render_post_items,
    render_post_page,
)
from app.settings import Settings, get_settings

logger = logging.getLogger(__name__)

router = APIRouter()


def _page_response(html: str, preview: PreviewMode, current_settings: Settings) -> HTMLResponse:
    response = HTMLResponse(html)
    if preview.active:
        response.headers["Cache-Control"] = "no-store"
    else:
        response.headers["Cache-Control"] = (
            f"s-maxage={current_settings.REVALIDATE_SECONDS}, "
            f"stale-while-revalidate={current_settings.REVALIDATE_SECONDS}"
        )
    return response


@router.get("/", response_class=HTMLResponse)
def list_posts(
    service: PostsService = Depends(deps.get_posts_service),
    preview: PreviewMode = Depends(get_preview_mode),
    cache: PageCache = Depends(deps.get_page_cache),
    current_settings: Settings = Depends(get_settings),
):
    """Post list page."""
    if not preview.active:
        cached = cache.get("/")
        if cached is not None:
            return _page_response(cached, preview, current_settings)

    try:
        html = render_home_page(service.list_posts(ref=preview.ref), preview)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error listing posts: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve posts")

    if not preview.active:
        cache.set("/", html)
    return _page_response(html, preview, current_settings)


@router.get("/post/{slug}", response_class=HTMLResponse)
def get_post(
    slug: str,
    service: PostsService = Depends(deps.get_posts_service),
    preview: PreviewMode = Depends(get_preview_mode),
    cache: PageCache = Depends(deps.get_page_cache),
    current_settings: Settings = Depends(get_settings),
):
    """Post detail page. Unknown slugs go back to the list."""
    path = f"/post/{slug}"
    if not preview.active:
        cached = cache.get(path)
        if cached is not None:
            return _page_response(cached, preview, current_settings)

    try:
        post = service.get_post(slug, ref=preview.ref)
        if not post:
            return RedirectResponse("/", status_code=307)
        html = render_post_page(post, preview, service, current_settings)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error retrieving post {slug}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve post")

    if not preview.active:
        cache.set(path, html)
    return _page_response(html, preview, current_settings)


@router.get("/api/posts", response_model=LoadMoreResponse)
def load_more_posts(
    cursor: str = Query(..., min_length=1),
    service: PostsService = Depends(deps.get_posts_service),
):
    """
    Next page of the post list, rendered as list items.
    A failed fetch returns no posts and the same cursor so the client can retry.
    """
    state = PostListState([], next_page=cursor)
    appended = state.load_more(service)
    return LoadMoreResponse(html=render_post_items(appended), next_page=state.next_page)
