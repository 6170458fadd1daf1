import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import RedirectResponse

from app import dependencies as deps
from app.db.prismic import ContentClientError
from app.security import is_trusted_preview_token
from app.services.posts_service import PostsService
from app.settings import Settings, get_settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


@router.get("/preview")
def enter_preview(
    token: str,
    document_id: Optional[str] = Query(None, alias="documentId"),
    service: PostsService = Depends(deps.get_posts_service),
    current_settings: Settings = Depends(get_settings),
):
    """Start a preview session and send the editor to the previewed post."""
    if not is_trusted_preview_token(token, current_settings):
        raise HTTPException(status_code=400, detail="Invalid preview token")

    uid = None
    if document_id:
        try:
            uid = service.resolve_post_uid(document_id, ref=token)
        except ContentClientError as e:
            logger.warning(f"Could not resolve preview document {document_id}: {e}")

    response = RedirectResponse(f"/post/{uid}" if uid else "/", status_code=307)
    response.set_cookie(
        current_settings.PREVIEW_COOKIE, token, httponly=True, samesite="lax"
    )
    return response


@router.get("/exit-preview")
def exit_preview(current_settings: Settings = Depends(get_settings)):
    response = RedirectResponse("/", status_code=307)
    response.delete_cookie(current_settings.PREVIEW_COOKIE)
    return response
