from typing import Optional

from fastapi import Depends, Request
from pydantic import BaseModel

from app.security import is_trusted_preview_token
from app.settings import Settings, get_settings


class PreviewMode(BaseModel):
    active: bool = False
    ref: Optional[str] = None


def get_preview_mode(
    request: Request,
    current_settings: Settings = Depends(get_settings),
) -> PreviewMode:
    """Preview state for this request, read from the preview cookie."""
    ref = request.cookies.get(current_settings.PREVIEW_COOKIE)
    if not is_trusted_preview_token(ref, current_settings):
        return PreviewMode()
    return PreviewMode(active=True, ref=ref)
