from typing import Optional
from urllib.parse import urlsplit

from app.settings import Settings, settings


def _repository_hosts(current_settings: Settings) -> set:
    host = current_settings.prismic_repository_host
    # Preview tokens are issued by the repository's non-CDN host.
    return {host, host.replace(".cdn.", ".")}


def is_trusted_cursor(cursor: Optional[str], current_settings: Settings = settings) -> bool:
    """A pagination cursor may only point back at the configured search API."""
    if not cursor:
        return False
    parts = urlsplit(cursor)
    endpoint = urlsplit(current_settings.PRISMIC_API_ENDPOINT)
    return (
        parts.scheme == endpoint.scheme
        and parts.hostname == endpoint.hostname
        and parts.path.startswith(endpoint.path.rstrip("/") + "/")
    )


def is_trusted_preview_token(
    token: Optional[str], current_settings: Settings = settings
) -> bool:
    if not token:
        return False
    parts = urlsplit(token)
    return parts.scheme == "https" and parts.hostname in _repository_hosts(
        current_settings
    )
