import logging
import threading
import time
from typing import Callable, Dict, Iterator, List, Optional, Tuple

import httpx

from app.security import is_trusted_cursor
from app.settings import settings

logger = logging.getLogger(__name__)

# Master refs per endpoint, shared across requests: endpoint -> (fetched_at, ref)
_master_refs: Dict[str, Tuple[float, str]] = {}
_master_refs_lock = threading.Lock()


def clear_master_refs() -> None:
    with _master_refs_lock:
        _master_refs.clear()


class ContentClientError(Exception):
    """The content repository could not be reached or answered with an error."""


def at(path: str, value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'[at({path}, "{escaped}")]'


class PrismicClient:
    """
    Thin adapter over the Prismic REST API v2.
    Only the calls the pages need: search, by-UID, by-ID and next-page.
    """

    def __init__(
        self,
        http: httpx.Client,
        endpoint: str,
        access_token: str = "",
        ref_ttl_seconds: float = 30.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.http = http
        self.endpoint = endpoint.rstrip("/")
        self.access_token = access_token
        self.ref_ttl_seconds = ref_ttl_seconds
        self.clock = clock

    def master_ref(self) -> str:
        """Current master ref, reused across clients until ``ref_ttl_seconds`` pass."""
        with _master_refs_lock:
            entry = _master_refs.get(self.endpoint)
        if entry and self.clock() - entry[0] < self.ref_ttl_seconds:
            return entry[1]

        api = self._get(self.endpoint, params=self._token_params())
        refs = api.get("refs", [])
        master = next((r for r in refs if r.get("isMasterRef")), None)
        if not master:
            raise ContentClientError("Repository exposes no master ref")

        with _master_refs_lock:
            _master_refs[self.endpoint] = (self.clock(), master["ref"])
        return master["ref"]

    def query(
        self,
        predicates: List[str],
        *,
        fetch: Optional[List[str]] = None,
        page_size: int = 20,
        orderings: Optional[str] = None,
        after: Optional[str] = None,
        ref: Optional[str] = None,
    ) -> dict:
        params = {
            "ref": ref or self.master_ref(),
            "q": f"[{''.join(predicates)}]",
            "pageSize": page_size,
        }
        if fetch:
            params["fetch"] = ",".join(fetch)
        if orderings:
            params["orderings"] = orderings
        if after:
            params["after"] = after
        params.update(self._token_params())
        return self._get(f"{self.endpoint}/documents/search", params=params)

    def get_by_uid(
        self, document_type: str, uid: str, ref: Optional[str] = None
    ) -> Optional[dict]:
        response = self.query(
            [at(f"my.{document_type}.uid", uid)], page_size=1, ref=ref
        )
        results = response.get("results") or []
        return results[0] if results else None

    def get_by_id(self, document_id: str, ref: Optional[str] = None) -> Optional[dict]:
        response = self.query([at("document.id", document_id)], page_size=1, ref=ref)
        results = response.get("results") or []
        return results[0] if results else None

    def get_next_page(self, cursor: str) -> dict:
        """Follow a ``next_page`` URL returned by a previous query."""
        if not is_trusted_cursor(cursor, settings):
            raise ContentClientError(f"Refusing to follow cursor {cursor!r}")
        return self._get(cursor)

    def _token_params(self) -> dict:
        return {"access_token": self.access_token} if self.access_token else {}

    def _get(self, url: str, params: Optional[dict] = None) -> dict:
        logger.debug(f"GET {url}")
        try:
            response = self.http.get(url, params=params)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPError as e:
            raise ContentClientError(f"Request to {url} failed: {e}") from e
        except ValueError as e:
            raise ContentClientError(f"Invalid JSON from {url}: {e}") from e


def get_prismic() -> Iterator[PrismicClient]:
    """
    Open an HTTP client for the configured repository.
    Called at runtime to avoid import-time connections.
    """
    with httpx.Client(timeout=settings.PRISMIC_TIMEOUT_SECONDS) as http:
        yield PrismicClient(
            http,
            endpoint=settings.PRISMIC_API_ENDPOINT,
            access_token=settings.PRISMIC_ACCESS_TOKEN,
            ref_ttl_seconds=settings.PRISMIC_REF_TTL_SECONDS,
        )
