import logging
import threading
import time
from typing import Callable, Dict, Optional, Tuple

logger = logging.getLogger(__name__)


class PageCache:
    """
    Rendered pages keyed by path, regenerated once older than ``revalidate_seconds``.
    Shared by route handlers running in the threadpool, so every access holds the lock.
    """

    def __init__(
        self,
        revalidate_seconds: int = 60,
        max_entries: int = 256,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.revalidate_seconds = revalidate_seconds
        self.max_entries = max_entries
        self.clock = clock
        self._pages: Dict[str, Tuple[float, str]] = {}
        self._lock = threading.Lock()

    def get(self, path: str) -> Optional[str]:
        with self._lock:
            entry = self._pages.get(path)
        if not entry:
            return None
        rendered_at, html = entry
        if self.clock() - rendered_at >= self.revalidate_seconds:
            logger.debug(f"Page {path} is stale, revalidating")
            return None
        return html

    def set(self, path: str, html: str) -> None:
        now = self.clock()
        with self._lock:
            self._pages[path] = (now, html)
            if len(self._pages) > self.max_entries:
                self._prune(now)

    def invalidate(self, path: str) -> None:
        with self._lock:
            self._pages.pop(path, None)

    def clear(self) -> None:
        with self._lock:
            self._pages.clear()

    def __contains__(self, path: str) -> bool:
        return self.get(path) is not None

    def _prune(self, now: float) -> None:
        # Caller holds the lock.
        stale = [
            path
            for path, (rendered_at, _) in self._pages.items()
            if now - rendered_at >= self.revalidate_seconds
        ]
        for path in stale:
            self._pages.pop(path, None)

        # Still too many fresh pages: drop the oldest.
        overflow = len(self._pages) - self.max_entries
        if overflow > 0:
            by_age = sorted(self._pages.items(), key=lambda item: item[1][0])
            for path, _ in by_age[:overflow]:
                self._pages.pop(path, None)
