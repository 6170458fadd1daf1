import logging
from typing import List, Optional

from app.db.prismic import ContentClientError
from app.schemas.blog import PostPagination, PostSummary

logger = logging.getLogger(__name__)


class PostListState:
    """
    Posts shown on the list page plus the cursor for the next page.
    ``load_more`` appends in fetch order and never reorders or deduplicates.
    """

    def __init__(self, posts: List[PostSummary], next_page: Optional[str] = None):
        self.posts = list(posts)
        self.next_page = next_page
        self.loading = False

    @classmethod
    def from_pagination(cls, pagination: PostPagination) -> "PostListState":
        return cls(pagination.results, pagination.next_page)

    @property
    def has_more(self) -> bool:
        return bool(self.next_page)

    def load_more(self, service) -> List[PostSummary]:
        """Fetch the next page and return the posts that were appended."""
        if self.loading or not self.next_page:
            return []

        self.loading = True
        try:
            page = service.next_page(self.next_page)
        except ContentClientError as e:
            logger.error(f"Failed to load more posts from {self.next_page}: {e}")
            return []
        finally:
            self.loading = False

        self.posts.extend(page.results)
        self.next_page = page.next_page
        return page.results
