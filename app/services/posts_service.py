import logging
from typing import List, Optional

from markupsafe import escape

from app.db.prismic import at
from app.schemas.blog import AdjacentPost, PostDetail, PostPagination, PostSummary
from app.services.rich_text import as_html, as_text
from app.utils import calculate_reading_time

logger = logging.getLogger(__name__)

POST_TYPE = "posts"
ASCENDING = "[document.first_publication_date]"
DESCENDING = "[document.first_publication_date desc]"
SUMMARY_FIELDS = ["posts.title", "posts.subtitle", "posts.author"]


class PostsService:
    def __init__(self, client, page_size: int = 2, words_per_minute: int = 200):
        self.client = client
        self.page_size = page_size
        self.words_per_minute = words_per_minute

    def list_posts(self, ref: Optional[str] = None) -> PostPagination:
        """First page of summaries, oldest first."""
        response = self.client.query(
            [at("document.type", POST_TYPE)],
            fetch=SUMMARY_FIELDS,
            page_size=self.page_size,
            orderings=ASCENDING,
            ref=ref,
        )
        return parse_pagination(response)

    def next_page(self, cursor: str) -> PostPagination:
        return parse_pagination(self.client.get_next_page(cursor))

    def get_post(self, slug: str, ref: Optional[str] = None) -> Optional[PostDetail]:
        doc = self.client.get_by_uid(POST_TYPE, slug, ref=ref)
        if not doc:
            logger.info(f"No post found for slug {slug}")
            return None

        post = parse_post_detail(doc)
        post.prevPost = self._adjacent(doc["id"], DESCENDING, ref)
        post.nextPost = self._adjacent(doc["id"], ASCENDING, ref)
        return post

    def get_static_slugs(self) -> List[str]:
        response = self.client.query(
            [at("document.type", POST_TYPE)],
            fetch=["posts.uid"],
            page_size=self.page_size,
        )
        return [doc["uid"] for doc in response.get("results", []) if doc.get("uid")]

    def resolve_post_uid(self, document_id: str, ref: Optional[str] = None) -> Optional[str]:
        """UID of a post document, used to route a preview to its page."""
        doc = self.client.get_by_id(document_id, ref=ref)
        if not doc or doc.get("type") != POST_TYPE:
            return None
        return doc.get("uid")

    def reading_time(self, post: PostDetail) -> int:
        return reading_time(post, self.words_per_minute)

    def _adjacent(
        self, document_id: str, orderings: str, ref: Optional[str]
    ) -> Optional[AdjacentPost]:
        response = self.client.query(
            [at("document.type", POST_TYPE)],
            fetch=["posts.title"],
            page_size=1,
            orderings=orderings,
            after=document_id,
            ref=ref,
        )
        results = response.get("results") or []
        if not results:
            return None
        neighbour = results[0]
        return AdjacentPost(uid=neighbour["uid"], title=neighbour["data"]["title"])


def parse_post_summary(doc: dict) -> PostSummary:
    data = doc.get("data") or {}
    return PostSummary.model_validate(
        {
            "uid": doc.get("uid"),
            "first_publication_date": doc.get("first_publication_date"),
            "data": {
                "title": data.get("title"),
                "subtitle": data.get("subtitle"),
                "author": data.get("author"),
            },
        }
    )


def parse_pagination(response: dict) -> PostPagination:
    return PostPagination(
        next_page=response.get("next_page"),
        results=[parse_post_summary(doc) for doc in response.get("results", [])],
    )


def parse_post_detail(doc: dict) -> PostDetail:
    data = doc.get("data") or {}
    banner = data.get("banner") or {}
    return PostDetail.model_validate(
        {
            "uid": doc.get("uid"),
            "first_publication_date": doc.get("first_publication_date"),
            "last_publication_date": doc.get("last_publication_date"),
            "data": {
                "title": data.get("title"),
                "subtitle": data.get("subtitle"),
                "author": data.get("author"),
                "banner": {"url": banner.get("url")},
                "content": [
                    {"heading": block.get("heading") or "", "body": block.get("body") or []}
                    for block in data.get("content") or []
                ],
            },
        }
    )


def reading_time(post: PostDetail, words_per_minute: int = 200) -> int:
    texts = []
    for block in post.data.content:
        texts.append(block.heading)
        texts.append(as_text(block.body))
    return calculate_reading_time(texts, words_per_minute)


def render_content(post: PostDetail) -> str:
    """Each block's heading as <h2> followed by its body markup."""
    return "".join(
        f"<h2>{escape(block.heading)}</h2>{as_html(block.body)}"
        for block in post.data.content
    )


def is_edited(post: PostDetail) -> bool:
    return (
        post.last_publication_date is not None
        and post.last_publication_date != post.first_publication_date
    )

