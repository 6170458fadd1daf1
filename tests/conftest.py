from typing import Optional

import pytest

from app.db.prismic import ContentClientError
from app.schemas.blog import PostPagination
from app.services.posts_service import PostsService, parse_post_detail


def make_doc(
    uid: str,
    title: Optional[str] = None,
    first: Optional[str] = "2021-03-15T19:25:28+0000",
    last: Optional[str] = None,
    content=None,
    **data,
) -> dict:
    """Prismic-shaped post document."""
    return {
        "id": f"id-{uid}",
        "uid": uid,
        "type": "posts",
        "first_publication_date": first,
        "last_publication_date": last or first,
        "data": {
            "title": title or uid.replace("-", " ").title(),
            "subtitle": data.get("subtitle", f"About {uid}"),
            "author": data.get("author", "Joseph Oliveira"),
            "banner": {"url": data.get("banner", f"https://images.prismic.io/{uid}.png")},
            "content": content if content is not None else [],
        },
    }


def paragraph(text: str, spans=None) -> dict:
    return {"type": "paragraph", "text": text, "spans": spans or []}


class FakeContentClient:
    """
    Minimal in-memory Prismic stand-in.
    ``docs`` are kept in ascending publication order; every call is recorded.
    """

    def __init__(self, docs=None, pages=None, fail_next_page: bool = False):
        self.docs = list(docs or [])
        self.pages = pages or {}
        self.fail_next_page = fail_next_page
        self.calls = []

    def query(
        self,
        predicates,
        *,
        fetch=None,
        page_size=20,
        orderings=None,
        after=None,
        ref=None,
    ):
        self.calls.append(("query", orderings, after, ref))
        docs = list(self.docs)
        if orderings and "desc" in orderings:
            docs.reverse()
        if after:
            ids = [d["id"] for d in docs]
            docs = docs[ids.index(after) + 1 :] if after in ids else []
        return {
            "results": docs[:page_size],
            "next_page": "https://spacetraveling.cdn.prismic.io/api/v2/documents/search?page=2"
            if len(docs) > page_size
            else None,
        }

    def get_by_uid(self, document_type, uid, ref=None):
        self.calls.append(("get_by_uid", uid, ref))
        return next((d for d in self.docs if d["uid"] == uid), None)

    def get_by_id(self, document_id, ref=None):
        self.calls.append(("get_by_id", document_id, ref))
        return next((d for d in self.docs if d["id"] == document_id), None)

    def get_next_page(self, cursor):
        self.calls.append(("get_next_page", cursor))
        if self.fail_next_page:
            raise ContentClientError("network down")
        return self.pages[cursor]


class FakePostsService:
    """
    Minimal posts service stand-in for router tests.
    """

    def __init__(
        self,
        list_posts_return: Optional[PostPagination] = None,
        get_post_return=None,
        next_page_return: Optional[PostPagination] = None,
        static_slugs=None,
    ):
        self._list_posts_return = list_posts_return or PostPagination()
        self._get_post_return = get_post_return
        self._next_page_return = next_page_return
        self._static_slugs = static_slugs or []
        self.calls = []

    def list_posts(self, ref=None):
        self.calls.append(("list_posts", ref))
        return self._list_posts_return

    def next_page(self, cursor):
        self.calls.append(("next_page", cursor))
        if self._next_page_return is None:
            raise ContentClientError("boom")
        return self._next_page_return

    def get_post(self, slug: str, ref=None):
        self.calls.append(("get_post", slug, ref))
        return self._get_post_return

    def get_static_slugs(self):
        return self._static_slugs

    def resolve_post_uid(self, document_id, ref=None):
        self.calls.append(("resolve_post_uid", document_id, ref))
        return None

    def reading_time(self, post):
        return PostsService(client=None).reading_time(post)


@pytest.fixture
def three_posts():
    return [
        make_doc("a", first="2021-03-01T10:00:00+0000"),
        make_doc("b", first="2021-03-02T10:00:00+0000"),
        make_doc("c", first="2021-03-03T10:00:00+0000"),
    ]


@pytest.fixture
def sample_post():
    doc = make_doc(
        "como-utilizar-hooks",
        title="Como utilizar Hooks",
        first="2021-03-15T19:25:28+0000",
        content=[
            {"heading": "Proin et varius", "body": [paragraph("Lorem ipsum dolor")]},
        ],
    )
    return parse_post_detail(doc)
