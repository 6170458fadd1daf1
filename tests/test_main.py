from fastapi.testclient import TestClient

import app.main as main_module
from app import dependencies as deps
from app.main import app
from app.schemas.blog import PostPagination
from app.services.page_cache import PageCache
from app.services.posts_service import parse_post_summary
from tests.conftest import FakePostsService, make_doc


def test_lifespan_warms_and_clears_page_cache(monkeypatch):
    warmed = []

    def fake_warm_page_cache():
        warmed.append(True)
        main_module.page_cache.set("/", "<p>warm</p>")
        return ["/"]

    monkeypatch.setattr(main_module, "warm_page_cache", fake_warm_page_cache)

    with TestClient(app) as client:
        res = client.get("/")
        assert res.status_code == 200
        assert res.text == "<p>warm</p>"

    assert warmed == [True]
    assert main_module.page_cache.get("/") is None


def test_lifespan_survives_warm_up_failure(monkeypatch, caplog):
    def boom():
        raise RuntimeError("no network")

    monkeypatch.setattr(main_module, "warm_page_cache", boom)

    original_overrides = dict(app.dependency_overrides)
    app.dependency_overrides[deps.get_page_cache] = lambda: PageCache()
    app.dependency_overrides[deps.get_posts_service] = lambda: FakePostsService(
        list_posts_return=PostPagination(results=[parse_post_summary(make_doc("a"))])
    )
    try:
        with caplog.at_level("WARNING"):
            with TestClient(app) as client:
                res = client.get("/")
                assert res.status_code == 200
                assert "/post/a" in res.text
    finally:
        app.dependency_overrides = original_overrides

    assert any("Page cache warm-up failed" in r.message for r in caplog.records)


def test_static_assets_and_exit_preview_are_mounted(monkeypatch):
    monkeypatch.setattr(main_module, "warm_page_cache", lambda: [])

    with TestClient(app) as client:
        assert client.get("/static/logo.svg").status_code == 200
        assert client.get("/static/load_more.js").status_code == 200

        res = client.get("/api/exit-preview", follow_redirects=False)
        assert res.status_code == 307
        assert res.headers["location"] == "/"


def test_lifespan_warns_when_comment_repo_is_unset(monkeypatch, caplog):
    monkeypatch.setattr(main_module, "warm_page_cache", lambda: [])
    monkeypatch.setattr(
        main_module, "settings", main_module.settings.model_copy(update={"UTTERANCES_REPO": ""})
    )

    with caplog.at_level("WARNING"):
        with TestClient(app):
            pass

    assert any("UTTERANCES_REPO is not set" in r.message for r in caplog.records)


def test_lifespan_is_quiet_when_comment_repo_is_set(monkeypatch, caplog):
    monkeypatch.setattr(main_module, "warm_page_cache", lambda: [])
    monkeypatch.setattr(
        main_module,
        "settings",
        main_module.settings.model_copy(update={"UTTERANCES_REPO": "owner/blog-comments"}),
    )

    with caplog.at_level("WARNING"):
        with TestClient(app):
            pass

    assert not any("UTTERANCES_REPO" in r.message for r in caplog.records)
