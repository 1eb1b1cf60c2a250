# tests/client/test_controller.py
"""Tests for BlogController state transitions."""

import itertools

import pytest

from inkpost.client.api import ApiClientError
from inkpost.client.session import AuthSession, SessionStore
from inkpost.client.state import BlogController, SubmissionState

POST_A = {"id": 2, "title": "A", "content": "a", "categoryId": 1}
POST_B = {"id": 1, "title": "B", "content": "b", "categoryId": 1}


class FakeApi:
    """In-memory stand-in for BlogApiClient."""

    def __init__(self) -> None:
        self.fail = set()
        self.ids = itertools.count(100)
        self.pages = {}
        self.list_calls = []
        self.on_create = None
        self.on_list = None

    def _maybe_fail(self, name):
        if name in self.fail:
            raise ApiClientError(f"{name} failed", 500)

    def login(self, email, password):
        self._maybe_fail("login")
        return {"token": "tok", "user": {"username": "alice", "email": email}}

    def register(self, username, email, password):
        self._maybe_fail("register")
        return {"token": "tok", "user": {"username": username, "email": email}}

    def list_posts(self, page=1, limit=5, query=""):
        self.list_calls.append((page, limit, query))
        if self.on_list is not None:
            hook, self.on_list = self.on_list, None
            hook()
        self._maybe_fail("list_posts")
        return list(self.pages.get((page, query), []))

    def create_post(self, fields):
        if self.on_create is not None:
            self.on_create()
        self._maybe_fail("create_post")
        return {**fields, "id": next(self.ids)}

    def update_post(self, post_id, fields):
        self._maybe_fail("update_post")
        return {**POST_A, **fields, "id": post_id, "updatedAt": "later"}

    def delete_post(self, post_id):
        self._maybe_fail("delete_post")

    def list_categories(self):
        self._maybe_fail("list_categories")
        return [{"id": 1, "name": "Travel"}]

    def list_comments(self, post_id):
        self._maybe_fail("list_comments")
        return [{"id": 1, "postId": post_id, "username": "bob", "text": "old"}]

    def create_comment(self, post_id, text):
        self._maybe_fail("create_comment")
        return {"id": next(self.ids), "postId": post_id, "username": "alice", "text": text}

    def upload_image(self, filename, content, content_type="application/octet-stream"):
        self._maybe_fail("upload_image")
        return f"/uploads/x_{filename}"


@pytest.fixture()
def api():
    return FakeApi()


@pytest.fixture()
def session(tmp_path):
    return AuthSession(SessionStore(tmp_path / "session.json"))


@pytest.fixture()
def controller(api, session):
    ctl = BlogController(api, session)
    ctl.posts = [dict(POST_A), dict(POST_B)]
    return ctl


class TestAuthentication:
    def test_login_persists_session(self, controller, session) -> None:
        assert controller.login("alice@example.com", "pw") is True
        assert controller.user["username"] == "alice"
        assert session.store.read()["token"] == "tok"

    def test_failed_login_leaves_state_unchanged(self, controller, api, session) -> None:
        api.fail.add("login")
        assert controller.login("alice@example.com", "pw") is False
        assert controller.user is None
        assert not session.store.path.exists()
        assert controller.notices[-1].message == "Login failed"

    def test_failed_register(self, controller, api) -> None:
        api.fail.add("register")
        assert controller.register("alice", "alice@example.com", "pw") is False
        assert controller.notices[-1].message == "Register failed"

    def test_unwritable_session_file_leaves_state_unchanged(self, controller, session, monkeypatch) -> None:
        def _fail(*_args):
            raise OSError("read-only file system")

        monkeypatch.setattr(session.store, "write", _fail)
        assert controller.login("alice@example.com", "pw") is False
        assert controller.user is None
        assert session.token is None
        assert controller.notices[-1].message == "Login failed"

    def test_logout_clears_persisted_session(self, controller, session) -> None:
        controller.register("alice", "alice@example.com", "pw")
        controller.logout()
        assert controller.user is None
        assert not session.store.path.exists()

    def test_restore_session(self, api, session, tmp_path) -> None:
        session.persist({"username": "alice"}, "tok")
        fresh = BlogController(api, AuthSession(SessionStore(tmp_path / "session.json")))
        assert fresh.restore_session() is True
        assert fresh.user == {"username": "alice"}


class TestPostList:
    def test_load_posts_replaces_list(self, controller, api) -> None:
        api.pages[(1, "")] = [POST_B]
        assert controller.load_posts() is True
        assert controller.posts == [POST_B]
        assert controller.loading is False
        assert api.list_calls == [(1, 5, "")]

    def test_search_resets_to_first_page(self, controller, api) -> None:
        controller.page = 3
        controller.search("foo")
        assert controller.page == 1
        assert api.list_calls[-1] == (1, 5, "foo")

    def test_paging_keeps_query(self, controller, api) -> None:
        controller.search("foo")
        controller.next_page()
        assert api.list_calls[-1] == (2, 5, "foo")
        controller.previous_page()
        controller.previous_page()
        assert controller.page == 1

    def test_stale_response_is_dropped(self, controller, api) -> None:
        api.pages[(1, "old")] = [{"id": 1, "title": "old"}]
        api.pages[(1, "new")] = [{"id": 2, "title": "new"}]
        api.on_list = lambda: controller.search("new")

        assert controller.search("old") is False
        assert controller.posts == [{"id": 2, "title": "new"}]
        assert controller.query == "new"

    def test_load_failure_sets_error(self, controller, api) -> None:
        api.fail.add("list_posts")
        assert controller.load_posts() is False
        assert controller.error == "list_posts failed"
        assert controller.loading is False
        assert controller.posts == [POST_A, POST_B]


class TestOptimisticCreate:
    def test_success_replaces_temp_record(self, controller, api) -> None:
        seen = []
        api.on_create = lambda: seen.append([p["id"] for p in controller.posts])

        submission = controller.submit_post({"title": "C", "content": "c", "category": 1})

        assert len(seen[0]) == 3
        assert seen[0][0] == submission.temp_id
        assert submission.temp_id.startswith("temp-")
        assert seen[0][1:] == [POST_A["id"], POST_B["id"]]
        assert submission.state is SubmissionState.CONFIRMED
        assert [p["id"] for p in controller.posts] == [100, POST_A["id"], POST_B["id"]]

    def test_temp_record_uses_record_shape(self, controller, api) -> None:
        controller.categories = [{"id": 1, "name": "Travel"}]
        seen = []
        api.on_create = lambda: seen.append(dict(controller.posts[0]))

        controller.submit_post({"title": "C", "content": "c", "category": 1})

        assert seen[0]["categoryId"] == 1
        assert seen[0]["category"] == {"id": 1, "name": "Travel"}

        seen.clear()
        controller.submit_post({"title": "D", "content": "d", "category": 99})
        assert seen[0]["categoryId"] == 99
        assert seen[0]["category"] is None

    def test_failure_restores_previous_list(self, controller, api) -> None:
        api.fail.add("create_post")
        before = list(controller.posts)

        submission = controller.submit_post({"title": "C", "content": "c", "category": 1})

        assert submission.state is SubmissionState.ROLLED_BACK
        assert controller.posts == before
        assert controller.notices[-1].message == "Failed to create post"

    def test_concurrent_temp_ids_are_distinct(self, controller, api) -> None:
        inner = []
        api.on_create = lambda: (
            setattr(api, "on_create", None),
            inner.append(controller.submit_post({"title": "D"})),
        )
        outer = controller.submit_post({"title": "C"})
        assert outer.temp_id != inner[0].temp_id
        assert not any(str(p["id"]).startswith("temp-") for p in controller.posts)


class TestOptimisticUpdate:
    def test_in_flight_edit_uses_record_shape(self, controller, api) -> None:
        controller.categories = [{"id": 3, "name": "Food"}]
        seen = []
        server_update = api.update_post

        def _update(post_id, fields):
            seen.append(dict(controller.posts[0]))
            return server_update(post_id, fields)

        api.update_post = _update
        controller.save_post(POST_A["id"], {"category": 3})

        assert seen[0]["categoryId"] == 3
        assert seen[0]["category"] == {"id": 3, "name": "Food"}
        assert seen[0]["title"] == "A"

    def test_success_uses_server_record(self, controller) -> None:
        submission = controller.save_post(POST_A["id"], {"title": "A2"})
        assert submission.state is SubmissionState.CONFIRMED
        assert controller.posts[0]["title"] == "A2"
        assert controller.posts[0]["updatedAt"] == "later"

    def test_failure_restores_previous_record(self, controller, api) -> None:
        api.fail.add("update_post")
        submission = controller.save_post(POST_A["id"], {"title": "A2"})
        assert submission.state is SubmissionState.ROLLED_BACK
        assert controller.posts == [POST_A, POST_B]
        assert controller.notices[-1].message == "Failed to update post"


class TestOtherActions:
    def test_delete_post(self, controller) -> None:
        assert controller.delete_post(POST_A["id"]) is True
        assert controller.posts == [POST_B]

    def test_failed_delete_keeps_post(self, controller, api) -> None:
        api.fail.add("delete_post")
        assert controller.delete_post(POST_A["id"]) is False
        assert controller.posts == [POST_A, POST_B]

    def test_load_categories(self, controller) -> None:
        assert controller.load_categories() is True
        assert controller.categories == [{"id": 1, "name": "Travel"}]

    def test_add_comment_requires_sign_in(self, controller) -> None:
        assert controller.add_comment(1, "hello") is None
        assert controller.notices[-1].message == "Sign in to comment"

    def test_add_comment_ignores_empty_text(self, controller, session) -> None:
        session.persist({"username": "alice"}, "tok")
        assert controller.add_comment(1, "   ") is None
        assert controller.notices == []

    def test_add_comment_prepends(self, controller, session) -> None:
        session.persist({"username": "alice"}, "tok")
        controller.load_comments(1)
        comment = controller.add_comment(1, "new")
        assert controller.comments[1][0] == comment
        assert [c["text"] for c in controller.comments[1]] == ["new", "old"]

    def test_upload_image(self, controller, api) -> None:
        assert controller.upload_image("p.png", b"data") == "/uploads/x_p.png"
        api.fail.add("upload_image")
        assert controller.upload_image("p.png", b"data") is None
        assert controller.notices[-1].message == "Image upload failed"

    def test_notice_callback(self, api, session) -> None:
        received = []
        ctl = BlogController(api, session, on_notice=received.append)
        api.fail.add("list_categories")
        ctl.load_categories()
        assert [n.message for n in received] == ["Failed to load categories"]
