"""
Tests for PostManager, the controller behind the Streamlit page.

The controller talks to the real FastAPI app through TestClient, so these are
end-to-end runs of every user action.
"""

from __future__ import annotations

import httpx
import pytest
from fastapi.testclient import TestClient

from app.main import app
from client.client.api import PostService
from client.client.config import (
    CREATED_MESSAGE,
    DELETE_ERROR_MESSAGE,
    DELETED_MESSAGE,
    LOAD_ERROR_MESSAGE,
    SAVE_ERROR_MESSAGE,
    SUCCESS_MESSAGE_TTL,
    UPDATED_MESSAGE,
)
from client.client.controller import PostManager
from client.client.state import empty_form


class FakeClock:
    def __init__(self, now: float = 100.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def manager(clock: FakeClock) -> PostManager:
    service = PostService(client=TestClient(app, base_url="http://testserver/api"))
    return PostManager(service, clock=clock)


@pytest.fixture
def offline_manager(clock: FakeClock) -> PostManager:
    def unreachable(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = httpx.Client(base_url="http://api.test/api", transport=httpx.MockTransport(unreachable))
    return PostManager(PostService(client=client), clock=clock)


def fill_form(manager: PostManager, **fields) -> None:
    values = {"title": "A", "content": "B", "author": "C", **fields}
    for name, value in values.items():
        manager.change_field(name, value)


class TestLoad:
    """Loading the list on mount and checking the connection."""

    def test_mount_with_no_posts(self, manager: PostManager) -> None:
        manager.load()

        assert manager.state.posts == []
        assert manager.state.loading is False
        assert manager.state.error is None

    def test_load_failure(self, offline_manager: PostManager) -> None:
        offline_manager.load()

        assert offline_manager.state.error == LOAD_ERROR_MESSAGE
        assert offline_manager.state.posts == []
        assert offline_manager.state.loading is False

    def test_check_connection(self, manager: PostManager, offline_manager: PostManager) -> None:
        assert manager.check_connection() is True
        assert offline_manager.check_connection() is False


class TestSubmit:
    """Submitting the form in create and edit mode."""

    def test_create(self, manager: PostManager, clock: FakeClock) -> None:
        fill_form(manager, is_published=True)

        manager.submit()

        state = manager.state
        assert state.loading is False
        assert state.error is None
        assert state.success_message == CREATED_MESSAGE
        assert state.success_expires_at == clock.now + SUCCESS_MESSAGE_TTL
        assert state.form_data == empty_form()
        assert state.editing_id is None
        assert len(state.posts) == 1
        assert state.posts[0]["title"] == "A"
        assert state.posts[0]["is_published"] is True

    def test_update(self, manager: PostManager) -> None:
        fill_form(manager)
        manager.submit()
        post = manager.state.posts[0]

        manager.edit(post)
        manager.change_field("title", "Edited")
        manager.submit()

        state = manager.state
        assert state.success_message == UPDATED_MESSAGE
        assert state.editing_id is None
        assert [p["title"] for p in state.posts] == ["Edited"]
        assert state.posts[0]["id"] == post["id"]

    def test_validation_failure_keeps_draft(self, manager: PostManager) -> None:
        fill_form(manager, author="")

        manager.submit()

        state = manager.state
        assert state.error.startswith(SAVE_ERROR_MESSAGE)
        assert "The author field is required." in state.error
        assert state.success_message is None
        assert state.loading is False
        assert state.form_data["title"] == "A"

    def test_transport_failure(self, offline_manager: PostManager) -> None:
        fill_form(offline_manager)

        offline_manager.submit()

        assert offline_manager.state.error == SAVE_ERROR_MESSAGE
        assert offline_manager.state.loading is False

    def test_updating_a_vanished_post(self, manager: PostManager) -> None:
        manager.edit({"id": 12345, "title": "A", "content": "B", "author": "C", "is_published": False})

        manager.submit()

        assert manager.state.error == SAVE_ERROR_MESSAGE
        assert manager.state.editing_id == 12345

    def test_success_message_expires(self, manager: PostManager, clock: FakeClock) -> None:
        fill_form(manager)
        manager.submit()

        clock.now += SUCCESS_MESSAGE_TTL - 1
        manager.expire_messages()
        assert manager.state.success_message == CREATED_MESSAGE

        clock.now += 1
        manager.expire_messages()
        assert manager.state.success_message is None


class TestEdit:
    """Entering and leaving edit mode."""

    def test_cancel_edit(self, manager: PostManager) -> None:
        fill_form(manager)
        manager.submit()
        manager.edit(manager.state.posts[0])

        manager.cancel_edit()

        assert manager.state.editing_id is None
        assert manager.state.form_data == empty_form()


class TestDelete:
    """Deleting a post behind a confirmation step."""

    def test_delete_requires_confirmation(self, manager: PostManager) -> None:
        fill_form(manager)
        manager.submit()
        post_id = manager.state.posts[0]["id"]

        manager.request_delete(post_id)
        manager.dismiss_delete()
        manager.confirm_delete()

        assert [p["id"] for p in manager.state.posts] == [post_id]

    def test_confirmed_delete(self, manager: PostManager) -> None:
        fill_form(manager)
        manager.submit()
        post_id = manager.state.posts[0]["id"]

        manager.request_delete(post_id)
        manager.confirm_delete()

        state = manager.state
        assert state.posts == []
        assert state.success_message == DELETED_MESSAGE
        assert state.loading is False
        assert state.pending_delete_id is None

    def test_delete_of_missing_post(self, manager: PostManager) -> None:
        manager.request_delete(999999)

        manager.confirm_delete()

        assert manager.state.error == DELETE_ERROR_MESSAGE
        assert manager.state.loading is False


class TestPagination:
    """Moving between pages of the list."""

    def test_change_page(self, manager: PostManager) -> None:
        for i in range(11):
            fill_form(manager, title=f"post {i}")
            manager.submit()

        assert manager.state.total == 11
        assert manager.state.last_page == 2

        manager.change_page(2)

        assert manager.state.page == 2
        assert [p["title"] for p in manager.state.posts] == ["post 0"]

    def test_emptied_page_falls_back(self, manager: PostManager) -> None:
        for i in range(11):
            fill_form(manager, title=f"post {i}")
            manager.submit()
        manager.change_page(2)

        manager.request_delete(manager.state.posts[0]["id"])
        manager.confirm_delete()

        assert manager.state.page == 1
        assert len(manager.state.posts) == 10
        assert manager.state.last_page == 1
