import logging
import time

import httpx

from client.client.api import PostService
from client.client.config import (
    CREATED_MESSAGE,
    DELETE_ERROR_MESSAGE,
    DELETED_MESSAGE,
    LOAD_ERROR_MESSAGE,
    SAVE_ERROR_MESSAGE,
    UPDATED_MESSAGE,
)
from client.client.state import (
    DeleteDismissed,
    DeleteFailed,
    DeleteRequested,
    DeleteStarted,
    DeleteSucceeded,
    EditCancelled,
    EditRequested,
    FetchFailed,
    FetchStarted,
    FetchSucceeded,
    FieldChanged,
    LoadingFinished,
    MessagesExpired,
    SubmitFailed,
    SubmitStarted,
    SubmitSucceeded,
    ViewState,
    reduce,
)
from client.client.utils import describe_error

logger = logging.getLogger('postboard.client.controller')

# Errors a request may end with: transport/HTTP failures or an undecodable body
REQUEST_ERRORS = (httpx.HTTPError, ValueError)


class PostManager:
    """
    Orchestrates the API calls behind every user action on the page.

    `loading` is only advisory: the page disables its buttons while it is set,
    but nothing here rejects a second action started in the meantime.
    """

    def __init__(self, service: PostService, state: ViewState | None = None, clock=time.monotonic):
        self.service = service
        self.state = state or ViewState()
        self.clock = clock

    def dispatch(self, action) -> ViewState:
        self.state = reduce(self.state, action)
        return self.state

    def load(self, page: int | None = None) -> None:
        page = page or self.state.page
        self.dispatch(FetchStarted(page))

        try:
            response = self.service.get_all_posts(page)
        except REQUEST_ERRORS as e:
            logger.error(f'Could not load posts: {e}')
            self.dispatch(FetchFailed(LOAD_ERROR_MESSAGE))
            return

        data = response.get('data') or {}
        posts = data.get('items') or []
        last_page = data.get('last_page', 1)

        # The page emptied under us (e.g. its last post was deleted)
        if not posts and page > last_page:
            self.load(last_page)
            return

        self.dispatch(FetchSucceeded(
            posts=posts,
            page=data.get('current_page', page),
            last_page=last_page,
            total=data.get('total', len(posts)),
        ))

    def change_page(self, page: int) -> None:
        self.load(max(1, page))

    def change_field(self, name: str, value) -> None:
        self.dispatch(FieldChanged(name, value))

    def submit(self) -> None:
        state = self.dispatch(SubmitStarted())

        try:
            if state.is_editing:
                self.service.update_post(state.editing_id, state.form_data)
                self.dispatch(SubmitSucceeded(UPDATED_MESSAGE, self.clock()))
                self.load()
            else:
                self.service.create_post(state.form_data)
                self.dispatch(SubmitSucceeded(CREATED_MESSAGE, self.clock()))
                # Newest posts come first
                self.load(1)
        except REQUEST_ERRORS as e:
            logger.error(f'Could not save post: {e}')
            self.dispatch(SubmitFailed(describe_error(SAVE_ERROR_MESSAGE, e)))
        finally:
            self.dispatch(LoadingFinished())

    def edit(self, post: dict) -> None:
        self.dispatch(EditRequested(post))

    def cancel_edit(self) -> None:
        self.dispatch(EditCancelled())

    def request_delete(self, post_id: int) -> None:
        self.dispatch(DeleteRequested(post_id))

    def dismiss_delete(self) -> None:
        self.dispatch(DeleteDismissed())

    def confirm_delete(self) -> None:
        post_id = self.state.pending_delete_id
        if post_id is None:
            return

        self.dispatch(DeleteStarted())

        try:
            self.service.delete_post(post_id)
            self.dispatch(DeleteSucceeded(DELETED_MESSAGE, self.clock()))
            self.load()
        except REQUEST_ERRORS as e:
            logger.error(f'Could not delete post {post_id}: {e}')
            self.dispatch(DeleteFailed(DELETE_ERROR_MESSAGE))
        finally:
            self.dispatch(LoadingFinished())

    def expire_messages(self) -> None:
        self.dispatch(MessagesExpired(self.clock()))

    def check_connection(self) -> bool:
        try:
            self.service.test_connection()
        except REQUEST_ERRORS as e:
            logger.warning(f'API is not reachable: {e}')
            return False
        return True
