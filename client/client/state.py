"""View state of the post manager page.

The state is an immutable value; the only way to change it is to run an
action through `reduce`. Keeping it a plain dataclass means it can be stored
in the Streamlit session and dumped with `to_dict()`.
"""
from dataclasses import asdict, dataclass, field, replace
from typing import Any, Optional

from client.client.config import SUCCESS_MESSAGE_TTL

FORM_FIELDS = ('title', 'content', 'author', 'is_published')
CHECKBOX_FIELDS = ('is_published',)


def empty_form() -> dict:
    return {'title': '', 'content': '', 'author': '', 'is_published': False}


@dataclass(frozen=True)
class ViewState:
    posts: list = field(default_factory=list)
    loading: bool = False
    error: Optional[str] = None
    success_message: Optional[str] = None
    success_expires_at: Optional[float] = None
    form_data: dict = field(default_factory=empty_form)
    # None means create-mode
    editing_id: Optional[int] = None
    pending_delete_id: Optional[int] = None
    page: int = 1
    last_page: int = 1
    total: int = 0
    # Bumped whenever the form is re-seeded so widgets pick up the new values
    form_revision: int = 0

    @property
    def is_editing(self) -> bool:
        return self.editing_id is not None

    def to_dict(self) -> dict:
        return asdict(self)


# Actions

@dataclass(frozen=True)
class FetchStarted:
    page: int


@dataclass(frozen=True)
class FetchSucceeded:
    posts: list
    page: int = 1
    last_page: int = 1
    total: int = 0


@dataclass(frozen=True)
class FetchFailed:
    error: str


@dataclass(frozen=True)
class FieldChanged:
    name: str
    value: Any


@dataclass(frozen=True)
class SubmitStarted:
    pass


@dataclass(frozen=True)
class SubmitSucceeded:
    message: str
    now: float


@dataclass(frozen=True)
class SubmitFailed:
    error: str


@dataclass(frozen=True)
class EditRequested:
    post: dict


@dataclass(frozen=True)
class EditCancelled:
    pass


@dataclass(frozen=True)
class DeleteRequested:
    post_id: int


@dataclass(frozen=True)
class DeleteDismissed:
    pass


@dataclass(frozen=True)
class DeleteStarted:
    pass


@dataclass(frozen=True)
class DeleteSucceeded:
    message: str
    now: float


@dataclass(frozen=True)
class DeleteFailed:
    error: str


@dataclass(frozen=True)
class LoadingFinished:
    pass


@dataclass(frozen=True)
class MessagesExpired:
    now: float


def _reset_form(state: ViewState) -> ViewState:
    return replace(state, form_data=empty_form(), editing_id=None, form_revision=state.form_revision + 1)


def _succeed(state: ViewState, message: str, now: float) -> ViewState:
    return replace(state, success_message=message, success_expires_at=now + SUCCESS_MESSAGE_TTL)


def _fail(state: ViewState, error: str) -> ViewState:
    return replace(state, error=error, loading=False)


def _field_changed(state, action):
    if action.name not in FORM_FIELDS:
        return state
    value = bool(action.value) if action.name in CHECKBOX_FIELDS else action.value
    return replace(state, form_data={**state.form_data, action.name: value})


def _edit_requested(state, action):
    post = action.post
    form_data = {name: post.get(name, default) for name, default in empty_form().items()}
    form_data['is_published'] = bool(form_data['is_published'])
    return replace(
        state,
        form_data=form_data,
        editing_id=post['id'],
        pending_delete_id=None,
        form_revision=state.form_revision + 1,
    )


def _messages_expired(state, action):
    if state.success_expires_at is None or action.now < state.success_expires_at:
        return state
    return replace(state, success_message=None, success_expires_at=None)


_HANDLERS = {
    FetchStarted: lambda s, a: replace(s, loading=True, error=None, page=a.page),
    FetchSucceeded: lambda s, a: replace(
        s, posts=list(a.posts), page=a.page, last_page=a.last_page, total=a.total, loading=False
    ),
    FetchFailed: lambda s, a: replace(s, error=a.error, posts=[], loading=False),
    FieldChanged: _field_changed,
    SubmitStarted: lambda s, a: replace(s, loading=True, error=None, success_message=None, success_expires_at=None),
    SubmitSucceeded: lambda s, a: _succeed(_reset_form(s), a.message, a.now),
    SubmitFailed: lambda s, a: _fail(s, a.error),
    EditRequested: _edit_requested,
    EditCancelled: lambda s, a: _reset_form(s),
    DeleteRequested: lambda s, a: replace(s, pending_delete_id=a.post_id),
    DeleteDismissed: lambda s, a: replace(s, pending_delete_id=None),
    DeleteStarted: lambda s, a: replace(s, loading=True, error=None, pending_delete_id=None),
    DeleteSucceeded: lambda s, a: _succeed(s, a.message, a.now),
    DeleteFailed: lambda s, a: _fail(s, a.error),
    LoadingFinished: lambda s, a: replace(s, loading=False),
    MessagesExpired: _messages_expired,
}


def reduce(state: ViewState, action) -> ViewState:
    try:
        handler = _HANDLERS[type(action)]
    except KeyError:
        raise TypeError(f'Unknown action: {action!r}') from None
    return handler(state, action)
