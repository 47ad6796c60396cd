"""View State — the blog client's current mode as a tagged union, with pure transitions.

Invariants:
    - Exactly one state at a time: Stream(page) or PostView(post_id, return_page, editing)
    - Initial state is Stream(Page(0)); there is no terminal state
    - Transitions are pure: they return a new state or raise InvalidTransitionError
    - Toggling `editing` on the same post is not an entry (no fetch)
"""

from dataclasses import dataclass, replace
from typing import Union

from blog.core.domain_types import PostId
from blog.core.pagination import Page


@dataclass(frozen=True)
class Stream:
    """Showing page `page` of post previews."""
    page: Page = Page()


@dataclass(frozen=True)
class PostView:
    """Showing one post; `return_page` is where close() goes back to."""
    post_id: PostId
    return_page: Page
    editing: bool = False


ViewState = Union[Stream, PostView]

INITIAL_STATE: ViewState = Stream(Page(0))


class InvalidTransitionError(ValueError):
    """An input event that does not apply to the current state."""

    def __init__(self, transition: str, state: ViewState):
        super().__init__(f"{transition} is not valid from {state!r}")
        self.transition = transition
        self.state = state


# ─── From Stream ─────────────────────────────────────────────────

def open_post(state: ViewState, post_id: PostId) -> PostView:
    if not isinstance(state, Stream):
        raise InvalidTransitionError("open_post", state)
    return PostView(post_id, state.page, editing=False)


def created_post(state: ViewState, post_id: PostId) -> PostView:
    """A post was created from the stream: open it straight in edit mode."""
    if not isinstance(state, Stream):
        raise InvalidTransitionError("created_post", state)
    return PostView(post_id, state.page, editing=True)


def next_page(state: ViewState) -> Stream:
    if not isinstance(state, Stream):
        raise InvalidTransitionError("next_page", state)
    return Stream(state.page.next())


def prev_page(state: ViewState) -> Stream:
    if not isinstance(state, Stream):
        raise InvalidTransitionError("prev_page", state)
    return Stream(state.page.prev())


# ─── From PostView ───────────────────────────────────────────────

def begin_edit(state: ViewState) -> PostView:
    if not isinstance(state, PostView) or state.editing:
        raise InvalidTransitionError("begin_edit", state)
    return replace(state, editing=True)


def finish_edit(state: ViewState) -> PostView:
    if not isinstance(state, PostView) or not state.editing:
        raise InvalidTransitionError("finish_edit", state)
    return replace(state, editing=False)


def close(state: ViewState) -> Stream:
    if not isinstance(state, PostView) or state.editing:
        raise InvalidTransitionError("close", state)
    return Stream(state.return_page)


def is_entry(old: ViewState, new: ViewState) -> bool:
    """Whether moving old → new enters a state, which always re-fetches."""
    if isinstance(new, Stream):
        return True
    return not (isinstance(old, PostView) and old.post_id == new.post_id)
