"""View State — tests for the pure client state machine.

Tests cover:
    - Transitions from Stream (open, create, next, prev)
    - Transitions from PostView (edit toggle, close)
    - Rejected transitions raise InvalidTransitionError
    - Which moves count as entries
"""

import pytest

from blog.client import view_state as vs
from blog.client.view_state import (
    INITIAL_STATE, InvalidTransitionError, PostView, Stream,
)
from blog.core.domain_types import PostId
from blog.core.pagination import MAX_PAGE_OFFSET, Page


def test_initial_state_is_first_page():
    assert INITIAL_STATE == Stream(Page(0))


def test_open_post_remembers_return_page():
    state = vs.open_post(Stream(Page(3)), PostId(7))
    assert state == PostView(PostId(7), Page(3), editing=False)


def test_created_post_opens_in_edit_mode():
    state = vs.created_post(Stream(Page(2)), PostId(9))
    assert state == PostView(PostId(9), Page(2), editing=True)


def test_next_and_prev_page():
    assert vs.next_page(Stream(Page(0))) == Stream(Page(1))
    assert vs.prev_page(Stream(Page(4))) == Stream(Page(3))


def test_prev_page_saturates_at_zero():
    assert vs.prev_page(Stream(Page(0))) == Stream(Page(0))


def test_next_page_saturates_at_last_page():
    last = Stream(Page(MAX_PAGE_OFFSET))
    assert vs.next_page(last) == last


def test_edit_toggle_round_trip():
    viewing = PostView(PostId(1), Page(0))
    editing = vs.begin_edit(viewing)
    assert editing.editing
    assert vs.finish_edit(editing) == viewing


def test_close_returns_to_remembered_page():
    assert vs.close(PostView(PostId(1), Page(5))) == Stream(Page(5))


@pytest.mark.parametrize("transition", [
    lambda s: vs.next_page(s),
    lambda s: vs.prev_page(s),
    lambda s: vs.open_post(s, PostId(2)),
    lambda s: vs.created_post(s, PostId(2)),
])
def test_stream_transitions_rejected_in_post_view(transition):
    with pytest.raises(InvalidTransitionError):
        transition(PostView(PostId(1), Page(0)))


@pytest.mark.parametrize("transition", [vs.begin_edit, vs.finish_edit, vs.close])
def test_post_transitions_rejected_in_stream(transition):
    with pytest.raises(InvalidTransitionError):
        transition(Stream(Page(0)))


def test_close_rejected_while_editing():
    with pytest.raises(InvalidTransitionError) as exc:
        vs.close(PostView(PostId(1), Page(0), editing=True))
    assert exc.value.transition == "close"


def test_begin_edit_rejected_while_editing():
    with pytest.raises(InvalidTransitionError):
        vs.begin_edit(PostView(PostId(1), Page(0), editing=True))


def test_finish_edit_rejected_when_not_editing():
    with pytest.raises(InvalidTransitionError):
        vs.finish_edit(PostView(PostId(1), Page(0)))


def test_invalid_transition_is_value_error():
    assert issubclass(InvalidTransitionError, ValueError)


# ─── Entries ─────────────────────────────────────────────────────

def test_every_stream_move_is_entry():
    assert vs.is_entry(Stream(Page(0)), Stream(Page(0)))
    assert vs.is_entry(Stream(Page(0)), Stream(Page(1)))
    assert vs.is_entry(PostView(PostId(1), Page(0)), Stream(Page(0)))


def test_opening_post_is_entry():
    assert vs.is_entry(Stream(Page(0)), PostView(PostId(1), Page(0)))


def test_edit_toggle_is_not_entry():
    viewing = PostView(PostId(1), Page(0))
    assert not vs.is_entry(viewing, vs.begin_edit(viewing))
    editing = PostView(PostId(1), Page(0), editing=True)
    assert not vs.is_entry(editing, vs.finish_edit(editing))
