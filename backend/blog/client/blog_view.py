"""Blog View — client controller: state machine, fetch-on-entry, editor draft, rendering.

Invariants:
    - Every entry into a state issues exactly one fetch, tagged with a fresh token
    - A fetch result whose token is no longer current is discarded
    - Transitions never wait on the network, except create (it needs the new id)
    - A save never rolls back the draft; `saved` turns True only when the latest
      save succeeds and no edit happened after it was issued
    - Saves reach the server one at a time, in confirm order; a queued save that
      a newer save of the same post superseded is never sent
    - Failures are surfaced in `error` and never retried

Design Decisions:
    - Fetches and saves run as asyncio tasks on the caller's loop (single-threaded model)
    - Stale-while-loading: the last loaded list / draft stays visible; LOADING shows only
      when nothing of the needed kind was loaded yet
    - aclose() cancels outstanding tasks; the token check alone already guarantees correctness
"""

import asyncio
import logging
from collections.abc import Callable, Coroutine
from dataclasses import dataclass
from datetime import datetime, timezone

from blog.client import view_state
from blog.client.api_client import BlogApi
from blog.client.view_state import (
    INITIAL_STATE, InvalidTransitionError, PostView, Stream, ViewState,
)
from blog.client.view_tree import Action, ActionKind, Element, Html, el
from blog.core.domain_types import PostId, check_title
from blog.core.errors import BlogError
from blog.core.markdown import render as render_markdown
from blog.core.pagination import Page
from blog.schemas.post import PostPreview, PostResponse

logger = logging.getLogger(__name__)

LOADING = "Loading..."


@dataclass
class PostDraft:
    """In-memory copy of the post being shown or edited."""
    post_id: PostId
    title: str
    description: str
    created: datetime
    updated: datetime

    @classmethod
    def from_post(cls, post: PostResponse) -> "PostDraft":
        return cls(
            PostId(post.id), post.title, post.description, post.created, post.updated,
        )


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class BlogView:
    """Owns what the blog client shows and when it talks to the server."""

    def __init__(
        self, api: BlogApi, clock: Callable[[], datetime] = _utc_now,
    ):
        self._api = api
        self._clock = clock
        self.state: ViewState = INITIAL_STATE
        self.posts: list[PostPreview] | None = None
        self.draft: PostDraft | None = None
        self.saved = True
        self.error: str | None = None
        self._fetch_token = 0
        self._save_seq = 0
        self._latest_save: dict[PostId, int] = {}
        self._save_lock = asyncio.Lock()
        self._draft_version = 0
        self._tasks: set[asyncio.Task] = set()

    # ─── Lifecycle ───────────────────────────────────────────────

    def start(self) -> None:
        """Enter the initial state (issues the first List)."""
        self._enter(self.state)

    async def settle(self) -> None:
        """Wait until no fetch or save is outstanding."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def aclose(self) -> None:
        for task in list(self._tasks):
            task.cancel()
        await asyncio.gather(*list(self._tasks), return_exceptions=True)

    @property
    def pending(self) -> int:
        return len(self._tasks)

    # ─── Input events ────────────────────────────────────────────

    async def dispatch(self, action: Action, value: str | None = None) -> None:
        """Apply one UI event. Events that no longer fit the state are logged and dropped."""
        kind = action.kind
        try:
            if kind == ActionKind.OPEN_POST:
                self.open_post(PostId(action.post_id))
            elif kind == ActionKind.CREATE_POST:
                await self.create_post()
            elif kind == ActionKind.NEXT_PAGE:
                self.next_page()
            elif kind == ActionKind.PREV_PAGE:
                self.prev_page()
            elif kind == ActionKind.BEGIN_EDIT:
                self.begin_edit()
            elif kind == ActionKind.CLOSE:
                self.close()
            elif kind == ActionKind.EDIT_TITLE:
                self.edit_title(value or "")
            elif kind == ActionKind.EDIT_DESCRIPTION:
                self.edit_description(value or "")
            elif kind == ActionKind.CONFIRM_EDIT:
                self.confirm_edit()
        except InvalidTransitionError as e:
            logger.warning(f"Ignoring stale UI event: {e}")

    def open_post(self, post_id: PostId) -> None:
        self._enter(view_state.open_post(self.state, post_id))

    def next_page(self) -> None:
        self._enter(view_state.next_page(self.state))

    def prev_page(self) -> None:
        self._enter(view_state.prev_page(self.state))

    def close(self) -> None:
        self._enter(view_state.close(self.state))

    def begin_edit(self) -> None:
        self.state = view_state.begin_edit(self.state)

    async def create_post(self) -> None:
        """Create an empty post, then open it in edit mode."""
        origin = self.state
        if not isinstance(origin, Stream):
            raise InvalidTransitionError("create_post", origin)
        token = self._fetch_token
        try:
            new_id = await self._api.create_post("", "", self._clock())
        except BlogError as e:
            if self._is_current(token):
                self._surface(e, "create post")
            return
        if not self._is_current(token):
            logger.info(f"Post {new_id} created after the view moved on")
            return
        self._enter(view_state.created_post(origin, new_id))

    def edit_title(self, value: str) -> None:
        draft = self._editable_draft("edit_title")
        try:
            check_title(value)
        except ValueError as e:
            self.error = f"Invalid title: {e}"
            return
        draft.title = value
        self._mark_dirty()

    def edit_description(self, value: str) -> None:
        draft = self._editable_draft("edit_description")
        draft.description = value
        self._mark_dirty()

    def confirm_edit(self) -> None:
        """Leave edit mode and save in the background."""
        self.state = view_state.finish_edit(self.state)
        draft = self.draft
        if draft is None or draft.post_id != self.state.post_id:
            return
        draft.updated = max(self._clock(), draft.created)
        self._save_seq += 1
        self._latest_save[draft.post_id] = self._save_seq
        snapshot = PostDraft(**vars(draft))
        self._spawn(self._save(self._save_seq, self._draft_version, snapshot))

    # ─── Fetching ────────────────────────────────────────────────

    def _enter(self, state: ViewState) -> None:
        entering = view_state.is_entry(self.state, state)
        self.state = state
        if not entering:
            return
        self._fetch_token += 1
        self.error = None
        token = self._fetch_token
        if isinstance(state, Stream):
            self._spawn(self._load_page(token, state.page))
        else:
            self._spawn(self._load_post(token, state.post_id))

    def _is_current(self, token: int) -> bool:
        return token == self._fetch_token

    async def _load_page(self, token: int, page: Page) -> None:
        try:
            posts = await self._api.list_posts(page)
        except BlogError as e:
            if self._is_current(token):
                self._surface(e, f"load page {page.page_offset}")
            return
        if not self._is_current(token):
            logger.debug(f"Discarding stale page {page.page_offset}")
            return
        self.posts = posts

    async def _load_post(self, token: int, post_id: PostId) -> None:
        try:
            post = await self._api.get_post(post_id)
        except BlogError as e:
            if self._is_current(token):
                self._surface(e, f"load post {post_id}")
            return
        if not self._is_current(token):
            logger.debug(f"Discarding stale post {post_id}")
            return
        # an unsaved draft of this post wins over the server copy
        if self.draft and self.draft.post_id == post_id and not self.saved:
            return
        self.draft = PostDraft.from_post(post)
        self.saved = True
        self._draft_version += 1

    # ─── Saving ──────────────────────────────────────────────────

    async def _save(self, seq: int, version: int, snapshot: PostDraft) -> None:
        async with self._save_lock:
            if self._latest_save.get(snapshot.post_id) != seq:
                logger.debug(f"Skipping superseded save of post {snapshot.post_id}")
                return
            try:
                await self._api.update_post(
                    snapshot.post_id, snapshot.title, snapshot.description,
                    snapshot.created, snapshot.updated,
                )
            except BlogError as e:
                if seq == self._save_seq and self._draft_is(snapshot.post_id):
                    self._surface(e, f"save post {snapshot.post_id}")
                else:
                    logger.warning(
                        f"Superseded save of post {snapshot.post_id} failed: {e}",
                    )
                return
        if seq == self._save_seq and version == self._draft_version:
            self.saved = True

    def _editable_draft(self, transition: str) -> PostDraft:
        state = self.state
        if not (isinstance(state, PostView) and state.editing):
            raise InvalidTransitionError(transition, state)
        if not self._draft_is(state.post_id):
            raise InvalidTransitionError(f"{transition} before load", state)
        return self.draft

    def _draft_is(self, post_id: PostId) -> bool:
        return self.draft is not None and self.draft.post_id == post_id

    def _mark_dirty(self) -> None:
        self.saved = False
        self._draft_version += 1

    # ─── Plumbing ────────────────────────────────────────────────

    def _spawn(self, coro: Coroutine) -> None:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def _surface(self, error: BlogError, doing: str) -> None:
        logger.warning(f"Failed to {doing}: {error.message}", extra={"error_code": error.code})
        self.error = f"Failed to {doing}: {error.message}"

    # ─── Rendering ───────────────────────────────────────────────

    def render(self) -> Element:
        """Declarative tree for the current state."""
        state = self.state
        if isinstance(state, Stream):
            body = self._render_stream(state)
        else:
            body = self._render_post(state)
        if self.error:
            body = body + (el("div", self.error, attrs={"class": "error"}),)
        return el("div", *body, attrs={"class": "blog"})

    def _render_stream(self, state: Stream) -> tuple:
        page = state.page.page_offset
        if self.posts is None:
            listing = (el("div", LOADING, attrs={"class": "loading"}),)
        else:
            listing = tuple(_render_preview(post) for post in self.posts)
        return (
            el("div", str(page), attrs={"class": "page-number"}),
            el("div", "+", attrs={"class": "create"},
               on={"click": Action(ActionKind.CREATE_POST)}),
            *listing,
            el(
                "div",
                el("div", "<", attrs={"class": "prev"},
                   on={"click": Action(ActionKind.PREV_PAGE)}),
                el("div", f"Page {page}", attrs={"class": "current-page"}),
                el("div", ">", attrs={"class": "next"},
                   on={"click": Action(ActionKind.NEXT_PAGE)}),
                attrs={"class": "pager"},
            ),
        )

    def _render_post(self, state: PostView) -> tuple:
        draft = self.draft
        if not self._draft_is(state.post_id):
            return (el("div", LOADING, attrs={"class": "loading"}),)
        status = () if self.saved else (el("div", "unsaved", attrs={"class": "unsaved"}),)
        if state.editing:
            return (
                el(
                    "div",
                    el("input", attrs={"type": "text", "value": draft.title},
                       on={"input": Action(ActionKind.EDIT_TITLE)}),
                    el("textarea", draft.description,
                       on={"input": Action(ActionKind.EDIT_DESCRIPTION)}),
                    attrs={"class": "editor"},
                ),
                el("div", "O", attrs={"class": "confirm"},
                   on={"click": Action(ActionKind.CONFIRM_EDIT)}),
                *status,
            )
        return (
            el(
                "div",
                el("div", draft.title, attrs={"class": "title"}),
                el("div", _timestamps(draft.created, draft.updated),
                   attrs={"class": "timestamps"}),
                Html(render_markdown(draft.description)),
                attrs={"class": "post"},
                on={"dblclick": Action(ActionKind.BEGIN_EDIT, state.post_id)},
            ),
            el("div", "X", attrs={"class": "close"},
               on={"click": Action(ActionKind.CLOSE)}),
            *status,
        )


def _render_preview(post: PostPreview) -> Element:
    return el(
        "div",
        el("div", post.title, attrs={"class": "title"}),
        el("div", _timestamps(post.created, post.updated), attrs={"class": "timestamps"}),
        Html(render_markdown(post.description)),
        attrs={"class": "preview"},
        on={"click": Action(ActionKind.OPEN_POST, post.id)},
    )


def _timestamps(created: datetime, updated: datetime) -> str:
    return f"created: {created.isoformat()} | updated: {updated.isoformat()}"
