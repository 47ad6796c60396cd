"""Blog API Client — async HTTP calls from the view to the post service.

Invariants:
    - Network failures and unreadable replies raise TransportError
    - 404 → NotFoundError, 400 → DecodeError, 503 → StoreUnavailableError
    - Request bodies are validated with the same schemas the server uses
    - No retries: every failure is raised to the caller once

Design Decisions:
    - httpx.AsyncClient with base_url: paths stay relative (/posts, /posts/{id})
    - transport parameter lets tests plug in httpx.MockTransport or ASGITransport
"""

import logging
from datetime import datetime
from typing import Protocol

import httpx
from pydantic import TypeAdapter, ValidationError

from blog.config import get_settings
from blog.core.domain_types import PostId
from blog.core.errors import (
    DecodeError, NotFoundError, StoreUnavailableError, TransportError,
)
from blog.core.pagination import Page
from blog.schemas.post import PostCreate, PostPreview, PostResponse, PostUpdate

logger = logging.getLogger(__name__)

_previews = TypeAdapter(list[PostPreview])
_post_id = TypeAdapter(int)


class BlogApi(Protocol):
    """Calls the view needs from the server."""
    async def list_posts(self, page: Page) -> list[PostPreview]: ...
    async def get_post(self, post_id: PostId) -> PostResponse: ...
    async def create_post(
        self, title: str, description: str, created: datetime,
    ) -> PostId: ...
    async def update_post(
        self, post_id: PostId, title: str, description: str,
        created: datetime, updated: datetime,
    ) -> PostId: ...


class BlogApiClient:
    """httpx-backed implementation of BlogApi."""

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._client = httpx.AsyncClient(
            base_url=base_url, timeout=timeout_seconds, transport=transport,
        )

    @classmethod
    def from_settings(
        cls, transport: httpx.AsyncBaseTransport | None = None,
    ) -> "BlogApiClient":
        """Client for the server named by API_BASE_URL / CLIENT_TIMEOUT_SECONDS."""
        settings = get_settings()
        return cls(
            settings.api_base_url, settings.client_timeout_seconds, transport=transport,
        )

    async def __aenter__(self) -> "BlogApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    # ─── Operations ──────────────────────────────────────────────

    async def list_posts(self, page: Page) -> list[PostPreview]:
        response = await self._send("GET", "/posts", params=page.to_query())
        return self._parse(_previews, response)

    async def get_post(self, post_id: PostId) -> PostResponse:
        response = await self._send("GET", f"/posts/{post_id}", post_id=post_id)
        return self._parse(TypeAdapter(PostResponse), response)

    async def create_post(
        self, title: str, description: str, created: datetime,
    ) -> PostId:
        body = _build_body(
            PostCreate, title=title, description=description,
            created=created, updated=created,
        )
        response = await self._send(
            "PUT", "/posts", json=body.model_dump(mode="json"),
        )
        return PostId(self._parse(_post_id, response))

    async def update_post(
        self,
        post_id: PostId,
        title: str,
        description: str,
        created: datetime,
        updated: datetime,
    ) -> PostId:
        body = _build_body(
            PostUpdate, title=title, description=description,
            created=created, updated=updated,
        )
        response = await self._send(
            "POST", f"/posts/{post_id}",
            json=body.model_dump(mode="json"), post_id=post_id,
        )
        return PostId(self._parse(_post_id, response))

    async def delete_post(self, post_id: PostId) -> None:
        await self._send("DELETE", f"/posts/{post_id}", post_id=post_id)

    # ─── Helpers ─────────────────────────────────────────────────

    async def _send(
        self, method: str, path: str, post_id: PostId | None = None, **kwargs,
    ) -> httpx.Response:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.warning(f"{method} {path} failed: {e}")
            raise TransportError(str(e) or type(e).__name__)
        if response.is_success:
            return response
        raise _error_for(response, post_id)

    @staticmethod
    def _parse(adapter: TypeAdapter, response: httpx.Response):
        try:
            return adapter.validate_json(response.content)
        except ValidationError as e:
            raise TransportError(
                f"unreadable response from {response.request.url}: {e.error_count()} error(s)",
            )


def _error_for(response: httpx.Response, post_id: PostId | None) -> Exception:
    """Map a non-2xx response to the error taxonomy."""
    status = response.status_code
    if status == 404 and post_id is not None:
        return NotFoundError(post_id)
    if status == 400:
        return DecodeError(_server_message(response), "body")
    if status == 503:
        return StoreUnavailableError(_server_message(response), "request")
    return TransportError(f"unexpected status {status} from {response.request.url}")


def _server_message(response: httpx.Response) -> str:
    try:
        return response.json()["error"]["message"]
    except (ValueError, KeyError, TypeError):
        return response.text or response.reason_phrase


def _build_body(model: type[PostCreate], **fields) -> PostCreate:
    """Validate a request body locally; invalid input never reaches the wire."""
    try:
        return model(**fields)
    except ValidationError as e:
        raise DecodeError(
            "; ".join(err["msg"] for err in e.errors()), "body",
        )
