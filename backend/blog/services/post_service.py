"""Post Service — pass-through over the post store with transport-shape translation.

Invariants:
    - No business rules beyond delegation: every call maps to one store call
    - Store errors propagate unchanged (NotFoundError, StoreUnavailableError)
    - Descriptions are returned as raw markdown; the server never renders them
"""

from blog.core.domain_types import PostId
from blog.core.pagination import Page
from blog.core.repository_protocols import PostRepository
from blog.schemas.post import PostCreate, PostPreview, PostResponse, PostUpdate


class PostService:
    """Orchestrates post CRUD for the HTTP layer."""

    def __init__(self, store: PostRepository):
        self._store = store

    async def list_posts(self, page: Page) -> list[PostPreview]:
        rows = await self._store.list(page.offset_limit())
        return [PostPreview.model_validate(row) for row in rows]

    async def get_post(self, post_id: PostId) -> PostResponse:
        row = await self._store.get(post_id)
        return PostResponse.model_validate(row)

    async def create_post(self, body: PostCreate) -> PostId:
        return await self._store.create(body.title, body.description, body.created)

    async def update_post(self, post_id: PostId, body: PostUpdate) -> PostId:
        return await self._store.update(
            post_id, body.title, body.description, body.created, body.updated,
        )

    async def delete_post(self, post_id: PostId) -> None:
        await self._store.delete(post_id)
