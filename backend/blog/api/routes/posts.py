"""Posts Routes — HTTP surface of the post service.

Invariants:
    - GET /posts decodes the page through core.pagination (bad offset → 400)
    - Handlers hold no logic beyond decoding and delegating to PostService
    - Errors are raised, never formatted here: error_handlers maps them to statuses

Design Decisions:
    - PUT creates and POST updates, matching the client's fetch calls
    - DELETE is a soft delete returning 204
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, Response, status

from blog.core.domain_types import MAX_POST_ID, PostId
from blog.core.pagination import Page
from blog.infrastructure.database import DatabaseSessionManager, get_db_manager
from blog.schemas.post import PostCreate, PostPreview, PostResponse, PostUpdate
from blog.services.post_service import PostService
from blog.services.post_store import PostStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/blog", tags=["posts"])

PostIdPath = Annotated[int, Path(ge=0, le=MAX_POST_ID)]

# Kept as a string: Page.from_query owns the strict decoding
OffsetQuery = Annotated[
    str | None, Query(description="Zero-based page number (PAGE_SIZE posts per page)"),
]


def get_post_service(
    db: DatabaseSessionManager = Depends(get_db_manager),
) -> PostService:
    return PostService(PostStore(db))


@router.get("/posts", response_model=list[PostPreview])
async def list_posts(
    offset: OffsetQuery = None,
    service: PostService = Depends(get_post_service),
):
    """List one page of posts, newest first. Query: ?offset=<page>."""
    page = Page.from_query(offset)
    return await service.list_posts(page)


@router.put("/posts", status_code=status.HTTP_201_CREATED)
async def create_post(
    body: PostCreate, service: PostService = Depends(get_post_service),
) -> int:
    """Create a post and return its id."""
    return await service.create_post(body)


@router.get("/posts/{post_id}", response_model=PostResponse)
async def get_post(
    post_id: PostIdPath,
    service: PostService = Depends(get_post_service),
):
    return await service.get_post(PostId(post_id))


@router.post("/posts/{post_id}")
async def update_post(
    body: PostUpdate,
    post_id: PostIdPath,
    service: PostService = Depends(get_post_service),
) -> int:
    """Replace title, description and timestamps of an existing post."""
    return await service.update_post(PostId(post_id), body)


@router.delete("/posts/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post(
    post_id: PostIdPath,
    service: PostService = Depends(get_post_service),
):
    """Soft-delete a post; it disappears from every other endpoint."""
    await service.delete_post(PostId(post_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
