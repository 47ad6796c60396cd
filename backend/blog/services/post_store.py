"""Post Store — persistence of posts in the blog_posts table.

Invariants:
    - Each public method runs in exactly one transaction (DatabaseSessionManager.transaction)
    - Reads see one consistent snapshot; writes are all-or-nothing
    - Soft-deleted rows are invisible to list, get, update and delete
    - Failures surface as NotFoundError (row absent) or StoreUnavailableError (anything else)

Design Decisions:
    - SQLAlchemy Core-style update().returning(): one round trip tells "updated" from "absent"
    - list() orders by created DESC, id DESC so equal timestamps still page deterministically
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import select, update

from blog.core.domain_types import PostId
from blog.core.errors import NotFoundError
from blog.core.pagination import OffsetLimit
from blog.infrastructure.database import DatabaseSessionManager
from blog.models.post import Post

logger = logging.getLogger(__name__)


class PostStore:
    """CRUD over blog_posts, one transaction per call."""

    def __init__(self, db: DatabaseSessionManager):
        self._db = db

    async def list(self, window: OffsetLimit) -> list[Post]:
        logger.debug(
            "Listing posts",
            extra={"offset": window.offset, "limit": window.limit},
        )
        async with self._db.transaction("list") as session:
            result = await session.execute(
                select(Post)
                .where(Post.deleted.is_(None))
                .order_by(Post.created.desc(), Post.id.desc())
                .limit(window.limit)
                .offset(window.offset),
            )
            return list(result.scalars().all())

    async def get(self, post_id: PostId) -> Post:
        async with self._db.transaction("get") as session:
            result = await session.execute(
                select(Post).where(Post.id == post_id, Post.deleted.is_(None)),
            )
            post = result.scalar_one_or_none()
            if post is None:
                raise NotFoundError(post_id)
            return post

    async def create(
        self, title: str, description: str, created: datetime,
    ) -> PostId:
        async with self._db.transaction("create") as session:
            post = Post(
                title=title, description=description,
                created=created, updated=created,
            )
            session.add(post)
            await session.flush()
            post_id = PostId(post.id)
        logger.info(f"Created post {post_id}", extra={"post_id": post_id})
        return post_id

    async def update(
        self,
        post_id: PostId,
        title: str,
        description: str,
        created: datetime,
        updated: datetime,
    ) -> PostId:
        async with self._db.transaction("update") as session:
            result = await session.execute(
                update(Post)
                .where(Post.id == post_id, Post.deleted.is_(None))
                .values(
                    title=title, description=description,
                    created=created, updated=updated,
                )
                .returning(Post.id),
            )
            if result.scalar_one_or_none() is None:
                raise NotFoundError(post_id)
        logger.info(f"Updated post {post_id}", extra={"post_id": post_id})
        return post_id

    async def delete(self, post_id: PostId) -> None:
        """Soft delete: stamp `deleted`, keep the row."""
        async with self._db.transaction("delete") as session:
            result = await session.execute(
                update(Post)
                .where(Post.id == post_id, Post.deleted.is_(None))
                .values(deleted=datetime.now(timezone.utc))
                .returning(Post.id),
            )
            if result.scalar_one_or_none() is None:
                raise NotFoundError(post_id)
        logger.info(f"Deleted post {post_id}", extra={"post_id": post_id})
