"""Boundary Protocols — contract between the post service and its store.

Invariants:
    - Service code depends on PostRepository, never on SQLAlchemy directly
    - Every method is one transaction; failures raise NotFoundError or StoreUnavailableError

Design Decisions:
    - Protocol over ABC: structural subtyping, tests pass in-memory fakes
"""

from datetime import datetime
from typing import Protocol

from blog.core.domain_types import PostId
from blog.core.pagination import OffsetLimit


class PostRow(Protocol):
    """Structural contract for a stored post (ORM row or test double)."""
    id: int
    title: str
    description: str
    created: datetime
    updated: datetime


class PostRepository(Protocol):
    """Contract for post persistence, implemented by services.post_store."""
    async def list(self, window: OffsetLimit) -> list[PostRow]: ...
    async def get(self, post_id: PostId) -> PostRow: ...
    async def create(
        self, title: str, description: str, created: datetime,
    ) -> PostId: ...
    async def update(
        self, post_id: PostId, title: str, description: str,
        created: datetime, updated: datetime,
    ) -> PostId: ...
    async def delete(self, post_id: PostId) -> None: ...
