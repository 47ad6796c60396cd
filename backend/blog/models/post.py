"""Post ORM — the single persisted entity of the blog.

Invariants:
    - id is a store-assigned 64-bit integer, immutable after insert
    - description holds raw markdown; rendering happens on display only
    - updated >= created (enforced at the request boundary)
    - deleted is NULL for live posts; a set timestamp hides the row everywhere

Design Decisions:
    - BigInteger with an Integer variant on SQLite: SQLite only autoincrements INTEGER PRIMARY KEY
    - Soft delete column instead of row removal
"""

from datetime import datetime

from sqlalchemy import BigInteger, CheckConstraint, Integer, String, Text, Index
from sqlalchemy.orm import Mapped, mapped_column

from blog.core.domain_types import TITLE_MAX_LENGTH
from blog.db.base import Base, UTCDateTime


class Post(Base):
    """A blog post row."""
    __tablename__ = "blog_posts"

    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True, autoincrement=True,
    )
    title: Mapped[str] = mapped_column(
        String(TITLE_MAX_LENGTH), nullable=False, default="",
    )
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    updated: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    deleted: Mapped[datetime | None] = mapped_column(UTCDateTime, nullable=True)

    __table_args__ = (
        Index("ix_blog_posts_created", "created"),
        CheckConstraint(
            "updated >= created", name="ck_blog_posts_updated_after_created",
        ),
    )
