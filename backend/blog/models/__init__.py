"""ORM Models — SQLAlchemy declarative models.

Design Decisions:
    - Models imported here so Base.metadata is complete for create_all and alembic
"""

from blog.models.post import Post  # noqa: F401
