"""
Blog API — Post SQLAlchemy Model
==================================

What:  ORM model for the `posts` table.
Who:   PostStore for all CRUD statements; Alembic for the schema.

Ownership:
    user_id references blog_users.id. Delete requires it to match the
    caller; update overwrites it with the caller. There is no cascade
    since users are never deleted.

Query Patterns:
    - Posts by owner: WHERE user_id = :uid ORDER BY id → idx_posts_user_id
    - Single post:    WHERE id = :id → primary key
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Index, Integer, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from blogapi.database import Base


class Post(Base):
    """A blog post owned (by reference) by one user."""

    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("blog_users.id"),
        nullable=False,
    )

    title: Mapped[str] = mapped_column(Text, nullable=False)

    content: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    # NULL until the first PATCH
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        onupdate=func.now(),
    )

    __table_args__ = (
        Index("idx_posts_user_id", "user_id"),
    )

    def __repr__(self) -> str:
        return f"<Post(id={self.id}, user_id={self.user_id}, title='{self.title}')>"
