"""
Inkpost Backend — Post SQLAlchemy Model
========================================

What:  ORM model representing the `posts` table (the post store).
How:   Inherits from the shared DeclarativeBase; Alembic reads this for migrations.
Who:   Used by PostService for CRUD operations.

Table Design:
    - UUID primary key: not guessable, assigned in Python before insert
    - cover: Relative path of the stored image (e.g. uploads/3f2a....png),
      which is also its URL path under the static /uploads mount
    - author_id: Foreign key to users.id; only this user may edit the post
    - created_at / updated_at: UTC timestamps

    Index on created_at DESC:
        Backs the front-page query "20 newest posts".
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from inkpost.database import Base
from inkpost.models.user import User


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Post(Base):
    """
    A blog post with a cover image.

    Lifecycle:
        1. Created by POST /post with author_id taken from the identity token
        2. Title/summary/content/cover replaced by PUT /post (author only)
        3. Never deleted

    Query Patterns:
        - Front page: SELECT ... ORDER BY created_at DESC LIMIT 20
        - Single post: SELECT ... WHERE id = :uuid
    """

    __tablename__ = "posts"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    title: Mapped[str] = mapped_column(Text, nullable=False, default="")
    summary: Mapped[str] = mapped_column(Text, nullable=False, default="")

    # Rendered HTML from the frontend editor; stored as-is
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")

    cover: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Relative path to the cover image, e.g. uploads/<hex>.png",
    )

    author_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )

    # lazy="raise": async sessions cannot lazy-load, so every query must say
    # selectinload(Post.author) explicitly
    author: Mapped[User] = relationship(lazy="raise")

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
    )

    __table_args__ = (
        Index("idx_posts_created_at", created_at.desc()),
    )

    def __repr__(self) -> str:
        return f"<Post(id={self.id}, title='{self.title}', created_at='{self.created_at}')>"
