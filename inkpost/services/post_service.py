"""
Inkpost Backend — Post Service (Business Logic)
================================================

What:  Create, update, list and fetch blog posts.
How:   Composes FileService (cover storage) with database operations.
Who:   Called by the /post route handlers.

Orchestration Flow (POST /post):
    ┌──────────┐    ┌─────────────┐    ┌──────────────┐    ┌──────────┐
    │  Token   │───▶│  Load       │───▶│  Store cover │───▶│  Insert  │
    │  (route) │    │  author     │    │  (FileServ)  │    │  (DB)    │
    └──────────┘    └─────────────┘    └──────────────┘    └──────────┘

    If the insert fails, the stored cover is removed before the error propagates.

Update Flow (PUT /post):
    load post ─▶ author check ─▶ [store new cover] ─▶ apply fields ─▶ flush
    The returned object is the one that was flushed, so callers always see
    the post-update state.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional
from uuid import UUID

from sqlalchemy import desc, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from inkpost.config import settings
from inkpost.exceptions import AuthenticationError, DatabaseError, NotAuthorError, NotFoundError
from inkpost.models.post import Post
from inkpost.models.user import User
from inkpost.security import TokenIdentity
from inkpost.services.file_service import file_service

logger = logging.getLogger(__name__)


class PostService:
    """
    Business logic layer for post operations.

    Responsibilities:
        - create_post(): store cover + insert with the caller as author
        - update_post(): author-only edit, cover replaced only when re-uploaded
        - get_post(): single post with author username, 404 when missing
        - list_posts(): newest posts first, bounded by POST_LIST_LIMIT
    """

    async def create_post(
        self,
        db: AsyncSession,
        identity: TokenIdentity,
        title: str,
        summary: str,
        content: str,
        filename: str,
        file_content: bytes,
    ) -> Post:
        """
        Store the cover and create a post authored by the token's user.

        Raises:
            AuthenticationError: The token's user no longer exists.
            ValidationError: Unsupported or oversized cover.
            FileStorageError: Cover could not be written.
            DatabaseError: Insert failed.
        """
        author = await db.get(User, identity.user_id)
        if author is None:
            raise AuthenticationError(message="User for this token no longer exists")

        absolute_path, cover = await file_service.save_upload(filename, file_content)

        try:
            post = Post(
                title=title,
                summary=summary,
                content=content,
                cover=cover,
                author=author,
            )
            db.add(post)
            await db.flush()
        except SQLAlchemyError as e:
            await file_service.cleanup_file(absolute_path)
            logger.error("Database error creating post: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not save the post. Please try again.",
                context={"original_error": type(e).__name__},
            )

        logger.info("Post created: %s by %s", post.id, author.username)
        return post

    async def update_post(
        self,
        db: AsyncSession,
        identity: TokenIdentity,
        post_id: UUID,
        title: str,
        summary: str,
        content: str,
        filename: Optional[str] = None,
        file_content: Optional[bytes] = None,
    ) -> Post:
        """
        Edit a post. Only its author may do so.

        Raises:
            NotFoundError: No post with that id.
            NotAuthorError: The caller is not the post's author.
        """
        post = await self.get_post(db, post_id)

        if post.author_id != identity.user_id:
            logger.warning(
                "User %s tried to edit post %s owned by %s",
                identity.user_id,
                post.id,
                post.author_id,
            )
            raise NotAuthorError(context={"post_id": str(post.id)})

        absolute_path = None
        if filename and file_content is not None:
            absolute_path, post.cover = await file_service.save_upload(filename, file_content)

        post.title = title
        post.summary = summary
        post.content = content
        post.updated_at = datetime.now(timezone.utc)

        try:
            await db.flush()
        except SQLAlchemyError as e:
            if absolute_path:
                await file_service.cleanup_file(absolute_path)
            logger.error("Database error updating post %s: %s", post_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not update the post. Please try again.",
                context={"post_id": str(post_id)},
            )

        logger.info("Post updated: %s", post.id)
        return post

    async def get_post(self, db: AsyncSession, post_id: UUID) -> Post:
        """
        Retrieve a single post with its author loaded.

        Raises:
            NotFoundError: Post with given ID does not exist (→ 404)
            DatabaseError: Query execution failed (→ 500)
        """
        try:
            result = await db.execute(
                select(Post)
                .options(selectinload(Post.author))
                .where(Post.id == post_id)
            )
            post = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching post %s: %s", post_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the post. Please try again.",
                context={"post_id": str(post_id)},
            )

        if post is None:
            raise NotFoundError(resource="post", resource_id=str(post_id))
        return post

    async def list_posts(self, db: AsyncSession, limit: Optional[int] = None) -> List[Post]:
        """
        Newest posts first, with authors loaded.

        Query plan:
            SELECT * FROM posts ORDER BY created_at DESC LIMIT :limit
            → idx_posts_created_at, then one IN query for the authors
        """
        limit = limit or settings.post_list_limit
        try:
            result = await db.execute(
                select(Post)
                .options(selectinload(Post.author))
                .order_by(desc(Post.created_at))
                .limit(limit)
            )
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error listing posts: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve posts. Please try again.",
                context={"error_type": type(e).__name__},
            )


post_service = PostService()
