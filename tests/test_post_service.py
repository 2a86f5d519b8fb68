"""
Inkpost Backend — Post Service Unit Tests
==========================================

What:  Tests for PostService create/update/get orchestration.
How:   Uses mock DB sessions and a patched FileService (no real DB or disk).

What we test:
    ✅ Create stores the cover and attaches the caller as author
    ✅ Failed insert removes the stored cover
    ✅ Only the author may update; the cover is untouched for anyone else
    ✅ Update without a file keeps the existing cover
    ✅ Unknown post id raises NotFoundError
"""

from unittest.mock import AsyncMock, MagicMock, patch
from uuid import uuid4

import pytest
from sqlalchemy import Text
from sqlalchemy.exc import OperationalError

from inkpost.exceptions import AuthenticationError, DatabaseError, NotAuthorError, NotFoundError
from inkpost.models.post import Post
from inkpost.models.user import User
from inkpost.security import TokenIdentity
from inkpost.services.post_service import PostService


class TestPostServiceCreate:

    def setup_method(self):
        self.service = PostService()
        self.author = User(id=uuid4(), username="alice", hashed_password="x")
        self.identity = TokenIdentity(user_id=self.author.id, username="alice")

    @pytest.mark.asyncio
    async def test_create_post_success(self, mock_db_session):
        mock_db_session.get.return_value = self.author

        with patch("inkpost.services.post_service.file_service") as mock_file:
            mock_file.save_upload = AsyncMock(
                return_value=("/abs/uploads/abc.png", "uploads/abc.png")
            )

            post = await self.service.create_post(
                db=mock_db_session,
                identity=self.identity,
                title="Hello",
                summary="Short",
                content="<p>Body</p>",
                filename="cover.png",
                file_content=b"image bytes",
            )

        assert post.title == "Hello"
        assert post.cover == "uploads/abc.png"
        assert post.author is self.author
        mock_file.save_upload.assert_awaited_once_with("cover.png", b"image bytes")
        mock_db_session.add.assert_called_once_with(post)

    @pytest.mark.asyncio
    async def test_create_post_unknown_user(self, mock_db_session):
        mock_db_session.get.return_value = None

        with patch("inkpost.services.post_service.file_service") as mock_file:
            mock_file.save_upload = AsyncMock()

            with pytest.raises(AuthenticationError):
                await self.service.create_post(
                    db=mock_db_session,
                    identity=self.identity,
                    title="Hello",
                    summary="Short",
                    content="Body",
                    filename="cover.png",
                    file_content=b"image bytes",
                )

            mock_file.save_upload.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_create_post_db_failure_cleans_up(self, mock_db_session):
        mock_db_session.get.return_value = self.author
        mock_db_session.flush.side_effect = OperationalError("INSERT", {}, Exception("db down"))

        with patch("inkpost.services.post_service.file_service") as mock_file:
            mock_file.save_upload = AsyncMock(
                return_value=("/abs/uploads/abc.png", "uploads/abc.png")
            )
            mock_file.cleanup_file = AsyncMock()

            with pytest.raises(DatabaseError):
                await self.service.create_post(
                    db=mock_db_session,
                    identity=self.identity,
                    title="Hello",
                    summary="Short",
                    content="Body",
                    filename="cover.png",
                    file_content=b"image bytes",
                )

            mock_file.cleanup_file.assert_awaited_once_with("/abs/uploads/abc.png")


class TestPostServiceUpdate:

    def setup_method(self):
        self.service = PostService()
        self.author_id = uuid4()
        self.post = Post(
            id=uuid4(),
            title="Old title",
            summary="Old summary",
            content="Old content",
            cover="uploads/old.png",
            author_id=self.author_id,
        )
        self.service.get_post = AsyncMock(return_value=self.post)

    @pytest.mark.asyncio
    async def test_non_author_rejected_before_storing(self, mock_db_session):
        intruder = TokenIdentity(user_id=uuid4(), username="mallory")

        with patch("inkpost.services.post_service.file_service") as mock_file:
            mock_file.save_upload = AsyncMock()

            with pytest.raises(NotAuthorError, match="you are not the author"):
                await self.service.update_post(
                    db=mock_db_session,
                    identity=intruder,
                    post_id=self.post.id,
                    title="Hacked",
                    summary="Hacked",
                    content="Hacked",
                    filename="evil.png",
                    file_content=b"image bytes",
                )

            mock_file.save_upload.assert_not_awaited()

        assert self.post.title == "Old title"
        mock_db_session.flush.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_author_update_without_file_keeps_cover(self, mock_db_session):
        identity = TokenIdentity(user_id=self.author_id, username="alice")

        with patch("inkpost.services.post_service.file_service") as mock_file:
            mock_file.save_upload = AsyncMock()

            post = await self.service.update_post(
                db=mock_db_session,
                identity=identity,
                post_id=self.post.id,
                title="New title",
                summary="New summary",
                content="New content",
            )

            mock_file.save_upload.assert_not_awaited()

        assert post.title == "New title"
        assert post.summary == "New summary"
        assert post.content == "New content"
        assert post.cover == "uploads/old.png"
        assert post.updated_at is not None
        mock_db_session.flush.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_author_update_with_file_replaces_cover(self, mock_db_session):
        identity = TokenIdentity(user_id=self.author_id, username="alice")

        with patch("inkpost.services.post_service.file_service") as mock_file:
            mock_file.save_upload = AsyncMock(
                return_value=("/abs/uploads/new.jpg", "uploads/new.jpg")
            )

            post = await self.service.update_post(
                db=mock_db_session,
                identity=identity,
                post_id=self.post.id,
                title="New title",
                summary="New summary",
                content="New content",
                filename="new.jpg",
                file_content=b"image bytes",
            )

        assert post.cover == "uploads/new.jpg"


class TestPostServiceGet:

    def setup_method(self):
        self.service = PostService()

    @pytest.mark.asyncio
    async def test_get_post_not_found(self, mock_db_session):
        result = MagicMock()
        result.scalar_one_or_none.return_value = None
        mock_db_session.execute.return_value = result

        with pytest.raises(NotFoundError):
            await self.service.get_post(mock_db_session, uuid4())

    @pytest.mark.asyncio
    async def test_get_post_db_error(self, mock_db_session):
        mock_db_session.execute.side_effect = OperationalError("SELECT", {}, Exception("db down"))

        with pytest.raises(DatabaseError):
            await self.service.get_post(mock_db_session, uuid4())


class TestPostColumns:

    def test_text_columns_are_unbounded(self):
        """PostgreSQL enforces VARCHAR lengths, so free-text fields must be TEXT."""
        columns = Post.__table__.c
        for name in ("title", "summary", "content"):
            assert type(columns[name].type) is Text
            assert columns[name].type.length is None
