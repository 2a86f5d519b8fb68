"""
Inkpost Backend — Post Route Handlers
======================================

What:  POST /post (create), PUT /post (update), GET /post (list), GET /post/{id}.
How:   Writes are multipart/form-data (cover file + text fields) and require
       the identity cookie; reads are public JSON.

Request Flow (POST /post):
    1. get_current_identity verifies the `token` cookie (401 otherwise)
    2. The cover is read into memory (bounded by MAX_FILE_SIZE validation)
    3. PostService stores the cover and inserts the post
    4. The created post is returned with its author reduced to {username}
"""

import logging
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from inkpost.database import get_db_session
from inkpost.schemas.post import ErrorResponse, PostResponse
from inkpost.security import TokenIdentity, get_current_identity
from inkpost.services.post_service import post_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Posts"])


@router.post(
    "/post",
    response_model=PostResponse,
    responses={
        400: {"description": "Invalid cover file", "model": ErrorResponse},
        401: {"description": "Not logged in", "model": ErrorResponse},
    },
    summary="Create a post with a cover image",
)
async def create_post(
    file: UploadFile = File(..., description="Cover image"),
    title: str = Form(""),
    summary: str = Form(""),
    content: str = Form(""),
    identity: TokenIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db_session),
) -> PostResponse:
    try:
        file_content = await file.read()
        logger.info(
            "Received post upload: filename=%s, size=%d bytes",
            file.filename or "unknown",
            len(file_content),
        )
        post = await post_service.create_post(
            db=db,
            identity=identity,
            title=title,
            summary=summary,
            content=content,
            filename=file.filename or "",
            file_content=file_content,
        )
    finally:
        await file.close()

    return PostResponse.model_validate(post)


@router.put(
    "/post",
    response_model=PostResponse,
    responses={
        400: {"description": "Not the author, or invalid cover file", "model": ErrorResponse},
        401: {"description": "Not logged in", "model": ErrorResponse},
        404: {"description": "Post not found", "model": ErrorResponse},
    },
    summary="Update a post (author only)",
)
async def update_post(
    post_id: UUID = Form(..., alias="id"),
    title: str = Form(""),
    summary: str = Form(""),
    content: str = Form(""),
    file: Optional[UploadFile] = File(default=None, description="Replacement cover image"),
    identity: TokenIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db_session),
) -> PostResponse:
    """
    Replace title/summary/content; replace the cover only when a new file is sent.

    Browsers submitting an empty file input send a part with no filename;
    that is treated the same as no file at all.
    """
    filename = None
    file_content = None
    if file is not None:
        try:
            if file.filename:
                filename = file.filename
                file_content = await file.read()
        finally:
            await file.close()

    post = await post_service.update_post(
        db=db,
        identity=identity,
        post_id=post_id,
        title=title,
        summary=summary,
        content=content,
        filename=filename,
        file_content=file_content,
    )
    return PostResponse.model_validate(post)


@router.get(
    "/post",
    response_model=List[PostResponse],
    summary="Newest posts",
    description="Returns the newest posts (20 by default), newest first, authors reduced to username.",
)
async def list_posts(db: AsyncSession = Depends(get_db_session)) -> List[PostResponse]:
    posts = await post_service.list_posts(db)
    return [PostResponse.model_validate(post) for post in posts]


@router.get(
    "/post/{post_id}",
    response_model=PostResponse,
    responses={404: {"description": "Post not found", "model": ErrorResponse}},
    summary="Get a single post by ID",
)
async def get_post(post_id: UUID, db: AsyncSession = Depends(get_db_session)) -> PostResponse:
    post = await post_service.get_post(db, post_id)
    return PostResponse.model_validate(post)
