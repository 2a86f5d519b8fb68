"""
Inkpost Backend — Auth Route Handlers
======================================

What:  POST /register, POST /login, GET /profile, POST /logout.
How:   JSON bodies in, JSON out; the identity token travels in an httponly
       cookie set by /login and overwritten by /logout.

Error responses (handled by global exception handlers):
    HTTP 400: Invalid/duplicate username (ValidationError)
    HTTP 400: Unknown user or wrong password (InvalidCredentialsError)
    HTTP 401: Missing or invalid token on /profile (AuthenticationError)
"""

import logging

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from inkpost.database import get_db_session
from inkpost.schemas.post import ErrorResponse
from inkpost.schemas.user import CredentialsRequest, ProfileResponse, UserResponse
from inkpost.security import (
    TokenIdentity,
    clear_token_cookie,
    create_access_token,
    get_current_identity,
    set_token_cookie,
)
from inkpost.services.user_service import user_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])


@router.post(
    "/register",
    response_model=UserResponse,
    responses={400: {"description": "Invalid or duplicate username", "model": ErrorResponse}},
    summary="Register a new user",
)
async def register(
    body: CredentialsRequest,
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    user = await user_service.register(db, body.username, body.password)
    return UserResponse.model_validate(user)


@router.post(
    "/login",
    response_model=UserResponse,
    responses={400: {"description": "Wrong credentials", "model": ErrorResponse}},
    summary="Log in and receive the identity cookie",
)
async def login(
    body: CredentialsRequest,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    """
    Check credentials and set the `token` cookie.

    The cookie holds a signed JWT with {username, id}; the body echoes the
    same identity for the frontend's user context.
    """
    user = await user_service.authenticate(db, body.username, body.password)
    token = create_access_token(user.id, user.username)
    set_token_cookie(response, token)
    logger.info("User logged in: %s", user.username)
    return UserResponse.model_validate(user)


@router.get(
    "/profile",
    response_model=ProfileResponse,
    responses={401: {"description": "Not logged in", "model": ErrorResponse}},
    summary="Identity of the current user",
)
async def profile(identity: TokenIdentity = Depends(get_current_identity)) -> ProfileResponse:
    return ProfileResponse(id=identity.user_id, username=identity.username)


@router.post("/logout", summary="Clear the identity cookie")
async def logout(response: Response) -> str:
    # Stateless tokens: the server has nothing to revoke, only the cookie to blank
    clear_token_cookie(response)
    return "ok"
