# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# API endpoints for account registration, login and token introspection.
# =============================================================================

import logging

from fastapi import APIRouter, Depends, status
from fastapi.concurrency import run_in_threadpool

from app.auth.dependencies import get_current_user
from app.dependencies import AuthServiceDep
from core.models.user import (
    LoginRequest,
    RegisterRequest,
    TokenResponse,
    UserIdentity,
    WhoAmIResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def register(request: RegisterRequest, auth: AuthServiceDep) -> TokenResponse:
    """
    Create an account and return an access token.

    Username rules: 4-25 characters, letters, digits, '_', '-', '.'.
    Usernames are case-insensitive. Passwords need at least 8 characters.

    Raises:
        400: If username or password break the rules
        409: If the username is already taken
    """
    _, token = await run_in_threadpool(auth.register, request.username, request.password)
    return TokenResponse(access_token=token)


@router.post("/login", response_model=TokenResponse)
async def login(request: LoginRequest, auth: AuthServiceDep) -> TokenResponse:
    """
    Exchange username and password for an access token.

    Raises:
        401: If the credentials are invalid
    """
    token = await run_in_threadpool(auth.login, request.username, request.password)
    return TokenResponse(access_token=token)


@router.get("/whoami", response_model=WhoAmIResponse)
async def whoami(
    user: UserIdentity = Depends(get_current_user)
) -> WhoAmIResponse:
    """
    Get the account the current token belongs to.

    Useful for checking if a stored token is still valid.

    Raises:
        401: If the token is invalid or expired
    """
    return WhoAmIResponse(id=user.id, username=user.username)
