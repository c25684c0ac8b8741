# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Provides dependency injection for authentication.
#
# Tokens are HS256 JWTs issued by /auth/register and /auth/login. The
# AuthService verifies signature and expiry, then resolves the subject to
# a stored user.
#
# Usage:
#   from app.auth import get_current_user
#
#   @router.get("/protected")
#   async def protected(user: UserIdentity = Depends(get_current_user)):
#       return {"user_id": user.id}
# =============================================================================

import logging

from fastapi import Depends
from fastapi.concurrency import run_in_threadpool
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.dependencies import get_auth_service
from core.models.user import UserIdentity
from core.services.auth_service import AuthService

logger = logging.getLogger(__name__)

# HTTP Bearer token extractor
security = HTTPBearer()


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    auth: AuthService = Depends(get_auth_service),
) -> UserIdentity:
    """
    Extract and validate the user from the Bearer token.

    This dependency:
    1. Extracts the Bearer token from the Authorization header
    2. Verifies the JWT signature against the configured secret
    3. Validates the token hasn't expired
    4. Loads the user the token was issued for

    Args:
        credentials: Bearer token from Authorization header
        auth: Auth service

    Returns:
        UserIdentity: The authenticated user

    Raises:
        AuthError: 401 if the token is malformed, forged or expired,
            or its user no longer exists
    """
    # Token checks and the user lookup block; keep them off the event loop
    user = await run_in_threadpool(auth.authenticate, credentials.credentials)
    logger.debug(f"Authenticated user: {user.id}")
    return user

