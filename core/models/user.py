# =============================================================================
# core/models/user.py - User and Auth Schemas
# =============================================================================
# These models define the API contract for identity operations:
# - UserIdentity: A registered user as persisted by the user store
# - RegisterRequest / LoginRequest: Credentials sent by clients
# - TokenResponse: Access token returned after register/login
# - TokenClaims: Decoded session token payload
# - WhoAmIResponse: Public view of the authenticated user
#
# UserIdentity is computed at registration and at every login attempt,
# never mutated, and never exposed with its credential hash.
# =============================================================================

from pydantic import BaseModel, ConfigDict, Field


class UserIdentity(BaseModel):
    """
    A registered user.

    `id` depends only on the lowercased username; `credential_hash`
    depends on the (username, password) pair.

    Example:
        {
            "id": "0bd1c6e1-...",
            "username": "alice123",
            "credential_hash": "9f86d0..."
        }
    """

    model_config = ConfigDict(frozen=True)

    # Stable identifier derived from the username
    id: str = Field(..., description="Stable user identifier (UUID v5)")

    # Always lowercase
    username: str = Field(..., description="Normalized (lowercase) username")

    # Hex-encoded SHA-512 digest, never returned to clients
    credential_hash: str = Field(..., description="Hex-encoded credential hash")


class RegisterRequest(BaseModel):
    """
    Schema for creating an account.

    Length rules are enforced by the registration flow so that each
    violation gets its own error code.

    Example:
        {"username": "alice123", "password": "longpassword"}
    """

    username: str = Field(..., description="Desired username")
    password: str = Field(..., description="Plain-text password")


class LoginRequest(BaseModel):
    """Schema for logging in with an existing account."""

    username: str = Field(..., description="Username (case-insensitive)")
    password: str = Field(..., description="Plain-text password")


class TokenResponse(BaseModel):
    """
    Access token returned by register and login.

    Example:
        {"access_token": "eyJhbGciOi...", "token_type": "bearer"}
    """

    access_token: str = Field(..., description="Signed session token")
    token_type: str = Field(default="bearer", description="Token type for the Authorization header")


class WhoAmIResponse(BaseModel):
    """Public view of the authenticated user."""

    id: str
    username: str


class TokenClaims(BaseModel):
    """
    Decoded session token claims.

    Timestamps are seconds since the Unix epoch, as in standard JWTs.
    """

    model_config = ConfigDict(frozen=True)

    sub: str = Field(..., min_length=1, description="Subject: the user id")
    iat: int = Field(..., description="Issued-at timestamp")
    exp: int = Field(..., description="Expiration timestamp")
