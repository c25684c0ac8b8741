# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - user.py: User identity and auth request/response schemas
# - fs.py: Directory listing and filesystem operation schemas
#
# These models define the "contract" between API and clients.
# =============================================================================

# -----------------------------------------------------------------------------
# User Models - Identity and authentication
# -----------------------------------------------------------------------------
from .user import (
    LoginRequest,
    RegisterRequest,
    TokenClaims,
    TokenResponse,
    UserIdentity,
    WhoAmIResponse,
)

# -----------------------------------------------------------------------------
# Filesystem Models - Listings and mutations
# -----------------------------------------------------------------------------
from .fs import (
    CreateDirResponse,
    DeleteResponse,
    DirectoryEntry,
    EntryKind,
    Listing,
    PathRequest,
)

__all__ = [
    # User
    "LoginRequest",
    "RegisterRequest",
    "TokenClaims",
    "TokenResponse",
    "UserIdentity",
    "WhoAmIResponse",
    # Filesystem
    "CreateDirResponse",
    "DeleteResponse",
    "DirectoryEntry",
    "EntryKind",
    "Listing",
    "PathRequest",
]
