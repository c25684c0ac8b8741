# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
#
# Components are built once per process from settings (lru_cache) and
# shared read-only by all requests. Tests swap them out through
# app.dependency_overrides.
# =============================================================================

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from app.config import settings
from core.services import (
    AuthService,
    CredentialCodec,
    DirectoryLister,
    FileService,
    PathMediator,
    TokenService,
)
from lib.user_store import UserStore


@lru_cache
def get_user_store() -> UserStore:
    """Get the process-wide user store."""
    return UserStore(settings.DATABASE_PATH)


@lru_cache
def get_credential_codec() -> CredentialCodec:
    """Get the credential codec."""
    return CredentialCodec()


@lru_cache
def get_token_service() -> TokenService:
    """Get the token service configured with the JWT secret and lifetime."""
    return TokenService(
        secret=settings.jwt_secret_bytes,
        expires_hours=settings.JWT_EXPIRES_HOURS,
    )


@lru_cache
def get_path_mediator() -> PathMediator:
    """Get the path mediator rooted at the configured storage path."""
    return PathMediator(settings.storage_root)


@lru_cache
def get_directory_lister() -> DirectoryLister:
    """Get the directory lister."""
    return DirectoryLister()


def get_auth_service(
    store: Annotated[UserStore, Depends(get_user_store)],
    codec: Annotated[CredentialCodec, Depends(get_credential_codec)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
    paths: Annotated[PathMediator, Depends(get_path_mediator)],
) -> AuthService:
    """Assemble the auth service from its collaborators."""
    return AuthService(store=store, codec=codec, tokens=tokens, paths=paths)


def get_file_service(
    paths: Annotated[PathMediator, Depends(get_path_mediator)],
    lister: Annotated[DirectoryLister, Depends(get_directory_lister)],
) -> FileService:
    """Assemble the file service from its collaborators."""
    return FileService(paths=paths, lister=lister)


# Type aliases for dependency injection
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
FileServiceDep = Annotated[FileService, Depends(get_file_service)]
