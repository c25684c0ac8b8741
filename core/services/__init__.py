# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .credential_codec import CredentialCodec
from .token_service import TokenService
from .path_mediator import PathMediator
from .directory_lister import DirectoryLister
from .auth_service import AuthService
from .file_service import FileService

__all__ = [
    "CredentialCodec",
    "TokenService",
    "PathMediator",
    "DirectoryLister",
    "AuthService",
    "FileService",
]
