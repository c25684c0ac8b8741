# =============================================================================
# app/exceptions.py - Custom Exceptions and Handlers
# =============================================================================
# Centralized error taxonomy for the FileNest API:
# - InputValidationError: malformed usernames / passwords
# - AuthError: bad credentials, bad or expired tokens, duplicate users
# - PathError: traversal attempts and paths escaping the user root
# - FsError: missing directories, unreadable entries, failed mutations
#
# Every error carries a machine-readable code, an HTTP status and an
# actionable suggestion. Errors are never retried and never include raw
# credentials in their messages.
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse


class FileNestException(Exception):
    """
    Base exception for the FileNest API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "FILENEST_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Category Bases
# =============================================================================

class InputValidationError(FileNestException):
    """Raised when client input fails validation rules."""


class AuthError(FileNestException):
    """Raised when authentication or authorization fails."""


class PathError(FileNestException):
    """Raised when a requested path is rejected for security reasons."""


class FsError(FileNestException):
    """Raised when a filesystem operation fails."""


# =============================================================================
# Validation Exceptions
# =============================================================================

class UsernameTooShortError(InputValidationError):
    """Raised when a username is shorter than the minimum length."""

    def __init__(self, min_length: int):
        super().__init__(
            message=f"Username must contain at least {min_length} characters",
            code="USERNAME_TOO_SHORT",
            status_code=400,
            suggestion=f"Choose a username with {min_length} or more characters",
            details={"min_length": min_length}
        )


class UsernameTooLongError(InputValidationError):
    """Raised when a username is longer than the maximum length."""

    def __init__(self, max_length: int):
        super().__init__(
            message=f"Username must contain at most {max_length} characters",
            code="USERNAME_TOO_LONG",
            status_code=400,
            suggestion=f"Choose a username with {max_length} or fewer characters",
            details={"max_length": max_length}
        )


class InvalidUsernameError(InputValidationError):
    """Raised when a username contains characters unusable as a directory name."""

    def __init__(self):
        super().__init__(
            message="Username contains invalid characters",
            code="INVALID_USERNAME",
            status_code=400,
            suggestion="Use only letters, digits, '_', '-' and '.'",
        )


class PasswordTooShortError(InputValidationError):
    """Raised when a password is shorter than the minimum length."""

    def __init__(self, min_length: int):
        super().__init__(
            message=f"Password must contain at least {min_length} characters",
            code="PASSWORD_TOO_SHORT",
            status_code=400,
            suggestion=f"Choose a password with {min_length} or more characters",
            details={"min_length": min_length}
        )


# =============================================================================
# Auth Exceptions
# =============================================================================

class InvalidCredentialsError(AuthError):
    """Raised when a username/password pair does not match a stored user."""

    def __init__(self):
        super().__init__(
            message="Invalid username or password",
            code="INVALID_CREDENTIALS",
            status_code=401,
            suggestion="Check your username and password and try again",
        )


class UserAlreadyExistsError(AuthError):
    """Raised when registering a username that is already taken."""

    def __init__(self, username: str):
        super().__init__(
            message=f"User already exists: {username}",
            code="USER_ALREADY_EXISTS",
            status_code=409,
            suggestion="Choose a different username or log in instead",
            details={"username": username}
        )


class UserNotFoundError(AuthError):
    """Raised when a token subject does not resolve to a user."""

    def __init__(self, user_id: str):
        super().__init__(
            message="User not found",
            code="USER_NOT_FOUND",
            status_code=401,
            suggestion="Log in again to obtain a new token",
            details={"user_id": user_id}
        )


class TokenExpiredError(AuthError):
    """Raised when a token is past its expiry time."""

    def __init__(self):
        super().__init__(
            message="Token has expired",
            code="TOKEN_EXPIRED",
            status_code=401,
            suggestion="Log in again to obtain a new token",
        )


class InvalidSignatureError(AuthError):
    """Raised when a token signature does not match the configured secret."""

    def __init__(self):
        super().__init__(
            message="Invalid token signature",
            code="INVALID_SIGNATURE",
            status_code=401,
            suggestion="Log in again to obtain a new token",
        )


class MalformedTokenError(AuthError):
    """Raised when a token cannot be decoded."""

    def __init__(self, error: str):
        super().__init__(
            message=f"Malformed token: {error}",
            code="MALFORMED_TOKEN",
            status_code=401,
            suggestion="Send the access_token returned by /auth/login as a Bearer token",
        )


# =============================================================================
# Path Exceptions
# =============================================================================

class InvalidPathError(PathError):
    """Raised when a requested path would leave the user's storage root."""

    def __init__(self, path: str, reason: str):
        super().__init__(
            message=f"Invalid path: {reason}",
            code="INVALID_PATH",
            status_code=400,
            suggestion="Use a relative path without '..' segments or a leading '/'",
            details={"path": path}
        )


# =============================================================================
# Filesystem Exceptions
# =============================================================================

class DirectoryNotFoundError(FsError):
    """Raised when a directory to list does not exist."""

    def __init__(self, path: str):
        super().__init__(
            message=f"Directory not found: {path}",
            code="DIRECTORY_NOT_FOUND",
            status_code=404,
            suggestion="Check the path or create the directory first",
            details={"path": path}
        )


class NotADirectoryPathError(FsError):
    """Raised when a path expected to be a directory is something else."""

    def __init__(self, path: str):
        super().__init__(
            message=f"Not a directory: {path}",
            code="NOT_A_DIRECTORY",
            status_code=400,
            suggestion="List the parent directory instead",
            details={"path": path}
        )


class UnreadableEntryError(FsError):
    """Raised when metadata for an entry cannot be read during a listing."""

    def __init__(self, path: str, error: str):
        super().__init__(
            message=f"Failed to read entry: {error}",
            code="UNREADABLE_ENTRY",
            status_code=500,
            suggestion="Check file permissions on the server",
            details={"path": path, "error": error}
        )


class PathNotFoundError(FsError):
    """Raised when a file or directory to operate on does not exist."""

    def __init__(self, path: str):
        super().__init__(
            message=f"Path not found: {path}",
            code="PATH_NOT_FOUND",
            status_code=404,
            suggestion="Check the path and try again",
            details={"path": path}
        )


class CreateDirectoryError(FsError):
    """Raised when a directory cannot be created."""

    def __init__(self, path: str, error: str):
        super().__init__(
            message=f"Failed to create directory: {error}",
            code="CREATE_DIRECTORY_ERROR",
            status_code=500,
            suggestion="Check that no file exists at that path",
            details={"path": path, "error": error}
        )


class DeletePathError(FsError):
    """Raised when a file or directory cannot be removed."""

    def __init__(self, path: str, error: str):
        super().__init__(
            message=f"Failed to delete path: {error}",
            code="DELETE_PATH_ERROR",
            status_code=500,
            suggestion="Try again later or contact support if the issue persists",
            details={"path": path, "error": error}
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def filenest_exception_handler(
    request: Request,
    exc: FileNestException
) -> JSONResponse:
    """
    Convert FileNestException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
        headers=headers,
    )


async def validation_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle request validation errors.

    Converts validation errors to user-friendly messages.
    """
    return JSONResponse(
        status_code=422,
        content={
            "detail": "Validation error",
            "code": "VALIDATION_ERROR",
            "errors": str(exc)
        }
    )
