# =============================================================================
# core/services/path_mediator.py - Safe Path Resolution
# =============================================================================
# Translates a client-supplied relative path into an absolute location inside
# one user's storage directory:
#
#   storage_root / username / requested_path
#
# Validation is purely lexical (no filesystem access). Rooted paths, NUL
# bytes and anything that normalizes to a '..' segment are rejected with
# InvalidPathError rather than clamped.
# =============================================================================

import logging
import os
import posixpath
from pathlib import Path

from app.exceptions import InvalidPathError

logger = logging.getLogger(__name__)


class PathMediator:
    """
    Resolves request paths against a fixed storage root.

    Constructed once with the configured storage root and shared across
    requests; it holds no mutable state.
    """

    def __init__(self, storage_root: str | Path):
        self._storage_root = Path(os.path.abspath(storage_root))

    @property
    def storage_root(self) -> Path:
        """Absolute storage root."""
        return self._storage_root

    def user_root(self, username: str) -> Path:
        """
        Directory holding all files of one user.

        The registration flow creates it; listing and other operations
        assume it exists.
        """
        return self._storage_root / username

    def resolve(self, user_subdir: str, requested_path: str, allow_root: bool = True) -> Path:
        """
        Resolve a client path inside the user's directory.

        Args:
            user_subdir: The user's directory name under the storage root
            requested_path: Path relative to the user's directory
            allow_root: Whether "" / "." (the user directory itself) is accepted

        Returns:
            Absolute, normalized path under storage_root/user_subdir

        Raises:
            InvalidPathError: If the path is rooted, contains a NUL byte,
                escapes the user directory, or is the user directory while
                allow_root is False
        """
        relative = self.normalize(requested_path)

        if relative == "." and not allow_root:
            raise InvalidPathError(requested_path, "the storage root cannot be used here")

        base = self.user_root(user_subdir)
        if relative == ".":
            return base
        return base.joinpath(*relative.split("/"))

    def normalize(self, requested_path: str) -> str:
        """
        Lexically normalize a relative path.

        Backslashes are treated as separators so Windows-style input gets
        the same checks.

        Returns:
            Normalized POSIX-style path, "." for the root

        Raises:
            InvalidPathError: If the path is rooted, contains a NUL byte or
                normalizes to something above the root
        """
        if "\x00" in requested_path:
            logger.warning("Rejected path containing a NUL byte")
            raise InvalidPathError(requested_path, "path contains a NUL byte")

        candidate = requested_path.replace("\\", "/")

        # "/etc/passwd" and "C:/Windows" are absolute, not relative
        if candidate.startswith("/") or _has_drive(candidate):
            logger.warning(f"Rejected rooted path: {requested_path!r}")
            raise InvalidPathError(requested_path, "path must be relative")

        normalized = posixpath.normpath(candidate) if candidate else "."
        if normalized == ".." or normalized.startswith("../"):
            logger.warning(f"Rejected path traversal attempt: {requested_path!r}")
            raise InvalidPathError(requested_path, "path leaves the storage root")

        return normalized


def _has_drive(path: str) -> bool:
    return len(path) >= 2 and path[1] == ":" and path[0].isalpha()
