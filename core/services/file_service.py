# =============================================================================
# core/services/file_service.py - Per-User Filesystem Operations
# =============================================================================
# Every operation resolves the client path through PathMediator before any
# filesystem access, so traversal attempts are rejected without touching
# disk. Methods are blocking; routes call them via run_in_threadpool.
# =============================================================================

import logging
import os
import posixpath
import shutil

from app.exceptions import (
    CreateDirectoryError,
    DeletePathError,
    DirectoryNotFoundError,
    NotADirectoryPathError,
    PathNotFoundError,
    UnreadableEntryError,
)
from core.models.fs import Listing
from core.models.user import UserIdentity
from core.services.directory_lister import DirectoryLister
from core.services.path_mediator import PathMediator

logger = logging.getLogger(__name__)


class FileService:
    """
    Filesystem operations scoped to one user's storage directory.
    """

    def __init__(self, paths: PathMediator, lister: DirectoryLister):
        self.paths = paths
        self.lister = lister

    def list_directory(self, user: UserIdentity, path: str) -> Listing:
        """
        List a directory; "" or "." lists the user root.

        Errors name paths relative to the user root, as the client sent
        them, so the server layout never reaches the response.

        Raises:
            InvalidPathError: If the path escapes the user directory
            FsError: If the directory is missing or unreadable
        """
        directory = self.paths.resolve(user.username, path)

        try:
            return self.lister.list(directory)
        except DirectoryNotFoundError:
            raise DirectoryNotFoundError(path)
        except NotADirectoryPathError:
            raise NotADirectoryPathError(path)
        except UnreadableEntryError as e:
            entry = self._client_path(user, e.details["path"])
            raise UnreadableEntryError(entry, e.details["error"])

    def create_directory(self, user: UserIdentity, path: str) -> bool:
        """
        Create a directory and any missing parents.

        An existing directory is not an error.

        Raises:
            InvalidPathError: If the path escapes the user directory
            CreateDirectoryError: If creation fails (e.g. a file is in the way)
        """
        directory = self.paths.resolve(user.username, path)

        try:
            os.makedirs(directory, exist_ok=True)
        except OSError as e:
            logger.error(f"Failed to create directory {directory}: {e}")
            raise CreateDirectoryError(path, e.strerror or str(e))

        logger.info(f"Created directory for {user.username}: {path}")
        return True

    def delete_path(self, user: UserIdentity, path: str) -> bool:
        """
        Delete a file, or a directory with everything below it.

        Raises:
            InvalidPathError: If the path escapes or is the user directory
            PathNotFoundError: If nothing exists at the path
            DeletePathError: If removal fails
        """
        target = self.paths.resolve(user.username, path, allow_root=False)

        if not os.path.lexists(target):
            raise PathNotFoundError(path)

        try:
            if target.is_dir() and not target.is_symlink():
                shutil.rmtree(target)
            else:
                target.unlink()
        except FileNotFoundError:
            raise PathNotFoundError(path)
        except OSError as e:
            logger.error(f"Failed to delete {target}: {e}")
            raise DeletePathError(path, e.strerror or str(e))

        logger.info(f"Deleted path for {user.username}: {path}")
        return True

    def _client_path(self, user: UserIdentity, absolute: str) -> str:
        """Express a server path relative to the user root, POSIX-style."""
        relative = os.path.relpath(absolute, self.paths.user_root(user.username))
        return posixpath.join(*relative.split(os.sep))
