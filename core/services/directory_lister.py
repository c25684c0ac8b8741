# =============================================================================
# core/services/directory_lister.py - Directory Listings
# =============================================================================
# Enumerates the immediate children of a resolved directory:
# - files: byte size + coarse "time since modified" label
# - directories: recursive sum of all nested file sizes
#
# The walk is synchronous and may be slow on large trees; callers run it on
# a worker thread. Any unreadable entry aborts the whole listing - a partial
# or approximate result is never returned.
# =============================================================================

import logging
import os
import time
from pathlib import Path
from typing import Callable

from app.exceptions import DirectoryNotFoundError, NotADirectoryPathError, UnreadableEntryError
from core.models.fs import DirectoryEntry, EntryKind, Listing
from lib.utils import format_elapsed, format_size

logger = logging.getLogger(__name__)


class DirectoryLister:
    """
    Builds listings for directories on the local filesystem.

    Symlinks are reported as files and never followed, so a link cannot
    pull content from outside the user's directory into a size sum.

    Example:
        lister = DirectoryLister()
        listing = lister.list(Path("/storage/alice/photos"))
        for d in listing.dirs:
            print(d.name, d.size)
    """

    def __init__(self, clock: Callable[[], float] = time.time):
        # Returns seconds since the epoch
        self._clock = clock

    def list(self, absolute_dir: str | Path) -> Listing:
        """
        List the immediate children of a directory.

        Args:
            absolute_dir: Resolved absolute directory path

        Returns:
            Listing with files and dirs, each sorted by name

        Raises:
            DirectoryNotFoundError: If the directory does not exist
            NotADirectoryPathError: If the path is not a directory
            UnreadableEntryError: If any entry (at any depth) cannot be read
        """
        directory = Path(absolute_dir)
        files: list[DirectoryEntry] = []
        dirs: list[DirectoryEntry] = []

        try:
            with os.scandir(directory) as it:
                children = list(it)
        except FileNotFoundError:
            raise DirectoryNotFoundError(str(directory))
        except NotADirectoryError:
            raise NotADirectoryPathError(str(directory))
        except OSError as e:
            logger.error(f"Failed to read directory {directory}: {e}")
            raise UnreadableEntryError(str(directory), e.strerror or str(e))

        now = self._clock()
        for child in children:
            try:
                is_dir = child.is_dir(follow_symlinks=False)
                stat = child.stat(follow_symlinks=False)
            except OSError as e:
                logger.error(f"Failed to read entry {child.path}: {e}")
                raise UnreadableEntryError(child.path, e.strerror or str(e))

            if is_dir:
                size = self.dir_size(child.path)
                dirs.append(DirectoryEntry(
                    name=child.name,
                    kind=EntryKind.DIRECTORY,
                    size=format_size(size),
                    size_bytes=size,
                ))
            else:
                files.append(DirectoryEntry(
                    name=child.name,
                    kind=EntryKind.FILE,
                    size=format_size(stat.st_size),
                    size_bytes=stat.st_size,
                    modified=format_elapsed(now - stat.st_mtime),
                ))

        files.sort(key=lambda e: e.name)
        dirs.sort(key=lambda e: e.name)

        logger.debug(f"Listed {directory}: {len(files)} files, {len(dirs)} dirs")
        return Listing(files=files, dirs=dirs)

    def dir_size(self, path: str | Path) -> int:
        """
        Recursive size of a directory: the sum of all nested file sizes.

        Directories themselves contribute nothing.

        Raises:
            UnreadableEntryError: If any directory or entry cannot be read
        """
        total = 0
        pending = [os.fspath(path)]

        while pending:
            current = pending.pop()
            try:
                with os.scandir(current) as it:
                    for entry in it:
                        if entry.is_dir(follow_symlinks=False):
                            pending.append(entry.path)
                        else:
                            total += entry.stat(follow_symlinks=False).st_size
            except OSError as e:
                failed = e.filename or current
                logger.error(f"Failed to compute size under {current}: {e}")
                raise UnreadableEntryError(os.fspath(failed), e.strerror or str(e))

        return total
