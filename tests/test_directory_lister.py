# =============================================================================
# tests/test_directory_lister.py - Directory Listing Tests
# =============================================================================
# Tests for listing a resolved directory:
# - Files report their size and a coarse modified label
# - Directories report the recursive size of nested files only
# - Missing/non-directory paths and unreadable entries fail the listing
# =============================================================================

import os
import stat
import sys

import pytest

from app.exceptions import DirectoryNotFoundError, NotADirectoryPathError, UnreadableEntryError
from core.models.fs import EntryKind
from core.services.directory_lister import DirectoryLister

NOW = 1_700_000_000.0


def _write(path, size: int, age_seconds: float = 0) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"x" * size)
    os.utime(path, (NOW - age_seconds, NOW - age_seconds))


@pytest.fixture
def fixed_lister():
    """Lister whose clock is pinned to NOW."""
    return DirectoryLister(clock=lambda: NOW)


@pytest.fixture
def sample_tree(tmp_path):
    """
    root/
      a.txt        10 bytes
      b.txt        20 bytes
      sub/
        c.txt       5 bytes
    """
    root = tmp_path / "root"
    _write(root / "a.txt", 10)
    _write(root / "b.txt", 20)
    _write(root / "sub" / "c.txt", 5)
    return root


# =============================================================================
# Sizes
# =============================================================================

class TestSizes:
    """Size reporting for files and directories."""

    def test_files_and_subdirectory(self, fixed_lister, sample_tree):
        """Files report their own size; the subdirectory only its file."""
        listing = fixed_lister.list(sample_tree)

        assert [f.name for f in listing.files] == ["a.txt", "b.txt"]
        assert [d.name for d in listing.dirs] == ["sub"]

        assert listing.get("a.txt").size_bytes == 10
        assert listing.get("b.txt").size_bytes == 20

        sub = listing.get("sub")
        assert sub.kind == EntryKind.DIRECTORY
        assert sub.size_bytes == 5
        assert sub.size == "5 B"

    def test_nested_directories_sum_recursively(self, fixed_lister, tmp_path):
        """Sizes from every depth are included; directories add nothing."""
        root = tmp_path / "root"
        _write(root / "deep" / "one.bin", 100)
        _write(root / "deep" / "x" / "two.bin", 200)
        _write(root / "deep" / "x" / "y" / "z" / "three.bin", 300)
        (root / "deep" / "empty").mkdir()

        listing = fixed_lister.list(root)

        assert listing.get("deep").size_bytes == 600

    def test_empty_subdirectory(self, fixed_lister, tmp_path):
        """An empty directory has size zero."""
        (tmp_path / "root" / "empty").mkdir(parents=True)

        listing = fixed_lister.list(tmp_path / "root")

        assert listing.get("empty").size_bytes == 0
        assert listing.get("empty").size == "0 B"

    def test_human_readable_size(self, fixed_lister, tmp_path):
        """Larger files use binary units."""
        _write(tmp_path / "root" / "big.bin", 12697)

        listing = fixed_lister.list(tmp_path / "root")

        assert listing.get("big.bin").size == "12.40 KiB"

    def test_directories_have_no_modified_label(self, fixed_lister, sample_tree):
        """Only files carry a modified label."""
        listing = fixed_lister.list(sample_tree)
        assert listing.get("sub").modified is None

    def test_empty_directory_listing(self, fixed_lister, tmp_path):
        """Listing an empty directory returns no entries."""
        listing = fixed_lister.list(tmp_path)
        assert listing.files == []
        assert listing.dirs == []


# =============================================================================
# Modified Labels
# =============================================================================

class TestModified:
    """Time since modification, bucketed into the largest unit."""

    @pytest.mark.parametrize("age, expected", [
        (45, "45 second(s)"),
        (60, "60 second(s)"),
        (61, "61 second(s)"),
        (150, "2 minute(s)"),
        (3601, "60 minute(s)"),
        (2 * 3600, "2 hour(s)"),
        (86401, "24 hour(s)"),
        (2 * 86400, "2 day(s)"),
        (3 * 86400 + 5, "3 day(s)"),
    ])
    def test_buckets(self, fixed_lister, tmp_path, age, expected):
        """Labels use the largest unit with a whole count above one."""
        _write(tmp_path / "root" / "f.txt", 1, age_seconds=age)

        listing = fixed_lister.list(tmp_path / "root")

        assert listing.get("f.txt").modified == expected

    def test_future_modification_time(self, fixed_lister, tmp_path):
        """Clock skew (mtime in the future) reports zero seconds."""
        _write(tmp_path / "root" / "f.txt", 1, age_seconds=-500)

        listing = fixed_lister.list(tmp_path / "root")

        assert listing.get("f.txt").modified == "0 second(s)"


# =============================================================================
# Failures
# =============================================================================

class TestFailures:
    """Errors abort the listing instead of returning partial results."""

    def test_missing_directory(self, fixed_lister, tmp_path):
        """A missing directory raises DirectoryNotFoundError."""
        with pytest.raises(DirectoryNotFoundError):
            fixed_lister.list(tmp_path / "missing")

    def test_file_instead_of_directory(self, fixed_lister, tmp_path):
        """Listing a file raises NotADirectoryPathError."""
        _write(tmp_path / "file.txt", 3)

        with pytest.raises(NotADirectoryPathError):
            fixed_lister.list(tmp_path / "file.txt")

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX permissions")
    @pytest.mark.skipif(hasattr(os, "geteuid") and os.geteuid() == 0, reason="root ignores permissions")
    def test_unreadable_subdirectory(self, fixed_lister, sample_tree):
        """An unreadable nested directory fails the whole listing."""
        locked = sample_tree / "sub" / "locked"
        _write(locked / "secret.txt", 7)
        locked.chmod(0)

        try:
            with pytest.raises(UnreadableEntryError):
                fixed_lister.list(sample_tree)
        finally:
            locked.chmod(stat.S_IRWXU)

    @pytest.mark.skipif(sys.platform == "win32", reason="symlinks need privileges")
    def test_symlinks_not_followed(self, fixed_lister, tmp_path):
        """A symlink to a large directory is not counted as a directory."""
        outside = tmp_path / "outside"
        _write(outside / "huge.bin", 5000)
        root = tmp_path / "root"
        root.mkdir()
        (root / "link").symlink_to(outside, target_is_directory=True)

        listing = fixed_lister.list(root)

        assert [d.name for d in listing.dirs] == []
        assert listing.get("link").kind == EntryKind.FILE
        assert listing.get("link").size_bytes < 5000
