# =============================================================================
# core/models/fs.py - Filesystem Schemas
# =============================================================================
# These models define the API contract for filesystem operations:
# - PathRequest: A path relative to the user's storage root
# - EntryKind: File or directory
# - DirectoryEntry: One child of a listed directory
# - Listing: Result of listing a directory, split into files and dirs
# - CreateDirResponse / DeleteResponse: Mutation acknowledgements
#
# Listings are computed fresh per request and never cached.
# =============================================================================

from enum import Enum

from pydantic import BaseModel, Field


class EntryKind(str, Enum):
    """Kind of a directory entry."""
    FILE = "file"
    DIRECTORY = "directory"


class PathRequest(BaseModel):
    """
    Schema for operations addressing a path in the user's storage.

    Example:
        {"path": "photos/2024"}
    """

    # Empty string means the user root
    path: str = Field(
        default="",
        max_length=4096,
        description="Path relative to the user's storage root"
    )


class DirectoryEntry(BaseModel):
    """
    One entry of a directory listing.

    Example:
        {
            "name": "report.pdf",
            "kind": "file",
            "size": "12.40 KiB",
            "size_bytes": 12697,
            "modified": "3 day(s)"
        }
    """

    # Name relative to the listed directory
    name: str = Field(..., description="Entry name relative to the listed directory")

    kind: EntryKind = Field(..., description="File or directory")

    # For directories this is the recursive sum of all nested file sizes
    size: str = Field(..., description="Human-readable size")

    size_bytes: int = Field(..., ge=0, description="Size in bytes")

    # Only files carry a modified label
    modified: str | None = Field(
        default=None,
        description="Coarse time since last modification, e.g. '3 day(s)'"
    )


class Listing(BaseModel):
    """
    Result of listing a directory.

    Example:
        {
            "files": [{"name": "a.txt", "kind": "file", ...}],
            "dirs": [{"name": "photos", "kind": "directory", ...}]
        }
    """

    files: list[DirectoryEntry] = Field(default_factory=list)
    dirs: list[DirectoryEntry] = Field(default_factory=list)

    def get(self, name: str) -> DirectoryEntry | None:
        """Find an entry (file or directory) by name."""
        for entry in [*self.files, *self.dirs]:
            if entry.name == name:
                return entry
        return None


class CreateDirResponse(BaseModel):
    """Acknowledgement for directory creation."""
    created: bool


class DeleteResponse(BaseModel):
    """Acknowledgement for deletion."""
    deleted: bool
