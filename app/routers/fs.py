# =============================================================================
# app/routers/fs.py - Filesystem Endpoints
# =============================================================================
# Browse and modify the authenticated user's storage directory.
# All paths are relative to the user's root; traversal attempts are rejected
# before any disk access. Blocking work runs in the threadpool.
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from fastapi.concurrency import run_in_threadpool

from app.auth import get_current_user
from app.dependencies import FileServiceDep
from core.models.fs import CreateDirResponse, DeleteResponse, Listing, PathRequest
from core.models.user import UserIdentity

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Endpoints
# =============================================================================

@router.post("/list", response_model=Listing)
async def list_directory(
    request: PathRequest,
    files: FileServiceDep,
    user: UserIdentity = Depends(get_current_user),
) -> Listing:
    """
    List files and directories at a path.

    Directory sizes are the recursive total of the files inside them.
    An empty path lists the user's root.

    Raises:
        400: If the path is invalid or not a directory
        404: If the directory doesn't exist
    """
    return await run_in_threadpool(files.list_directory, user, request.path)


@router.post("/createdir", response_model=CreateDirResponse)
async def create_directory(
    request: PathRequest,
    files: FileServiceDep,
    user: UserIdentity = Depends(get_current_user),
) -> CreateDirResponse:
    """
    Create a directory (and missing parents) at a path.

    Raises:
        400: If the path is invalid
    """
    created = await run_in_threadpool(files.create_directory, user, request.path)
    return CreateDirResponse(created=created)


@router.delete("/delete", response_model=DeleteResponse)
async def delete_path(
    path: Annotated[str, Query(min_length=1, max_length=4096, description="Path to delete")],
    files: FileServiceDep,
    user: UserIdentity = Depends(get_current_user),
) -> DeleteResponse:
    """
    Delete a file or a directory with all its contents.

    The user's root directory cannot be deleted.

    Raises:
        400: If the path is invalid
        404: If nothing exists at the path
    """
    deleted = await run_in_threadpool(files.delete_path, user, path)
    return DeleteResponse(deleted=deleted)
