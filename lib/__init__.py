# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - user_store.py: SQLite-backed user persistence
# - utils.py: Display helpers (size and elapsed-time formatting)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.user_store import (
    DuplicateUserError,
    StoreError,
    UserRecordNotFoundError,
    UserStore,
)
from lib.utils import format_elapsed, format_size

__all__ = [
    # User store
    "UserStore",
    "StoreError",
    "DuplicateUserError",
    "UserRecordNotFoundError",
    # Utils
    "format_elapsed",
    "format_size",
]
