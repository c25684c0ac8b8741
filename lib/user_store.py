# =============================================================================
# lib/user_store.py - SQLite User Store
# =============================================================================
# Persists registered users in a local SQLite database:
#
#   user(id TEXT PRIMARY KEY, username TEXT UNIQUE, password TEXT)
#
# `password` holds the credential hash, never the raw password.
# Store failures are typed: a duplicate id/username raises DuplicateUserError,
# a missing user raises UserRecordNotFoundError, anything else StoreError.
#
# Usage:
#   from lib.user_store import UserStore
#   store = UserStore("filenest.db")
#   store.create_tables()
#   store.create(identity)
#   user = store.find_by_username("alice123")
# =============================================================================

from __future__ import annotations

import logging
import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator

from core.models.user import UserIdentity

# Set up logging for this module
logger = logging.getLogger(__name__)


class StoreError(Exception):
    """
    Error during user store operations.

    Provides actionable error messages: what failed and how to fix it.
    """

    def __init__(
        self,
        message: str,
        code: str = "STORE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


class DuplicateUserError(StoreError):
    """A user with the same id or username already exists."""

    def __init__(self, username: str):
        super().__init__(
            message=f"User already exists: {username}",
            code="DUPLICATE_USER",
            details={"username": username},
        )


class UserRecordNotFoundError(StoreError):
    """No user matches the lookup key."""

    def __init__(self, key: str):
        super().__init__(
            message=f"User not found: {key}",
            code="USER_NOT_FOUND",
            details={"key": key},
        )


class UserStore:
    """
    SQLite-backed user store.

    One connection shared across threads, serialized by a lock, so a
    single instance can serve concurrent request handlers.
    """

    def __init__(self, database_path: str | Path):
        self._path = Path(database_path)
        self._lock = threading.Lock()
        self._conn: sqlite3.Connection | None = None

    @property
    def path(self) -> Path:
        """Database file path."""
        return self._path

    @contextmanager
    def _get_connection(self) -> Iterator[sqlite3.Connection]:
        """Get the thread-safe database connection."""
        with self._lock:
            if self._conn is None:
                try:
                    self._path.parent.mkdir(parents=True, exist_ok=True)
                    self._conn = sqlite3.connect(str(self._path), check_same_thread=False)
                except (OSError, sqlite3.Error) as e:
                    raise StoreError(
                        message=f"Failed to open database: {e}",
                        code="DATABASE_OPEN_FAILED",
                        suggestion="Check DATABASE_PATH and its directory permissions",
                    ) from e
                self._conn.row_factory = sqlite3.Row
                logger.info(f"Opened user database: {self._path}")
            yield self._conn

    def create_tables(self) -> None:
        """Create the user table if it does not exist yet."""
        with self._get_connection() as conn:
            try:
                conn.execute('''
                    CREATE TABLE IF NOT EXISTS user (
                        id TEXT PRIMARY KEY NOT NULL,
                        username TEXT UNIQUE NOT NULL,
                        password TEXT NOT NULL
                    )
                ''')
                conn.commit()
            except sqlite3.Error as e:
                raise StoreError(f"Failed to create tables: {e}", code="SCHEMA_ERROR") from e

    def close(self) -> None:
        """Close the underlying connection."""
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None

    # -------------------------------------------------------------------------
    # Users
    # -------------------------------------------------------------------------

    def create(self, identity: UserIdentity) -> None:
        """
        Insert a new user.

        Raises:
            DuplicateUserError: If the id or username is already taken
            StoreError: On any other database failure
        """
        with self._get_connection() as conn:
            try:
                conn.execute(
                    'INSERT INTO user (id, username, password) VALUES (?, ?, ?)',
                    (identity.id, identity.username, identity.credential_hash),
                )
                conn.commit()
            except sqlite3.IntegrityError as e:
                conn.rollback()
                raise DuplicateUserError(identity.username) from e
            except sqlite3.Error as e:
                conn.rollback()
                raise StoreError(f"Failed to create user: {e}", code="INSERT_FAILED") from e

        logger.info(f"Stored user: {identity.id}")

    def find_by_id(self, user_id: str) -> UserIdentity:
        """
        Fetch a user by id.

        Raises:
            UserRecordNotFoundError: If no user has this id
        """
        return self._fetch_one("id", user_id)

    def find_by_username(self, username: str) -> UserIdentity:
        """
        Fetch a user by (normalized) username.

        Raises:
            UserRecordNotFoundError: If no user has this username
        """
        return self._fetch_one("username", username.lower())

    def _fetch_one(self, column: str, value: str) -> UserIdentity:
        # column is one of two literals from this module, never user input
        with self._get_connection() as conn:
            try:
                row = conn.execute(
                    f'SELECT id, username, password FROM user WHERE {column} = ?',
                    (value,),
                ).fetchone()
            except sqlite3.Error as e:
                raise StoreError(f"Failed to query users: {e}", code="QUERY_FAILED") from e

        if row is None:
            raise UserRecordNotFoundError(value)

        return UserIdentity(
            id=row["id"],
            username=row["username"],
            credential_hash=row["password"],
        )
