# =============================================================================
# tests/test_user_store.py - SQLite User Store Tests
# =============================================================================
# Tests use a temporary SQLite file per test.
# =============================================================================

import pytest

from core.models.user import UserIdentity
from lib.user_store import DuplicateUserError, StoreError, UserRecordNotFoundError, UserStore


@pytest.fixture
def alice(codec):
    return codec.new_identity("Alice123", "longpassword")


class TestCreate:
    """Tests for creating users."""

    def test_create_and_find(self, store, alice):
        """A created user can be found by id and username."""
        store.create(alice)

        assert store.find_by_id(alice.id) == alice
        assert store.find_by_username("alice123") == alice

    def test_find_by_username_case_insensitive(self, store, alice):
        """Lookups normalize the username."""
        store.create(alice)
        assert store.find_by_username("ALICE123").id == alice.id

    def test_duplicate_username(self, store, alice, codec):
        """The same username (any case) cannot register twice."""
        store.create(alice)

        with pytest.raises(DuplicateUserError):
            store.create(codec.new_identity("alice123", "otherpassword"))

    def test_duplicate_is_store_error(self):
        """DuplicateUserError is a typed StoreError."""
        assert issubclass(DuplicateUserError, StoreError)

    def test_store_survives_duplicate(self, store, alice, codec):
        """The connection stays usable after a failed insert."""
        store.create(alice)
        with pytest.raises(DuplicateUserError):
            store.create(alice)

        bob = codec.new_identity("bob12345", "longpassword")
        store.create(bob)
        assert store.find_by_id(bob.id) == bob


class TestFind:
    """Tests for lookups."""

    def test_missing_id(self, store):
        """Unknown ids raise UserRecordNotFoundError."""
        with pytest.raises(UserRecordNotFoundError):
            store.find_by_id("does-not-exist")

    def test_missing_username(self, store):
        """Unknown usernames raise UserRecordNotFoundError."""
        with pytest.raises(UserRecordNotFoundError):
            store.find_by_username("nobody")


class TestLifecycle:
    """Tests for table creation and persistence."""

    def test_create_tables_idempotent(self, store):
        """Creating tables twice is harmless."""
        store.create_tables()
        store.create_tables()

    def test_persists_across_instances(self, tmp_path, alice):
        """Users survive reopening the database file."""
        first = UserStore(tmp_path / "persist.db")
        first.create_tables()
        first.create(alice)
        first.close()

        second = UserStore(tmp_path / "persist.db")
        try:
            found = second.find_by_id(alice.id)
        finally:
            second.close()

        assert isinstance(found, UserIdentity)
        assert found.credential_hash == alice.credential_hash

    def test_query_without_table(self, tmp_path):
        """Querying before create_tables raises StoreError."""
        bare = UserStore(tmp_path / "bare.db")
        try:
            with pytest.raises(StoreError):
                bare.find_by_id("anything")
        finally:
            bare.close()
