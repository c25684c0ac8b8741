# =============================================================================
# core/services/credential_codec.py - User Id and Credential Hashing
# =============================================================================
# Derives a stable user id from a username and a salted one-way hash from a
# (username, password) pair. Pure functions, no I/O, safe to share across
# concurrent requests.
#
# Usage:
#   codec = CredentialCodec()
#   user = codec.new_identity("Alice123", "longpassword")
#   codec.verify_credential("alice123", "longpassword", user.credential_hash)
# =============================================================================

import hashlib
import hmac
import uuid

from core.models.user import UserIdentity

# Namespace for name-based (v5) user ids
USER_ID_NAMESPACE = uuid.NAMESPACE_X500

# Separator between username and password in the salted input
SALT_SEPARATOR = "$"


def normalize_username(username: str) -> str:
    """Lowercase a username; all identity operations work on this form."""
    return username.lower()


class CredentialCodec:
    """
    Deterministic identity and credential hashing.

    The user id is a UUID v5 whose name input is the SHA-1 digest of the
    lowercased username, so it never depends on the password. The
    credential hash is SHA-512 over "username$password"; identical pairs
    always hash identically, which is what login verification relies on.
    """

    def derive_identity(self, username: str) -> str:
        """
        Derive the stable id for a username.

        Args:
            username: Raw username (any case)

        Returns:
            UUID string, identical for usernames differing only by case
        """
        name_digest = hashlib.sha1(normalize_username(username).encode("utf-8")).digest()
        # Same construction as uuid.uuid5, which only accepts str names
        # before Python 3.12
        digest = hashlib.sha1(USER_ID_NAMESPACE.bytes + name_digest).digest()
        return str(uuid.UUID(bytes=digest[:16], version=5))

    def hash_credential(self, username: str, password: str) -> str:
        """
        Hash a password salted with the normalized username.

        Args:
            username: Raw username (any case)
            password: Raw password

        Returns:
            Hex-encoded SHA-512 digest
        """
        salted = f"{normalize_username(username)}{SALT_SEPARATOR}{password}"
        return hashlib.sha512(salted.encode("utf-8")).hexdigest()

    def verify_credential(self, username: str, password: str, stored_hash: str) -> bool:
        """
        Check a password against a stored credential hash.

        Comparison is constant-time.
        """
        candidate = self.hash_credential(username, password)
        return hmac.compare_digest(candidate.encode("utf-8"), stored_hash.encode("utf-8"))

    def new_identity(self, username: str, password: str) -> UserIdentity:
        """Build the full UserIdentity for a registration."""
        return UserIdentity(
            id=self.derive_identity(username),
            username=normalize_username(username),
            credential_hash=self.hash_credential(username, password),
        )
