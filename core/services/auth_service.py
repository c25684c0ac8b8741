# =============================================================================
# core/services/auth_service.py - Registration, Login and Authentication
# =============================================================================
# Wires the identity components together:
# - register: validate -> derive identity -> store -> create user dir -> token
# - login: look up user -> verify credential -> token
# - authenticate: verify token -> look up user by id
#
# Raw passwords are never logged or stored.
# =============================================================================

import logging
import re

from app.exceptions import (
    CreateDirectoryError,
    InvalidCredentialsError,
    InvalidUsernameError,
    PasswordTooShortError,
    UserAlreadyExistsError,
    UserNotFoundError,
    UsernameTooLongError,
    UsernameTooShortError,
)
from core.models.user import UserIdentity
from core.services.credential_codec import CredentialCodec
from core.services.path_mediator import PathMediator
from core.services.token_service import TokenService
from lib.user_store import DuplicateUserError, UserRecordNotFoundError, UserStore

logger = logging.getLogger(__name__)

USERNAME_MIN_LENGTH = 4
USERNAME_MAX_LENGTH = 25
PASSWORD_MIN_LENGTH = 8

# The username doubles as a directory name under the storage root
_USERNAME_PATTERN = re.compile(r"[A-Za-z0-9_.-]+")


def validate_registration(username: str, password: str) -> None:
    """
    Check username and password rules for a new account.

    Raises:
        UsernameTooShortError: Fewer than 4 characters
        UsernameTooLongError: More than 25 characters
        InvalidUsernameError: Characters unusable in a directory name
        PasswordTooShortError: Fewer than 8 characters
    """
    if len(username) < USERNAME_MIN_LENGTH:
        raise UsernameTooShortError(USERNAME_MIN_LENGTH)

    if len(username) > USERNAME_MAX_LENGTH:
        raise UsernameTooLongError(USERNAME_MAX_LENGTH)

    if not _USERNAME_PATTERN.fullmatch(username) or set(username) == {"."}:
        raise InvalidUsernameError()

    if len(password) < PASSWORD_MIN_LENGTH:
        raise PasswordTooShortError(PASSWORD_MIN_LENGTH)


class AuthService:
    """
    Account lifecycle operations used by the auth routes.

    Collaborators are injected so tests can use temporary databases,
    storage roots and clocks.
    """

    def __init__(
        self,
        store: UserStore,
        codec: CredentialCodec,
        tokens: TokenService,
        paths: PathMediator,
    ):
        self.store = store
        self.codec = codec
        self.tokens = tokens
        self.paths = paths

    def register(self, username: str, password: str) -> tuple[UserIdentity, str]:
        """
        Create an account and its storage directory.

        Args:
            username: Desired username (stored lowercase)
            password: Raw password

        Returns:
            Tuple of (created identity, access token)

        Raises:
            InputValidationError: If username/password break the rules
            UserAlreadyExistsError: If the (case-insensitive) username is taken
            CreateDirectoryError: If the user directory cannot be created
        """
        validate_registration(username, password)

        identity = self.codec.new_identity(username, password)

        try:
            self.store.create(identity)
        except DuplicateUserError:
            logger.info(f"Registration rejected, user exists: {identity.username}")
            raise UserAlreadyExistsError(identity.username)

        user_dir = self.paths.user_root(identity.username)
        try:
            user_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"Failed to create user directory {user_dir}: {e}")
            raise CreateDirectoryError(str(user_dir), e.strerror or str(e))

        logger.info(f"Registered user: {identity.username} ({identity.id})")
        return identity, self.tokens.issue(identity.id)

    def login(self, username: str, password: str) -> str:
        """
        Check credentials and issue a token.

        Unknown usernames and wrong passwords produce the same error.

        Raises:
            InvalidCredentialsError: If the pair does not match a user
        """
        try:
            user = self.store.find_by_username(username)
        except UserRecordNotFoundError:
            logger.warning("Login failed: unknown user")
            raise InvalidCredentialsError()

        if not self.codec.verify_credential(username, password, user.credential_hash):
            logger.warning(f"Login failed: wrong password for {user.username}")
            raise InvalidCredentialsError()

        logger.info(f"User logged in: {user.username}")
        return self.tokens.issue(user.id)

    def authenticate(self, token: str) -> UserIdentity:
        """
        Resolve a bearer token to its user.

        Raises:
            AuthError: If the token is malformed, forged or expired
            UserNotFoundError: If the token subject no longer exists
        """
        claims = self.tokens.verify(token)

        try:
            return self.store.find_by_id(claims.sub)
        except UserRecordNotFoundError:
            logger.warning(f"Token subject has no user: {claims.sub}")
            raise UserNotFoundError(claims.sub)
