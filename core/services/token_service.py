# =============================================================================
# core/services/token_service.py - Session Token Issuing and Verification
# =============================================================================
# Issues HS256-signed JWTs carrying the user id as subject and verifies them
# on every authenticated request.
#
# Verification order:
# 1. Token splits into header.payload.signature     -> else Malformed
# 2. Signature is canonically encoded and the HMAC
#    over header.payload matches the secret          -> else InvalidSignature
# 3. Header and claims decode (python-jose)          -> else Malformed
# 4. Clock is before `exp`                           -> else Expired
#
# Expiry is checked against the injected clock at verification time, so
# tests can advance time without sleeping.
# =============================================================================

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable

from jose import JWTError, jwk, jwt
from jose.exceptions import JWKError
from jose.utils import base64url_decode, base64url_encode
from pydantic import ValidationError

from app.exceptions import InvalidSignatureError, MalformedTokenError, TokenExpiredError
from core.models.user import TokenClaims

logger = logging.getLogger(__name__)

# Symmetric MAC-based signing
ALGORITHM = "HS256"

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Default clock: current wall-clock time in UTC."""
    return datetime.now(timezone.utc)


def _timestamp(moment: datetime) -> int:
    return int(moment.timestamp())


class TokenService:
    """
    Signs and verifies session tokens.

    Holds only immutable configuration (secret, lifetime, clock), so one
    instance is shared by all request handlers.

    Example:
        tokens = TokenService(secret=b"...", expires_hours=24)
        token = tokens.issue(user.id)
        claims = tokens.verify(token)   # claims.sub == user.id
    """

    def __init__(
        self,
        secret: bytes,
        expires_hours: int,
        clock: Clock = utc_now,
    ):
        if not secret:
            raise ValueError("Token secret must not be empty")
        if expires_hours <= 0:
            raise ValueError(f"Token lifetime must be positive, got {expires_hours}")

        self._secret = secret
        self._expires = timedelta(hours=expires_hours)
        self._clock = clock
        self._key = jwk.construct(secret, ALGORITHM)

    @property
    def expires(self) -> timedelta:
        """Token lifetime."""
        return self._expires

    def issue(self, identity_id: str) -> str:
        """
        Issue a signed token for a user id.

        Args:
            identity_id: The user id to put in the `sub` claim

        Returns:
            Encoded JWT string
        """
        now = self._clock()
        claims = {
            "sub": identity_id,
            "iat": _timestamp(now),
            "exp": _timestamp(now + self._expires),
        }
        return jwt.encode(claims, self._secret, algorithm=ALGORITHM)

    def verify(self, token: str) -> TokenClaims:
        """
        Verify a token and return its claims.

        Args:
            token: Encoded JWT string

        Returns:
            TokenClaims with the subject user id

        Raises:
            MalformedTokenError: If the token cannot be decoded
            InvalidSignatureError: If the signature does not match the secret
            TokenExpiredError: If the clock is at or past `exp`
        """
        segments = token.split(".")
        if len(segments) != 3:
            raise MalformedTokenError("expected three dot-separated segments")

        header_segment, payload_segment, signature_segment = segments
        try:
            signature = base64url_decode(signature_segment.encode("ascii"))
        except (UnicodeEncodeError, ValueError) as e:
            raise MalformedTokenError(f"undecodable signature ({e})")

        # The final character carries unused bits that decoding ignores; only
        # the canonical encoding of the decoded bytes is accepted
        if base64url_encode(signature) != signature_segment.encode("ascii"):
            logger.warning("Rejected token with non-canonical signature encoding")
            raise InvalidSignatureError()

        signing_input = f"{header_segment}.{payload_segment}".encode("ascii", errors="replace")
        try:
            signature_matches = self._key.verify(signing_input, signature)
        except JWKError as e:
            raise MalformedTokenError(str(e))

        if not signature_matches:
            logger.warning("Rejected token with invalid signature")
            raise InvalidSignatureError()

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[ALGORITHM],
                options={"verify_exp": False, "verify_aud": False},
            )
            claims = TokenClaims.model_validate(payload)
        except (JWTError, ValidationError) as e:
            logger.warning(f"Rejected undecodable token: {type(e).__name__}")
            raise MalformedTokenError("invalid header or claims")

        if _timestamp(self._clock()) >= claims.exp:
            logger.info(f"Rejected expired token for user {claims.sub}")
            raise TokenExpiredError()

        return claims
