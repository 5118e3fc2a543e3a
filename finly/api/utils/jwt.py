"""
Token Codec

Signs and verifies bearer tokens in two independent signing domains:
session tokens (RS256, key pair) and password reset tokens (HS256, shared
secret). A token signed in one domain never verifies in the other.
"""

import logging
import os
from datetime import UTC, datetime

from jose import JWTError, jwt
from pydantic import BaseModel

from finly.app.errors import ConfigurationError, Unauthorized
from finly.app.services.clock import Clock

logger = logging.getLogger(__name__)

SESSION_TOKEN_ALGORITHM = "RS256"
RESET_TOKEN_ALGORITHM = "HS256"


class TokenClaims(BaseModel):
    """Verified token payload"""

    subject: str
    issued_at: datetime
    expires_at: datetime


class TokenError(Unauthorized):
    default_code = "INVALID_TOKEN"


class InvalidSignature(TokenError):
    default_code = "INVALID_SIGNATURE"


class TokenExpired(TokenError):
    default_code = "TOKEN_EXPIRED"


class MalformedToken(TokenError):
    default_code = "MALFORMED_TOKEN"


class TokenCodec:
    """
    Signs and verifies compact JWTs with claims {sub, iat, exp}.

    Expiry is checked against the injected clock rather than the wall clock.
    """

    def __init__(
        self,
        private_key: str,
        public_key: str,
        reset_secret: str,
        clock: Clock,
    ):
        if not private_key or not public_key:
            raise ConfigurationError("session token key pair is not configured")
        if not reset_secret:
            raise ConfigurationError("reset token secret is not configured")
        self._private_key = private_key
        self._public_key = public_key
        self._reset_secret = reset_secret
        self.clock = clock

    def sign_session_token(self, subject: str, expires_at: datetime) -> str:
        return self._sign(subject, expires_at, self._private_key, SESSION_TOKEN_ALGORITHM)

    def verify_session_token(self, token: str) -> TokenClaims:
        return self._verify(token, self._public_key, SESSION_TOKEN_ALGORITHM)

    def sign_reset_token(self, subject: str, expires_at: datetime) -> str:
        return self._sign(subject, expires_at, self._reset_secret, RESET_TOKEN_ALGORITHM)

    def verify_reset_token(self, token: str) -> TokenClaims:
        return self._verify(token, self._reset_secret, RESET_TOKEN_ALGORITHM)

    def _sign(self, subject: str, expires_at: datetime, key: str, algorithm: str) -> str:
        """
        exp and iat are whole seconds; sub-second parts of ``expires_at`` are
        dropped, so callers store expiries built with ``expiry_after``.
        """
        now = self.clock.now()
        payload = {
            "sub": subject,
            "iat": int(now.timestamp()),
            "exp": int(expires_at.timestamp()),
        }
        return jwt.encode(payload, key, algorithm=algorithm, headers={"typ": "JWT"})

    def _verify(self, token: str, key: str, algorithm: str) -> TokenClaims:
        try:
            jwt.get_unverified_header(token)
        except JWTError as e:
            raise MalformedToken("malformed token") from e

        try:
            payload = jwt.decode(
                token, key, algorithms=[algorithm], options={"verify_exp": False}
            )
        except JWTError as e:
            raise InvalidSignature("invalid token signature") from e

        subject = payload.get("sub")
        exp = payload.get("exp")
        iat = payload.get("iat")
        if not isinstance(subject, str) or not isinstance(exp, int) or not isinstance(iat, int):
            raise MalformedToken("malformed token claims")

        expires_at = datetime.fromtimestamp(exp, UTC)
        if expires_at <= self.clock.now():
            raise TokenExpired("token expired")

        return TokenClaims(
            subject=subject,
            issued_at=datetime.fromtimestamp(iat, UTC),
            expires_at=expires_at,
        )


def _read_key(inline: str, path: str, name: str) -> str:
    if inline:
        return inline
    if not path:
        raise ConfigurationError(f"{name} is not configured")
    try:
        with open(path, "r") as key_file:
            return key_file.read()
    except OSError as e:
        raise ConfigurationError(f"cannot read {name} at {os.path.abspath(path)}") from e


def load_token_codec(config, clock: Clock) -> TokenCodec:
    """
    Build the token codec from configuration, once per process.

    Raises:
        ConfigurationError: key material or reset secret missing/unreadable
    """
    private_key = _read_key(config.JWT_PRIVATE_KEY, config.JWT_PRIVATE_KEY_PATH, "JWT private key")
    public_key = _read_key(config.JWT_PUBLIC_KEY, config.JWT_PUBLIC_KEY_PATH, "JWT public key")
    logger.info("Loaded session token key pair")
    return TokenCodec(private_key, public_key, config.RESET_TOKEN_SECRET, clock)
