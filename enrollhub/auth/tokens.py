"""Signed, time-limited tokens.

Activation tokens carry a complete not-yet-persisted user record; session
tokens carry the ``user_id`` of an authenticated user. Both are HS256 JWTs
produced with PyJWT, each purpose with its own secret and lifetime.

Password-reset tokens are not JWTs: they are random single-use nonces whose
SHA-256 digest is stored on the user row.
"""

import hashlib
import secrets
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

_RESERVED_CLAIMS = frozenset({"exp", "iat"})


class TokenError(Exception):
    """Base class for token verification failures."""


class TokenExpired(TokenError):
    """The token was well formed and correctly signed but is past its expiry."""


class TokenMalformed(TokenError):
    """The token could not be decoded or lacks required claims."""


class TokenBadSignature(TokenError):
    """The token was signed with a different secret or tampered with."""


@dataclass(frozen=True)
class TokenConfig:
    """Secrets and lifetimes for both token purposes."""

    activation_secret: str
    activation_ttl: timedelta
    session_secret: str
    session_ttl: timedelta
    algorithm: str = "HS256"


def issue(
    payload: dict[str, Any],
    secret: str,
    ttl: timedelta,
    *,
    algorithm: str = "HS256",
    now: datetime | None = None,
) -> str:
    """Sign ``payload`` with an ``exp`` claim ``ttl`` after ``now``."""
    clash = _RESERVED_CLAIMS.intersection(payload)
    if clash:
        raise ValueError(f"Payload uses reserved claims: {', '.join(sorted(clash))}")

    issued_at = now or datetime.now(UTC)
    claims = {**payload, "iat": issued_at, "exp": issued_at + ttl}
    return jwt.encode(claims, secret, algorithm=algorithm)


def verify(token: str, secret: str, *, algorithm: str = "HS256") -> dict[str, Any]:
    """Return the payload that was passed to :func:`issue`.

    Raises:
        TokenExpired: the ``exp`` claim is in the past
        TokenBadSignature: the signature does not match ``secret``
        TokenMalformed: anything else that prevents trusting the token
    """
    try:
        claims = jwt.decode(
            token,
            secret,
            algorithms=[algorithm],
            options={"require": ["exp"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise TokenExpired("Token has expired") from e
    except jwt.InvalidSignatureError as e:
        raise TokenBadSignature("Token signature mismatch") from e
    except jwt.InvalidTokenError as e:
        raise TokenMalformed("Token is malformed") from e

    return {key: value for key, value in claims.items() if key not in _RESERVED_CLAIMS}


class TokenIssuer:
    """Issues and verifies activation and session tokens for one configuration."""

    def __init__(self, config: TokenConfig):
        self._config = config

    @property
    def session_ttl(self) -> timedelta:
        return self._config.session_ttl

    def issue_activation(
        self, candidate: dict[str, Any], *, now: datetime | None = None
    ) -> str:
        return issue(
            candidate,
            self._config.activation_secret,
            self._config.activation_ttl,
            algorithm=self._config.algorithm,
            now=now,
        )

    def verify_activation(self, token: str) -> dict[str, Any]:
        return verify(
            token, self._config.activation_secret, algorithm=self._config.algorithm
        )

    def issue_session(self, user_id: int, *, now: datetime | None = None) -> str:
        return issue(
            {"user_id": user_id},
            self._config.session_secret,
            self._config.session_ttl,
            algorithm=self._config.algorithm,
            now=now,
        )

    def verify_session(self, token: str) -> int:
        """Return the ``user_id`` asserted by a session token."""
        claims = verify(
            token, self._config.session_secret, algorithm=self._config.algorithm
        )
        user_id = claims.get("user_id")
        if not isinstance(user_id, int):
            raise TokenMalformed("Session token has no user_id")
        return user_id


def hash_reset_token(token: str) -> str:
    """Digest stored in ``users.reset_password_token`` for a plain reset token."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def new_reset_token() -> tuple[str, str]:
    """Return ``(plain, digest)``; only the digest is persisted."""
    plain = secrets.token_urlsafe(32)
    return plain, hash_reset_token(plain)
