"""Password policy and one-way hashing."""

import re
from functools import lru_cache

from passlib.context import CryptContext

PASSWORD_PATTERN = re.compile(r"^(?=.*\d)(?=.*[a-z])(?=.*[A-Z])(?=.*[a-zA-Z]).{8,}$")

PASSWORD_POLICY_MESSAGE = (
    "Password must be at least 8 characters long and contain at least one "
    "uppercase letter, one lowercase letter, and one digit."
)


def meets_password_policy(password: str) -> bool:
    # bcrypt cannot hash NUL bytes.
    if "\x00" in password:
        return False
    return PASSWORD_PATTERN.fullmatch(password) is not None


@lru_cache
def _crypt_context(rounds: int) -> CryptContext:
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


def hash_password(password: str, *, rounds: int = 10) -> str:
    return _crypt_context(rounds).hash(password)


def verify_password(password: str, hashed: str) -> bool:
    """Compare a candidate against a stored hash; malformed hashes never match."""
    try:
        return _crypt_context(10).verify(password, hashed)
    except ValueError:
        return False
